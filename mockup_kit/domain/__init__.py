"""
Domain value objects: property paths and the default value table.
"""

from .property_path import PropertyPath, property_name_from_setter
from .type_tag import PLACEHOLDER_STRING, DefaultValueTable, TypeTag

__all__ = [
    "PLACEHOLDER_STRING",
    "DefaultValueTable",
    "PropertyPath",
    "TypeTag",
    "property_name_from_setter",
]
