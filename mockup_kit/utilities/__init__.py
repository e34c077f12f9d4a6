"""
Utilities package for mockup-kit.

Type introspection helpers shared by the domain and core packages. The
rich console helpers live in ``mockup_kit.utilities.console``.
"""

from .introspection import (
    is_class_var,
    is_frozen_dataclass,
    is_new_type,
    is_optional,
    qualified_name,
    requires_init_arguments,
    resolve_hints,
    unwrap_annotation,
)

__all__ = [
    "is_class_var",
    "is_frozen_dataclass",
    "is_new_type",
    "is_optional",
    "qualified_name",
    "requires_init_arguments",
    "resolve_hints",
    "unwrap_annotation",
]
