"""
Type tags and the default value table.

Maps declared property types to the canonical default value a mock receives
when no override is supplied. Python types are resolved to a ``TypeTag`` by
ordered subclass checks; type names are matched against a fixed fragment
table only when no real type is available.
"""

import inspect
import re
import typing
import uuid
from collections.abc import Callable
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar

from ..utilities.introspection import is_new_type, qualified_name, unwrap_annotation

PLACEHOLDER_STRING = "string"

_OPTIONAL_NAME = re.compile(r"(?:typing\.)?Optional\[(.+)\]")
_DOTTED_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*")
_NONE_NAMES = frozenset({"None", "NoneType"})


class TypeTag(Enum):
    """Category of a property type, deciding how its default is produced."""

    STRING = "string"
    INTEGER = "integer"
    LONG = "long"
    DOUBLE = "double"
    FLOAT = "float"
    BOOLEAN = "boolean"
    CHARACTER = "character"
    BYTE = "byte"
    BYTES = "bytes"
    DECIMAL = "decimal"
    TINYINT = "tinyint"
    DATE = "date"
    DATETIME = "datetime"
    UUID = "uuid"
    ENUM = "enum"
    COMPOSITE = "composite"
    UNTYPED = "untyped"

    def has_default(self) -> bool:
        """Check if the tag is covered by the default value table."""
        return self not in (TypeTag.COMPOSITE, TypeTag.UNTYPED)

    def is_composite(self) -> bool:
        """Check if values of this tag are built recursively."""
        return self is TypeTag.COMPOSITE

    def default_value(self, annotation: Any = None, placeholder: str = PLACEHOLDER_STRING) -> Any:
        """
        Produce the canonical default for this tag.

        Time-dependent defaults are computed on every call.

        Args:
            annotation: Declared type, required for ``ENUM``
            placeholder: Value used for ``STRING`` properties

        Raises:
            ValueError: If the tag has no default or the enum has no members
        """
        if self is TypeTag.STRING:
            return placeholder
        if self is TypeTag.ENUM:
            enum_type = unwrap_annotation(annotation)
            members = list(enum_type) if isinstance(enum_type, type) else []
            if not members:
                raise ValueError(f"Enum {qualified_name(enum_type)} has no members to default to")
            return members[0]

        factory = _DEFAULT_FACTORIES.get(self)
        if factory is None:
            raise ValueError(f"Type tag {self.name} has no default value")
        return factory()

    @classmethod
    def for_annotation(cls, annotation: Any) -> "TypeTag":
        """
        Resolve a declared annotation to its type tag.

        ``Optional[X]`` and ``Annotated[X, ...]`` resolve as ``X``. A ``NewType``
        resolves through its supertype and may be refined by its name, so
        ``NewType("TinyInt", int)`` becomes ``TINYINT``. String annotations
        that could not be evaluated fall back to the fragment table.
        """
        if annotation is None or annotation is inspect.Parameter.empty:
            return cls.UNTYPED

        annotation = unwrap_annotation(annotation, new_types=False)

        if isinstance(annotation, typing.ForwardRef):
            annotation = annotation.__forward_arg__
        if isinstance(annotation, str):
            return DefaultValueTable.match(annotation) or cls.COMPOSITE

        if is_new_type(annotation):
            base = cls.for_annotation(annotation.__supertype__)
            refined = DefaultValueTable.match(annotation.__name__)
            if refined is not None and refined in _REFINEMENTS.get(base, ()):
                return refined
            return base

        if isinstance(annotation, type) and typing.get_origin(annotation) is None:
            for python_type, tag in _PYTHON_TYPES:
                if issubclass(annotation, python_type):
                    return tag

        return cls.COMPOSITE


# Order matters: Enum before its mixin bases, bool before int, datetime before date.
_PYTHON_TYPES: tuple[tuple[type, TypeTag], ...] = (
    (Enum, TypeTag.ENUM),
    (bool, TypeTag.BOOLEAN),
    (int, TypeTag.INTEGER),
    (float, TypeTag.FLOAT),
    (str, TypeTag.STRING),
    (bytes, TypeTag.BYTES),
    (Decimal, TypeTag.DECIMAL),
    (datetime, TypeTag.DATETIME),
    (date, TypeTag.DATE),
    (uuid.UUID, TypeTag.UUID),
)

_REFINEMENTS: dict[TypeTag, frozenset[TypeTag]] = {
    TypeTag.STRING: frozenset({TypeTag.CHARACTER}),
    TypeTag.INTEGER: frozenset({TypeTag.LONG, TypeTag.BYTE, TypeTag.TINYINT}),
    TypeTag.FLOAT: frozenset({TypeTag.DOUBLE}),
}

_DEFAULT_FACTORIES: dict[TypeTag, Callable[[], Any]] = {
    TypeTag.INTEGER: lambda: 0,
    TypeTag.LONG: lambda: 0,
    TypeTag.DOUBLE: lambda: 0.0,
    TypeTag.FLOAT: lambda: 0.0,
    TypeTag.BOOLEAN: lambda: False,
    TypeTag.CHARACTER: lambda: " ",
    TypeTag.BYTE: lambda: 0,
    TypeTag.BYTES: lambda: b"",
    TypeTag.DECIMAL: lambda: Decimal("0.0"),
    TypeTag.TINYINT: lambda: 0,
    TypeTag.DATE: date.today,
    TypeTag.DATETIME: datetime.now,
    TypeTag.UUID: lambda: uuid.UUID(int=0),
}


class DefaultValueTable:
    """
    Fixed fragment table for type names.

    A fragment matches when it equals the lower-cased unqualified type name,
    so ``datetime.date`` resolves as a date while ``Appointment`` or
    ``Candidate`` match nothing.
    """

    ENTRIES: ClassVar[tuple[tuple[str, TypeTag], ...]] = (
        ("string", TypeTag.STRING),
        ("str", TypeTag.STRING),
        ("int", TypeTag.INTEGER),
        ("integer", TypeTag.INTEGER),
        ("long", TypeTag.LONG),
        ("double", TypeTag.DOUBLE),
        ("float", TypeTag.FLOAT),
        ("boolean", TypeTag.BOOLEAN),
        ("bool", TypeTag.BOOLEAN),
        ("char", TypeTag.CHARACTER),
        ("byte", TypeTag.BYTE),
        ("bytes", TypeTag.BYTES),
        ("bigdecimal", TypeTag.DECIMAL),
        ("decimal", TypeTag.DECIMAL),
        ("tinyint", TypeTag.TINYINT),
        ("localdate", TypeTag.DATE),
        ("date", TypeTag.DATE),
        ("localdatetime", TypeTag.DATETIME),
        ("datetime", TypeTag.DATETIME),
        ("uuid", TypeTag.UUID),
    )

    @classmethod
    def fragments(cls) -> tuple[str, ...]:
        """Return the table fragments in table order."""
        return tuple(fragment for fragment, _ in cls.ENTRIES)

    @classmethod
    def match(cls, type_name: str) -> TypeTag | None:
        """
        Return the tag whose fragment equals the unqualified type name.

        The name must be a single dotted identifier once ``Optional[X]`` and
        ``X | None`` are reduced to ``X``. Subscripted and union names never
        match, so ``list[str]`` has no scalar default.
        """
        name = type_name.strip()
        optional = _OPTIONAL_NAME.fullmatch(name)
        if optional is not None:
            name = optional.group(1).strip()

        members = [member.strip() for member in name.split("|")]
        members = [member for member in members if member and member not in _NONE_NAMES]
        if len(members) != 1 or not _DOTTED_NAME.fullmatch(members[0]):
            return None

        tail = members[0].rsplit(".", 1)[-1].lower()
        return cls._by_fragment().get(tail)

    @classmethod
    def _by_fragment(cls) -> dict[str, TypeTag]:
        return dict(cls.ENTRIES)

    @classmethod
    def contains(cls, type_name: str) -> bool:
        """Check if any fragment matches ``type_name``."""
        return cls.match(type_name) is not None

    @classmethod
    def lookup(cls, type_name: str, placeholder: str = PLACEHOLDER_STRING) -> Any | None:
        """
        Look up the canonical default for a type name.

        Returns:
            The default value, or None when no fragment matches
        """
        tag = cls.match(type_name)
        if tag is None:
            return None
        return tag.default_value(placeholder=placeholder)
