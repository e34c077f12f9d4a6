"""
Property descriptors for target types.

Discovers the mutators of a class once and describes each as a
``PropertyDescriptor`` naming the property, its type tag, its declared
annotation and the function that assigns it. Three mutator kinds are
recognised, in increasing priority when they share a property name:

- annotated instance attributes (plain annotations and dataclass fields)
- ``property`` objects with a setter
- setter methods named ``set_<name>`` or ``set<Name>`` taking one argument
"""

import functools
import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..domain.property_path import PropertyPath, join_path, property_name_from_setter
from ..domain.type_tag import TypeTag
from ..utilities.introspection import (
    is_class_var,
    is_frozen_dataclass,
    is_init_var,
    is_optional,
    qualified_name,
    resolve_hints,
)

logger = logging.getLogger(__name__)

# Upper bound on cached classes; least recently described classes are evicted first.
DESCRIPTOR_CACHE_SIZE = 1024


class MutatorKind(Enum):
    """How a property is assigned."""

    ATTRIBUTE = "attribute"
    PROPERTY = "property"
    METHOD = "method"


@dataclass(frozen=True)
class PropertyDescriptor:
    """One settable property of a target type."""

    name: str
    tag: TypeTag
    annotation: Any
    kind: MutatorKind
    setter: Callable[[Any, Any], None]
    optional: bool = False

    def apply(self, instance: Any, value: Any) -> None:
        """Assign ``value`` to this property of ``instance``."""
        self.setter(instance, value)

    def path_from(self, parent: PropertyPath | None) -> PropertyPath:
        """Dotted path of this property below ``parent``."""
        return join_path(parent, self.name)

    @property
    def type_name(self) -> str:
        """Readable name of the declared type."""
        if self.annotation is None:
            return "-"
        return qualified_name(self.annotation)


def _attribute_setter(name: str) -> Callable[[Any, Any], None]:
    def assign(instance: Any, value: Any) -> None:
        setattr(instance, name, value)

    return assign


def _frozen_attribute_setter(name: str) -> Callable[[Any, Any], None]:
    def assign(instance: Any, value: Any) -> None:
        object.__setattr__(instance, name, value)

    return assign


def _method_setter(method_name: str) -> Callable[[Any, Any], None]:
    def assign(instance: Any, value: Any) -> None:
        getattr(instance, method_name)(value)

    return assign


def _class_members(cls: type) -> dict[str, Any]:
    """Static class attributes visible on ``cls``, as attribute lookup would find them."""
    members: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        members.update(vars(klass))
    return members


def _setter_parameter(function: Callable[..., Any]) -> inspect.Parameter | None:
    """The single value parameter of a setter, None if it does not take exactly one."""
    try:
        parameters = list(inspect.signature(function).parameters.values())[1:]
    except (TypeError, ValueError):
        return None

    if len(parameters) != 1:
        return None
    parameter = parameters[0]
    if parameter.kind not in (parameter.POSITIONAL_ONLY, parameter.POSITIONAL_OR_KEYWORD):
        return None
    return parameter


def _describe(
    name: str, annotation: Any, kind: MutatorKind, setter: Callable[[Any, Any], None]
) -> PropertyDescriptor:
    return PropertyDescriptor(
        name=name,
        tag=TypeTag.for_annotation(annotation),
        annotation=annotation,
        kind=kind,
        setter=setter,
        optional=is_optional(annotation),
    )


def _attribute_descriptors(cls: type, members: dict[str, Any]) -> list[PropertyDescriptor]:
    frozen = is_frozen_dataclass(cls)
    descriptors = []
    for name, annotation in resolve_hints(cls).items():
        if name.startswith("_") or is_class_var(annotation) or is_init_var(annotation):
            continue
        member = members.get(name)
        if isinstance(member, property) or inspect.isfunction(member):
            continue
        setter = _frozen_attribute_setter(name) if frozen else _attribute_setter(name)
        descriptors.append(_describe(name, annotation, MutatorKind.ATTRIBUTE, setter))
    return descriptors


def _property_descriptors(members: dict[str, Any]) -> list[PropertyDescriptor]:
    descriptors = []
    for name, member in members.items():
        if not isinstance(member, property) or member.fset is None or name.startswith("_"):
            continue

        parameter = _setter_parameter(member.fset)
        if parameter is None:
            continue

        annotation = resolve_hints(member.fset).get(parameter.name)
        if annotation is None and member.fget is not None:
            annotation = resolve_hints(member.fget).get("return")
        setter = _attribute_setter(name)
        descriptors.append(_describe(name, annotation, MutatorKind.PROPERTY, setter))
    return descriptors


def _method_descriptors(members: dict[str, Any]) -> list[PropertyDescriptor]:
    descriptors = []
    for method_name, member in members.items():
        if not inspect.isfunction(member):
            continue
        name = property_name_from_setter(method_name)
        if name is None:
            continue

        parameter = _setter_parameter(member)
        if parameter is None:
            logger.debug(f"Ignoring {method_name}: setters take exactly one argument")
            continue

        annotation = resolve_hints(member).get(parameter.name)
        setter = _method_setter(method_name)
        descriptors.append(_describe(name, annotation, MutatorKind.METHOD, setter))
    return descriptors


@functools.lru_cache(maxsize=DESCRIPTOR_CACHE_SIZE)
def describe_properties(cls: type) -> tuple[PropertyDescriptor, ...]:
    """
    Describe the settable properties of ``cls``.

    Properties are listed in order of first declaration. When a name is
    reachable through several mutators the highest-priority kind is kept.

    Args:
        cls: Target class

    Returns:
        Tuple of property descriptors, cached per class
    """
    if not inspect.isclass(cls):
        raise TypeError(f"Expected a class, got: {qualified_name(cls)}")

    members = _class_members(cls)
    by_name: dict[str, PropertyDescriptor] = {}
    for descriptor in (
        *_attribute_descriptors(cls, members),
        *_property_descriptors(members),
        *_method_descriptors(members),
    ):
        by_name[descriptor.name] = descriptor

    logger.debug(f"Discovered {len(by_name)} properties on {qualified_name(cls)}")
    return tuple(by_name.values())
