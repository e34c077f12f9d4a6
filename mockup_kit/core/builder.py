"""
Mock builder.

Instantiates a target class and populates every settable property with an
override value, a table default, or a recursively built nested object.

Value resolution for each property, in priority order:

1. the override map entry for the property's dotted path
2. the default value of the property's type tag
3. a nested build of the property's type, with the same overrides
"""

import inspect
import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, get_origin

from ..config.builder_config import BuilderConfig
from ..domain.property_path import PropertyPath
from ..domain.type_tag import TypeTag
from ..utilities.introspection import qualified_name, requires_init_arguments, unwrap_annotation
from .descriptors import PropertyDescriptor, describe_properties
from .errors import (
    ConstructionError,
    CyclicTypeError,
    MockBuildError,
    NestedBuildError,
    PopulationError,
)
from .result import BuildResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

_SKIP = object()


@dataclass
class _BuildContext:
    """Working state of one top-level build."""

    overrides: Mapping[str, Any]
    config: BuilderConfig
    stack: list[Any] = field(default_factory=list)
    used_keys: set[str] = field(default_factory=set)


@dataclass(frozen=True)
class PlanEntry:
    """One property a build would visit."""

    path: PropertyPath
    tag: TypeTag
    type_name: str
    source: str

    @property
    def depth(self) -> int:
        return self.path.depth


class MockBuilder(Generic[T]):
    """
    Builds populated instances of a target class.

    Builders are immutable; ``with_`` and ``override`` return new builders::

        person = MockBuilder(Person).with_(name="Test", job__salary=Decimal("1000")).build()
    """

    def __init__(
        self,
        target: type[T],
        overrides: Mapping[str, Any] | None = None,
        config: BuilderConfig | None = None,
    ) -> None:
        if overrides is not None and not isinstance(overrides, Mapping):
            raise TypeError(f"Overrides must be a mapping, got: {type(overrides)}")

        self._target = target
        self._overrides: dict[str, Any] = dict(overrides or {})
        self._config = config or BuilderConfig.default()

    @property
    def target(self) -> type[T]:
        """Class this builder instantiates."""
        return self._target

    @property
    def overrides(self) -> dict[str, Any]:
        """Snapshot of the override map."""
        return dict(self._overrides)

    @property
    def config(self) -> BuilderConfig:
        """Builder settings."""
        return self._config

    def with_(self, **overrides: Any) -> "MockBuilder[T]":
        """Return a builder with keyword overrides merged; ``a__b`` addresses ``a.b``."""
        merged = dict(self._overrides)
        for keyword, value in overrides.items():
            merged[str(PropertyPath.from_kwarg(keyword))] = value
        return MockBuilder(self._target, merged, self._config)

    def override(self, path: str, value: Any) -> "MockBuilder[T]":
        """Return a builder with one dotted-path override added."""
        merged = dict(self._overrides)
        merged[str(PropertyPath.parse(path))] = value
        return MockBuilder(self._target, merged, self._config)

    def with_config(self, **changes: Any) -> "MockBuilder[T]":
        """Return a builder with the given settings changed."""
        return MockBuilder(self._target, self._overrides, self._config.with_overrides(**changes))

    def build(self) -> T:
        """
        Build a populated instance.

        Raises:
            MockBuildError: If any property at any depth cannot be built
        """
        context = _BuildContext(overrides=self._overrides, config=self._config)
        try:
            instance = self._build_type(self._target, None, context)
        except RecursionError as e:
            raise CyclicTypeError(
                "recursion limit reached while building nested properties",
                target=self._target,
            ) from e

        unused = set(self._overrides) - context.used_keys
        if unused:
            logger.debug(
                f"Ignoring unmatched overrides for {qualified_name(self._target)}: "
                f"{', '.join(sorted(unused))}"
            )
        return instance

    def try_build(self) -> BuildResult:
        """Build without raising; failures are returned in the result."""
        start_time = time.perf_counter()
        try:
            instance = self.build()
        except MockBuildError as e:
            return BuildResult.failure(e, execution_time=time.perf_counter() - start_time)
        return BuildResult.success(instance, execution_time=time.perf_counter() - start_time)

    def plan(self) -> list[PlanEntry]:
        """
        List the properties a build would visit, without constructing anything.

        Overridden paths are not expanded. A type already being planned on the
        current branch is reported with source ``cycle``.
        """
        entries: list[PlanEntry] = []
        self._plan_type(self._target, None, [], entries)
        return entries

    def __call__(self, **overrides: Any) -> T:
        if overrides:
            return self.with_(**overrides).build()
        return self.build()

    def __repr__(self) -> str:
        return f"MockBuilder({qualified_name(self._target)}, overrides={self._overrides!r})"

    def _build_type(self, target: Any, path: PropertyPath | None, context: _BuildContext) -> Any:
        if target in context.stack:
            chain = " -> ".join(qualified_name(t) for t in (*context.stack, target))
            raise CyclicTypeError(f"cyclic type graph: {chain}", target=target, path=path)
        if len(context.stack) >= context.config.max_depth:
            raise CyclicTypeError(
                f"nesting exceeds max_depth={context.config.max_depth}", target=target, path=path
            )

        context.stack.append(target)
        try:
            instance = self._instantiate(target, path, context.config)
            for descriptor in describe_properties(type(instance)):
                self._populate(instance, descriptor, descriptor.path_from(path), context)
            return instance
        finally:
            context.stack.pop()

    def _instantiate(self, target: Any, path: PropertyPath | None, config: BuilderConfig) -> Any:
        cls = get_origin(target) or target
        if not inspect.isclass(cls):
            raise ConstructionError(
                f"{qualified_name(target)} is not a constructible class", target=target, path=path
            )
        if inspect.isabstract(cls):
            raise ConstructionError(f"{qualified_name(cls)} is abstract", target=target, path=path)

        needs_arguments = requires_init_arguments(cls)
        if needs_arguments and not config.bypass_init:
            raise ConstructionError(
                f"{qualified_name(cls)} has no parameterless constructor", target=target, path=path
            )

        try:
            if needs_arguments:
                logger.debug(f"Allocating {qualified_name(cls)} without running __init__")
                return cls.__new__(cls)
            return cls()
        except RecursionError:
            raise
        except Exception as e:
            raise ConstructionError(
                f"could not instantiate {qualified_name(cls)}: {e}", target=target, path=path
            ) from e

    def _populate(
        self,
        instance: Any,
        descriptor: PropertyDescriptor,
        path: PropertyPath,
        context: _BuildContext,
    ) -> None:
        value = self._resolve_value(descriptor, path, context)
        if value is _SKIP:
            return

        try:
            descriptor.apply(instance, value)
        except RecursionError:
            raise
        except Exception as e:
            raise PopulationError(
                f"could not assign {descriptor.kind.value} '{descriptor.name}': {e}",
                target=type(instance),
                path=path,
            ) from e

    def _resolve_value(
        self, descriptor: PropertyDescriptor, path: PropertyPath, context: _BuildContext
    ) -> Any:
        key = str(path)
        if key in context.overrides:
            context.used_keys.add(key)
            value = context.overrides[key]
            if context.config.validate_overrides:
                self._check_override(descriptor, path, value)
            return value

        tag = descriptor.tag
        if tag is TypeTag.UNTYPED:
            logger.debug(f"Leaving '{key}' unset: no declared type and no override")
            return _SKIP

        if tag.has_default():
            try:
                return tag.default_value(descriptor.annotation, context.config.placeholder_string)
            except ValueError as e:
                raise PopulationError(str(e), target=descriptor.annotation, path=path) from e

        nested_type = unwrap_annotation(descriptor.annotation)
        if isinstance(nested_type, str):
            raise ConstructionError(
                f"cannot resolve forward reference '{nested_type}'", target=nested_type, path=path
            )

        try:
            return self._build_type(nested_type, path, context)
        except MockBuildError as e:
            if e.path == path:
                raise
            raise NestedBuildError(e, target=nested_type, path=path) from e

    def _check_override(self, descriptor: PropertyDescriptor, path: PropertyPath, value: Any) -> None:
        expected = unwrap_annotation(descriptor.annotation)
        if value is None and descriptor.optional:
            return
        if get_origin(expected) is not None or not inspect.isclass(expected):
            return
        if expected is float and isinstance(value, int):
            return
        if not isinstance(value, expected):
            raise PopulationError(
                f"override for '{path}' must be {qualified_name(expected)}, "
                f"got {type(value).__name__}",
                target=descriptor.annotation,
                path=path,
            )

    def _plan_type(
        self,
        target: Any,
        parent: PropertyPath | None,
        stack: list[Any],
        entries: list[PlanEntry],
    ) -> None:
        cls = get_origin(target) or target
        if not inspect.isclass(cls):
            return

        stack.append(cls)
        try:
            for descriptor in describe_properties(cls):
                path = descriptor.path_from(parent)
                nested_type = unwrap_annotation(descriptor.annotation)

                if str(path) in self._overrides:
                    source = "override"
                elif descriptor.tag is TypeTag.UNTYPED:
                    source = "skipped"
                elif descriptor.tag.has_default():
                    source = "default"
                elif nested_type in stack:
                    source = "cycle"
                else:
                    source = "nested"

                entries.append(PlanEntry(path, descriptor.tag, descriptor.type_name, source))
                if source == "nested":
                    self._plan_type(nested_type, path, stack, entries)
        finally:
            stack.pop()


def build(
    target: type[T],
    overrides: Mapping[str, Any] | None = None,
    *,
    config: BuilderConfig | None = None,
) -> T:
    """
    Build a populated instance of ``target``.

    Args:
        target: Class to instantiate
        overrides: Values keyed by dotted property path, taking priority
            over defaults
        config: Optional builder settings

    Raises:
        MockBuildError: If construction or population fails at any depth
    """
    return MockBuilder(target, overrides, config).build()


def try_build(
    target: type[T],
    overrides: Mapping[str, Any] | None = None,
    *,
    config: BuilderConfig | None = None,
) -> BuildResult:
    """Build a populated instance, returning a ``BuildResult`` instead of raising."""
    return MockBuilder(target, overrides, config).try_build()


def create_mock(
    target: type[T],
    overrides: Mapping[str, Any] | None = None,
    *,
    config: BuilderConfig | None = None,
) -> T | None:
    """
    Build a populated instance, or log the failure and return None.

    Callers must treat None as "no usable instance was produced".
    """
    try:
        return build(target, overrides, config=config)
    except MockBuildError as e:
        logger.error(f"Error creating mock of {qualified_name(target)}: {e}")
        return None
