"""
Build failure types.

Every failure aborts the whole build. The exception names the failure kind,
the target type and the dotted path of the offending property; the
underlying cause is chained as ``__cause__``.
"""

from enum import Enum
from typing import Any

from ..domain.property_path import PropertyPath
from ..utilities.introspection import qualified_name


class FailureKind(Enum):
    """Kind of build failure."""

    CONSTRUCTION = "construction"
    POPULATION = "population"
    RECURSION = "recursion"
    CYCLE = "cycle"


class MockBuildError(Exception):
    """Base class for all mock build failures."""

    kind: FailureKind = FailureKind.CONSTRUCTION

    def __init__(self, message: str, *, target: Any, path: PropertyPath | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.target = target
        self.path = path

    @property
    def cause(self) -> BaseException | None:
        """Underlying exception, if any."""
        return self.__cause__

    @property
    def origin(self) -> "MockBuildError":
        """Innermost build failure; the error itself unless it wraps a nested one."""
        return self

    def describe(self) -> str:
        """One-line summary with kind, path and target."""
        location = f"'{self.path}'" if self.path is not None else "root"
        return f"{self.kind.value} failure at {location} ({qualified_name(self.target)}): {self.message}"

    def __str__(self) -> str:
        return self.describe()


class ConstructionError(MockBuildError):
    """The target type could not be instantiated."""

    kind = FailureKind.CONSTRUCTION


class PopulationError(MockBuildError):
    """A value could not be resolved or applied through a mutator."""

    kind = FailureKind.POPULATION


class CyclicTypeError(MockBuildError):
    """The type graph is cyclic or nests deeper than allowed."""

    kind = FailureKind.CYCLE


class NestedBuildError(MockBuildError):
    """Building a composite property failed."""

    kind = FailureKind.RECURSION

    def __init__(self, inner: MockBuildError, *, target: Any, path: PropertyPath) -> None:
        origin = inner.origin
        super().__init__(
            f"nested property '{path}' failed with {origin.describe()}",
            target=target,
            path=path,
        )
        self.inner = inner

    @property
    def origin(self) -> MockBuildError:
        return self.inner.origin
