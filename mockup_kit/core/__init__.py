"""
Core build machinery: property discovery, the mock builder and its failures.
"""

from .builder import MockBuilder, PlanEntry, build, create_mock, try_build
from .descriptors import MutatorKind, PropertyDescriptor, describe_properties
from .errors import (
    ConstructionError,
    CyclicTypeError,
    FailureKind,
    MockBuildError,
    NestedBuildError,
    PopulationError,
)
from .result import BuildResult, BuildStatus

__all__ = [
    "BuildResult",
    "BuildStatus",
    "ConstructionError",
    "CyclicTypeError",
    "FailureKind",
    "MockBuildError",
    "MockBuilder",
    "MutatorKind",
    "NestedBuildError",
    "PlanEntry",
    "PopulationError",
    "PropertyDescriptor",
    "build",
    "create_mock",
    "describe_properties",
    "try_build",
]
