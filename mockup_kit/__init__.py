"""
mockup-kit - automatic mock objects for unit tests.

Given a class, builds an instance and fills every settable property with a
sensible default or a caller-supplied override, recursing into nested
objects. Overrides are addressed by dotted property path::

    from mockup_kit import build

    person = build(Person, {"name": "Test", "job.salary": Decimal("1000.00")})
"""

__version__ = "1.0.0"
__description__ = "Automatic mock objects for unit tests"

from .config import BuilderConfig
from .core import (
    BuildResult,
    BuildStatus,
    ConstructionError,
    CyclicTypeError,
    FailureKind,
    MockBuilder,
    MockBuildError,
    NestedBuildError,
    PopulationError,
    PropertyDescriptor,
    build,
    create_mock,
    describe_properties,
    try_build,
)
from .domain import DefaultValueTable, PropertyPath, TypeTag
from .utilities.console import print_plan, render_plan

__all__ = [
    "BuildResult",
    "BuildStatus",
    "BuilderConfig",
    "ConstructionError",
    "CyclicTypeError",
    "DefaultValueTable",
    "FailureKind",
    "MockBuildError",
    "MockBuilder",
    "NestedBuildError",
    "PopulationError",
    "PropertyDescriptor",
    "PropertyPath",
    "TypeTag",
    "build",
    "create_mock",
    "describe_properties",
    "print_plan",
    "render_plan",
    "try_build",
]
