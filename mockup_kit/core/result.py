"""
Build result types for non-raising builds.

Provides a result object carrying either the populated instance or the
structured failure, for callers that prefer not to handle exceptions.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from ..domain.property_path import PropertyPath
from .errors import FailureKind, MockBuildError


class BuildStatus(Enum):
    """Build outcome."""

    SUCCESS = "success"
    FAILED = "failed"

    def is_success(self) -> bool:
        """Check if status indicates success."""
        return self == BuildStatus.SUCCESS


@dataclass
class BuildResult:
    """Result of a single top-level build."""

    status: BuildStatus
    instance: Any = None
    error: MockBuildError | None = None
    execution_time: float | None = None
    timestamp: datetime | None = None

    def __post_init__(self):
        """Initialize result with timestamp if not provided."""
        if self.timestamp is None:
            self.timestamp = datetime.now()
        if self.status.is_success() and self.error is not None:
            raise ValueError("Successful build result cannot carry an error")
        if not self.status.is_success() and self.error is None:
            raise ValueError("Failed build result must carry an error")

    def is_success(self) -> bool:
        """Check if the build produced an instance."""
        return self.status.is_success()

    def is_error(self) -> bool:
        """Check if the build failed."""
        return not self.status.is_success()

    def get_instance(self) -> Any:
        """Get the built instance, None if the build failed."""
        return self.instance if self.is_success() else None

    def get_error(self) -> MockBuildError | None:
        """Get the failure if the build failed."""
        return self.error if self.is_error() else None

    @property
    def failure_kind(self) -> FailureKind | None:
        """Kind of the innermost failure."""
        return self.error.origin.kind if self.error is not None else None

    @property
    def failure_path(self) -> PropertyPath | None:
        """Dotted path of the innermost failing property."""
        return self.error.origin.path if self.error is not None else None

    def unwrap(self) -> Any:
        """
        Return the instance or raise the failure.

        Raises:
            MockBuildError: If the build failed
        """
        if self.error is not None:
            raise self.error
        return self.instance

    @classmethod
    def success(cls, instance: Any, execution_time: float | None = None) -> "BuildResult":
        """Create a successful build result."""
        return cls(status=BuildStatus.SUCCESS, instance=instance, execution_time=execution_time)

    @classmethod
    def failure(cls, error: MockBuildError, execution_time: float | None = None) -> "BuildResult":
        """Create a failed build result."""
        return cls(status=BuildStatus.FAILED, error=error, execution_time=execution_time)
