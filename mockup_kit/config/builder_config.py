"""
Builder configuration.

Holds the knobs controlling how mocks are constructed and populated.
"""

from dataclasses import dataclass, replace
from typing import Any

from ..domain.type_tag import PLACEHOLDER_STRING

DEFAULT_MAX_DEPTH = 32


@dataclass(frozen=True)
class BuilderConfig:
    """
    Immutable builder settings.

    Attributes:
        max_depth: Deepest nesting level a build may reach before failing
        bypass_init: Allocate classes whose ``__init__`` needs arguments
            without running ``__init__`` instead of failing construction
        validate_overrides: Check override values against plain-class
            annotations before applying them
        placeholder_string: Default value for string properties
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    bypass_init: bool = False
    validate_overrides: bool = False
    placeholder_string: str = PLACEHOLDER_STRING

    def __post_init__(self):
        """Validate configuration after initialization."""
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise TypeError(f"max_depth must be an int, got: {type(self.max_depth)}")
        if self.max_depth <= 0:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")
        if not isinstance(self.placeholder_string, str):
            raise TypeError(
                f"placeholder_string must be a string, got: {type(self.placeholder_string)}"
            )

    @classmethod
    def default(cls) -> "BuilderConfig":
        """Create the default configuration."""
        return cls()

    def with_overrides(self, **changes: Any) -> "BuilderConfig":
        """Return a copy with the given settings changed."""
        return replace(self, **changes)
