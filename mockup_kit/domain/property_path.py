"""
PropertyPath value object for override addressing.

A dotted path names one property at any nesting depth of a built object,
e.g. ``job.salary`` is the ``salary`` property of the root's ``job``.
"""

from dataclasses import dataclass

SEPARATOR = "."
KWARG_SEPARATOR = "__"


def property_name_from_setter(method_name: str) -> str | None:
    """
    Derive a property name from a setter method name.

    ``set_job_title`` becomes ``job_title`` and ``setJobTitle`` becomes
    ``jobTitle``. Only the leading ``set`` prefix is removed.

    Returns:
        The property name, or None if the method is not named like a setter
    """
    if method_name.startswith("set_"):
        remainder = method_name[4:]
        return remainder if remainder and not remainder.startswith("_") else None

    if method_name.startswith("set") and len(method_name) > 3 and method_name[3].isupper():
        remainder = method_name[3:]
        return remainder[0].lower() + remainder[1:]

    return None


@dataclass(frozen=True)
class PropertyPath:
    """
    Immutable dotted property path.

    Segments are property names; the path renders as the segments joined
    with ``.``, which is the key format of an override map.
    """

    segments: tuple[str, ...]

    def __post_init__(self):
        """Validate path segments after initialization."""
        if not self.segments:
            raise ValueError("Property path cannot be empty")

        for segment in self.segments:
            if not isinstance(segment, str):
                raise TypeError(f"Path segment must be a string, got: {type(segment)}")
            if not segment or SEPARATOR in segment:
                raise ValueError(f"Invalid path segment: {segment!r}")

    @classmethod
    def root(cls, name: str) -> "PropertyPath":
        """Create a path for a property of the root object."""
        return cls((name,))

    @classmethod
    def parse(cls, dotted: str) -> "PropertyPath":
        """Create a path from its dotted string form."""
        if not isinstance(dotted, str):
            raise TypeError(f"Dotted path must be a string, got: {type(dotted)}")
        return cls(tuple(dotted.strip().split(SEPARATOR)))

    @classmethod
    def from_kwarg(cls, keyword: str) -> "PropertyPath":
        """
        Create a path from a keyword argument name.

        Keyword names cannot contain dots, so ``job__salary`` stands for
        ``job.salary``.
        """
        return cls(tuple(keyword.split(KWARG_SEPARATOR)))

    def child(self, name: str) -> "PropertyPath":
        """Return the path of a nested property below this one."""
        return PropertyPath((*self.segments, name))

    @property
    def name(self) -> str:
        """Name of the addressed property."""
        return self.segments[-1]

    @property
    def parent(self) -> "PropertyPath | None":
        """Path of the containing property, None at the root."""
        if len(self.segments) == 1:
            return None
        return PropertyPath(self.segments[:-1])

    @property
    def depth(self) -> int:
        """Nesting depth, 1 for root properties."""
        return len(self.segments)

    def is_ancestor_of(self, other: "PropertyPath") -> bool:
        """Check if ``other`` lies strictly below this path."""
        return other.depth > self.depth and other.segments[: self.depth] == self.segments

    def __str__(self) -> str:
        """Dotted string form."""
        return SEPARATOR.join(self.segments)

    def __repr__(self) -> str:
        """Representation for debugging."""
        return f"PropertyPath('{self}')"


def join_path(parent: PropertyPath | None, name: str) -> PropertyPath:
    """Extend ``parent`` with ``name``, starting a root path when there is no parent."""
    return PropertyPath.root(name) if parent is None else parent.child(name)
