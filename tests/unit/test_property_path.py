"""
Unit tests for dotted property paths and setter name parsing.
"""

import pytest

from mockup_kit.domain.property_path import (
    PropertyPath,
    join_path,
    property_name_from_setter,
)


class TestSetterNames:
    """Test cases for deriving property names from setter names."""

    @pytest.mark.parametrize(
        ("method_name", "expected"),
        [
            ("set_name", "name"),
            ("set_job_title", "job_title"),
            ("setName", "name"),
            ("setJobTitle", "jobTitle"),
            ("setURL", "uRL"),
            ("setOffset", "offset"),
        ],
    )
    def test_setter_names(self, method_name, expected):
        """Test only the leading set prefix is removed."""
        assert property_name_from_setter(method_name) == expected

    @pytest.mark.parametrize("method_name", ["set", "set_", "setup", "settle", "reset_name", "set__x"])
    def test_non_setter_names(self, method_name):
        """Test names that merely start with 'set' are not setters."""
        assert property_name_from_setter(method_name) is None


class TestPropertyPath:
    """Test cases for PropertyPath value object."""

    def test_root_path(self):
        """Test root paths render as the bare name."""
        path = PropertyPath.root("name")

        assert str(path) == "name"
        assert path.name == "name"
        assert path.depth == 1
        assert path.parent is None

    def test_child_path(self):
        """Test child paths join with dots."""
        path = PropertyPath.root("job").child("salary")

        assert str(path) == "job.salary"
        assert path.name == "salary"
        assert path.depth == 2
        assert path.parent == PropertyPath.root("job")

    def test_join_path(self):
        """Test join_path starts a root path without a parent."""
        assert join_path(None, "job") == PropertyPath.root("job")
        assert str(join_path(PropertyPath.root("job"), "salary")) == "job.salary"

    def test_parse(self):
        """Test parsing dotted strings."""
        path = PropertyPath.parse("a.b.c")
        assert path.segments == ("a", "b", "c")

    def test_from_kwarg(self):
        """Test double underscores stand for dots in keyword names."""
        assert str(PropertyPath.from_kwarg("job__salary")) == "job.salary"
        assert str(PropertyPath.from_kwarg("birth_date")) == "birth_date"

    def test_invalid_paths(self):
        """Test invalid paths are rejected."""
        for invalid in ["", "a..b", ".a", "a."]:
            with pytest.raises(ValueError):
                PropertyPath.parse(invalid)

        with pytest.raises(ValueError):
            PropertyPath(())
        with pytest.raises(TypeError):
            PropertyPath.parse(None)
        with pytest.raises(ValueError):
            PropertyPath.root("a.b")

    def test_ancestry(self):
        """Test ancestor checks."""
        job = PropertyPath.root("job")

        assert job.is_ancestor_of(PropertyPath.parse("job.salary"))
        assert not job.is_ancestor_of(job)
        assert not job.is_ancestor_of(PropertyPath.parse("jobs.salary"))

    def test_equality_and_hash(self):
        """Test paths are value objects."""
        assert PropertyPath.parse("job.salary") == PropertyPath.root("job").child("salary")
        assert len({PropertyPath.parse("a.b"), PropertyPath.parse("a.b")}) == 1

    def test_representation(self):
        """Test path representation."""
        assert repr(PropertyPath.parse("job.salary")) == "PropertyPath('job.salary')"
