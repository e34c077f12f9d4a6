"""
Property-based tests for the mock builder.

Uses Hypothesis to verify override precedence, nested path isolation,
tolerance of unmatched keys and the fragment table's specificity rule.
"""

from datetime import date
from decimal import Decimal

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from mockup_kit import MockBuilder, build
from mockup_kit.domain.property_path import PropertyPath
from mockup_kit.domain.type_tag import DefaultValueTable
from tests.fixtures.models import Address, Employee, Person

# Configure Hypothesis for CI performance
CI_SETTINGS = settings(max_examples=50, deadline=None)

PERSON_PATHS = {"name", "age", "salary", "birth_date", "job", "job.title", "job.salary"}


# Builder-specific strategies
@st.composite
def identifiers(draw):
    """Generate property-name-like identifiers."""
    return draw(st.from_regex(r"[a-z][a-z0-9_]{0,11}", fullmatch=True))


@st.composite
def dotted_paths(draw):
    """Generate dotted paths of one to four segments."""
    segments = draw(st.lists(identifiers(), min_size=1, max_size=4))
    return ".".join(segments)


@st.composite
def override_values(draw):
    """Generate arbitrary override values."""
    return draw(
        st.one_of(
            st.text(max_size=20),
            st.integers(),
            st.decimals(allow_nan=False, allow_infinity=False, places=2),
            st.booleans(),
            st.none(),
        )
    )


class TestOverrideProperties:
    """Property-based tests for override resolution."""

    @given(st.text(max_size=50), st.integers())
    @CI_SETTINGS
    def test_root_overrides_win(self, name, age):
        """Test root overrides are applied exactly."""
        person = build(Person, {"name": name, "age": age})

        assert person.get_name() == name
        assert person.get_age() == age

    @given(st.decimals(allow_nan=False, allow_infinity=False, places=2))
    @CI_SETTINGS
    def test_nested_override_is_isolated(self, salary):
        """Test a nested override leaves siblings and the parent level at defaults."""
        person = build(Person, {"job.salary": salary})

        assert person.get_job().get_salary() == salary
        assert person.get_job().get_title() == "string"
        assert person.get_salary() == Decimal("0.0")
        assert person.get_name() == "string"

    @given(st.dictionaries(dotted_paths(), override_values(), max_size=8))
    @CI_SETTINGS
    def test_unmatched_keys_never_fail(self, overrides):
        """Test keys that address no property are ignored."""
        assume(not PERSON_PATHS & set(overrides))

        person = build(Person, overrides)

        assert person.get_name() == "string"
        assert person.get_age() == 0
        assert person.get_job().get_salary() == Decimal("0.0")

    @given(st.text(max_size=20), st.integers(min_value=-1000, max_value=1000))
    @CI_SETTINGS
    def test_keyword_and_mapping_forms_agree(self, street, number):
        """Test with_() keywords address the same paths as dotted keys."""
        from_kwargs = MockBuilder(Employee).with_(address__street=street, address__number=number)
        from_mapping = MockBuilder(Employee, {"address.street": street, "address.number": number})

        assert from_kwargs.build().address == from_mapping.build().address
        assert from_kwargs.build().address == Address(street=street, number=number, verified=False)


class TestBuildProperties:
    """Property-based tests for repeated builds."""

    @given(st.integers(min_value=1, max_value=5))
    @CI_SETTINGS
    def test_repeated_builds_are_equal(self, repetitions):
        """Test repeated builds are structurally equal."""
        employees = [build(Employee, {"job": None}) for _ in range(repetitions)]

        assert all(employee == employees[0] for employee in employees)
        assert all(build(Person).get_birth_date() == date.today() for _ in range(repetitions))


class TestTableProperties:
    """Property-based tests for the default value table."""

    @given(st.sampled_from(DefaultValueTable.ENTRIES))
    def test_fragment_matches_itself(self, entry):
        """Test every fragment resolves to its own tag."""
        fragment, tag = entry
        assert DefaultValueTable.match(fragment) is tag

    @given(st.sampled_from(DefaultValueTable.ENTRIES), identifiers())
    def test_module_prefix_does_not_change_match(self, entry, module):
        """Test a module prefix never overrides the unqualified name."""
        fragment, tag = entry
        assert DefaultValueTable.match(f"{module}.{fragment}") is tag

    @given(dotted_paths())
    def test_parsed_paths_render_unchanged(self, dotted):
        """Test parsing and rendering a dotted path is stable."""
        path = PropertyPath.parse(dotted)

        assert str(path) == dotted
        assert path.depth == dotted.count(".") + 1
