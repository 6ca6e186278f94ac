# tests/test_refined.py
"""Unit tests for refined numeric types."""

import math
import pickle

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from lgbm_params.params.refined import (
    IntGreaterThanOne,
    LeftOpenProperFraction,
    NonNegativeDouble,
    NonNegativeInt,
    OneToTwoLeftSemiClosed,
    OpenProperFraction,
    PositiveDouble,
    PositiveInt,
    ProperFraction,
    render_double,
)
from lgbm_params.utils.exceptions import (
    ConfigurationError,
    InvalidRefinementValue,
    RefinementFailure,
)


class TestConstruction:
    """Construction accepts in-range values and rejects the rest precisely."""

    @pytest.mark.unit
    def test_positive_double_accepts_learning_rate(self):
        """A typical learning rate is a valid positive double."""
        rate = PositiveDouble(0.1)
        assert rate.value == 0.1
        assert rate.render() == "0.1"

    @pytest.mark.unit
    def test_left_open_fraction_rejects_zero(self):
        """Zero is excluded from (0, 1]."""
        with pytest.raises(InvalidRefinementValue) as exc_info:
            LeftOpenProperFraction(0.0)

        error = exc_info.value
        assert error.kind is RefinementFailure.BELOW_LOWER_BOUND
        assert error.value == 0.0
        assert error.bound == 0.0
        assert error.type_name == "LeftOpenProperFraction"

    @pytest.mark.unit
    def test_left_open_fraction_accepts_one(self):
        """One is included in (0, 1]."""
        assert LeftOpenProperFraction(1.0).value == 1.0

    @pytest.mark.unit
    @pytest.mark.parametrize("refined_type, raw, kind", [
        (PositiveInt, 0, RefinementFailure.NOT_STRICTLY_POSITIVE),
        (PositiveDouble, -0.5, RefinementFailure.NOT_STRICTLY_POSITIVE),
        (NonNegativeInt, -1, RefinementFailure.BELOW_LOWER_BOUND),
        (IntGreaterThanOne, 1, RefinementFailure.BELOW_LOWER_BOUND),
        (ProperFraction, 1.5, RefinementFailure.ABOVE_UPPER_BOUND),
        (OpenProperFraction, 1.0, RefinementFailure.ABOVE_UPPER_BOUND),
        (OneToTwoLeftSemiClosed, 2.0, RefinementFailure.ABOVE_UPPER_BOUND),
        (OneToTwoLeftSemiClosed, 0.99, RefinementFailure.BELOW_LOWER_BOUND),
        (PositiveInt, 2.5, RefinementFailure.NOT_INTEGER),
        (PositiveInt, True, RefinementFailure.NOT_A_NUMBER),
        (PositiveDouble, "0.1", RefinementFailure.NOT_A_NUMBER),
        (NonNegativeDouble, float('inf'), RefinementFailure.NOT_FINITE),
        (ProperFraction, float('nan'), RefinementFailure.NOT_FINITE),
    ])
    def test_failure_kinds(self, refined_type, raw, kind):
        """Each violation reports its own failure kind."""
        with pytest.raises(InvalidRefinementValue) as exc_info:
            refined_type(raw)
        assert exc_info.value.kind is kind

    @pytest.mark.unit
    def test_failure_is_a_configuration_error(self):
        """Refinement failures belong to the package error hierarchy."""
        with pytest.raises(ConfigurationError) as exc_info:
            PositiveInt(-3)
        assert exc_info.value.error_code == "INVALID_REFINEMENT_VALUE"
        assert "PositiveInt" in str(exc_info.value)

    @pytest.mark.unit
    def test_integral_float_is_accepted(self):
        """Whole floats are accepted by integer types and stored as int."""
        count = NonNegativeInt(3.0)
        assert count.value == 3
        assert isinstance(count.value, int)

    @pytest.mark.unit
    def test_negative_zero_is_normalized(self):
        """-0.0 renders the same as 0.0."""
        assert NonNegativeDouble(-0.0).render() == "0.0"

    @pytest.mark.unit
    @pytest.mark.parametrize("refined_type, raw, kind", [
        (ProperFraction, 10 ** 400, RefinementFailure.ABOVE_UPPER_BOUND),
        (OneToTwoLeftSemiClosed, -10 ** 400, RefinementFailure.BELOW_LOWER_BOUND),
        (PositiveDouble, -10 ** 400, RefinementFailure.NOT_STRICTLY_POSITIVE),
        (NonNegativeDouble, 10 ** 400, RefinementFailure.NOT_FINITE),
    ])
    def test_huge_integers_report_the_bound(self, refined_type, raw, kind):
        """Integers too large for a double fail with a refinement error."""
        with pytest.raises(InvalidRefinementValue) as exc_info:
            refined_type(raw)
        assert exc_info.value.kind is kind


class TestBehaviour:
    """Value semantics of refined numbers."""

    @pytest.mark.unit
    def test_comparison_delegates_to_raw_value(self):
        """Refined values compare with each other and with plain numbers."""
        assert PositiveDouble(0.1) == 0.1
        assert PositiveDouble(0.1) < PositiveDouble(0.2)
        assert PositiveInt(3) > 2
        assert PositiveInt(3) == NonNegativeInt(3)

    @pytest.mark.unit
    def test_hash_matches_equality(self):
        """Equal refined values hash equally."""
        assert hash(PositiveInt(5)) == hash(PositiveInt(5))
        assert len({ProperFraction(0.5), ProperFraction(0.5)}) == 1

    @pytest.mark.unit
    def test_immutable(self):
        """Refined values cannot be changed after construction."""
        rate = PositiveDouble(0.1)
        with pytest.raises(AttributeError):
            rate._value = -1.0
        with pytest.raises(AttributeError):
            rate.extra = 1

    @pytest.mark.unit
    def test_pickle_preserves_value(self):
        """Pickling goes through the checked constructor."""
        restored = pickle.loads(pickle.dumps(ProperFraction(0.25)))
        assert restored == ProperFraction(0.25)
        assert type(restored) is ProperFraction

    @pytest.mark.unit
    def test_coerce_rechecks_other_refined_types(self):
        """Coercion unwraps another refined type and applies this invariant."""
        fraction = ProperFraction.coerce(PositiveDouble(0.5))
        assert type(fraction) is ProperFraction

        with pytest.raises(InvalidRefinementValue):
            ProperFraction.coerce(PositiveDouble(1.5))

        same = ProperFraction(0.3)
        assert ProperFraction.coerce(same) is same

    @pytest.mark.unit
    def test_repr(self):
        """repr names the type and the raw value."""
        assert repr(PositiveDouble(0.1)) == "PositiveDouble(0.1)"
        assert repr(PositiveInt(7)) == "PositiveInt(7)"


class TestRendering:
    """Decimal rendering without scientific notation."""

    @pytest.mark.unit
    @pytest.mark.parametrize("refined, expected", [
        (PositiveDouble(0.1), "0.1"),
        (PositiveDouble(1e-7), "0.0000001"),
        (PositiveDouble(1e20), "100000000000000000000.0"),
        (LeftOpenProperFraction(1.0), "1.0"),
        (OneToTwoLeftSemiClosed(1.5), "1.5"),
        (PositiveInt(42), "42"),
        (NonNegativeInt(0), "0"),
    ])
    def test_render(self, refined, expected):
        """Rendering yields the shortest exact decimal literal."""
        assert refined.render() == expected
        assert str(refined) == expected

    @pytest.mark.unit
    def test_render_double_matches_refined_rule(self):
        """Plain floats render with the same rule."""
        assert render_double(0.25) == NonNegativeDouble(0.25).render()
        assert render_double(3) == "3.0"


class TestProperties:
    """Property-based checks over the full raw domains."""

    def test_in_bounds_values_are_preserved(self):
        """Construction within bounds keeps the raw value."""

        @given(
            count=st.integers(min_value=1, max_value=2**62),
            fraction=st.floats(min_value=0.0, max_value=1.0),
            power=st.floats(min_value=1.0, max_value=2.0, exclude_max=True),
        )
        @settings(max_examples=50)
        def check(count: int, fraction: float, power: float) -> None:
            assert PositiveInt(count).value == count
            assert ProperFraction(fraction).value == fraction
            assert OneToTwoLeftSemiClosed(power).value == power

        check()

    def test_out_of_bounds_values_report_the_bound(self):
        """Construction outside bounds fails with the specific bound."""

        @given(
            below=st.floats(max_value=0.0, allow_nan=False, allow_infinity=False),
            above=st.floats(min_value=1.0, exclude_min=True, allow_nan=False, allow_infinity=False),
        )
        @settings(max_examples=50)
        def check(below: float, above: float) -> None:
            with pytest.raises(InvalidRefinementValue) as low:
                PositiveDouble(below)
            assert low.value.kind is RefinementFailure.NOT_STRICTLY_POSITIVE

            with pytest.raises(InvalidRefinementValue) as high:
                LeftOpenProperFraction(above)
            assert high.value.kind is RefinementFailure.ABOVE_UPPER_BOUND
            assert high.value.bound == 1.0

        check()

    def test_rendered_literal_round_trips(self):
        """Parsing the rendered literal gives back the raw value."""

        @given(
            value=st.floats(min_value=0.0, allow_nan=False, allow_infinity=False),
            count=st.integers(min_value=0),
        )
        @settings(max_examples=100)
        def check(value: float, count: int) -> None:
            literal = NonNegativeDouble(value).render()
            assert "e" not in literal.lower()
            assert float(literal) == value
            assert int(NonNegativeInt(count).render()) == count

        check()

    def test_non_finite_always_rejected(self):
        """NaN and infinities never become refined doubles."""
        for raw in (math.nan, math.inf, -math.inf):
            with pytest.raises(InvalidRefinementValue) as exc_info:
                NonNegativeDouble(raw)
            assert exc_info.value.kind is RefinementFailure.NOT_FINITE
