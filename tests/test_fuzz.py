"""Property-based tests for the Validator and Composer using Hypothesis.

These tests generate random leg sequences and catalogs and check that the
rule set behaves the same way regardless of input: every violated rule is
reported, results are repeatable, and nothing the composer returns fails
validation.
"""

from hypothesis import given, settings, HealthCheck
import hypothesis.strategies as st

from itin.models import ErrorCode, LegKind, TransportationLeg
from itin.search.composer import compose
from itin.validator import Validator

_VALIDATOR = Validator()

LOCATION_IDS = st.integers(min_value=1, max_value=6)
KINDS = st.sampled_from([LegKind.FLIGHT, LegKind.OTHER])


# ---------------------------------------------------------------------------
# Custom Hypothesis strategies
# ---------------------------------------------------------------------------


@st.composite
def random_leg(draw, leg_id=None, origin=None, kind=None):
    """Generate a leg with random endpoints, kind, duration and price."""
    return TransportationLeg(
        id=leg_id if leg_id is not None else draw(st.integers(min_value=1, max_value=10_000)),
        origin_location_id=origin if origin is not None else draw(LOCATION_IDS),
        destination_location_id=draw(LOCATION_IDS),
        transportation_type=kind if kind is not None else draw(KINDS),
        duration=draw(st.floats(min_value=0, max_value=48, allow_nan=False)),
        price=draw(st.floats(min_value=0, max_value=5_000, allow_nan=False)),
    )


@st.composite
def random_legs(draw, min_size=0, max_size=6):
    """A sequence of legs with no continuity guarantee."""
    size = draw(st.integers(min_value=min_size, max_value=max_size))
    return [draw(random_leg(leg_id=i + 1)) for i in range(size)]


@st.composite
def chained_legs(draw, kinds):
    """Legs of the given kinds that connect end to start."""
    location = draw(LOCATION_IDS)
    legs = []
    for i, kind in enumerate(kinds):
        leg = draw(random_leg(leg_id=i + 1, origin=location, kind=kind))
        legs.append(leg)
        location = leg.destination_location_id
    return legs


@st.composite
def random_catalog(draw):
    return draw(st.lists(random_leg(), min_size=0, max_size=15, unique_by=lambda leg: leg.id))


def _codes(legs) -> set[ErrorCode]:
    return _VALIDATOR.validate(legs).codes


# ---------------------------------------------------------------------------
# Validator properties
# ---------------------------------------------------------------------------


@given(legs=random_legs())
@settings(max_examples=200)
def test_flight_requirement_iff_not_exactly_one_flight(legs):
    flights = sum(1 for leg in legs if leg.is_flight)
    assert (ErrorCode.FLIGHT_REQUIREMENT in _codes(legs)) == (flights != 1)


@given(legs=random_legs())
@settings(max_examples=200)
def test_transportation_count_iff_more_than_three(legs):
    assert (ErrorCode.TRANSPORTATION_COUNT in _codes(legs)) == (len(legs) > 3)


@given(legs=random_legs(min_size=2))
@settings(max_examples=200)
def test_broken_chain_reports_invalid_connection(legs):
    broken = any(
        a.destination_location_id != b.origin_location_id for a, b in zip(legs, legs[1:])
    )
    assert (ErrorCode.INVALID_CONNECTION in _codes(legs)) == broken


@given(legs=random_legs())
@settings(max_examples=100)
def test_no_flight_skips_transfer_rules(legs):
    if any(leg.is_flight for leg in legs):
        return
    transfer_codes = {
        ErrorCode.MULTIPLE_BEFORE_TRANSFERS,
        ErrorCode.INVALID_BEFORE_TRANSFER_TYPE,
        ErrorCode.MULTIPLE_AFTER_TRANSFERS,
        ErrorCode.INVALID_AFTER_TRANSFER_TYPE,
    }
    assert not (_codes(legs) & transfer_codes)


@given(legs=chained_legs([LegKind.OTHER, LegKind.FLIGHT, LegKind.OTHER]))
@settings(max_examples=100)
def test_chained_before_flight_after_is_valid(legs):
    assert _VALIDATOR.validate(legs).errors == []


@given(legs=random_legs())
@settings(max_examples=100)
def test_idempotent(legs):
    assert _VALIDATOR.validate(legs).errors == _VALIDATOR.validate(legs).errors


@given(legs=random_legs())
@settings(max_examples=100)
def test_never_raises_and_always_well_formed(legs):
    report = _VALIDATOR.validate(legs)
    assert report.legs == legs
    for error in report.errors:
        assert isinstance(error.code, ErrorCode)
        assert error.code != ErrorCode.RULE_EXECUTION
        assert error.message


# ---------------------------------------------------------------------------
# Composer properties
# ---------------------------------------------------------------------------


@given(catalog=random_catalog(), origin=LOCATION_IDS, destination=LOCATION_IDS)
@settings(max_examples=100, suppress_health_check=[HealthCheck.too_slow])
def test_composed_options_always_valid(catalog, origin, destination):
    for option in compose(catalog, origin, destination):
        legs = option.legs
        assert _VALIDATOR.validate(legs).passed
        assert legs[0].origin_location_id == origin
        assert legs[-1].destination_location_id == destination
        assert option.total_stops == len(legs) - 1
        assert 1 <= len(legs) <= 3


@given(catalog=random_catalog(), origin=LOCATION_IDS, destination=LOCATION_IDS)
@settings(max_examples=50, suppress_health_check=[HealthCheck.too_slow])
def test_compose_deterministic(catalog, origin, destination):
    assert compose(catalog, origin, destination) == compose(catalog, origin, destination)
