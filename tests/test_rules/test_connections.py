"""Tests for the connection continuity rule."""

from itin.models import ErrorCode, TransportationLeg
from itin.rules.connections import ConnectionContinuityRule
from itin.validator import build_context


def _leg(id, origin, dest, kind="OTHER") -> TransportationLeg:
    return TransportationLeg(
        id=id, origin_location_id=origin, destination_location_id=dest, transportation_type=kind
    )


def _check(legs):
    return ConnectionContinuityRule().check(legs, build_context(legs))


class TestConnectionContinuity:
    def test_chained_legs_pass(self):
        assert _check([_leg(1, 1, 2), _leg(2, 2, 3, "FLIGHT"), _leg(3, 3, 4)]) == []

    def test_single_leg_trivially_passes(self):
        assert _check([_leg(1, 1, 2, "FLIGHT")]) == []

    def test_gap_names_both_ids(self):
        results = _check([_leg(1, 1, 2), _leg(2, 5, 6, "FLIGHT")])
        assert len(results) == 1
        assert results[0].code == ErrorCode.INVALID_CONNECTION
        assert "destination location 2" in results[0].message
        assert "origin location 5" in results[0].message

    def test_every_broken_pair_reported(self):
        results = _check([_leg(1, 1, 2), _leg(2, 3, 4, "FLIGHT"), _leg(3, 5, 6)])
        assert [r.code for r in results] == [ErrorCode.INVALID_CONNECTION] * 2

    def test_applies_regardless_of_kind(self):
        results = _check([_leg(1, 1, 2, "FLIGHT"), _leg(2, 9, 3, "FLIGHT")])
        assert len(results) == 1
