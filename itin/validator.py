"""Validator: builds context and runs all rules against a leg sequence."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Union

from itin.models import (
    ErrorCode,
    Itinerary,
    LegKind,
    RouteOption,
    TransportationLeg,
    ValidationError,
    ValidationReport,
    find_flight_index,
)
from itin.rules import get_registered_rules

logger = logging.getLogger(__name__)

LegsLike = Union[Iterable[TransportationLeg], Itinerary, RouteOption]


@dataclass
class ValidationContext:
    """Pre-computed context for rule evaluation."""

    # Number of FLIGHT legs in the sequence
    flight_count: int = 0
    # Index of the first FLIGHT leg (None when there is none)
    flight_index: Optional[int] = None
    # legs[:flight_index]
    before_flight_legs: list[TransportationLeg] = field(default_factory=list)
    # legs[flight_index + 1:]
    after_flight_legs: list[TransportationLeg] = field(default_factory=list)


def build_context(legs: list[TransportationLeg]) -> ValidationContext:
    """Build validation context from a leg sequence."""
    ctx = ValidationContext()
    ctx.flight_count = sum(1 for leg in legs if leg.transportation_type == LegKind.FLIGHT)
    ctx.flight_index = find_flight_index(legs)
    if ctx.flight_index is not None:
        ctx.before_flight_legs = legs[: ctx.flight_index]
        ctx.after_flight_legs = legs[ctx.flight_index + 1 :]
    return ctx


def as_leg_list(value: LegsLike) -> list[TransportationLeg]:
    """Normalize an itinerary, route option, or iterable of legs to a list."""
    if isinstance(value, (Itinerary, RouteOption)):
        return list(value.legs)
    return list(value)


class Validator:
    """Runs all registered rules against a leg sequence."""

    def __init__(self) -> None:
        self._rules = [rule_cls() for rule_cls in get_registered_rules()]

    def validate(self, legs: LegsLike) -> ValidationReport:
        """Run every rule and return a report holding all violations."""
        leg_list = as_leg_list(legs)
        context = build_context(leg_list)
        all_errors: list[ValidationError] = []

        for rule in self._rules:
            try:
                all_errors.extend(rule.check(leg_list, context))
            except Exception as e:
                logger.exception("Rule %s failed", getattr(rule, "rule_id", "unknown"))
                all_errors.append(
                    ValidationError(
                        code=ErrorCode.RULE_EXECUTION,
                        message=f"Rule execution error: {e}",
                        rule_id=getattr(rule, "rule_id", "unknown"),
                    )
                )

        return ValidationReport(legs=leg_list, errors=all_errors)


def validate_legs(legs: LegsLike) -> list[ValidationError]:
    """Convenience wrapper: the list of violations (empty means valid)."""
    return Validator().validate(legs).errors
