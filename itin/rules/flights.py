"""Flight count and itinerary length rules."""

from itin.rules.base import register_rule, violation
from itin.models import ErrorCode, ValidationError

MAX_LEGS = 3


@register_rule
class FlightRequirementRule:
    """An itinerary must contain exactly one FLIGHT leg."""

    rule_id = "flight_requirement"
    rule_name = "Flight Requirement"

    def check(self, legs, context) -> list[ValidationError]:
        if context.flight_count == 1:
            return []
        return [
            violation(
                self,
                ErrorCode.FLIGHT_REQUIREMENT,
                f"Route must contain exactly one flight, found: {context.flight_count}",
            )
        ]


@register_rule
class TransportationCountRule:
    """At most MAX_LEGS legs per itinerary."""

    rule_id = "transportation_count"
    rule_name = "Transportation Count"

    def check(self, legs, context) -> list[ValidationError]:
        total = len(legs)
        if total <= MAX_LEGS:
            return []
        return [
            violation(
                self,
                ErrorCode.TRANSPORTATION_COUNT,
                f"Route cannot have more than {MAX_LEGS} transportations, found: {total}",
            )
        ]
