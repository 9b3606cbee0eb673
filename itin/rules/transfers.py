"""Transfer shape rules: what may sit before and after the flight.

Both rules only apply when the itinerary has a flight; without one there is
no "before" or "after" and FlightRequirementRule already reports the problem.
"""

from itin.rules.base import register_rule, violation
from itin.models import ErrorCode, LegKind, ValidationError


@register_rule
class BeforeFlightTransferRule:
    """At most one leg before the flight, and it must be OTHER."""

    rule_id = "before_flight_transfer"
    rule_name = "Before-Flight Transfer"

    def check(self, legs, context) -> list[ValidationError]:
        if context.flight_index is None:
            return []
        results = []
        before = context.before_flight_legs
        if len(before) > 1:
            results.append(
                violation(
                    self,
                    ErrorCode.MULTIPLE_BEFORE_TRANSFERS,
                    "Multiple before flight transfers are not allowed",
                )
            )
        if any(leg.transportation_type != LegKind.OTHER for leg in before):
            results.append(
                violation(
                    self,
                    ErrorCode.INVALID_BEFORE_TRANSFER_TYPE,
                    "Only OTHER type transportations are allowed before flight",
                )
            )
        return results


@register_rule
class AfterFlightTransferRule:
    """At most one leg after the flight, and it must be OTHER."""

    rule_id = "after_flight_transfer"
    rule_name = "After-Flight Transfer"

    def check(self, legs, context) -> list[ValidationError]:
        if context.flight_index is None:
            return []
        results = []
        after = context.after_flight_legs
        if len(after) > 1:
            results.append(
                violation(
                    self,
                    ErrorCode.MULTIPLE_AFTER_TRANSFERS,
                    "Multiple after flight transfers are not allowed",
                )
            )
        if any(leg.transportation_type != LegKind.OTHER for leg in after):
            results.append(
                violation(
                    self,
                    ErrorCode.INVALID_AFTER_TRANSFER_TYPE,
                    "Only OTHER type transportations are allowed after flight",
                )
            )
        return results
