"""Connection continuity: each leg must depart where the previous one arrived."""

from itin.rules.base import register_rule, violation
from itin.models import ErrorCode, ValidationError


@register_rule
class ConnectionContinuityRule:
    """Adjacent legs must share the connecting location, whatever their kind."""

    rule_id = "connection_continuity"
    rule_name = "Connection Continuity"

    def check(self, legs, context) -> list[ValidationError]:
        results = []
        for current, nxt in zip(legs, legs[1:]):
            if current.destination_location_id != nxt.origin_location_id:
                results.append(
                    violation(
                        self,
                        ErrorCode.INVALID_CONNECTION,
                        "Invalid connection between transportations: destination location "
                        f"{current.destination_location_id} does not match origin location "
                        f"{nxt.origin_location_id}",
                    )
                )
        return results
