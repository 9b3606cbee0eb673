"""Rule engine package -- imports every rule module so registration order is fixed."""

from itin.rules.base import get_registered_rules, register_rule, Rule

# Import order is evaluation order.
import itin.rules.flights  # noqa: E402, F401
import itin.rules.transfers  # noqa: E402, F401
import itin.rules.connections  # noqa: E402, F401

__all__ = ["get_registered_rules", "register_rule", "Rule"]
