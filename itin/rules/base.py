"""Rule engine base: protocol, registry, and decorators."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from itin.models import ErrorCode, TransportationLeg, ValidationError

if TYPE_CHECKING:
    from itin.validator import ValidationContext


class Rule(Protocol):
    """Protocol for itinerary rules."""

    rule_id: str
    rule_name: str

    def check(
        self, legs: list[TransportationLeg], context: "ValidationContext"
    ) -> list[ValidationError]: ...


# Global rule registry, in evaluation order
_RULE_REGISTRY: list[type] = []


def register_rule(cls: type) -> type:
    """Decorator to register a rule class."""
    _RULE_REGISTRY.append(cls)
    return cls


def get_registered_rules() -> list[type]:
    """Return all registered rule classes."""
    return list(_RULE_REGISTRY)


def violation(rule, code: ErrorCode, message: str) -> ValidationError:
    """Build a ValidationError attributed to ``rule``."""
    return ValidationError(code=code, message=message, rule_id=rule.rule_id)
