"""Exception types raised at the seams of the itinerary pipeline.

Rule violations themselves are values (``ValidationError`` records); these
exceptions only carry them across a boundary where a caller must stop.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from itin.models import ValidationError


class ItinError(Exception):
    """Base class for all itin errors."""


class _ViolationsError(ItinError):
    """An error that carries the full list of violated rules."""

    def __init__(self, errors: list["ValidationError"], summary: str) -> None:
        self.errors = list(errors)
        detail = "; ".join(e.message for e in self.errors)
        super().__init__(f"{summary}: {detail}" if detail else summary)

    @property
    def codes(self) -> list[str]:
        return [e.code.value for e in self.errors]


class SearchParameterError(_ViolationsError):
    """Search parameters were rejected before composition."""

    def __init__(self, errors: list["ValidationError"]) -> None:
        super().__init__(errors, "Invalid search parameters")


class ItineraryRejected(_ViolationsError):
    """An already-assembled itinerary failed re-validation."""

    def __init__(self, errors: list["ValidationError"]) -> None:
        super().__init__(errors, "Itinerary failed validation")


class CatalogError(ItinError):
    """The leg/location catalog could not be read."""


class CatalogAuthError(CatalogError):
    """The catalog API rejected our credentials (HTTP 401/403)."""


class ConfigError(ItinError):
    """The configuration file could not be parsed or written."""
