"""Re-validation of an already composed itinerary before its detail is shown.

Provenance is never trusted: an option that came out of a search is checked
against the same rules again at the point of use.
"""

from __future__ import annotations

import logging
from typing import Optional

from itin.errors import ItineraryRejected
from itin.models import RouteOption, ValidationReport
from itin.validator import LegsLike, Validator

logger = logging.getLogger(__name__)


def inspect_route(route: LegsLike, validator: Optional[Validator] = None) -> ValidationReport:
    """Re-run the rules over a route option, itinerary, or leg list."""
    validator = validator or Validator()
    report = validator.validate(route)
    if not report.passed:
        logger.info("Inspected route failed re-validation with %d error(s)", report.error_count)
    return report


def require_valid(route: RouteOption, validator: Optional[Validator] = None) -> RouteOption:
    """Return the route unchanged if it re-validates, else raise ItineraryRejected."""
    report = inspect_route(route, validator)
    if not report.passed:
        raise ItineraryRejected(report.errors)
    return route
