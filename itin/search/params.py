"""Search parameter parsing and validation."""

from __future__ import annotations

from typing import Optional, Union

from itin.errors import SearchParameterError
from itin.models import ErrorCode, SearchParameters, ValidationError

RawId = Optional[Union[int, str]]


def _is_blank(value: RawId) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _to_int(value: RawId) -> Optional[int]:
    """Parse a location id, or None if it is not an integer."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def check_search_parameters(params: SearchParameters) -> list[ValidationError]:
    """Return every problem with the search parameters (empty means valid).

    The checks are independent: missing origin and destination yields two
    errors, not one.
    """
    errors: list[ValidationError] = []
    origin = params.origin_location_id
    destination = params.destination_location_id

    # Required fields
    if _is_blank(origin):
        errors.append(
            ValidationError(code=ErrorCode.ORIGIN_REQUIRED, message="Origin location is required")
        )
    elif _to_int(origin) is None:
        errors.append(
            ValidationError(
                code=ErrorCode.INVALID_LOCATION_ID,
                message=f"Origin location id must be an integer, got: {origin!r}",
            )
        )

    if _is_blank(destination):
        errors.append(
            ValidationError(
                code=ErrorCode.DESTINATION_REQUIRED, message="Destination location is required"
            )
        )
    elif _to_int(destination) is None:
        errors.append(
            ValidationError(
                code=ErrorCode.INVALID_LOCATION_ID,
                message=f"Destination location id must be an integer, got: {destination!r}",
            )
        )

    # Same location
    if not _is_blank(origin) and not _is_blank(destination) and _same(origin, destination):
        errors.append(
            ValidationError(
                code=ErrorCode.SAME_LOCATION,
                message="Origin and destination cannot be the same location",
            )
        )

    return errors


def _same(origin: RawId, destination: RawId) -> bool:
    # Textual comparison: "05" and "5" are different inputs
    return str(origin).strip() == str(destination).strip()


def parse_search_parameters(params: SearchParameters) -> tuple[int, int]:
    """Validate and convert to (origin_id, destination_id).

    Raises SearchParameterError carrying every violation.
    """
    errors = check_search_parameters(params)
    if errors:
        raise SearchParameterError(errors)
    return _to_int(params.origin_location_id), _to_int(params.destination_location_id)
