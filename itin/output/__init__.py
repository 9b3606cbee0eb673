"""Output formatters for itin.

Provides a Formatter protocol and three implementations:
- RichFormatter: colored Rich tables and panels
- PlainFormatter: plain text without ANSI escapes
- JsonFormatter: valid JSON for piping to jq
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from itin.models import (
        Location,
        RouteOption,
        TransportationLeg,
        ValidationError,
        ValidationReport,
    )


class Formatter(Protocol):
    """Protocol for formatting engine results."""

    def format_validation(self, report: ValidationReport) -> str:
        """Format a validation report for a leg sequence."""
        ...

    def format_routes(self, options: list[RouteOption]) -> str:
        """Format a list of route search results."""
        ...

    def format_route_detail(self, report: ValidationReport) -> str:
        """Format an inspected route: its legs if valid, its violations if not."""
        ...

    def format_errors(self, errors: list[ValidationError]) -> str:
        """Format a list of validation errors."""
        ...

    def format_locations(self, locations: list[Location]) -> str:
        """Format catalog locations."""
        ...

    def format_legs(self, legs: list[TransportationLeg]) -> str:
        """Format catalog transportation legs."""
        ...


def stops_label(stops: int) -> str:
    """'Direct' for zero stops, otherwise 'N stop(s)'."""
    if stops == 0:
        return "Direct"
    return f"{stops} stop" if stops == 1 else f"{stops} stops"


def duration_label(hours: float) -> str:
    return f"{hours:g} hours"


def price_label(amount: float) -> str:
    return f"${amount:,.2f}"


def route_path(option: RouteOption) -> str:
    """'A -> B -> C' over the option's connection points."""
    legs = option.legs
    names = [legs[0].origin_location_name or str(legs[0].origin_location_id)]
    names += [leg.destination_location_name or str(leg.destination_location_id) for leg in legs]
    return " -> ".join(names)


def detail_sections(option: RouteOption) -> list[tuple[str, TransportationLeg]]:
    """Titled legs for the detail view: First Leg / (Main) Flight / Last Leg."""
    sections = []
    if option.before_flight is not None:
        sections.append(("First Leg", option.before_flight))
        sections.append(("Main Flight", option.flight))
    else:
        sections.append(("Flight", option.flight))
    if option.after_flight is not None:
        sections.append(("Last Leg", option.after_flight))
    return sections


def get_formatter(name: str = "rich") -> Formatter:
    """Get a formatter by name.

    Args:
        name: One of "rich", "plain", "json".

    Returns:
        A Formatter instance.

    Raises:
        ValueError: If the name is not recognized.
    """
    if name == "rich":
        from itin.output.rich_formatter import RichFormatter

        return RichFormatter()
    elif name == "plain":
        from itin.output.plain_formatter import PlainFormatter

        return PlainFormatter()
    elif name == "json":
        from itin.output.json_formatter import JsonFormatter

        return JsonFormatter()
    else:
        raise ValueError(f"Unknown formatter: {name!r}. Use 'rich', 'plain', or 'json'.")
