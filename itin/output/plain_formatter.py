"""Plain text output formatter -- no ANSI escapes."""

from __future__ import annotations

from itin.models import (
    Location,
    RouteOption,
    TransportationLeg,
    ValidationError,
    ValidationReport,
)
from itin.output import (
    detail_sections,
    duration_label,
    price_label,
    route_path,
    stops_label,
)


def _header(title: str) -> str:
    """Create a plain text section header."""
    return f"\n{'=' * 60}\n  {title}\n{'=' * 60}\n"


def _subheader(title: str) -> str:
    """Create a plain text sub-header."""
    return f"\n--- {title} ---\n"


def _leg_line(i: int, leg: TransportationLeg) -> str:
    return (
        f"  {i:>2}. #{leg.id:<5} {leg.transportation_type.value:<7} {leg.label:<40} "
        f"{duration_label(leg.duration):>10} {price_label(leg.price):>12}"
    )


class PlainFormatter:
    """Format engine results as plain text without ANSI escapes."""

    def format_validation(self, report: ValidationReport) -> str:
        lines: list[str] = []
        lines.append(_header("Itinerary Validation"))
        lines.append(f"  Status: {'PASS' if report.passed else 'FAIL'}")
        lines.append(f"  Legs:   {len(report.legs)}")
        lines.append(f"  Errors: {report.error_count}")

        lines.append(_subheader("Legs"))
        for i, leg in enumerate(report.legs, 1):
            lines.append(_leg_line(i, leg))

        if report.errors:
            lines.append(_subheader("Violations"))
            lines.append(self.format_errors(report.errors))

        return "\n".join(lines)

    def format_routes(self, options: list[RouteOption]) -> str:
        lines: list[str] = []
        lines.append(_header(f"Available Routes ({len(options)})"))
        if not options:
            lines.append("  No routes found.")
            return "\n".join(lines)

        lines.append(f"  {'#':>3}  {'Route':<50} {'Stops':<9} {'Duration':>10} {'Price':>12}")
        lines.append(f"  {'-' * 3}  {'-' * 50} {'-' * 9} {'-' * 10} {'-' * 12}")
        for i, opt in enumerate(options, 1):
            lines.append(
                f"  {i:>3}  {route_path(opt):<50} {stops_label(opt.total_stops):<9} "
                f"{duration_label(opt.total_duration):>10} {price_label(opt.total_price):>12}"
            )
        return "\n".join(lines)

    def format_route_detail(self, report: ValidationReport) -> str:
        if not report.passed:
            lines = [_header("Route Validation Errors"), self.format_errors(report.errors)]
            return "\n".join(lines)

        option = RouteOption.from_legs(report.legs)
        lines = [_header("Route Details")]
        for title, leg in detail_sections(option):
            lines.append(f"  {title}:")
            lines.append(f"    From: {leg.origin_location_name or leg.origin_location_id}")
            lines.append(f"    To:   {leg.destination_location_name or leg.destination_location_id}")
            lines.append(f"    Type: {leg.transportation_type.value}")
        lines.append("")
        lines.append(f"  Total Stops:    {option.total_stops}")
        lines.append(f"  Total Duration: {duration_label(option.total_duration)}")
        lines.append(f"  Total Price:    {price_label(option.total_price)}")
        return "\n".join(lines)

    def format_errors(self, errors: list[ValidationError]) -> str:
        return "\n".join(f"  - [{e.code.value}] {e.message}" for e in errors)

    def format_locations(self, locations: list[Location]) -> str:
        lines = [_header(f"Locations ({len(locations)})")]
        for loc in locations:
            lines.append(
                f"  {loc.id:>4}  {loc.name:<35} {loc.type.value:<11} {loc.city}, {loc.country}"
            )
        return "\n".join(lines)

    def format_legs(self, legs: list[TransportationLeg]) -> str:
        lines = [_header(f"Transportations ({len(legs)})")]
        for i, leg in enumerate(legs, 1):
            lines.append(_leg_line(i, leg))
        return "\n".join(lines)
