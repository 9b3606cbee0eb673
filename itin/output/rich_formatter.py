"""Rich-based output formatter with colored tables and panels."""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from itin.models import (
    LegKind,
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

_KIND_STYLES = {
    LegKind.FLIGHT: "bold cyan",
    LegKind.OTHER: "green",
}


def _render(renderable) -> str:
    """Render a Rich object to a string."""
    buf = StringIO()
    console = Console(file=buf, force_terminal=True, width=120)
    console.print(renderable)
    return buf.getvalue()


def _legs_table(title: str, legs: list[TransportationLeg]) -> Table:
    table = Table(title=title, show_lines=False)
    table.add_column("#", style="dim", justify="right")
    table.add_column("ID", justify="right")
    table.add_column("Type", min_width=6)
    table.add_column("From", style="cyan")
    table.add_column("To", style="cyan")
    table.add_column("Duration", justify="right")
    table.add_column("Price", justify="right")

    for i, leg in enumerate(legs, 1):
        kind = leg.transportation_type
        table.add_row(
            str(i),
            str(leg.id),
            Text(kind.value, style=_KIND_STYLES.get(kind, "")),
            leg.origin_location_name or str(leg.origin_location_id),
            leg.destination_location_name or str(leg.destination_location_id),
            duration_label(leg.duration),
            price_label(leg.price),
        )
    return table


def _errors_text(errors: list[ValidationError]) -> Text:
    text = Text()
    for e in errors:
        text.append(f"{e.code.value}", style="bold red")
        text.append(f"  {e.message}\n")
    return text


class RichFormatter:
    """Format engine results using Rich tables and panels."""

    def format_validation(self, report: ValidationReport) -> str:
        parts: list[str] = []

        summary = Text()
        summary.append("Status: ")
        if report.passed:
            summary.append("PASS", style="bold green")
        else:
            summary.append("FAIL", style="bold red")
        summary.append(f"\nLegs:   {len(report.legs)}\nErrors: {report.error_count}\n")
        parts.append(_render(Panel(summary, title="Itinerary Validation", border_style="cyan")))

        parts.append(_render(_legs_table("Legs", report.legs)))

        if report.errors:
            parts.append(
                _render(Panel(_errors_text(report.errors), title="Violations", border_style="red"))
            )
        return "\n".join(parts)

    def format_routes(self, options: list[RouteOption]) -> str:
        if not options:
            return _render(Text("No routes found.", style="yellow"))

        table = Table(title=f"Available Routes ({len(options)})", show_lines=True)
        table.add_column("#", style="dim", justify="right")
        table.add_column("Route", style="cyan", min_width=30)
        table.add_column("Stops")
        table.add_column("Duration", justify="right")
        table.add_column("Price", justify="right", style="bold green")

        for i, opt in enumerate(options, 1):
            table.add_row(
                str(i),
                route_path(opt),
                stops_label(opt.total_stops),
                duration_label(opt.total_duration),
                price_label(opt.total_price),
            )
        return _render(table)

    def format_route_detail(self, report: ValidationReport) -> str:
        if not report.passed:
            return _render(
                Panel(
                    _errors_text(report.errors),
                    title="Route Validation Errors",
                    border_style="red",
                )
            )

        option = RouteOption.from_legs(report.legs)
        text = Text()
        for title, leg in detail_sections(option):
            text.append(f"{title}:\n", style="bold cyan")
            text.append(f"  From: {leg.origin_location_name or leg.origin_location_id}\n")
            text.append(f"  To:   {leg.destination_location_name or leg.destination_location_id}\n")
            text.append(f"  Type: {leg.transportation_type.value}\n")
        text.append("\n")
        text.append(f"Total Stops:    {option.total_stops}\n")
        text.append(f"Total Duration: {duration_label(option.total_duration)}\n")
        text.append(f"Total Price:    {price_label(option.total_price)}", style="bold green")
        return _render(Panel(text, title="Route Details", border_style="green"))

    def format_errors(self, errors: list[ValidationError]) -> str:
        return _render(Panel(_errors_text(errors), title="Errors", border_style="red"))

    def format_locations(self, locations: list[Location]) -> str:
        table = Table(title=f"Locations ({len(locations)})")
        table.add_column("ID", justify="right")
        table.add_column("Name", style="cyan")
        table.add_column("Type")
        table.add_column("City")
        table.add_column("Country")
        table.add_column("Lat/Lon", style="dim")
        for loc in locations:
            coords = ""
            if loc.latitude is not None and loc.longitude is not None:
                coords = f"{loc.latitude:.4f}, {loc.longitude:.4f}"
            table.add_row(str(loc.id), loc.name, loc.type.value, loc.city, loc.country, coords)
        return _render(table)

    def format_legs(self, legs: list[TransportationLeg]) -> str:
        return _render(_legs_table(f"Transportations ({len(legs)})", legs))
