"""JSON output formatter -- valid JSON suitable for piping to jq."""

from __future__ import annotations

import json

from itin.models import (
    Location,
    RouteOption,
    TransportationLeg,
    ValidationError,
    ValidationReport,
)


def _error_records(errors: list[ValidationError]) -> list[dict]:
    return [{"code": e.code.value, "message": e.message} for e in errors]


class JsonFormatter:
    """Format engine results as pretty-printed JSON (camelCase wire keys)."""

    def format_validation(self, report: ValidationReport) -> str:
        data = {
            "type": "validation_report",
            "passed": report.passed,
            "errorCount": report.error_count,
            "legs": [leg.model_dump(mode="json", by_alias=True) for leg in report.legs],
            "errors": _error_records(report.errors),
        }
        return json.dumps(data, indent=2)

    def format_routes(self, options: list[RouteOption]) -> str:
        data = {
            "type": "routes",
            "count": len(options),
            "routes": [o.model_dump(mode="json", by_alias=True) for o in options],
        }
        return json.dumps(data, indent=2)

    def format_route_detail(self, report: ValidationReport) -> str:
        if not report.passed:
            data = {
                "type": "route_detail",
                "passed": False,
                "errors": _error_records(report.errors),
            }
        else:
            option = RouteOption.from_legs(report.legs)
            data = {
                "type": "route_detail",
                "passed": True,
                "route": option.model_dump(mode="json", by_alias=True),
            }
        return json.dumps(data, indent=2)

    def format_errors(self, errors: list[ValidationError]) -> str:
        return json.dumps({"type": "errors", "errors": _error_records(errors)}, indent=2)

    def format_locations(self, locations: list[Location]) -> str:
        return json.dumps([loc.model_dump(mode="json") for loc in locations], indent=2)

    def format_legs(self, legs: list[TransportationLeg]) -> str:
        return json.dumps([leg.model_dump(mode="json", by_alias=True) for leg in legs], indent=2)
