"""itin CLI -- itinerary search and validation over a leg catalog.

Provides commands for searching routes between two locations, inspecting a
chosen route, validating itinerary files, listing the catalog, and managing
configuration.
"""

import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
import yaml
from pydantic import ValidationError as SchemaError

from itin.errors import CatalogError, ConfigError, SearchParameterError
from itin.models import Itinerary, RouteOption, SearchParameters

# ---------------------------------------------------------------------------
# App and sub-apps
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="itin",
    help="Itinerary engine -- search, inspect and validate multi-leg routes.",
    no_args_is_help=True,
)

config_app = typer.Typer(
    name="config",
    help="Manage itin configuration.",
    no_args_is_help=True,
)

app.add_typer(config_app, name="config")


# ---------------------------------------------------------------------------
# Global option types
# ---------------------------------------------------------------------------

JsonFlag = Annotated[bool, typer.Option("--json", help="Output as JSON.")]
PlainFlag = Annotated[bool, typer.Option("--plain", help="Output as plain text (no color).")]
VerboseFlag = Annotated[bool, typer.Option("--verbose", "-v", help="Verbose output.")]
QuietFlag = Annotated[bool, typer.Option("--quiet", "-q", help="Suppress non-essential output.")]
CatalogOpt = Annotated[
    Optional[str], typer.Option("--catalog", "-c", help="Catalog YAML file.")
]
ApiOpt = Annotated[Optional[str], typer.Option("--api", help="Catalog API base URL.")]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_format(json_flag: bool = False, plain_flag: bool = False) -> str:
    """Determine output format: json > plain > TTY auto-detect > rich."""
    if json_flag:
        return "json"
    if plain_flag:
        return "plain"
    # Auto-detect: use rich if stdout is a TTY, plain otherwise
    if sys.stdout.isatty():
        return "rich"
    return "plain"


def _setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging based on verbosity flags."""
    if quiet:
        logging.basicConfig(level=logging.ERROR)
    elif verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)


def _error_panel(message: str) -> None:
    """Print an error message, using Rich panel if available."""
    try:
        from rich.console import Console
        from rich.panel import Panel

        console = Console(stderr=True)
        console.print(Panel(message, title="Error", border_style="red"))
    except Exception:
        typer.echo(f"Error: {message}", err=True)


def _open_catalog(catalog: Optional[str], api: Optional[str]):
    """Pick a catalog source: flags, then config/env, then the bundled sample."""
    from itin.catalog import ApiCatalog, YamlCatalog, sample_catalog
    from itin.config import load_settings

    if catalog:
        return YamlCatalog(catalog)
    settings = load_settings()
    if api:
        return ApiCatalog(api, token=settings.api_token, timeout=settings.timeout_s)
    if settings.catalog_file:
        return YamlCatalog(settings.catalog_file)
    if settings.api_url:
        return ApiCatalog(settings.api_url, token=settings.api_token, timeout=settings.timeout_s)
    logging.getLogger(__name__).info("No catalog configured, using bundled sample catalog")
    return sample_catalog()


def _iter_catalog_legs(catalog: Optional[str], api: Optional[str]):
    """Yield catalog legs, opening the source only once iteration starts."""
    from itin.catalog import load_catalog

    yield from load_catalog(_open_catalog(catalog, api)).legs


def _read_yaml_mapping(file: str) -> dict:
    """Load a YAML (or JSON) file that must contain a mapping."""
    path = Path(file)

    if not path.exists():
        hint = ""
        if not path.is_absolute():
            hint = f" (looked in {Path.cwd()})"
        raise typer.BadParameter(
            f"File not found: {file}{hint}\n  Hint: Check the file path and try again."
        )

    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        msg = f"YAML parse error in {file}"
        if hasattr(exc, "problem_mark") and exc.problem_mark is not None:
            mark = exc.problem_mark
            msg += f" at line {mark.line + 1}, column {mark.column + 1}"
        if hasattr(exc, "problem") and exc.problem:
            msg += f": {exc.problem}"
        raise typer.BadParameter(msg)

    if not isinstance(raw, dict):
        raise typer.BadParameter(
            f"Expected a YAML mapping (dict) in {file}, got {type(raw).__name__}"
        )
    return raw


def _schema_errors(file: str, exc: SchemaError) -> typer.BadParameter:
    lines = [f"Validation errors in {file}:"]
    for err in exc.errors():
        loc = " -> ".join(str(x) for x in err["loc"])
        lines.append(f"  {loc}: {err['msg']}")
    return typer.BadParameter("\n".join(lines))


def _load_itinerary(file: str) -> Itinerary:
    """Load a YAML file with a ``legs`` list into an Itinerary."""
    raw = _read_yaml_mapping(file)
    try:
        return Itinerary(**raw)
    except SchemaError as exc:
        raise _schema_errors(file, exc)


def _load_route(file: str) -> RouteOption:
    """Load a route search record (beforeFlight/flight/afterFlight) from YAML or JSON."""
    raw = _read_yaml_mapping(file)
    try:
        return RouteOption.model_validate(raw)
    except SchemaError as exc:
        raise _schema_errors(file, exc)


def _run_search(
    origin: str,
    destination: str,
    catalog: Optional[str],
    api: Optional[str],
    sort_by: Optional[str],
    top_n: int,
    fmt,
) -> list[RouteOption]:
    """Search routes, printing rejected parameters and exiting 1 on them.

    The catalog is only opened once the parameters are accepted.
    """
    from itin.config import load_settings
    from itin.search.composer import search_routes

    if not sort_by:
        sort_by = load_settings().sort_by

    params = SearchParameters(origin_location_id=origin, destination_location_id=destination)
    try:
        return search_routes(
            _iter_catalog_legs(catalog, api),
            params,
            sort_by=sort_by or None,
            top_n=top_n or None,
        )
    except SearchParameterError as exc:
        typer.echo(fmt.format_errors(exc.errors))
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# Core commands
# ---------------------------------------------------------------------------


@app.command()
def search(
    origin: str = typer.Argument(help="Origin location id"),
    destination: str = typer.Argument(help="Destination location id"),
    catalog: CatalogOpt = None,
    api: ApiOpt = None,
    sort_by: Annotated[
        Optional[str], typer.Option("--sort", "-s", help="Sort by: price, duration, stops")
    ] = None,
    top_n: Annotated[int, typer.Option("--top", "-n", help="Max results (0 = all)")] = 0,
    json: JsonFlag = False,
    plain: PlainFlag = False,
    verbose: VerboseFlag = False,
    quiet: QuietFlag = False,
) -> None:
    """Search valid itineraries (1-3 legs, exactly one flight) between two locations."""
    _setup_logging(verbose, quiet)
    from itin.output import get_formatter

    fmt = get_formatter(_get_format(json, plain))
    try:
        options = _run_search(origin, destination, catalog, api, sort_by, top_n, fmt)
    except typer.Exit:
        raise
    except (CatalogError, ConfigError, ValueError) as exc:
        _error_panel(str(exc))
        raise typer.Exit(code=2)

    typer.echo(fmt.format_routes(options))
    if not options:
        raise typer.Exit(code=1)


@app.command()
def inspect(
    origin: Annotated[Optional[str], typer.Argument(help="Origin location id")] = None,
    destination: Annotated[Optional[str], typer.Argument(help="Destination location id")] = None,
    option: Annotated[int, typer.Argument(help="Result number to inspect (1-based)")] = 1,
    route: Annotated[
        Optional[str], typer.Option("--route", "-r", help="Route record file (YAML/JSON)")
    ] = None,
    catalog: CatalogOpt = None,
    api: ApiOpt = None,
    sort_by: Annotated[
        Optional[str], typer.Option("--sort", "-s", help="Sort by: price, duration, stops")
    ] = None,
    json: JsonFlag = False,
    plain: PlainFlag = False,
    verbose: VerboseFlag = False,
    quiet: QuietFlag = False,
) -> None:
    """Re-validate a route and show its details, or its violations."""
    _setup_logging(verbose, quiet)
    from itin.inspector import inspect_route
    from itin.output import get_formatter

    fmt = get_formatter(_get_format(json, plain))

    if route:
        selected = _load_route(route)
    else:
        if not origin or not destination:
            _error_panel("Give ORIGIN and DESTINATION, or --route FILE.")
            raise typer.Exit(code=2)
        try:
            options = _run_search(origin, destination, catalog, api, sort_by, 0, fmt)
        except typer.Exit:
            raise
        except (CatalogError, ConfigError, ValueError) as exc:
            _error_panel(str(exc))
            raise typer.Exit(code=2)
        if not 1 <= option <= len(options):
            _error_panel(f"Option {option} out of range: {len(options)} route(s) found.")
            raise typer.Exit(code=1)
        selected = options[option - 1]

    report = inspect_route(selected)
    typer.echo(fmt.format_route_detail(report))
    if not report.passed:
        raise typer.Exit(code=1)


@app.command()
def validate(
    file: str = typer.Argument(help="Path to itinerary YAML file (a 'legs' list)"),
    json: JsonFlag = False,
    plain: PlainFlag = False,
    verbose: VerboseFlag = False,
    quiet: QuietFlag = False,
) -> None:
    """Validate an itinerary against the flight, transfer and connection rules."""
    _setup_logging(verbose, quiet)
    itinerary = _load_itinerary(file)
    from itin.output import get_formatter
    from itin.validator import Validator

    report = Validator().validate(itinerary)
    fmt = get_formatter(_get_format(json, plain))
    typer.echo(fmt.format_validation(report))

    if not report.passed:
        raise typer.Exit(code=1)


@app.command()
def locations(
    catalog: CatalogOpt = None,
    api: ApiOpt = None,
    json: JsonFlag = False,
    plain: PlainFlag = False,
    verbose: VerboseFlag = False,
    quiet: QuietFlag = False,
) -> None:
    """List catalog locations."""
    _setup_logging(verbose, quiet)
    from itin.output import get_formatter

    try:
        items = _open_catalog(catalog, api).list_locations()
    except (CatalogError, ConfigError) as exc:
        _error_panel(str(exc))
        raise typer.Exit(code=2)
    typer.echo(get_formatter(_get_format(json, plain)).format_locations(items))


@app.command()
def legs(
    catalog: CatalogOpt = None,
    api: ApiOpt = None,
    json: JsonFlag = False,
    plain: PlainFlag = False,
    verbose: VerboseFlag = False,
    quiet: QuietFlag = False,
) -> None:
    """List catalog transportation legs."""
    _setup_logging(verbose, quiet)
    from itin.output import get_formatter

    try:
        items = _open_catalog(catalog, api).list_transportation_legs()
    except (CatalogError, ConfigError) as exc:
        _error_panel(str(exc))
        raise typer.Exit(code=2)
    typer.echo(get_formatter(_get_format(json, plain)).format_legs(items))


# ---------------------------------------------------------------------------
# Config commands
# ---------------------------------------------------------------------------


@config_app.command(name="show")
def config_show() -> None:
    """Print the resolved configuration."""
    from itin.config import config_path, load_settings

    try:
        settings = load_settings()
    except ConfigError as exc:
        _error_panel(str(exc))
        raise typer.Exit(code=2)

    typer.echo(f"# {config_path()}")
    for key, value in settings.model_dump().items():
        if key == "api_token" and value:
            value = "****"
        typer.echo(f"{key}: {value if value is not None else ''}")


@config_app.command(name="set")
def config_set(
    key: str = typer.Argument(help="Setting name (e.g. api_url, catalog_file)"),
    value: str = typer.Argument(help="New value"),
) -> None:
    """Store a setting in the config file."""
    from itin.config import config_path, save_setting

    try:
        save_setting(key, value)
    except ConfigError as exc:
        _error_panel(str(exc))
        raise typer.Exit(code=1)
    typer.echo(f"Saved {key} to {config_path()}.")
