"""Itinerary composition: enumerate leg sequences between two locations.

Treats the catalog as a directed multigraph (nodes are location ids, edges
are legs) and:
1. Builds an adjacency map keyed by origin location id
2. Enumerates simple paths of 1..MAX_LEGS legs by bounded depth-first search
3. Runs each path through the Validator and drops any with violations
4. Aggregates stops, duration and price for the survivors
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable, Iterator, Optional

from itin.models import RouteOption, SearchParameters, TransportationLeg
from itin.rules.flights import MAX_LEGS
from itin.search.params import parse_search_parameters
from itin.validator import Validator

logger = logging.getLogger(__name__)


def build_adjacency(
    legs: Iterable[TransportationLeg],
) -> dict[int, list[TransportationLeg]]:
    """Group legs by origin location id, preserving catalog order."""
    adjacency: dict[int, list[TransportationLeg]] = defaultdict(list)
    for leg in legs:
        adjacency[leg.origin_location_id].append(leg)
    return adjacency


def enumerate_paths(
    adjacency: dict[int, list[TransportationLeg]],
    origin: int,
    destination: int,
    max_legs: int = MAX_LEGS,
) -> Iterator[list[TransportationLeg]]:
    """Yield every simple path from origin to destination of 1..max_legs legs.

    A path never revisits a location, so it stops as soon as it reaches the
    destination.
    """
    path: list[TransportationLeg] = []
    visited = {origin}

    def _walk(location: int) -> Iterator[list[TransportationLeg]]:
        if len(path) == max_legs:
            return
        for leg in adjacency.get(location, ()):
            nxt = leg.destination_location_id
            if nxt in visited:
                continue
            path.append(leg)
            if nxt == destination:
                yield list(path)
            else:
                visited.add(nxt)
                yield from _walk(nxt)
                visited.discard(nxt)
            path.pop()

    yield from _walk(origin)


def compose(
    catalog_legs: Optional[Iterable[TransportationLeg]],
    origin: int,
    destination: int,
    validator: Optional[Validator] = None,
) -> list[RouteOption]:
    """Compose every valid itinerary from origin to destination.

    Every returned option passes Validator().validate() with no errors.
    An empty or absent catalog yields no options.

    Args:
        catalog_legs: All known transportation legs.
        origin: Origin location id.
        destination: Destination location id.
        validator: Validator to use (a fresh one if None).

    Returns:
        Route options in traversal order.
    """
    if not catalog_legs:
        return []
    if validator is None:
        validator = Validator()

    adjacency = build_adjacency(catalog_legs)
    options: list[RouteOption] = []
    candidates = 0

    for path in enumerate_paths(adjacency, origin, destination):
        candidates += 1
        report = validator.validate(path)
        if not report.passed:
            logger.debug(
                "Rejected %s: %s",
                " | ".join(str(leg.id) for leg in path),
                ", ".join(e.code.value for e in report.errors),
            )
            continue
        options.append(RouteOption.from_legs(path))

    logger.debug(
        "Composed %d/%d candidate paths from %s to %s",
        len(options),
        candidates,
        origin,
        destination,
    )
    return options


def search_routes(
    catalog_legs: Optional[Iterable[TransportationLeg]],
    params: SearchParameters,
    sort_by: Optional[str] = None,
    top_n: Optional[int] = None,
    validator: Optional[Validator] = None,
) -> list[RouteOption]:
    """Full search: validate parameters, compose, then optionally rank.

    Raises SearchParameterError before any composition if the parameters
    are rejected.
    """
    origin, destination = parse_search_parameters(params)
    options = compose(catalog_legs, origin, destination, validator=validator)
    if sort_by is None:
        return options[:top_n] if top_n else options

    from itin.search.ranking import rank_routes

    return rank_routes(options, sort_by=sort_by, top_n=top_n)
