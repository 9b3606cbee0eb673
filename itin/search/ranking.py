"""Ranking for composed route options."""

from __future__ import annotations

from itin.models import RouteOption

_SORT_KEYS = {
    "price": lambda o: o.total_price,
    "duration": lambda o: o.total_duration,
    "stops": lambda o: o.total_stops,
}

SORT_CHOICES = tuple(_SORT_KEYS)


def rank_routes(
    options: list[RouteOption],
    sort_by: str = "price",
    top_n: int | None = None,
) -> list[RouteOption]:
    """Sort ascending by the chosen aggregate (stable). Apply top_n limit."""
    try:
        key = _SORT_KEYS[sort_by.lower()]
    except KeyError:
        valid = ", ".join(SORT_CHOICES)
        raise ValueError(f"Unknown sort key: {sort_by!r}. Valid: {valid}")

    # Stable sort: ties keep traversal order
    ranked = sorted(options, key=key)

    if top_n is not None and top_n > 0:
        ranked = ranked[:top_n]

    return ranked
