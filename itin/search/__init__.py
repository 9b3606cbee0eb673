"""Route search pipeline - parameter checks, composition, and ranking."""

from itin.search.composer import compose, search_routes
from itin.search.params import check_search_parameters, parse_search_parameters
from itin.search.ranking import rank_routes

__all__ = [
    "check_search_parameters",
    "compose",
    "parse_search_parameters",
    "rank_routes",
    "search_routes",
]
