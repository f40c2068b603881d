"""Distance ranking over resolved candidates."""

from .candidates import Candidate
from .distance import great_circle_distance_miles, distance_between, EARTH_RADIUS_MILES
from .engine import SortMode, DEFAULT_SORT_MODE, filter_candidates, view, top_nearest
from .session import RankingSession, RankingPassResult, CancellationToken

__all__ = [
    'Candidate',
    'great_circle_distance_miles',
    'distance_between',
    'EARTH_RADIUS_MILES',
    'SortMode',
    'DEFAULT_SORT_MODE',
    'filter_candidates',
    'view',
    'top_nearest',
    'RankingSession',
    'RankingPassResult',
    'CancellationToken',
]
