"""proximity_ranker: resolve an address with Nominatim and rank locations by distance to it."""

from .geocoding import AddressQuery, AddressResolver, Coordinate, NominatimClient
from .ranking import Candidate, RankingSession, SortMode
from .settings import Settings, get_settings

__all__ = [
    'AddressQuery',
    'AddressResolver',
    'Coordinate',
    'NominatimClient',
    'Candidate',
    'RankingSession',
    'SortMode',
    'Settings',
    'get_settings',
]
