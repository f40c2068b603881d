"""
- Models: Data structures (Coordinate, AddressQuery, SuggestionItem)
- Base classes: Abstract interfaces
- Normalizers: Address cleaning and country qualification
- Geocoders: Coordinate lookup implementations
- Cascade: Ordered fallback strategies per address
- Throttling: Pacing for API calls
- Suggestions: Debounced lookups where the newest request wins
"""

from .models import (
    Coordinate,
    AddressQuery,
    SuggestionItem,
)

from .base import (
    Normalizer,
    Geocoder,
    RateLimiter,
)

from .normalizers import (
    AddressCleaner,
    CountryQualifier,
    CityStateZip,
    parse_city_state_zip,
    clean,
    ensure_country_qualifier,
)

from .throttling import (
    FixedDelayPacer,
    NoOpRateLimiter,
)

from .geocoders import (
    NominatimClient,
)

from .cascade import (
    AddressResolver,
)

from .suggestions import (
    SuggestionFeed,
)

__all__ = [
    # Models
    "Coordinate",
    "AddressQuery",
    "SuggestionItem",
    # Base classes
    "Normalizer",
    "Geocoder",
    "RateLimiter",
    # Normalizers
    "AddressCleaner",
    "CountryQualifier",
    "CityStateZip",
    "parse_city_state_zip",
    "clean",
    "ensure_country_qualifier",
    # Throttling
    "FixedDelayPacer",
    "NoOpRateLimiter",
    # Geocoders
    "NominatimClient",
    # Cascade
    "AddressResolver",
    # Suggestions
    "SuggestionFeed",
]
