"""
Interfaces shared by the address cleaners, the geocoding client and the pacer.

The cascade and the ranking session only talk to these, so tests swap in
fakes without touching the network or sleeping.
"""

from abc import ABC, abstractmethod
from typing import Optional, List

from .models import Coordinate, SuggestionItem


class Normalizer(ABC):
    """
    Rewrites an address string into a form the geocoder matches more easily.

    Implementations must be idempotent: normalizing twice gives the same
    result as normalizing once (e.g. "12 Elm St STE 4" -> "12 Elm St").
    """

    @abstractmethod
    def normalize(self, value: str) -> str:
        """
        Args:
            value: Raw address text (may be empty)

        Returns:
            Rewritten text, possibly empty
        """

    def normalize_batch(self, values: List[str]) -> List[str]:
        return [self.normalize(v) for v in values]


class Geocoder(ABC):
    """
    Resolves address text to a coordinate.

    Every lookup issues at most one request to the service and returns
    None (or an empty list) instead of raising when nothing usable comes back.
    """

    @abstractmethod
    def lookup_freeform(self, query: str, country_restricted: bool = True) -> Optional[Coordinate]:
        """Best single match for an unstructured query string."""

    @abstractmethod
    def lookup_structured(
        self,
        street: str = "",
        city: str = "",
        state: str = "",
        postal_code: str = "",
    ) -> Optional[Coordinate]:
        """Best single match for discrete address components."""

    @abstractmethod
    def lookup_suggestions(self, query: str) -> List[SuggestionItem]:
        """Several matches in the service's relevance order."""


class RateLimiter(ABC):
    """Called by the orchestrating loop after each resolution to space out requests."""

    @abstractmethod
    def wait(self) -> None:
        """Return once the next request may be sent."""
