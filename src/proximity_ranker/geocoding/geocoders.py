"""
Nominatim API wrapper implementing the Geocoder interface.

Uses the OpenStreetMap Nominatim /search endpoint for free-form and
structured address lookups.

Reference: https://nominatim.org/release-docs/latest/api/Search/
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from .base import Geocoder
from .models import Coordinate, SuggestionItem
from .normalizers import CountryQualifier
from ..settings import Settings, get_settings

logger = logging.getLogger(__name__)


class NominatimClient(Geocoder):
    """
    Nominatim search wrapper.

    Every lookup sends exactly one GET request. Network errors, non-2xx
    statuses, malformed bodies and empty result sets all come back as
    None (or [] for suggestions); nothing is raised to the caller.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        country_code: Optional[str] = "",
        country_name: Optional[str] = None,
        country_marker: Optional[str] = None,
        suggestion_limit: Optional[int] = None,
        session: Optional[requests.Session] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize Nominatim wrapper.

        Args:
            base_url: Search endpoint URL
            timeout: HTTP request timeout in seconds
            user_agent: User-Agent header (required by the Nominatim usage policy)
            country_code: ISO code used for ``countrycodes``; None disables
                the restriction, "" takes the configured default
            country_name: Country sent with structured lookups
            country_marker: Text appended to free-form queries lacking a
                country; defaults to the configured marker, or none when
                the country restriction is disabled
            suggestion_limit: Maximum number of suggestions returned
            session: Optional preconfigured requests session
            settings: Settings to take defaults from
        """
        cfg = settings or get_settings()
        self.base_url = base_url or cfg.nominatim_url
        self.timeout = timeout if timeout is not None else cfg.request_timeout_s
        self.country_code = cfg.country_code if country_code == "" else country_code
        self.country_name = country_name if country_name is not None else cfg.country_name
        self.suggestion_limit = suggestion_limit if suggestion_limit is not None else cfg.suggestion_limit
        if country_marker is None:
            # An unrestricted client does not pin free-form text to a country either
            country_marker = cfg.country_marker if self.country_code else ""
        self.qualifier = CountryQualifier(marker=country_marker)

        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
            "User-Agent": user_agent or cfg.user_agent,
        })

        logger.info(
            f"Initialized NominatimClient: {self.base_url}, "
            f"country={self.country_code or 'any'}, timeout={self.timeout}s"
        )

    def lookup_freeform(self, query: str, country_restricted: bool = True) -> Optional[Coordinate]:
        """
        Best single match for an unstructured query.

        Args:
            query: Address text as typed or scraped
            country_restricted: Restrict matches to the configured country

        Returns:
            Coordinate or None
        """
        if not query or not query.strip():
            return None

        params = {
            "q": query.strip(),
            "format": "json",
            "limit": "1",
            "addressdetails": "0",
        }
        if country_restricted and self.country_code:
            params["countrycodes"] = self.country_code

        return self._first_coordinate(self._search(params))

    def lookup_structured(
        self,
        street: str = "",
        city: str = "",
        state: str = "",
        postal_code: str = "",
    ) -> Optional[Coordinate]:
        """
        Best single match using discrete address components.

        Blank fields are left out of the request rather than sent empty.
        """
        fields = {
            "street": (street or "").strip(),
            "city": (city or "").strip(),
            "state": (state or "").strip(),
            "postalcode": "".join((postal_code or "").split()),
        }
        fields = {k: v for k, v in fields.items() if v}
        if not fields:
            return None

        params = {
            "format": "json",
            "limit": "1",
            "addressdetails": "0",
            **fields,
        }
        if self.country_code:
            params["countrycodes"] = self.country_code
        if self.country_code and self.country_name:
            params["country"] = self.country_name

        return self._first_coordinate(self._search(params))

    def lookup_suggestions(self, query: str) -> List[SuggestionItem]:
        """
        Up to ``suggestion_limit`` matches for interactive disambiguation.

        Order is the service's own relevance order. Entries without usable
        coordinates are skipped.
        """
        if not query or not query.strip() or self.suggestion_limit <= 0:
            return []

        params = {
            "q": self.qualifier.normalize(query),
            "format": "json",
            "limit": str(self.suggestion_limit),
            "addressdetails": "0",
        }
        if self.country_code:
            params["countrycodes"] = self.country_code

        items = []
        for row in self._search(params) or []:
            if not isinstance(row, dict):
                continue
            coord = Coordinate.parse(row.get("lat"), row.get("lon"))
            if coord is None:
                continue
            items.append(SuggestionItem(label=str(row.get("display_name") or ""), coordinate=coord))
        return items[: self.suggestion_limit]

    def _search(self, params: Dict[str, str]) -> Optional[List[Any]]:
        """
        Send one search request.

        Returns:
            The decoded JSON array, or None on any failure
        """
        logger.debug(f"Nominatim search: {params}")
        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"Nominatim request failed: {e}")
            return None

        if not response.ok:
            logger.warning(f"Nominatim returned HTTP {response.status_code} for {params}")
            return None

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(f"Nominatim returned malformed JSON: {e}")
            return None

        if not isinstance(data, list):
            logger.warning(f"Unexpected Nominatim payload type: {type(data).__name__}")
            return None
        return data

    @staticmethod
    def _first_coordinate(data: Optional[List[Any]]) -> Optional[Coordinate]:
        """The first array element is the service's best match."""
        if not data or not isinstance(data[0], dict):
            return None
        return Coordinate.parse(data[0].get("lat"), data[0].get("lon"))

    def close(self) -> None:
        self.session.close()
