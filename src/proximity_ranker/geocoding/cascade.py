"""
Resolution cascade: ordered fallback strategies per address.

Scraped candidate addresses are noisy single lines, so the full string is
tried first and structured decomposition is a fallback. A user-entered
origin already has discrete fields, so its cascade is structured-first.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from .base import Geocoder
from .models import AddressQuery, Coordinate
from .normalizers import AddressCleaner, CountryQualifier

logger = logging.getLogger(__name__)

Strategy = tuple[str, Callable[[], Optional[Coordinate]]]


def _join(*parts: str) -> str:
    return ", ".join(p.strip() for p in parts if p and p.strip())


class AddressResolver:
    """
    Runs the fallback strategies against a Geocoder.

    The first strategy that yields a coordinate wins. Strategies are not
    retried; a transport failure counts the same as "not found". Strategies
    whose input would be empty are skipped without a request.
    """

    def __init__(
        self,
        geocoder: Geocoder,
        cleaner: Optional[AddressCleaner] = None,
        qualifier: Optional[CountryQualifier] = None,
    ):
        self.geocoder = geocoder
        self.cleaner = cleaner or AddressCleaner()
        # Follow the client's configured country marker when it has one
        self.qualifier = qualifier or getattr(geocoder, "qualifier", None) or CountryQualifier()

    def _freeform(self, text: str) -> Optional[Coordinate]:
        return self.geocoder.lookup_freeform(self.qualifier.normalize(text), country_restricted=True)

    def _run(self, label: str, strategies: Iterable[Strategy]) -> Optional[Coordinate]:
        for name, attempt in strategies:
            result = attempt()
            if result is not None:
                logger.debug(f"Resolved {label!r} via {name}: {result}")
                return result
            logger.debug(f"Strategy {name} found nothing for {label!r}")

        logger.info(f"Could not resolve {label!r}")
        return None

    def resolve_candidate_address(self, address: AddressQuery) -> Optional[Coordinate]:
        """
        Resolve a scraped candidate address.

        Order: full text, cleaned text, structured fields,
        "city, state, zip", "city, state".
        """
        full = address.full_text
        if not full:
            return None

        city = address.city.strip()
        state = address.state.strip()
        postal_code = address.postal_code.strip()

        def strategies() -> Iterable[Strategy]:
            yield "full_text", lambda: self._freeform(full)

            cleaned = self.cleaner.normalize(full)
            if cleaned and cleaned != full:
                yield "cleaned_text", lambda: self._freeform(cleaned)

            if address.has_locality():
                yield "structured", lambda: self.geocoder.lookup_structured(
                    street=self.cleaner.normalize(address.street),
                    city=city,
                    state=state,
                    postal_code=postal_code,
                )

            city_state_zip = _join(city, state, postal_code)
            if city_state_zip:
                yield "city_state_zip", lambda: self._freeform(city_state_zip)

            if city and state:
                yield "city_state", lambda: self._freeform(_join(city, state))

        return self._run(full, strategies())

    def resolve_origin_address(
        self,
        street: str = "",
        city: str = "",
        state: str = "",
        postal_code: str = "",
    ) -> Optional[Coordinate]:
        """
        Resolve a user-entered origin.

        Order: structured with all fields, structured without street,
        "city, state, zip", "city, state", postal code only, full joined text.
        """
        street = (street or "").strip()
        city = (city or "").strip()
        state = (state or "").strip()
        postal_code = (postal_code or "").strip()

        full = _join(street, city, state, postal_code)
        if not full:
            return None

        def strategies() -> Iterable[Strategy]:
            yield "structured", lambda: self.geocoder.lookup_structured(
                street=street, city=city, state=state, postal_code=postal_code,
            )

            if street and (city or state or postal_code):
                yield "structured_no_street", lambda: self.geocoder.lookup_structured(
                    city=city, state=state, postal_code=postal_code,
                )

            city_state_zip = _join(city, state, postal_code)
            if city_state_zip:
                yield "city_state_zip", lambda: self._freeform(city_state_zip)

            if city and state:
                yield "city_state", lambda: self._freeform(_join(city, state))

            if postal_code:
                yield "postal_code", lambda: self.geocoder.lookup_structured(postal_code=postal_code)

            yield "full_text", lambda: self._freeform(full)

        return self._run(full, strategies())
