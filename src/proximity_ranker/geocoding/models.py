"""
Core data models for geocoding.

These immutable, frozen dataclasses serve as the contract between
the normalizers, the geocoding client and the resolution cascade.
"""

from dataclasses import dataclass
from typing import Any, Optional, List


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 point returned by the geocoding service."""
    latitude: float
    longitude: float

    def is_valid(self) -> bool:
        """Check that both values are within geographic ranges."""
        try:
            return -90 <= self.latitude <= 90 and -180 <= self.longitude <= 180
        except TypeError:
            return False

    @classmethod
    def parse(cls, lat: Any, lon: Any) -> Optional["Coordinate"]:
        """
        Build a coordinate from raw service values.

        Nominatim returns coordinates as strings. Anything that does not
        convert to an in-range float pair yields None.
        """
        try:
            coord = cls(float(lat), float(lon))
        except (TypeError, ValueError):
            return None
        return coord if coord.is_valid() else None


@dataclass(frozen=True)
class AddressQuery:
    """
    A postal address to resolve.

    Any field may be blank. ``freeform`` overrides the text derived from
    the discrete fields (used when the source only has a single line, or
    only a place name).
    """
    street: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    freeform: str = ""

    def parts(self) -> List[str]:
        """Non-empty discrete fields, stripped, in postal order."""
        values = [self.street, self.city, self.state, self.postal_code]
        return [v.strip() for v in values if v and v.strip()]

    @property
    def full_text(self) -> str:
        if self.freeform and self.freeform.strip():
            return self.freeform.strip()
        return ", ".join(self.parts())

    def has_locality(self) -> bool:
        """True when any of city/state/postal code is present."""
        return any(v and v.strip() for v in (self.city, self.state, self.postal_code))

    def is_empty(self) -> bool:
        return not self.full_text


@dataclass(frozen=True)
class SuggestionItem:
    """One entry of an interactive multi-result lookup."""
    label: str
    coordinate: Coordinate
