from dataclasses import dataclass
from typing import Optional

from ..geocoding.models import AddressQuery


@dataclass
class Candidate:
    """
    One location to be ranked against the origin.

    ``id``, ``name`` and ``address`` are fixed at ingestion. Only the
    ranking session writes ``resolved_distance_miles``.
    """
    id: int
    name: str
    address: AddressQuery
    resolved_distance_miles: Optional[float] = None

    @property
    def address_text(self) -> str:
        return self.address.full_text

    @property
    def label(self) -> str:
        return self.name or self.address_text

    def is_resolved(self) -> bool:
        return self.resolved_distance_miles is not None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address_text,
            "distance_miles": (
                round(self.resolved_distance_miles, 1)
                if self.resolved_distance_miles is not None else None
            ),
        }
