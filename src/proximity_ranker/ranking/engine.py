"""
Filtering, sorting and top-K extraction over ranked candidates.

All functions are pure: they return new lists and never touch the
candidates' distances.
"""

from __future__ import annotations

import locale
import unicodedata
from enum import StrEnum
from typing import Iterable, List

from .candidates import Candidate


class SortMode(StrEnum):
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"
    DISTANCE_ASC = "distance-asc"
    DISTANCE_DESC = "distance-desc"

    @classmethod
    def parse(cls, value: "SortMode | str") -> "SortMode":
        try:
            return cls(value)
        except ValueError as e:
            raise ValueError(
                f"Unknown sort mode '{value}'. "
                f"Known modes: {[m.value for m in cls]}"
            ) from e


DEFAULT_SORT_MODE = SortMode.NAME_ASC


def _name_key(candidate: Candidate) -> tuple[str, str]:
    """
    Collation key: accents are ignored first and only break ties.

    "Émile" sorts with "Emile" regardless of the process locale; when
    LC_COLLATE is set, strxfrm refines the order further.
    """
    name = (candidate.name or "").casefold()
    base = "".join(
        ch for ch in unicodedata.normalize("NFKD", name) if not unicodedata.combining(ch)
    )
    return locale.strxfrm(base), locale.strxfrm(name)


def filter_candidates(candidates: Iterable[Candidate], filter_text: str = "") -> List[Candidate]:
    """Case-insensitive substring match on name or address; blank keeps all."""
    q = (filter_text or "").strip().casefold()
    if not q:
        return list(candidates)
    return [
        c for c in candidates
        if q in (c.name or "").casefold() or q in c.address_text.casefold()
    ]


def view(
    candidates: Iterable[Candidate],
    sort_mode: SortMode | str = DEFAULT_SORT_MODE,
    filter_text: str = "",
) -> List[Candidate]:
    """
    Filter, then sort.

    Sorting is stable with respect to input order. Candidates without a
    resolved distance always come last in both distance directions.
    """
    mode = SortMode.parse(sort_mode)
    rows = filter_candidates(candidates, filter_text)

    if mode is SortMode.NAME_ASC:
        return sorted(rows, key=_name_key)
    if mode is SortMode.NAME_DESC:
        return sorted(rows, key=_name_key, reverse=True)
    if mode is SortMode.DISTANCE_ASC:
        return sorted(rows, key=lambda c: (
            c.resolved_distance_miles is None,
            c.resolved_distance_miles if c.resolved_distance_miles is not None else 0.0,
        ))
    return sorted(rows, key=lambda c: (
        c.resolved_distance_miles is None,
        -c.resolved_distance_miles if c.resolved_distance_miles is not None else 0.0,
    ))


def top_nearest(candidates: Iterable[Candidate], k: int = 3) -> List[Candidate]:
    """The k closest resolved candidates, nearest first."""
    if k <= 0:
        return []
    resolved = [c for c in candidates if c.resolved_distance_miles is not None]
    resolved.sort(key=lambda c: c.resolved_distance_miles)
    return resolved[:k]
