"""
Address text normalizers.

Provides implementations for cleaning free-text address lines before
they are sent to the geocoding service, plus a small heuristic splitter
for "City, ST ZIP" lines.
"""

import re
from typing import Iterable, List, NamedTuple, Optional

from .base import Normalizer

# Unit/suite qualifiers that confuse the geocoder. Each is removed together
# with the token that follows it ("STE 200", "BLDG B-2", "#4").
UNIT_QUALIFIERS: List[str] = ["BLDG", "BUILDING", "STE", "SUITE", "UNIT", "APT"]

_RE_UNIT = re.compile(
    r"\s+(?:" + "|".join(UNIT_QUALIFIERS) + r")\b\.?\s*[\dA-Z-]*"
    r"|\s*#\s*[\dA-Z-]*",
    re.I,
)
_RE_SPACE_BEFORE_COMMA = re.compile(r"\s+,")
_RE_REPEATED_COMMA = re.compile(r",(?:\s*,)+")
_RE_EDGE_COMMA = re.compile(r"^[\s,]+|[\s,]+$")

COUNTRY_SYNONYMS: List[str] = [
    "United States of America",
    "United States",
    "U.S.A.",
    "U.S.A",
    "U.S.",
    "U.S",
    "USA",
    "US",
]

_RE_CITY_STATE_ZIP = re.compile(r"^(.+?),\s*([A-Z]{2})\s*(\d{5}(?:-\d{4})?)?$", re.I)
_RE_STATE_ZIP = re.compile(r"^([A-Z]{2})\s*(\d{5}(?:-\d{4})?.*)$", re.I)


def _collapse_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


class AddressCleaner(Normalizer):
    """
    Strips unit/suite/building qualifiers from an address line.

    Handles:
    - Qualifier tokens and the token after them (SUITE 200, APT. 3B, #12)
    - Whitespace normalization
    - Doubled and dangling comma separators
    """

    def normalize(self, value: str) -> str:
        if not value or not value.strip():
            return ""

        t = _RE_UNIT.sub("", value.strip())
        t = _collapse_whitespace(t)
        t = _RE_SPACE_BEFORE_COMMA.sub(",", t)
        t = _RE_REPEATED_COMMA.sub(",", t)
        t = _RE_EDGE_COMMA.sub("", t)
        return t.strip()


class CountryQualifier(Normalizer):
    """
    Appends a country marker unless the text already names the country.

    Matching is case-insensitive and whole-word against COUNTRY_SYNONYMS
    (plus the configured marker itself).
    """

    def __init__(self, marker: str = "USA", synonyms: Optional[Iterable[str]] = None):
        self.marker = marker
        names = list(synonyms) if synonyms is not None else list(COUNTRY_SYNONYMS)
        if marker and marker not in names:
            names.append(marker)
        # Longest first so "U.S.A." is not cut short by "U.S"
        names.sort(key=len, reverse=True)
        alternation = "|".join(re.escape(n) for n in names)
        self._pattern = re.compile(rf"(?<![\w.])(?:{alternation})(?!\w)", re.I)

    def has_country(self, value: str) -> bool:
        return bool(self._pattern.search(value or ""))

    def normalize(self, value: str) -> str:
        t = (value or "").strip()
        if not t or not self.marker or self.has_country(t):
            return t
        return f"{t}, {self.marker}"


class CityStateZip(NamedTuple):
    city: str
    state: str
    zip: str


def parse_city_state_zip(line: str) -> CityStateZip:
    """
    Split a "City, ST 12345" or "ST 12345" line into its parts.

    This is a best-effort heuristic: anything that matches neither shape
    comes back as the city with empty state and zip.

    Examples:
        parse_city_state_zip("Springfield, IL 62704")
        → CityStateZip(city="Springfield", state="IL", zip="62704")

        parse_city_state_zip("IL 62704")
        → CityStateZip(city="", state="IL", zip="62704")
    """
    s = (line or "").strip()

    match = _RE_CITY_STATE_ZIP.match(s)
    if match:
        return CityStateZip(
            city=match.group(1).strip(),
            state=match.group(2).strip().upper(),
            zip=(match.group(3) or "").strip(),
        )

    match = _RE_STATE_ZIP.match(s)
    if match:
        return CityStateZip(
            city="",
            state=match.group(1).upper(),
            zip=_collapse_whitespace(match.group(2)),
        )

    return CityStateZip(city=s, state="", zip="")


_default_cleaner = AddressCleaner()
_default_qualifier = CountryQualifier()


def clean(text: str) -> str:
    """Module-level shortcut for AddressCleaner().normalize()."""
    return _default_cleaner.normalize(text)


def ensure_country_qualifier(text: str) -> str:
    """Module-level shortcut for CountryQualifier().normalize()."""
    return _default_qualifier.normalize(text)
