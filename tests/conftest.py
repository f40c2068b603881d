from __future__ import annotations

import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = REPO_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from proximity_ranker.geocoding.base import Geocoder
from proximity_ranker.geocoding.models import Coordinate
from proximity_ranker.settings import Settings


class FakeGeocoder(Geocoder):
    """Answers from lookup tables and records every call."""

    def __init__(self, freeform=None, structured=None, suggestions=None):
        self.freeform = dict(freeform or {})
        self.structured = list(structured or [])
        self.suggestions = dict(suggestions or {})
        self.calls = []

    def lookup_freeform(self, query, country_restricted=True):
        self.calls.append(("freeform", query))
        return self.freeform.get(query)

    def lookup_structured(self, street="", city="", state="", postal_code=""):
        fields = {"street": street, "city": city, "state": state, "postal_code": postal_code}
        fields = {k: v for k, v in fields.items() if v}
        self.calls.append(("structured", fields))
        for wanted, coord in self.structured:
            if wanted == fields:
                return coord
        return None

    def lookup_suggestions(self, query):
        self.calls.append(("suggestions", query))
        return self.suggestions.get(query, [])


class DummyResponse:
    def __init__(self, status_code=200, payload=None, bad_json=False):
        self.status_code = status_code
        self._payload = payload
        self._bad_json = bad_json

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._bad_json:
            raise ValueError("Expecting value")
        return self._payload


class DummySession:
    def __init__(self, response=None, error=None):
        self.response = response or DummyResponse(payload=[])
        self.error = error
        self.headers = {}
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        pass


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def springfield():
    return Coordinate(39.7817, -89.6501)
