from proximity_ranker.geocoding.cascade import AddressResolver
from proximity_ranker.geocoding.geocoders import NominatimClient
from proximity_ranker.geocoding.models import AddressQuery, Coordinate
from proximity_ranker.geocoding.throttling import NoOpRateLimiter
from proximity_ranker.locations import CandidateLoader
from proximity_ranker.ranking.session import RankingSession

from conftest import DummyResponse


class RoutingSession:
    """Answers Nominatim requests from a table keyed by the q parameter."""

    def __init__(self, answers):
        self.answers = answers
        self.headers = {}
        self.queries = []

    def get(self, url, params=None, timeout=None):
        self.queries.append(dict(params))
        q = params.get("q")
        if q in self.answers:
            lat, lon = self.answers[q]
            return DummyResponse(payload=[{"lat": str(lat), "lon": str(lon), "display_name": q}])
        if q is not None and "BLDG" in q:
            return DummyResponse(status_code=500, payload=None)
        return DummyResponse(payload=[])


def test_cleaned_address_resolves_without_later_fallbacks(settings):
    http = RoutingSession({"123 Main St, Springfield, IL 62704, USA": (39.8, -89.6)})
    resolver = AddressResolver(NominatimClient(session=http, settings=settings))

    coord = resolver.resolve_candidate_address(
        AddressQuery(freeform="123 Main St BLDG 2, Springfield, IL 62704")
    )

    assert coord == Coordinate(39.8, -89.6)
    assert [q["q"] for q in http.queries] == [
        "123 Main St BLDG 2, Springfield, IL 62704, USA",
        "123 Main St, Springfield, IL 62704, USA",
    ]


def test_records_to_ranked_view(settings):
    records = [
        {"name": "North School", "street": "10 Oak St", "address_line2": "Springfield, IL 62702"},
        {"name": "Fairgrounds", "street": "801 Sangamon Ave Bldg 4", "address_line2": "Springfield, IL 62702"},
        {"name": "Unknown Hall", "street": "", "address_line2": "Nowhere"},
    ]
    http = RoutingSession({
        "Springfield, IL, USA": (39.7817, -89.6501),
        "10 Oak St, Springfield, IL, 62702, USA": (39.83, -89.65),
        "801 Sangamon Ave, Springfield, IL, 62702, USA": (39.8, -89.65),
    })
    session = RankingSession(
        CandidateLoader.from_source("records", records=records),
        resolver=AddressResolver(NominatimClient(session=http, settings=settings)),
        pacer=NoOpRateLimiter(),
        settings=settings,
    )

    origin = session.resolve_origin(city="Springfield", state="IL")
    result = session.run_ranking_pass(origin)

    assert [c.name for c in result.nearest] == ["Fairgrounds", "North School"]
    assert [c.name for c in session.view()] == ["Fairgrounds", "North School", "Unknown Hall"]
    assert session.view()[-1].resolved_distance_miles is None
