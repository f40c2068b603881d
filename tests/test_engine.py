import pytest

from proximity_ranker.geocoding.models import AddressQuery
from proximity_ranker.ranking.candidates import Candidate
from proximity_ranker.ranking.engine import SortMode, filter_candidates, top_nearest, view


def make(idx, name, distance=None, city="Springfield"):
    return Candidate(
        id=idx,
        name=name,
        address=AddressQuery(street=f"{idx} Main St", city=city, state="IL"),
        resolved_distance_miles=distance,
    )


@pytest.fixture
def candidates():
    return [
        make(0, "Library", 5.2),
        make(1, "city hall", 1.1),
        make(2, "Armory", None, city="Chatham"),
        make(3, "Fire Station", 3.4),
    ]


def distances(rows):
    return [c.resolved_distance_miles for c in rows]


def test_distance_ascending_puts_unresolved_last(candidates):
    assert distances(view(candidates, "distance-asc", "")) == [1.1, 3.4, 5.2, None]


def test_distance_descending_puts_unresolved_last(candidates):
    assert distances(view(candidates, SortMode.DISTANCE_DESC)) == [5.2, 3.4, 1.1, None]


def test_name_sort_ignores_case(candidates):
    assert [c.name for c in view(candidates)] == ["Armory", "city hall", "Fire Station", "Library"]
    assert [c.name for c in view(candidates, "name-desc")] == ["Library", "Fire Station", "city hall", "Armory"]


def test_sort_is_stable_for_ties():
    rows = [make(0, "B", 2.0), make(1, "A", 2.0), make(2, "C", None), make(3, "D", None)]
    assert [c.id for c in view(rows, "distance-asc")] == [0, 1, 2, 3]
    assert [c.id for c in view(rows, "distance-desc")] == [0, 1, 2, 3]
    same_name = [make(0, "Same"), make(1, "Same"), make(2, "Same")]
    assert [c.id for c in view(same_name, "name-desc")] == [0, 1, 2]


def test_filter_matches_name_or_address(candidates):
    assert [c.id for c in filter_candidates(candidates, "CITY")] == [1]
    assert [c.id for c in filter_candidates(candidates, "chatham")] == [2]
    assert [c.id for c in filter_candidates(candidates, "  ")] == [0, 1, 2, 3]


def test_filter_then_sort(candidates):
    rows = view(candidates, "distance-asc", "springfield")
    assert [c.id for c in rows] == [1, 3, 0]


def test_unmatched_filter_gives_empty_view_without_side_effects(candidates):
    before = [(c.id, c.resolved_distance_miles) for c in candidates]
    assert view(candidates, "distance-asc", "zzz-no-match") == []
    assert [(c.id, c.resolved_distance_miles) for c in candidates] == before


def test_top_nearest(candidates):
    assert distances(top_nearest(candidates, k=3)) == [1.1, 3.4, 5.2]
    assert distances(top_nearest(candidates, k=1)) == [1.1]
    assert top_nearest(candidates, k=0) == []


def test_top_nearest_with_few_resolved():
    rows = [make(0, "A", None), make(1, "B", 7.0)]
    assert [c.id for c in top_nearest(rows)] == [1]


def test_unknown_sort_mode(candidates):
    with pytest.raises(ValueError, match="Unknown sort mode"):
        view(candidates, "by-color")


def test_name_sort_folds_accents():
    rows = [make(0, "Zeta Park"), make(1, "Émile Hall"), make(2, "Eagle School"), make(3, "Emile Hall")]
    assert [c.name for c in view(rows, "name-asc")] == ["Eagle School", "Emile Hall", "Émile Hall", "Zeta Park"]
    assert [c.name for c in view(rows, "name-desc")] == ["Zeta Park", "Émile Hall", "Emile Hall", "Eagle School"]
