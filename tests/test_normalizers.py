import pytest

from proximity_ranker.geocoding.normalizers import (
    AddressCleaner,
    CountryQualifier,
    clean,
    ensure_country_qualifier,
    parse_city_state_zip,
)


@pytest.mark.parametrize("raw, expected", [
    ("123 Main St BLDG 2, Springfield, IL 62704", "123 Main St, Springfield, IL 62704"),
    ("500 Oak Ave Suite 200", "500 Oak Ave"),
    ("500 Oak Ave STE. B-4, Dover", "500 Oak Ave, Dover"),
    ("12 Elm St Apt 3B", "12 Elm St"),
    ("12 Elm St #4, Salem", "12 Elm St, Salem"),
    ("  1   Pine   Rd  ", "1 Pine Rd"),
    ("1 Pine Rd, , Salem,", "1 Pine Rd, Salem"),
    (", 1 Pine Rd", "1 Pine Rd"),
    ("", ""),
])
def test_clean(raw, expected):
    assert clean(raw) == expected


def test_clean_keeps_words_that_start_with_a_qualifier():
    assert clean("40 Stevens Rd, Unityville") == "40 Stevens Rd, Unityville"


@pytest.mark.parametrize("raw", [
    "123 Main St BLDG 2, Springfield, IL 62704",
    "A UNIT SUITE C",
    "x ,, , y SUITE , UNIT 2 ,",
    "#5 Main St",
    "Hall\tAPT 7 ,,Dover",
    "   ",
])
def test_clean_is_idempotent(raw):
    once = clean(raw)
    assert clean(once) == once


@pytest.mark.parametrize("raw, expected", [
    ("Springfield, IL", "Springfield, IL, USA"),
    ("Springfield, IL, USA", "Springfield, IL, USA"),
    ("Springfield, IL, usa", "Springfield, IL, usa"),
    ("Springfield IL U.S.", "Springfield IL U.S."),
    ("Springfield, United States", "Springfield, United States"),
    ("Busan", "Busan, USA"),
    ("", ""),
])
def test_ensure_country_qualifier(raw, expected):
    assert ensure_country_qualifier(raw) == expected


def test_country_qualifier_is_idempotent():
    q = CountryQualifier()
    once = q.normalize("Austin, TX 78701")
    assert q.normalize(once) == once


def test_country_qualifier_needs_whole_word():
    q = CountryQualifier()
    assert not q.has_country("Bogus Street, Columbus")
    assert q.has_country("Columbus, OH, US")


def test_custom_marker_counts_as_present():
    q = CountryQualifier(marker="Canada", synonyms=["CA"])
    assert q.normalize("Toronto") == "Toronto, Canada"
    assert q.normalize("Toronto, Canada") == "Toronto, Canada"


def test_parse_city_state_zip():
    parsed = parse_city_state_zip("Springfield, IL 62704")
    assert parsed.city == "Springfield"
    assert parsed.state == "IL"
    assert parsed.zip == "62704"


def test_parse_state_zip_only():
    assert parse_city_state_zip("IL 62704") == ("", "IL", "62704")


def test_parse_normalizes_state_case_and_plus4():
    assert parse_city_state_zip("Austin, tx 78701-1234") == ("Austin", "TX", "78701-1234")


def test_parse_city_state_without_zip():
    assert parse_city_state_zip("Salem, or") == ("Salem", "OR", "")


def test_parse_unrecognized_line_is_city():
    assert parse_city_state_zip("Somewhere near the lake") == ("Somewhere near the lake", "", "")
    assert parse_city_state_zip("") == ("", "", "")


def test_cleaner_batch():
    assert AddressCleaner().normalize_batch(["1 A St Unit 2", "3 B St"]) == ["1 A St", "3 B St"]
