import pytest
from sizefinder.schemas.size import SIZE_TOKENS
from sizefinder.services.patterns import (
    CHEST_KEYWORDS,
    LENGTH_KEYWORDS,
    find_measurement,
    find_size_tokens,
    normalize_size_option,
)


def test_find_measurement_with_unit():
    assert find_measurement("Chest: 40 inches", CHEST_KEYWORDS) == 40.0
    assert find_measurement('CHEST 41.5"', CHEST_KEYWORDS) == 41.5


def test_find_measurement_keyword_priority_not_text_position():
    text = "bust 36, chest 38"
    # Whichever keyword is listed first wins, even if the other appears earlier
    assert find_measurement(text, ["bust", "chest"]) == 36.0
    assert find_measurement(text, ["chest", "bust"]) == 38.0


def test_find_measurement_falls_through_keywords():
    assert find_measurement("Body length 28 in", ["height", "length"]) == 28.0
    assert find_measurement("Height: 70", LENGTH_KEYWORDS) == 70.0


def test_find_measurement_missing():
    assert find_measurement("Chest size: see chart", CHEST_KEYWORDS) is None
    assert find_measurement("Machine wash cold", CHEST_KEYWORDS) is None
    assert find_measurement("", CHEST_KEYWORDS) is None


def test_find_measurement_passes_implausible_values():
    assert find_measurement("chest 999", CHEST_KEYWORDS) == 999.0


@pytest.mark.parametrize("token", SIZE_TOKENS)
def test_normalize_size_option_idempotent(token):
    assert normalize_size_option(token) == token
    assert normalize_size_option(normalize_size_option(token)) == token


@pytest.mark.parametrize("text,expected", [
    ("Size M", "M"),
    ("xl", "XL"),
    ("XXL / 44", "XXL"),
    (" s ", "S"),
    ("Small", None),
    ("Medium", None),
    ("Choose a size", None),
    ("", None),
])
def test_normalize_size_option(text, expected):
    assert normalize_size_option(text) == expected


def test_find_size_tokens_dedupes_in_order():
    assert find_size_tokens("S M L m s") == ["S", "M", "L"]
    assert find_size_tokens("XS-XL available") == ["XS", "XL"]
    assert find_size_tokens("no sizes here") == []
