from __future__ import annotations

from decimal import Decimal

import pytest

from album_catalog.domain.errors import ValidationError
from album_catalog.domain.models import Album, Criteria, DispatchResult, PriceRange


def test_criteria_from_form_treats_blank_fields_as_absent():
    criteria = Criteria.from_form({"title": "  ", "artist": "", "price": ""})
    assert criteria.title is None
    assert criteria.artist is None
    assert criteria.price is None
    assert criteria.is_empty


def test_criteria_from_form_strips_and_normalizes():
    criteria = Criteria.from_form({"title": " Jeru ", "artist": "Gerry Mulligan", "price": "17.990000"})
    assert criteria.title == "Jeru"
    assert criteria.artist == "Gerry Mulligan"
    assert criteria.price == Decimal("17.99")
    assert criteria.has_price


def test_criteria_from_form_missing_keys():
    assert Criteria.from_form({}).is_empty


def test_zero_price_is_not_a_filter():
    criteria = Criteria.from_form({"price": "0"})
    assert criteria.price == Decimal("0.00")
    assert not criteria.has_price
    assert criteria.is_empty


def test_criteria_from_form_rejects_malformed_price():
    with pytest.raises(ValidationError, match="not a number"):
        Criteria.from_form({"title": "Jeru", "price": "seventeen"})


def test_criteria_is_immutable():
    criteria = Criteria(title="Jeru")
    with pytest.raises(Exception):
        criteria.title = "Other"  # type: ignore[misc]


def test_criteria_log_fields():
    criteria = Criteria.from_form({"artist": "John Coltrane", "price": "56.99"})
    assert criteria.as_log_fields() == {"title": None, "artist": "John Coltrane", "price": "56.99"}


def test_album_rounds_price():
    album = Album(id=1, title="Blue Train", artist="John Coltrane", price=Decimal("56.990"))
    assert album.price == Decimal("56.99")


def test_album_requires_title_and_artist():
    with pytest.raises(Exception):
        Album(id=1, title="", artist="John Coltrane", price=Decimal("1.00"))


@pytest.mark.parametrize(
    ("prices", "expected"),
    [
        ([Decimal("1.50"), Decimal("17.99"), Decimal("56.99")], (1, 57)),
        ([Decimal("3.00")], (3, 3)),
        ([], (0, 0)),
    ],
)
def test_price_range_floors_and_ceils(prices, expected):
    price_range = PriceRange.from_prices(prices)
    assert (price_range.low, price_range.high) == expected


def test_dispatch_result_empty():
    result = DispatchResult(strategy="by_title", criteria=Criteria(title="Nope"))
    assert result.empty
    assert result.albums == []
