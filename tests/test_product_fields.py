"""Tests for the per-column coercion helpers."""

import math

import pytest

from utils.product_fields import (
    all_image_urls, clean_value, first_image_url, format_price, has_stock, parse_price, parse_stock,
    product_details,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1.234,56 lei", 1234.56),
        ("899", 899.0),
        ("1.299,00", 1299.0),
        ("12,5", 12.5),
        ("-3,75", -3.75),
        ("abc", 0.0),
        ("", 0.0),
        (None, 0.0),
        (42, 42.0),
        (19.99, 19.99),
    ],
)
def test_parse_price(raw, expected):
    assert parse_price(raw) == pytest.approx(expected)


def test_parse_price_nan():
    assert parse_price(math.nan) == 0.0


def test_format_price():
    assert format_price(1234.5) == "1.234,50 RON"
    assert format_price(0) == "0,00 RON"
    assert format_price(1234567.891) == "1.234.567,89 RON"


@pytest.mark.parametrize(
    "raw, expected",
    [("12", 12), (" 7 buc", 7), ("12.9", 12), ("", 0), ("n/a", 0), (None, 0), (5, 5), (3.0, 3)],
)
def test_parse_stock(raw, expected):
    assert parse_stock(raw) == expected


def test_has_stock():
    assert has_stock({"7001": "3"})
    assert not has_stock({"7001": "0"})
    assert not has_stock({})


def test_clean_value():
    assert clean_value("#n/a ") == ""
    assert clean_value(None) == ""
    assert clean_value(math.nan) == ""
    assert clean_value("Grip") == "Grip"


def test_image_urls():
    product = {
        "Image URL": "not a url",
        "Image URL 1": "  https://cdn.example.com/1.jpg ",
        "Image URL 3": "http://cdn.example.com/3.jpg",
        "Image URL 4": "",
    }
    assert first_image_url(product) == "https://cdn.example.com/1.jpg"
    assert all_image_urls(product) == ["https://cdn.example.com/1.jpg", "http://cdn.example.com/3.jpg"]
    assert first_image_url({}) is None


def test_product_details_hides_card_fields():
    product = {
        "PartNumber": "W-1",
        "Brand": "Alutec",
        "Image URL": "https://cdn.example.com/1.jpg",
        "Size": "18",
        "ET": "#N/A",
        "Colour": "  ",
        "PCD": "5x112",
    }
    assert product_details(product) == [("Size", "18"), ("PCD", "5x112")]
