# wheel_catalog/utils/product_fields.py
"""
Coercion helpers for the loosely typed spreadsheet columns.

Every helper has a fixed fallback so the view never has to guess:
price -> 0.0, stock -> 0, text -> "".
"""
import math
import re

from utils.columns import (
    BRAND, DESCRIPTION, IMAGE_COLUMNS, PART_NUMBER, PRICE, STOCK_IN_TRANSIT, STOCK_WAREHOUSE,
)

_PRICE_JUNK_RE = re.compile(r"[^0-9.,-]")
_LEADING_FLOAT_RE = re.compile(r"^[-+]?(\d+\.?\d*|\.\d+)")
_LEADING_INT_RE = re.compile(r"^\s*([-+]?\d+)")

# Columns already rendered on the product card, hidden from the details list
DISPLAYED_COLUMNS = {PART_NUMBER, DESCRIPTION, BRAND, PRICE, STOCK_WAREHOUSE, STOCK_IN_TRANSIT, "", *IMAGE_COLUMNS}


def _is_missing(value) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def clean_value(value) -> str:
    if _is_missing(value) or value == "":
        return ""
    text = str(value)
    return "" if text.strip().upper() == "#N/A" else text


def parse_price(value) -> float:
    """
    Parses a Romanian formatted price such as "1.234,56 lei".

    '.' is treated as a thousands separator and ',' as the decimal separator.
    Returns 0.0 when nothing numeric can be read.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return 0.0 if _is_missing(value) else float(value)
    if not isinstance(value, str) or not value:
        return 0.0
    cleaned = _PRICE_JUNK_RE.sub("", value).replace(".", "").replace(",", ".", 1)
    match = _LEADING_FLOAT_RE.match(cleaned)
    if not match:
        return 0.0
    return float(match.group(0))


def format_price(amount: float, currency: str = "RON") -> str:
    """Formats 1234.5 as '1.234,50 RON'."""
    text = f"{amount:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{text} {currency}"


def parse_stock(value) -> int:
    """Reads the leading integer of a stock cell ("12 buc" -> 12), 0 otherwise."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float):
        return 0 if math.isnan(value) else int(value)
    if not isinstance(value, str):
        return 0
    match = _LEADING_INT_RE.match(value)
    return int(match.group(1)) if match else 0


def has_stock(record) -> bool:
    return parse_stock(record.get(STOCK_WAREHOUSE)) > 0


def all_image_urls(record) -> list:
    urls = []
    for column in IMAGE_COLUMNS:
        url = record.get(column)
        if isinstance(url, str) and url.strip().startswith("http"):
            urls.append(url.strip())
    return urls


def first_image_url(record):
    urls = all_image_urls(record)
    return urls[0] if urls else None


def product_details(record) -> list:
    """Returns the (column, value) pairs shown in the card's details expander."""
    details = []
    for key, value in record.items():
        if key in DISPLAYED_COLUMNS:
            continue
        text = clean_value(value).strip()
        if text:
            details.append((key, text))
    return details
