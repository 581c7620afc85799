"""
Value normalization shared by the store, the dispatcher, and the web forms.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Tuple, Union

from album_catalog.domain.errors import ValidationError

PriceInput = Union[str, int, float, Decimal]

CENTS = Decimal("0.01")

# Largest value NUMERIC(7,2) can hold.
MAX_PRICE = Decimal("99999.99")

# A word character not preceded by another one starts a word.
_WORD_START = re.compile(r"(?<!\w)\w")


def normalize_price(value: PriceInput) -> Decimal:
    """
    Round a price to two decimal places, half away from zero.

    Floats are converted through their shortest ``repr`` so that ``17.99``
    stays ``17.99`` instead of picking up binary noise. The result is
    idempotent: ``normalize_price(normalize_price(x)) == normalize_price(x)``.

    Raises
    ------
    ValidationError
        If the value is not a finite number between 0 and ``MAX_PRICE``.
    """
    if isinstance(value, bool):
        raise ValidationError(f"price {value!r} is not a number", field="price")
    if isinstance(value, Decimal):
        raw = value
    else:
        text = str(value).strip()
        try:
            raw = Decimal(text)
        except InvalidOperation as exc:
            raise ValidationError(f"price {text!r} is not a number", field="price") from exc

    if not raw.is_finite():
        raise ValidationError(f"price {value!r} is not a finite number", field="price")
    if raw < 0:
        raise ValidationError(f"price {value!r} must not be negative", field="price")

    # ROUND_HALF_UP on Decimal rounds half away from zero.
    try:
        price = raw.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValidationError(f"price {value!r} is not a usable amount", field="price") from exc
    if price > MAX_PRICE:
        raise ValidationError(f"price {value!r} is above {MAX_PRICE}", field="price")
    return price


def title_case(text: str) -> str:
    """
    Lower-case the text, then upper-case the first character of every word.

    Any character other than a letter, digit, or underscore separates words,
    so ``"o'brien"`` becomes ``"O'Brien"`` and ``"ac/dc"`` becomes ``"Ac/Dc"``.
    """
    return _WORD_START.sub(lambda m: m.group(0).upper(), text.strip().lower())


def clean_text(value: object) -> str:
    """Strip a raw form value; ``None`` becomes an empty string."""
    if value is None:
        return ""
    return str(value).strip()


def require_title_artist(title: object, artist: object) -> Tuple[str, str]:
    """Strip both values; raise ValidationError if either is blank."""
    title, artist = clean_text(title), clean_text(artist)
    if not title:
        raise ValidationError("title is required", field="title")
    if not artist:
        raise ValidationError("artist is required", field="artist")
    return title, artist


__all__ = [
    "CENTS",
    "MAX_PRICE",
    "PriceInput",
    "clean_text",
    "normalize_price",
    "require_title_artist",
    "title_case",
]
