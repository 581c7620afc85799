"""
Domain models for the Album Catalog.

Defines the album row aligned with `db/init.sql`, the per-request search
criteria, and the small value objects the dispatcher and web layer pass
around.
"""
from __future__ import annotations

import math
from decimal import Decimal
from typing import List, Mapping, Optional, Sequence

from pydantic import BaseModel, Field, field_validator

from album_catalog.domain.normalize import clean_text, normalize_price


class Album(BaseModel):
    """
    Representation of a single row in the `album` table.
    """

    id: int = Field(..., description="Primary key (BIGSERIAL).")
    title: str = Field(..., min_length=1, description="Album title.")
    artist: str = Field(..., min_length=1, description="Recording artist.")
    price: Decimal = Field(..., ge=0, description="Price with two decimal places.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "arbitrary_types_allowed": False,
    }

    @field_validator("price", mode="before")
    @classmethod
    def _round_price(cls, value: object) -> Decimal:
        return normalize_price(value)  # type: ignore[arg-type]


class Criteria(BaseModel):
    """
    Optional search input for one request. Absent fields are ``None``.
    """

    title: Optional[str] = None
    artist: Optional[str] = None
    price: Optional[Decimal] = None

    model_config = {"frozen": True}

    @field_validator("title", "artist", mode="before")
    @classmethod
    def _blank_is_absent(cls, value: object) -> Optional[str]:
        text = clean_text(value)
        return text or None

    @field_validator("price", mode="before")
    @classmethod
    def _parse_price(cls, value: object) -> Optional[Decimal]:
        if value is None or clean_text(value) == "":
            return None
        return normalize_price(value)  # type: ignore[arg-type]

    @classmethod
    def from_form(cls, form: Mapping[str, object]) -> "Criteria":
        """
        Build criteria from raw form values (``title``, ``artist``, ``price``).

        Raises ``ValidationError`` when the price is present but malformed.
        """
        # Parsed here so a bad price surfaces as our ValidationError, not pydantic's.
        raw_price = clean_text(form.get("price"))
        price = normalize_price(raw_price) if raw_price else None
        return cls(title=form.get("title"), artist=form.get("artist"), price=price)

    @property
    def has_price(self) -> bool:
        """A price of zero does not count as a filter."""
        return self.price is not None and self.price > 0

    @property
    def is_empty(self) -> bool:
        return not (self.has_price or self.title or self.artist)

    def as_log_fields(self) -> dict:
        return {
            "title": self.title,
            "artist": self.artist,
            "price": str(self.price) if self.price is not None else None,
        }


class PriceRange(BaseModel):
    """Whole-number bounds for the search form's price input."""

    low: int = 0
    high: int = 0

    model_config = {"frozen": True}

    @classmethod
    def from_prices(cls, prices: Sequence[Decimal]) -> "PriceRange":
        if not prices:
            return cls()
        return cls(low=math.floor(min(prices)), high=math.ceil(max(prices)))


class DispatchResult(BaseModel):
    """Outcome of one search: the strategy used, the echoed criteria, the albums."""

    strategy: str
    criteria: Criteria
    albums: List[Album] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def empty(self) -> bool:
        return not self.albums


__all__ = ["Album", "Criteria", "DispatchResult", "PriceRange"]
