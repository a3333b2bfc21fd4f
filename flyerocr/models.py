"""Data models for extracted flyer products."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ProductRecord:
    """A single product listing detected on a flyer."""

    description: str
    arabic_description: str = ""
    quantity: int | float | None = None  # None means 1 / each / unspecified
    regular_price: str = ""              # "" when not printed, else "12.00"
    offer_price: str = ""

    def to_dict(self) -> dict:
        return {
            "description": self.description,
            "arabicDescription": self.arabic_description,
            "qty": self.quantity,
            "regularPrice": self.regular_price,
            "offerPrice": self.offer_price,
        }
