"""Pantry domain models."""

import math
from dataclasses import dataclass

from pydantic import AliasChoices, BaseModel, Field, field_validator

DEFAULT_UNITS = "unit"


def coerce_quantity(value: object) -> float:
    """Coerce an amount to a finite float, using 0 for anything invalid."""
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


class InventoryRecord(BaseModel):
    """A tracked product in the pantry, keyed by its canonical code."""

    code: str = Field(validation_alias=AliasChoices("code", "upc"))
    name: str = Field(min_length=1)
    brand: str = ""
    description: str = ""
    images: list[str] = Field(default_factory=list)
    quantity: float = 0.0
    units: str = DEFAULT_UNITS

    @field_validator("quantity", mode="before")
    @classmethod
    def _coerce_quantity(cls, value: object) -> float:
        return coerce_quantity(value)

    @field_validator("brand", "description", mode="before")
    @classmethod
    def _blank_if_missing(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("units", mode="before")
    @classmethod
    def _default_units(cls, value: object) -> object:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_UNITS
        return value


Inventory = dict[str, InventoryRecord]


@dataclass(frozen=True)
class ProductInfo:
    """Product details returned by a barcode lookup."""

    found: bool
    name: str
    description: str = ""
    brand: str = ""
    images: tuple[str, ...] = ()

    @classmethod
    def placeholder(cls, code: str) -> "ProductInfo":
        """Return the stand-in used when a lookup fails."""
        return cls(found=False, name=code)


@dataclass(frozen=True)
class ScanResult:
    """Outcome of reconciling a scan against the inventory."""

    existing: bool
    found: bool
    record: InventoryRecord
