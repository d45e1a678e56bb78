"""Pydantic models for API request payloads."""

from pydantic import BaseModel, Field

from pantry_pal.domain.pantry import DEFAULT_UNITS
from pantry_pal.domain.recipes import RecipeSuggestion


class ScanRequest(BaseModel):
    """A scanned barcode with the amount to add."""

    code: str
    quantity: float | str | None = 1
    units: str = DEFAULT_UNITS
    manual_name: str | None = None


class QuantityUpdate(BaseModel):
    """New quantity for a tracked item."""

    quantity: float | str | None


class RecipeRequest(BaseModel):
    """Pantry codes selected for a recipe."""

    codes: list[str] = Field(default_factory=list)


class ApplyRecipeRequest(BaseModel):
    """A recipe the user chose to cook."""

    recipe: RecipeSuggestion
    archive: bool = True
