"""Recipe domain models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from pantry_pal.domain.pantry import DEFAULT_UNITS, coerce_quantity


class RecipeIngredient(BaseModel):
    """An inventory item used by a recipe and the amount it consumes."""

    code: str
    name: str = ""
    required: float = 0.0
    units: str = DEFAULT_UNITS

    @field_validator("required", mode="before")
    @classmethod
    def _coerce_required(cls, value: object) -> float:
        return coerce_quantity(value)


class RecipeSuggestion(BaseModel):
    """Recipe proposed by the language model."""

    title: str
    steps: list[str] = Field(default_factory=list)
    ingredients: list[RecipeIngredient] = Field(default_factory=list)


class ArchivedRecipe(BaseModel):
    """A recipe kept in the history after it was used."""

    id: UUID
    created_at: datetime
    recipe: RecipeSuggestion
