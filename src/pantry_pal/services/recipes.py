"""Recipe suggestion service using an LLM."""

import json
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from pantry_pal.domain.pantry import InventoryRecord
from pantry_pal.domain.recipes import RecipeSuggestion

RECIPE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "steps": {"type": "array", "items": {"type": "string"}},
        "ingredients": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "code": {"type": "string"},
                    "name": {"type": "string"},
                    "required": {"type": "number", "minimum": 0},
                    "units": {"type": "string"},
                },
                "required": ["code", "name", "required", "units"],
                "additionalProperties": False,
            },
        },
    },
    "required": ["title", "steps", "ingredients"],
    "additionalProperties": False,
}


class RecipeGenerationError(RuntimeError):
    """Raised when the model does not return a usable recipe."""


class RecipeClient(Protocol):
    """Interface for LLM recipe generation."""

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured recipe data."""


@dataclass
class RecipeService:
    """Service that prompts for a recipe and validates the result."""

    client: RecipeClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def generate(self, records: Sequence[InventoryRecord]) -> RecipeSuggestion:
        """Suggest a recipe that uses only the given pantry records."""
        if not records:
            raise ValueError("At least one ingredient is required")
        raw = await self.client.generate(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            schema=RECIPE_SCHEMA,
            prompt=build_prompt(records),
        )
        try:
            recipe = RecipeSuggestion.model_validate(raw)
        except ValidationError as exc:
            raise RecipeGenerationError("Model returned an invalid recipe") from exc
        known = {record.code for record in records}
        recipe.ingredients = [
            ingredient for ingredient in recipe.ingredients if ingredient.code in known
        ]
        return recipe


def build_prompt(records: Sequence[InventoryRecord]) -> str:
    """Describe the available ingredients and the expected answer."""
    available = [
        {
            "code": record.code,
            "name": record.name,
            "quantity": record.quantity,
            "units": record.units,
        }
        for record in records
    ]
    return (
        "Suggest one recipe that can be cooked with the pantry items below. "
        "Use only these items, refer to each by its code, and never require "
        "more than the available quantity, expressed in the same units. "
        "Return a short title, the preparation steps in order, and the "
        "ingredients used.\n\n"
        f"Pantry items: {json.dumps(available)}"
    )
