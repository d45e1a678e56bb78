"""Recipe history repository backed by a local JSON file."""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from uuid import UUID

from pydantic import TypeAdapter, ValidationError

from pantry_pal.domain.recipes import ArchivedRecipe
from pantry_pal.services.history import RecipeHistoryRepository

_logger = logging.getLogger(__name__)

_HISTORY_ADAPTER = TypeAdapter(list[ArchivedRecipe])


@dataclass
class JsonRecipeHistoryRepository(RecipeHistoryRepository):
    """Store archived recipes as a JSON array."""

    path: Path

    def list_recipes(self) -> list[ArchivedRecipe]:
        """Return stored recipes; an unreadable file counts as empty."""
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return []
        except OSError as exc:
            _logger.warning("Unreadable history file %s: %s", self.path, exc)
            return []
        try:
            return _HISTORY_ADAPTER.validate_json(raw)
        except ValidationError as exc:
            _logger.warning("Malformed history file %s: %s", self.path, exc)
            return []

    def append_recipe(self, recipe: ArchivedRecipe) -> None:
        """Append a recipe and rewrite the file."""
        recipes = self.list_recipes()
        recipes.append(recipe)
        self._write(recipes)

    def delete_recipe(self, recipe_id: UUID) -> bool:
        """Remove a recipe by id."""
        recipes = self.list_recipes()
        remaining = [recipe for recipe in recipes if recipe.id != recipe_id]
        if len(remaining) == len(recipes):
            return False
        self._write(remaining)
        return True

    def _write(self, recipes: list[ArchivedRecipe]) -> None:
        payload = _HISTORY_ADAPTER.dump_python(recipes, mode="json")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        tmp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        os.replace(tmp_path, self.path)
