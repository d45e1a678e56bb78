"""Recipe history service."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from pantry_pal.domain.recipes import ArchivedRecipe, RecipeSuggestion


class RecipeHistoryRepository(Protocol):
    """Persistence interface for archived recipes."""

    def list_recipes(self) -> list[ArchivedRecipe]:
        """Return every archived recipe."""

    def append_recipe(self, recipe: ArchivedRecipe) -> None:
        """Store an archived recipe."""

    def delete_recipe(self, recipe_id: UUID) -> bool:
        """Delete an archived recipe, returning whether it existed."""


@dataclass
class RecipeHistoryService:
    """Application service for the recipe history."""

    repository: RecipeHistoryRepository

    def archive(self, recipe: RecipeSuggestion) -> ArchivedRecipe:
        """Archive a recipe that was used."""
        archived = ArchivedRecipe(
            id=uuid4(), created_at=datetime.now(tz=UTC), recipe=recipe
        )
        self.repository.append_recipe(archived)
        return archived

    def list_recipes(self) -> list[ArchivedRecipe]:
        """Return archived recipes, newest first."""
        return sorted(
            self.repository.list_recipes(),
            key=lambda item: item.created_at,
            reverse=True,
        )

    def delete(self, recipe_id: UUID) -> bool:
        """Delete an archived recipe, returning whether it existed."""
        return self.repository.delete_recipe(recipe_id)
