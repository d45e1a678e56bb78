"""Shared test fixtures."""

from dataclasses import dataclass, field
from pathlib import Path
from uuid import UUID

import pytest

from pantry_pal.adapters.json_pantry_repository import JsonPantryRepository
from pantry_pal.config import Settings
from pantry_pal.containers import AppContainer
from pantry_pal.domain.pantry import Inventory, InventoryRecord
from pantry_pal.domain.recipes import ArchivedRecipe
from pantry_pal.services.cache import InMemoryProductCache
from pantry_pal.services.history import RecipeHistoryRepository, RecipeHistoryService
from pantry_pal.services.pantry import PantryRepository, PantryService
from pantry_pal.services.products import ProductClient, ProductLookupService
from pantry_pal.services.recipes import RecipeClient, RecipeService

SOUP_CODE = "012345678905"


def make_record(code: str = SOUP_CODE, **overrides: object) -> InventoryRecord:
    """Build an inventory record with sensible defaults."""
    values: dict[str, object] = {
        "code": code,
        "name": "Tomato Soup",
        "brand": "Campbell's",
        "description": "Condensed soup",
        "images": ["https://img.test/soup.jpg"],
        "quantity": 3,
        "units": "can",
    }
    values.update(overrides)
    return InventoryRecord.model_validate(values)


@dataclass
class InMemoryPantryRepository(PantryRepository):
    """In-memory pantry repository for tests."""

    items: Inventory = field(default_factory=dict)
    save_count: int = 0

    def load(self) -> Inventory:
        return dict(self.items)

    def save(self, inventory: Inventory) -> None:
        self.items = dict(inventory)
        self.save_count += 1


@dataclass
class FailingPantryRepository(InMemoryPantryRepository):
    """Pantry repository whose writes always fail."""

    def save(self, inventory: Inventory) -> None:
        raise OSError("disk full")


@dataclass
class FakeProductClient(ProductClient):
    """Fake barcode database returning a fixed payload per code."""

    payloads: dict[str, dict[str, object]] = field(default_factory=dict)
    fail: bool = False
    calls: list[str] = field(default_factory=list)

    async def lookup(self, code: str) -> dict[str, object]:
        self.calls.append(code)
        if self.fail:
            raise ConnectionError("network down")
        return self.payloads.get(code, {"code": "OK", "total": 0, "items": []})


def upc_payload(title: str, **item: object) -> dict[str, object]:
    """Build a UPCItemDB hit payload."""
    return {
        "code": "OK",
        "total": 1,
        "items": [
            {
                "title": title,
                "description": item.get("description", ""),
                "brand": item.get("brand", ""),
                "images": item.get("images", []),
            }
        ],
    }


@dataclass
class FakeRecipeClient(RecipeClient):
    """Fake recipe client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "title": "Tomato Soup Bowl",
            "steps": ["Heat the soup.", "Serve hot."],
            "ingredients": [
                {
                    "code": SOUP_CODE,
                    "name": "Tomato Soup",
                    "required": 1,
                    "units": "can",
                }
            ],
        }
    )
    prompts: list[str] = field(default_factory=list)

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        return self.payload


@dataclass
class InMemoryRecipeHistoryRepository(RecipeHistoryRepository):
    """In-memory recipe history repository for tests."""

    recipes: list[ArchivedRecipe] = field(default_factory=list)

    def list_recipes(self) -> list[ArchivedRecipe]:
        return list(self.recipes)

    def append_recipe(self, recipe: ArchivedRecipe) -> None:
        self.recipes.append(recipe)

    def delete_recipe(self, recipe_id: UUID) -> bool:
        before = len(self.recipes)
        self.recipes = [recipe for recipe in self.recipes if recipe.id != recipe_id]
        return len(self.recipes) != before


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        admin_token="admin-token",
        openai_api_key="openai-key",
        pantry_path=tmp_path / "pantry.json",
        history_path=tmp_path / "recipe_history.json",
    )


@pytest.fixture
def product_client() -> FakeProductClient:
    return FakeProductClient()


@pytest.fixture
def product_service(product_client: FakeProductClient) -> ProductLookupService:
    return ProductLookupService(
        client=product_client,
        cache=InMemoryProductCache(),
        retry_delay_seconds=0,
    )


@pytest.fixture
def pantry_repository() -> InMemoryPantryRepository:
    return InMemoryPantryRepository()


@pytest.fixture
def pantry_service(
    pantry_repository: InMemoryPantryRepository,
    product_service: ProductLookupService,
) -> PantryService:
    return PantryService(pantry_repository, product_service)


@pytest.fixture
def recipe_client() -> FakeRecipeClient:
    return FakeRecipeClient()


@pytest.fixture
def container(
    settings: Settings,
    product_service: ProductLookupService,
    recipe_client: FakeRecipeClient,
) -> AppContainer:
    pantry_service = PantryService(
        repository=JsonPantryRepository(settings.pantry_path),
        product_service=product_service,
    )
    recipe_service = RecipeService(
        client=recipe_client,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
    )
    history_service = RecipeHistoryService(InMemoryRecipeHistoryRepository())

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        product_service=product_service,
        pantry_service=pantry_service,
        recipe_service=recipe_service,
        history_service=history_service,
        close_resources=close_resources,
    )
