"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from pantry_pal.adapters.json_history_repository import JsonRecipeHistoryRepository
from pantry_pal.adapters.json_pantry_repository import JsonPantryRepository
from pantry_pal.adapters.openai_recipe_client import OpenAIRecipeClient
from pantry_pal.adapters.upcitemdb_client import HttpxUpcItemDbClient
from pantry_pal.config import Settings
from pantry_pal.services.cache import InMemoryProductCache
from pantry_pal.services.history import RecipeHistoryService
from pantry_pal.services.pantry import PantryService
from pantry_pal.services.products import ProductLookupService
from pantry_pal.services.recipes import RecipeService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    product_service: ProductLookupService
    pantry_service: PantryService
    recipe_service: RecipeService
    history_service: RecipeHistoryService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    upc_client = HttpxUpcItemDbClient.create(resolved_settings.upc_base_url)
    product_service = ProductLookupService(
        client=upc_client,
        cache=InMemoryProductCache(
            ttl_seconds=resolved_settings.product_cache_ttl_seconds
        ),
    )
    pantry_service = PantryService(
        repository=JsonPantryRepository(resolved_settings.pantry_path),
        product_service=product_service,
    )
    recipe_service = RecipeService(
        client=OpenAIRecipeClient.create(resolved_settings.openai_api_key),
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    history_service = RecipeHistoryService(
        JsonRecipeHistoryRepository(resolved_settings.history_path)
    )

    async def close_resources() -> None:
        await upc_client.close()

    return AppContainer(
        settings=resolved_settings,
        product_service=product_service,
        pantry_service=pantry_service,
        recipe_service=recipe_service,
        history_service=history_service,
        close_resources=close_resources,
    )
