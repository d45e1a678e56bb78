"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from pantry_pal.api.admin import router as admin_router
from pantry_pal.api.schemas import (
    ApplyRecipeRequest,
    QuantityUpdate,
    RecipeRequest,
    ScanRequest,
)
from pantry_pal.app_logging import configure_logging
from pantry_pal.containers import AppContainer
from pantry_pal.domain.barcodes import normalize_code
from pantry_pal.domain.pantry import ScanResult
from pantry_pal.services.pantry import InvalidCodeError
from pantry_pal.services.recipes import RecipeGenerationError


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(InvalidCodeError)
    async def invalid_code(request: Request, exc: InvalidCodeError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc)},
        )

    @app.exception_handler(RecipeGenerationError)
    async def recipe_failed(
        request: Request, exc: RecipeGenerationError
    ) -> JSONResponse:
        logger.warning("Recipe generation failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": "Could not generate a recipe"},
        )

    @app.exception_handler(OSError)
    async def storage_failed(request: Request, exc: OSError) -> JSONResponse:
        logger.error("Failed to persist pantry data", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Could not save changes"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/pantry")
    async def list_pantry(
        request: Request, search: str | None = None, sort_by: str = "name"
    ) -> dict[str, object]:
        """List pantry items, optionally filtered and sorted."""
        state_container: AppContainer = request.app.state.container
        try:
            items = state_container.pantry_service.list_items(search, sort_by)
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        return {"items": items}

    @app.post("/pantry/scan/preview")
    async def preview_scan(payload: ScanRequest, request: Request) -> dict[str, object]:
        """Show what a scan would add without saving it."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.pantry_service.preview_scan(
            payload.code, payload.quantity, payload.units, payload.manual_name
        )
        return _scan_response(result)

    @app.post("/pantry/scan")
    async def commit_scan(payload: ScanRequest, request: Request) -> dict[str, object]:
        """Add a scanned product to the pantry."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.pantry_service.commit_scan(
            payload.code, payload.quantity, payload.units, payload.manual_name
        )
        return _scan_response(result)

    @app.put("/pantry/items/{code}")
    async def update_quantity(
        code: str, payload: QuantityUpdate, request: Request
    ) -> dict[str, object]:
        """Set the quantity of a tracked item."""
        state_container: AppContainer = request.app.state.container
        pantry_service = state_container.pantry_service
        canonical = normalize_code(code)
        if pantry_service.get_item(canonical) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        record = await pantry_service.set_quantity(canonical, payload.quantity)
        if record is None:
            return {"removed": True}
        return {"removed": False, "item": record}

    @app.delete("/pantry/items/{code}")
    async def delete_item(code: str, request: Request) -> dict[str, str]:
        """Remove a single item from the pantry."""
        state_container: AppContainer = request.app.state.container
        removed = await state_container.pantry_service.remove_item(
            normalize_code(code)
        )
        if not removed:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"status": "ok"}

    @app.post("/recipes/generate")
    async def generate_recipe(
        payload: RecipeRequest, request: Request
    ) -> dict[str, object]:
        """Ask the model for a recipe using the selected pantry items."""
        state_container: AppContainer = request.app.state.container
        records = state_container.pantry_service.get_items(
            normalize_code(code) for code in payload.codes
        )
        if not records:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Select at least one pantry item",
            )
        recipe = await state_container.recipe_service.generate(records)
        return recipe.model_dump(mode="json")

    @app.post("/recipes/apply")
    async def apply_recipe(
        payload: ApplyRecipeRequest, request: Request
    ) -> dict[str, object]:
        """Deduct a recipe's ingredients from the pantry."""
        state_container: AppContainer = request.app.state.container
        inventory = await state_container.pantry_service.apply_recipe(
            payload.recipe.ingredients
        )
        response: dict[str, object] = {"items": list(inventory.values())}
        if payload.archive:
            archived = state_container.history_service.archive(payload.recipe)
            response["archived_id"] = str(archived.id)
        return response

    @app.get("/recipes/history")
    async def recipe_history(request: Request) -> dict[str, object]:
        """Return previously used recipes, newest first."""
        state_container: AppContainer = request.app.state.container
        return {"recipes": state_container.history_service.list_recipes()}

    @app.delete("/recipes/history/{recipe_id}")
    async def delete_history(recipe_id: UUID, request: Request) -> dict[str, str]:
        """Delete a recipe from the history."""
        state_container: AppContainer = request.app.state.container
        if not state_container.history_service.delete(recipe_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"status": "ok"}

    return app


def _scan_response(result: ScanResult) -> dict[str, object]:
    """Serialize a scan result for the API."""
    return {
        "existing": result.existing,
        "found": result.found,
        "record": result.record.model_dump(mode="json"),
    }
