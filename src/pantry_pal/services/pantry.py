"""Pantry reconciliation: scans, recipe deductions, edits and reset."""

import asyncio
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from pantry_pal.domain.barcodes import normalize_code
from pantry_pal.domain.pantry import (
    DEFAULT_UNITS,
    Inventory,
    InventoryRecord,
    ScanResult,
    coerce_quantity,
)
from pantry_pal.domain.recipes import RecipeIngredient
from pantry_pal.services.products import ProductLookupService

_logger = logging.getLogger(__name__)

SORT_KEYS = ("name", "brand", "quantity")


class InvalidCodeError(ValueError):
    """Raised when a scan does not carry a usable product code."""


class PantryRepository(Protocol):
    """Persistence interface for the pantry inventory."""

    def load(self) -> Inventory:
        """Return the stored inventory, or an empty one if unavailable."""

    def save(self, inventory: Inventory) -> None:
        """Replace the stored inventory with the given one."""


@dataclass
class PantryService:
    """Reconcile scans and recipes against the persisted inventory.

    Every mutating operation loads the full inventory, changes it in memory
    and writes it back in full. Mutations are serialized so a slow product
    lookup cannot interleave with another write.
    """

    repository: PantryRepository
    product_service: ProductLookupService
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    async def preview_scan(
        self,
        raw_code: str,
        quantity: object = 1,
        units: str = DEFAULT_UNITS,
        manual_name: str | None = None,
    ) -> ScanResult:
        """Compute the record a scan would produce without saving it."""
        return await self.reconcile_scan(
            normalize_code(raw_code),
            quantity,
            units,
            preview=True,
            manual_name=manual_name,
        )

    async def commit_scan(
        self,
        raw_code: str,
        quantity: object = 1,
        units: str = DEFAULT_UNITS,
        manual_name: str | None = None,
    ) -> ScanResult:
        """Merge a scan into the inventory and persist it."""
        return await self.reconcile_scan(
            normalize_code(raw_code),
            quantity,
            units,
            preview=False,
            manual_name=manual_name,
        )

    async def reconcile_scan(  # noqa: PLR0913
        self,
        code: str,
        quantity: object,
        units: str | None,
        *,
        preview: bool,
        manual_name: str | None = None,
    ) -> ScanResult:
        """Increment a known record or build a new one from a lookup.

        ``code`` must already be normalized. Scans never decrement, so a
        negative quantity counts as zero.
        """
        if not code:
            raise InvalidCodeError("Scanned code is empty")
        amount = max(coerce_quantity(quantity), 0.0)

        async with self._lock:
            inventory = self.repository.load()
            current = inventory.get(code)
            if current is not None:
                if preview:
                    return ScanResult(existing=True, found=True, record=current)
                updated = current.model_copy(
                    update={"quantity": current.quantity + amount}
                )
                inventory[code] = updated
                self.repository.save(inventory)
                _logger.info(
                    "Incremented %s by %s to %s", code, amount, updated.quantity
                )
                return ScanResult(existing=True, found=True, record=updated)

            product = await self.product_service.lookup(code)
            name_override = (manual_name or "").strip()
            record = InventoryRecord(
                code=code,
                name=name_override or product.name or code,
                brand=product.brand,
                description=product.description,
                images=list(product.images),
                quantity=amount,
                units=units,
            )
            if not preview:
                inventory[code] = record
                self.repository.save(inventory)
                _logger.info("Added %s (%s) with quantity %s", code, record.name, amount)
            return ScanResult(
                existing=False,
                found=product.found or bool(name_override),
                record=record,
            )

    async def apply_recipe(self, ingredients: Sequence[RecipeIngredient]) -> Inventory:
        """Deduct recipe ingredients and drop records that run out.

        Ingredients with no matching record are skipped. The inventory is
        saved once after every ingredient has been applied.
        """
        async with self._lock:
            inventory = self.repository.load()
            for ingredient in ingredients:
                current = inventory.get(ingredient.code)
                if current is None:
                    continue
                remaining = coerce_quantity(current.quantity) - coerce_quantity(
                    ingredient.required
                )
                if remaining <= 0:
                    del inventory[ingredient.code]
                else:
                    inventory[ingredient.code] = current.model_copy(
                        update={"quantity": remaining}
                    )
            self.repository.save(inventory)
            _logger.info("Applied recipe with %s ingredients", len(ingredients))
            return inventory

    async def reset(self) -> Inventory:
        """Replace the inventory with an empty one."""
        async with self._lock:
            inventory: Inventory = {}
            self.repository.save(inventory)
            _logger.info("Pantry reset")
            return inventory

    async def remove_item(self, code: str) -> bool:
        """Delete a single record; returns False if it was not tracked."""
        async with self._lock:
            inventory = self.repository.load()
            if inventory.pop(code, None) is None:
                return False
            self.repository.save(inventory)
            return True

    async def set_quantity(self, code: str, quantity: object) -> InventoryRecord | None:
        """Overwrite a record's quantity, removing it when nothing is left."""
        async with self._lock:
            inventory = self.repository.load()
            current = inventory.get(code)
            if current is None:
                return None
            amount = coerce_quantity(quantity)
            if amount <= 0:
                del inventory[code]
                self.repository.save(inventory)
                return None
            updated = current.model_copy(update={"quantity": amount})
            inventory[code] = updated
            self.repository.save(inventory)
            return updated

    def get_item(self, code: str) -> InventoryRecord | None:
        """Return a single record by canonical code."""
        return self.repository.load().get(code)

    def get_items(self, codes: Iterable[str]) -> list[InventoryRecord]:
        """Return records for the given codes in order, skipping unknown ones."""
        inventory = self.repository.load()
        return [inventory[code] for code in codes if code in inventory]

    def list_items(
        self, search: str | None = None, sort_by: str = "name"
    ) -> list[InventoryRecord]:
        """List records filtered by name or brand and sorted for display."""
        if sort_by not in SORT_KEYS:
            raise ValueError(f"Unsupported sort key: {sort_by}")
        items = list(self.repository.load().values())
        query = (search or "").strip().lower()
        if query:
            items = [
                item
                for item in items
                if query in item.name.lower() or query in item.brand.lower()
            ]
        if sort_by == "quantity":
            return sorted(items, key=lambda item: item.quantity, reverse=True)
        if sort_by == "brand":
            return sorted(items, key=lambda item: item.brand.lower())
        return sorted(items, key=lambda item: item.name.lower())
