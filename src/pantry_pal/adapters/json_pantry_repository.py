"""Pantry repository backed by a local JSON file."""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from pantry_pal.domain.pantry import Inventory, InventoryRecord
from pantry_pal.services.pantry import PantryRepository

_logger = logging.getLogger(__name__)


@dataclass
class JsonPantryRepository(PantryRepository):
    """Store the whole inventory as ``{"pantry": {"items": {...}}}``."""

    path: Path

    def load(self) -> Inventory:
        """Read the inventory, skipping invalid records; unreadable means empty."""
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            _logger.warning("Unreadable pantry file %s: %s", self.path, exc)
            return {}

        try:
            items = payload["pantry"]["items"]
            entries = list(items.items())
        except (KeyError, TypeError, AttributeError) as exc:
            _logger.warning("Malformed pantry file %s: %s", self.path, exc)
            return {}

        inventory: Inventory = {}
        for key, raw in entries:
            try:
                inventory[key] = InventoryRecord.model_validate({**raw, "code": key})
            except (TypeError, ValidationError) as exc:
                _logger.warning("Skipping invalid pantry record %r: %s", key, exc)
        return inventory

    def save(self, inventory: Inventory) -> None:
        """Overwrite the file with the full inventory."""
        payload = {
            "pantry": {
                "items": {
                    code: record.model_dump(mode="json")
                    for code, record in inventory.items()
                }
            }
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        tmp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        os.replace(tmp_path, self.path)
