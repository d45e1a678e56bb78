"""Tests for the JSON file repositories."""

import json
from datetime import UTC, datetime
from pathlib import Path
from uuid import uuid4

from pantry_pal.adapters.json_history_repository import JsonRecipeHistoryRepository
from pantry_pal.adapters.json_pantry_repository import JsonPantryRepository
from pantry_pal.domain.recipes import ArchivedRecipe, RecipeSuggestion
from tests.conftest import SOUP_CODE, make_record


def test_missing_file_loads_empty(tmp_path: Path) -> None:
    repository = JsonPantryRepository(tmp_path / "pantry.json")

    assert repository.load() == {}


def test_corrupt_file_loads_empty(tmp_path: Path) -> None:
    path = tmp_path / "pantry.json"
    path.write_text("{not json", encoding="utf-8")

    assert JsonPantryRepository(path).load() == {}


def test_wrong_shape_loads_empty(tmp_path: Path) -> None:
    path = tmp_path / "pantry.json"
    path.write_text(json.dumps({"items": []}), encoding="utf-8")

    assert JsonPantryRepository(path).load() == {}


def test_save_then_load_keeps_envelope(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "pantry.json"
    repository = JsonPantryRepository(path)
    record = make_record(quantity=1.5)

    repository.save({record.code: record})

    stored = json.loads(path.read_text(encoding="utf-8"))
    assert stored["pantry"]["items"][SOUP_CODE]["name"] == "Tomato Soup"
    assert repository.load() == {SOUP_CODE: record}
    assert not path.with_name("pantry.json.tmp").exists()


def test_legacy_records_keyed_by_upc_load(tmp_path: Path) -> None:
    path = tmp_path / "pantry.json"
    path.write_text(
        json.dumps(
            {
                "pantry": {
                    "items": {
                        SOUP_CODE: {
                            "upc": SOUP_CODE,
                            "name": "Soup",
                            "description": "",
                            "brand": "",
                            "images": [],
                            "quantity": "oops",
                            "units": "can",
                        }
                    }
                }
            }
        ),
        encoding="utf-8",
    )

    inventory = JsonPantryRepository(path).load()

    assert inventory[SOUP_CODE].code == SOUP_CODE
    assert inventory[SOUP_CODE].quantity == 0


def test_empty_inventory_is_written_as_empty_mapping(tmp_path: Path) -> None:
    path = tmp_path / "pantry.json"
    JsonPantryRepository(path).save({})

    assert json.loads(path.read_text(encoding="utf-8")) == {"pantry": {"items": {}}}


def test_history_append_list_delete(tmp_path: Path) -> None:
    repository = JsonRecipeHistoryRepository(tmp_path / "history.json")
    archived = ArchivedRecipe(
        id=uuid4(),
        created_at=datetime(2024, 5, 1, tzinfo=UTC),
        recipe=RecipeSuggestion(title="Soup", steps=["Heat"]),
    )

    repository.append_recipe(archived)

    assert repository.list_recipes() == [archived]
    assert repository.delete_recipe(archived.id) is True
    assert repository.delete_recipe(archived.id) is False
    assert repository.list_recipes() == []


def test_corrupt_history_loads_empty(tmp_path: Path) -> None:
    path = tmp_path / "history.json"
    path.write_text("[{]", encoding="utf-8")

    assert JsonRecipeHistoryRepository(path).list_recipes() == []


def test_invalid_record_is_skipped_and_others_survive_a_write(
    tmp_path: Path,
) -> None:
    path = tmp_path / "pantry.json"
    soup = make_record(name="Soup", quantity=2)
    path.write_text(
        json.dumps(
            {
                "pantry": {
                    "items": {
                        SOUP_CODE: soup.model_dump(mode="json"),
                        "": {"upc": "", "name": "", "quantity": 1},
                        "614141000012": "not a record",
                    }
                }
            }
        ),
        encoding="utf-8",
    )
    repository = JsonPantryRepository(path)

    inventory = repository.load()
    assert inventory == {SOUP_CODE: soup}

    rice = make_record(code="614141000012", name="Rice", quantity=1)
    inventory[rice.code] = rice
    repository.save(inventory)

    stored = json.loads(path.read_text(encoding="utf-8"))["pantry"]["items"]
    assert sorted(stored) == ["012345678905", "614141000012"]
    assert stored[SOUP_CODE]["name"] == "Soup"
