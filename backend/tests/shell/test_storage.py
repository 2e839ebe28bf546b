"""Tests for JSON document storage and the diet session."""

import json

import pytest
from unittest.mock import patch

from mealplan.core.catalog import DEFAULT_FOOD_DATABASE
from mealplan.core.models import DayContent, ExportBundle, MealSlot, NutritionGoals
from mealplan.shell.session import DietSession
from mealplan.shell.storage import JsonFileStorage, StorageConfig


@pytest.fixture
def storage(tmp_path):
    """Storage writing to a temporary file."""
    return JsonFileStorage(StorageConfig(path=tmp_path / "data" / "mealplan.json"))


class TestStorageConfig:
    """Tests for StorageConfig defaults."""

    def test_path_from_environment(self, monkeypatch, tmp_path):
        """MEALPLAN_DATA_FILE sets the default path."""
        monkeypatch.setenv("MEALPLAN_DATA_FILE", str(tmp_path / "x.json"))
        assert StorageConfig().path == tmp_path / "x.json"


class TestJsonFileStorage:
    """Tests for JsonFileStorage."""

    def test_missing_file_loads_defaults(self, storage):
        """No file yet means an empty bundle."""
        bundle = storage.load()
        assert bundle is not None
        assert bundle.daily_diet_logs == {}
        assert bundle.diet_plan == DayContent()

    def test_save_then_load(self, storage):
        """A saved document loads back equal."""
        bundle = ExportBundle.model_validate({
            "dietPlan": {"breakfast": [{"id": "t1", "foodId": "food-3", "servings": 2}]},
            "dailyDietLogs": {
                "2024-01-01": {"lunch": [{"id": "d1", "foodId": "food-2", "servings": 1}]},
                "2024-01-02": {},
            },
            "nutritionGoals": {"calories": 1800, "protein": 140, "carbs": 150, "fat": 60},
        })
        assert storage.save(bundle) is True

        loaded = storage.load()
        assert loaded.diet_plan == bundle.diet_plan
        assert loaded.daily_diet_logs == bundle.daily_diet_logs
        assert loaded.nutrition_goals.calories == 1800

    def test_empty_day_survives_round_trip(self, storage):
        """An explicit empty day is written and read back as present."""
        storage.save(ExportBundle(daily_diet_logs={"2024-01-02": DayContent()}))

        raw = json.loads(storage.path.read_text(encoding="utf-8"))
        assert raw["dailyDietLogs"] == {"2024-01-02": {}}
        assert "2024-01-02" in storage.load().daily_diet_logs

    def test_corrupt_file_returns_none(self, storage):
        """Unreadable JSON is reported, not replaced by defaults."""
        storage.path.parent.mkdir(parents=True)
        storage.path.write_text("{not json", encoding="utf-8")
        assert storage.load() is None

    def test_invalid_document_returns_none(self, storage):
        """A document with non-positive servings is rejected."""
        storage.path.parent.mkdir(parents=True)
        storage.path.write_text(
            json.dumps({"dietPlan": {"lunch": [{"id": "x", "foodId": "f", "servings": 0}]}}),
            encoding="utf-8",
        )
        assert storage.load() is None

    def test_save_failure_returns_false(self, tmp_path):
        """Write errors are reported as False."""
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        storage = JsonFileStorage(StorageConfig(path=blocker / "data.json"))
        assert storage.save(ExportBundle()) is False


class TestDietSession:
    """Tests for DietSession."""

    def test_refuses_unreadable_document(self, storage):
        """A broken document stops the session from starting."""
        storage.path.parent.mkdir(parents=True)
        storage.path.write_text("[]", encoding="utf-8")
        with pytest.raises(RuntimeError):
            DietSession(storage)

    def test_default_catalog(self, storage):
        """Without a stored catalog the seed foods are used."""
        session = DietSession(storage)
        assert len(session.catalog) == len(DEFAULT_FOOD_DATABASE)

    def test_empty_stored_catalog_is_respected(self, storage):
        """An explicitly empty catalog stays empty."""
        storage.save(ExportBundle(food_database=[]))
        assert len(DietSession(storage).catalog) == 0

    def test_persist_writes_store_state(self, storage):
        """Mutations reach the file after persist."""
        session = DietSession(storage)
        session.store.log_food("2024-01-01", "lunch", "food-2", 1)
        assert session.persist() is True

        reloaded = DietSession(storage)
        assert len(reloaded.store.resolve("2024-01-01").entries(MealSlot.LUNCH)) == 1

    def test_import_replaces_wholesale(self, storage):
        """Import drops days that are not in the imported document."""
        session = DietSession(storage)
        session.store.log_food("2024-01-01", "lunch", "food-2", 1)
        session.persist()

        imported = ExportBundle.model_validate({
            "dailyDietLogs": {"2024-02-01": {}},
            "dietPlan": {"snacks": [{"id": "s1", "foodId": "food-9", "servings": 1}]},
            "foodDatabase": [],
        })
        assert session.import_bundle(imported) is True

        assert not session.store.is_materialized("2024-01-01")
        assert session.store.is_materialized("2024-02-01")
        assert session.store.resolve("2024-01-01") == imported.diet_plan
        assert len(session.catalog) == 0
        assert DietSession(storage).store.is_materialized("2024-02-01")

    def test_set_goals(self, storage):
        """Goals are saved with the document."""
        session = DietSession(storage)
        assert session.set_goals(NutritionGoals(calories=2500, protein=180, carbs=250, fat=80))
        assert DietSession(storage).goals.calories == 2500

    def test_goals_restored_when_save_fails(self, storage):
        """Unsaved goals are not kept in memory."""
        session = DietSession(storage)
        with patch.object(storage, "save", return_value=False):
            assert session.set_goals(NutritionGoals(calories=2500)) is False
        assert session.goals.calories == 2000

    def test_import_restored_when_save_fails(self, storage):
        """A failed import leaves the previous document in place."""
        session = DietSession(storage)
        session.store.log_food("2024-01-01", "lunch", "food-2", 1)
        session.persist()

        imported = ExportBundle.model_validate({"dailyDietLogs": {}, "foodDatabase": []})
        with patch.object(storage, "save", return_value=False):
            assert session.import_bundle(imported) is False

        assert session.store.is_materialized("2024-01-01")
        assert len(session.catalog) == len(DEFAULT_FOOD_DATABASE)

    def test_commit_restores_snapshot_when_save_fails(self, storage):
        """commit puts the store back to the given snapshot on failure."""
        session = DietSession(storage)
        previous = session.store.snapshot()
        session.store.log_food("2024-01-01", "lunch", "food-2", 1)

        with patch.object(storage, "save", return_value=False):
            assert session.commit(previous) is False

        assert session.store.snapshot() is previous
