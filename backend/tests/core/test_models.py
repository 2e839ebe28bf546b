"""Unit tests for data models - validation and defaults."""

import pytest
from pydantic import ValidationError

from mealplan.core.models import (
    DayContent,
    DietState,
    ExportBundle,
    FoodItem,
    LoggedFoodEntry,
    MealSlot,
    NutritionGoals,
)


class TestMealSlot:
    """Tests for MealSlot parsing."""

    def test_plain_names(self):
        """Slot values parse to themselves."""
        assert MealSlot.parse("breakfast") is MealSlot.BREAKFAST
        assert MealSlot.parse("snacks") is MealSlot.SNACKS

    def test_post_workout_variants(self):
        """All post-workout spellings map to the same slot."""
        for name in ("postWorkout", "post-workout", "post_workout", "PostWorkout"):
            assert MealSlot.parse(name) is MealSlot.POST_WORKOUT

    def test_unknown_slot_rejected(self):
        """Unknown slot names raise ValueError."""
        with pytest.raises(ValueError):
            MealSlot.parse("brunch")


class TestFoodItem:
    """Tests for FoodItem model."""

    def test_export_format_keys(self):
        """Food parses from the export format."""
        food = FoodItem.model_validate({
            "id": "food-3",
            "name": "Boiled egg",
            "calories": 78,
            "protein": 6,
            "carbs": 0.6,
            "fat": 5,
            "servingSize": "1 large (50g)",
        })
        assert food.serving_size == "1 large (50g)"
        assert food.micronutrients == []

    def test_negative_macros_rejected(self):
        """Negative macros are rejected."""
        with pytest.raises(ValidationError):
            FoodItem(id="x", name="Food", calories=-1, protein=0, carbs=0, fat=0)


class TestLoggedFoodEntry:
    """Tests for LoggedFoodEntry model."""

    def test_id_generated(self):
        """Each entry gets a fresh id."""
        a = LoggedFoodEntry(food_id="food-1", servings=1)
        b = LoggedFoodEntry(food_id="food-1", servings=1)
        assert a.id and b.id
        assert a.id != b.id

    def test_zero_servings_rejected(self):
        """Zero servings is rejected."""
        with pytest.raises(ValidationError):
            LoggedFoodEntry(food_id="food-1", servings=0)

    def test_negative_servings_rejected(self):
        """Negative servings is rejected."""
        with pytest.raises(ValidationError):
            LoggedFoodEntry(food_id="food-1", servings=-0.5)

    def test_infinite_servings_rejected(self):
        """Infinite servings is rejected."""
        with pytest.raises(ValidationError):
            LoggedFoodEntry(food_id="food-1", servings=float("inf"))

    def test_frozen(self):
        """Entries cannot be modified in place."""
        entry = LoggedFoodEntry(food_id="food-1", servings=1)
        with pytest.raises(ValidationError):
            entry.servings = 2

    def test_alias_round_trip(self):
        """Entries read and write the foodId key."""
        entry = LoggedFoodEntry.model_validate({"id": "e1", "foodId": "food-1", "servings": 2})
        assert entry.food_id == "food-1"
        assert entry.model_dump(by_alias=True) == {"id": "e1", "foodId": "food-1", "servings": 2}


class TestDayContent:
    """Tests for DayContent model."""

    def test_empty_by_default(self):
        """New content has no food."""
        assert DayContent().is_empty()

    def test_missing_and_null_slots_are_empty(self):
        """Absent, null and empty slots all mean no food."""
        content = DayContent.model_validate({"breakfast": None, "lunch": []})
        assert content.is_empty()
        assert content == DayContent()

    def test_post_workout_alias(self):
        """The postWorkout key fills the post-workout slot."""
        content = DayContent.model_validate(
            {"postWorkout": [{"id": "e1", "foodId": "food-51", "servings": 1}]}
        )
        assert len(content.entries(MealSlot.POST_WORKOUT)) == 1

    def test_with_entries_returns_copy(self):
        """Replacing a slot leaves the original unchanged."""
        original = DayContent()
        entry = LoggedFoodEntry(food_id="food-1", servings=1)
        updated = original.with_entries(MealSlot.LUNCH, [entry])

        assert original.entries(MealSlot.LUNCH) == ()
        assert updated.entries(MealSlot.LUNCH) == (entry,)

    def test_to_plan_dict_skips_empty_slots(self):
        """Serialized content only lists slots with food."""
        entry = LoggedFoodEntry(id="e1", food_id="food-1", servings=1.5)
        content = DayContent().with_entries(MealSlot.DINNER, [entry])
        assert content.to_plan_dict() == {
            "dinner": [{"id": "e1", "foodId": "food-1", "servings": 1.5}]
        }


class TestDietState:
    """Tests for DietState model."""

    def test_rejects_malformed_date_key(self):
        """Override keys must be YYYY-MM-DD."""
        with pytest.raises(ValidationError):
            DietState(overrides={"2024/01/01": DayContent()})


class TestNutritionGoals:
    """Tests for NutritionGoals model."""

    def test_defaults(self):
        """Defaults match the stock daily goals."""
        goals = NutritionGoals()
        assert (goals.calories, goals.protein, goals.carbs, goals.fat) == (2000, 150, 200, 65)

    def test_negative_goal_rejected(self):
        """Negative goals are rejected."""
        with pytest.raises(ValidationError):
            NutritionGoals(calories=-100)


class TestExportBundle:
    """Tests for ExportBundle model."""

    def test_empty_document_uses_defaults(self):
        """Missing fields fall back to their defaults."""
        bundle = ExportBundle.model_validate({})
        assert bundle.daily_diet_logs == {}
        assert bundle.diet_plan == DayContent()
        assert bundle.food_database is None

    def test_null_fields_use_defaults(self):
        """Null diet fields fall back to their defaults."""
        bundle = ExportBundle.model_validate({"dailyDietLogs": None, "dietPlan": None})
        assert bundle.daily_diet_logs == {}
        assert bundle.diet_plan == DayContent()

    def test_empty_day_is_kept(self):
        """A date key with no food stays present."""
        bundle = ExportBundle.model_validate({"dailyDietLogs": {"2024-01-01": {}}})
        state = bundle.diet_state()
        assert "2024-01-01" in state.overrides

    def test_workout_data_carried_through(self):
        """Unrelated top-level fields survive a round trip."""
        bundle = ExportBundle.model_validate({"log": [{"id": "w1"}], "routines": []})
        document = bundle.to_document()
        assert document["log"] == [{"id": "w1"}]
        assert document["routines"] == []

    def test_document_keys(self):
        """Documents use the export format's top-level keys."""
        document = ExportBundle().to_document()
        assert set(document) == {"dailyDietLogs", "dietPlan", "nutritionGoals"}

    def test_rejects_malformed_date_key(self):
        """Malformed day keys are rejected on import."""
        with pytest.raises(ValidationError):
            ExportBundle.model_validate({"dailyDietLogs": {"yesterday": {}}})
