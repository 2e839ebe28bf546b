"""Core Data Models - Pydantic models for type safety.

All models are immutable value objects with no behavior beyond validation.
DayContent holds tuples of frozen entries, so copying a day can never alias
another day or the template.
"""

from datetime import date as DateType
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterator, Literal, Mapping, Optional, Union
import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .dates import parse_date_key


class MealSlot(str, Enum):
    """Fixed set of meal categories a logged food belongs to."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    POST_WORKOUT = "postWorkout"
    SNACKS = "snacks"

    @classmethod
    def parse(cls, value: "str | MealSlot") -> "MealSlot":
        """Parse a slot name, accepting post-workout spelling variants.

        Raises:
            ValueError: If the name is not a known meal slot
        """
        if isinstance(value, MealSlot):
            return value
        normalized = value.strip()
        if normalized.lower() in ("post-workout", "post_workout", "postworkout"):
            return cls.POST_WORKOUT
        try:
            return cls(normalized.lower())
        except ValueError:
            raise ValueError(f"Unknown meal slot: {value!r}") from None


# Attribute name on DayContent for each slot
_SLOT_FIELDS = {
    MealSlot.BREAKFAST: "breakfast",
    MealSlot.LUNCH: "lunch",
    MealSlot.DINNER: "dinner",
    MealSlot.POST_WORKOUT: "post_workout",
    MealSlot.SNACKS: "snacks",
}


class FoodItem(BaseModel):
    """A catalog food with macros denominated per one serving."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1, description="Display name of the food")
    calories: float = Field(ge=0, allow_inf_nan=False, description="Calories per serving")
    protein: float = Field(ge=0, allow_inf_nan=False, description="Protein in grams per serving")
    carbs: float = Field(ge=0, allow_inf_nan=False, description="Carbohydrates in grams per serving")
    fat: float = Field(ge=0, allow_inf_nan=False, description="Fat in grams per serving")
    serving_size: str = Field(default="", alias="servingSize", description="e.g. '100g', '1 cup'")
    micronutrients: list[str] = Field(default_factory=list, description="Micronutrient tag names")
    keywords: list[str] = Field(default_factory=list)


class LoggedFoodEntry(BaseModel):
    """One serving-count of a catalog food, placed in a meal slot."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    food_id: str = Field(alias="foodId", min_length=1)
    servings: float = Field(gt=0, allow_inf_nan=False, description="Multiplier on the food's per-serving macros")


EntryTuple = tuple[LoggedFoodEntry, ...]


class DayContent(BaseModel):
    """What was eaten in one day, by meal slot.

    A slot that is missing, null or empty all mean no food logged.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    breakfast: EntryTuple = ()
    lunch: EntryTuple = ()
    dinner: EntryTuple = ()
    post_workout: EntryTuple = Field(default=(), alias="postWorkout")
    snacks: EntryTuple = ()

    @field_validator("breakfast", "lunch", "dinner", "post_workout", "snacks", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return () if value is None else value

    def entries(self, slot: MealSlot) -> EntryTuple:
        """Entries logged in one slot, in insertion order."""
        return getattr(self, _SLOT_FIELDS[slot])

    def with_entries(self, slot: MealSlot, entries: "list[LoggedFoodEntry] | EntryTuple") -> "DayContent":
        """Return a copy with one slot replaced."""
        return self.model_copy(update={_SLOT_FIELDS[slot]: tuple(entries)})

    def slots(self) -> Iterator[tuple[MealSlot, EntryTuple]]:
        """Iterate (slot, entries) over every slot."""
        for slot in MealSlot:
            yield slot, self.entries(slot)

    def all_entries(self) -> list[LoggedFoodEntry]:
        """Every entry across all slots."""
        return [entry for _, entries in self.slots() for entry in entries]

    def is_empty(self) -> bool:
        """True when no slot has any entry."""
        return not any(entries for _, entries in self.slots())

    def to_plan_dict(self) -> dict[str, list[dict]]:
        """Serialize using the export format keys (only non-empty slots)."""
        return {
            slot.value: [e.model_dump(by_alias=True) for e in entries]
            for slot, entries in self.slots()
            if entries
        }


class Inherited(BaseModel):
    """Day state: never touched, shows whatever the template holds."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["inherited"] = "inherited"


class Explicit(BaseModel):
    """Day state: has its own authoritative content."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["explicit"] = "explicit"
    content: DayContent


DayState = Union[Inherited, Explicit]


class DietState(BaseModel):
    """Full core state: the base template plus per-day overrides.

    overrides is a read-only view over a private copy of the mapping it was
    built from.
    """

    model_config = ConfigDict(frozen=True)

    template: DayContent = Field(default_factory=DayContent)
    overrides: Mapping[str, DayContent] = Field(default_factory=dict, validate_default=True)

    @field_validator("overrides")
    @classmethod
    def _valid_date_keys(cls, value: Mapping[str, DayContent]) -> Mapping[str, DayContent]:
        for key in value:
            parse_date_key(key)
        return MappingProxyType(dict(value))


class NutritionGoals(BaseModel):
    """Daily macro targets."""

    calories: float = Field(default=2000, ge=0, description="Daily calorie target")
    protein: float = Field(default=150, ge=0, description="Daily protein target in grams")
    carbs: float = Field(default=200, ge=0, description="Daily carbohydrate target in grams")
    fat: float = Field(default=65, ge=0, description="Daily fat target in grams")


class NutrientTotals(BaseModel):
    """Aggregated intake for one day. Values are unrounded."""

    model_config = ConfigDict(frozen=True)

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    micronutrients: frozenset[str] = frozenset()


class MacroProgress(BaseModel):
    """One macro compared against its goal."""

    value: float
    goal: float
    fraction: float = Field(ge=0, le=1, description="value / goal clamped to [0, 1]")
    remaining: float = Field(description="Negative if over goal")


class GoalProgress(BaseModel):
    """All four macros compared against the daily goals."""

    calories: MacroProgress
    protein: MacroProgress
    carbs: MacroProgress
    fat: MacroProgress


class DaySummary(BaseModel):
    """Summary for a single day in weekly report."""

    log_date: DateType
    totals: NutrientTotals
    entry_count: int
    materialized: bool = Field(description="False when the day still follows the template")


class WeeklyReport(BaseModel):
    """Weekly report with daily summaries and aggregate metrics."""

    week_start: DateType
    week_end: DateType
    daily_summaries: list[DaySummary]
    total_calories: float
    total_protein: float
    total_carbs: float
    total_fat: float
    avg_daily_calories: float
    days_with_food: int
    micronutrients: frozenset[str]


class ExportBundle(BaseModel):
    """Whole-application export document.

    Workout data and any other top-level fields are carried through as extras.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    daily_diet_logs: dict[str, DayContent] = Field(default_factory=dict, alias="dailyDietLogs")
    diet_plan: DayContent = Field(default_factory=DayContent, alias="dietPlan")
    nutrition_goals: NutritionGoals = Field(default_factory=NutritionGoals, alias="nutritionGoals")
    food_database: Optional[list[FoodItem]] = Field(default=None, alias="foodDatabase")

    @field_validator("daily_diet_logs", "diet_plan", "nutrition_goals", mode="before")
    @classmethod
    def _none_is_default(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("daily_diet_logs")
    @classmethod
    def _valid_date_keys(cls, value: dict[str, DayContent]) -> dict[str, DayContent]:
        for key in value:
            parse_date_key(key)
        return value

    def diet_state(self) -> DietState:
        """Core state carried by this bundle."""
        return DietState(template=self.diet_plan, overrides=dict(self.daily_diet_logs))

    def to_document(self) -> dict[str, Any]:
        """Plain JSON-ready dict using the export format keys."""
        data = self.model_dump(mode="json", by_alias=True, exclude={"daily_diet_logs", "diet_plan"})
        data["dailyDietLogs"] = {key: day.to_plan_dict() for key, day in self.daily_diet_logs.items()}
        data["dietPlan"] = self.diet_plan.to_plan_dict()
        if self.food_database is None:
            data.pop("foodDatabase", None)
        return data
