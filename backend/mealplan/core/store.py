"""Diet Plan Store - The single mutation surface over the template and overrides.

Holds one DietState and swaps it for the result of a pure transition on each
mutation, so no caller ever sees a half-applied update. Reads are recomputed
from the current state every time.
"""

from datetime import date
from typing import Optional

from . import mutations, resolver
from .catalog import FoodCatalog
from .dates import previous_day_key
from .models import DayContent, DayState, DietState, LoggedFoodEntry, MealSlot, NutrientTotals
from .nutrients import aggregate


class DietPlanStore:
    """In-memory owner of the diet plan template and per-day overrides.

    The overwrite confirmation for copying onto a day with explicit food is
    the caller's job: replace_day_log and copy_previous_day never refuse.
    Use needs_overwrite_confirmation to decide whether to ask.
    """

    def __init__(self, state: Optional[DietState] = None) -> None:
        self._state = state if state is not None else DietState()

    # ==================== Reads ====================

    @property
    def template(self) -> DayContent:
        return self._state.template

    def snapshot(self) -> DietState:
        """The current state as an immutable value."""
        return self._state

    def day_state(self, day: "date | str") -> DayState:
        return resolver.day_state(self._state, day)

    def resolve(self, day: "date | str") -> DayContent:
        return resolver.resolve(self._state, day)

    def aggregate(self, day: "date | str", catalog: FoodCatalog) -> NutrientTotals:
        """Totals for the effective content of a day."""
        return aggregate(self.resolve(day), catalog)

    def is_materialized(self, day: "date | str") -> bool:
        return resolver.is_materialized(self._state, day)

    def needs_overwrite_confirmation(self, day: "date | str") -> bool:
        return resolver.needs_overwrite_confirmation(self._state, day)

    # ==================== Mutations ====================

    def load(self, state: DietState) -> None:
        """Replace the whole state, e.g. after reading a stored document."""
        self._state = state

    def log_food(
        self, day: "date | str", meal: "MealSlot | str", food_id: str, servings: float
    ) -> LoggedFoodEntry:
        self._state, entry = mutations.log_food(self._state, day, meal, food_id, servings)
        return entry

    def remove_logged_food(self, day: "date | str", meal: "MealSlot | str", entry_id: str) -> None:
        self._state = mutations.remove_logged_food(self._state, day, meal, entry_id)

    def update_template(self, new_template: DayContent) -> None:
        self._state = mutations.update_template(self._state, new_template)

    def replace_day_log(self, day: "date | str", source: DayContent) -> None:
        self._state = mutations.replace_day_log(self._state, day, source)

    def copy_previous_day(self, day: "date | str") -> DayContent:
        """Copy the effective content of the day before onto this day.

        Returns:
            The content that was copied
        """
        source = self.resolve(previous_day_key(day))
        self.replace_day_log(day, source)
        return source
