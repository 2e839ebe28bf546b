"""State Transitions - Pure functions producing a new DietState per mutation.

Every function validates its input before building anything, and returns a
new state; the input state is never modified. The first mutation targeting an
untouched day copies the template into that day, then applies the change.
"""

import logging
from datetime import date

from .dates import normalize_date_key
from .models import DayContent, DietState, LoggedFoodEntry, MealSlot
from .resolver import resolve


logger = logging.getLogger(__name__)


def new_entry(food_id: str, servings: float) -> LoggedFoodEntry:
    """Mint an entry with a fresh id.

    Raises:
        ValueError: If servings is not positive or food_id is empty
    """
    return LoggedFoodEntry(food_id=food_id, servings=servings)


def append_entry(content: DayContent, meal: "MealSlot | str", entry: LoggedFoodEntry) -> DayContent:
    """Return content with entry appended to the meal."""
    slot = MealSlot.parse(meal)
    return content.with_entries(slot, content.entries(slot) + (entry,))


def remove_entry(content: DayContent, meal: "MealSlot | str", entry_id: str) -> DayContent:
    """Return content without the entry; unknown ids leave it unchanged."""
    slot = MealSlot.parse(meal)
    return content.with_entries(slot, [e for e in content.entries(slot) if e.id != entry_id])


def _with_override(state: DietState, key: str, content: DayContent) -> DietState:
    if key not in state.overrides:
        logger.debug("Materializing day %s", key)
    return DietState(template=state.template, overrides={**state.overrides, key: content})


def log_food(
    state: DietState,
    day: "date | str",
    meal: "MealSlot | str",
    food_id: str,
    servings: float,
) -> tuple[DietState, LoggedFoodEntry]:
    """Add one food entry to a day.

    The food id is not checked against the catalog; dangling ids are skipped
    when aggregating.

    Args:
        state: Current state
        day: Target day
        meal: Target meal slot
        food_id: Catalog id of the food
        servings: Positive serving multiplier

    Returns:
        Tuple of (new state, created entry)

    Raises:
        ValueError: On a malformed day, unknown slot or non-positive servings
    """
    key = normalize_date_key(day)
    slot = MealSlot.parse(meal)
    entry = new_entry(food_id, servings)

    content = append_entry(resolve(state, key), slot, entry)
    return _with_override(state, key, content), entry


def remove_logged_food(
    state: DietState,
    day: "date | str",
    meal: "MealSlot | str",
    entry_id: str,
) -> DietState:
    """Remove an entry from a day, materializing the day first if untouched.

    Removing an id that is not there is a no-op on the content, but still
    leaves the day materialized.

    Raises:
        ValueError: On a malformed day or unknown slot
    """
    key = normalize_date_key(day)
    slot = MealSlot.parse(meal)

    content = remove_entry(resolve(state, key), slot, entry_id)
    return _with_override(state, key, content)


def update_template(state: DietState, new_template: DayContent) -> DietState:
    """Replace the template wholesale. Overrides are left untouched."""
    logger.debug("Replacing template (%d entries)", len(new_template.all_entries()))
    return DietState(template=new_template, overrides=dict(state.overrides))


def replace_day_log(state: DietState, day: "date | str", source: DayContent) -> DietState:
    """Set a day's content to source, regardless of what it held before.

    This does not ask for confirmation; callers check
    needs_overwrite_confirmation first when the day may hold explicit food.

    Raises:
        ValueError: On a malformed day
    """
    key = normalize_date_key(day)
    return _with_override(state, key, source)


def add_template_food(
    template: DayContent,
    meal: "MealSlot | str",
    food_id: str,
    servings: float,
) -> tuple[DayContent, LoggedFoodEntry]:
    """Build a new template with one more entry, for update_template."""
    entry = new_entry(food_id, servings)
    return append_entry(template, meal, entry), entry


def remove_template_food(template: DayContent, meal: "MealSlot | str", entry_id: str) -> DayContent:
    """Build a new template without the entry, for update_template."""
    return remove_entry(template, meal, entry_id)
