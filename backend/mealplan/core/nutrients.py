"""Nutrient Aggregation - Pure functions for nutrition math.

All functions are pure: same input always produces same output, no side effects.
"""

import math
from typing import NamedTuple

from .catalog import FoodCatalog
from .models import DayContent, NutrientTotals


class MicronutrientInfo(NamedTuple):
    name: str
    emoji: str


# Known micronutrient tags, in display order
MICRONUTRIENTS: tuple[MicronutrientInfo, ...] = (
    MicronutrientInfo("Vitamin C", "🍊"),
    MicronutrientInfo("Iron", "⚙️"),
    MicronutrientInfo("Calcium", "🥛"),
    MicronutrientInfo("Vitamin D", "☀️"),
    MicronutrientInfo("Potassium", "🍌"),
    MicronutrientInfo("Omega-3", "🐟"),
    MicronutrientInfo("Vitamin A", "🥕"),
    MicronutrientInfo("Fiber", "🌾"),
)


def aggregate(content: DayContent, catalog: FoodCatalog) -> NutrientTotals:
    """Total the macros and micronutrient tags for one day's content.

    Entries whose food is no longer in the catalog contribute nothing.
    Totals use exactly-rounded summation, so any ordering of the entries
    within or across slots yields identical results.

    Args:
        content: The effective content of a day
        catalog: Food lookup

    Returns:
        NutrientTotals with unrounded values
    """
    calories: list[float] = []
    protein: list[float] = []
    carbs: list[float] = []
    fat: list[float] = []
    tags: set[str] = set()

    for entry in content.all_entries():
        food = catalog.lookup(entry.food_id)
        if food is None:
            continue
        calories.append(food.calories * entry.servings)
        protein.append(food.protein * entry.servings)
        carbs.append(food.carbs * entry.servings)
        fat.append(food.fat * entry.servings)
        tags.update(food.micronutrients)

    return NutrientTotals(
        calories=math.fsum(calories),
        protein=math.fsum(protein),
        carbs=math.fsum(carbs),
        fat=math.fsum(fat),
        micronutrients=frozenset(tags),
    )


def count_resolved_entries(content: DayContent, catalog: FoodCatalog) -> int:
    """Number of entries whose food still resolves in the catalog."""
    return sum(1 for e in content.all_entries() if catalog.lookup(e.food_id) is not None)


def describe_micronutrients(tags: "set[str] | frozenset[str]") -> list[MicronutrientInfo]:
    """Known micronutrients present in tags, in display order.

    Tags that are not in MICRONUTRIENTS, including non-English names, are not
    displayed.
    """
    return [info for info in MICRONUTRIENTS if info.name in tags]
