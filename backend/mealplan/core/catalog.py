"""Food Catalog - Read-only lookup interface over FoodItem records.

Catalog management lives elsewhere; the core only ever asks for one food by id
and must cope with the answer being None.
"""

from typing import Iterable, Optional, Protocol

from .models import FoodItem


class FoodCatalog(Protocol):
    """Anything that can look up a food by id."""

    def lookup(self, food_id: str) -> Optional[FoodItem]:
        ...


class InMemoryFoodCatalog:
    """Catalog backed by a dict of foods keyed by id."""

    def __init__(self, foods: Iterable[FoodItem] = ()) -> None:
        self._foods = {food.id: food for food in foods}

    def lookup(self, food_id: str) -> Optional[FoodItem]:
        return self._foods.get(food_id)

    def foods(self) -> list[FoodItem]:
        """All foods, in insertion order."""
        return list(self._foods.values())

    def __len__(self) -> int:
        return len(self._foods)

    def __contains__(self, food_id: object) -> bool:
        return food_id in self._foods


# Seed catalog used when a stored document carries no foodDatabase. Micronutrient
# tags are English names; documents tagged in another language (e.g. "حديد" for
# Iron) keep their tags, but describe_micronutrients will not display them.
DEFAULT_FOOD_DATABASE: list[FoodItem] = [
    FoodItem(id="food-1", name="Chicken breast", calories=165, protein=31, carbs=0, fat=3.6,
             serving_size="100g", micronutrients=["Iron"], keywords=["chicken", "poultry"]),
    FoodItem(id="food-3", name="Boiled egg", calories=78, protein=6, carbs=0.6, fat=5,
             serving_size="1 large (50g)", micronutrients=["Vitamin D"], keywords=["egg"]),
    FoodItem(id="food-6", name="Salmon", calories=208, protein=20, carbs=0, fat=13,
             serving_size="100g", micronutrients=["Omega-3", "Vitamin D"], keywords=["fish"]),
    FoodItem(id="food-14", name="Lentils", calories=116, protein=9, carbs=20, fat=0.4,
             serving_size="100g", micronutrients=["Iron", "Fiber"], keywords=["legumes"]),
    FoodItem(id="food-2", name="White rice", calories=130, protein=2.7, carbs=28, fat=0.3,
             serving_size="100g", keywords=["rice"]),
    FoodItem(id="food-16", name="Oats", calories=389, protein=16.9, carbs=66, fat=6.9,
             serving_size="100g", micronutrients=["Fiber", "Iron"], keywords=["oatmeal"]),
    FoodItem(id="food-8", name="Sweet potato", calories=86, protein=1.6, carbs=20, fat=0.1,
             serving_size="100g", micronutrients=["Vitamin A", "Fiber"], keywords=["potato"]),
    FoodItem(id="food-4", name="Olive oil", calories=884, protein=0, carbs=0, fat=100,
             serving_size="100g", micronutrients=["Omega-3"], keywords=["oil"]),
    FoodItem(id="food-20", name="Almonds", calories=579, protein=21, carbs=22, fat=49,
             serving_size="100g", micronutrients=["Omega-3", "Calcium", "Fiber"], keywords=["nuts"]),
    FoodItem(id="food-9", name="Banana", calories=89, protein=1.1, carbs=23, fat=0.3,
             serving_size="100g", micronutrients=["Potassium"], keywords=["fruit"]),
    FoodItem(id="food-5", name="Orange", calories=47, protein=0.9, carbs=12, fat=0.1,
             serving_size="100g", micronutrients=["Vitamin C", "Fiber"], keywords=["fruit"]),
    FoodItem(id="food-22", name="Broccoli", calories=34, protein=2.8, carbs=7, fat=0.4,
             serving_size="100g", micronutrients=["Vitamin C", "Vitamin A", "Fiber"], keywords=["vegetable"]),
    FoodItem(id="food-11", name="Milk", calories=42, protein=3.4, carbs=5, fat=1,
             serving_size="100g", micronutrients=["Calcium", "Vitamin D"], keywords=["dairy"]),
    FoodItem(id="food-13", name="Greek yogurt", calories=59, protein=10, carbs=3.6, fat=0.4,
             serving_size="100g", micronutrients=["Calcium"], keywords=["yogurt", "dairy"]),
    FoodItem(id="food-51", name="Protein shake", calories=120, protein=24, carbs=3, fat=1.5,
             serving_size="1 scoop in water", keywords=["whey", "supplement"]),
    FoodItem(id="food-47", name="Water", calories=0, protein=0, carbs=0, fat=0,
             serving_size="1 cup (240ml)", keywords=["drink"]),
]
