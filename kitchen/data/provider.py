"""
Data Provider Abstraction.

Supplies the initial records the app starts with. Providers can be swapped:
- SampleDataProvider: Built-in sample recipes, fridge items and shopping list
- StaticDataProvider: Caller-supplied records (tests, fixtures, empty start)
"""

from abc import ABC, abstractmethod
from datetime import date, timedelta
from typing import List, Optional
import copy
import os
import logging

from kitchen.data.models import FridgeItem, Ingredient, Recipe, ShoppingItem

logger = logging.getLogger(__name__)


class DataProvider(ABC):
    """Abstract base class for initial data sources."""

    @abstractmethod
    def recipes(self) -> List[Recipe]:
        """Recipes available in the browser."""
        pass

    @abstractmethod
    def fridge_items(self, today: date) -> List[FridgeItem]:
        """Fridge contents. Expiry dates may be relative to today."""
        pass

    @abstractmethod
    def shopping_items(self) -> List[ShoppingItem]:
        """Initial shopping list."""
        pass

    def suggested_recipe(self) -> Optional[Recipe]:
        """Dashboard "Tonight's Suggestion". Defaults to the first recipe."""
        recipes = self.recipes()
        return recipes[0] if recipes else None


def _basque_cheesecake() -> Recipe:
    return Recipe(
        title="Basque Cheesecake",
        category="Dessert",
        prep_time="60 min",
        difficulty="Medium",
        ingredients=[
            Ingredient(name="Cream Cheese", amount="600 g"),
            Ingredient(name="Sugar", amount="180 g"),
            Ingredient(name="Eggs", amount="4"),
            Ingredient(name="Heavy Cream", amount="240 ml"),
            Ingredient(name="Cake Flour", amount="20 g"),
            Ingredient(name="Vanilla Extract", amount="1 tsp"),
        ],
        steps=[
            "Preheat oven to 230°C. Line a springform pan with parchment, ensuring tall sides.",
            "Beat cream cheese and sugar until smooth.",
            "Add eggs one by one, then heavy cream and vanilla. Sift in flour and mix just to combine.",
            "Pour batter into pan. Bake until deeply browned on top and just set in center.",
            "Cool completely. The center will sink slightly as it sets.",
        ],
        last_cooked="6 months ago",
        thumbnail="flame",
    )


def _garlic_butter_chicken() -> Recipe:
    return Recipe(
        title="Garlic Butter Chicken",
        category="Dinner",
        prep_time="30 min",
        difficulty="Easy",
        ingredients=[
            Ingredient(name="Chicken Thighs", amount="600 g"),
            Ingredient(name="Garlic", amount="4 cloves"),
            Ingredient(name="Butter", amount="40 g"),
            Ingredient(name="Parsley", amount="A handful"),
        ],
        steps=[
            "Season chicken and sear until golden.",
            "Add butter and garlic, baste to finish.",
            "Rest and garnish with chopped parsley.",
        ],
        last_cooked=None,
        thumbnail="fork.knife",
    )


class SampleDataProvider(DataProvider):
    """
    Built-in sample data.

    Fridge and shopping items are built fresh on every call. Recipes are
    created once per provider and shared by every list it returns.
    """

    def __init__(self):
        self._recipes = [_basque_cheesecake(), _garlic_butter_chicken()]

    def recipes(self) -> List[Recipe]:
        return list(self._recipes)

    def fridge_items(self, today: date) -> List[FridgeItem]:
        return [
            FridgeItem(name="Beef", quantity="500 g", expiry=today + timedelta(days=2)),
            FridgeItem(name="Milk", quantity="1 L", expiry=today - timedelta(days=1)),
            FridgeItem(name="Eggs", quantity="12", expiry=today + timedelta(days=10)),
        ]

    def shopping_items(self) -> List[ShoppingItem]:
        return [
            ShoppingItem(name="Heavy Cream", quantity="1"),
            ShoppingItem(name="Vanilla Extract", quantity="1"),
            ShoppingItem(name="Parsley", quantity="1 bunch"),
        ]

    def suggested_recipe(self) -> Optional[Recipe]:
        return self._recipes[0]


class StaticDataProvider(DataProvider):
    """
    Provider over caller-supplied records.

    Records are deep-copied on every call so each state container gets
    its own mutable copies.
    """

    def __init__(
        self,
        recipes: Optional[List[Recipe]] = None,
        fridge_items: Optional[List[FridgeItem]] = None,
        shopping_items: Optional[List[ShoppingItem]] = None,
        suggested: Optional[Recipe] = None,
    ):
        self._recipes = recipes or []
        self._fridge_items = fridge_items or []
        self._shopping_items = shopping_items or []
        self._suggested = suggested

    def recipes(self) -> List[Recipe]:
        return list(self._recipes)

    def fridge_items(self, today: date) -> List[FridgeItem]:
        return copy.deepcopy(self._fridge_items)

    def shopping_items(self) -> List[ShoppingItem]:
        return copy.deepcopy(self._shopping_items)

    def suggested_recipe(self) -> Optional[Recipe]:
        if self._suggested is not None:
            return self._suggested
        return super().suggested_recipe()


def get_data_provider(source: Optional[str] = None) -> DataProvider:
    """
    Get a data provider instance.

    Args:
        source: "sample" or "empty" (uses env var if not provided)

    Returns:
        DataProvider instance

    Environment Variables:
        KITCHEN_DATA: "sample" (default) or "empty"
    """
    source = (source or os.environ.get("KITCHEN_DATA", "sample")).lower()

    if source == "empty":
        logger.info("Starting with an empty kitchen")
        return StaticDataProvider()

    if source != "sample":
        logger.warning(f"Unknown KITCHEN_DATA source '{source}', using sample data")

    return SampleDataProvider()
