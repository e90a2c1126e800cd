"""
In-memory state container for Kitchen Companion.

Holds every screen's records in one object owned by the caller (the web
app or the interactive session) instead of per-screen copies:
- recipes: Recipe browser contents
- fridge_items: Fridge inventory
- shopping_items: Shopping checklist
- profile: Profile screen preferences

Nothing is persisted; state lives as long as the object.
"""

import logging
from datetime import date, datetime
from typing import Callable, Dict, Iterable, List, Optional

from kitchen.data.models import FridgeItem, Recipe, ShoppingItem, UserProfile
from kitchen.data.provider import DataProvider, SampleDataProvider
from kitchen.expiry import EXPIRING_SOON_DAYS, ExpiryStatus, classify_expiry, count_expiring_soon
from kitchen.recipes import ALL_CATEGORIES, filter_recipes, find_recipe
from kitchen import shopping

logger = logging.getLogger(__name__)


class KitchenState:
    """Mutable in-memory store shared by all screens."""

    def __init__(
        self,
        provider: Optional[DataProvider] = None,
        clock: Callable[[], datetime] = datetime.now,
        expiry_window_days: int = EXPIRING_SOON_DAYS,
    ):
        """
        Initialize state from a data provider.

        Args:
            provider: Source of initial records (defaults to sample data)
            clock: Returns the reference "now" for expiry checks
            expiry_window_days: Length of the expiring-soon window
        """
        self.provider = provider or SampleDataProvider()
        self.clock = clock
        self.expiry_window_days = expiry_window_days

        today = self.today()
        self.recipes: List[Recipe] = self.provider.recipes()
        self.fridge_items: List[FridgeItem] = self.provider.fridge_items(today)
        self.shopping_items: List[ShoppingItem] = self.provider.shopping_items()
        self.profile = UserProfile()

        logger.info(
            f"Kitchen state loaded: {len(self.recipes)} recipes, "
            f"{len(self.fridge_items)} fridge items, {len(self.shopping_items)} shopping items"
        )

    def now(self) -> datetime:
        return self.clock()

    def today(self) -> date:
        return self.now().date()

    # ==================== Recipes ====================

    def search_recipes(self, category: str = ALL_CATEGORIES, query: str = "") -> List[Recipe]:
        """Recipes matching the category and title query."""
        return filter_recipes(self.recipes, category=category, query=query)

    def get_recipe(self, recipe_id: str) -> Recipe:
        """Raises RecipeNotFoundError for unknown ids."""
        return find_recipe(self.recipes, recipe_id)

    def suggested_recipe(self) -> Optional[Recipe]:
        return self.provider.suggested_recipe()

    def add_recipe(self, recipe: Recipe) -> Recipe:
        self.recipes.append(recipe)
        logger.info(f"Added recipe '{recipe.title}' ({recipe.category})")
        return recipe

    # ==================== Fridge ====================

    def add_fridge_item(self, item: FridgeItem) -> FridgeItem:
        self.fridge_items.append(item)
        logger.info(f"Added fridge item '{item.name}' ({item.quantity}, expires {item.expiry})")
        return item

    def delete_fridge_items(self, offsets: Iterable[int]) -> None:
        """Delete fridge items by position. Raises IndexError if out of range."""
        shopping.remove_at_offsets(self.fridge_items, offsets)

    def fridge_status(self, item: FridgeItem) -> ExpiryStatus:
        return classify_expiry(item.expiry, self.now(), self.expiry_window_days)

    def fridge_overview(self) -> List[Dict]:
        """Fridge items with their derived status, in list order."""
        overview = []
        for item in self.fridge_items:
            status = self.fridge_status(item)
            overview.append({
                **item.to_dict(),
                "status": status.value,
                "label": status.label,
                "colour": status.colour,
            })
        return overview

    def expiring_soon_count(self) -> int:
        return count_expiring_soon(self.fridge_items, self.now(), self.expiry_window_days)

    # ==================== Shopping ====================

    def add_shopping_item(self, item: ShoppingItem) -> ShoppingItem:
        self.shopping_items.append(item)
        logger.info(f"Added shopping item '{item.name}' ({item.quantity})")
        return item

    def get_shopping_item(self, item_id: str) -> ShoppingItem:
        """Raises ItemNotFoundError for unknown ids."""
        return shopping.find_item(self.shopping_items, item_id)

    def toggle_shopping_item(self, item_id: str) -> ShoppingItem:
        return shopping.toggle_checked(self.get_shopping_item(item_id))

    def remove_checked_items(self) -> List[ShoppingItem]:
        shopping.remove_checked(self.shopping_items)
        return self.shopping_items

    def delete_shopping_items(self, offsets: Iterable[int]) -> None:
        """Delete shopping items by position. Raises IndexError if out of range."""
        shopping.remove_at_offsets(self.shopping_items, offsets)

    def add_recipe_to_shopping_list(self, recipe_id: str) -> List[ShoppingItem]:
        """Add a recipe's missing ingredients to the shopping list."""
        recipe = self.get_recipe(recipe_id)
        return shopping.add_recipe_ingredients(self.shopping_items, recipe)

    def add_recipes_to_shopping_list(self, recipe_ids: Iterable[str]) -> List[ShoppingItem]:
        """
        Add the missing ingredients of several recipes.

        Every id is resolved before the list changes, so an unknown id
        raises RecipeNotFoundError with nothing added.
        """
        recipes = [self.get_recipe(recipe_id) for recipe_id in recipe_ids]
        added = []
        for recipe in recipes:
            added.extend(shopping.add_recipe_ingredients(self.shopping_items, recipe))
        return added

    # ==================== Profile ====================

    def save_profile(self, profile: UserProfile) -> UserProfile:
        self.profile = profile
        logger.info(f"Profile updated: vegetarian={profile.vegetarian}, units={profile.units}")
        return profile
