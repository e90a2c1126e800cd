"""
Recipe browsing helpers: category/title filtering and lookup.
"""

import logging
from typing import Iterable, List

from kitchen.data.models import Ingredient, Recipe

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "All"
CATEGORIES = [ALL_CATEGORIES, "Breakfast", "Dinner", "Dessert"]
RECIPE_CATEGORIES = CATEGORIES[1:]
DIFFICULTIES = ["Easy", "Medium", "Hard"]


class RecipeNotFoundError(LookupError):
    """Raised when a recipe id is not in the collection."""

    def __init__(self, recipe_id: str):
        super().__init__(f"Recipe not found: {recipe_id}")
        self.recipe_id = recipe_id


def filter_recipes(
    recipes: Iterable[Recipe],
    category: str = ALL_CATEGORIES,
    query: str = "",
) -> List[Recipe]:
    """
    Filter recipes by category and title.

    Args:
        recipes: Source collection
        category: "All" or an exact category string
        query: Case-insensitive substring matched against the title;
            an empty query matches everything

    Returns:
        Matching recipes in their original relative order
    """
    matches = list(recipes)

    if category != ALL_CATEGORIES:
        matches = [r for r in matches if r.category == category]

    if query:
        needle = query.casefold()
        matches = [r for r in matches if needle in r.title.casefold()]

    logger.debug(f"filter_recipes(category={category!r}, query={query!r}) -> {len(matches)} match(es)")
    return matches


def find_recipe(recipes: Iterable[Recipe], recipe_id: str) -> Recipe:
    """
    Look up a recipe by id.

    Raises:
        RecipeNotFoundError: If no recipe has that id
    """
    for recipe in recipes:
        if recipe.id == recipe_id:
            return recipe
    raise RecipeNotFoundError(recipe_id)


def format_ingredient(ingredient: Ingredient) -> str:
    """Display line for an ingredient, e.g. "Cream Cheese – 600 g"."""
    return str(ingredient)
