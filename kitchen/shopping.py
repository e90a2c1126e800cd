"""
Shopping checklist operations.

Toggling flips an item's checked flag in place. Bulk removal drops every
checked item and keeps the survivors in order. Positional deletion removes
by index regardless of checked state and is shared with the fridge list.
"""

import logging
from typing import Iterable, List, MutableSequence, Optional, TypeVar

from kitchen.data.models import Recipe, ShoppingItem

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ItemNotFoundError(LookupError):
    """Raised when a shopping item id is not on the list."""

    def __init__(self, item_id: str):
        super().__init__(f"Shopping item not found: {item_id}")
        self.item_id = item_id


def toggle_checked(item: ShoppingItem) -> ShoppingItem:
    """Flip the checked flag in place and return the same item."""
    item.is_checked = not item.is_checked
    logger.debug(f"Toggled '{item.name}' -> checked={item.is_checked}")
    return item


def remove_checked(items: MutableSequence[ShoppingItem]) -> MutableSequence[ShoppingItem]:
    """
    Remove all checked items in place.

    Args:
        items: Shopping list (mutated)

    Returns:
        The same list, holding the unchecked items in original order
    """
    before = len(items)
    items[:] = [item for item in items if not item.is_checked]
    logger.info(f"Removed {before - len(items)} checked item(s)")
    return items


def remove_at_offsets(items: MutableSequence[T], offsets: Iterable[int]) -> MutableSequence[T]:
    """
    Delete items by position.

    Args:
        items: List to delete from (mutated)
        offsets: Indices into the list as it was before the call

    Returns:
        The same list with the remaining items in original relative order

    Raises:
        IndexError: If any offset is out of range (nothing is removed)
    """
    positions = sorted(set(offsets), reverse=True)
    for position in positions:
        if not 0 <= position < len(items):
            raise IndexError(f"Offset {position} out of range for {len(items)} item(s)")

    for position in positions:
        del items[position]

    logger.info(f"Deleted {len(positions)} item(s) at offsets {sorted(positions)}")
    return items


def find_item(items: Iterable[ShoppingItem], item_id: str) -> ShoppingItem:
    """
    Look up a shopping item by id.

    Raises:
        ItemNotFoundError: If no item has that id
    """
    for item in items:
        if item.id == item_id:
            return item
    raise ItemNotFoundError(item_id)


def _find_by_name(items: Iterable[ShoppingItem], name: str) -> Optional[ShoppingItem]:
    """Find an existing item by name (case-insensitive)."""
    name_lower = name.lower()
    for item in items:
        if item.name.lower() == name_lower:
            return item
    return None


def add_recipe_ingredients(items: List[ShoppingItem], recipe: Recipe) -> List[ShoppingItem]:
    """
    Add a recipe's ingredients to the shopping list.

    Ingredients already on the list (same name, any case) are skipped.
    Quantity is the ingredient amount, or "1" when it has none.

    Returns:
        The newly added items
    """
    added = []
    for ingredient in recipe.ingredients:
        if _find_by_name(items, ingredient.name):
            continue
        new_item = ShoppingItem(name=ingredient.name, quantity=ingredient.amount or "1")
        items.append(new_item)
        added.append(new_item)

    logger.info(f"Added {len(added)} ingredient(s) from '{recipe.title}' to shopping list")
    return added
