"""
Unit tests for add-screen form validation.
"""

import pytest
from datetime import date, timedelta
from pydantic import ValidationError

from kitchen.forms import (
    DEFAULT_EXPIRY_DAYS,
    FridgeItemForm,
    ProfileForm,
    RecipeForm,
    ShoppingItemForm,
    default_expiry,
    first_error,
)


class TestFridgeItemForm:
    """Name and quantity are required before saving."""

    def test_valid(self):
        form = FridgeItemForm(name="Butter", quantity="250 g", expiry=date(2026, 10, 25))
        item = form.to_item(date(2026, 10, 19))
        assert (item.name, item.quantity, item.expiry) == ("Butter", "250 g", date(2026, 10, 25))

    def test_expiry_defaults_relative_to_given_today(self):
        """The default follows the caller's today, not the wall clock."""
        today = date(2031, 1, 30)
        form = FridgeItemForm(name="Butter", quantity="250 g")
        assert form.expiry is None

        item = form.to_item(today)

        assert item.expiry == today + timedelta(days=DEFAULT_EXPIRY_DAYS)
        assert item.expiry == default_expiry(today) == date(2031, 2, 4)

    def test_explicit_expiry_kept(self):
        form = FridgeItemForm(name="Butter", quantity="1", expiry=date(2026, 10, 20))
        assert form.to_item(date(2031, 1, 30)).expiry == date(2026, 10, 20)

    def test_iso_string_expiry(self):
        form = FridgeItemForm(name="Butter", quantity="1", expiry="2026-11-01")
        assert form.expiry == date(2026, 11, 1)

    @pytest.mark.parametrize("field", ["name", "quantity"])
    def test_blank_field_rejected(self, field):
        data = {"name": "Butter", "quantity": "1"}
        data[field] = "   "
        with pytest.raises(ValidationError):
            FridgeItemForm(**data)

    def test_error_message(self):
        with pytest.raises(ValidationError) as exc_info:
            FridgeItemForm(name="", quantity="1")
        assert first_error(exc_info.value) == "Name is required"

    def test_values_are_stripped(self):
        form = FridgeItemForm(name="  Butter ", quantity=" 1 ")
        assert form.name == "Butter"
        assert form.quantity == "1"


class TestShoppingItemForm:

    def test_quantity_defaults_to_one(self):
        assert ShoppingItemForm(name="Milk").to_item().quantity == "1"

    def test_blank_quantity_becomes_one(self):
        assert ShoppingItemForm(name="Milk", quantity="  ").quantity == "1"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ShoppingItemForm(name="")
        assert first_error(exc_info.value) == "Item is required"

    def test_new_item_unchecked(self):
        assert ShoppingItemForm(name="Milk").to_item().is_checked is False


class TestRecipeForm:

    def test_defaults(self):
        recipe = RecipeForm(title="Soup").to_recipe()
        assert recipe.category == "Dinner"
        assert recipe.prep_time == "45 min"
        assert recipe.difficulty == "Medium"
        assert recipe.notes is None
        assert recipe.ingredients == []

    def test_title_required(self):
        with pytest.raises(ValidationError) as exc_info:
            RecipeForm(title=" ")
        assert first_error(exc_info.value) == "Title is required"

    def test_missing_title(self):
        with pytest.raises(ValidationError):
            RecipeForm()

    def test_blank_notes_become_none(self):
        assert RecipeForm(title="Soup", notes="  ").notes is None
        assert RecipeForm(title="Soup", notes=" Add salt ").notes == "Add salt"


class TestProfileForm:

    def test_valid(self):
        profile = ProfileForm(vegetarian=True, allergies=" nuts ", units="US Customary").to_profile()
        assert profile.vegetarian is True
        assert profile.allergies == "nuts"
        assert profile.units == "US Customary"

    def test_unknown_units_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ProfileForm(units="Imperial")
        assert first_error(exc_info.value).startswith("Units must be one of")
