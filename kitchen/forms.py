"""
Form models for the add/edit screens.

Each form validates the fields the screen requires before its save action
is allowed, and converts into the record it creates.

- FridgeItemForm: name and quantity required, expiry defaults to 5 days after today
- ShoppingItemForm: name required, quantity defaults to "1"
- RecipeForm: title required
- LoginForm / SignUpForm: accepted as-is
- ProfileForm: units must be a known option
"""

import logging
from datetime import date, timedelta
from typing import Optional

from pydantic import BaseModel, ValidationError, field_validator

from kitchen.data.models import (
    FridgeItem,
    Recipe,
    ShoppingItem,
    UNIT_OPTIONS,
    UserProfile,
)

logger = logging.getLogger(__name__)

DEFAULT_EXPIRY_DAYS = 5


def default_expiry(today: date) -> date:
    """Expiry offered for a new fridge item, relative to the caller's today."""
    return today + timedelta(days=DEFAULT_EXPIRY_DAYS)


def _required(value: str, field_name: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(f"{field_name} is required")
    return value


def first_error(exc: ValidationError) -> str:
    """Human-readable message for the first validation error."""
    error = exc.errors()[0]
    message = error.get("msg", "Invalid input")
    # pydantic prefixes messages raised from validators
    return message.removeprefix("Value error, ")


# =============================================================================
# Inventory forms
# =============================================================================

class FridgeItemForm(BaseModel):
    """Add Item sheet on the fridge screen."""
    name: str
    quantity: str
    expiry: Optional[date] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _required(v, "Name")

    @field_validator("quantity")
    @classmethod
    def validate_quantity(cls, v: str) -> str:
        return _required(v, "Quantity")

    def to_item(self, today: date) -> FridgeItem:
        """Build the item; a missing expiry defaults to DEFAULT_EXPIRY_DAYS after today."""
        expiry = self.expiry or default_expiry(today)
        return FridgeItem(name=self.name, quantity=self.quantity, expiry=expiry)


class ShoppingItemForm(BaseModel):
    """Add to List sheet on the shopping screen."""
    name: str
    quantity: str = "1"

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _required(v, "Item")

    @field_validator("quantity")
    @classmethod
    def default_quantity(cls, v: str) -> str:
        return v.strip() or "1"

    def to_item(self) -> ShoppingItem:
        return ShoppingItem(name=self.name, quantity=self.quantity)


class RecipeForm(BaseModel):
    """Add Recipe screen. Saved recipes start without ingredients or steps."""
    title: str
    category: str = "Dinner"
    prep_time: str = "45 min"
    difficulty: str = "Medium"
    notes: Optional[str] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _required(v, "Title")

    @field_validator("notes")
    @classmethod
    def blank_notes_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()

    def to_recipe(self) -> Recipe:
        return Recipe(
            title=self.title,
            category=self.category,
            prep_time=self.prep_time,
            difficulty=self.difficulty,
            notes=self.notes,
        )


# =============================================================================
# Account forms
# =============================================================================

class LoginForm(BaseModel):
    """Log In sheet. No credential checks."""
    email: str = ""
    password: str = ""


class SignUpForm(BaseModel):
    """Sign Up sheet. No credential checks."""
    name: str = ""
    email: str = ""
    password: str = ""


class ProfileForm(BaseModel):
    """Preferences section of the profile screen."""
    vegetarian: bool = False
    allergies: str = ""
    units: str = "Metric"

    @field_validator("units")
    @classmethod
    def validate_units(cls, v: str) -> str:
        if v not in UNIT_OPTIONS:
            raise ValueError(f"Units must be one of: {', '.join(UNIT_OPTIONS)}")
        return v

    def to_profile(self) -> UserProfile:
        return UserProfile(
            vegetarian=self.vegetarian,
            allergies=self.allergies.strip(),
            units=self.units,
        )
