"""
Data models for Kitchen Companion.

These models define the core entities used throughout the system:
- Ingredient: A named ingredient with an optional amount
- Recipe: Recipes shown in the recipe browser
- FridgeItem: Perishable goods tracked by expiry date
- ShoppingItem: Entries on the shopping checklist
- UserProfile: Preferences from the profile screen
"""

import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Dict


UNIT_OPTIONS = ["Metric", "US Customary"]
APP_VERSION = "0.1 (Sketch)"


def new_id() -> str:
    """Generate an opaque identifier for a record."""
    return str(uuid.uuid4())


@dataclass
class Ingredient:
    """A recipe ingredient. Amount is free text ("600 g", "A handful")."""

    name: str
    amount: Optional[str] = None
    id: str = field(default_factory=new_id)

    def __str__(self) -> str:
        """Human-readable ingredient string."""
        if self.amount:
            return f"{self.name} – {self.amount}"
        return self.name

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "amount": self.amount,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Ingredient":
        """Create Ingredient from dictionary."""
        return cls(
            name=data["name"],
            amount=data.get("amount"),
            id=data.get("id") or new_id(),
        )


@dataclass
class Recipe:
    """Recipe shown in the recipe browser.

    Category, prep time and difficulty are free text. Categories are
    compared for equality when filtering.
    """

    title: str
    category: str
    prep_time: str
    difficulty: str
    ingredients: List[Ingredient] = field(default_factory=list)
    steps: List[str] = field(default_factory=list)
    last_cooked: Optional[str] = None  # e.g. "6 months ago"
    thumbnail: Optional[str] = None  # icon name
    notes: Optional[str] = None
    id: str = field(default_factory=new_id)

    @property
    def summary(self) -> str:
        """Prep time and difficulty line used in the list view."""
        return f"{self.prep_time} • {self.difficulty}"

    def __str__(self) -> str:
        return f"{self.title} ({self.summary})"

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "prep_time": self.prep_time,
            "difficulty": self.difficulty,
            "ingredients": [ing.to_dict() for ing in self.ingredients],
            "steps": list(self.steps),
            "last_cooked": self.last_cooked,
            "thumbnail": self.thumbnail,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Recipe":
        """Create Recipe from dictionary."""
        return cls(
            id=data.get("id") or new_id(),
            title=data["title"],
            category=data["category"],
            prep_time=data["prep_time"],
            difficulty=data["difficulty"],
            ingredients=[Ingredient.from_dict(i) for i in data.get("ingredients", [])],
            steps=list(data.get("steps", [])),
            last_cooked=data.get("last_cooked"),
            thumbnail=data.get("thumbnail"),
            notes=data.get("notes"),
        )


@dataclass
class FridgeItem:
    """A perishable good in the fridge.

    Expiry status (expired / expiring soon / fresh) is derived from the
    expiry date at display time and never stored on the item.
    """

    name: str
    quantity: str
    expiry: date
    id: str = field(default_factory=new_id)

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity,
            "expiry": self.expiry.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "FridgeItem":
        """Create FridgeItem from dictionary (expiry as ISO date string)."""
        expiry = data["expiry"]
        if isinstance(expiry, str):
            expiry = date.fromisoformat(expiry)
        return cls(
            name=data["name"],
            quantity=data["quantity"],
            expiry=expiry,
            id=data.get("id") or new_id(),
        )


@dataclass
class ShoppingItem:
    """Single entry on the shopping checklist."""

    name: str
    quantity: str = "1"
    is_checked: bool = False
    id: str = field(default_factory=new_id)

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity,
            "is_checked": self.is_checked,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "ShoppingItem":
        """Create ShoppingItem from dictionary."""
        return cls(
            name=data["name"],
            quantity=data.get("quantity", "1"),
            is_checked=data.get("is_checked", False),
            id=data.get("id") or new_id(),
        )


@dataclass
class UserProfile:
    """Preferences from the profile screen."""

    vegetarian: bool = False
    allergies: str = ""
    units: str = "Metric"

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "vegetarian": self.vegetarian,
            "allergies": self.allergies,
            "units": self.units,
            "version": APP_VERSION,
        }
