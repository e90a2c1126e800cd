"""
Pytest configuration and shared fixtures.

Fixtures are reusable test setup that can be injected into tests.
"""

import pytest
from datetime import date, datetime

from kitchen.data.models import FridgeItem, Ingredient, Recipe, ShoppingItem
from kitchen.data.provider import StaticDataProvider
from kitchen.data.store import KitchenState
from kitchen.web.app import create_app


@pytest.fixture
def now():
    """Fixed reference time for expiry checks."""
    return datetime(2026, 10, 19, 12, 0, 0)


@pytest.fixture
def today(now):
    return now.date()


@pytest.fixture
def cheesecake():
    """Dessert recipe for testing."""
    return Recipe(
        id="r-cheesecake",
        title="Basque Cheesecake",
        category="Dessert",
        prep_time="60 min",
        difficulty="Medium",
        ingredients=[
            Ingredient(name="Cream Cheese", amount="600 g"),
            Ingredient(name="Sugar", amount="180 g"),
            Ingredient(name="Heavy Cream", amount="240 ml"),
        ],
        steps=["Beat cream cheese and sugar until smooth.", "Bake until deeply browned."],
        last_cooked="6 months ago",
        thumbnail="flame",
    )


@pytest.fixture
def chicken():
    """Dinner recipe for testing."""
    return Recipe(
        id="r-chicken",
        title="Garlic Butter Chicken",
        category="Dinner",
        prep_time="30 min",
        difficulty="Easy",
        ingredients=[
            Ingredient(name="Chicken Thighs", amount="600 g"),
            Ingredient(name="Parsley"),
        ],
        steps=["Season chicken and sear until golden."],
    )


@pytest.fixture
def recipes(cheesecake, chicken):
    return [cheesecake, chicken]


@pytest.fixture
def fridge_items():
    """One item per status relative to the fixed reference date."""
    return [
        FridgeItem(id="f-beef", name="Beef", quantity="500 g", expiry=date(2026, 10, 21)),
        FridgeItem(id="f-milk", name="Milk", quantity="1 L", expiry=date(2026, 10, 18)),
        FridgeItem(id="f-eggs", name="Eggs", quantity="12", expiry=date(2026, 10, 29)),
    ]


@pytest.fixture
def shopping_items():
    return [
        ShoppingItem(id="s-cream", name="Heavy Cream", quantity="1"),
        ShoppingItem(id="s-vanilla", name="Vanilla Extract", quantity="1"),
        ShoppingItem(id="s-parsley", name="Parsley", quantity="1 bunch"),
    ]


@pytest.fixture
def provider(recipes, fridge_items, shopping_items, cheesecake):
    """Data provider over the fixture records."""
    return StaticDataProvider(
        recipes=recipes,
        fridge_items=fridge_items,
        shopping_items=shopping_items,
        suggested=cheesecake,
    )


@pytest.fixture
def state(provider, now):
    """
    Fresh KitchenState for each test with a fixed clock.

    Usage in tests:
        def test_something(state):
            state.add_shopping_item(...)
    """
    return KitchenState(provider=provider, clock=lambda: now)


@pytest.fixture
def app(state):
    """Flask app serving the fixture state."""
    app = create_app(state=state)
    app.config['TESTING'] = True
    app.config['SECRET_KEY'] = 'test_secret_key'
    return app


@pytest.fixture
def client(app):
    """Flask test client with session support."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def logged_in_client(client):
    """Client whose session has finished onboarding and logged in."""
    with client.session_transaction() as sess:
        sess['auth'] = {
            'show_onboarding': False,
            'is_logged_in': True,
            'username': 'test@example.com',
        }
    return client
