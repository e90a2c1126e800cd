#!/usr/bin/env python3
"""
Interactive mode for Kitchen Companion.

Terminal version of the app screens: onboarding, log in, then a command
loop over recipes, fridge, shopping list and profile.
"""

import logging
from datetime import date
from typing import List, Optional

from pydantic import ValidationError

from kitchen.auth import AuthFlow, LANDING_MESSAGE, LANDING_TITLE
from kitchen.dashboard import build_dashboard
from kitchen.data.models import APP_VERSION, Recipe, UNIT_OPTIONS
from kitchen.data.store import KitchenState
from kitchen.forms import FridgeItemForm, LoginForm, ProfileForm, ShoppingItemForm, SignUpForm, first_error
from kitchen.onboarding import OnboardingFlow
from kitchen.recipes import ALL_CATEGORIES, CATEGORIES, format_ingredient

logger = logging.getLogger(__name__)

STATUS_MARKERS = {"red": "🔴", "yellow": "🟡", "green": "🟢"}


class InteractiveSession:
    """Interactive session handler."""

    def __init__(self, state: Optional[KitchenState] = None, auth: Optional[AuthFlow] = None):
        """
        Initialize interactive session.

        Args:
            state: Kitchen state (sample data if omitted)
            auth: Auth flow state (fresh install if omitted)
        """
        self.state = state or KitchenState()
        self.auth = auth or AuthFlow()
        self.category = ALL_CATEGORIES
        self.query = ""
        self.listed_recipes: List[Recipe] = []

    # ==================== Onboarding & auth ====================

    def run_onboarding(self):
        flow = OnboardingFlow(self.auth)
        if not flow.is_active:
            return
        print("\n" + "=" * 70)
        print(flow.start())
        print("=" * 70)
        input(f"\n[{flow.button}] ")
        flow.proceed()

    def run_auth(self):
        print(f"\n{LANDING_TITLE}\n{LANDING_MESSAGE}\n")
        choice = input("Log In (l) or Sign Up (s)? ").strip().lower()
        if choice.startswith("s"):
            name = input("Name: ").strip()
            email = input("Email: ").strip()
            password = input("Password: ")
            self.auth.sign_up(SignUpForm(name=name, email=email, password=password))
        else:
            email = input("Email: ").strip()
            password = input("Password: ")
            self.auth.log_in(LoginForm(email=email, password=password))
        print("\n✅ You're in. Type 'help' for commands.")

    # ==================== Screens ====================

    def show_help(self):
        """Show available commands."""
        print("\n" + "=" * 70)
        print("Available Commands")
        print("=" * 70)
        print("\n🏠 Home:")
        print("  home                          - Dashboard")
        print()
        print("📖 Recipes:")
        print("  recipes                       - List recipes (current filters)")
        print("  search <text>                 - Filter by title (search with no text clears)")
        print(f"  category <name>               - Filter by category ({', '.join(CATEGORIES)})")
        print("  recipe <n>                    - Show recipe n from the last list")
        print()
        print("🧊 Fridge:")
        print("  fridge                        - Show fridge items")
        print("  fridge add <name> | <qty> [| YYYY-MM-DD]")
        print("  fridge rm <n>[,<n>...]        - Delete items by number")
        print()
        print("🛒 Shopping:")
        print("  shop                          - Show shopping list")
        print("  shop add <name> [| <qty>]")
        print("  shop check <n>                - Toggle checked")
        print("  shop rm <n>[,<n>...]          - Delete items by number")
        print("  shop clear                    - Remove checked items")
        print("  shop generate <n>             - Add ingredients of recipe n")
        print()
        print("👤 Profile:")
        print("  profile                       - Show preferences")
        print("  profile vegetarian on|off")
        print("  profile allergies <text>")
        print(f"  profile units <{'|'.join(UNIT_OPTIONS)}>")
        print()
        print("Other:")
        print("  logout                        - Log out")
        print("  help                          - Show this help")
        print("  quit / exit                   - Exit interactive mode")
        print()

    def handle_home(self):
        dashboard = build_dashboard(self.state)
        print("\n🏠 Kitchen")
        print(f"  Items expiring soon: {dashboard['expiring_soon_count']}")
        if dashboard["suggestion"]:
            print(f"  Tonight's Suggestion: {dashboard['suggestion']['title']}")

    def handle_recipes(self):
        self.listed_recipes = self.state.search_recipes(category=self.category, query=self.query)
        print(f"\n📖 Recipes (category: {self.category}, search: {self.query or '-'})")
        if not self.listed_recipes:
            print("  No recipes match.")
        for i, recipe in enumerate(self.listed_recipes, 1):
            last = f"  (last cooked {recipe.last_cooked})" if recipe.last_cooked else ""
            print(f"  {i}. {recipe.title} - {recipe.summary}{last}")

    def handle_search(self, args: List[str]):
        self.query = " ".join(args)
        self.handle_recipes()

    def handle_category(self, args: List[str]):
        name = " ".join(args).strip().title() or ALL_CATEGORIES
        self.category = name
        self.handle_recipes()

    def _listed_recipe(self, number: str) -> Recipe:
        if not self.listed_recipes:
            self.listed_recipes = self.state.search_recipes(category=self.category, query=self.query)
        index = int(number) - 1
        if not 0 <= index < len(self.listed_recipes):
            raise IndexError(f"No recipe number {number}")
        return self.listed_recipes[index]

    def handle_recipe(self, args: List[str]):
        if not args:
            print("\n❌ Usage: recipe <n>")
            return
        recipe = self._listed_recipe(args[0])
        print(f"\n{recipe.title}")
        print(f"⏱  {recipe.prep_time}   📈 {recipe.difficulty}")
        if recipe.notes:
            print(f"\n{recipe.notes}")
        print("\nIngredients:")
        for ing in recipe.ingredients:
            print(f"  • {format_ingredient(ing)}")
        print("\nSteps:")
        for i, step in enumerate(recipe.steps, 1):
            print(f"  Step {i}: {step}")

    def handle_fridge(self, args: List[str]):
        if args and args[0] == "add":
            parts = [p.strip() for p in " ".join(args[1:]).split("|")]
            data = {"name": parts[0], "quantity": parts[1] if len(parts) > 1 else ""}
            if len(parts) > 2 and parts[2]:
                data["expiry"] = date.fromisoformat(parts[2])
            try:
                form = FridgeItemForm(**data)
            except ValidationError as e:
                print(f"\n❌ {first_error(e)}")
                return
            item = self.state.add_fridge_item(form.to_item(self.state.today()))
            print(f"\n✅ Added {item.name} (expires {item.expiry.isoformat()})")
            return

        if args and args[0] == "rm":
            self.state.delete_fridge_items(_parse_numbers(args[1:]))
            print("\n✅ Deleted")

        print("\n🧊 Fridge")
        overview = self.state.fridge_overview()
        if not overview:
            print("  Your fridge is empty.")
        for i, item in enumerate(overview, 1):
            marker = STATUS_MARKERS[item["colour"]]
            print(f"  {i}. {marker} {item['name']} (Qty: {item['quantity']}) - {item['expiry']} ({item['label']})")

    def handle_shop(self, args: List[str]):
        sub = args[0] if args else ""

        if sub == "add":
            parts = [p.strip() for p in " ".join(args[1:]).split("|")]
            data = {"name": parts[0]}
            if len(parts) > 1:
                data["quantity"] = parts[1]
            try:
                form = ShoppingItemForm(**data)
            except ValidationError as e:
                print(f"\n❌ {first_error(e)}")
                return
            self.state.add_shopping_item(form.to_item())
        elif sub == "check":
            index = _parse_numbers(args[1:2])[0]
            if not 0 <= index < len(self.state.shopping_items):
                raise IndexError(f"No item number {index + 1}")
            self.state.toggle_shopping_item(self.state.shopping_items[index].id)
        elif sub == "rm":
            self.state.delete_shopping_items(_parse_numbers(args[1:]))
        elif sub == "clear":
            self.state.remove_checked_items()
        elif sub == "generate":
            recipe = self._listed_recipe(args[1] if len(args) > 1 else "")
            added = self.state.add_recipe_to_shopping_list(recipe.id)
            print(f"\n✅ Added {len(added)} item(s) from {recipe.title}")

        print("\n🛒 Shopping")
        if not self.state.shopping_items:
            print("  Nothing to buy.")
        for i, item in enumerate(self.state.shopping_items, 1):
            box = "☑" if item.is_checked else "☐"
            print(f"  {i}. {box} {item.name} ({item.quantity})")

    def handle_profile(self, args: List[str]):
        if args:
            current = self.state.profile.to_dict()
            key, value = args[0], " ".join(args[1:])
            if key == "vegetarian":
                current["vegetarian"] = value.lower() in ("on", "yes", "true")
            elif key in ("allergies", "units"):
                current[key] = value
            else:
                print(f"\n❌ Unknown preference: {key}")
                return
            try:
                form = ProfileForm(**current)
            except ValidationError as e:
                print(f"\n❌ {first_error(e)}")
                return
            self.state.save_profile(form.to_profile())

        profile = self.state.profile
        print("\n👤 Profile")
        print(f"  Vegetarian: {'on' if profile.vegetarian else 'off'}")
        print(f"  Allergies: {profile.allergies or '-'}")
        print(f"  Units: {profile.units}")
        print(f"  Version: {APP_VERSION}")

    # ==================== Loop ====================

    def handle_command(self, command: str) -> bool:
        """
        Run a single command.

        Returns:
            False when the session should end
        """
        parts = command.split()
        if not parts:
            return True

        cmd = parts[0].lower()
        args = parts[1:]

        if cmd in ["quit", "exit", "q"]:
            print("\n👋 Goodbye! Happy cooking!")
            return False

        try:
            if cmd == "help":
                self.show_help()
            elif cmd == "home":
                self.handle_home()
            elif cmd == "recipes":
                self.handle_recipes()
            elif cmd == "search":
                self.handle_search(args)
            elif cmd == "category":
                self.handle_category(args)
            elif cmd == "recipe":
                self.handle_recipe(args)
            elif cmd == "fridge":
                self.handle_fridge(args)
            elif cmd == "shop":
                self.handle_shop(args)
            elif cmd == "profile":
                self.handle_profile(args)
            elif cmd == "logout":
                self.auth.log_out()
                self.run_auth()
            else:
                print(f"\n❌ Unknown command: {cmd}")
                print("💡 Type 'help' for available commands")
        except (LookupError, ValueError) as e:
            # IndexError and RecipeNotFoundError are LookupErrors
            print(f"\n❌ {e}")

        return True

    def run(self):
        """Run the interactive loop."""
        self.run_onboarding()
        if not self.auth.is_logged_in:
            self.run_auth()
        self.handle_home()

        while True:
            try:
                command = input("\n🍽️  > ").strip()
                if not self.handle_command(command):
                    break

            except (KeyboardInterrupt, EOFError):
                print("\n\n👋 Goodbye! (Use 'quit' to exit gracefully)")
                break


def _parse_numbers(args: List[str]) -> List[int]:
    """Parse 1-based "2" or "1,3" into 0-based offsets. Raises ValueError."""
    raw = ",".join(args)
    return [int(part) - 1 for part in raw.split(",") if part.strip()]

