#!/usr/bin/env python3
"""
Flask web application for Kitchen Companion.

Provides one page per screen (onboarding, auth, home, recipes, fridge,
shopping, profile) plus JSON endpoints over the same in-memory state.
"""

import os
import logging
from datetime import datetime
from functools import wraps

from flask import Flask, current_app, render_template, request, jsonify, session, redirect, url_for, abort
from flask_cors import CORS
from dotenv import load_dotenv
from pydantic import ValidationError

from kitchen.auth import AuthFlow, SCREEN_AUTH, SCREEN_ONBOARDING, LANDING_TITLE, LANDING_MESSAGE
from kitchen.dashboard import build_dashboard
from kitchen.data.models import APP_VERSION, UNIT_OPTIONS
from kitchen.data.provider import DataProvider, get_data_provider
from kitchen.data.store import KitchenState
from kitchen.forms import (
    FridgeItemForm,
    LoginForm,
    ProfileForm,
    RecipeForm,
    ShoppingItemForm,
    SignUpForm,
    default_expiry,
    first_error,
)
from kitchen.onboarding import OnboardingFlow
from kitchen.recipes import ALL_CATEGORIES, CATEGORIES, DIFFICULTIES, RECIPE_CATEGORIES, RecipeNotFoundError, format_ingredient
from kitchen.shopping import ItemNotFoundError

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

PROFILE_SECTIONS = {
    "subscription": "Manage Subscription",
    "privacy": "Privacy",
}


# ==================== Session helpers ====================

def get_auth() -> AuthFlow:
    """Recreate the auth flow from the session."""
    return AuthFlow.from_dict(session.get("auth", {}))


def save_auth(auth: AuthFlow):
    session["auth"] = auth.to_dict()


def get_state() -> KitchenState:
    """The state container owned by the running app."""
    return current_app.extensions["kitchen_state"]


def login_required(f):
    """Decorator to require login for routes."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not get_auth().is_logged_in:
            return redirect(url_for("index"))
        return f(*args, **kwargs)
    return decorated_function


def api_login_required(f):
    """Decorator returning 401 JSON instead of redirecting."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not get_auth().is_logged_in:
            return jsonify({"success": False, "error": "Not logged in"}), 401
        return f(*args, **kwargs)
    return decorated_function


def create_app(state: KitchenState = None, provider: DataProvider = None) -> Flask:
    """
    Build the Flask application.

    Args:
        state: State container to serve (created from provider if omitted)
        provider: Initial data source when no state is given

    Returns:
        Configured Flask app
    """
    app = Flask(__name__)
    app.secret_key = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key-change-in-production")
    CORS(app)

    if state is None:
        state = KitchenState(provider=provider or get_data_provider())
    app.extensions["kitchen_state"] = state

    register_routes(app)
    register_api_routes(app)
    register_error_handlers(app)

    logger.info("Kitchen Companion web app initialized")
    return app


def register_error_handlers(app: Flask):

    @app.errorhandler(404)
    def not_found(error):
        if request.path.startswith("/api/"):
            return jsonify({"success": False, "error": "Not found"}), 404
        return render_template("not_found.html"), 404


# ==================== Screens ====================

def register_routes(app: Flask):

    @app.route("/health")
    def health_check():
        """Health check endpoint."""
        return jsonify({"status": "healthy", "timestamp": datetime.now().isoformat()}), 200

    @app.route("/")
    def index():
        """Send the user to the screen matching their auth state."""
        screen = get_auth().screen
        if screen == SCREEN_ONBOARDING:
            return redirect(url_for("onboarding"))
        if screen == SCREEN_AUTH:
            return redirect(url_for("welcome"))
        return redirect(url_for("home"))

    # ---------- Onboarding & auth ----------

    @app.route("/onboarding", methods=["GET", "POST"])
    def onboarding():
        """Welcome screen with a Continue button."""
        auth = get_auth()
        flow = OnboardingFlow(auth)
        if request.method == "POST":
            save_auth(flow.proceed())
            return redirect(url_for("index"))
        if not flow.is_active:
            return redirect(url_for("index"))
        return render_template("onboarding.html", flow=flow)

    @app.route("/welcome")
    def welcome():
        """Auth landing page with Log In and Sign Up."""
        if get_auth().screen != SCREEN_AUTH:
            return redirect(url_for("index"))
        return render_template("welcome.html", title=LANDING_TITLE, message=LANDING_MESSAGE)

    @app.route("/login", methods=["GET", "POST"])
    def login():
        """Log In form. Always succeeds."""
        if request.method == "POST":
            auth = get_auth()
            auth.log_in(LoginForm(
                email=request.form.get("email", ""),
                password=request.form.get("password", ""),
            ))
            save_auth(auth)
            return redirect(url_for("home"))

        if get_auth().is_logged_in:
            return redirect(url_for("home"))
        return render_template("login.html")

    @app.route("/signup", methods=["GET", "POST"])
    def signup():
        """Sign Up form. Always succeeds."""
        if request.method == "POST":
            auth = get_auth()
            auth.sign_up(SignUpForm(
                name=request.form.get("name", ""),
                email=request.form.get("email", ""),
                password=request.form.get("password", ""),
            ))
            save_auth(auth)
            return redirect(url_for("home"))

        if get_auth().is_logged_in:
            return redirect(url_for("home"))
        return render_template("signup.html")

    @app.route("/logout")
    def logout():
        """Log out and return to the landing page."""
        auth = get_auth()
        auth.log_out()
        save_auth(auth)
        return redirect(url_for("index"))

    # ---------- Home ----------

    @app.route("/home")
    @login_required
    def home():
        """Dashboard."""
        return render_template("home.html", dashboard=build_dashboard(get_state()))

    # ---------- Recipes ----------

    @app.route("/recipes")
    @login_required
    def recipes_page():
        """Recipe list with search box and category menu."""
        query = request.args.get("q", "")
        category = request.args.get("category", ALL_CATEGORIES)
        recipes = get_state().search_recipes(category=category, query=query)
        return render_template(
            "recipes.html",
            recipes=recipes,
            query=query,
            category=category,
            categories=CATEGORIES,
        )

    @app.route("/recipes/new", methods=["GET", "POST"])
    @login_required
    def recipe_new():
        """Add Recipe form."""
        form_data = {}
        if request.method == "POST":
            form_data = request.form.to_dict()
            try:
                form = RecipeForm(**form_data)
            except ValidationError as e:
                return render_template(
                    "recipe_new.html",
                    error=first_error(e),
                    form=form_data,
                    categories=RECIPE_CATEGORIES,
                    difficulties=DIFFICULTIES,
                ), 400
            recipe = get_state().add_recipe(form.to_recipe())
            return redirect(url_for("recipe_detail", recipe_id=recipe.id))

        return render_template(
            "recipe_new.html",
            form=form_data,
            categories=RECIPE_CATEGORIES,
            difficulties=DIFFICULTIES,
        )

    @app.route("/recipes/<recipe_id>")
    @login_required
    def recipe_detail(recipe_id):
        """Recipe detail with ingredients and steps."""
        try:
            recipe = get_state().get_recipe(recipe_id)
        except RecipeNotFoundError:
            abort(404)
        selected_step = request.args.get("step", type=int)
        return render_template(
            "recipe_detail.html",
            recipe=recipe,
            ingredients=[format_ingredient(ing) for ing in recipe.ingredients],
            selected_step=selected_step,
        )

    # ---------- Fridge ----------

    @app.route("/fridge")
    @login_required
    def fridge_page():
        """Fridge list with status dots."""
        return render_template("fridge.html", items=get_state().fridge_overview())

    @app.route("/fridge/new", methods=["GET", "POST"])
    @login_required
    def fridge_new():
        """Add Item form for the fridge."""
        form_data = {}
        if request.method == "POST":
            form_data = request.form.to_dict()
            if not form_data.get("expiry"):
                form_data.pop("expiry", None)
            try:
                form = FridgeItemForm(**form_data)
            except ValidationError as e:
                return render_template("fridge_new.html", error=first_error(e), form=form_data), 400
            state = get_state()
            state.add_fridge_item(form.to_item(state.today()))
            return redirect(url_for("fridge_page"))

        return render_template("fridge_new.html", form={"expiry": default_expiry(get_state().today()).isoformat()})

    @app.route("/fridge/<int:index>/delete", methods=["POST"])
    @login_required
    def fridge_delete(index):
        """Swipe-to-delete by position."""
        try:
            get_state().delete_fridge_items([index])
        except IndexError:
            abort(404)
        return redirect(url_for("fridge_page"))

    # ---------- Shopping ----------

    @app.route("/shopping")
    @login_required
    def shopping_page():
        """Shopping checklist."""
        state = get_state()
        return render_template("shopping.html", items=state.shopping_items, recipes=state.recipes)

    @app.route("/shopping/new", methods=["GET", "POST"])
    @login_required
    def shopping_new():
        """Add to List form."""
        form_data = {"quantity": "1"}
        if request.method == "POST":
            form_data = request.form.to_dict()
            try:
                form = ShoppingItemForm(**form_data)
            except ValidationError as e:
                return render_template("shopping_new.html", error=first_error(e), form=form_data), 400
            get_state().add_shopping_item(form.to_item())
            return redirect(url_for("shopping_page"))

        return render_template("shopping_new.html", form=form_data)

    @app.route("/shopping/<item_id>/toggle", methods=["POST"])
    @login_required
    def shopping_toggle(item_id):
        try:
            get_state().toggle_shopping_item(item_id)
        except ItemNotFoundError:
            abort(404)
        return redirect(url_for("shopping_page"))

    @app.route("/shopping/remove-checked", methods=["POST"])
    @login_required
    def shopping_remove_checked():
        get_state().remove_checked_items()
        return redirect(url_for("shopping_page"))

    @app.route("/shopping/<int:index>/delete", methods=["POST"])
    @login_required
    def shopping_delete(index):
        """Swipe-to-delete by position."""
        try:
            get_state().delete_shopping_items([index])
        except IndexError:
            abort(404)
        return redirect(url_for("shopping_page"))

    @app.route("/shopping/generate", methods=["POST"])
    @login_required
    def shopping_generate():
        """Generate from Selected Recipes."""
        try:
            get_state().add_recipes_to_shopping_list(request.form.getlist("recipe_id"))
        except RecipeNotFoundError:
            abort(404)
        return redirect(url_for("shopping_page"))

    # ---------- Profile ----------

    @app.route("/profile", methods=["GET", "POST"])
    @login_required
    def profile_page():
        """Preferences, account links and version."""
        state = get_state()
        error = None
        status = 200
        if request.method == "POST":
            try:
                form = ProfileForm(
                    vegetarian="vegetarian" in request.form,
                    allergies=request.form.get("allergies", ""),
                    units=request.form.get("units", "Metric"),
                )
                state.save_profile(form.to_profile())
            except ValidationError as e:
                error = first_error(e)
                status = 400

        return render_template(
            "profile.html",
            profile=state.profile,
            unit_options=UNIT_OPTIONS,
            sections=PROFILE_SECTIONS,
            version=APP_VERSION,
            error=error,
        ), status

    @app.route("/profile/<section>")
    @login_required
    def profile_section(section):
        """Sketch views for account links."""
        if section not in PROFILE_SECTIONS:
            abort(404)
        return render_template("sketch.html", title=PROFILE_SECTIONS[section])


# ==================== JSON API ====================

def json_body():
    """Request body as a dict. Returns None if it is not a JSON object."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        return None
    return data


def error_response(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


BAD_BODY = "Request body must be a JSON object"


def register_api_routes(app: Flask):

    @app.route("/api/dashboard", methods=["GET"])
    @api_login_required
    def api_dashboard():
        try:
            return jsonify({"success": True, **build_dashboard(get_state())})
        except Exception as e:
            logger.error(f"Error building dashboard: {e}", exc_info=True)
            return error_response(str(e), 500)

    @app.route("/api/recipes", methods=["GET"])
    @api_login_required
    def api_recipes():
        """
        Browse recipes.

        Query params:
            query: Case-insensitive title substring
            category: "All" or an exact category
        """
        try:
            query = request.args.get("query", "")
            category = request.args.get("category", ALL_CATEGORIES)
            recipes = get_state().search_recipes(category=category, query=query)
            return jsonify({
                "success": True,
                "recipes": [recipe.to_dict() for recipe in recipes],
                "count": len(recipes),
                "filters": {"query": query, "category": category},
            })
        except Exception as e:
            logger.error(f"Error searching recipes: {e}", exc_info=True)
            return error_response(str(e), 500)

    @app.route("/api/recipes/<recipe_id>", methods=["GET"])
    @api_login_required
    def api_recipe(recipe_id):
        try:
            recipe = get_state().get_recipe(recipe_id)
            return jsonify({"success": True, "recipe": recipe.to_dict()})
        except RecipeNotFoundError as e:
            return error_response(str(e), 404)
        except Exception as e:
            logger.error(f"Error fetching recipe {recipe_id}: {e}", exc_info=True)
            return error_response(str(e), 500)

    @app.route("/api/fridge", methods=["GET", "POST"])
    @api_login_required
    def api_fridge():
        state = get_state()
        try:
            if request.method == "POST":
                data = json_body()
                if data is None:
                    return error_response(BAD_BODY, 400)
                try:
                    form = FridgeItemForm(**data)
                except ValidationError as e:
                    return error_response(first_error(e), 400)
                item = state.add_fridge_item(form.to_item(state.today()))
                return jsonify({"success": True, "item": item.to_dict()}), 201

            return jsonify({"success": True, "items": state.fridge_overview()})
        except Exception as e:
            logger.error(f"Error in fridge API: {e}", exc_info=True)
            return error_response(str(e), 500)

    @app.route("/api/fridge/<int:index>", methods=["DELETE"])
    @api_login_required
    def api_fridge_delete(index):
        try:
            get_state().delete_fridge_items([index])
            return jsonify({"success": True})
        except IndexError as e:
            return error_response(str(e), 404)
        except Exception as e:
            logger.error(f"Error deleting fridge item {index}: {e}", exc_info=True)
            return error_response(str(e), 500)

    @app.route("/api/shopping", methods=["GET", "POST"])
    @api_login_required
    def api_shopping():
        state = get_state()
        try:
            if request.method == "POST":
                data = json_body()
                if data is None:
                    return error_response(BAD_BODY, 400)
                try:
                    form = ShoppingItemForm(**data)
                except ValidationError as e:
                    return error_response(first_error(e), 400)
                item = state.add_shopping_item(form.to_item())
                return jsonify({"success": True, "item": item.to_dict()}), 201

            return jsonify({
                "success": True,
                "items": [item.to_dict() for item in state.shopping_items],
            })
        except Exception as e:
            logger.error(f"Error in shopping API: {e}", exc_info=True)
            return error_response(str(e), 500)

    @app.route("/api/shopping/<item_id>/toggle", methods=["POST"])
    @api_login_required
    def api_shopping_toggle(item_id):
        try:
            item = get_state().toggle_shopping_item(item_id)
            return jsonify({"success": True, "item": item.to_dict()})
        except ItemNotFoundError as e:
            return error_response(str(e), 404)
        except Exception as e:
            logger.error(f"Error toggling shopping item {item_id}: {e}", exc_info=True)
            return error_response(str(e), 500)

    @app.route("/api/shopping/remove-checked", methods=["POST"])
    @api_login_required
    def api_shopping_remove_checked():
        try:
            items = get_state().remove_checked_items()
            return jsonify({"success": True, "items": [item.to_dict() for item in items]})
        except Exception as e:
            logger.error(f"Error removing checked items: {e}", exc_info=True)
            return error_response(str(e), 500)

    @app.route("/api/shopping/delete", methods=["POST"])
    @api_login_required
    def api_shopping_delete():
        """Delete by position. Body: {"offsets": [0, 2]}."""
        try:
            data = json_body()
            if data is None:
                return error_response(BAD_BODY, 400)
            offsets = data.get("offsets")
            # bool is an int subclass; JSON true/false are not offsets
            if not isinstance(offsets, list) or not all(type(o) is int for o in offsets):
                return error_response("offsets must be a list of integers", 400)
            get_state().delete_shopping_items(offsets)
            return jsonify({"success": True})
        except IndexError as e:
            return error_response(str(e), 404)
        except Exception as e:
            logger.error(f"Error deleting shopping items: {e}", exc_info=True)
            return error_response(str(e), 500)

    @app.route("/api/shopping/generate", methods=["POST"])
    @api_login_required
    def api_shopping_generate():
        """Add ingredients of the given recipes. Body: {"recipe_ids": [...]}."""
        try:
            data = json_body()
            if data is None:
                return error_response(BAD_BODY, 400)
            recipe_ids = data.get("recipe_ids") or []
            if not isinstance(recipe_ids, list) or not all(isinstance(r, str) for r in recipe_ids):
                return error_response("recipe_ids must be a list of recipe ids", 400)
            if not recipe_ids:
                return error_response("No recipes selected", 400)

            added = get_state().add_recipes_to_shopping_list(recipe_ids)
            return jsonify({"success": True, "added": [item.to_dict() for item in added]})
        except RecipeNotFoundError as e:
            return error_response(str(e), 404)
        except Exception as e:
            logger.error(f"Error generating shopping list: {e}", exc_info=True)
            return error_response(str(e), 500)

    @app.route("/api/profile", methods=["GET", "POST"])
    @api_login_required
    def api_profile():
        state = get_state()
        try:
            if request.method == "POST":
                data = json_body()
                if data is None:
                    return error_response(BAD_BODY, 400)
                try:
                    form = ProfileForm(**data)
                except ValidationError as e:
                    return error_response(first_error(e), 400)
                state.save_profile(form.to_profile())
            return jsonify({"success": True, "profile": state.profile.to_dict()})
        except Exception as e:
            logger.error(f"Error in profile API: {e}", exc_info=True)
            return error_response(str(e), 500)


if __name__ == '__main__':
    from kitchen.main import configure_logging

    configure_logging()
    create_app().run(
        host='0.0.0.0',
        port=int(os.environ.get("PORT", 5000)),
        debug=True,
    )
