"""
Home dashboard: quick links, expiring-soon counter and tonight's suggestion.
"""

import logging
from typing import Dict, List, Tuple

from kitchen.data.store import KitchenState

logger = logging.getLogger(__name__)

QUICK_ACCESS: List[Tuple[str, str]] = [
    ("Recipes", "/recipes"),
    ("Fridge", "/fridge"),
    ("Shopping List", "/shopping"),
]


def build_dashboard(state: KitchenState) -> Dict:
    """
    Collect everything the home screen shows.

    Args:
        state: Kitchen state

    Returns:
        Dictionary with quick links, expiring-soon count and suggestion
    """
    suggestion = state.suggested_recipe()
    logger.debug(f"Dashboard suggestion: {suggestion.title if suggestion else None}")
    return {
        "quick_access": [{"label": label, "href": href} for label, href in QUICK_ACCESS],
        "expiring_soon_count": state.expiring_soon_count(),
        "suggestion": suggestion.to_dict() if suggestion else None,
    }
