"""
Authentication stubs.

Log in and sign up always succeed; no credentials are checked or stored.
The flow only tracks which top-level screen the user should see.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from kitchen.forms import LoginForm, SignUpForm

logger = logging.getLogger(__name__)

SCREEN_ONBOARDING = "onboarding"
SCREEN_AUTH = "auth"
SCREEN_MAIN = "main"

LANDING_TITLE = "Welcome"
LANDING_MESSAGE = "Sign in to sync recipes and fridge inventory across devices."


@dataclass
class AuthFlow:
    """Top-level navigation state: onboarding, auth landing, or main tabs."""

    show_onboarding: bool = True
    is_logged_in: bool = False
    username: Optional[str] = None

    @property
    def screen(self) -> str:
        """Screen to present for the current state."""
        if self.is_logged_in:
            return SCREEN_MAIN
        if self.show_onboarding:
            return SCREEN_ONBOARDING
        return SCREEN_AUTH

    def log_in(self, form: LoginForm) -> bool:
        """Log in. Always succeeds."""
        self.is_logged_in = True
        self.show_onboarding = False
        self.username = form.email or None
        logger.info(f"User {form.email or '<anonymous>'} logged in")
        return True

    def sign_up(self, form: SignUpForm) -> bool:
        """Create an account. Always succeeds and logs the user in."""
        self.is_logged_in = True
        self.show_onboarding = False
        self.username = form.name or form.email or None
        logger.info(f"User {form.email or '<anonymous>'} signed up")
        return True

    def log_out(self) -> None:
        """Return to the auth landing screen (onboarding is not repeated)."""
        logger.info(f"User {self.username or '<anonymous>'} logged out")
        self.is_logged_in = False
        self.username = None

    def to_dict(self) -> Dict:
        return {
            "show_onboarding": self.show_onboarding,
            "is_logged_in": self.is_logged_in,
            "username": self.username,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "AuthFlow":
        return cls(
            show_onboarding=data.get("show_onboarding", True),
            is_logged_in=data.get("is_logged_in", False),
            username=data.get("username"),
        )
