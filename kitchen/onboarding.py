"""
Onboarding flow for first launch.

Shows a single welcome screen describing the app. Continuing hands the
user over to the authentication landing screen.
"""

import logging

from kitchen.auth import AuthFlow

logger = logging.getLogger(__name__)


class OnboardingFlow:
    """Manages the onboarding welcome screen."""

    title = "Kitchen Companion"
    message = (
        "Track fridge items and expirations, manage recipes, and auto-build "
        "shopping lists based on what you plan to cook."
    )
    button = "Continue"

    def __init__(self, auth: AuthFlow):
        """
        Initialize onboarding flow.

        Args:
            auth: Authentication flow state the onboarding step belongs to
        """
        self.auth = auth

    @property
    def is_active(self) -> bool:
        return self.auth.show_onboarding

    def start(self) -> str:
        """
        Start the onboarding flow.

        Returns:
            Welcome text
        """
        return f"{self.title}\n\n{self.message}"

    def proceed(self) -> AuthFlow:
        """Leave onboarding and move on to the auth landing screen."""
        if self.auth.show_onboarding:
            logger.info("Onboarding completed")
        self.auth.show_onboarding = False
        return self.auth


def check_onboarding_status(auth: AuthFlow) -> bool:
    """
    Check whether onboarding has been completed.

    Args:
        auth: Authentication flow state

    Returns:
        True if onboarding is complete
    """
    return not auth.show_onboarding
