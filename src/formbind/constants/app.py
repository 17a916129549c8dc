"""
Constants for application metadata.
"""

from typing import Final

class AppConstants:
    """Defines application metadata and environment switches."""
    APP_NAME: Final[str] = "FormBind"
    VERSION: Final[str] = "0.4.0"
    ENV_VAR_PROD_MODE: Final[str] = "FORMBIND_PROD"

    def __init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate the constants to ensure they meet constraints."""
        if not self.APP_NAME:
            raise ValueError("APP_NAME must not be empty")
        if not self.VERSION:
            raise ValueError("VERSION must not be empty")
        if not self.ENV_VAR_PROD_MODE:
            raise ValueError("ENV_VAR_PROD_MODE must not be empty")

# Singleton instance for easy access
app = AppConstants()
