"""
Configuration settings for the application.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

_DEFAULT_PRODUCTS_FILE = Path(__file__).resolve().parent.parent / "data" / "products.json"


class Settings:
    """Application settings loaded from environment variables."""

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Server settings
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))

    # Storage settings
    PRODUCTS_FILE: str = os.getenv("PRODUCTS_FILE", str(_DEFAULT_PRODUCTS_FILE))

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.
        """
        return self.ENVIRONMENT.lower() == "production"

    @property
    def products_path(self) -> Path:
        """Backing file of the product collection as a path."""
        return Path(self.PRODUCTS_FILE)

    def __init__(self):
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        logging.basicConfig(level=self.log_level)
        self.logger = logging.getLogger(__name__)

        self.logger.debug(
            f"Config initialized with environment={self.ENVIRONMENT}, "
            f"port={self.PORT}, log_level={self.log_level}"
        )


# Create a global settings instance for import
settings = Settings()
