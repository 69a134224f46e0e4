"""Toolkit configuration and settings."""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings:
    """Toolkit settings loaded from environment variables."""

    # Application Configuration
    ENVIRONMENT: str = os.getenv("LOCINTEL_ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOCINTEL_LOG_LEVEL", "INFO")

    # Autocomplete Configuration
    AUTOCOMPLETE_MAX_RESULTS: int = int(os.getenv("LOCINTEL_AUTOCOMPLETE_MAX_RESULTS", "10"))
    AUTOCOMPLETE_MIN_QUERY_LENGTH: int = int(os.getenv("LOCINTEL_AUTOCOMPLETE_MIN_QUERY_LENGTH", "2"))

    # Animation Configuration
    ANIMATION_DURATION_MS: float = float(os.getenv("LOCINTEL_ANIMATION_DURATION_MS", "10000"))
    FRAME_INTERVAL_MS: float = float(os.getenv("LOCINTEL_FRAME_INTERVAL_MS", "16"))

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"


settings = Settings()
