"""FastAPI dependencies."""
from order_intake.core.config import Settings, settings


def get_settings() -> Settings:
    """Get application settings."""
    return settings
