"""Core app configuration, database and error taxonomy."""

from app.core.config import Settings, get_settings, settings
from app.core.database import get_db

__all__ = ["Settings", "get_settings", "settings", "get_db"]
