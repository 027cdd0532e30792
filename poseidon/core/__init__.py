"""Core app configuration, database and security."""

from poseidon.core.config import get_settings, settings
from poseidon.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
