"""Core app configuration, database, errors and request deadlines."""

from app.core.config import get_settings, settings
from app.core.database import get_db
from app.core.timeout import with_timeout

__all__ = ["get_settings", "settings", "get_db", "with_timeout"]
