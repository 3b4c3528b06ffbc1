from .settings import Settings, get_settings
from .database import DatabaseManager, db_manager, get_database, lifespan

__all__ = [
    "Settings",
    "get_settings",
    "DatabaseManager",
    "get_database",
    "db_manager",
    "lifespan"
]
