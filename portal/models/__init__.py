"""
Database models for the application.
"""

from portal.core.database import Base
from portal.models.local_storage import LocalStorageItem

__all__ = [
    "Base",
    "LocalStorageItem",
]
