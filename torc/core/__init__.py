"""
Core module initialization.
Exports configuration, logging utilities and the error taxonomy.
"""

from torc.core.config import get_settings, Settings, setup_logging
from torc.core.exceptions import (
    TorcError,
    ValidationError,
    NotOnMenu,
    NoActiveSession,
    NotFound,
    StorageError,
)

__all__ = [
    "get_settings",
    "Settings",
    "setup_logging",
    "TorcError",
    "ValidationError",
    "NotOnMenu",
    "NoActiveSession",
    "NotFound",
    "StorageError",
]
