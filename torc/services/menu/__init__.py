"""
Menu Source Factory

Usage:
    from torc.services.menu import get_menu_source

    menu = get_menu_source()
    if menu.drink_on_menu("latte"):
        ...
"""

import logging
from functools import lru_cache

from torc.core.config import get_settings
from torc.services.menu.base import BaseMenuSource
from torc.services.menu.file import FileMenuSource, parse_menu_line
from torc.services.menu.static import StaticMenuSource

logger = logging.getLogger(__name__)


@lru_cache()
def get_menu_source() -> BaseMenuSource:
    """Get the configured menu source (the menu file from settings)."""
    settings = get_settings()
    logger.info(f"Menu Source: Using FileMenuSource ({settings.menu_path})")
    return FileMenuSource(settings.menu_path)


def reset_menu_source() -> None:
    """Clear the cached menu source instance."""
    get_menu_source.cache_clear()
    logger.debug("Menu source cache cleared")


__all__ = [
    "get_menu_source",
    "reset_menu_source",
    "parse_menu_line",
    "BaseMenuSource",
    "FileMenuSource",
    "StaticMenuSource",
]
