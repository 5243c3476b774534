"""
File Menu Source

Reads the plain-text menu maintained by the menu owner. The file is
re-read on every call so edits take effect without a restart.

Accepted line formats (all equivalent):

    Latte
    "Latte"
    "Latte",

Blank lines are ignored.
"""

import logging
from pathlib import Path
from typing import Union

from torc.services.menu.base import BaseMenuSource

logger = logging.getLogger(__name__)


def parse_menu_line(line: str) -> str:
    """Strip whitespace, one trailing comma and surrounding quotes."""
    cleaned = line.strip()
    if cleaned.endswith(","):
        cleaned = cleaned[:-1]
    return cleaned.strip('"')


class FileMenuSource(BaseMenuSource):
    """
    Menu backed by a text file, one drink per line.

    A missing or unreadable file yields an empty menu rather than an
    error, so every order is rejected as not on the menu until the file
    is restored.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    @property
    def source_name(self) -> str:
        return f"file:{self.path}"

    def current_menu(self) -> list[str]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning(f"Menu file unavailable ({self.path}): {e}")
            return []

        menu = []
        for line in text.splitlines():
            item = parse_menu_line(line)
            if item:
                menu.append(item)
        return menu
