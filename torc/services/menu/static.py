"""In-memory menu source."""

from typing import Iterable

from torc.services.menu.base import BaseMenuSource


class StaticMenuSource(BaseMenuSource):
    """Fixed menu supplied at construction time."""

    def __init__(self, items: Iterable[str]):
        self._items = [item.strip() for item in items if item and item.strip()]

    @property
    def source_name(self) -> str:
        return "static"

    def current_menu(self) -> list[str]:
        return list(self._items)
