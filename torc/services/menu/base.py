"""
Menu Source Abstract Base Class

Defines the interface the ordering core uses to validate drinks.
Implementations only have to list the current menu; matching is shared.

Design Pattern: Strategy Pattern
    - FileMenuSource reads menu.txt (production)
    - StaticMenuSource holds a fixed list (tests, tooling)
"""

from abc import ABC, abstractmethod
from typing import Optional


class BaseMenuSource(ABC):
    """
    Abstract base class for menu sources.

    Example:
        >>> menu = StaticMenuSource(["Latte", "Mocha"])
        >>> menu.drink_on_menu("latte")
        True
    """

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Short description of where the menu comes from."""
        pass

    @abstractmethod
    def current_menu(self) -> list[str]:
        """
        Return the canonical drink names, in menu order.

        Names are case-sensitive as written by the menu owner.
        """
        pass

    def canonical_name(self, name: str) -> Optional[str]:
        """Return the menu entry matching ``name`` case-insensitively."""
        wanted = name.casefold()
        for item in self.current_menu():
            if item.casefold() == wanted:
                return item
        return None

    def drink_on_menu(self, name: str) -> bool:
        return self.canonical_name(name) is not None
