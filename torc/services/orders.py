"""
Order Service

Orchestrates the ordering core for both API surfaces:

    submit:  validate -> SessionStore.append (durable, fatal on failure)
                      -> PopularityTracker.increment (best-effort)
    read:    SessionStore.read_all / PopularityTracker.snapshot

Session management (create, switch, list) also lives here so the public
and admin APIs share one ActiveSessionRegistry and apply the same name
validation.
"""

import logging
import uuid
from datetime import datetime
from typing import Callable, Optional

from torc.core.exceptions import (
    NoActiveSession,
    NotFound,
    NotOnMenu,
    ValidationError,
)
from torc.models import Order, PopularityItem, utc_now
from torc.services.menu import BaseMenuSource
from torc.services.popularity import PopularityTracker
from torc.services.registry import ActiveSessionRegistry
from torc.services.session_store import SessionStore

logger = logging.getLogger(__name__)


def generate_order_id() -> str:
    """Random 128-bit token; collision-free in practice across sessions."""
    return uuid.uuid4().hex


class OrderService:
    """
    Entry point for every ordering operation.

    Attributes:
        store: Session and order persistence
        tracker: Global drink popularity counter
        registry: Currently selected session
        menu: Source of valid drink names
    """

    def __init__(
        self,
        store: SessionStore,
        tracker: PopularityTracker,
        registry: ActiveSessionRegistry,
        menu: BaseMenuSource,
        id_factory: Callable[[], str] = generate_order_id,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.tracker = tracker
        self.registry = registry
        self.menu = menu
        self._id_factory = id_factory
        self._clock = clock

    # =========================================================================
    # SESSIONS
    # =========================================================================

    def _clean_session_name(self, name: Optional[str]) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationError("sessionName is required")
        if not self.store.validate_name(cleaned):
            raise ValidationError("invalid sessionName", detail=cleaned)
        return cleaned

    def create_session(self, name: str) -> str:
        """Create (or reuse) a session and make it active."""
        session_name = self._clean_session_name(name)
        self.store.ensure(session_name)
        self.registry.set(session_name)
        logger.info(f"Session '{session_name}' created")
        return session_name

    def switch_session(self, name: str) -> str:
        """Make an existing session active."""
        session_name = self._clean_session_name(name)
        if not self.store.exists(session_name):
            raise NotFound("session does not exist", detail=session_name)
        self.registry.set(session_name)
        return session_name

    def active_session(self) -> str:
        return self.registry.get()

    def list_sessions(self) -> list[str]:
        return self.store.list_all()

    # =========================================================================
    # ORDERS
    # =========================================================================

    def submit_order(
        self,
        drink: Optional[str],
        customer_name: Optional[str],
        instructions: Optional[str] = "",
    ) -> Order:
        """
        Validate, persist and count a new order in the active session.

        Raises:
            NoActiveSession: no session selected
            ValidationError: blank drink or customer name
            NotOnMenu: drink not on the current menu
            StorageError: the order could not be written
        """
        session_name = self.registry.get()
        if not session_name:
            raise NoActiveSession()

        drink = (drink or "").strip()
        if not drink:
            raise ValidationError("drink is required")
        customer_name = (customer_name or "").strip()
        if not customer_name:
            raise ValidationError("customerName is required")

        if not self.menu.drink_on_menu(drink):
            raise NotOnMenu(drink)

        order = Order(
            order_id=self._id_factory(),
            drink=drink,
            customer_name=customer_name,
            instructions=(instructions or "").strip(),
            timestamp=self._clock(),
        )

        self.store.append(session_name, order)
        logger.info(f"Order {order.order_id} saved to '{session_name}': {order.drink}")

        try:
            self.tracker.increment(order.drink)
        except Exception:
            # The order is already durable; stats are best-effort.
            logger.exception(f"Failed to update popular stats for order {order.order_id}")

        return order

    def list_orders(self, session_name: Optional[str] = None) -> list[Order]:
        """Orders of ``session_name``, or of the active session if omitted."""
        name = (session_name or "").strip()
        if name:
            if not self.store.validate_name(name):
                raise ValidationError("invalid sessionName", detail=name)
        else:
            name = self.registry.get()
            if not name:
                raise NoActiveSession()
        return self.store.read_all(name)

    # =========================================================================
    # READ MODELS
    # =========================================================================

    def popularity_snapshot(self) -> list[PopularityItem]:
        return self.tracker.snapshot()

    def current_menu(self) -> list[str]:
        return self.menu.current_menu()
