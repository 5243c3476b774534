"""
                        Services Module

The ordering core, wired from settings by a cached factory so the public
and admin APIs share one registry and one popularity lock.

Services:
    - session_store: one-file-per-order session storage
    - popularity: lock-guarded global drink counter
    - registry: active session pointer
    - menu: drink validation source
    - orders: orchestration of all of the above

Usage:
    from torc.services import get_order_service

    service = get_order_service()
    service.create_session("friday")
    service.submit_order("Latte", "Ada", "oat milk")
"""

import logging
from functools import lru_cache

from torc.core.config import get_settings
from torc.services.menu import get_menu_source, reset_menu_source
from torc.services.orders import OrderService
from torc.services.popularity import PopularityTracker
from torc.services.registry import ActiveSessionRegistry
from torc.services.session_store import SessionStore

logger = logging.getLogger(__name__)


@lru_cache()
def get_order_service() -> OrderService:
    """
    Get the process-wide order service.

    The instance is cached: the active session and the in-process
    popularity lock are only meaningful if every request sees the same
    objects.
    """
    settings = get_settings()
    logger.info(f"Order Service: data directory {settings.data_path.resolve()}")
    return OrderService(
        store=SessionStore(settings.sessions_root),
        tracker=PopularityTracker(
            settings.popular_path,
            lock_timeout=settings.popularity_lock_timeout,
        ),
        registry=ActiveSessionRegistry(),
        menu=get_menu_source(),
    )


def reset_order_service() -> None:
    """
    Clear the cached order service (and its menu source).

    The next call builds fresh components; the active session is lost.
    """
    get_order_service.cache_clear()
    reset_menu_source()
    logger.debug("Order service cache cleared")


__all__ = [
    "get_order_service",
    "reset_order_service",
    "OrderService",
    "SessionStore",
    "PopularityTracker",
    "ActiveSessionRegistry",
]
