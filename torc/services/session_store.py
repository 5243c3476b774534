"""
Session Store

Durable one-level namespace of sessions, each holding its orders:

    <root>/<session>/order-<orderId>.json

Each order is its own file, written atomically. Concurrent appends to the
same session therefore never touch the same file and need no locking.
The price is that reads must tolerate stray or corrupt files: those are
skipped and logged, never fatal to the whole listing.
"""

import json
import logging
import re
from pathlib import Path
from typing import Union

from pydantic import ValidationError as PydanticValidationError

from torc.core.exceptions import StorageError, ValidationError
from torc.core.files import atomic_write_json
from torc.models import Order

logger = logging.getLogger(__name__)

SESSION_NAME_RE = re.compile(r"[A-Za-z0-9_-]+")
ORDER_PREFIX = "order-"
ORDER_SUFFIX = ".json"


def is_order_filename(name: str) -> bool:
    return (
        name.startswith(ORDER_PREFIX)
        and name.endswith(ORDER_SUFFIX)
        and len(name) > len(ORDER_PREFIX) + len(ORDER_SUFFIX)
    )


class SessionStore:
    """
    Filesystem-backed session and order storage.

    Attributes:
        root: Directory holding one sub-directory per session. Created
            lazily on the first ensure/append.

    Example:
        >>> store = SessionStore("data/Sessions")
        >>> store.ensure("friday")
        >>> store.append("friday", order)
        >>> [o.drink for o in store.read_all("friday")]
        ['Latte']
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    # =========================================================================
    # SESSIONS
    # =========================================================================

    @staticmethod
    def validate_name(name: str) -> bool:
        """True iff ``name`` is non-empty and only uses [A-Za-z0-9_-]."""
        return bool(name) and SESSION_NAME_RE.fullmatch(name) is not None

    def _session_path(self, name: str) -> Path:
        if not self.validate_name(name):
            raise ValidationError("invalid sessionName", detail=name)
        return self.root / name

    def ensure(self, name: str) -> None:
        """Create the session directory if absent. Idempotent."""
        path = self._session_path(name)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"failed to create session: {e}", detail=name) from e

    def exists(self, name: str) -> bool:
        if not self.validate_name(name):
            return False
        return (self.root / name).is_dir()

    def list_all(self) -> list[str]:
        """Names of all session directories, empty if the root is missing."""
        try:
            entries = list(self.root.iterdir())
        except FileNotFoundError:
            return []
        except OSError as e:
            raise StorageError(f"failed to list sessions: {e}") from e
        return sorted(entry.name for entry in entries if entry.is_dir())

    # =========================================================================
    # ORDERS
    # =========================================================================

    def append(self, session_name: str, order: Order) -> Path:
        """
        Durably write ``order`` into the session as its own file.

        Returns:
            Path of the written order file

        Raises:
            ValidationError: invalid session name or unsafe order id
            StorageError: serialisation or write failure
        """
        self.ensure(session_name)
        if not SESSION_NAME_RE.fullmatch(order.order_id):
            raise ValidationError("invalid orderId", detail=order.order_id)

        path = self.root / session_name / f"{ORDER_PREFIX}{order.order_id}{ORDER_SUFFIX}"
        try:
            atomic_write_json(path, order.to_record())
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"failed to save order: {e}", detail=order.order_id) from e

        logger.debug(f"Order {order.order_id} written to {path}")
        return path

    def read_all(self, session_name: str) -> list[Order]:
        """
        Load every readable order in the session.

        Non-order entries and corrupt records are skipped. Orders come back
        in directory enumeration order; sort by ``timestamp`` if creation
        order matters.

        Raises:
            StorageError: the session directory cannot be enumerated
        """
        path = self._session_path(session_name)
        try:
            entries = list(path.iterdir())
        except OSError as e:
            raise StorageError(f"failed to read orders: {e}", detail=session_name) from e

        orders = []
        for entry in entries:
            if not is_order_filename(entry.name):
                continue
            try:
                if not entry.is_file():
                    continue
                data = json.loads(entry.read_text(encoding="utf-8"))
                orders.append(Order.model_validate(data))
            except (OSError, ValueError, PydanticValidationError) as e:
                logger.warning(f"Skipping unreadable order file {entry}: {e}")
        return orders
