"""
Active Session Registry

Holds the name of the session that order submission and listing target
when the caller does not name one. The value lives in memory only: every
process starts with no active session and an operator has to create or
switch to one after a restart.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """
    Many concurrent readers or one writer.

    Writers wait for in-flight readers to drain; new readers wait while a
    writer holds the lock. No fairness beyond what threading.Condition
    provides.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writing:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._readers:
                self._cond.wait()
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class ActiveSessionRegistry:
    """Process-wide pointer to the currently selected session name."""

    def __init__(self, initial: str = ""):
        self._lock = ReadWriteLock()
        self._name = initial

    def get(self) -> str:
        """Active session name, or "" if none has been selected."""
        with self._lock.read():
            return self._name

    def set(self, name: str) -> None:
        with self._lock.write():
            previous, self._name = self._name, name
        if previous != name:
            logger.info(f"Active session: {previous or '<none>'} -> {name or '<none>'}")

    def clear(self) -> None:
        self.set("")
