"""
Popularity Tracker with Concurrency Control

Maintains the global drink -> order count record (popular.json):

    {"counts": {"Latte": 3, "Mocha": 5}}

The record is a single monolithic file, so every increment is a full
load -> mutate -> rewrite cycle. That cycle runs under one exclusive lock:

    - a threading.Lock serializes request threads in this process
    - a FileLock on popular.json.lock serializes other processes sharing
      the same data directory

A missing record is an empty mapping. A corrupt record is also treated as
empty, but the unreadable file is kept aside as
popular.json.corrupt-<UTC stamp> before being overwritten.
"""

import json
import logging
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Union

from filelock import FileLock, Timeout
from pydantic import ValidationError as PydanticValidationError

from torc.core.exceptions import StorageError
from torc.core.files import atomic_write_json
from torc.models import PopularityItem, PopularStats

logger = logging.getLogger(__name__)


def sort_popularity(counts: dict[str, int]) -> list[PopularityItem]:
    """Sort by descending count, ties broken by ascending drink name."""
    ordered = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    return [PopularityItem(drink=drink, count=count) for drink, count in ordered]


class PopularityTracker:
    """
    Thread- and process-safe popularity counter.

    Attributes:
        path: Location of the popularity record
        lock_timeout: Seconds to wait for the cross-process file lock

    Example:
        >>> tracker = PopularityTracker("data/popular.json")
        >>> tracker.increment("Latte")
        >>> tracker.snapshot()
        [PopularityItem(drink='Latte', count=1)]
    """

    def __init__(self, path: Union[str, Path], lock_timeout: float = 10.0):
        self.path = Path(path)
        self.lock_timeout = lock_timeout
        self._mutex = threading.Lock()
        self._file_lock = FileLock(
            str(self.path.with_name(self.path.name + ".lock")),
            timeout=lock_timeout,
        )

    # =========================================================================
    # PERSISTENCE (caller holds the lock)
    # =========================================================================

    def _load(self) -> dict[str, int]:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise StorageError(f"failed to read popular stats: {e}") from e

        try:
            stats = PopularStats.model_validate(json.loads(raw.decode("utf-8")))
        except (ValueError, PydanticValidationError) as e:
            self._preserve_corrupt(e)
            return {}
        return dict(stats.counts)

    def _preserve_corrupt(self, error: Exception) -> None:
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        backup = self.path.with_name(f"{self.path.name}.corrupt-{stamp}")
        try:
            self.path.replace(backup)
        except OSError as e:
            raise StorageError(f"failed to set aside corrupt popular stats: {e}") from e
        logger.warning(
            f"Popularity record {self.path} is corrupt ({error}); "
            f"moved to {backup.name} and starting from empty"
        )

    def _save(self, counts: dict[str, int]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            atomic_write_json(self.path, PopularStats(counts=counts).model_dump())
        except OSError as e:
            raise StorageError(f"failed to write popular stats: {e}") from e

    @contextmanager
    def _locked(self) -> Iterator[None]:
        """Hold both locks; raise StorageError if the file lock times out."""
        with self._mutex:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self._file_lock.acquire()
            except Timeout as e:
                raise StorageError(f"popularity lock timeout ({self.lock_timeout}s)") from e
            except OSError as e:
                raise StorageError(f"failed to lock popular stats: {e}") from e

            logger.debug("Popularity lock acquired")
            try:
                yield
            finally:
                self._file_lock.release()
                logger.debug("Popularity lock released")

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def increment(self, drink: str) -> int:
        """
        Add one to ``drink``'s count and persist the whole record.

        Returns:
            The new count for ``drink``

        Raises:
            StorageError: on lock timeout, read or write failure
        """
        with self._locked():
            counts = self._load()
            counts[drink] = counts.get(drink, 0) + 1
            self._save(counts)
            new_count = counts[drink]

        logger.debug(f"Popularity of {drink!r} is now {new_count}")
        return new_count

    def snapshot(self) -> list[PopularityItem]:
        """Current counts sorted by descending count, then drink name."""
        with self._locked():
            counts = self._load()
        return sort_popularity(counts)
