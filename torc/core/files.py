"""Atomic JSON file writes shared by the storage components."""

import json
import os
import tempfile
from pathlib import Path
from typing import Any

RECORD_MODE = 0o644


def atomic_write_json(path: Path, data: Any) -> None:
    """
    Write ``data`` as indented JSON so readers see either the old file or
    the complete new one, never a partial write.

    The temporary file lives in the target directory (``os.replace`` is
    only atomic within one filesystem) and starts with a dot so directory
    scans for ``order-*.json`` never match it.

    Raises:
        OSError: on any filesystem failure
        TypeError / ValueError: if ``data`` is not JSON-serialisable
    """
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2, ensure_ascii=False)
            fh.flush()
            os.fsync(fh.fileno())
        os.chmod(tmp_name, RECORD_MODE)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
