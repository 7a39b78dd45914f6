"""Local key-value storage backing the garden stores.

Each key holds one opaque string blob. The design is intentionally simple:
- In-memory access is the primary source of truth during a run.
- If a data_dir is configured, every write is mirrored to
  `data_dir/storage/<key>.json` so that state survives a restart.

Files are replaced atomically: a blob is written to a temporary file in
the same directory and then moved over the old one, so a reader never
sees a half-written blob.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional

from exceptions.exceptions import PersistedStateFormatException


logger = logging.getLogger(__name__)


class LocalStorage:
    """In-memory + optional file-backed string storage.

    Parameters
    ----------
    data_dir:
        Base directory for storing blobs. If provided, values are written to
        and read from `data_dir/storage/<key>.json`.

        If not provided, values live only in memory for the lifetime of
        this object.
    """

    def __init__(self, data_dir: Optional[str] = None) -> None:
        # In-memory cache of blobs for fast access.
        self._items: Dict[str, str] = {}

        # Optional base directory for persistence.
        self._data_dir: Optional[Path] = Path(data_dir) if data_dir else None

    @property
    def _storage_dir(self) -> Path:
        """Return the directory used to store blobs."""
        return self._data_dir / "storage"

    def _item_path(self, key: str) -> Path:
        return self._storage_dir / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        """Return the blob stored under `key`, or None.

        Lookup order:
        1. Check the in-memory cache.
        2. If not found and a data_dir is configured, read it from disk.
        3. If still not found, return None.

        Raises
        ------
        PersistedStateFormatException
            If the file on disk is not valid UTF-8.
        """
        if key in self._items:
            return self._items[key]

        if self._data_dir is not None:
            path = self._item_path(key)
            if path.is_file():
                try:
                    value = path.read_text(encoding="utf-8")
                except UnicodeDecodeError as e:
                    raise PersistedStateFormatException(key, f"Not valid UTF-8: {e}") from e
                self._items[key] = value
                return value

        return None

    def set_item(self, key: str, value: str) -> None:
        """Store `value` under `key` on disk (if enabled) and in memory.

        The disk write happens first; if it fails the in-memory value is
        left as it was and the error propagates.
        """
        if self._data_dir is not None:
            storage_dir = self._storage_dir
            storage_dir.mkdir(parents=True, exist_ok=True)

            fd, tmp_name = tempfile.mkstemp(dir=storage_dir, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(value)
                os.replace(tmp_name, self._item_path(key))
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
            logger.debug("[STORE] wrote %d chars to %s", len(value), key)

        self._items[key] = value
