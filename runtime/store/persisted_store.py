"""Shared load/save plumbing for stores mirrored to LocalStorage."""

import logging
from typing import Any, Dict, Optional, Tuple

from exceptions.exceptions import PersistedStateFormatException

from .codec import decode_state, encode_state
from .local_storage import LocalStorage


logger = logging.getLogger(__name__)


class PersistedStore:
    """Base class for a store whose whole state lives in one storage slot.

    Subclasses call `_load_state()` once while constructing and
    `_save_state()` after every mutation.
    """

    # Keys whose values are datetimes in memory and ISO strings on disk.
    date_fields: Tuple[str, ...] = ()

    # Written alongside the state so the layout can change later.
    STATE_VERSION = 0

    def __init__(self, storage: LocalStorage, storage_key: str) -> None:
        self.storage = storage
        self.storage_key = storage_key

    def _load_state(self) -> Optional[Dict[str, Any]]:
        """Return the decoded persisted state, or None.

        A missing slot and an undecodable slot are both treated as "no
        state"; the latter is logged so the data loss is visible.
        """
        try:
            blob = self.storage.get_item(self.storage_key)
            if blob is None:
                return None
            return decode_state(blob, self.date_fields, storage_key=self.storage_key)
        except PersistedStateFormatException as e:
            logger.warning(
                "[STORE] ignoring unreadable state for key=%s reason=%r",
                self.storage_key,
                e.details,
            )
            return None

    def _save_state(self, state: Dict[str, Any]) -> None:
        payload = dict(state)
        payload["version"] = self.STATE_VERSION
        self.storage.set_item(self.storage_key, encode_state(payload, self.date_fields))
