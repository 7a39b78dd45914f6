"""Delete-then-restore support for record stores.

A deletion goes through an explicit, single-use token:

    token = stage_delete(store, record_id)   # STAGED: snapshot taken
    token.confirm()                          # DELETED: record removed
    token.undo()                             # RESTORED: record re-inserted

The snapshot (record + index) must be captured before the delete, since
the index cannot be recovered from the store afterwards. Restoring puts
the record back at the captured index, clamped to the current bounds,
even if other records were added or removed in the meantime.

Once a token is RESTORED or CANCELLED every further call is a no-op, so
pressing "undo" twice inserts the record only once.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional
from uuid import uuid4

from ..models.garden_models import GardenRecord
from .record_store import RecordStore


logger = logging.getLogger(__name__)


class DeletionState(str, Enum):
    STAGED = "STAGED"
    DELETED = "DELETED"
    RESTORED = "RESTORED"
    CANCELLED = "CANCELLED"


@dataclass
class DeletionToken:
    deletion_id: str
    store: RecordStore
    record: GardenRecord
    index: int
    state: DeletionState = DeletionState.STAGED

    @property
    def record_id(self) -> str:
        return self.record.id

    @property
    def consumed(self) -> bool:
        """True once the token can no longer change the store."""
        return self.state in (DeletionState.RESTORED, DeletionState.CANCELLED)

    def confirm(self) -> bool:
        """Delete the staged record. Only valid from STAGED."""
        if self.state is not DeletionState.STAGED:
            logger.debug("[UNDO] confirm ignored for %s in state %s", self.deletion_id, self.state.value)
            return False

        self.store.delete(self.record_id)
        self.state = DeletionState.DELETED
        return True

    def cancel(self) -> bool:
        """Abandon a staged deletion; the record was never removed."""
        if self.state is not DeletionState.STAGED:
            return False
        self.state = DeletionState.CANCELLED
        return True

    def undo(self) -> bool:
        """Re-insert the deleted record at its captured index.

        Returns True if the record was restored, False if the token was not
        in the DELETED state (already undone, cancelled or never confirmed).
        """
        if self.state is not DeletionState.DELETED:
            logger.debug("[UNDO] undo ignored for %s in state %s", self.deletion_id, self.state.value)
            return False

        # Consume first so a refused insert cannot be retried either.
        self.state = DeletionState.RESTORED
        try:
            restored = self.store.add_at_index(self.record, self.index)
        except Exception:
            # Nothing was inserted; leave the token usable.
            self.state = DeletionState.DELETED
            raise
        if restored:
            logger.info(
                "[UNDO] restored %s id=%s at index=%d",
                self.store.record_label,
                self.record_id,
                self.index,
            )
        return restored


def stage_delete(store: RecordStore, record_id: Any) -> Optional[DeletionToken]:
    """Capture a record and its position ahead of deleting it.

    Returns None if no record has the given id. The record is still in the
    store until `confirm()` is called on the returned token.
    """
    index = store.index_of(record_id)
    record = store.get(record_id)
    if record is None or index == -1:
        return None

    deletion_id = f"{store.record_label}-{record.id}-{uuid4().hex[:12]}"
    return DeletionToken(deletion_id=deletion_id, store=store, record=record, index=index)


@dataclass
class UndoRegistry:
    """Tokens issued during this process, looked up by deletion_id."""

    _tokens: Dict[str, DeletionToken] = field(default_factory=dict)

    def register(self, token: DeletionToken) -> DeletionToken:
        self._tokens[token.deletion_id] = token
        return token

    def get(self, deletion_id: str) -> Optional[DeletionToken]:
        return self._tokens.get(deletion_id)

    def delete(self, store: RecordStore, record_id: Any) -> Optional[DeletionToken]:
        """Stage, confirm and register a deletion in one step."""
        token = stage_delete(store, record_id)
        if token is None:
            return None
        token.confirm()
        return self.register(token)

    def undo(self, deletion_id: str) -> Optional[bool]:
        """Undo a registered deletion.

        Returns None for an unknown deletion_id, otherwise the result of
        `DeletionToken.undo()`.
        """
        token = self.get(deletion_id)
        if token is None:
            return None
        return token.undo()
