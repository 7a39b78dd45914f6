"""Generic ordered record store.

A RecordStore owns an ordered list of records of one pydantic type. The
list order is the display order and the basis for undo positioning, so
every operation keeps it stable:

- add / add_with_id append at the end
- update replaces a record in place
- delete removes the first match
- add_at_index re-inserts a captured record at a clamped position

Every mutation is persisted before returning, and only reaches the
in-memory list once the write succeeded. Missing ids are never an
error: lookups return None and mutations become no-ops.
"""

import logging
from typing import (
    Any,
    Dict,
    Generic,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Type,
    TypeVar,
    Union,
)
from uuid import uuid4

from pydantic import BaseModel, ValidationError

from ..models.garden_models import GardenRecord
from .local_storage import LocalStorage
from .persisted_store import PersistedStore


logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=GardenRecord)

FieldsLike = Union[Mapping[str, Any], BaseModel]


class RecordStore(PersistedStore, Generic[RecordT]):
    """In-memory ordered collection mirrored to one LocalStorage slot.

    Parameters
    ----------
    storage:
        Key-value storage holding the persisted blob.
    storage_key:
        Slot name, e.g. "garden-plants-storage".
    initial_records:
        Records to start with when nothing (readable) is persisted yet.
    """

    record_model: Type[RecordT]
    # Name of the list inside the persisted object, e.g. "plants".
    collection_field: str
    # Used in log lines and deletion ids, e.g. "plant".
    record_label: str = "record"

    def __init__(
        self,
        storage: LocalStorage,
        storage_key: str,
        initial_records: Optional[Iterable[RecordT]] = None,
    ) -> None:
        super().__init__(storage, storage_key)
        self._records: List[RecordT] = []
        self._rehydrate(list(initial_records or []))

    # ------------------------------------------------------------------
    # Loading / saving
    # ------------------------------------------------------------------

    def _rehydrate(self, initial_records: List[RecordT]) -> None:
        state = self._load_state()
        if state is None:
            self._records = self._unique([r.model_copy() for r in initial_records])
            return

        raw_records = state.get(self.collection_field)
        if not isinstance(raw_records, list):
            logger.warning(
                "[STORE] key=%s has no %r list, starting from defaults",
                self.storage_key,
                self.collection_field,
            )
            self._records = self._unique([r.model_copy() for r in initial_records])
            return

        try:
            records = [self.record_model.model_validate(item) for item in raw_records]
        except ValidationError as e:
            logger.warning(
                "[STORE] key=%s holds invalid %s records, starting from defaults: %s",
                self.storage_key,
                self.record_label,
                e,
            )
            records = [r.model_copy() for r in initial_records]

        self._records = self._unique(records)

    def _unique(self, records: List[RecordT]) -> List[RecordT]:
        """Drop records whose id was already seen, keeping the first."""
        seen = set()
        unique = []
        for record in records:
            if record.id in seen:
                logger.warning(
                    "[STORE] dropping duplicate %s id=%s from key=%s",
                    self.record_label,
                    record.id,
                    self.storage_key,
                )
                continue
            seen.add(record.id)
            unique.append(record)
        return unique

    def _commit(self, records: List[RecordT]) -> None:
        """Persist `records`, then make them the current collection.

        If the write fails the in-memory collection is left untouched.
        """
        self._save_state(
            {self.collection_field: [r.model_dump(by_alias=True) for r in records]}
        )
        self._records = records

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _find_index(self, record_id: Any) -> int:
        wanted = str(record_id)
        for i, record in enumerate(self._records):
            if str(record.id) == wanted:
                return i
        return -1

    def _to_field_names(self, fields: FieldsLike) -> Dict[str, Any]:
        """Return `fields` as a plain dict keyed by attribute name.

        Accepts either a mapping (snake_case or camelCase keys) or a
        pydantic model, in which case only explicitly set fields count.
        """
        if isinstance(fields, BaseModel):
            data = fields.model_dump(exclude_unset=True)
        else:
            data = dict(fields)

        for name, info in self.record_model.model_fields.items():
            if info.alias and info.alias in data:
                data[name] = data.pop(info.alias)
        return data

    def _coerce_record(self, record: Union[RecordT, Mapping[str, Any]]) -> RecordT:
        if isinstance(record, self.record_model):
            return record.model_copy()
        if isinstance(record, BaseModel):
            record = record.model_dump()
        return self.record_model.model_validate(record)

    def _new_id(self) -> str:
        while True:
            candidate = uuid4().hex
            if self._find_index(candidate) == -1:
                return candidate

    def _prepare_new(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Hook for subclasses to fill creation-time defaults."""
        return data

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def records(self) -> List[RecordT]:
        """Copies of all records in store order."""
        return [r.model_copy() for r in self._records]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[RecordT]:
        return iter(self.records)

    def get(self, record_id: Any) -> Optional[RecordT]:
        """Return a copy of the record with the given id, or None.

        Ids are compared as strings, so `get(3)` finds the record "3".
        """
        index = self._find_index(record_id)
        if index == -1:
            return None
        return self._records[index].model_copy()

    def index_of(self, record_id: Any) -> int:
        """Return the position of a record in store order, or -1."""
        return self._find_index(record_id)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, fields: FieldsLike) -> RecordT:
        """Create a record with a fresh id and append it.

        Raises
        ------
        pydantic.ValidationError
            If the fields do not form a valid record. Nothing is stored.
        """
        data = self._to_field_names(fields)
        data["id"] = self._new_id()
        record = self.record_model.model_validate(self._prepare_new(data))

        self._commit(self._records + [record])
        logger.debug("[STORE] added %s id=%s", self.record_label, record.id)
        return record.model_copy()

    def add_with_id(self, record: Union[RecordT, Mapping[str, Any]]) -> Optional[RecordT]:
        """Append a fully formed record, keeping its id.

        Returns None (and stores nothing) if the id is already taken.
        """
        record = self._coerce_record(record)
        if self._find_index(record.id) != -1:
            logger.warning(
                "[STORE] refusing duplicate %s id=%s", self.record_label, record.id
            )
            return None

        self._commit(self._records + [record])
        logger.debug("[STORE] added %s id=%s", self.record_label, record.id)
        return record.model_copy()

    def update(self, record_id: Any, fields: FieldsLike) -> Optional[RecordT]:
        """Replace only the supplied fields of a record.

        The id itself cannot be changed. Returns the updated record, or
        None if no record has the given id.

        Raises
        ------
        pydantic.ValidationError
            If the merged record is invalid. The stored record is unchanged.
        """
        index = self._find_index(record_id)
        if index == -1:
            logger.debug("[STORE] update: no %s id=%s", self.record_label, record_id)
            return None

        data = self._to_field_names(fields)
        data.pop("id", None)

        current = self._records[index]
        merged = {**current.model_dump(), **data}
        updated = self.record_model.model_validate(merged)

        records = list(self._records)
        records[index] = updated
        self._commit(records)
        logger.debug(
            "[STORE] updated %s id=%s fields=%s",
            self.record_label,
            updated.id,
            sorted(data),
        )
        return updated.model_copy()

    def delete(self, record_id: Any) -> bool:
        """Remove the first record with the given id.

        Returns False (and persists nothing) if no record matched.
        """
        index = self._find_index(record_id)
        if index == -1:
            logger.debug("[STORE] delete: no %s id=%s", self.record_label, record_id)
            return False

        self._commit(self._records[:index] + self._records[index + 1:])
        logger.debug("[STORE] deleted %s id=%s at index=%d", self.record_label, record_id, index)
        return True

    def add_at_index(self, record: Union[RecordT, Mapping[str, Any]], index: int) -> bool:
        """Insert a fully formed record at `max(0, min(index, len))`.

        This is how a deletion is undone: the caller captures the record
        and its index before deleting. The index is applied literally even
        if the store changed in between.

        Returns False (and stores nothing) if the id is already present.
        """
        record = self._coerce_record(record)
        if self._find_index(record.id) != -1:
            logger.warning(
                "[STORE] refusing duplicate %s id=%s", self.record_label, record.id
            )
            return False

        safe_index = min(max(0, index), len(self._records))
        self._commit(self._records[:safe_index] + [record] + self._records[safe_index:])
        logger.debug(
            "[STORE] inserted %s id=%s at index=%d",
            self.record_label,
            record.id,
            safe_index,
        )
        return True
