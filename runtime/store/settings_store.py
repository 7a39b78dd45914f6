"""SettingsStore: the persisted garden settings panel."""

import logging
from typing import Any, Mapping, Union

from pydantic import BaseModel, ValidationError

from ..models.garden_models import GardenSettings
from .local_storage import LocalStorage
from .persisted_store import PersistedStore


logger = logging.getLogger(__name__)


class SettingsStore(PersistedStore):
    """Single GardenSettings object persisted as `{"settings": {...}}`."""

    def __init__(self, storage: LocalStorage, storage_key: str) -> None:
        super().__init__(storage, storage_key)
        self._settings = GardenSettings()

        state = self._load_state()
        if state is not None:
            try:
                self._settings = GardenSettings.model_validate(state.get("settings") or {})
            except ValidationError as e:
                logger.warning(
                    "[STORE] key=%s holds invalid settings, using defaults: %s",
                    self.storage_key,
                    e,
                )

    @property
    def settings(self) -> GardenSettings:
        return self._settings.model_copy()

    def update_settings(self, changes: Union[Mapping[str, Any], BaseModel]) -> GardenSettings:
        """Merge `changes` into the current settings and persist them.

        Raises
        ------
        pydantic.ValidationError
            If a changed value is invalid. Nothing is stored.
        """
        if isinstance(changes, BaseModel):
            changes = changes.model_dump(exclude_unset=True)

        merged = {**self._settings.model_dump(by_alias=True), **dict(changes)}
        for name, info in GardenSettings.model_fields.items():
            if info.alias and name in changes:
                merged[info.alias] = changes[name]
                merged.pop(name, None)

        updated = GardenSettings.model_validate(merged)
        self._save_state({"settings": updated.model_dump(by_alias=True)})
        self._settings = updated
        logger.debug("[STORE] updated settings fields=%s", sorted(changes))
        return self.settings
