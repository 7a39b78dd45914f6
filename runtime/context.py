"""Wiring of the stores used by one running process.

The stores are plain objects; `build_context` constructs them against a
single LocalStorage and the result is handed to whatever needs them (the
API routes, tests). There are no module-level store instances.
"""

from dataclasses import dataclass, field
from typing import Optional

from configs.settings import Settings
from runtime.store.activity_store import ActivityStore
from runtime.store.local_storage import LocalStorage
from runtime.store.plant_store import PlantStore
from runtime.store.seed_data import initial_activities, initial_plants
from runtime.store.settings_store import SettingsStore
from runtime.store.undo import UndoRegistry


@dataclass
class GardenContext:
    plant_store: PlantStore
    activity_store: ActivityStore
    settings_store: SettingsStore
    undo_registry: UndoRegistry = field(default_factory=UndoRegistry)


def build_context(
    settings: Settings,
    storage: Optional[LocalStorage] = None,
) -> GardenContext:
    """Create the stores for one process.

    Parameters
    ----------
    settings:
        Supplies the storage slot names, the data directory and whether to
        seed sample records.
    storage:
        Storage to use instead of one built from `settings.data_dir`.
    """
    if storage is None:
        data_dir = settings.data_dir
        storage = LocalStorage(data_dir=str(data_dir) if data_dir else None)

    seed = settings.seed_defaults
    return GardenContext(
        plant_store=PlantStore(
            storage,
            settings.plants_storage_key,
            initial_records=initial_plants() if seed else None,
        ),
        activity_store=ActivityStore(
            storage,
            settings.activities_storage_key,
            initial_records=initial_activities() if seed else None,
        ),
        settings_store=SettingsStore(storage, settings.settings_storage_key),
    )
