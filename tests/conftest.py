"""Pytest fixtures for the garden tracker tests."""

from datetime import datetime, timezone

import pytest

from runtime.context import GardenContext
from runtime.store.activity_store import ActivityStore
from runtime.store.local_storage import LocalStorage
from runtime.store.plant_store import PlantStore
from runtime.store.seed_data import initial_activities, initial_plants
from runtime.store.settings_store import SettingsStore


PLANTS_KEY = "garden-plants-storage"
ACTIVITIES_KEY = "garden-activities-storage"
SETTINGS_KEY = "garden-settings-storage"

# Fixed "now" so seeded activity dates are predictable.
NOW = datetime(2024, 6, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def storage(tmp_path):
    """File-backed storage under a per-test temporary directory."""
    return LocalStorage(data_dir=str(tmp_path))


@pytest.fixture
def plant_store(storage):
    """PlantStore seeded with the five sample plants (ids "1".."5")."""
    return PlantStore(storage, PLANTS_KEY, initial_records=initial_plants())


@pytest.fixture
def activity_store(storage):
    """ActivityStore seeded with the seven sample activities around NOW."""
    return ActivityStore(storage, ACTIVITIES_KEY, initial_records=initial_activities(NOW))


@pytest.fixture
def settings_store(storage):
    return SettingsStore(storage, SETTINGS_KEY)


@pytest.fixture
def context(plant_store, activity_store, settings_store):
    return GardenContext(
        plant_store=plant_store,
        activity_store=activity_store,
        settings_store=settings_store,
    )


@pytest.fixture
def client(context):
    """TestClient for an app wired to the per-test context."""
    from fastapi.testclient import TestClient

    from runtime.api.server import create_app

    with TestClient(create_app(context)) as test_client:
        yield test_client
