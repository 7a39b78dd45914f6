"""HTTP routes for the garden tracker.

Exposes endpoints like:

- GET    /plants                      -> all plants in store order
- POST   /plants                      -> create a plant (status "growing")
- PATCH  /plants/{id}                 -> change only the fields sent
- DELETE /plants/{id}                 -> delete, returning a deletion_id
- POST   /plants/undo/{deletion_id}   -> put a deleted plant back, once

and the same set under /activities, plus /settings.

Handlers never touch store internals; every write goes through the
store operations. Handlers are `async def` and never await, so they run
one at a time on the event loop and store operations never interleave.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from ..context import GardenContext
from ..models.api_models import (
    ActivityCreate,
    ActivityUpdate,
    ActivityView,
    DeleteResponse,
    PlantCreate,
    PlantUpdate,
    SettingsUpdate,
    UndoResponse,
)
from ..models.garden_models import Activity, GardenSettings, Plant
from ..store.record_store import RecordStore


logger = logging.getLogger(__name__)

# Router for all garden endpoints
router = APIRouter()


# Module-level reference, to be initialized by the server.
_CONTEXT: Optional[GardenContext] = None


def init_routes(context: GardenContext) -> None:
    """Initialize the module-level context used by the route handlers."""
    global _CONTEXT
    _CONTEXT = context


def _require_context() -> GardenContext:
    if _CONTEXT is None:
        raise HTTPException(
            status_code=500,
            detail="GardenContext is not configured on the server.",
        )
    return _CONTEXT


def _not_found(kind: str, record_id: str) -> HTTPException:
    logger.warning("[API] %s not found id=%s", kind, record_id)
    return HTTPException(status_code=404, detail=f"{kind.capitalize()} not found")


def _invalid(e: ValidationError) -> HTTPException:
    return HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))


def _activity_view(context: GardenContext, activity: Activity) -> ActivityView:
    return ActivityView(
        **activity.model_dump(),
        plant_name=context.plant_store.display_name(activity.plant),
    )


def _delete(store: RecordStore, record_id: str) -> DeleteResponse:
    context = _require_context()
    token = context.undo_registry.delete(store, record_id)
    if token is None:
        raise _not_found(store.record_label, record_id)
    logger.info(
        "[API] deleted %s id=%s deletion_id=%s",
        store.record_label,
        record_id,
        token.deletion_id,
    )
    return DeleteResponse(
        deletion_id=token.deletion_id,
        record_id=token.record_id,
        index=token.index,
    )


def _undo(store: RecordStore, deletion_id: str) -> UndoResponse:
    context = _require_context()
    token = context.undo_registry.get(deletion_id)
    if token is None or token.store is not store:
        raise _not_found("deletion", deletion_id)
    return UndoResponse(deletion_id=deletion_id, restored=token.undo())


# --------------------------------------------------------
# Plants
# --------------------------------------------------------

@router.get("/plants", response_model=List[Plant])
async def list_plants() -> List[Plant]:
    return _require_context().plant_store.records


@router.post("/plants", response_model=Plant, status_code=201)
async def create_plant(request: PlantCreate) -> Plant:
    """Create a plant. New plants always start out "growing"."""
    store = _require_context().plant_store
    try:
        return store.add(request)
    except ValidationError as e:
        raise _invalid(e)


@router.get("/plants/{plant_id}", response_model=Plant)
async def get_plant(plant_id: str) -> Plant:
    plant = _require_context().plant_store.get(plant_id)
    if plant is None:
        raise _not_found("plant", plant_id)
    return plant


@router.patch("/plants/{plant_id}", response_model=Plant)
async def update_plant(plant_id: str, request: PlantUpdate) -> Plant:
    store = _require_context().plant_store
    try:
        plant = store.update(plant_id, request)
    except ValidationError as e:
        raise _invalid(e)
    if plant is None:
        raise _not_found("plant", plant_id)
    return plant


@router.delete("/plants/{plant_id}", response_model=DeleteResponse)
async def delete_plant(plant_id: str) -> DeleteResponse:
    """Delete a plant. Its activities are left pointing at the old id."""
    return _delete(_require_context().plant_store, plant_id)


@router.post("/plants/undo/{deletion_id}", response_model=UndoResponse)
async def undo_plant_delete(deletion_id: str) -> UndoResponse:
    return _undo(_require_context().plant_store, deletion_id)


@router.get("/plants/{plant_id}/activities", response_model=List[ActivityView])
async def list_plant_activities(plant_id: str) -> List[ActivityView]:
    context = _require_context()
    if context.plant_store.get(plant_id) is None:
        raise _not_found("plant", plant_id)
    return [
        _activity_view(context, activity)
        for activity in context.activity_store.for_plant(plant_id)
    ]


# --------------------------------------------------------
# Activities
# --------------------------------------------------------

@router.get("/activities", response_model=List[ActivityView])
async def list_activities() -> List[ActivityView]:
    context = _require_context()
    return [_activity_view(context, a) for a in context.activity_store.records]


@router.post("/activities", response_model=ActivityView, status_code=201)
async def create_activity(request: ActivityCreate) -> ActivityView:
    """Create an activity. The plant id is stored as given, even if unknown."""
    context = _require_context()
    try:
        activity = context.activity_store.add(request)
    except ValidationError as e:
        raise _invalid(e)
    return _activity_view(context, activity)


@router.get("/activities/{activity_id}", response_model=ActivityView)
async def get_activity(activity_id: str) -> ActivityView:
    context = _require_context()
    activity = context.activity_store.get(activity_id)
    if activity is None:
        raise _not_found("activity", activity_id)
    return _activity_view(context, activity)


@router.patch("/activities/{activity_id}", response_model=ActivityView)
async def update_activity(activity_id: str, request: ActivityUpdate) -> ActivityView:
    context = _require_context()
    try:
        activity = context.activity_store.update(activity_id, request)
    except ValidationError as e:
        raise _invalid(e)
    if activity is None:
        raise _not_found("activity", activity_id)
    return _activity_view(context, activity)


@router.delete("/activities/{activity_id}", response_model=DeleteResponse)
async def delete_activity(activity_id: str) -> DeleteResponse:
    return _delete(_require_context().activity_store, activity_id)


@router.post("/activities/undo/{deletion_id}", response_model=UndoResponse)
async def undo_activity_delete(deletion_id: str) -> UndoResponse:
    return _undo(_require_context().activity_store, deletion_id)


# --------------------------------------------------------
# Settings
# --------------------------------------------------------

@router.get("/settings", response_model=GardenSettings)
async def get_settings() -> GardenSettings:
    return _require_context().settings_store.settings


@router.patch("/settings", response_model=GardenSettings)
async def update_settings(request: SettingsUpdate) -> GardenSettings:
    store = _require_context().settings_store
    try:
        return store.update_settings(request)
    except ValidationError as e:
        raise _invalid(e)


# --------------------------------------------------------
# Endpoint: GET /healthz
# --------------------------------------------------------
@router.get("/healthz")
async def health_check():
    """
    Simple health check endpoint for uptime monitoring.
    """
    return {"status": "ok"}
