"""
HTTP request/response models for the garden tracker API.

Record fields use the same camelCase names as the persisted records.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .garden_models import Activity, ActivityType, GardenLocation, PlantStatus


class PlantCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    variety: str = ""
    location: GardenLocation
    planted_date: datetime = Field(alias="plantedDate")
    notes: str = ""


class PlantUpdate(BaseModel):
    """Partial plant update: only the fields sent are changed."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(default=None, min_length=1)
    variety: Optional[str] = None
    location: Optional[GardenLocation] = None
    planted_date: Optional[datetime] = Field(default=None, alias="plantedDate")
    notes: Optional[str] = None
    status: Optional[PlantStatus] = None


class ActivityCreate(BaseModel):
    type: ActivityType
    plant: str
    date: datetime
    notes: Optional[str] = None


class ActivityUpdate(BaseModel):
    type: Optional[ActivityType] = None
    plant: Optional[str] = None
    date: Optional[datetime] = None
    notes: Optional[str] = None


class ActivityView(Activity):
    """An activity plus the display name of the plant it refers to."""

    plant_name: str = Field(alias="plantName")


class SettingsUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    garden_name: Optional[str] = Field(default=None, alias="gardenName")
    location: Optional[str] = None
    hardiness: Optional[str] = None
    temperature_unit: Optional[Literal["F", "C"]] = Field(default=None, alias="temperatureUnit")
    notifications: Optional[bool] = None
    email_notifications: Optional[bool] = Field(default=None, alias="emailNotifications")
    reminder_time: Optional[str] = Field(default=None, alias="reminderTime")


class DeleteResponse(BaseModel):
    """
    Returned when a record is deleted.

    deletion_id can be posted back to the matching /undo endpoint once to
    put the record back at `index`.
    """
    deletion_id: str
    record_id: str
    index: int


class UndoResponse(BaseModel):
    deletion_id: str
    restored: bool
