"""
Record models for the garden tracker.

These describe:
- Plant + PlantStatus + GardenLocation
- Activity + ActivityType
- GardenSettings (the settings panel)

Attribute names are snake_case; the persisted and HTTP forms use the
camelCase aliases.
"""

from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


UNKNOWN_PLANT_NAME = "Unknown Plant"


def to_utc_datetime(value):
    """Normalise a date-like value to an aware UTC datetime.

    Plain dates become midnight UTC and naive datetimes are treated as UTC.
    Strings and anything else are left for pydantic to parse.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    return value


class PlantStatus(str, Enum):
    GROWING = "growing"
    HARVESTED = "harvested"
    DORMANT = "dormant"


class GardenLocation(str, Enum):
    VEGETABLE_BED = "vegetable-bed"
    HERB_GARDEN = "herb-garden"
    FLOWER_BED = "flower-bed"
    CONTAINER = "container"
    GREENHOUSE = "greenhouse"


class ActivityType(str, Enum):
    WATERING = "watering"
    PLANTING = "planting"
    HARVESTING = "harvesting"
    PRUNING = "pruning"
    FERTILIZING = "fertilizing"


class GardenRecord(BaseModel):
    """Base for records held by a RecordStore: anything with a string id."""

    model_config = ConfigDict(populate_by_name=True)

    id: str

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        return str(value) if value is not None else value


class Plant(GardenRecord):
    name: str = Field(min_length=1)
    variety: str = ""
    location: GardenLocation
    planted_date: datetime = Field(alias="plantedDate")
    notes: str = ""
    status: PlantStatus = PlantStatus.GROWING

    @field_validator("planted_date", mode="before")
    @classmethod
    def _normalise_planted_date(cls, value):
        return to_utc_datetime(value)

    @field_validator("planted_date")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        return to_utc_datetime(value)


class Activity(GardenRecord):
    type: ActivityType
    plant: str           # Plant id, not enforced
    date: datetime
    notes: Optional[str] = None

    @field_validator("plant", mode="before")
    @classmethod
    def _coerce_plant_id(cls, value):
        return str(value) if value is not None else value

    @field_validator("date", mode="before")
    @classmethod
    def _normalise_date(cls, value):
        return to_utc_datetime(value)

    @field_validator("date")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        return to_utc_datetime(value)


class GardenSettings(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    garden_name: str = Field(default="My Garden", alias="gardenName")
    location: str = "New York, NY"
    hardiness: str = "7b"
    temperature_unit: Literal["F", "C"] = Field(default="F", alias="temperatureUnit")
    notifications: bool = True
    email_notifications: bool = Field(default=True, alias="emailNotifications")
    reminder_time: str = Field(default="morning", alias="reminderTime")
