"""Sample records used when a store starts with nothing persisted."""

from datetime import datetime, timedelta, timezone
from typing import List, Optional

from ..models.garden_models import Activity, Plant


def _day(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


def initial_plants() -> List[Plant]:
    return [
        Plant(
            id="1",
            name="Tomato",
            variety="Roma",
            location="vegetable-bed",
            planted_date=_day(2023, 4, 15),
            notes="Growing well, needs regular watering during hot days.",
            status="growing",
        ),
        Plant(
            id="2",
            name="Basil",
            variety="Sweet",
            location="herb-garden",
            planted_date=_day(2023, 5, 1),
            notes="Thriving in partial shade.",
            status="growing",
        ),
        Plant(
            id="3",
            name="Cucumber",
            variety="English",
            location="vegetable-bed",
            planted_date=_day(2023, 4, 20),
            notes="Climbing well on trellis.",
            status="growing",
        ),
        Plant(
            id="4",
            name="Lettuce",
            variety="Romaine",
            location="vegetable-bed",
            planted_date=_day(2023, 3, 10),
            notes="Ready for harvest.",
            status="harvested",
        ),
        Plant(
            id="5",
            name="Sunflower",
            variety="Mammoth",
            location="flower-bed",
            planted_date=_day(2023, 5, 15),
            notes="Growing tall and strong.",
            status="growing",
        ),
    ]


def initial_activities(now: Optional[datetime] = None) -> List[Activity]:
    """Sample activities spread around `now` (defaults to the current time).

    Positive offsets are upcoming activities, negative ones are history.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    # (id, type, plant id, day offset, notes)
    rows = [
        ("1", "watering", "1", 0, "Regular watering schedule"),
        ("2", "planting", "2", 1, "Plant new basil seedlings"),
        ("3", "harvesting", "4", 2, "Harvest outer leaves"),
        ("4", "watering", "3", 3, "Deep watering"),
        ("5", "watering", "3", -1, "Light watering"),
        ("6", "harvesting", "5", -2, "Harvested ripe berries"),
        ("7", "planting", "1", -3, "Planted new seeds"),
    ]
    return [
        Activity(
            id=activity_id,
            type=activity_type,
            plant=plant_id,
            date=now + timedelta(days=offset),
            notes=notes,
        )
        for activity_id, activity_type, plant_id, offset, notes in rows
    ]
