"""ActivityStore: the ordered, persisted collection of garden activities.

Activities point at plants through `Activity.plant`, a plain plant id.
Nothing keeps that reference valid: deleting a plant leaves its
activities in place, and `resolve_plant` simply returns None for them.
"""

from typing import Any, List, Optional

from ..models.garden_models import Activity, Plant
from .plant_store import PlantStore
from .record_store import RecordStore


class ActivityStore(RecordStore[Activity]):
    record_model = Activity
    collection_field = "activities"
    record_label = "activity"
    date_fields = ("date",)

    def resolve_plant(self, activity: Activity, plant_store: PlantStore) -> Optional[Plant]:
        """Look up the plant an activity refers to, if it still exists."""
        return plant_store.get(activity.plant)

    def for_plant(self, plant_id: Any) -> List[Activity]:
        """Return the activities referring to `plant_id`, in store order."""
        wanted = str(plant_id)
        return [a for a in self.records if a.plant == wanted]
