"""PlantStore: the ordered, persisted collection of plants."""

from typing import Any, Dict

from ..models.garden_models import UNKNOWN_PLANT_NAME, Plant, PlantStatus
from .record_store import RecordStore


class PlantStore(RecordStore[Plant]):
    """Plants in insertion order, persisted as `{"plants": [...]}`.

    New plants always start out `growing`; nothing changes the status
    except an explicit update.
    """

    record_model = Plant
    collection_field = "plants"
    record_label = "plant"
    date_fields = ("plantedDate",)

    def _prepare_new(self, data: Dict[str, Any]) -> Dict[str, Any]:
        data["status"] = PlantStatus.GROWING
        return data

    def display_name(self, plant_id: Any) -> str:
        """Return the plant's name, or "Unknown Plant" for a dangling id."""
        plant = self.get(plant_id)
        if plant is None:
            return UNKNOWN_PLANT_NAME
        return plant.name
