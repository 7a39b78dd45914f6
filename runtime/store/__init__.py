"""
Storage layer for the garden tracker.

Includes:
- LocalStorage: string key-value slots (in-memory + file-backed)
- codec: datetime-aware JSON encode/decode for persisted state
- RecordStore: ordered, persisted record collection
- PlantStore / ActivityStore / SettingsStore: the concrete stores
- undo: single-use deletion tokens for delete-then-restore
"""
