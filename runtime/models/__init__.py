"""
Pydantic models used by the garden tracker.

Split into:
- garden_models: Plant, Activity, GardenSettings and their enums
- api_models: HTTP request/response schemas
"""
