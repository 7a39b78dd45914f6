"""
Runtime package for the garden tracker.

This package contains:
- API layer (FastAPI server + routes)
- Stores (plants, activities, settings, undo tokens)
- Models (Pydantic records and HTTP schemas)
- Context (wiring of the stores for one process)
"""
