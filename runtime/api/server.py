"""
FastAPI application entry point for the garden tracker.

Responsibilities:
- configure logging from settings
- construct the GardenContext (plant, activity and settings stores)
- include the garden routes

Start it with, e.g.:

    uvicorn runtime.api.server:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI

from configs.settings import settings
from runtime.context import GardenContext, build_context
from . import garden_routes


def create_app(context: Optional[GardenContext] = None) -> FastAPI:
    """Build the FastAPI app around `context` (or one built from settings)."""
    if context is None:
        context = build_context(settings)

    app = FastAPI(title="Garden Tracker")

    # Initialize the router module with our context, then include it.
    garden_routes.init_routes(context)
    app.include_router(garden_routes.router)
    app.state.garden = context
    return app


logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()
