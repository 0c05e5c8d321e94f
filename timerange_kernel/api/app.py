"""
Time Range Kernel API — FastAPI endpoints.

Hosts a SelectionController for a browser presentation layer:
- Render snapshot (tracks, now marker, ticks)
- Committed change events
- Live update events with blocked-interval validation
- Stateless validation for an arbitrary window
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from timerange_kernel.controller.selection import SelectionController, validate_selection
from timerange_kernel.geometry.mapper import TimeRangeError
from timerange_kernel.models.config import TimeRangeConfig
from timerange_kernel.models.timeline import BlockedInterval, TimelineWindow

logger = logging.getLogger(__name__)


# --- Request Models ---

class SliderValuesRequest(BaseModel):
    values: List[float]


class ValidateRequest(BaseModel):
    timeline_interval: Tuple[datetime, datetime]
    disabled_intervals: List[BlockedInterval] = []
    values: List[float]


# --- Application Factory ---

def create_app(
    config: Optional[TimeRangeConfig] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Time Range Kernel API",
        description="Timeline geometry and blocked-interval validation",
        version="0.1.0",
    )

    # Fails here, once, on a degenerate window or inverted blocked interval
    controller = SelectionController(config=config, clock=clock)
    app.state.controller = controller

    @app.get("/timerange/render")
    def render():
        """Current render snapshot."""
        return controller.render().model_dump(mode="json")

    @app.post("/timerange/change")
    def change(req: SliderValuesRequest):
        """Committed selection."""
        try:
            start, end = controller.on_change(req.values)
        except ValueError as e:
            raise HTTPException(422, str(e))
        return {"time": [start.isoformat(), end.isoformat()]}

    @app.post("/timerange/update")
    def update(req: SliderValuesRequest):
        """Live drag update, validated against blocked intervals."""
        try:
            result = controller.on_update(req.values)
        except ValueError as e:
            raise HTTPException(422, str(e))
        return result.model_dump(mode="json")

    @app.post("/timerange/validate")
    def validate(req: ValidateRequest):
        """Validate a selection against an ad hoc window and blocked set."""
        window = TimelineWindow.from_pair(req.timeline_interval)
        try:
            error = validate_selection(window, req.disabled_intervals, req.values)
        except (TimeRangeError, ValueError) as e:
            logger.info("Rejected validation request: %s", e)
            raise HTTPException(422, str(e))
        return {"error": error}

    return app
