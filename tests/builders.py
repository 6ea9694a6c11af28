"""Builder helpers to express server payloads succinctly."""

from __future__ import annotations

import json
from typing import Any, Dict


def make_journey(**overrides: Any) -> Dict[str, Any]:
    """Return a ``Journey`` payload as the server sends it."""

    base: Dict[str, Any] = {
        "id": 1,
        "name": "Charlotte → Atlanta",
        "start_label": "Charlotte, NC",
        "dest_label": "Atlanta, GA",
        "total_distance_miles": 245.0,
        "status": "active",
        "started_at": "2025-12-06T13:39:09.401345",
        "completed_at": None,
        "created_at": "2025-12-06T13:39:09.401345",
        "updated_at": "2025-12-06T13:39:09.401345",
        "start_lat": 35.2271,
        "start_lng": -80.8431,
        "dest_lat": 33.749,
        "dest_lng": -84.388,
    }
    base.update(overrides)
    return base


def make_progress(**overrides: Any) -> Dict[str, Any]:
    """Return a ``JourneyProgress`` payload (``/journeys/current`` shape)."""

    base: Dict[str, Any] = {
        "id": 2,
        "name": "Charlotte → Atlanta",
        "start_label": "Charlotte, NC",
        "dest_label": "Atlanta, GA",
        "total_distance_miles": 250.0,
        "distance_completed_miles": 3.0,
        "percent_complete": 0.012,
        "status": "active",
        "started_at": "2025-12-06T13:39:09.401345",
        "completed_at": None,
        "last_mood_rating": 2,
        "last_activity_date": "2025-12-06",
    }
    base.update(overrides)
    return base


def make_run(**overrides: Any) -> Dict[str, Any]:
    base: Dict[str, Any] = {
        "id": 10,
        "journey_id": 2,
        "distance_miles": 3.1,
        "date": "2025-12-06",
        "mood_rating": 7,
        "activity_type": "run",
    }
    base.update(overrides)
    return base


def make_location(**overrides: Any) -> Dict[str, Any]:
    base: Dict[str, Any] = {
        "journey_id": 2,
        "current_lat": 35.1,
        "current_lng": -81.0,
        "distance_completed_miles": 3.0,
        "percent_complete": 0.012,
    }
    base.update(overrides)
    return base


def as_body(payload: Any) -> bytes:
    return json.dumps(payload).encode("utf-8")
