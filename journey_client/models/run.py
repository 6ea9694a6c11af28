from __future__ import annotations

import datetime as dt
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from .time import parse_calendar_date


class Run(BaseModel):
    """A logged activity contributing distance to a journey."""

    id: int
    journey_id: int
    distance_miles: float = Field(..., gt=0)
    date: dt.date
    mood_rating: Optional[int] = Field(None, ge=1, le=10)
    activity_type: str = "run"

    @field_validator("date", mode="before")
    @classmethod
    def _calendar_date(cls, value: Any) -> dt.date:
        return parse_calendar_date(value)


class RunCreateRequest(BaseModel):
    """Body of ``POST /runs``. The date is sent as ``YYYY-MM-DD``."""

    journey_id: int = Field(..., gt=0)
    distance_miles: float = Field(..., gt=0)
    date: dt.date
    mood_rating: Optional[int] = Field(None, ge=1, le=10)
    activity_type: str = "run"

    @field_validator("date", mode="before")
    @classmethod
    def _drop_time_of_day(cls, value: Any) -> Any:
        if isinstance(value, dt.datetime):
            return value.date()
        return value

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
