from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .time import optional_timestamp, parse_timestamp

if TYPE_CHECKING:  # pragma: no cover
    from ..domain.cities import CityGraph


class JourneyStatus(str, Enum):
    """Lifecycle state of a journey."""

    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class Coordinate(BaseModel):
    """A latitude/longitude pair."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            if len(value) != 2:
                raise ValueError(f"Expected a [lat, lng] pair, got {value!r}")
            return {"lat": value[0], "lng": value[1]}
        return value


def _fold_coordinates(data: Dict[str, Any], prefix: str) -> None:
    """Accept ``<prefix>_lat``/``<prefix>_lng`` as an alternative to ``<prefix>_coord``."""

    lat = data.pop(f"{prefix}_lat", None)
    lng = data.pop(f"{prefix}_lng", None)
    if data.get(f"{prefix}_coord") is None and lat is not None and lng is not None:
        data[f"{prefix}_coord"] = {"lat": lat, "lng": lng}


class JourneyFields(BaseModel):
    """Fields shared by a journey and its server-computed progress view."""

    id: int
    name: str
    start_label: str
    dest_label: str
    total_distance_miles: float = Field(..., gt=0)
    status: JourneyStatus
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    start_coord: Optional[Coordinate] = None
    dest_coord: Optional[Coordinate] = None

    @model_validator(mode="before")
    @classmethod
    def _flat_coordinates(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            _fold_coordinates(data, "start")
            _fold_coordinates(data, "dest")
        return data

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("started_at", "completed_at", mode="before")
    @classmethod
    def _timestamp(cls, value: Any) -> Optional[datetime]:
        return optional_timestamp(value)

    @model_validator(mode="after")
    def _completed_implies_status(self) -> "JourneyFields":
        if self.completed_at is not None and self.status is not JourneyStatus.COMPLETED:
            raise ValueError(
                f"Journey {self.id} has completed_at but status {self.status.value!r}"
            )
        return self


class Journey(JourneyFields):
    """A point-to-point distance goal as stored by the server."""

    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def _required_timestamp(cls, value: Any) -> datetime:
        return parse_timestamp(value)


class JourneyProgress(JourneyFields):
    """Server-computed progress view of a journey.

    ``percent_complete`` is authoritative and never recomputed from the
    distances, so the client cannot drift from the server's rounding.
    """

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    distance_completed_miles: float = Field(..., ge=0)
    percent_complete: float
    last_mood_rating: Optional[int] = None
    last_activity_date: Optional[datetime] = None

    @field_validator("created_at", "updated_at", "last_activity_date", mode="before")
    @classmethod
    def _optional_timestamp(cls, value: Any) -> Optional[datetime]:
        return optional_timestamp(value)


class ProgressLocation(BaseModel):
    """Interpolated point between start and destination; valid for one fetch only."""

    journey_id: int
    current_lat: float
    current_lng: float
    distance_completed_miles: float
    percent_complete: float


class JourneyCreateRequest(BaseModel):
    """Body of ``POST /journeys``."""

    start_city: str = Field(..., min_length=1)
    dest_city: str = Field(..., min_length=1)
    total_distance_miles: float = Field(..., gt=0)
    name: Optional[str] = None
    start_label: Optional[str] = None
    dest_label: Optional[str] = None
    start_lat: Optional[float] = None
    start_lng: Optional[float] = None
    dest_lat: Optional[float] = None
    dest_lng: Optional[float] = None
    started_at: Optional[datetime] = None

    @model_validator(mode="after")
    def _distinct_cities(self) -> "JourneyCreateRequest":
        if self.start_city == self.dest_city:
            raise ValueError("Start and destination city must differ")
        return self

    @classmethod
    def between(
        cls,
        graph: "CityGraph",
        start_id: str,
        dest_id: str,
        *,
        name: Optional[str] = None,
        started_at: Optional[datetime] = None,
    ) -> "JourneyCreateRequest":
        """Build a creation request for two cities of ``graph``."""

        start = graph.get(start_id)
        dest = graph.get(dest_id)
        return cls(
            start_city=start.id,
            dest_city=dest.id,
            total_distance_miles=graph.distance(start.id, dest.id),
            name=name or f"{start.name} → {dest.name}",
            start_label=start.label,
            dest_label=dest.label,
            start_lat=start.lat,
            start_lng=start.lng,
            dest_lat=dest.lat,
            dest_lng=dest.lng,
            started_at=started_at,
        )

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
