from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class City(BaseModel):
    """Static reference location a journey can start or end at."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique slug, e.g. 'charlotte-nc'")
    name: str
    state: str
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

    @property
    def label(self) -> str:
        return f"{self.name}, {self.state}"
