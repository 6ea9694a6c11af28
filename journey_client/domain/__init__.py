"""Pure domain logic: city distances and journey progress."""

from .cities import FALLBACK_DISTANCE_MILES, CityGraph, UnknownCityError
from .progress import (
    JourneyCategories,
    categorize,
    display_percent,
    distance_remaining,
    has_active_journey,
    interpolation_eligible,
)

__all__ = [
    "FALLBACK_DISTANCE_MILES",
    "CityGraph",
    "JourneyCategories",
    "UnknownCityError",
    "categorize",
    "display_percent",
    "distance_remaining",
    "has_active_journey",
    "interpolation_eligible",
]
