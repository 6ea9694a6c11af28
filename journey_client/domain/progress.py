"""Pure helpers deriving display values from decoded journey records."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Sequence, TypeVar, Union

from ..models.journey import Journey, JourneyFields, JourneyProgress, JourneyStatus

J = TypeVar("J", bound=JourneyFields)


@dataclass(slots=True)
class JourneyCategories:
    """Active and completed journeys; archived ones belong to neither."""

    active: list[JourneyFields] = field(default_factory=list)
    completed: list[JourneyFields] = field(default_factory=list)


def display_percent(progress: JourneyProgress) -> float:
    """Server-supplied percent complete clamped to ``[0, 1]``."""

    percent = progress.percent_complete
    if math.isnan(percent):
        return 0.0
    return min(max(percent, 0.0), 1.0)


def distance_remaining(progress: JourneyProgress) -> float:
    return max(progress.total_distance_miles - progress.distance_completed_miles, 0.0)


def categorize(journeys: Iterable[J]) -> JourneyCategories:
    """Partition journeys by status, keeping input order within each group."""

    categories = JourneyCategories()
    for journey in journeys:
        if journey.status is JourneyStatus.ACTIVE:
            categories.active.append(journey)
        elif journey.status is JourneyStatus.COMPLETED:
            categories.completed.append(journey)
    return categories


def interpolation_eligible(journey: Union[Journey, JourneyProgress]) -> bool:
    """Whether a progress-location fetch makes sense for ``journey``."""

    return (
        journey.status is JourneyStatus.ACTIVE
        and journey.start_coord is not None
        and journey.dest_coord is not None
    )


def has_active_journey(journeys: Sequence[JourneyFields]) -> bool:
    return any(journey.status is JourneyStatus.ACTIVE for journey in journeys)
