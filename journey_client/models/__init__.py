from .city import City
from .journey import (
    Coordinate,
    Journey,
    JourneyCreateRequest,
    JourneyProgress,
    JourneyStatus,
    ProgressLocation,
)
from .run import Run, RunCreateRequest
from .time import TIMESTAMP_PARSERS, parse_calendar_date, parse_timestamp

__all__ = [
    'City',
    'Coordinate',
    'Journey',
    'JourneyCreateRequest',
    'JourneyProgress',
    'JourneyStatus',
    'ProgressLocation',
    'Run',
    'RunCreateRequest',
    'TIMESTAMP_PARSERS',
    'parse_calendar_date',
    'parse_timestamp',
]
