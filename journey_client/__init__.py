"""Client-side data access for the journey tracking service."""

from .api.application.ports import (
    AuthenticationRequiredError,
    DecodeError,
    JourneyApiError,
    NetworkError,
    ServerError,
    TokenStore,
)
from .api.infrastructure import (
    FileTokenStore,
    InMemoryTokenStore,
    JourneyApiClient,
    RedisTokenStore,
    create_token_store,
)
from .domain import CityGraph, categorize, distance_remaining, interpolation_eligible
from .models import (
    City,
    Journey,
    JourneyCreateRequest,
    JourneyProgress,
    JourneyStatus,
    ProgressLocation,
    Run,
    RunCreateRequest,
)
from .services import get_city_graph, load_city_graph
from .settings import Settings, get_settings

__all__ = [
    "AuthenticationRequiredError",
    "City",
    "CityGraph",
    "DecodeError",
    "FileTokenStore",
    "InMemoryTokenStore",
    "Journey",
    "JourneyApiClient",
    "JourneyApiError",
    "JourneyCreateRequest",
    "JourneyProgress",
    "JourneyStatus",
    "NetworkError",
    "ProgressLocation",
    "RedisTokenStore",
    "Run",
    "RunCreateRequest",
    "ServerError",
    "Settings",
    "TokenStore",
    "categorize",
    "create_token_store",
    "distance_remaining",
    "get_city_graph",
    "get_settings",
    "interpolation_eligible",
    "load_city_graph",
]
