"""Load the city reference data from JSON into a ``CityGraph``."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Mapping, Optional

from pydantic import ValidationError

from ..domain.cities import CityGraph
from ..models.city import City

DEFAULT_CITY_DATA = Path(__file__).resolve().parent.parent / "data" / "cities.json"


def load_city_graph(path: Optional[Path] = None) -> CityGraph:
    """Read ``path`` (the bundled data by default) and build a validated graph."""

    source = path or DEFAULT_CITY_DATA
    with source.open("r", encoding="utf-8") as stream:
        payload = json.load(stream)
    if not isinstance(payload, Mapping):
        raise ValueError(f"City data in {source} must be a JSON object.")

    cities = [_parse_city(entry) for entry in _extract_list(payload, "cities")]
    distances = [_parse_distance(entry) for entry in _extract_list(payload, "distances")]
    return CityGraph.from_records(cities, distances)


@lru_cache()
def get_city_graph(path: Optional[Path] = None) -> CityGraph:
    """Process-wide city graph, loaded on first use."""

    return load_city_graph(path)


def _parse_city(entry: object) -> City:
    try:
        return City.model_validate(entry)
    except ValidationError as exc:
        raise ValueError(f"Invalid city entry {entry!r}: {exc}") from exc


def _parse_distance(entry: object) -> tuple[str, str, float]:
    if not isinstance(entry, Mapping):
        raise ValueError(f"Distance entries must be objects, got {entry!r}")
    try:
        return str(entry["from"]), str(entry["to"]), float(entry["miles"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid distance entry {entry!r}") from exc


def _extract_list(payload: Mapping[str, object], key: str) -> Iterable[object]:
    value = payload.get(key, [])
    if value is None:
        return []
    if isinstance(value, list):
        return value
    raise ValueError(f"Expected list for '{key}' but received {type(value)}")
