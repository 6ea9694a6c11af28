from .city_loader import DEFAULT_CITY_DATA, get_city_graph, load_city_graph

__all__ = ["DEFAULT_CITY_DATA", "get_city_graph", "load_city_graph"]
