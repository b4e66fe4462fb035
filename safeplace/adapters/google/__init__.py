from .places import PlacesClient
from .directions import RoutingClient

__all__ = ["PlacesClient", "RoutingClient"]
