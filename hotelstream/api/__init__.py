"""FastAPI application exposing the stores and poll triggers."""
from hotelstream.api.server import Runtime, create_app

__all__ = ["Runtime", "create_app"]
