from .item_types import router as item_types_routes
from .container_types import router as container_types_routes
from .calculations import router as calculations_routes

__all__ = [
    "item_types_routes",
    "container_types_routes",
    "calculations_routes",
]
