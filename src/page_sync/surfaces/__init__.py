"""Surface handles, host protocol and window ordering."""

from .host import Buffer, Position, Surface, SurfaceGoneError, SurfaceHost
from .ordering import order_surfaces

__all__ = [
    "Buffer",
    "Position",
    "Surface",
    "SurfaceGoneError",
    "SurfaceHost",
    "order_surfaces",
]
