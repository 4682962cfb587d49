# Conditional edges
from .route_after_external import route_after_external

__all__ = [
    "route_after_external",
]
