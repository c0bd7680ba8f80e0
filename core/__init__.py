from .models import GraphLink, GraphNode, GraphSnapshot, IdentityMap
from .scales import LogScale, clamp, log_event, safe_float

__all__ = [
    "GraphLink",
    "GraphNode",
    "GraphSnapshot",
    "IdentityMap",
    "LogScale",
    "clamp",
    "log_event",
    "safe_float",
]
