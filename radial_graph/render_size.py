from __future__ import annotations

from typing import Iterable

from core.models import GraphNode
from core.scales import LogScale, safe_float

MAGNITUDE_ATTRIBUTE = "dataSize"
WORD_SIZE_RANGE = (3.0, 8.0)
ROOT_RADIUS = 10.0
DEFAULT_RADIUS = 5.0


def max_magnitude(nodes: Iterable[GraphNode], attribute: str = MAGNITUDE_ATTRIBUTE) -> float:
    peak = 1.0
    for node in nodes:
        if node.type != "word":
            continue
        peak = max(peak, safe_float(node.get(attribute), 1.0))
    return peak


def word_size_scale(nodes: Iterable[GraphNode], attribute: str = MAGNITUDE_ATTRIBUTE) -> LogScale:
    return LogScale(domain=(1.0, max_magnitude(nodes, attribute)), range=WORD_SIZE_RANGE)


def node_radius(node: GraphNode, scale: LogScale, attribute: str = MAGNITUDE_ATTRIBUTE) -> float:
    if node.type == "root":
        return ROOT_RADIUS
    if node.type == "word":
        # missing magnitude lands on the low end of the scale
        return scale(node.get(attribute), label=attribute)
    return DEFAULT_RADIUS
