from __future__ import annotations

import logging
import math
import random
from typing import List, Optional, Sequence, Tuple

from core.models import GraphNode
from core.scales import log_event

LOG = logging.getLogger(__name__)

ANCHOR_TYPE = "root"
SATELLITE_TYPE = "word"

# successive multiples never line up with a full turn (phyllotaxis spacing)
GOLDEN_ANGLE = math.pi * (3.0 - math.sqrt(5.0))
BASE_RADIUS_FACTOR = 0.35
RADIUS_JITTER = (0.8, 1.2)
OFFSET_JITTER = 10.0


def base_radius(width: float, height: float) -> float:
    return BASE_RADIUS_FACTOR * min(width, height)


def satellite_angle(index: int) -> float:
    return index * GOLDEN_ANGLE


def _find_anchor(nodes: Sequence[GraphNode]) -> Optional[GraphNode]:
    anchors = [n for n in nodes if n.type == ANCHOR_TYPE]
    if len(anchors) > 1:
        log_event(LOG, "layout_extra_anchors", count=len(anchors), used=anchors[0].id)
    return anchors[0] if anchors else None


def apply_radial_layout(
    nodes: List[GraphNode],
    width: float,
    height: float,
    rng: Optional[random.Random] = None,
) -> None:
    """Pin the anchor at the centre and spread satellites around it.

    Only ``fx``/``fy`` of the anchor and satellite nodes are written; other
    node types are left untouched. Without an anchor nothing happens.
    ``rng`` needs ``uniform(a, b)``; pass a seeded ``random.Random`` for
    repeatable output.
    """
    anchor = _find_anchor(nodes)
    if anchor is None:
        log_event(LOG, "layout_no_anchor", nodes=len(nodes))
        return
    rng = rng or random.Random()

    cx, cy = width / 2.0, height / 2.0
    anchor.fx, anchor.fy = cx, cy
    base = base_radius(width, height)

    satellites = [n for n in nodes if n.type == SATELLITE_TYPE]
    for i, node in enumerate(satellites):
        angle = satellite_angle(i)
        radius = base * rng.uniform(*RADIUS_JITTER)
        offset_x = rng.uniform(-OFFSET_JITTER, OFFSET_JITTER)
        offset_y = rng.uniform(-OFFSET_JITTER, OFFSET_JITTER)
        node.fx = cx + radius * math.cos(angle) + offset_x
        node.fy = cy + radius * math.sin(angle) + offset_y

    log_event(LOG, "layout_done", anchor=anchor.id, satellites=len(satellites), base_radius=round(base, 3))


def layout_bounds(width: float, height: float) -> Tuple[float, float]:
    """Closest and farthest distance a satellite can land from the anchor."""
    base = base_radius(width, height)
    slack = math.hypot(OFFSET_JITTER, OFFSET_JITTER)
    return (base * RADIUS_JITTER[0]) - slack, (base * RADIUS_JITTER[1]) + slack
