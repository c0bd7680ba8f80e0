"""Per-draw visual attributes handed to the rendering surface."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from core.models import GraphNode, GraphSnapshot
from radial_graph.radial_layout import ANCHOR_TYPE
from radial_graph.render_color import node_color
from radial_graph.render_size import MAGNITUDE_ATTRIBUTE, node_radius, word_size_scale


def link_endpoint_id(value: Any) -> Optional[str]:
    """Links may carry a bare id or an ``{"id": ...}`` wrapper."""
    if value is None:
        return None
    if isinstance(value, str):
        return value or None
    if isinstance(value, dict):
        inner = value.get("id")
        return str(inner) if inner not in (None, "") else None
    inner = getattr(value, "id", None)
    return str(inner) if inner not in (None, "") else None


def _position(node: Optional[GraphNode]) -> Tuple[float, float]:
    if node is None or not node.positioned:
        return 0.0, 0.0
    return float(node.fx), float(node.fy)


def encode_node(node: GraphNode, radius: float) -> Dict[str, Any]:
    x, y = _position(node)
    payload: Dict[str, Any] = {
        "id": node.id,
        "type": node.type,
        "x": x,
        "y": y,
        "r": radius,
        "color": node_color(node.type),
    }
    if node.type == ANCHOR_TYPE:
        payload["label"] = str(node.get("label") or "")
    return payload


def encode_snapshot(snapshot: GraphSnapshot, attribute: str = MAGNITUDE_ATTRIBUTE) -> Dict[str, List[Dict[str, Any]]]:
    scale = word_size_scale(snapshot.nodes, attribute)
    by_id = {n.id: n for n in snapshot.nodes}

    nodes = [encode_node(n, node_radius(n, scale, attribute)) for n in snapshot.nodes]

    links: List[Dict[str, Any]] = []
    for link in snapshot.links:
        source_id = link_endpoint_id(link.source)
        target_id = link_endpoint_id(link.target)
        x1, y1 = _position(by_id.get(source_id) if source_id else None)
        x2, y2 = _position(by_id.get(target_id) if target_id else None)
        links.append(
            {
                "source": source_id,
                "target": target_id,
                "type": link.type,
                "x1": x1,
                "y1": y1,
                "x2": x2,
                "y2": y2,
            }
        )
    return {"nodes": nodes, "links": links}
