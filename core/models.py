from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

RESERVED_NODE_FIELDS = ("id", "type")


@dataclass
class GraphNode:
    id: str
    type: str
    properties: Dict[str, Any] = field(default_factory=dict)
    fx: Optional[float] = None
    fy: Optional[float] = None

    def get(self, key: str, default: Any = None) -> Any:
        if key in RESERVED_NODE_FIELDS:
            return getattr(self, key)
        return self.properties.get(key, default)

    @property
    def positioned(self) -> bool:
        return self.fx is not None and self.fy is not None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"id": self.id, "type": self.type}
        for key, value in self.properties.items():
            if key in RESERVED_NODE_FIELDS:
                continue
            payload[key] = value
        if self.positioned:
            payload["fx"] = float(self.fx)
            payload["fy"] = float(self.fy)
        return payload


@dataclass
class GraphLink:
    source: str
    target: str
    type: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"source": self.source, "target": self.target, "type": self.type}


# Raw store handle -> node built from it. Scoped to one build pass.
IdentityMap = Dict[str, GraphNode]


@dataclass
class GraphSnapshot:
    nodes: List[GraphNode] = field(default_factory=list)
    links: List[GraphLink] = field(default_factory=list)

    def node_ids(self) -> Set[str]:
        return {n.id for n in self.nodes}

    def find(self, node_id: str) -> Optional[GraphNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "links": [l.to_dict() for l in self.links],
        }
