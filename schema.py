from __future__ import annotations

from typing import Any, Dict, Iterable, Set, Tuple

from radial_graph.render import link_endpoint_id

REQUIRED_NODE_FIELDS = {"id", "type"}
REQUIRED_LINK_FIELDS = {"source", "target", "type"}


def _require_fields(data: dict, required: Set[str], label: str) -> None:
    missing = required - set(data.keys())
    if missing:
        raise ValueError(f"{label} missing fields: {sorted(missing)}")


def validate_node(node: dict) -> None:
    if not isinstance(node, dict):
        raise ValueError("Node must be a dict")
    _require_fields(node, REQUIRED_NODE_FIELDS, "Node")

    if not isinstance(node["id"], str) or not node["id"]:
        raise ValueError(f"Invalid node.id: {node['id']!r}")
    expected_prefix = f"{node['type']}-"
    if not node["id"].startswith(expected_prefix):
        raise ValueError(f"node.id {node['id']!r} does not start with {expected_prefix!r}")

    for axis in ("fx", "fy"):
        value = node.get(axis)
        if value is not None and not isinstance(value, (int, float)):
            raise ValueError(f"node.{axis} must be numeric when provided")


def validate_link(link: dict) -> None:
    if not isinstance(link, dict):
        raise ValueError("Link must be a dict")
    _require_fields(link, REQUIRED_LINK_FIELDS, "Link")


def validate_snapshot(payload: Dict[str, Any]) -> None:
    node_ids: Set[str] = set()
    for node in _items(payload, "nodes"):
        validate_node(node)
        if node["id"] in node_ids:
            raise ValueError(f"Duplicate node id: {node['id']}")
        node_ids.add(node["id"])

    for link in _items(payload, "links"):
        validate_link(link)
        key: Tuple[Any, Any] = (link_endpoint_id(link["source"]), link_endpoint_id(link["target"]))
        if key[0] not in node_ids or key[1] not in node_ids:
            raise ValueError(f"Link references unknown node(s): {key[0]} -> {key[1]}")


def _items(payload: Dict[str, Any], key: str) -> Iterable[dict]:
    if not isinstance(payload, dict) or not isinstance(payload.get(key), list):
        raise ValueError(f"Snapshot must be a dict with a '{key}' list")
    return payload[key]
