from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from core.scales import log_event
from graph.normalizer import is_two_word_int, normalize

LOG = logging.getLogger(__name__)

NODE_HANDLE_KEYS = ("elementId", "element_id", "identity", "id")
START_KEYS = ("startNodeElementId", "start_node_element_id", "start")
END_KEYS = ("endNodeElementId", "end_node_element_id", "end")


@dataclass
class RawNodeRecord:
    handle: Optional[str]
    label: str
    properties: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RawRelationshipRecord:
    type: Optional[str]
    start: Optional[str]
    end: Optional[str]
    properties: Dict[str, Any] = field(default_factory=dict)


RawRecord = Union[RawNodeRecord, RawRelationshipRecord]


def _handle(value: Any) -> Optional[str]:
    if value is None:
        return None
    if is_two_word_int(value):
        value = normalize(dict(value))
    text = str(value).strip()
    return text or None


def _first(data: Dict[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _is_handle_value(value: Any) -> bool:
    if is_two_word_int(value):
        return True
    return isinstance(value, (str, int)) and not isinstance(value, bool)


def _is_relationship_dict(data: Dict[str, Any]) -> bool:
    # a row may name its node columns "start" and "end"; those hold mappings, not handles
    return _is_handle_value(_first(data, START_KEYS)) and _is_handle_value(_first(data, END_KEYS))


def _is_node_dict(data: Dict[str, Any]) -> bool:
    if "properties" not in data:
        return False
    return "labels" in data or "label" in data


def _node_from_dict(data: Dict[str, Any]) -> RawNodeRecord:
    labels = data.get("labels")
    if not labels:
        labels = [data.get("label")] if data.get("label") else []
    return RawNodeRecord(
        handle=_handle(_first(data, NODE_HANDLE_KEYS)),
        label=str(labels[0]) if labels else "",
        properties=dict(data.get("properties") or {}),
    )


def _relationship_from_dict(data: Dict[str, Any]) -> RawRelationshipRecord:
    return RawRelationshipRecord(
        type=data.get("type") or None,
        start=_handle(_first(data, START_KEYS)),
        end=_handle(_first(data, END_KEYS)),
        properties=dict(data.get("properties") or {}),
    )


def _driver_properties(obj: Any) -> Dict[str, Any]:
    if hasattr(obj, "items"):
        return dict(obj.items())
    return dict(getattr(obj, "properties", None) or {})


def _node_from_driver(obj: Any) -> RawNodeRecord:
    labels = sorted(str(l) for l in (getattr(obj, "labels", None) or []))
    return RawNodeRecord(
        handle=_handle(getattr(obj, "element_id", None)),
        label=labels[0] if labels else "",
        properties=_driver_properties(obj),
    )


def _relationship_from_driver(obj: Any) -> RawRelationshipRecord:
    start = getattr(obj, "start_node", None)
    end = getattr(obj, "end_node", None)
    return RawRelationshipRecord(
        type=getattr(obj, "type", None) or None,
        start=_handle(getattr(start, "element_id", None)),
        end=_handle(getattr(end, "element_id", None)),
        properties=_driver_properties(obj),
    )


def coerce_record(obj: Any) -> Optional[RawRecord]:
    """Convert a JSON dump entry or a driver object into a raw record.

    Returns None for anything that is neither a node nor a relationship.
    """
    if obj is None:
        return None
    if isinstance(obj, (RawNodeRecord, RawRelationshipRecord)):
        return obj
    if isinstance(obj, dict):
        if _is_relationship_dict(obj):
            return _relationship_from_dict(obj)
        if _is_node_dict(obj):
            return _node_from_dict(obj)
        return None
    if hasattr(obj, "start_node") and hasattr(obj, "end_node"):
        return _relationship_from_driver(obj)
    if hasattr(obj, "element_id") and hasattr(obj, "labels"):
        return _node_from_driver(obj)
    return None


def split_records(entries: Iterable[Any]) -> Tuple[List[RawNodeRecord], List[RawRelationshipRecord]]:
    """Sort a mixed page into node and relationship records.

    Entries that are plain mappings of column name to value (one query row)
    are flattened column by column.
    """
    nodes: List[RawNodeRecord] = []
    relationships: List[RawRelationshipRecord] = []
    skipped = 0

    def _route(entry: Any, allow_row: bool) -> None:
        nonlocal skipped
        record = coerce_record(entry)
        if isinstance(record, RawNodeRecord):
            nodes.append(record)
        elif isinstance(record, RawRelationshipRecord):
            relationships.append(record)
        elif allow_row and isinstance(entry, dict):
            for value in entry.values():
                if isinstance(value, (list, tuple)):
                    # collect(...) columns
                    for item in value:
                        _route(item, False)
                else:
                    _route(value, False)
        elif entry is not None:
            skipped += 1

    for entry in entries:
        _route(entry, True)

    if skipped:
        log_event(LOG, "records_skipped", count=skipped)
    return nodes, relationships


def load_records(path: Path) -> Tuple[List[RawNodeRecord], List[RawRelationshipRecord]]:
    if not path.exists():
        raise FileNotFoundError(f"Records file not found: {path}")
    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        entries: List[Any] = list(payload.get("nodes") or [])
        entries.extend(payload.get("relationships") or payload.get("links") or [])
        payload = entries
    if not isinstance(payload, list):
        raise ValueError(f"Records file must hold a list or a nodes/relationships object: {path}")
    nodes, relationships = split_records(payload)
    LOG.info(
        "loaded records",
        extra={"path": str(path), "nodes": len(nodes), "relationships": len(relationships)},
    )
    return nodes, relationships
