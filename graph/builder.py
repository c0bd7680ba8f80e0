from __future__ import annotations

import itertools
import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from core.models import GraphLink, GraphNode, GraphSnapshot, IdentityMap
from core.scales import log_event
from graph.normalizer import normalize
from graph.records import RawNodeRecord, RawRelationshipRecord, split_records

LOG = logging.getLogger(__name__)

DEFAULT_ID_PROPERTIES: Dict[str, str] = {
    "Root": "root_id",
    "Word": "word_id",
    "Form": "form_id",
    "CorpusItem": "item_id",
}

TYPE_ALIASES = {"corpusitem": "name"}


@dataclass
class BuildStats:
    nodes_added: int = 0
    nodes_skipped: int = 0
    duplicates: int = 0
    links_added: int = 0
    links_dropped: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


def normalize_type(label: Optional[str]) -> str:
    normalized = str(label or "").lower()
    return TYPE_ALIASES.get(normalized, normalized)


def _id_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def _has_id(value: Any, allow_zero_id: bool) -> bool:
    if value:
        return True
    # 0 is falsy but may be a real identifier in the store
    return allow_zero_id and isinstance(value, int) and not isinstance(value, bool) and value == 0


def add_node(
    raw_node: Optional[RawNodeRecord],
    id_property: str,
    type_label: str,
    nodes: List[GraphNode],
    identity_map: IdentityMap,
    *,
    strict: bool = False,
    allow_zero_id: bool = False,
    stats: Optional[BuildStats] = None,
) -> None:
    """Register one raw node.

    Without ``strict`` a repeated handle appends a second node and the
    identity map points at the newest one. With ``strict`` the repeat is
    ignored and the first node stays registered.
    """
    stats = stats if stats is not None else BuildStats()
    if raw_node is None:
        return
    properties = normalize(dict(raw_node.properties or {}))
    id_value = properties.get(id_property)
    if not _has_id(id_value, allow_zero_id):
        stats.nodes_skipped += 1
        log_event(LOG, "node_skipped", handle=raw_node.handle, id_property=id_property, value=id_value)
        return

    if raw_node.handle is not None and raw_node.handle in identity_map:
        stats.duplicates += 1
        log_event(LOG, "node_duplicate", handle=raw_node.handle, strict=strict)
        if strict:
            return

    node_type = normalize_type(type_label)
    node = GraphNode(id=f"{node_type}-{_id_text(id_value)}", type=node_type, properties=properties)
    nodes.append(node)
    stats.nodes_added += 1
    if raw_node.handle is None:
        log_event(LOG, "node_unmapped", id=node.id)
        return
    identity_map[raw_node.handle] = node


def add_link(
    raw_relationship: Optional[RawRelationshipRecord],
    identity_map: IdentityMap,
    links: List[GraphLink],
    default_type: str = "",
    *,
    stats: Optional[BuildStats] = None,
) -> None:
    stats = stats if stats is not None else BuildStats()
    if raw_relationship is None:
        return
    relation_type = raw_relationship.type or default_type
    start, end = raw_relationship.start, raw_relationship.end
    if not start or not end:
        stats.links_dropped += 1
        log_event(LOG, "link_missing_endpoint", start=start, end=end, type=relation_type)
        return

    source = identity_map.get(start)
    target = identity_map.get(end)
    if source is None or target is None:
        stats.links_dropped += 1
        log_event(LOG, "link_dangling", start=start, end=end, type=relation_type)
        return

    links.append(GraphLink(source=source.id, target=target.id, type=relation_type))
    stats.links_added += 1


class GraphAssembler:
    """Runs one build pass per call; nothing is carried between calls."""

    def __init__(
        self,
        id_properties: Optional[Mapping[str, str]] = None,
        default_link_type: str = "",
        strict: bool = False,
        allow_zero_id: bool = False,
    ) -> None:
        self.id_properties = dict(DEFAULT_ID_PROPERTIES if id_properties is None else id_properties)
        self.default_link_type = default_link_type
        self.strict = strict
        self.allow_zero_id = allow_zero_id

    def _id_property_for(self, record: RawNodeRecord, id_property: Optional[str]) -> Optional[str]:
        if id_property:
            return id_property
        return self.id_properties.get(record.label)

    def assemble(
        self,
        nodes: Iterable[Any],
        relationships: Iterable[Any] = (),
        id_property: Optional[str] = None,
        type_label: Optional[str] = None,
    ) -> Tuple[GraphSnapshot, BuildStats]:
        raw_nodes, raw_relationships = split_records(itertools.chain(nodes, relationships))
        snapshot = GraphSnapshot()
        identity_map: IdentityMap = {}
        stats = BuildStats()

        for record in raw_nodes:
            prop = self._id_property_for(record, id_property)
            if not prop:
                stats.nodes_skipped += 1
                log_event(LOG, "node_unknown_label", handle=record.handle, label=record.label)
                continue
            add_node(
                record,
                prop,
                type_label or record.label,
                snapshot.nodes,
                identity_map,
                strict=self.strict,
                allow_zero_id=self.allow_zero_id,
                stats=stats,
            )

        # endpoints resolve only once every node of the page is registered
        for record in raw_relationships:
            add_link(record, identity_map, snapshot.links, self.default_link_type, stats=stats)

        LOG.info("graph assembled", extra=stats.to_dict())
        return snapshot, stats


def build_graph(
    nodes: Iterable[Any],
    relationships: Iterable[Any] = (),
    id_property: Optional[str] = None,
    type_label: Optional[str] = None,
    default_link_type: str = "",
) -> GraphSnapshot:
    snapshot, _stats = GraphAssembler(default_link_type=default_link_type).assemble(
        nodes, relationships, id_property=id_property, type_label=type_label
    )
    return snapshot
