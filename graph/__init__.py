from .builder import BuildStats, GraphAssembler, add_link, add_node, build_graph, normalize_type
from .normalizer import normalize, to_int64
from .projection import select_language_props
from .records import RawNodeRecord, RawRelationshipRecord, load_records, split_records

__all__ = [
    "BuildStats",
    "GraphAssembler",
    "RawNodeRecord",
    "RawRelationshipRecord",
    "add_link",
    "add_node",
    "build_graph",
    "load_records",
    "normalize",
    "normalize_type",
    "select_language_props",
    "split_records",
    "to_int64",
]
