from .graph import dump_graph, snapshot_payload, write_graph

__all__ = ["dump_graph", "snapshot_payload", "write_graph"]
