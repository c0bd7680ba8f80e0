from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from jsonschema import ValidationError

from core.schema_registry import DEFAULT_REGISTRY
from export.graph import dump_graph, snapshot_payload, write_graph
from graph.builder import GraphAssembler
from graph.projection import select_language_props
from graph.records import load_records
from pipeline.config import GraphSettings, load_config
from pipeline.logging_setup import setup_logging
from radial_graph.radial_layout import apply_radial_layout
from radial_graph.render import encode_snapshot
from schema import validate_snapshot

LOG = logging.getLogger(__name__)


class GraphPipeline:
    def __init__(self, settings: GraphSettings, rng: Optional[random.Random] = None) -> None:
        self.settings = settings
        self.rng = rng or random.Random(settings.seed)
        self.assembler = GraphAssembler(
            id_properties=settings.id_properties,
            default_link_type=settings.default_link_type,
            strict=settings.strict,
            allow_zero_id=settings.allow_zero_id,
        )
        self.snapshot_validator = DEFAULT_REGISTRY.validator("graph_snapshot")

    def run(self, nodes: List[Any], relationships: List[Any], validate: bool = False) -> Dict[str, Any]:
        snapshot, stats = self.assembler.assemble(nodes, relationships)
        apply_radial_layout(snapshot.nodes, self.settings.width, self.settings.height, rng=self.rng)
        render = encode_snapshot(snapshot, self.settings.magnitude_attribute)
        payload = snapshot_payload(snapshot, render=render, stats=stats)
        if validate:
            validate_snapshot(payload)
            self.snapshot_validator.validate(payload)
        return payload

    def run_file(self, records_path: Path, validate: bool = False) -> Dict[str, Any]:
        nodes, relationships = load_records(records_path)
        return self.run(nodes, relationships, validate=validate)


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build a positioned root/word graph snapshot from store records.")
    parser.add_argument("--records", type=Path, help="JSON dump of node and relationship records")
    parser.add_argument("--config", type=Path, default=None, help="YAML settings file")
    parser.add_argument("--out", type=Path, default=None, help="Output path (stdout when omitted)")
    parser.add_argument("--width", type=float, default=None)
    parser.add_argument("--height", type=float, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--strict", action="store_true", help="Ignore repeated registrations of a node handle")
    parser.add_argument("--validate", action="store_true", help="Validate the snapshot before writing")
    parser.add_argument("--projection", metavar="ALIAS", default=None, help="Print the language projection for ALIAS and exit")
    parser.add_argument("--log-dir", type=Path, default=None)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)
    if args.projection is None and args.records is None:
        parser.error("--records is required")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    setup_logging(args.log_dir, logging.DEBUG if args.verbose else logging.INFO)

    settings = load_config(args.config)
    if args.width is not None:
        settings.width = args.width
    if args.height is not None:
        settings.height = args.height
    if args.seed is not None:
        settings.seed = args.seed
    if args.strict:
        settings.strict = True

    if args.projection is not None:
        print(select_language_props(args.projection, settings.languages))
        return 0

    pipeline = GraphPipeline(settings)
    try:
        payload = pipeline.run_file(args.records, validate=args.validate)
    except (ValueError, ValidationError) as exc:
        LOG.error("snapshot rejected", extra={"error": str(exc), "records": str(args.records)})
        return 1

    if args.out is None:
        sys.stdout.write(dump_graph(payload) + "\n")
    else:
        write_graph(args.out, payload)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
