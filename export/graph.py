from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from core.models import GraphSnapshot
from graph.builder import BuildStats

LOG = logging.getLogger(__name__)


def snapshot_payload(
    snapshot: GraphSnapshot,
    render: Optional[Dict[str, Any]] = None,
    stats: Optional[BuildStats] = None,
) -> Dict[str, Any]:
    payload = snapshot.to_dict()
    if render is not None:
        payload["render"] = render
    if stats is not None:
        payload["stats"] = stats.to_dict()
    return payload


def dump_graph(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def write_graph(path: Path, payload: Dict[str, Any]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_graph(payload), encoding="utf-8")
    LOG.info("graph written", extra={"path": str(path), "nodes": len(payload.get("nodes") or [])})
    return path
