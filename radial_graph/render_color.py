from __future__ import annotations

from typing import Dict

TYPE_COLORS: Dict[str, str] = {
    "root": "green",
    "word": "red",
    "form": "blue",
    "name": "gold",
}
DEFAULT_COLOR = "#999"


def node_color(node_type: str | None) -> str:
    return TYPE_COLORS.get(str(node_type or ""), DEFAULT_COLOR)
