from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from graph.builder import DEFAULT_ID_PROPERTIES
from graph.projection import DEFAULT_LANGUAGES
from radial_graph.render_size import MAGNITUDE_ATTRIBUTE

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / "config" / "graph.yml"

_TRUE = {"1", "true", "yes", "on"}


@dataclass
class GraphSettings:
    width: float = 400.0
    height: float = 300.0
    id_properties: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_ID_PROPERTIES))
    default_link_type: str = ""
    languages: List[str] = field(default_factory=lambda: list(DEFAULT_LANGUAGES))
    magnitude_attribute: str = MAGNITUDE_ATTRIBUTE
    strict: bool = False
    allow_zero_id: bool = False
    seed: Optional[int] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GraphSettings":
        known = {f.name for f in fields(cls)}
        settings = cls(**{k: v for k, v in dict(data or {}).items() if k in known})
        settings.width = float(settings.width)
        settings.height = float(settings.height)
        settings.id_properties = {str(k): str(v) for k, v in (settings.id_properties or {}).items()}
        settings.languages = [str(l) for l in (settings.languages or [])]
        settings.default_link_type = str(settings.default_link_type or "")
        settings.strict = bool(settings.strict)
        settings.allow_zero_id = bool(settings.allow_zero_id)
        if settings.seed is not None:
            settings.seed = int(settings.seed)
        if settings.width <= 0 or settings.height <= 0:
            raise ValueError(f"Layout size must be positive, got {settings.width}x{settings.height}")
        return settings

    def with_env(self, environ: Optional[Mapping[str, str]] = None) -> "GraphSettings":
        env = os.environ if environ is None else environ
        if env.get("MINDROOTS_WIDTH"):
            self.width = float(env["MINDROOTS_WIDTH"])
        if env.get("MINDROOTS_HEIGHT"):
            self.height = float(env["MINDROOTS_HEIGHT"])
        if env.get("MINDROOTS_SEED"):
            self.seed = int(env["MINDROOTS_SEED"])
        if env.get("MINDROOTS_STRICT"):
            self.strict = env["MINDROOTS_STRICT"].strip().lower() in _TRUE
        return self


def load_config(config_path: Optional[Path] = None) -> GraphSettings:
    path = config_path or DEFAULT_CONFIG_PATH
    if not path.exists():
        if config_path is not None:
            raise FileNotFoundError(f"Config not found: {path}")
        return GraphSettings().with_env()
    text = path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Failed to parse config: {exc}") from exc
    if not isinstance(data, dict):
        raise RuntimeError(f"Config must be a mapping: {path}")
    return GraphSettings.from_mapping(data).with_env()
