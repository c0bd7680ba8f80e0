from __future__ import annotations

import re
from typing import Iterable, Sequence

DEFAULT_LANGUAGES: Sequence[str] = ("arabic", "english", "transliteration")

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _identifier(value: str, label: str) -> str:
    text = str(value).strip()
    if not _IDENTIFIER_RE.match(text):
        raise ValueError(f"Invalid {label} for Cypher projection: {value!r}")
    return text


def select_language_props(alias: str = "n", languages: Iterable[str] = DEFAULT_LANGUAGES) -> str:
    """Cypher map projection body returning the node id plus one field per language.

    >>> select_language_props("w", ["arabic", "english"])
    'id: id(w), arabic: w.arabic, english: w.english'
    """
    name = _identifier(alias, "alias")
    parts = [f"id: id({name})"]
    for lang in languages:
        key = _identifier(lang, "language")
        parts.append(f"{key}: {name}.{key}")
    return ", ".join(parts)
