"""Serialisation of index templates and policies into request bodies."""

from __future__ import annotations

import json
from typing import Any

_GO_STYLE_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def to_buffer(obj: Any) -> bytes:
    """Encode a template object as compact JSON with sorted keys.

    HTML-sensitive characters and the Unicode line separators are escaped,
    so the bytes are safe to embed anywhere a request body can go.
    """
    text = json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    # These characters can only occur inside JSON strings, so a global
    # replacement cannot touch the document structure.
    for char, escaped in _GO_STYLE_ESCAPES.items():
        text = text.replace(char, escaped)
    return text.encode("utf-8")