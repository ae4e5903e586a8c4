"""Request bodies for multi-get and bulk-remove queries."""

from __future__ import annotations

from typing import Any, Iterable

from esindexer.templates import to_buffer


def encode(obj: Any) -> bytes:
    """Encode a query object as one line of compact JSON ending in a newline."""
    try:
        body = to_buffer(obj)
    except (TypeError, ValueError) as err:
        raise ValueError(f"error encoding : {err}") from err
    return body + b"\n"


def get_documents_by_ids_query(hashes: Iterable[str]) -> dict[str, Any]:
    """Build a multi-get query for the given document ids, without sources."""
    return {"docs": [{"_id": doc_id, "_source": False} for doc_id in hashes]}


def prepare_hashes_for_bulk_remove(hashes: Iterable[str]) -> dict[str, Any]:
    """Build a delete-by-query body that matches the given document ids."""
    return {
        "query": {
            "ids": {
                "type": "_doc",
                "values": list(hashes),
            },
        },
    }