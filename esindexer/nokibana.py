"""Index templates used when no Kibana/open-distro setup is present."""

from __future__ import annotations

from typing import Any

_SORT_BY_TIMESTAMP_AND_NONCE = {
    "sort.field": ["timestamp", "nonce"],
    "sort.order": ["desc", "desc"],
}

_NONCE_AND_TIMESTAMP_MAPPINGS = {
    "properties": {
        "nonce": {"type": "long"},
        "timestamp": {"type": "date"},
    },
}


def _template(
    pattern: str, shards: int, mappings: dict[str, Any] | None = None, **extra_settings: Any
) -> dict[str, Any]:
    settings: dict[str, Any] = {"number_of_shards": shards, "number_of_replicas": 0}
    settings.update(extra_settings)
    template: dict[str, Any] = {"index_patterns": [pattern], "settings": settings}
    if mappings is not None:
        template["mappings"] = mappings
    return template


ACCOUNTS = _template(
    "accounts-*",
    3,
    {"properties": {"balanceNum": {"type": "double"}}},
)

ACCOUNTS_HISTORY = _template(
    "accountshistory-*",
    5,
    {"properties": {"timestamp": {"type": "date"}}},
)

BLOCKS = _template(
    "blocks-*",
    3,
    _NONCE_AND_TIMESTAMP_MAPPINGS,
    index=dict(_SORT_BY_TIMESTAMP_AND_NONCE),
)

MINIBLOCKS = _template("miniblocks-*", 3)

OPEN_DISTRO = _template(".opendistro-*", 1)

RATING = _template(
    "rating-*",
    1,
    {"properties": {"validatorsRating": {"properties": {"rating": {"type": "float"}}}}},
)

ROUNDS = _template("rounds-*", 3)

TRANSACTIONS = _template(
    "transactions-*",
    5,
    _NONCE_AND_TIMESTAMP_MAPPINGS,
    index=dict(_SORT_BY_TIMESTAMP_AND_NONCE),
)

VALIDATORS = _template("validators-*", 1)