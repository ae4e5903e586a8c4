"""Index templates and open-distro policies used with a Kibana setup."""

from __future__ import annotations

from typing import Any

_ROLLOVER_ALIAS_KEY = "opendistro.index_state_management.rollover_alias"

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
    pattern: str,
    shards: int,
    alias: str | None = None,
    mappings: dict[str, Any] | None = None,
    index: dict[str, Any] | None = None,
) -> dict[str, Any]:
    settings: dict[str, Any] = {"number_of_shards": shards, "number_of_replicas": 0}
    if alias is not None:
        settings[_ROLLOVER_ALIAS_KEY] = alias
    if index is not None:
        settings["index"] = dict(index)
    template: dict[str, Any] = {"index_patterns": [pattern], "settings": settings}
    if mappings is not None:
        template["mappings"] = mappings
    return template


def _policy(subject: str, pattern: str, min_size: str) -> dict[str, Any]:
    return {
        "policy": {
            "description": f"Open distro policy for the {subject} elastic index.",
            "default_state": "hot",
            "states": [
                {
                    "name": "hot",
                    "actions": [{"rollover": {"min_size": min_size}}],
                    "transitions": [
                        {"state_name": "warm", "conditions": {"min_size": min_size}},
                    ],
                },
                {
                    "name": "warm",
                    "actions": [{"replica_count": {"number_of_replicas": 1}}],
                    "transitions": [],
                },
            ],
            "ism_template": {"index_patterns": [pattern], "priority": 100},
        },
    }


ACCOUNTS = _template(
    "accounts-*",
    3,
    mappings={"properties": {"balanceNum": {"type": "double"}}},
)

ACCOUNTS_HISTORY = _template(
    "accountshistory-*",
    5,
    alias="accountshistory",
    mappings={"properties": {"timestamp": {"type": "date"}}},
)

ACCOUNTS_HISTORY_POLICY = _policy("accountshistory", "accountshistory-*", "85gb")

BLOCKS = _template(
    "blocks-*",
    3,
    alias="blocks",
    mappings=_NONCE_AND_TIMESTAMP_MAPPINGS,
    index=_SORT_BY_TIMESTAMP_AND_NONCE,
)

BLOCKS_POLICY = _policy("blocks", "blocks-*", "60gb")

MINIBLOCKS = _template("miniblocks-*", 3, alias="miniblocks")

MINIBLOCKS_POLICY = _policy("miniblocks", "miniblocks-*", "60gb")

OPEN_DISTRO = _template(".opendistro-*", 1)

RATING = _template(
    "rating-*",
    1,
    alias="rating",
    mappings={"properties": {"validatorsRating": {"properties": {"rating": {"type": "float"}}}}},
)

RATING_POLICY = _policy("ratings", "rating-*", "20gb")

ROUNDS = _template("rounds-*", 3, alias="rounds")

ROUNDS_POLICY = _policy("rounds", "rounds-*", "60gb")

TRANSACTIONS = _template(
    "transactions-*",
    5,
    alias="transactions",
    mappings=_NONCE_AND_TIMESTAMP_MAPPINGS,
    index=_SORT_BY_TIMESTAMP_AND_NONCE,
)

TRANSACTIONS_POLICY = _policy("transactions", "transactions-*", "85gb")

VALIDATORS = _template("validators-*", 1, alias="validators")

VALIDATORS_POLICY = _policy("validators", "validators-*", "20gb")