"""Templates, query bodies, work items and transaction helpers for indexing blockchain data into Elasticsearch."""

__version__ = "0.1.0"

__all__ = [
    "factory",
    "nil_indexer",
    "nokibana",
    "queries",
    "templates",
    "transactions",
    "withkibana",
    "work_items",
]