"""An indexer that accepts every call and stores nothing."""

from __future__ import annotations

from typing import Any, Iterable, Mapping


class NilIndexer:
    """Indexer used where one is required but none is available.

    Every request is accepted and discarded. The indexer only counts the
    requests it has dropped and remembers whether it has been closed.
    Closing it more than once is allowed.
    """

    def __init__(self) -> None:
        self.ignored_calls = 0
        self.closed = False

    def _discard(self) -> None:
        self.ignored_calls += 1

    def save_block(self, args: Any) -> None:
        """Discard the block."""
        self._discard()

    def revert_indexed_block(self, header: Any, body: Any) -> None:
        """Discard the revert request."""
        self._discard()

    def save_rounds_info(self, rounds_info: Iterable[Any]) -> None:
        """Discard the rounds information."""
        self._discard()

    def save_validators_rating(self, index_id: str, info_rating: Iterable[Any]) -> None:
        """Discard the validators rating."""
        self._discard()

    def save_validators_pub_keys(
        self, validators_pub_keys: Mapping[int, list[bytes]], epoch: int
    ) -> None:
        """Discard the validators public keys."""
        self._discard()

    def save_accounts(self, block_timestamp: int, accounts: Iterable[Any]) -> None:
        """Discard the accounts."""
        self._discard()

    def close(self) -> None:
        """Mark the indexer as closed; there is nothing to release."""
        self.closed = True

    def is_nil_indexer(self) -> bool:
        """Always true: this indexer stores nothing."""
        return True