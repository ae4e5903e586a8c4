"""Units of work that push block data into the search database."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, Sequence

log = logging.getLogger(__name__)

_BODY_TYPE_ASSERTION_MESSAGE = "elasticsearch - body type assertion failed"


class BodyTypeAssertionError(TypeError):
    """Raised when a block body is not a :class:`Body`."""

    def __init__(self, message: str = _BODY_TYPE_ASSERTION_MESSAGE) -> None:
        super().__init__(message)


class _Marshalizer(Protocol):
    def marshal(self, obj: Any) -> bytes: ...


@dataclass
class Body:
    """A block body: the miniblocks it holds."""

    mini_blocks: list[Any] = field(default_factory=list)


@dataclass
class Pool:
    """Transactions of a block, grouped by kind and keyed by hash."""

    txs: dict[str, Any] = field(default_factory=dict)
    receipts: dict[str, Any] = field(default_factory=dict)
    invalid: dict[str, Any] = field(default_factory=dict)
    rewards: dict[str, Any] = field(default_factory=dict)
    scrs: dict[str, Any] = field(default_factory=dict)

    def groups(self) -> tuple[dict[str, Any], ...]:
        return (self.txs, self.receipts, self.invalid, self.rewards, self.scrs)


@dataclass
class SaveBlockArgs:
    """Everything needed to index one block."""

    header_hash: bytes = b""
    header: Any = None
    body: Any = None
    signers_indexes: list[int] = field(default_factory=list)
    notarized_headers_hashes: list[str] = field(default_factory=list)
    transactions_pool: Pool | None = None


@dataclass
class Account:
    """A user account as handed to the processor."""

    user_account: Any
    is_sender: bool = False


def _nonce_of(header: Any) -> int:
    return getattr(header, "nonce", 0)


def compute_size_of_txs(marshalizer: _Marshalizer, pool: Pool) -> int:
    """Total marshalled size in bytes of every transaction in the pool.

    Transactions that fail to marshal are skipped.
    """
    total = 0
    for group in pool.groups():
        for tx in group.values():
            try:
                total += len(marshalizer.marshal(tx))
            except Exception as err:  # noqa: BLE001 - any marshal failure skips the tx
                log.debug("compute_size_of_txs: %s", err)
    return total


@dataclass
class ItemAccounts:
    """Saves a batch of accounts."""

    indexer: Any
    block_timestamp: int
    accounts: Sequence[Any]

    def save(self) -> None:
        accounts = [Account(user_account=account) for account in self.accounts]
        try:
            self.indexer.save_accounts(self.block_timestamp, accounts)
        except Exception as err:
            log.warning("ItemAccounts.save: could not index accounts: %s", err)
            raise


@dataclass
class ItemBlock:
    """Saves a block header, its miniblocks and its transactions."""

    indexer: Any
    marshalizer: _Marshalizer
    args: SaveBlockArgs

    def save(self) -> None:
        args = self.args
        if args.header is None:
            log.warning("nil header provided when trying to index block, will skip")
            return

        nonce = _nonce_of(args.header)
        block_hash = args.header_hash.hex()
        log.debug("indexer: starting indexing block hash=%s nonce=%s", block_hash, nonce)

        body = args.body
        if not isinstance(body, Body):
            raise BodyTypeAssertionError(
                f"{_BODY_TYPE_ASSERTION_MESSAGE} when trying body assertion, "
                f"block hash {block_hash}, nonce {nonce}"
            )

        if args.transactions_pool is None:
            args.transactions_pool = Pool()

        txs_size = compute_size_of_txs(self.marshalizer, args.transactions_pool)
        self._step(
            "saving header block",
            self.indexer.save_header,
            args.header,
            args.signers_indexes,
            body,
            args.notarized_headers_hashes,
            txs_size,
        )

        if not body.mini_blocks:
            return

        mbs_in_db = self._step("saving miniblocks", self.indexer.save_miniblocks, args.header, body)
        self._step(
            "saving transactions",
            self.indexer.save_transactions,
            body,
            args.header,
            args.transactions_pool,
            mbs_in_db,
        )

    def _step(self, what: str, action: Any, *call_args: Any) -> Any:
        try:
            return action(*call_args)
        except Exception as err:
            log.warning(
                "%s when %s, block hash %s, nonce %s",
                err,
                what,
                self.args.header_hash.hex(),
                _nonce_of(self.args.header),
            )
            raise


@dataclass
class ItemRating:
    """Saves validators rating under one index id."""

    indexer: Any
    index_id: str
    info_rating: Sequence[Any]

    def save(self) -> None:
        try:
            self.indexer.save_validators_rating(self.index_id, self.info_rating)
        except Exception as err:
            log.warning("ItemRating.save: could not index validators rating: %s", err)
            raise


@dataclass
class ItemRemoveBlock:
    """Removes a block header and its miniblocks."""

    indexer: Any
    body: Any
    header: Any

    def save(self) -> None:
        try:
            self.indexer.remove_header(self.header)
        except Exception as err:
            log.warning("ItemRemoveBlock.save could not remove block: %s", err)
            raise

        if not isinstance(self.body, Body):
            log.warning("ItemRemoveBlock.save body: %s", _BODY_TYPE_ASSERTION_MESSAGE)
            raise BodyTypeAssertionError()

        try:
            self.indexer.remove_miniblocks(self.header, self.body)
        except Exception as err:
            log.warning("ItemRemoveBlock.save could not remove miniblocks: %s", err)
            raise


@dataclass
class ItemRounds:
    """Saves rounds information."""

    indexer: Any
    rounds_info: Sequence[Any]

    def save(self) -> None:
        try:
            self.indexer.save_rounds_info(self.rounds_info)
        except Exception as err:
            log.warning("ItemRounds.save: could not index rounds info: %s", err)
            raise


@dataclass
class ItemValidators:
    """Saves validators public keys, shard by shard."""

    indexer: Any
    epoch: int
    validators_pub_keys: Mapping[int, list[bytes]]

    def save(self) -> None:
        for shard_id, shard_pub_keys in self.validators_pub_keys.items():
            try:
                self.indexer.save_shard_validators_pub_keys(shard_id, self.epoch, shard_pub_keys)
            except Exception as err:
                log.warning(
                    "ItemValidators.save could not index validators public keys for shard %s: %s",
                    shard_id,
                    err,
                )
                raise