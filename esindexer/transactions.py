"""Helpers that turn block transactions into search-database documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, MutableMapping, MutableSet, Protocol, TypeVar

# A smart contract action (deploy, call, ...) should have at least this many
# smart contract results; calls to the ESDT contract are the exception.
MINIMUM_NUMBER_OF_SMART_CONTRACT_RESULTS = 2

# Receipt data that marks the receipt value as refunded gas.
REFUND_GAS_MESSAGE = "refundedGas"

# Receiver shard id that stands for every shard.
ALL_SHARD_ID = 0xFFFFFFF0

_VM_OK = "ok"
_OK_RETURN_DATA_NEW = b"@" + _VM_OK.encode().hex().encode()
_OK_RETURN_DATA_OLD = b"@" + _VM_OK.encode()

T = TypeVar("T")


class TxStatus(str, Enum):
    """Status of a transaction as stored in the database."""

    PENDING = "pending"
    SUCCESS = "success"
    FAIL = "fail"
    INVALID = "invalid"

    def __str__(self) -> str:
        return self.value


@dataclass
class Event:
    """One log event, every field hex encoded."""

    address: str = ""
    identifier: str = ""
    topics: list[str] = field(default_factory=list)
    data: str = ""


@dataclass
class TxLog:
    """The log of a transaction as stored in the database."""

    address: str = ""
    events: list[Event] = field(default_factory=list)


class ShardCoordinator(Protocol):
    """Tells which shard an address belongs to, and which shard this is."""

    self_id: int

    def compute_id(self, address: bytes) -> int: ...


def get_gas_used_from_receipt(receipt: Any, tx: Any) -> int:
    """Gas used by ``tx`` as implied by the value of its receipt."""
    if receipt.data is not None and bytes(receipt.data) == REFUND_GAS_MESSAGE.encode():
        # The receipt value holds the refunded amount.
        return (tx.gas_price * tx.gas_limit - receipt.value) // tx.gas_price
    return receipt.value // tx.gas_price


def is_sc_result_successful(sc_result_data: bytes) -> bool:
    """Whether smart contract result data carries the "ok" return code."""
    data = bytes(sc_result_data or b"")
    return _OK_RETURN_DATA_NEW in data or _OK_RETURN_DATA_OLD in data


def is_data_ok(data: bytes) -> bool:
    """Whether data starts with the hex-encoded "ok" return code."""
    return bytes(data or b"").startswith(_OK_RETURN_DATA_NEW)


def is_scr_for_sender_with_refund(sc_result: Any, tx: Any) -> bool:
    """Whether a smart contract result refunds gas to the sender of ``tx``."""
    return (
        sc_result.pre_tx_hash == tx.hash
        and sc_result.receiver == tx.sender
        and sc_result.nonce == tx.nonce + 1
        and is_data_ok(sc_result.data)
    )


def find_all_child_scr_results(
    hash: bytes, scrs: MutableMapping[bytes, Any]
) -> dict[bytes, Any]:
    """Take out of ``scrs`` every result whose original tx hash is ``hash``."""
    children = {
        scr_hash: scr for scr_hash, scr in scrs.items() if scr.original_tx_hash == hash
    }
    for scr_hash in children:
        del scrs[scr_hash]
    return children


def set_transaction_search_order(
    transactions: MutableMapping[Any, Any],
) -> MutableMapping[Any, Any]:
    """Number the transactions 0, 1, ... in iteration order."""
    for order, tx in enumerate(transactions.values()):
        tx.search_order = order
    return transactions


def prepare_tx_log(log: Any, address_encoder: Callable[[bytes], str]) -> TxLog:
    """Convert a transaction log into its database form."""
    events = [
        Event(
            address=bytes(event.address).hex(),
            identifier=bytes(event.identifier).hex(),
            topics=[bytes(topic).hex() for topic in event.topics],
            data=bytes(event.data).hex(),
        )
        for event in log.events
    ]
    return TxLog(address=address_encoder(log.address), events=events)


def add_to_altered_addresses(
    tx: Any,
    altered_addresses: MutableSet[str],
    mini_block: Any,
    self_shard_id: int,
    is_reward_tx: bool,
) -> None:
    """Record the addresses of ``tx`` whose state changes in this shard."""
    if self_shard_id == mini_block.sender_shard_id and not is_reward_tx:
        altered_addresses.add(tx.sender)

    if tx.status == TxStatus.INVALID:
        return

    if mini_block.receiver_shard_id in (self_shard_id, ALL_SHARD_ID):
        altered_addresses.add(tx.receiver)


def add_scrs_receiver_to_altered_accounts(
    altered_addresses: MutableSet[str],
    scrs: MutableMapping[Any, Any],
    shard_coordinator: ShardCoordinator,
    address_encoder: Callable[[bytes], str],
) -> None:
    """Record receivers of smart contract results that live in this shard."""
    for scr in scrs.values():
        if shard_coordinator.compute_id(scr.rcv_addr) == shard_coordinator.self_id:
            altered_addresses.add(address_encoder(scr.rcv_addr))


def should_index(is_in_import_mode: bool, self_shard_id: int, destination_shard_id: int) -> bool:
    """Whether a transaction bound for ``destination_shard_id`` gets indexed."""
    if not is_in_import_mode:
        return True
    return self_shard_id == destination_shard_id


def get_transactions_of_type(
    tx_pool: MutableMapping[bytes, Any], tx_hashes: Iterable[bytes], tx_type: type[T]
) -> dict[bytes, T]:
    """Pool entries named by ``tx_hashes`` that are instances of ``tx_type``."""
    found: dict[bytes, T] = {}
    for tx_hash in tx_hashes:
        tx = tx_pool.get(tx_hash)
        if isinstance(tx, tx_type):
            found[tx_hash] = tx
    return found