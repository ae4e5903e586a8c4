from dataclasses import dataclass, field
from types import SimpleNamespace

import pytest

from esindexer.transactions import (
    ALL_SHARD_ID,
    REFUND_GAS_MESSAGE,
    Event,
    TxLog,
    TxStatus,
    add_scrs_receiver_to_altered_accounts,
    add_to_altered_addresses,
    find_all_child_scr_results,
    get_gas_used_from_receipt,
    get_transactions_of_type,
    is_data_ok,
    is_sc_result_successful,
    is_scr_for_sender_with_refund,
    prepare_tx_log,
    set_transaction_search_order,
    should_index,
)


@dataclass
class DbTx:
    hash: str = ""
    nonce: int = 0
    sender: str = ""
    receiver: str = ""
    status: str = ""
    gas_price: int = 0
    gas_limit: int = 0
    search_order: int = -1


@dataclass
class ScResult:
    data: bytes = b""
    nonce: int = 0
    receiver: str = ""
    pre_tx_hash: str = ""


@dataclass
class RawScr:
    original_tx_hash: bytes = b""
    rcv_addr: bytes = b""


@dataclass
class RawTx:
    data: bytes = b""


@dataclass
class RawReward:
    rcv_addr: bytes = b""


@dataclass
class MiniBlock:
    sender_shard_id: int = 0
    receiver_shard_id: int = 0


@dataclass
class Receipt:
    value: int = 0
    data: bytes | None = None


@dataclass
class LogEvent:
    address: bytes
    identifier: bytes
    topics: list = field(default_factory=list)
    data: bytes = b""


@dataclass
class Coordinator:
    owned: set
    self_id: int = 0

    def compute_id(self, address):
        return 0 if address in self.owned else 1


def hex_encoder(address):
    return address.hex()


def test_gas_used_from_receipt_refunded_gas():
    rec = Receipt(value=10000, data=REFUND_GAS_MESSAGE.encode())
    tx = DbTx(hash=b"tx-hash".hex(), gas_price=1000, gas_limit=10000)
    assert get_gas_used_from_receipt(rec, tx) == 9990


def test_gas_used_from_receipt_data_error():
    rec = Receipt(value=100000, data=b"error")
    tx = DbTx(hash=b"tx-hash".hex(), gas_price=1000, gas_limit=10000)
    assert get_gas_used_from_receipt(rec, tx) == 100


def test_gas_used_from_receipt_without_data():
    rec = Receipt(value=5000, data=None)
    tx = DbTx(gas_price=1000, gas_limit=10000)
    assert get_gas_used_from_receipt(rec, tx) == 5


def test_is_scr_for_sender_with_gas_used():
    tx = DbTx(hash="txHash", nonce=10, sender="sender")
    sc = ScResult(data=b"@6f6b@something", nonce=11, receiver="sender", pre_tx_hash="txHash")
    assert is_scr_for_sender_with_refund(sc, tx) is True


@pytest.mark.parametrize(
    "change",
    [
        {"nonce": 10},
        {"receiver": "other"},
        {"pre_tx_hash": "otherHash"},
        {"data": b"@error"},
    ],
)
def test_is_scr_for_sender_with_refund_rejects(change):
    tx = DbTx(hash="txHash", nonce=10, sender="sender")
    values = {"data": b"@6f6b", "nonce": 11, "receiver": "sender", "pre_tx_hash": "txHash"}
    values.update(change)
    assert is_scr_for_sender_with_refund(ScResult(**values), tx) is False


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"@6f6b", True),
        (b"xx@6f6b@more", True),
        (b"@ok", True),
        (b"@6F6B", False),
        (b"@user error", False),
        (b"", False),
    ],
)
def test_is_sc_result_successful(data, expected):
    assert is_sc_result_successful(data) is expected


@pytest.mark.parametrize(
    "data, expected",
    [(b"@6f6b", True), (b"@6f6b@00", True), (b"x@6f6b", False), (b"@ok", False)],
)
def test_is_data_ok(data, expected):
    assert is_data_ok(data) is expected


def test_prepare_tx_log():
    log = SimpleNamespace(
        address=b"addr",
        events=[LogEvent(address=b"addr", identifier=b"id", topics=[b"t1", b"t2"], data=b"dt")],
    )
    expected = TxLog(
        address=hex_encoder(b"addr"),
        events=[
            Event(
                address=b"addr".hex(),
                identifier=b"id".hex(),
                topics=[b"t1".hex(), b"t2".hex()],
                data=b"dt".hex(),
            )
        ],
    )
    assert prepare_tx_log(log, hex_encoder) == expected


def test_set_transaction_search_order_repeatable():
    pool = {b"txHash1": DbTx(), b"txHash2": DbTx()}
    for _ in range(3):
        result = set_transaction_search_order(pool)
        assert sorted(tx.search_order for tx in result.values()) == [0, 1]


def test_find_all_child_scr_results_removes_children():
    scrs = {
        b"sc1": RawScr(original_tx_hash=b"tx1"),
        b"sc2": RawScr(original_tx_hash=b"sc1"),
        b"sc3": RawScr(original_tx_hash=b"sc1"),
        b"sc4": RawScr(original_tx_hash=b"tx2"),
    }
    children = find_all_child_scr_results(b"sc1", scrs)
    assert set(children) == {b"sc2", b"sc3"}
    assert set(scrs) == {b"sc1", b"sc4"}


def test_altered_addresses():
    self_shard = 0
    altered = set()

    tx1 = DbTx(sender=b"address1".hex(), receiver=b"address2".hex(), status=TxStatus.PENDING)
    add_to_altered_addresses(tx1, altered, MiniBlock(0, 1), self_shard, False)
    tx2 = DbTx(sender=b"address3".hex(), receiver=b"address4".hex(), status=TxStatus.SUCCESS)
    add_to_altered_addresses(tx2, altered, MiniBlock(1, 0), self_shard, False)

    metachain = 0xFFFFFFFF
    rwd1 = DbTx(sender="metachain", receiver=b"address5".hex(), status=TxStatus.SUCCESS)
    add_to_altered_addresses(rwd1, altered, MiniBlock(metachain, 0), self_shard, True)
    rwd2 = DbTx(sender="metachain", receiver=b"address6".hex(), status=TxStatus.PENDING)
    add_to_altered_addresses(rwd2, altered, MiniBlock(metachain, 1), self_shard, True)

    scrs = {
        b"scr1Hash": RawScr(rcv_addr=b"address7"),
        b"scr2Hash": RawScr(rcv_addr=b"address9"),
        b"scr3Hash": RawScr(rcv_addr=b"address8"),
    }
    coordinator = Coordinator(owned={b"address1", b"address4", b"address5", b"address7", b"address9"})
    add_scrs_receiver_to_altered_accounts(altered, scrs, coordinator, hex_encoder)

    expected = {
        b"address1".hex(),
        b"address4".hex(),
        b"address5".hex(),
        b"address7".hex(),
        b"address9".hex(),
    }
    assert altered == expected


def test_altered_addresses_invalid_tx_keeps_only_sender():
    altered = set()
    tx = DbTx(sender="snd", receiver="rcv", status=TxStatus.INVALID)
    add_to_altered_addresses(tx, altered, MiniBlock(0, 0), 0, False)
    assert altered == {"snd"}


def test_altered_addresses_all_shards_receiver():
    altered = set()
    tx = DbTx(sender="snd", receiver="rcv", status=TxStatus.SUCCESS)
    add_to_altered_addresses(tx, altered, MiniBlock(1, ALL_SHARD_ID), 0, False)
    assert altered == {"rcv"}


@pytest.mark.parametrize(
    "import_mode, self_shard, dest, expected",
    [(False, 0, 1, True), (False, 0, 0, True), (True, 0, 0, True), (True, 0, 1, False)],
)
def test_should_index(import_mode, self_shard, dest, expected):
    assert should_index(import_mode, self_shard, dest) is expected


def test_get_transactions_of_type():
    tx = RawTx()
    reward = RawReward()
    pool = {b"h1": tx, b"h2": reward, b"h3": RawTx()}
    found = get_transactions_of_type(pool, [b"h1", b"h2", b"missing"], RawTx)
    assert found == {b"h1": tx}
    rewards = get_transactions_of_type(pool, [b"h1", b"h2", b"h3"], RawReward)
    assert list(rewards) == [b"h2"]


def test_tx_status_compares_with_strings():
    assert TxStatus.INVALID == "invalid"
    assert str(TxStatus.SUCCESS) == "success"
    assert TxStatus("fail") is TxStatus.FAIL