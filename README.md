# esindexer

Building blocks for indexing blockchain data into Elasticsearch: index
templates and Open Distro lifecycle policies, request bodies for multi-get
and delete-by-query, work items that hand blocks, rounds, ratings,
validators and accounts to a storage processor, validation of indexer
settings, and helpers used when turning block transactions into documents.

The package has no dependencies outside the standard library.

## Install

```
pip install esindexer
```

To run the tests:

```
pip install "esindexer[test]"
pytest
```

## Modules

### `esindexer.templates`

`to_buffer(obj)` encodes an object as compact JSON bytes with sorted keys.
The characters `<`, `>`, `&`, U+2028 and U+2029 are written as `\u` escapes.

### `esindexer.nokibana` and `esindexer.withkibana`

Index templates as plain dictionaries: `ACCOUNTS`, `ACCOUNTS_HISTORY`,
`BLOCKS`, `MINIBLOCKS`, `OPEN_DISTRO`, `RATING`, `ROUNDS`, `TRANSACTIONS`
and `VALIDATORS`. `BLOCKS` and `TRANSACTIONS` sort the index by timestamp
and nonce, descending.

`withkibana` adds an `opendistro.index_state_management.rollover_alias`
setting to every template except `ACCOUNTS` and `OPEN_DISTRO`, and provides
index state management policies: `ACCOUNTS_HISTORY_POLICY`,
`BLOCKS_POLICY`, `MINIBLOCKS_POLICY`, `RATING_POLICY`, `ROUNDS_POLICY`,
`TRANSACTIONS_POLICY` and `VALIDATORS_POLICY`. Each policy rolls over from a
`hot` state to a `warm` state with one replica once the index reaches a
minimum size (85gb, 60gb or 20gb depending on the index).

### `esindexer.queries`

- `get_documents_by_ids_query(hashes)` – a multi-get body asking for the
  given ids without their sources.
- `prepare_hashes_for_bulk_remove(hashes)` – a delete-by-query body matching
  the given ids.
- `encode(obj)` – the object as one line of compact JSON ending in a
  newline; raises `ValueError` if the object cannot be encoded.

### `esindexer.nil_indexer`

`NilIndexer` accepts `save_block`, `revert_indexed_block`,
`save_rounds_info`, `save_validators_rating`, `save_validators_pub_keys` and
`save_accounts` and discards them, counting each in `ignored_calls`.
`close()` sets `closed` and may be called more than once;
`is_nil_indexer()` always returns `True`.

### `esindexer.work_items`

Data classes `Body` (its `mini_blocks`), `Pool` (`txs`, `receipts`,
`invalid`, `rewards`, `scrs`, each keyed by hash), `SaveBlockArgs` and
`Account`, and work items whose `save()` forwards to a processor object:

- `ItemBlock(indexer, marshalizer, args)` – skips a block with no header;
  raises `BodyTypeAssertionError` if the body is not a `Body`; otherwise
  calls `save_header`, and, when the body has miniblocks, `save_miniblocks`
  and then `save_transactions` with the miniblocks it returned.
- `ItemRemoveBlock(indexer, body, header)` – `remove_header`, then
  `remove_miniblocks`; raises `BodyTypeAssertionError` for a body that is
  not a `Body`.
- `ItemRounds(indexer, rounds_info)` – `save_rounds_info`.
- `ItemRating(indexer, index_id, info_rating)` – `save_validators_rating`.
- `ItemValidators(indexer, epoch, validators_pub_keys)` –
  `save_shard_validators_pub_keys` once per shard, stopping at the first
  failure.
- `ItemAccounts(indexer, block_timestamp, accounts)` – wraps each account
  in an `Account` and calls `save_accounts`.

Any exception raised by the processor is logged and raised again.
`compute_size_of_txs(marshalizer, pool)` sums the length of
`marshalizer.marshal(tx)` over every transaction in a `Pool`, skipping
those that fail to marshal.

### `esindexer.factory`

`IndexerFactoryArgs` holds indexer settings. `check_indexer_args(args)`
raises, for the first problem found, `NegativeCacheSizeError`,
`NilPubkeyConverterError`, `NilUrlError`, `NilMarshalizerError`,
`NilHasherError` or `NilTransactionFeeCalculatorError`, all subclasses of
`IndexerConfigError` (itself a `ValueError`). `enabled_indexes_set(args)`
returns the distinct enabled index names as a `frozenset`, or raises
`EmptyEnabledIndexesError` if there are none.

### `esindexer.transactions`

- `TxStatus` – `pending`, `success`, `fail`, `invalid`.
- `get_gas_used_from_receipt(receipt, tx)` – gas used as implied by a
  receipt; a receipt whose data is `refundedGas` carries the refunded value.
- `is_sc_result_successful(data)`, `is_data_ok(data)` and
  `is_scr_for_sender_with_refund(sc_result, tx)` – checks on smart contract
  result data for the `ok` return code.
- `find_all_child_scr_results(hash, scrs)` – removes and returns the results
  whose original transaction hash is `hash`.
- `set_transaction_search_order(transactions)` – numbers the transactions
  0, 1, … in iteration order.
- `prepare_tx_log(log, address_encoder)` – converts a log into a `TxLog`
  of hex-encoded `Event`s.
- `add_to_altered_addresses(...)`,
  `add_scrs_receiver_to_altered_accounts(...)` – collect the addresses
  whose state changes in this shard.
- `should_index(is_in_import_mode, self_shard_id, destination_shard_id)`
  and `get_transactions_of_type(tx_pool, tx_hashes, tx_type)`.

## Example

```python
from esindexer.queries import encode, get_documents_by_ids_query
from esindexer.work_items import ItemRounds


class Processor:
    def __init__(self):
        self.saved = []

    def save_rounds_info(self, infos):
        self.saved.extend(infos)


body = encode(get_documents_by_ids_query(["hash1", "hash2"]))
# b'{"docs":[{"_id":"hash1","_source":false},{"_id":"hash2","_source":false}]}\n'

processor = Processor()
ItemRounds(processor, [{"round": 1}]).save()
assert processor.saved == [{"round": 1}]
```

## What the package does not do

It does not talk to Elasticsearch: there is no client, no request sending,
no creation of indices, aliases, templates or policies on a server, and no
dispatcher that queues and runs work items. `check_indexer_args` validates
settings but nothing here builds a working indexer from them. The
transaction helpers are individual steps; there is no single function that
turns a whole block body and transaction pool into finished documents, and
no fee calculation.