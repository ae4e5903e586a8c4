"""Validation of the settings an indexer is created from."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class IndexerConfigError(ValueError):
    """Base class for invalid indexer settings."""


class NegativeCacheSizeError(IndexerConfigError):
    """The indexer cache size is negative."""

    def __init__(self, message: str = "negative cache size") -> None:
        super().__init__(message)


class NilPubkeyConverterError(IndexerConfigError):
    """A public key converter is missing."""

    def __init__(self, message: str = "nil pubkey converter") -> None:
        super().__init__(message)


class NilUrlError(IndexerConfigError):
    """The database url is empty."""

    def __init__(self, message: str = "url is empty") -> None:
        super().__init__(message)


class NilMarshalizerError(IndexerConfigError):
    """The marshalizer is missing."""

    def __init__(self, message: str = "nil marshalizer") -> None:
        super().__init__(message)


class NilHasherError(IndexerConfigError):
    """The hasher is missing."""

    def __init__(self, message: str = "nil hasher") -> None:
        super().__init__(message)


class NilTransactionFeeCalculatorError(IndexerConfigError):
    """The transaction fee calculator is missing."""

    def __init__(self, message: str = "nil transaction fee calculator") -> None:
        super().__init__(message)


class EmptyEnabledIndexesError(IndexerConfigError):
    """No index was enabled."""

    def __init__(self, message: str = "empty enabled indexes slice") -> None:
        super().__init__(message)


@dataclass
class IndexerFactoryArgs:
    """Everything an indexer is created from."""

    enabled: bool = True
    indexer_cache_size: int = 0
    shard_coordinator: Any = None
    url: str = ""
    user_name: str = ""
    password: str = ""
    marshalizer: Any = None
    hasher: Any = None
    address_pubkey_converter: Any = None
    validator_pubkey_converter: Any = None
    use_kibana: bool = False
    enabled_indexes: list[str] = field(default_factory=list)
    denomination: int = 0
    accounts_db: Any = None
    transaction_fee_calculator: Any = None
    is_in_import_db_mode: bool = False


def check_indexer_args(args: IndexerFactoryArgs) -> None:
    """Raise the matching :class:`IndexerConfigError` for the first invalid setting."""
    if args.indexer_cache_size < 0:
        raise NegativeCacheSizeError()
    if args.address_pubkey_converter is None:
        raise NilPubkeyConverterError(
            "nil pubkey converter when setting AddressPubkeyConverter in indexer"
        )
    if args.validator_pubkey_converter is None:
        raise NilPubkeyConverterError(
            "nil pubkey converter when setting ValidatorPubkeyConverter in indexer"
        )
    if not args.url:
        raise NilUrlError()
    if args.marshalizer is None:
        raise NilMarshalizerError()
    if args.hasher is None:
        raise NilHasherError()
    if args.transaction_fee_calculator is None:
        raise NilTransactionFeeCalculatorError()


def enabled_indexes_set(args: IndexerFactoryArgs) -> frozenset[str]:
    """The distinct enabled index names; raise if there are none."""
    indexes = frozenset(args.enabled_indexes)
    if not indexes:
        raise EmptyEnabledIndexesError()
    return indexes