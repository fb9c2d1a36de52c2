"""Typed Ethereum RPC client: contract call encoding, event filters and typed data."""

from . import abi, contracts
from ._abi_types import (
    ABIDecodingError,
    ABIEncodingError,
    InvalidBooleanError,
    UnsupportedTypeError,
    abi_decode,
    abi_encode,
    decode_value,
    encode_topic,
    type_from_tag,
)
from ._chain import Chain, ChainSession
from ._contract_abi import (
    Call,
    Either,
    EventFilterTopics,
    EventType,
    Fields,
    InvalidSpecError,
    Method,
    NotIndexedError,
    View,
    decode_object,
    encode_object,
)
from ._ens import REVERSE_RECORDS_MAINNET, namehash, normalize_name, reverse_ens_lookup
from ._entities import Address, BlockLabel, LogItem
from ._hashing import canonical_signature, event_topic0, method_selector
from ._http_provider import HTTPError, HTTPProvider
from ._provider import (
    InvalidResponse,
    ProtocolError,
    Provider,
    ProviderError,
    ProviderSession,
    RPCError,
    Unreachable,
)
from ._signer import AccountSigner, Signer
from ._typed_data import InvalidSignatureError, hash_typed_data, verify_typed_data

__all__ = [
    "REVERSE_RECORDS_MAINNET",
    "ABIDecodingError",
    "ABIEncodingError",
    "AccountSigner",
    "Address",
    "BlockLabel",
    "Call",
    "Chain",
    "ChainSession",
    "Either",
    "EventFilterTopics",
    "EventType",
    "Fields",
    "HTTPError",
    "HTTPProvider",
    "InvalidBooleanError",
    "InvalidResponse",
    "InvalidSignatureError",
    "InvalidSpecError",
    "LogItem",
    "Method",
    "NotIndexedError",
    "ProtocolError",
    "Provider",
    "ProviderError",
    "ProviderSession",
    "RPCError",
    "Signer",
    "Unreachable",
    "UnsupportedTypeError",
    "View",
    "abi",
    "abi_decode",
    "abi_encode",
    "canonical_signature",
    "contracts",
    "decode_object",
    "decode_value",
    "encode_object",
    "encode_topic",
    "event_topic0",
    "hash_typed_data",
    "method_selector",
    "namehash",
    "normalize_name",
    "reverse_ens_lookup",
    "type_from_tag",
    "verify_typed_data",
]
