"""EIP-712 typed data hashing and signer recovery."""

from collections.abc import Mapping
from typing import Any

from eth_account import Account
from eth_account.messages import SignableMessage, encode_typed_data
from eth_keys.exceptions import BadSignature
from eth_utils import ValidationError, keccak

from ._abi_types import to_data_bytes
from ._entities import Address

# r (32 bytes), s (32 bytes) and v (1 byte)
SIGNATURE_LENGTH = 65

# The domain type is derived from the domain fields by `eth_account`.
DOMAIN_TYPE_NAME = "EIP712Domain"


class InvalidSignatureError(Exception):
    """Raised when the signer cannot be recovered from a signature."""


def _normalize_domain(domain: Mapping[str, Any]) -> dict[str, Any]:
    normalized = dict(domain)
    chain_id = normalized.get("chainId")
    if isinstance(chain_id, str):
        normalized["chainId"] = int(chain_id, 0)
    return normalized


def signable_typed_data(
    domain: Mapping[str, Any], types: Mapping[str, Any], value: Mapping[str, Any]
) -> SignableMessage:
    """Returns the EIP-712 structured message ready for signing or recovery."""
    message_types = {name: fields for name, fields in types.items() if name != DOMAIN_TYPE_NAME}
    return encode_typed_data(
        domain_data=_normalize_domain(domain),
        message_types=message_types,
        message_data=dict(value),
    )


def hash_typed_data(
    domain: Mapping[str, Any], types: Mapping[str, Any], value: Mapping[str, Any]
) -> bytes:
    """Returns the EIP-712 hash of the typed data (the value that actually gets signed)."""
    message = signable_typed_data(domain, types, value)
    return keccak(b"\x19" + message.version + message.header + message.body)


def verify_typed_data(
    domain: Mapping[str, Any],
    types: Mapping[str, Any],
    value: Mapping[str, Any],
    signature: str | bytes,
) -> Address:
    """
    Recovers the address that signed the given typed data.

    .. note::

        The domain (in particular, ``chainId`` and ``verifyingContract``) must match
        the one used for signing exactly, otherwise an unrelated address is returned.
        The caller is responsible for comparing the result with the expected signer.
    """
    message = signable_typed_data(domain, types, value)
    try:
        signature_bytes = to_data_bytes(signature)
    except (ValueError, TypeError) as exc:
        raise InvalidSignatureError(f"Could not parse the signature: {exc}") from exc
    if len(signature_bytes) != SIGNATURE_LENGTH:
        raise InvalidSignatureError(
            f"Expected a {SIGNATURE_LENGTH}-byte signature, got {len(signature_bytes)} bytes"
        )
    try:
        recovered = Account.recover_message(message, signature=signature_bytes)
    except (BadSignature, ValidationError, ValueError, TypeError) as exc:
        raise InvalidSignatureError(f"Could not recover the signer: {exc}") from exc
    return Address(recovered)
