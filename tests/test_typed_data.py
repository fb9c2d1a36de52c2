from typing import Any

import pytest

from ethcall import (
    AccountSigner,
    Address,
    InvalidSignatureError,
    hash_typed_data,
    verify_typed_data,
)

MAIL_DIGEST = bytes.fromhex("be609aee343fb3c4b28e1df9e632fca64fcfaede20f02e86244efddf30957bd2")


def test_hash_typed_data(
    mail_domain: dict[str, Any], mail_types: dict[str, Any], mail_message: dict[str, Any]
) -> None:
    assert hash_typed_data(mail_domain, mail_types, mail_message) == MAIL_DIGEST

    # An explicit domain type is ignored, the domain fields define it
    types_with_domain = {
        "EIP712Domain": [
            {"name": "name", "type": "string"},
            {"name": "version", "type": "string"},
            {"name": "chainId", "type": "uint256"},
            {"name": "verifyingContract", "type": "address"},
        ],
        **mail_types,
    }
    assert hash_typed_data(mail_domain, types_with_domain, mail_message) == MAIL_DIGEST

    # Chain ID may be given as a hex string
    hex_chain_domain = dict(mail_domain, chainId="0x1")
    assert hash_typed_data(hex_chain_domain, mail_types, mail_message) == MAIL_DIGEST

    other_chain_domain = dict(mail_domain, chainId=5)
    assert hash_typed_data(other_chain_domain, mail_types, mail_message) != MAIL_DIGEST


def test_verify_typed_data(
    cow_signer: AccountSigner,
    mail_domain: dict[str, Any],
    mail_types: dict[str, Any],
    mail_message: dict[str, Any],
) -> None:
    assert cow_signer.address == "0xcd2a3d9f938e13cd947ec05abc7fe734df8dd826"

    signature = cow_signer.sign_typed_data(mail_domain, mail_types, mail_message)
    signer = verify_typed_data(mail_domain, mail_types, mail_message, signature)
    assert isinstance(signer, Address)
    assert signer == cow_signer.address
    # The result is always lowercase
    assert signer == signer.lower()

    # Signatures as bytes are accepted as well
    assert (
        verify_typed_data(mail_domain, mail_types, mail_message, bytes.fromhex(signature[2:]))
        == signer
    )


def test_verify_wrong_data(
    cow_signer: AccountSigner,
    mail_domain: dict[str, Any],
    mail_types: dict[str, Any],
    mail_message: dict[str, Any],
) -> None:
    signature = cow_signer.sign_typed_data(mail_domain, mail_types, mail_message)

    # A signature for different data recovers some other address
    tampered = dict(mail_message, contents="Hello, Alice!")
    assert verify_typed_data(mail_domain, mail_types, tampered, signature) != cow_signer.address

    other_domain = dict(mail_domain, chainId=137)
    assert verify_typed_data(other_domain, mail_types, mail_message, signature) != (
        cow_signer.address
    )


def test_verify_malformed_signature(
    mail_domain: dict[str, Any], mail_types: dict[str, Any], mail_message: dict[str, Any]
) -> None:
    # `v` must be one of 0, 1, 27, 28
    signature = "0x" + "11" * 64 + "05"
    with pytest.raises(InvalidSignatureError, match="Could not recover the signer"):
        verify_typed_data(mail_domain, mail_types, mail_message, signature)

    # Empty or truncated signatures (e.g. a wallet returning nothing on rejection)
    for empty in ["0x", b""]:
        with pytest.raises(
            InvalidSignatureError, match="Expected a 65-byte signature, got 0 bytes"
        ):
            verify_typed_data(mail_domain, mail_types, mail_message, empty)

    with pytest.raises(InvalidSignatureError, match="Expected a 65-byte signature, got 64 bytes"):
        verify_typed_data(mail_domain, mail_types, mail_message, "0x" + "11" * 64)

    with pytest.raises(InvalidSignatureError, match="Could not parse the signature"):
        verify_typed_data(mail_domain, mail_types, mail_message, "11" * 65)

    with pytest.raises(InvalidSignatureError, match="Could not parse the signature"):
        verify_typed_data(mail_domain, mail_types, mail_message, "0x" + "zz" * 65)
