from typing import Any

import pytest
from eth_account import Account
from eth_utils import keccak

from ethcall import AccountSigner


@pytest.fixture
def cow_signer() -> AccountSigner:
    # The account from the EIP-712 example
    return AccountSigner(Account.from_key(keccak(b"cow")))


@pytest.fixture
def another_signer() -> AccountSigner:
    return AccountSigner.create()


@pytest.fixture
def mail_domain() -> dict[str, Any]:
    return {
        "name": "Ether Mail",
        "version": "1",
        "chainId": 1,
        "verifyingContract": "0xCcCCccccCCCCcCCCCCCcCcCccCcCCCcCcccccccC",
    }


@pytest.fixture
def mail_types() -> dict[str, Any]:
    return {
        "Person": [
            {"name": "name", "type": "string"},
            {"name": "wallet", "type": "address"},
        ],
        "Mail": [
            {"name": "from", "type": "Person"},
            {"name": "to", "type": "Person"},
            {"name": "contents", "type": "string"},
        ],
    }


@pytest.fixture
def mail_message() -> dict[str, Any]:
    return {
        "from": {"name": "Cow", "wallet": "0xCD2a3d9F938E13CD947Ec05AbC7FE734Df8DD826"},
        "to": {"name": "Bob", "wallet": "0xbBbBBBBbbBBBbbbBbbBbbbbBBbBbbbbBbBbbBBbB"},
        "contents": "Hello, Bob!",
    }
