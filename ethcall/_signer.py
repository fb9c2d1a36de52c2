from abc import ABC, abstractmethod
from collections.abc import Mapping
from functools import cached_property
from typing import Any

from eth_account import Account
from eth_account.signers.local import LocalAccount

from ._entities import Address
from ._typed_data import signable_typed_data


class Signer(ABC):
    """The base class for typed data signers."""

    @property
    @abstractmethod
    def address(self) -> Address:
        """Returns the address corresponding to the signer's private key."""

    @abstractmethod
    def sign_typed_data(
        self, domain: Mapping[str, Any], types: Mapping[str, Any], value: Mapping[str, Any]
    ) -> str:
        """Signs the given EIP-712 typed data and returns the ``0x``-prefixed signature."""


class AccountSigner(Signer):
    """A signer wrapper for ``LocalAccount`` from ``eth-account`` package."""

    def __init__(self, account: LocalAccount):
        self._account = account

    @staticmethod
    def create() -> "AccountSigner":
        """Creates an account with a random private key."""
        return AccountSigner(Account.create())

    @property
    def account(self) -> LocalAccount:
        """Returns the account object used to create this signer."""
        return self._account

    @property
    def private_key(self) -> bytes:
        """
        Returns the private key corresponding to this signer.
        Handle with care.
        """
        return bytes(self._account.key)

    @cached_property
    def address(self) -> Address:
        return Address(self._account.address)

    def sign_typed_data(
        self, domain: Mapping[str, Any], types: Mapping[str, Any], value: Mapping[str, Any]
    ) -> str:
        signed = self._account.sign_message(signable_typed_data(domain, types, value))
        return "0x" + bytes(signed.signature).hex()
