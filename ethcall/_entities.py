from dataclasses import dataclass
from enum import Enum
from functools import cached_property

from eth_utils import to_canonical_address, to_checksum_address, to_normalized_address


class Address(str):
    """
    Represents an Ethereum address.

    All addresses produced by this library are lowercase ``0x``-prefixed hex strings,
    so a simple equality check is enough to compare them.
    Normalizing an already normalized address is a no-op.
    """

    def __new__(cls, value: "str | bytes") -> "Address":
        if not isinstance(value, str | bytes):
            raise TypeError(
                f"Address must be a hex string or a bytestring, got {type(value).__name__}"
            )
        if isinstance(value, bytes) and len(value) != 20:  # noqa: PLR2004
            raise ValueError(f"Address must be 20 bytes long, got {len(value)}")
        try:
            normalized = to_normalized_address(value)
        except ValueError as exc:
            raise ValueError(f"Invalid address: {value!r}") from exc
        return super().__new__(cls, normalized)

    @cached_property
    def checksum(self) -> str:
        """Returns the checksummed hex representation of the address."""
        return to_checksum_address(str(self))

    def __bytes__(self) -> bytes:
        return to_canonical_address(str(self))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({str.__repr__(self)})"


class BlockLabel(Enum):
    """Block aliases supported by Ethereum RPC."""

    LATEST = "latest"
    """The latest confirmed block"""

    EARLIEST = "earliest"
    """The earliest block"""

    PENDING = "pending"
    """Currently pending block"""

    SAFE = "safe"
    """The latest safe head block"""

    FINALIZED = "finalized"
    """The latest finalized block"""


@dataclass
class LogItem:
    """A log entry as returned by ``eth_getLogs``."""

    removed: bool
    log_index: None | int
    transaction_index: None | int
    transaction_hash: None | str
    block_hash: None | str
    block_number: None | int
    address: Address
    data: str
    topics: list[str]
