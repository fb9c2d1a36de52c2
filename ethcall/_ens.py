"""ENS name normalization, hashing and on-chain reverse resolution."""

import logging
from collections.abc import Iterable

import idna
from eth_utils import encode_hex, keccak

from . import abi
from ._chain import ChainSession
from ._contract_abi import View
from ._entities import Address

logger = logging.getLogger(__name__)

# https://github.com/ensdomains/reverse-records
REVERSE_RECORDS_MAINNET = Address("0x3671aE578E63FdF66ad4F3E12CC0c0d71Ac7510C")

GET_NAMES = View("getNames", {"addresses": abi.array(abi.address)}, {"r": abi.array(abi.string)})


def normalize_name(name: str) -> str:
    """
    Normalizes an ENS name with UTS-46 ToASCII processing
    (STD3 rules, non-transitional).
    Raises ``idna.IDNAError`` if the name cannot be normalized.
    """
    return idna.encode(name, uts46=True, std3_rules=True, transitional=False).decode()


def namehash(name: str) -> str:
    """Returns the ENS namehash of the given name as a hex string."""
    node = b"\x00" * 32
    if name:
        for label in reversed(normalize_name(name).split(".")):
            node = keccak(node + keccak(text=label))
    return encode_hex(node)


def _is_safe(name: str) -> bool:
    # A name that changes under normalization may be a homograph of another one.
    try:
        return normalize_name(name) == name
    except idna.IDNAError:
        return False


async def reverse_ens_lookup(
    session: ChainSession,
    addresses: Iterable[str],
    registry: str = REVERSE_RECORDS_MAINNET,
) -> list[str]:
    """
    Looks up the primary ENS names of the given addresses using the reverse records contract
    at ``registry``.
    Returns the names in the order of the addresses;
    an address without a name, or with a name that is not in normalized form,
    is mapped to an empty string.
    """
    result = await session.call(registry, GET_NAMES(addresses=list(addresses)))

    names = []
    for name in result["r"]:
        if name and not _is_safe(name):
            logger.warning("Discarding an unsafe ENS name: %r", name)
            names.append("")
        else:
            names.append(name)
    return names
