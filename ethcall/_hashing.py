"""Method selectors and event topics derived from canonical signatures."""

from collections.abc import Iterable

from eth_utils import encode_hex, keccak

# The number of bytes in a function selector.
SELECTOR_LENGTH = 4


def canonical_signature(name: str, tags: Iterable[str]) -> str:
    """
    Returns the canonical signature ``name(type1,type2,...)``.
    The tags are expected to be in their canonical form already.
    """
    return f"{name}({','.join(tags)})"


def method_selector(signature: str) -> str:
    """Returns the first 4 bytes of the keccak-256 hash of the signature as a hex string."""
    return encode_hex(keccak(text=signature)[:SELECTOR_LENGTH])


def event_topic0(signature: str) -> str:
    """Returns the full keccak-256 hash of the signature as a hex string."""
    return encode_hex(keccak(text=signature))
