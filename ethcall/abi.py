# This is the whole point of this module.
# ruff: noqa: A001

"""Type tags for the supported Solidity types."""

from ._abi_types import type_from_tag

_PyInt = int


def uint(bits: _PyInt = 256) -> str:
    """Returns the ``uint<bits>`` type tag."""
    return type_from_tag(f"uint{bits}").canonical_form


def int(bits: _PyInt = 256) -> str:
    """Returns the ``int<bits>`` type tag."""
    return type_from_tag(f"int{bits}").canonical_form


def array(tag: str) -> str:
    """Returns the tag of a dynamic array with elements of the given type."""
    return type_from_tag(f"{tag}[]").canonical_form


address = "address"
"""``address`` type."""

string = "string"
"""``string`` type."""

bool = "bool"
"""``bool`` type."""

bytes32 = "bytes32"
"""``bytes32`` type (decoded as an integer)."""
