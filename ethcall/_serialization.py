"""Ethereum RPC schema."""

from collections.abc import Mapping, Sequence
from types import MappingProxyType, NoneType, UnionType
from typing import Any, TypeVar, Union, cast

from compages import (
    StructureDictIntoDataclass,
    Structurer,
    StructuringError,
    Unstructurer,
    simple_structure,
    simple_typechecked_unstructure,
    structure_into_bool,
    structure_into_list,
    structure_into_none,
    structure_into_str,
    structure_into_union,
    unstructure_as_bool,
    unstructure_as_none,
    unstructure_as_str,
)

from ._entities import Address, BlockLabel

JSON = None | bool | int | float | str | Sequence["JSON"] | Mapping[str, "JSON"]
"""Values serializable to JSON."""


def _structure_into_address(
    _structurer: Structurer, _structure_into: type[Address], val: Any
) -> Address:
    if not isinstance(val, str):
        raise StructuringError("The value must be a 0x-prefixed hex-encoded address")
    try:
        return Address(val)
    except ValueError as exc:
        raise StructuringError(str(exc)) from exc


@simple_structure
def _structure_into_int(val: Any) -> int:
    if not isinstance(val, str) or not val.startswith("0x"):
        raise StructuringError("The value must be a 0x-prefixed hex-encoded integer")
    return int(val, 0)


@simple_typechecked_unstructure
def _unstructure_address(obj: Address) -> str:
    return str.__str__(obj)


@simple_typechecked_unstructure
def _unstructure_block_label(obj: BlockLabel) -> str:
    return obj.value


@simple_typechecked_unstructure
def _unstructure_int_to_hex(obj: int) -> str:
    return hex(obj)


@simple_typechecked_unstructure
def _unstructure_bytes_to_hex(obj: bytes) -> str:
    return "0x" + obj.hex()


def _to_camel_case(name: str, _metadata: MappingProxyType[Any, Any]) -> str:
    if name.endswith("_"):
        name = name[:-1]
    parts = name.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


STRUCTURER = Structurer(
    {
        Address: _structure_into_address,
        int: _structure_into_int,
        str: structure_into_str,
        bool: structure_into_bool,
        list: structure_into_list,
        UnionType: structure_into_union,
        Union: structure_into_union,
        NoneType: structure_into_none,
    },
    [StructureDictIntoDataclass(_to_camel_case)],
)

UNSTRUCTURER = Unstructurer(
    {
        Address: _unstructure_address,
        BlockLabel: _unstructure_block_label,
        int: _unstructure_int_to_hex,
        bytes: _unstructure_bytes_to_hex,
        bool: unstructure_as_bool,
        str: unstructure_as_str,
        NoneType: unstructure_as_none,
    },
    [],
)


_T = TypeVar("_T")


def structure(structure_into: type[_T], obj: JSON) -> _T:
    """Structures incoming JSON data."""
    return STRUCTURER.structure_into(structure_into, obj)


def unstructure(obj: Any, unstructure_as: Any = None) -> JSON:
    """Unstructures a scalar value into a JSON-serializable value."""
    # The result is `JSON` by virtue of the hooks we defined
    return cast(JSON, UNSTRUCTURER.unstructure_as(unstructure_as or type(obj), obj))
