import re
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from typing import Any

from eth_abi import decode as eth_abi_decode
from eth_abi import encode as eth_abi_encode
from eth_abi.exceptions import DecodingError, EncodingError
from eth_utils import decode_hex, encode_hex, keccak

from ._entities import Address

# The size of an ABI word in bytes.
WORD_SIZE = 32


class ABIEncodingError(Exception):
    """Raised on an error when encoding values into an Eth ABI encoded bytestring."""


class ABIDecodingError(Exception):
    """Raised on an error when decoding a value in an Eth ABI encoded bytestring."""


class UnsupportedTypeError(ValueError):
    """Raised when a type tag is not one of the supported Solidity types."""


class InvalidBooleanError(ValueError):
    """Raised when a ``bool`` value is neither ``True`` nor ``False``."""


def to_data_bytes(data: str | bytes) -> bytes:
    """Converts ``0x``-prefixed hex data into bytes (bytes are passed through)."""
    if isinstance(data, bytes):
        return data
    if not isinstance(data, str) or not data.startswith("0x"):
        raise TypeError(f"Expected bytes or 0x-prefixed hex data, got {data!r}")
    return decode_hex(data)


class Type(ABC):
    """The base type for Solidity types."""

    @property
    @abstractmethod
    def canonical_form(self) -> str:
        """Returns the type as a string in the canonical form (for ``eth_abi`` consumption)."""

    @abstractmethod
    def _normalize(self, val: Any) -> Any:
        """
        Checks and possibly normalizes the value making it ready to be passed
        to ``eth_abi.encode()``.
        """

    @abstractmethod
    def _denormalize(self, val: Any) -> Any:
        """
        Converts a raw value (as returned by ``eth_abi.decode()`` or by an RPC call)
        into the application-level value.
        """

    def encode(self, val: Any) -> bytes:
        """Encodes the given value in the contract ABI format."""
        return encode_args((self, val))

    def decode(self, val: bytes) -> Any:
        """Decodes the given value from the contract ABI format."""
        return decode_args([self], val)[0]

    def encode_to_topic(self, val: Any) -> bytes:
        """Encodes the given value as an event topic."""
        # Indexed values of reference types are hashed by the EVM,
        # and their elements are concatenated without length labels,
        # so ``eth_abi`` cannot be used for them directly.
        return self._encode_to_topic_outer(self._normalize(val))

    def _encode_to_topic_outer(self, val: Any) -> bytes:
        """Encodes a value of the outer indexed type."""
        return eth_abi_encode([self.canonical_form], [val])

    def _encode_to_topic_inner(self, val: Any) -> bytes:
        """Encodes a value contained within an indexed array."""
        return eth_abi_encode([self.canonical_form], [val])

    def decode_from_topic(self, val: bytes) -> Any:
        """
        Decodes an encoded topic.
        Returns ``None`` if the decoding is impossible
        (that is, the original value was hashed).
        """
        return self.decode(val)

    @property
    def is_array(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.canonical_form

    def __repr__(self) -> str:
        return f"type_from_tag({self.canonical_form!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Type) and self.canonical_form == other.canonical_form

    def __hash__(self) -> int:
        return hash(self.canonical_form)


def _check_int(type_name: str, val: Any) -> None:
    # `bool` is a subclass of `int`, but we would rather be more strict
    # and prevent possible bugs.
    if not isinstance(val, int) or isinstance(val, bool):
        raise TypeError(f"`{type_name}` must correspond to an integer, got {type(val).__name__}")


# Numeric strings as returned by RPC: `0x`-prefixed hex, or decimal with optional leading zeros.
_HEX_STRING_RE = re.compile(r"^0[xX][0-9a-fA-F]+\Z")
_DECIMAL_STRING_RE = re.compile(r"^[+-]?[0-9]+\Z")


def _int_from_raw(type_name: str, val: Any, *, signed: bool = False) -> int:
    if isinstance(val, str):
        if _HEX_STRING_RE.match(val):
            return int(val, 16)
        if _DECIMAL_STRING_RE.match(val):
            return int(val, 10)
        raise ValueError(f"`{type_name}` must correspond to a decimal or hex string, got {val!r}")
    if isinstance(val, bytes):
        return int.from_bytes(val, byteorder="big", signed=signed)
    _check_int(type_name, val)
    return val


class UInt(Type):
    """Corresponds to the Solidity ``uint<bits>`` type."""

    def __init__(self, bits: int):
        if bits <= 0 or bits > 256 or bits % 8 != 0:  # noqa: PLR2004
            raise UnsupportedTypeError(f"Incorrect `uint` bit size: {bits}")
        self._bits = bits

    @property
    def canonical_form(self) -> str:
        return f"uint{self._bits}"

    def _normalize(self, val: Any) -> int:
        _check_int(self.canonical_form, val)
        if val < 0:
            raise ValueError(
                f"`{self.canonical_form}` must correspond to a non-negative integer, got {val}"
            )
        if val >> self._bits != 0:
            raise ValueError(
                f"`{self.canonical_form}` must correspond to an unsigned integer "
                f"under {self._bits} bits, got {val}"
            )
        return val

    def _denormalize(self, val: Any) -> int:
        return _int_from_raw(self.canonical_form, val)


class Int(Type):
    """Corresponds to the Solidity ``int<bits>`` type."""

    def __init__(self, bits: int):
        if bits <= 0 or bits > 256 or bits % 8 != 0:  # noqa: PLR2004
            raise UnsupportedTypeError(f"Incorrect `int` bit size: {bits}")
        self._bits = bits

    @property
    def canonical_form(self) -> str:
        return f"int{self._bits}"

    def _normalize(self, val: Any) -> int:
        _check_int(self.canonical_form, val)
        if (val + (1 << (self._bits - 1))) >> self._bits != 0:
            raise ValueError(
                f"`{self.canonical_form}` must correspond to a signed integer "
                f"under {self._bits} bits, got {val}"
            )
        return val

    def _denormalize(self, val: Any) -> int:
        return _int_from_raw(self.canonical_form, val, signed=True)


class Bytes32(Type):
    """
    Corresponds to the Solidity ``bytes32`` type.
    Values are represented as integers (the big-endian interpretation of the 32 bytes).
    """

    @property
    def canonical_form(self) -> str:
        return "bytes32"

    def _normalize(self, val: Any) -> bytes:
        if isinstance(val, bytes):
            if len(val) != WORD_SIZE:
                raise ValueError(f"Expected {WORD_SIZE} bytes, got {len(val)}")
            return val
        _check_int(self.canonical_form, val)
        if val < 0 or val >> (WORD_SIZE * 8) != 0:
            raise ValueError(f"`bytes32` must correspond to an integer under 256 bits, got {val}")
        return val.to_bytes(WORD_SIZE, byteorder="big")

    def _denormalize(self, val: Any) -> int:
        return _int_from_raw(self.canonical_form, val)


class AddressType(Type):
    """
    Corresponds to the Solidity ``address`` type.
    Not to be confused with :py:class:`~ethcall.Address` which represents an address value.
    """

    @property
    def canonical_form(self) -> str:
        return "address"

    def _normalize(self, val: Any) -> bytes:
        if not isinstance(val, str | bytes):
            raise TypeError(
                f"`address` must correspond to a hex string or an `Address`, "
                f"got {type(val).__name__}"
            )
        return bytes(Address(val))

    def _denormalize(self, val: Any) -> Address:
        return Address(val)


class String(Type):
    """Corresponds to the Solidity ``string`` type."""

    @property
    def canonical_form(self) -> str:
        return "string"

    def _check_val(self, val: Any) -> None:
        if not isinstance(val, str):
            raise TypeError(
                f"`string` must correspond to a `str`-type value, got {type(val).__name__}"
            )

    def _normalize(self, val: Any) -> str:
        self._check_val(val)
        return val

    def _denormalize(self, val: Any) -> str:
        self._check_val(val)
        return val

    def _encode_to_topic_outer(self, val: str) -> bytes:
        # `string` is a reference type and is therefore hashed.
        return keccak(val.encode())

    def _encode_to_topic_inner(self, val: str) -> bytes:
        # Inside an indexed array it is padded to a multiple of 32 bytes.
        encoded = val.encode()
        padding_len = (WORD_SIZE - len(encoded)) % WORD_SIZE
        return encoded + b"\x00" * padding_len

    def decode_from_topic(self, val: bytes) -> None:
        # Cannot recover a hashed value.
        return None


class Bool(Type):
    """Corresponds to the Solidity ``bool`` type."""

    @property
    def canonical_form(self) -> str:
        return "bool"

    def _normalize(self, val: Any) -> bool:
        if not isinstance(val, bool):
            raise TypeError(
                f"`bool` must correspond to a `bool`-type value, got {type(val).__name__}"
            )
        return val

    def _denormalize(self, val: Any) -> bool:
        if val is True:
            return True
        if val is False:
            return False
        raise InvalidBooleanError(f"Unknown boolean: {val!r}")


class Array(Type):
    """Corresponds to the Solidity dynamic array (``<type>[]``) type."""

    def __init__(self, element_type: Type):
        if element_type.is_array:
            raise UnsupportedTypeError(
                f"Nested arrays are not supported: {element_type.canonical_form}[]"
            )
        self._element_type = element_type

    @property
    def element_type(self) -> Type:
        return self._element_type

    @property
    def canonical_form(self) -> str:
        return self._element_type.canonical_form + "[]"

    @property
    def is_array(self) -> bool:
        return True

    def _check_val(self, val: Any) -> None:
        if not isinstance(val, list | tuple):
            raise TypeError(f"Expected a list or a tuple, got {type(val).__name__}")

    def _normalize(self, val: Any) -> list[Any]:
        self._check_val(val)
        return [self._element_type._normalize(item) for item in val]  # noqa: SLF001

    def _denormalize(self, val: Any) -> list[Any]:
        self._check_val(val)
        return [self._element_type._denormalize(item) for item in val]  # noqa: SLF001

    def _encode_to_topic_outer(self, val: list[Any]) -> bytes:
        return keccak(self._encode_to_topic_inner(val))

    def _encode_to_topic_inner(self, val: list[Any]) -> bytes:
        return b"".join(
            self._element_type._encode_to_topic_inner(elem)  # noqa: SLF001
            for elem in val
        )

    def decode_from_topic(self, val: bytes) -> None:
        return None


_UINT_RE = re.compile(r"^uint(\d+)$")
_INT_RE = re.compile(r"^int(\d+)$")
_ARRAY_RE = re.compile(r"^(\w+)\[\]$")

_NO_PARAMS: dict[str, Type] = {
    "address": AddressType(),
    "string": String(),
    "bool": Bool(),
    "bytes32": Bytes32(),
    "uint": UInt(256),
    "int": Int(256),
}


def type_from_tag(tag: str) -> Type:
    """
    Returns the type object for the given type tag.
    Raises :py:class:`UnsupportedTypeError` if the tag is not a supported Solidity type.
    """
    if not isinstance(tag, str):
        raise UnsupportedTypeError(f"Type tag must be a string, got {type(tag).__name__}")
    if match := _ARRAY_RE.match(tag):
        return Array(type_from_tag(match.group(1)))
    if match := _UINT_RE.match(tag):
        return UInt(int(match.group(1)))
    if match := _INT_RE.match(tag):
        return Int(int(match.group(1)))
    if tag in _NO_PARAMS:
        return _NO_PARAMS[tag]
    raise UnsupportedTypeError(f"Unknown type: {tag}")


def decode_value(tag: str, raw: Any) -> Any:
    """Converts a raw RPC or ``eth_abi`` value of the given type into its typed value."""
    return type_from_tag(tag)._denormalize(raw)  # noqa: SLF001


def canonical_signature(types: Iterable[Type]) -> str:
    return "(" + ",".join(tp.canonical_form for tp in types) + ")"


def encode_args(*types_and_args: tuple[Type, Any]) -> bytes:
    if types_and_args:
        types, args = zip(*types_and_args, strict=True)
    else:
        types, args = (), ()
    normalized = [tp._normalize(arg) for tp, arg in zip(types, args, strict=True)]  # noqa: SLF001
    try:
        return eth_abi_encode([tp.canonical_form for tp in types], normalized)
    except EncodingError as exc:
        raise ABIEncodingError(
            f"Could not encode the values with the signature {canonical_signature(types)}: {exc}"
        ) from exc


def decode_args(types: Sequence[Type], data: bytes) -> tuple[Any, ...]:
    try:
        values = eth_abi_decode([tp.canonical_form for tp in types], data)
    except DecodingError as exc:
        # wrap possible `eth_abi` errors
        message = (
            f"Could not decode the return value "
            f"with the expected signature {canonical_signature(types)}: {exc}"
        )
        raise ABIDecodingError(message) from exc
    return tuple(
        tp._denormalize(value)  # noqa: SLF001
        for tp, value in zip(types, values, strict=True)
    )


def abi_encode(tags: Sequence[str], values: Sequence[Any]) -> bytes:
    """Encodes an ordered list of values with the given type tags as an ABI tuple."""
    if len(tags) != len(values):
        raise ABIEncodingError(f"Expected {len(tags)} values, got {len(values)}")
    return encode_args(*zip([type_from_tag(tag) for tag in tags], values, strict=True))


def abi_decode(tags: Sequence[str], data: str | bytes) -> list[Any]:
    """Decodes an ABI tuple with the given type tags into an ordered list of values."""
    return list(decode_args([type_from_tag(tag) for tag in tags], to_data_bytes(data)))


def encode_topic(tag: str, value: Any) -> str:
    """Encodes a single value of the given type as an event topic (a ``0x`` hex string)."""
    return encode_hex(type_from_tag(tag).encode_to_topic(value))
