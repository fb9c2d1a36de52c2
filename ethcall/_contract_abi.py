import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from functools import cached_property
from typing import Any

from eth_utils import encode_hex

from ._abi_types import (
    ABIEncodingError,
    Type,
    UnsupportedTypeError,
    decode_args,
    encode_args,
    to_data_bytes,
    type_from_tag,
)
from ._hashing import canonical_signature, event_topic0, method_selector

logger = logging.getLogger(__name__)

# Non-anonymous events can have at most 3 indexed fields
EVENT_INDEXED_FIELDS = 3


class InvalidSpecError(ValueError):
    """Raised when a field list or an event declaration is malformed."""


class NotIndexedError(ValueError):
    """Raised when an event filter refers to a field that is not indexed."""

    def __init__(self, field: str):
        super().__init__(f'Cannot filter on "{field}" as it is not an indexed event parameter')
        self.field = field


FieldsLike = Mapping[str, str] | Sequence[tuple[str, str]]


class Fields:
    """
    An ordered list of named typed values.
    These can be method parameters, method outputs, or event fields.

    The order of the fields defines both the positional encoding order
    and the order of the decoded values.
    """

    names: tuple[str, ...]
    """Field names."""

    tags: tuple[str, ...]
    """Field type tags, in the canonical form."""

    types: tuple[Type, ...]
    """Field types."""

    def __init__(self, fields: "FieldsLike | Fields"):
        if isinstance(fields, Fields):
            pairs = list(zip(fields.names, fields.tags, strict=True))
        elif isinstance(fields, Mapping):
            pairs = list(fields.items())
        else:
            pairs = [tuple(pair) for pair in fields]

        names = []
        types = []
        for pair in pairs:
            if len(pair) != 2:  # noqa: PLR2004
                raise InvalidSpecError(f"Expected a `(name, type)` pair, got {pair!r}")
            name, tag = pair
            if not isinstance(name, str):
                raise InvalidSpecError(f"Field name must be a string, got {type(name).__name__}")
            if not isinstance(tag, str):
                raise InvalidSpecError(
                    f"Expected string for the type of `{name}`, got {type(tag).__name__}"
                )
            try:
                tp = type_from_tag(tag)
            except UnsupportedTypeError as exc:
                raise InvalidSpecError(f"Unsupported type of `{name}`: {tag}") from exc
            names.append(name)
            types.append(tp)

        if len(names) != len(set(names)):
            raise InvalidSpecError("All fields must have distinct names")

        self.names = tuple(names)
        self.types = tuple(types)
        self.tags = tuple(tp.canonical_form for tp in types)

    @cached_property
    def canonical_form(self) -> str:
        """Returns the field types serialized in the canonical form as a string."""
        return "(" + ",".join(self.tags) + ")"

    def type_of(self, name: str) -> Type:
        """Returns the type of the field with the given name."""
        return self.types[self.names.index(name)]

    def encode(self, values: Mapping[str, Any]) -> bytes:
        """Encodes the values for each field (looked up by name) into bytes."""
        ordered = []
        for name in self.names:
            if name not in values:
                raise ABIEncodingError(f"Missing value for the field `{name}`")
            ordered.append(values[name])
        return encode_args(*zip(self.types, ordered, strict=True))

    def decode(self, data: str | bytes) -> dict[str, Any]:
        """Decodes the packed data into a dictionary of field values."""
        values = decode_args(self.types, to_data_bytes(data))
        return dict(zip(self.names, values, strict=True))

    def __len__(self) -> int:
        return len(self.names)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(zip(self.names, self.tags, strict=True))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Fields) and list(self) == list(other)

    def __str__(self) -> str:
        fields = ", ".join(f"{tag} {name}" for name, tag in self)
        return f"({fields})"


def encode_object(fields: "FieldsLike | Fields", values: Mapping[str, Any]) -> bytes:
    """Encodes a mapping of values according to the given fields."""
    return Fields(fields).encode(values)


def decode_object(fields: "FieldsLike | Fields", data: str | bytes) -> dict[str, Any]:
    """Decodes the packed data into a mapping of values according to the given fields."""
    return Fields(fields).decode(data)


def _even_hex(hex_digits: str) -> str:
    # Encoders are expected to produce whole bytes, but a stray nibble would shift the payload.
    return hex_digits if len(hex_digits) % 2 == 0 else "0" + hex_digits


def _merge_arguments(values: None | Mapping[str, Any], kwargs: Mapping[str, Any]) -> dict[str, Any]:
    arguments = dict(values) if values is not None else {}
    arguments.update(kwargs)
    return arguments


class Call:
    """An encoded contract call along with the means to decode its result."""

    data: str
    """The ``0x``-prefixed call data (the selector followed by the encoded arguments)."""

    view: "View"
    """The view object that encoded this call."""

    def __init__(self, view: "View", data: str):
        self.view = view
        self.data = data

    def decode(self, result: str | bytes) -> dict[str, Any]:
        """Decodes the raw result of ``eth_call``."""
        return self.view.decode_output(result)

    def __repr__(self) -> str:
        return f"Call({self.view.signature!r}, {self.data!r})"


class View:
    """
    A contract method with a decodable result.

    Calling the object with a mapping of argument values (and/or keyword arguments)
    returns a :py:class:`Call`.
    """

    name: str
    """The name of this method."""

    params: Fields
    """The input fields of this method."""

    returns: Fields
    """The output fields of this method."""

    def __init__(self, name: str, params: "FieldsLike | Fields", returns: "FieldsLike | Fields"):
        self.name = name
        self.params = Fields(params)
        self.returns = Fields(returns)

    @cached_property
    def signature(self) -> str:
        """The canonical signature of this method."""
        return canonical_signature(self.name, self.params.tags)

    @cached_property
    def selector(self) -> str:
        """The method's selector as a hex string."""
        selector = method_selector(self.signature)
        logger.debug("Computed selector %s for %s", selector, self.signature)
        return selector

    def __call__(self, values: None | Mapping[str, Any] = None, /, **kwargs: Any) -> Call:
        """Returns an encoded call with the given arguments."""
        arguments = _merge_arguments(values, kwargs)
        arg_hex = encode_hex(self.params.encode(arguments))[2:]
        return Call(self, self.selector + _even_hex(arg_hex))

    def decode_output(self, result: str | bytes) -> dict[str, Any]:
        """Decodes the output from the ABI-packed result."""
        return self.returns.decode(result)

    def __str__(self) -> str:
        returns = "" if not self.returns.names else f" returns {self.returns}"
        return f"function {self.name}{self.params}{returns}"


class Method(View):
    """A state-mutating contract method (its result is not decoded)."""

    def __init__(self, name: str, params: "FieldsLike | Fields"):
        super().__init__(name, params, {})


class Either:
    """Denotes an `OR` operation when filtering events."""

    def __init__(self, *items: Any):
        self.items = items


EventFilterTopics = list[None | str | list[str]]


class EventType:
    """
    A contract event.

    Calling the object with a mapping of values for indexed fields (and/or keyword arguments)
    returns the list of topics to be used in ``eth_getLogs``.
    Some indexed fields can be omitted, which will mean that the filter
    will match events with any value of that field.
    """

    name: str
    """The name of this event."""

    fields: Fields
    """The event fields."""

    indexed: tuple[str, ...]
    """The names of the indexed fields, in declaration order."""

    def __init__(self, name: str, params: "FieldsLike | Fields", indexed: Iterable[str]):
        self.name = name
        self.fields = Fields(params)

        indexed_set = set(indexed)
        unknown = indexed_set - set(self.fields.names)
        if unknown:
            raise InvalidSpecError(
                f"All the names in `indexed` must be present in the fields list, "
                f"got unknown {sorted(unknown)}"
            )
        if len(indexed_set) > EVENT_INDEXED_FIELDS:
            raise InvalidSpecError(
                f"Events can have at most {EVENT_INDEXED_FIELDS} indexed fields"
            )

        # Topics follow the declaration order of the fields, not the order of `indexed`.
        self.indexed = tuple(name for name in self.fields.names if name in indexed_set)
        self._nonindexed = Fields([pair for pair in self.fields if pair[0] not in indexed_set])

    @cached_property
    def signature(self) -> str:
        """The canonical signature of this event."""
        return canonical_signature(self.name, self.fields.tags)

    @cached_property
    def topic0(self) -> str:
        """The topic representing this event's signature."""
        topic = event_topic0(self.signature)
        logger.debug("Computed topic %s for %s", topic, self.signature)
        return topic

    def _encode_slot(self, name: str, value: Any) -> str | list[str]:
        tp = self.fields.type_of(name)
        if isinstance(value, Either):
            return [encode_hex(tp.encode_to_topic(item)) for item in value.items]
        if isinstance(value, list | tuple) and not tp.is_array:
            return [encode_hex(tp.encode_to_topic(item)) for item in value]
        return encode_hex(tp.encode_to_topic(value))

    def __call__(
        self, query: None | Mapping[str, Any] = None, /, **kwargs: Any
    ) -> EventFilterTopics:
        """Creates the topic filter from the provided values of indexed fields."""
        topics: EventFilterTopics = [self.topic0] + [None] * len(self.indexed)
        for name, value in _merge_arguments(query, kwargs).items():
            if name not in self.indexed:
                raise NotIndexedError(name)
            if value is None:
                continue
            topics[self.indexed.index(name) + 1] = self._encode_slot(name, value)
        return topics

    def decode(self, item: Any) -> dict[str, Any]:
        """
        Decodes the event fields from the given log item
        (a mapping or an object with ``topics`` and ``data``).
        Indexed fields of reference types, which are hashed before saving them to the log,
        are set to ``None``.
        """
        if isinstance(item, Mapping):
            topics, data = item["topics"], item["data"]
        else:
            topics, data = item.topics, item.data

        if len(topics) < len(self.indexed) + 1:
            raise ValueError(
                f"The log item has {len(topics)} topics, expected {len(self.indexed) + 1} "
                f"for the event {self.signature}"
            )

        decoded: dict[str, Any] = {}
        for name, topic in zip(self.indexed, topics[1:], strict=False):
            decoded[name] = self.fields.type_of(name).decode_from_topic(to_data_bytes(topic))

        if data not in ("0x", b""):
            decoded.update(self._nonindexed.decode(data))

        # Assemble preserving the field order
        return {name: decoded[name] for name in self.fields.names if name in decoded}

    def __str__(self) -> str:
        params = []
        for name, tag in self.fields:
            indexed_str = " indexed" if name in self.indexed else ""
            params.append(f"{tag}{indexed_str} {name}")
        return f"event {self.name}(" + ", ".join(params) + ")"
