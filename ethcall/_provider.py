from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Mapping, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

RPC_JSON = None | bool | int | float | str | Sequence["RPC_JSON"] | Mapping[str, "RPC_JSON"]
"""RPC requests and responses serializable to JSON."""


class InvalidResponse(Exception):
    """Raised when the remote server's response is not of an expected format."""


class Unreachable(Exception):
    """Raised when there is a problem connecting to the provider."""


class ProtocolError(ABC, Exception):
    """
    A protocol-specific error, indicating that the provider returned an error status
    with no additional information allowing to categorize the error further.

    See the provider-specifc derived class for this exception for more details.
    """


@dataclass
class RPCError(Exception):
    """An error returned by the RPC server in the ``error`` member of the response."""

    code: int
    """The error code."""

    message: str
    """The error message."""

    data: RPC_JSON = None
    """Additional error data."""

    @classmethod
    def from_json(cls, error: Any) -> "RPCError":
        """Parses the ``error`` member of a JSON-RPC response."""
        if not isinstance(error, Mapping):
            raise InvalidResponse(f"RPC error must be a dictionary, got: {error}")
        code = error.get("code")
        message = error.get("message")
        if not isinstance(code, int) or isinstance(code, bool) or not isinstance(message, str):
            raise InvalidResponse(f"Failed to parse an error response: {error}")
        return cls(code=code, message=message, data=error.get("data"))

    def __str__(self) -> str:
        return f"RPC error {self.code}: {self.message}" + (
            f" (data: {self.data})" if self.data is not None else ""
        )


@dataclass
class ProviderError(Exception):
    """Describes an error on the provider's side."""

    error: RPCError | Unreachable | InvalidResponse | ProtocolError
    """The specific error."""

    def __str__(self) -> str:
        return f"Provider error: {self.error}"


class Provider(ABC):
    """The base class for JSON RPC providers."""

    @abstractmethod
    @asynccontextmanager
    async def session(self) -> AsyncIterator["ProviderSession"]:
        """
        Opens a session to the provider
        (allowing the backend to perform multiple operations faster).
        """
        # mypy does not work with abstract generators correctly.
        # See https://github.com/python/mypy/issues/5070
        yield  # type: ignore[misc]


class ProviderSession(ABC):
    """
    The base class for provider sessions.

    The methods of this class may raise :py:class:`ProviderError`
    indicating a problem on the provider's side.
    """

    @abstractmethod
    async def rpc(self, method: str, *args: RPC_JSON) -> RPC_JSON:
        """Calls the given RPC method with the already json-ified arguments."""
        ...
