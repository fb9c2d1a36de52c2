"""HTTP provider based on `httpx`."""

import logging
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from http import HTTPStatus
from json import JSONDecodeError
from typing import cast

import httpx

from ._provider import (
    RPC_JSON,
    InvalidResponse,
    ProtocolError,
    Provider,
    ProviderError,
    ProviderSession,
    RPCError,
    Unreachable,
)

logger = logging.getLogger(__name__)

# The default timeout for a single HTTP request, in seconds.
DEFAULT_TIMEOUT = 10.0


class HTTPError(ProtocolError):
    """
    Raised when the provider returns a response with a status code other than 200,
    and no ``"error"`` field in the associated JSON data.
    """

    status: HTTPStatus
    """The HTTP status of the response."""

    message: str
    """The response body."""

    def __init__(self, status_code: int, message: str):
        try:
            status = HTTPStatus(status_code)
        except ValueError:  # pragma: no cover
            # `httpx` gives us a plain integer which may not be a standard status.
            status = HTTPStatus.INTERNAL_SERVER_ERROR

        self.status = status
        self.message = message

    def __str__(self) -> str:
        return f"HTTP status {self.status}: {self.message}"


class HTTPProvider(Provider):
    """A provider for RPC via HTTP(S)."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: None | httpx.AsyncBaseTransport = None,
    ):
        self._url = url
        self._timeout = timeout
        self._transport = transport

    @asynccontextmanager
    async def session(self) -> AsyncIterator["HTTPProviderSession"]:
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            yield HTTPProviderSession(self._url, client)


class HTTPProviderSession(ProviderSession):
    def __init__(self, url: str, http_client: httpx.AsyncClient):
        self._url = url
        self._client = http_client

    def _prepare_request(self, method: str, *args: RPC_JSON) -> RPC_JSON:
        return {"jsonrpc": "2.0", "method": method, "params": list(args), "id": 0}

    async def rpc(self, method: str, *args: RPC_JSON) -> RPC_JSON:
        json = self._prepare_request(method, *args)
        logger.debug("RPC request to %s: %s", self._url, method)
        try:
            response = await self._client.post(self._url, json=json)
        except (httpx.ConnectError, httpx.TimeoutException) as exc:
            logger.warning("Provider %s is unreachable: %s", self._url, exc)
            raise ProviderError(Unreachable(str(exc))) from exc

        status = response.status_code

        try:
            response_json = response.json()
        except JSONDecodeError as exc:
            content = response.content.decode()
            raise ProviderError(
                InvalidResponse(f"Expected a JSON response, got HTTP status {status}: {content}")
            ) from exc

        if not isinstance(response_json, Mapping):
            raise ProviderError(
                InvalidResponse(f"RPC response must be a dictionary, got: {response_json}")
            )
        response_json = cast("Mapping[str, RPC_JSON]", response_json)

        # Note that the Eth-side errors (e.g. transaction having been reverted)
        # will have the HTTP status 200, so we are checking for the "error" field first.
        if "error" in response_json:
            try:
                error = RPCError.from_json(response_json["error"])
            except InvalidResponse as exc:
                raise ProviderError(exc) from exc
            logger.debug("RPC error for %s: %s", method, error)
            raise ProviderError(error)

        if status == HTTPStatus.OK:
            if "result" in response_json:
                return response_json["result"]
            raise ProviderError(
                InvalidResponse(f"`result` is not present in the response: {response_json}")
            )

        raise ProviderError(HTTPError(status, response.content.decode()))
