import json
import logging
from collections.abc import AsyncIterator, Mapping, Sequence
from contextlib import asynccontextmanager
from typing import Any

from ._contract_abi import Call, EventFilterTopics
from ._entities import Address, BlockLabel, LogItem
from ._provider import RPC_JSON, Provider, ProviderSession
from ._serialization import structure, unstructure

logger = logging.getLogger(__name__)

# The domain type assumed by wallets for `eth_signTypedData_v4` requests.
EIP712_DOMAIN_FIELDS = [
    {"name": "name", "type": "string"},
    {"name": "version", "type": "string"},
    {"name": "chainId", "type": "uint256"},
    {"name": "verifyingContract", "type": "address"},
]

InputBlock = int | BlockLabel


class Chain:
    """An Ethereum RPC client."""

    def __init__(self, provider: Provider):
        self._provider = provider
        self._chain_id: None | int = None

    @asynccontextmanager
    async def session(self) -> AsyncIterator["ChainSession"]:
        """Opens a session to the client allowing the backend to optimize sequential requests."""
        async with self._provider.session() as provider_session:
            yield ChainSession(self, provider_session)


class ChainSession:
    """
    An open session to the provider.

    Methods returning block, transaction or receipt data return the raw JSON values.
    """

    def __init__(self, chain: Chain, provider_session: ProviderSession):
        self._chain = chain
        self._provider_session = provider_session

    async def rpc(self, method: str, params: Sequence[RPC_JSON]) -> RPC_JSON:
        """Calls the given RPC method with the already json-ified parameters."""
        if isinstance(params, str | bytes) or not isinstance(params, Sequence):
            raise TypeError(f"RPC parameters must be a sequence, got {type(params).__name__}")
        logger.debug("Calling %s", method)
        return await self._provider_session.rpc(method, *params)

    async def chain_id(self) -> int:
        """Calls the ``eth_chainId`` RPC method (the result is cached on the client)."""
        if self._chain._chain_id is None:  # noqa: SLF001
            result = await self.rpc("eth_chainId", [])
            self._chain._chain_id = structure(int, result)  # noqa: SLF001
        return self._chain._chain_id  # noqa: SLF001

    async def block_number(self) -> int:
        """Calls the ``eth_blockNumber`` RPC method."""
        result = await self.rpc("eth_blockNumber", [])
        return structure(int, result)

    async def get_block_by_hash(
        self, block_hash: str, *, with_transactions: bool = False
    ) -> RPC_JSON:
        """Calls the ``eth_getBlockByHash`` RPC method."""
        return await self.rpc("eth_getBlockByHash", [block_hash, with_transactions])

    async def get_block_by_number(
        self, block: InputBlock = BlockLabel.LATEST, *, with_transactions: bool = False
    ) -> RPC_JSON:
        """Calls the ``eth_getBlockByNumber`` RPC method."""
        return await self.rpc("eth_getBlockByNumber", [unstructure(block), with_transactions])

    async def accounts(self) -> list[Address]:
        """Calls the ``eth_accounts`` RPC method."""
        result = await self.rpc("eth_accounts", [])
        return structure(list[Address], result)

    async def get_balance(self, address: str, block: InputBlock = BlockLabel.LATEST) -> int:
        """Calls the ``eth_getBalance`` RPC method and returns the balance in wei."""
        result = await self.rpc(
            "eth_getBalance", [unstructure(Address(address)), unstructure(block)]
        )
        return structure(int, result)

    async def get_transaction(self, block_hash: str, transaction_index: int) -> RPC_JSON:
        """Calls the ``eth_getTransactionByBlockHashAndIndex`` RPC method."""
        return await self.rpc(
            "eth_getTransactionByBlockHashAndIndex", [block_hash, unstructure(transaction_index)]
        )

    async def get_transaction_receipt(self, tx_hash: str) -> RPC_JSON:
        """
        Calls the ``eth_getTransactionReceipt`` RPC method.
        Returns ``None`` if the transaction is not mined yet.
        """
        return await self.rpc("eth_getTransactionReceipt", [tx_hash])

    async def get_logs(
        self,
        topics: EventFilterTopics,
        from_block: InputBlock = BlockLabel.LATEST,
        to_block: InputBlock = BlockLabel.LATEST,
        address: None | str = None,
    ) -> list[LogItem]:
        """
        Calls the ``eth_getLogs`` RPC method.
        ``topics`` is the list produced by calling an :py:class:`~ethcall.EventType`.
        """
        params = {
            "fromBlock": unstructure(from_block),
            "toBlock": unstructure(to_block),
            "address": None if address is None else unstructure(Address(address)),
            "topics": topics,
        }
        result = await self.rpc("eth_getLogs", [params])
        return structure(list[LogItem], result)

    async def call(
        self, to: str, call: Call | str, block: InputBlock = BlockLabel.LATEST
    ) -> Any:
        """
        Calls the ``eth_call`` RPC method.
        If ``call`` is a :py:class:`~ethcall.Call`, the result is decoded,
        otherwise ``call`` is treated as raw call data and the raw result is returned.
        """
        data = call.data if isinstance(call, Call) else call
        params = {"to": unstructure(Address(to)), "data": data}
        result = await self.rpc("eth_call", [params, unstructure(block)])
        if isinstance(call, Call):
            if not isinstance(result, str):
                raise TypeError(f"Expected a hex string from `eth_call`, got {result!r}")
            return call.decode(result)
        return result

    async def transact(
        self,
        to: str,
        data: Call | str,
        *,
        from_: None | str = None,
        value: int = 0,
        gas: None | int = None,
        gas_price: None | int = None,
    ) -> str:
        """
        Calls the ``eth_sendTransaction`` RPC method (the node or the wallet signs it)
        and returns the transaction hash.
        """
        params: dict[str, RPC_JSON] = {
            "to": unstructure(Address(to)),
            "data": data.data if isinstance(data, Call) else data,
            "value": unstructure(value),
        }
        if from_ is not None:
            params["from"] = unstructure(Address(from_))
        if gas is not None:
            params["gas"] = unstructure(gas)
        if gas_price is not None:
            params["gasPrice"] = unstructure(gas_price)
        result = await self.rpc("eth_sendTransaction", [params])
        return structure(str, result)

    async def signed_typed_data_v4(
        self,
        account: str,
        domain: Mapping[str, Any],
        types: Mapping[str, Any],
        message: Mapping[str, Any],
        primary_type: str,
    ) -> str:
        """
        Asks the wallet behind the provider to sign the EIP-712 typed data
        with the given account (via ``eth_signTypedData_v4``) and returns the signature.
        """
        request = {
            "domain": dict(domain),
            "types": {"EIP712Domain": EIP712_DOMAIN_FIELDS, **types},
            "message": dict(message),
            "primaryType": primary_type,
        }
        result = await self.rpc(
            "eth_signTypedData_v4", [unstructure(Address(account)), json.dumps(request)]
        )
        return structure(str, result)
