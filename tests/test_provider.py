import pytest

from ethcall import InvalidResponse, ProviderError, RPCError, Unreachable

from .provider import MockProvider


def test_provider_error() -> None:
    error = ProviderError(error=Unreachable("the server is unreachable"))
    assert str(error) == "Provider error: the server is unreachable"


def test_rpc_error() -> None:
    error = RPCError.from_json({"code": -32000, "message": "execution reverted"})
    assert error == RPCError(code=-32000, message="execution reverted")
    assert str(error) == "RPC error -32000: execution reverted"

    error = RPCError.from_json({"code": 3, "message": "reverted", "data": "0x1234"})
    assert error.data == "0x1234"
    assert str(error) == "RPC error 3: reverted (data: 0x1234)"

    with pytest.raises(InvalidResponse, match="RPC error must be a dictionary, got: 1"):
        RPCError.from_json(1)

    with pytest.raises(InvalidResponse, match="Failed to parse an error response"):
        RPCError.from_json({"code": "x", "message": "reverted"})

    with pytest.raises(InvalidResponse, match="Failed to parse an error response"):
        RPCError.from_json({"code": True, "message": "reverted"})


async def test_mock_provider() -> None:
    provider = MockProvider({"eth_chainId": "0x1", "eth_call": ProviderError(Unreachable("x"))})
    async with provider.session() as session:
        assert await session.rpc("eth_chainId") == "0x1"
        with pytest.raises(ProviderError):
            await session.rpc("eth_call", {"to": "0x0"}, "latest")
    assert provider.requests == [
        ("eth_chainId", ()),
        ("eth_call", ({"to": "0x0"}, "latest")),
    ]
