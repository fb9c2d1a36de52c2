from eth_utils import keccak

from ethcall import canonical_signature, event_topic0, method_selector


def test_canonical_signature() -> None:
    assert canonical_signature("transfer", ["address", "uint256"]) == "transfer(address,uint256)"
    assert canonical_signature("name", []) == "name()"
    assert canonical_signature("f", ("uint8[]", "string")) == "f(uint8[],string)"


def test_method_selector() -> None:
    assert method_selector("transfer(address,uint256)") == "0xa9059cbb"
    assert method_selector("balanceOf(address)") == "0x70a08231"
    assert method_selector("approve(address,uint256)") == "0x095ea7b3"

    selector = method_selector("someMethod(bool,address[])")
    assert len(selector) == 2 + 4 * 2
    assert selector == "0x" + keccak(text="someMethod(bool,address[])")[:4].hex()


def test_event_topic0() -> None:
    assert event_topic0("Transfer(address,address,uint256)") == (
        "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
    )
    assert event_topic0("Approval(address,address,uint256)") == (
        "0x8c5be1e5ebec7d5bd14f71427d1e84f3dd0314c0f7b2291e5b200ac8c7c3b925"
    )

    topic = event_topic0("Deposit(uint256)")
    assert len(topic) == 2 + 32 * 2
    # The selector is the prefix of the full hash
    assert topic.startswith(method_selector("Deposit(uint256)"))
