"""Declarations of standard token contract interfaces."""

from . import abi
from ._contract_abi import EventType, Method, View


class ERC20:
    """
    Fungible token standard.

    https://eips.ethereum.org/EIPS/eip-20
    """

    name = View("name", {}, {"name": abi.string})
    symbol = View("symbol", {}, {"symbol": abi.string})
    decimals = View("decimals", {}, {"decimals": abi.uint(8)})
    totalSupply = View("totalSupply", {}, {"totalSupply": abi.uint()})
    balanceOf = View("balanceOf", {"owner": abi.address}, {"balance": abi.uint()})
    allowance = View(
        "allowance", {"owner": abi.address, "spender": abi.address}, {"allowance": abi.uint()}
    )

    approve = Method("approve", {"spender": abi.address, "value": abi.uint()})
    transfer = Method("transfer", {"to": abi.address, "value": abi.uint()})
    transferFrom = Method(
        "transferFrom", {"from": abi.address, "to": abi.address, "value": abi.uint()}
    )

    Transfer = EventType(
        "Transfer", {"from": abi.address, "to": abi.address, "value": abi.uint()}, ["from", "to"]
    )
    Approval = EventType(
        "Approval",
        {"owner": abi.address, "spender": abi.address, "value": abi.uint()},
        ["owner", "spender"],
    )


class ERC1155:
    """
    Multi-token standard.

    https://eips.ethereum.org/EIPS/eip-1155
    """

    balanceOf = View(
        "balanceOf", {"account": abi.address, "id": abi.uint()}, {"balance": abi.uint()}
    )
    balanceOfBatch = View(
        "balanceOfBatch",
        {"accounts": abi.array(abi.address), "ids": abi.array(abi.uint())},
        {"balances": abi.array(abi.uint())},
    )

    setApprovalForAll = Method(
        "setApprovalForAll", {"operator": abi.address, "approved": abi.bool}
    )

    TransferSingle = EventType(
        "TransferSingle",
        {
            "operator": abi.address,
            "from": abi.address,
            "to": abi.address,
            "id": abi.uint(),
            "value": abi.uint(),
        },
        ["operator", "from", "to"],
    )
    TransferBatch = EventType(
        "TransferBatch",
        {
            "operator": abi.address,
            "from": abi.address,
            "to": abi.address,
            "ids": abi.array(abi.uint()),
            "values": abi.array(abi.uint()),
        },
        ["operator", "from", "to"],
    )
    ApprovalForAll = EventType(
        "ApprovalForAll",
        {"account": abi.address, "operator": abi.address, "approved": abi.bool},
        ["account", "operator"],
    )
