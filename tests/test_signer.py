from typing import Any

from eth_account import Account

from ethcall import AccountSigner, Address, verify_typed_data


def check_signer(
    signer: AccountSigner,
    domain: dict[str, Any],
    types: dict[str, Any],
    message: dict[str, Any],
) -> None:
    signature = signer.sign_typed_data(domain, types, message)
    assert isinstance(signature, str)
    # 0x + r (32 bytes) + s (32 bytes) + v (1 byte)
    assert len(signature) == 2 + 65 * 2
    assert signature[-2:] in ("1b", "1c")
    assert verify_typed_data(domain, types, message, signature) == signer.address


def test_signer(
    mail_domain: dict[str, Any], mail_types: dict[str, Any], mail_message: dict[str, Any]
) -> None:
    acc = Account.create()
    signer = AccountSigner(acc)

    assert signer.address == Address(acc.address)
    assert signer.address == acc.address.lower()
    assert signer.account == acc
    assert signer.private_key == bytes(acc.key)

    check_signer(signer, mail_domain, mail_types, mail_message)


def test_random_signer(
    another_signer: AccountSigner,
    mail_domain: dict[str, Any],
    mail_types: dict[str, Any],
    mail_message: dict[str, Any],
) -> None:
    check_signer(another_signer, mail_domain, mail_types, mail_message)
    assert AccountSigner.create().address != another_signer.address
