import pytest

from hyperliquid_sdk.actions import (
    ApproveAgent,
    ApproveBuilderFee,
    BulkCancel,
    BulkCancelCloid,
    BulkModify,
    BulkOrder,
    ClassTransfer,
    SetReferrer,
    SpotSend,
    SpotUser,
    UpdateIsolatedMargin,
    UpdateLeverage,
    UsdSend,
    VaultTransfer,
    Withdraw3,
    eip712_domain_separator,
    eip712_signing_hash,
)
from hyperliquid_sdk.errors import Eip712Error, GenericParseError
from hyperliquid_sdk.orders import (
    BuilderInfo,
    CancelRequest,
    CancelRequestCloid,
    Limit,
    ModifyRequest,
    OrderRequest,
)

DESTINATION = "0x0D1d9635D0640821d15e323ac8AdADfA9c111414"
VAULT = "0x1962905b0a2d0ce7907ae1a0d17f3e4a1f63dfb7"


def _order():
    return OrderRequest(
        asset=1,
        is_buy=True,
        limit_px="2000.0",
        sz="3.5",
        reduce_only=False,
        order_type=Limit(tif="Ioc"),
    )


def test_usd_send_wire_order_and_chain_id():
    action = UsdSend(hyperliquid_chain="Testnet", destination=DESTINATION, amount="1", time=5)
    wire = action.to_wire()
    assert list(wire) == [
        "type",
        "signatureChainId",
        "hyperliquidChain",
        "destination",
        "amount",
        "time",
    ]
    assert wire["type"] == "usdSend"
    assert wire["signatureChainId"] == "0x66eee"
    assert wire["destination"] == DESTINATION


def test_withdraw_and_spot_send_wire_order():
    withdraw = Withdraw3(hyperliquid_chain="Mainnet", amount="5", time=7, destination=DESTINATION)
    assert list(withdraw.to_wire()) == [
        "type",
        "hyperliquidChain",
        "signatureChainId",
        "amount",
        "time",
        "destination",
    ]
    assert withdraw.to_wire()["type"] == "withdraw3"
    spot = SpotSend(
        hyperliquid_chain="Mainnet", destination=DESTINATION, token="PURR", amount="2", time=9
    )
    assert list(spot.to_wire()) == [
        "type",
        "hyperliquidChain",
        "signatureChainId",
        "destination",
        "token",
        "amount",
        "time",
    ]


def test_struct_hash_is_32_bytes_and_depends_on_fields():
    base = UsdSend(hyperliquid_chain="Testnet", destination=DESTINATION, amount="1", time=5)
    other = UsdSend(hyperliquid_chain="Testnet", destination=DESTINATION, amount="2", time=5)
    assert len(base.struct_hash()) == 32
    assert base.struct_hash() == UsdSend(
        hyperliquid_chain="Testnet", destination=DESTINATION, amount="1", time=5
    ).struct_hash()
    assert base.struct_hash() != other.struct_hash()


def test_type_name_changes_struct_hash():
    send = UsdSend(hyperliquid_chain="Testnet", destination=DESTINATION, amount="1", time=5)
    withdraw = Withdraw3(hyperliquid_chain="Testnet", amount="1", time=5, destination=DESTINATION)
    assert send.struct_hash() != withdraw.struct_hash()


def test_signature_chain_id_does_not_enter_struct_hash():
    a = UsdSend(hyperliquid_chain="Testnet", destination=DESTINATION, amount="1", time=5)
    b = UsdSend(
        hyperliquid_chain="Testnet",
        destination=DESTINATION,
        amount="1",
        time=5,
        signature_chain_id=1,
    )
    assert a.struct_hash() == b.struct_hash()
    assert a.signing_hash() != b.signing_hash()


def test_signing_hash_composes_domain_and_struct():
    spot = SpotSend(
        hyperliquid_chain="Testnet", destination=DESTINATION, token="PURR", amount="2", time=9
    )
    assert spot.signing_hash() == eip712_signing_hash(421614, spot.struct_hash())
    assert len(spot.signing_hash()) == 32


def test_domain_separator_depends_on_chain_id():
    assert eip712_domain_separator(421614) == eip712_domain_separator(421614)
    assert eip712_domain_separator(421614) != eip712_domain_separator(1)
    assert len(eip712_domain_separator(1)) == 32


def test_signing_hash_rejects_short_struct_hash():
    with pytest.raises(Eip712Error):
        eip712_signing_hash(1, b"\x00" * 31)


def test_approve_agent_wire_and_default_name():
    agent = ApproveAgent(hyperliquid_chain="Testnet", agent_address=DESTINATION, nonce=3)
    wire = agent.to_wire()
    assert wire["agentAddress"] == DESTINATION.lower()
    assert wire["agentName"] is None
    assert wire["type"] == "approveAgent"
    named_empty = ApproveAgent(
        hyperliquid_chain="Testnet", agent_address=DESTINATION, nonce=3, agent_name=""
    )
    assert agent.struct_hash() == named_empty.struct_hash()


def test_approve_agent_address_case_does_not_matter():
    lower = ApproveAgent(hyperliquid_chain="Testnet", agent_address=DESTINATION.lower(), nonce=3)
    mixed = ApproveAgent(hyperliquid_chain="Testnet", agent_address=DESTINATION, nonce=3)
    assert lower.struct_hash() == mixed.struct_hash()


def test_invalid_address_raises():
    with pytest.raises(GenericParseError):
        ApproveAgent(hyperliquid_chain="Testnet", agent_address="0x1234", nonce=1)
    with pytest.raises(GenericParseError):
        VaultTransfer(vault_address="0x" + "zz" * 20, is_deposit=True, usd=1)


def test_uint64_overflow_raises():
    action = UsdSend(hyperliquid_chain="Testnet", destination=DESTINATION, amount="1", time=2**64)
    with pytest.raises(Eip712Error):
        action.struct_hash()


def test_bulk_order_without_builder_omits_key():
    wire = BulkOrder(orders=[_order()]).to_wire()
    assert list(wire) == ["type", "orders", "grouping"]
    assert wire["grouping"] == "na"
    assert wire["orders"] == [_order().to_wire()]


def test_bulk_order_with_builder():
    builder = BuilderInfo(builder="0xabc", fee=1)
    wire = BulkOrder(orders=[_order()], builder=builder).to_wire()
    assert wire["builder"] == {"b": "0xabc", "f": 1}
    assert list(wire)[-1] == "builder"


def test_bulk_cancel_variants():
    cancel = BulkCancel(cancels=[CancelRequest(asset=1, oid=82382)]).to_wire()
    assert cancel == {"type": "cancel", "cancels": [{"a": 1, "o": 82382}]}
    by_cloid = BulkCancelCloid(cancels=[CancelRequestCloid(asset=2, cloid="0xff")]).to_wire()
    assert by_cloid == {"type": "cancelByCloid", "cancels": [{"asset": 2, "cloid": "0xff"}]}


def test_bulk_modify_wire():
    wire = BulkModify(modifies=[ModifyRequest(oid=9, order=_order())]).to_wire()
    assert wire == {"type": "batchModify", "modifies": [{"oid": 9, "order": _order().to_wire()}]}


def test_leverage_and_margin_wire():
    assert UpdateLeverage(asset=4, is_cross=False, leverage=5).to_wire() == {
        "type": "updateLeverage",
        "asset": 4,
        "isCross": False,
        "leverage": 5,
    }
    assert UpdateIsolatedMargin(asset=4, is_buy=True, ntli=-1000000).to_wire() == {
        "type": "updateIsolatedMargin",
        "asset": 4,
        "isBuy": True,
        "ntli": -1000000,
    }


def test_spot_user_and_vault_and_referrer_wire():
    spot_user = SpotUser(class_transfer=ClassTransfer(usdc=1000000, to_perp=False))
    assert spot_user.to_wire() == {
        "type": "spotUser",
        "classTransfer": {"usdc": 1000000, "toPerp": False},
    }
    vault = VaultTransfer(vault_address=VAULT, is_deposit=True, usd=5_000_000)
    assert vault.to_wire() == {
        "type": "vaultTransfer",
        "vaultAddress": VAULT,
        "isDeposit": True,
        "usd": 5_000_000,
    }
    assert SetReferrer(code="TESTNET").to_wire() == {"type": "setReferrer", "code": "TESTNET"}


def test_approve_builder_fee_wire_order():
    wire = ApproveBuilderFee(
        max_fee_rate="0.1%", builder="0x1ab1", nonce=11, hyperliquid_chain="Testnet"
    ).to_wire()
    assert list(wire) == [
        "type",
        "maxFeeRate",
        "builder",
        "nonce",
        "signatureChainId",
        "hyperliquidChain",
    ]
    assert wire["maxFeeRate"] == "0.1%"
    assert wire["signatureChainId"] == hex(421614)