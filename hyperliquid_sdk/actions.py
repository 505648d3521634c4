"""Exchange actions, their wire form and EIP-712 hashing for user-signed ones."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Sequence, Tuple, Union

from Crypto.Hash import keccak

from .errors import Eip712Error, GenericParseError
from .orders import BuilderInfo, CancelRequest, CancelRequestCloid, ModifyRequest, OrderRequest

HYPERLIQUID_EIP_PREFIX = "HyperliquidTransaction:"
SIGNATURE_CHAIN_ID = 421614

_DOMAIN_NAME = "HyperliquidSignTransaction"
_DOMAIN_VERSION = "1"
_ZERO_ADDRESS = bytes(20)

_Fields = Tuple[Tuple[str, str, str], ...]


def _keccak256(data: bytes) -> bytes:
    return keccak.new(digest_bits=256, data=data).digest()


_DOMAIN_TYPE_HASH = _keccak256(
    b"EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)"
)


def _address_bytes(value: Union[str, bytes]) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 20:
            raise GenericParseError(f"invalid address length: {len(value)}")
        return bytes(value)
    text = value[2:] if value[:2] in ("0x", "0X") else value
    if len(text) != 40:
        raise GenericParseError(f"invalid address: {value!r}")
    try:
        return bytes.fromhex(text)
    except ValueError:
        raise GenericParseError(f"invalid address: {value!r}") from None


def _normalize_address(value: Union[str, bytes]) -> str:
    return "0x" + _address_bytes(value).hex()


def _encode_uint(value: int, bits: int) -> bytes:
    if isinstance(value, bool) or not isinstance(value, int):
        raise Eip712Error(f"expected an integer, got {value!r}")
    if not 0 <= value < 2**bits:
        raise Eip712Error(f"value {value} does not fit in uint{bits}")
    return value.to_bytes(32, "big")


def _encode_string(value: Optional[str]) -> bytes:
    return _keccak256((value or "").encode("utf-8"))


def _encode_address(value: Union[str, bytes]) -> bytes:
    return bytes(12) + _address_bytes(value)


def _encode_field(solidity_type: str, value: Any) -> bytes:
    if solidity_type == "string":
        return _encode_string(value)
    if solidity_type == "address":
        return _encode_address(value)
    if solidity_type.startswith("uint"):
        return _encode_uint(value, int(solidity_type[4:]))
    raise Eip712Error(f"unsupported type {solidity_type}")


def eip712_domain_separator(chain_id: int) -> bytes:
    """Hash of the signing domain used for user-signed actions."""
    return _keccak256(
        _DOMAIN_TYPE_HASH
        + _encode_string(_DOMAIN_NAME)
        + _encode_string(_DOMAIN_VERSION)
        + _encode_uint(chain_id, 256)
        + _encode_address(_ZERO_ADDRESS)
    )


def eip712_signing_hash(chain_id: int, struct_hash: bytes) -> bytes:
    """The digest a wallet signs for a typed-data struct under the domain."""
    if len(struct_hash) != 32:
        raise Eip712Error(f"struct hash must be 32 bytes, got {len(struct_hash)}")
    return _keccak256(b"\x19\x01" + eip712_domain_separator(chain_id) + bytes(struct_hash))


def _typed_struct_hash(primary_type: str, fields: _Fields, obj: Any) -> bytes:
    # fields: (EIP-712 field name, solidity type, attribute name)
    members = ",".join(f"{sol} {name}" for name, sol, _ in fields)
    type_hash = _keccak256(f"{HYPERLIQUID_EIP_PREFIX}{primary_type}({members})".encode())
    encoded = b"".join(_encode_field(sol, getattr(obj, attr)) for _, sol, attr in fields)
    return _keccak256(type_hash + encoded)


@dataclass(frozen=True)
class UsdSend:
    hyperliquid_chain: str
    destination: str
    amount: str
    time: int
    signature_chain_id: int = SIGNATURE_CHAIN_ID

    _FIELDS: ClassVar[_Fields] = (
        ("hyperliquidChain", "string", "hyperliquid_chain"),
        ("destination", "string", "destination"),
        ("amount", "string", "amount"),
        ("time", "uint64", "time"),
    )

    def struct_hash(self) -> bytes:
        """EIP-712 hash of this struct's fields."""
        return _typed_struct_hash("UsdSend", self._FIELDS, self)

    def signing_hash(self) -> bytes:
        """Digest to sign, bound to the struct's signature chain id."""
        return eip712_signing_hash(self.signature_chain_id, self.struct_hash())

    def to_wire(self) -> dict:
        return {
            "type": "usdSend",
            "signatureChainId": hex(self.signature_chain_id),
            "hyperliquidChain": self.hyperliquid_chain,
            "destination": self.destination,
            "amount": self.amount,
            "time": self.time,
        }


@dataclass(frozen=True)
class UpdateLeverage:
    asset: int
    is_cross: bool
    leverage: int

    def to_wire(self) -> dict:
        return {
            "type": "updateLeverage",
            "asset": self.asset,
            "isCross": self.is_cross,
            "leverage": self.leverage,
        }


@dataclass(frozen=True)
class UpdateIsolatedMargin:
    asset: int
    is_buy: bool
    ntli: int

    def to_wire(self) -> dict:
        return {
            "type": "updateIsolatedMargin",
            "asset": self.asset,
            "isBuy": self.is_buy,
            "ntli": self.ntli,
        }


@dataclass(frozen=True)
class BulkOrder:
    orders: Sequence[OrderRequest]
    grouping: str = "na"
    builder: Optional[BuilderInfo] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "orders", tuple(self.orders))

    def to_wire(self) -> dict:
        wire: dict = {
            "type": "order",
            "orders": [order.to_wire() for order in self.orders],
            "grouping": self.grouping,
        }
        if self.builder is not None:
            wire["builder"] = self.builder.to_wire()
        return wire


@dataclass(frozen=True)
class BulkCancel:
    cancels: Sequence[CancelRequest]

    def __post_init__(self) -> None:
        object.__setattr__(self, "cancels", tuple(self.cancels))

    def to_wire(self) -> dict:
        return {"type": "cancel", "cancels": [c.to_wire() for c in self.cancels]}


@dataclass(frozen=True)
class BulkModify:
    modifies: Sequence[ModifyRequest]

    def __post_init__(self) -> None:
        object.__setattr__(self, "modifies", tuple(self.modifies))

    def to_wire(self) -> dict:
        return {"type": "batchModify", "modifies": [m.to_wire() for m in self.modifies]}


@dataclass(frozen=True)
class BulkCancelCloid:
    cancels: Sequence[CancelRequestCloid]

    def __post_init__(self) -> None:
        object.__setattr__(self, "cancels", tuple(self.cancels))

    def to_wire(self) -> dict:
        return {"type": "cancelByCloid", "cancels": [c.to_wire() for c in self.cancels]}


@dataclass(frozen=True)
class ApproveAgent:
    hyperliquid_chain: str
    agent_address: str
    nonce: int
    agent_name: Optional[str] = None
    signature_chain_id: int = SIGNATURE_CHAIN_ID

    _FIELDS: ClassVar[_Fields] = (
        ("hyperliquidChain", "string", "hyperliquid_chain"),
        ("agentAddress", "address", "agent_address"),
        ("agentName", "string", "agent_name"),
        ("nonce", "uint64", "nonce"),
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "agent_address", _normalize_address(self.agent_address))

    def struct_hash(self) -> bytes:
        """EIP-712 hash of this struct's fields."""
        return _typed_struct_hash("ApproveAgent", self._FIELDS, self)

    def signing_hash(self) -> bytes:
        """Digest to sign, bound to the struct's signature chain id."""
        return eip712_signing_hash(self.signature_chain_id, self.struct_hash())

    def to_wire(self) -> dict:
        return {
            "type": "approveAgent",
            "signatureChainId": hex(self.signature_chain_id),
            "hyperliquidChain": self.hyperliquid_chain,
            "agentAddress": self.agent_address,
            "agentName": self.agent_name,
            "nonce": self.nonce,
        }


@dataclass(frozen=True)
class Withdraw3:
    hyperliquid_chain: str
    amount: str
    time: int
    destination: str
    signature_chain_id: int = SIGNATURE_CHAIN_ID

    _FIELDS: ClassVar[_Fields] = (
        ("hyperliquidChain", "string", "hyperliquid_chain"),
        ("destination", "string", "destination"),
        ("amount", "string", "amount"),
        ("time", "uint64", "time"),
    )

    def struct_hash(self) -> bytes:
        """EIP-712 hash of this struct's fields."""
        return _typed_struct_hash("Withdraw", self._FIELDS, self)

    def signing_hash(self) -> bytes:
        """Digest to sign, bound to the struct's signature chain id."""
        return eip712_signing_hash(self.signature_chain_id, self.struct_hash())

    def to_wire(self) -> dict:
        return {
            "type": "withdraw3",
            "hyperliquidChain": self.hyperliquid_chain,
            "signatureChainId": hex(self.signature_chain_id),
            "amount": self.amount,
            "time": self.time,
            "destination": self.destination,
        }


@dataclass(frozen=True)
class SpotSend:
    hyperliquid_chain: str
    destination: str
    token: str
    amount: str
    time: int
    signature_chain_id: int = SIGNATURE_CHAIN_ID

    _FIELDS: ClassVar[_Fields] = (
        ("hyperliquidChain", "string", "hyperliquid_chain"),
        ("destination", "string", "destination"),
        ("token", "string", "token"),
        ("amount", "string", "amount"),
        ("time", "uint64", "time"),
    )

    def struct_hash(self) -> bytes:
        """EIP-712 hash of this struct's fields."""
        return _typed_struct_hash("SpotSend", self._FIELDS, self)

    def signing_hash(self) -> bytes:
        """Digest to sign, bound to the struct's signature chain id."""
        return eip712_signing_hash(self.signature_chain_id, self.struct_hash())

    def to_wire(self) -> dict:
        return {
            "type": "spotSend",
            "hyperliquidChain": self.hyperliquid_chain,
            "signatureChainId": hex(self.signature_chain_id),
            "destination": self.destination,
            "token": self.token,
            "amount": self.amount,
            "time": self.time,
        }


@dataclass(frozen=True)
class ClassTransfer:
    """Move USDC (in micro-units) between the spot and perp accounts."""

    usdc: int
    to_perp: bool

    def to_wire(self) -> dict:
        return {"usdc": self.usdc, "toPerp": self.to_perp}


@dataclass(frozen=True)
class SpotUser:
    class_transfer: ClassTransfer

    def to_wire(self) -> dict:
        return {"type": "spotUser", "classTransfer": self.class_transfer.to_wire()}


@dataclass(frozen=True)
class VaultTransfer:
    vault_address: str
    is_deposit: bool
    usd: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "vault_address", _normalize_address(self.vault_address))

    def to_wire(self) -> dict:
        return {
            "type": "vaultTransfer",
            "vaultAddress": self.vault_address,
            "isDeposit": self.is_deposit,
            "usd": self.usd,
        }


@dataclass(frozen=True)
class SetReferrer:
    code: str

    def to_wire(self) -> dict:
        return {"type": "setReferrer", "code": self.code}


@dataclass(frozen=True)
class ApproveBuilderFee:
    max_fee_rate: str
    builder: str
    nonce: int
    hyperliquid_chain: str
    signature_chain_id: int = SIGNATURE_CHAIN_ID

    def to_wire(self) -> dict:
        return {
            "type": "approveBuilderFee",
            "maxFeeRate": self.max_fee_rate,
            "builder": self.builder,
            "nonce": self.nonce,
            "signatureChainId": hex(self.signature_chain_id),
            "hyperliquidChain": self.hyperliquid_chain,
        }