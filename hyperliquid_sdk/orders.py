"""Order, cancel, modify and builder request types in client and wire form."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from .errors import AssetNotFoundError, GenericParseError
from .helpers import float_to_string_for_hashing, uuid_to_hex_string


def _asset_index(coin_to_asset: Mapping[str, int], asset: str) -> int:
    try:
        return coin_to_asset[asset]
    except KeyError:
        raise AssetNotFoundError() from None


@dataclass(frozen=True)
class Limit:
    """Wire form of a limit order type."""

    tif: str

    def to_wire(self) -> dict:
        return {"limit": {"tif": self.tif}}


@dataclass(frozen=True)
class Trigger:
    """Wire form of a trigger (take-profit / stop-loss) order type."""

    is_market: bool
    trigger_px: str
    tpsl: str

    def to_wire(self) -> dict:
        return {
            "trigger": {
                "isMarket": self.is_market,
                "triggerPx": self.trigger_px,
                "tpsl": self.tpsl,
            }
        }


OrderType = Union[Limit, Trigger]


def _require(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    raise GenericParseError(f"missing field `{keys[0]}`")


def _order_type_from_wire(value: Any) -> OrderType:
    if not isinstance(value, Mapping) or len(value) != 1:
        raise GenericParseError(f"invalid order type: {value!r}")
    ((tag, body),) = value.items()
    if not isinstance(body, Mapping):
        raise GenericParseError(f"invalid order type body: {body!r}")
    if tag == "limit":
        return Limit(tif=_require(body, "tif"))
    if tag == "trigger":
        return Trigger(
            is_market=_require(body, "isMarket"),
            trigger_px=_require(body, "triggerPx"),
            tpsl=_require(body, "tpsl"),
        )
    raise GenericParseError(f"unknown order type `{tag}`")


@dataclass(frozen=True)
class OrderRequest:
    """An order as it is sent to the exchange."""

    asset: int
    is_buy: bool
    limit_px: str
    sz: str
    reduce_only: bool
    order_type: OrderType
    cloid: Optional[str] = None

    def to_wire(self) -> dict:
        wire = {
            "a": self.asset,
            "b": self.is_buy,
            "p": self.limit_px,
            "s": self.sz,
            "r": self.reduce_only,
            "t": self.order_type.to_wire(),
        }
        if self.cloid is not None:
            wire["c"] = self.cloid
        return wire

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> "OrderRequest":
        if not isinstance(data, Mapping):
            raise GenericParseError(f"expected an object, got {data!r}")
        reduce_only = data.get("r", data.get("reduceOnly", False))
        cloid = data.get("c", data.get("cloid"))
        return cls(
            asset=_require(data, "a", "asset"),
            is_buy=_require(data, "b", "isBuy"),
            limit_px=_require(data, "p", "limitPx"),
            sz=_require(data, "s", "sz"),
            reduce_only=reduce_only,
            order_type=_order_type_from_wire(_require(data, "t", "orderType")),
            cloid=cloid,
        )


@dataclass
class ClientLimit:
    tif: str


@dataclass
class ClientTrigger:
    is_market: bool
    trigger_px: float
    tpsl: str


ClientOrderType = Union[ClientLimit, ClientTrigger]


@dataclass
class ClientOrderRequest:
    """An order as a caller describes it: coin name and float prices."""

    asset: str
    is_buy: bool
    reduce_only: bool
    limit_px: float
    sz: float
    order_type: ClientOrderType
    cloid: Optional[uuid.UUID] = None

    def convert(self, coin_to_asset: Mapping[str, int]) -> OrderRequest:
        if isinstance(self.order_type, ClientTrigger):
            order_type: OrderType = Trigger(
                is_market=self.order_type.is_market,
                trigger_px=float_to_string_for_hashing(self.order_type.trigger_px),
                tpsl=self.order_type.tpsl,
            )
        else:
            order_type = Limit(tif=self.order_type.tif)
        asset = _asset_index(coin_to_asset, self.asset)
        cloid = uuid_to_hex_string(self.cloid) if self.cloid is not None else None
        return OrderRequest(
            asset=asset,
            is_buy=self.is_buy,
            limit_px=float_to_string_for_hashing(self.limit_px),
            sz=float_to_string_for_hashing(self.sz),
            reduce_only=self.reduce_only,
            order_type=order_type,
            cloid=cloid,
        )


@dataclass
class MarketOrderParams:
    asset: str
    is_buy: bool
    sz: float
    px: Optional[float] = None
    slippage: Optional[float] = None
    cloid: Optional[uuid.UUID] = None
    wallet: Any = None


@dataclass
class MarketCloseParams:
    asset: str
    sz: Optional[float] = None
    px: Optional[float] = None
    slippage: Optional[float] = None
    cloid: Optional[uuid.UUID] = None
    wallet: Any = None


@dataclass(frozen=True)
class CancelRequest:
    asset: int
    oid: int

    def to_wire(self) -> dict:
        return {"a": self.asset, "o": self.oid}


@dataclass
class ClientCancelRequest:
    asset: str
    oid: int

    def convert(self, coin_to_asset: Mapping[str, int]) -> CancelRequest:
        return CancelRequest(asset=_asset_index(coin_to_asset, self.asset), oid=self.oid)


@dataclass(frozen=True)
class CancelRequestCloid:
    asset: int
    cloid: str

    def to_wire(self) -> dict:
        return {"asset": self.asset, "cloid": self.cloid}


@dataclass
class ClientCancelRequestCloid:
    asset: str
    cloid: uuid.UUID

    def convert(self, coin_to_asset: Mapping[str, int]) -> CancelRequestCloid:
        return CancelRequestCloid(
            asset=_asset_index(coin_to_asset, self.asset),
            cloid=uuid_to_hex_string(self.cloid),
        )


@dataclass(frozen=True)
class ModifyRequest:
    oid: int
    order: OrderRequest

    def to_wire(self) -> dict:
        return {"oid": self.oid, "order": self.order.to_wire()}


@dataclass
class ClientModifyRequest:
    oid: int
    order: ClientOrderRequest

    def convert(self, coin_to_asset: Mapping[str, int]) -> ModifyRequest:
        return ModifyRequest(oid=self.oid, order=self.order.convert(coin_to_asset))


@dataclass(frozen=True)
class BuilderInfo:
    """Builder address and fee attached to an order batch."""

    builder: str = ""
    fee: int = 0

    def to_wire(self) -> dict:
        return {"b": self.builder, "f": self.fee}