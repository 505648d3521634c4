"""Price and size rounding used when building market orders and transfers."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

from .errors import GenericParseError

DEFAULT_SLIPPAGE = 0.05
PERP_MAX_DECIMALS = 6
SPOT_MAX_DECIMALS = 8
SPOT_ASSET_OFFSET = 10_000
PRICE_SIG_FIGS = 5

_U64_MAX = 2**64 - 1
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


def _round_half_away(value: float) -> float:
    """Round to the nearest integer, ties away from zero, exactly."""
    if not math.isfinite(value):
        return value
    rounded = Decimal(value).to_integral_value(rounding=ROUND_HALF_UP)
    return math.copysign(float(rounded), value)


def _saturate(value: float, lower: int, upper: int) -> int:
    if math.isnan(value):
        return 0
    if value <= lower:
        return lower
    if value >= upper:
        return upper
    return int(value)


def round_to_decimals(value: float, decimals: int) -> float:
    """Round ``value`` to ``decimals`` places, ties away from zero."""
    factor = 10.0**decimals
    return _round_half_away(value * factor) / factor


def round_to_significant_and_decimal(value: float, sig_figs: int, max_decimals: int) -> float:
    """Round to ``sig_figs`` significant figures, then to at most ``max_decimals`` places."""
    if not math.isfinite(value):
        raise GenericParseError(f"cannot round non-finite price {value!r}")
    abs_value = abs(value)
    if abs_value == 0.0:
        return 0.0
    magnitude = math.floor(math.log10(abs_value))
    scale = 10.0 ** (sig_figs - magnitude - 1)
    rounded = _round_half_away(abs_value * scale) / scale
    return round_to_decimals(math.copysign(rounded, value), max_decimals)


def slippage_price(
    mid_px: float,
    is_buy: bool,
    slippage: float,
    asset_index: int,
    sz_decimals: int,
) -> float:
    """Limit price for an aggressive order: the mid moved by ``slippage``, then rounded.

    Perp assets allow six price decimals, spot assets (index 10000 and up) eight,
    minus the asset's size decimals, and at most five significant figures.
    """
    max_decimals = PERP_MAX_DECIMALS if asset_index < SPOT_ASSET_OFFSET else SPOT_MAX_DECIMALS
    price_decimals = max(max_decimals - sz_decimals, 0)
    factor = 1.0 + slippage if is_buy else 1.0 - slippage
    return round_to_significant_and_decimal(mid_px * factor, PRICE_SIG_FIGS, price_decimals)


def usdc_to_wire(amount: float) -> int:
    """USDC amount in micro-units as an unsigned integer, as class transfers expect."""
    return _saturate(_round_half_away(amount * 1e6), 0, _U64_MAX)


def margin_to_wire(amount: float) -> int:
    """Signed margin change in micro-units, as isolated-margin updates expect."""
    return _saturate(_round_half_away(amount * 1_000_000.0), _I64_MIN, _I64_MAX)