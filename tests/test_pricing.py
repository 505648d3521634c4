import math

import pytest

from hyperliquid_sdk.errors import GenericParseError
from hyperliquid_sdk.pricing import (
    margin_to_wire,
    round_to_decimals,
    round_to_significant_and_decimal,
    slippage_price,
    usdc_to_wire,
)


@pytest.mark.parametrize("value, decimals", [(1795.0, 1), (0.01, 2), (3.5, 1), (2000.0, 0)])
def test_round_to_decimals_keeps_values_already_rounded(value, decimals):
    assert round_to_decimals(value, decimals) == value


def test_round_to_decimals_ties_go_away_from_zero():
    assert round_to_decimals(0.5, 0) == 1.0
    assert round_to_decimals(-0.5, 0) == -1.0


@pytest.mark.parametrize("value", [0.123456, 12.34567, 1795.05, 0.0000237])
def test_round_to_decimals_is_odd_and_idempotent(value):
    for decimals in range(0, 7):
        once = round_to_decimals(value, decimals)
        assert round_to_decimals(-value, decimals) == -once
        assert round_to_decimals(once, decimals) == once
        assert abs(once - value) <= 0.5 * 10.0**-decimals + 1e-12


@pytest.mark.parametrize("value", [1795.0, 0.00002378, 87654.0, -2000.0])
def test_significant_rounding_keeps_five_figure_values(value):
    assert round_to_significant_and_decimal(value, 5, 8) == value


@pytest.mark.parametrize("value", [1795.123456, 0.000023789123, 123456789.0, -42.424242])
def test_significant_rounding_is_idempotent_and_close(value):
    once = round_to_significant_and_decimal(value, 5, 8)
    assert round_to_significant_and_decimal(once, 5, 8) == once
    assert math.copysign(1.0, once) == math.copysign(1.0, value)
    assert abs(once - value) <= abs(value) * 1e-4


def test_significant_rounding_then_decimal_cap():
    capped = round_to_significant_and_decimal(0.123456, 5, 2)
    assert capped == round_to_decimals(0.123456, 2)


def test_significant_rounding_of_zero():
    assert round_to_significant_and_decimal(0.0, 5, 6) == 0.0


@pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
def test_significant_rounding_rejects_non_finite(value):
    with pytest.raises(GenericParseError):
        round_to_significant_and_decimal(value, 5, 6)


def test_slippage_buy_above_and_sell_below_mid():
    mid = 1795.3
    buy = slippage_price(mid, True, 0.05, 1, 4)
    sell = slippage_price(mid, False, 0.05, 1, 4)
    assert sell < mid < buy
    assert buy == round_to_significant_and_decimal(mid * 1.05, 5, 2)
    assert sell == round_to_significant_and_decimal(mid * 0.95, 5, 2)


def test_slippage_worked_example():
    assert slippage_price(1000.0, True, 0.05, 1, 2) == 1050.0


def test_spot_assets_allow_more_price_decimals():
    mid = 0.00002378
    spot = slippage_price(mid, True, 0.0, 10_000, 0)
    perp = slippage_price(mid, True, 0.0, 1, 0)
    assert spot == mid
    assert perp == round_to_decimals(mid, 6)
    assert perp != spot


def test_size_decimals_beyond_max_leave_whole_prices():
    px = slippage_price(1795.3, True, 0.0, 1, 9)
    assert px == round_to_decimals(px, 0)


def test_usdc_to_wire_scales_to_micro_units():
    assert usdc_to_wire(1.0) == 1_000_000
    assert usdc_to_wire(0.0) == 0


def test_usdc_to_wire_saturates_negative_to_zero():
    assert usdc_to_wire(-5.0) == usdc_to_wire(0.0)


def test_margin_to_wire_is_signed():
    assert margin_to_wire(-1.0) == -1_000_000
    assert margin_to_wire(1.0) == -margin_to_wire(-1.0)


def test_margin_to_wire_saturates_and_handles_nan():
    assert margin_to_wire(math.nan) == 0
    assert margin_to_wire(1e30) == 2**63 - 1
    assert margin_to_wire(-1e30) == -(2**63)