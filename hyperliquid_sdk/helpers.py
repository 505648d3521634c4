"""Nonces, number formatting for signing, and network selection."""

from __future__ import annotations

import logging
import math
import secrets
import threading
import time
import uuid
from enum import Enum

from .consts import EPSILON, INF_BPS, LOCAL_API_URL, MAINNET_API_URL, TESTNET_API_URL
from .errors import RandGenError

log = logging.getLogger(__name__)

WIRE_DECIMALS = 8

_U64_MAX = 2**64 - 1
_U16_MAX = 2**16 - 1


def _now_timestamp_ms() -> int:
    return time.time_ns() // 1_000_000


_nonce_lock = threading.Lock()
_cur_nonce = _now_timestamp_ms()


def next_nonce() -> int:
    """Return a fresh, strictly increasing millisecond-based nonce."""
    global _cur_nonce
    with _nonce_lock:
        nonce = _cur_nonce
        _cur_nonce += 1
        now_ms = _now_timestamp_ms()
        if nonce > now_ms + 1000:
            log.info("nonce progressed too far ahead %s %s", nonce, now_ms)
        # more than 300 seconds behind
        if nonce + 300_000 < now_ms:
            _cur_nonce = max(_cur_nonce, now_ms)
    return nonce


def float_to_string_for_hashing(x: float) -> str:
    """Format a float with at most eight decimals and no trailing zeros."""
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "inf" if x > 0 else "-inf"
    text = f"{x:.{WIRE_DECIMALS}f}".rstrip("0").removesuffix(".")
    return "0" if text == "-0" else text


def uuid_to_hex_string(value: uuid.UUID) -> str:
    """Render a UUID as a 0x-prefixed lower-case hex string."""
    return f"0x{value.hex}"


def generate_random_key() -> bytes:
    """Return 32 cryptographically random bytes."""
    try:
        return secrets.token_bytes(32)
    except OSError as exc:
        raise RandGenError(str(exc)) from exc


def _saturating_int(value: float, upper: int) -> int:
    if math.isnan(value) or value <= 0:
        return 0
    if value >= upper:
        return upper
    return int(value)


def truncate_float(value: float, decimals: int, round_up: bool) -> float:
    """Truncate a non-negative float to ``decimals`` places, optionally bumping the last one."""
    pow10 = float(10**decimals)
    scaled = _saturating_int(value * pow10, _U64_MAX)
    if round_up:
        scaled += 1
    return scaled / pow10


def bps_diff(x: float, y: float) -> int:
    """Relative difference of ``y`` from ``x`` in basis points."""
    if abs(x) < EPSILON:
        return INF_BPS
    return _saturating_int(abs(y - x) / x * 10_000.0, _U16_MAX)


class BaseUrl(Enum):
    """Which API deployment to talk to."""

    LOCALHOST = LOCAL_API_URL
    TESTNET = TESTNET_API_URL
    MAINNET = MAINNET_API_URL

    def url(self) -> str:
        return self.value