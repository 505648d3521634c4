"""Hashing and request bodies for actions sent to the exchange endpoint."""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional, Union

import msgpack
from Crypto.Hash import keccak

from .errors import GenericParseError, RmpParseError

_U64_MAX = 2**64 - 1

Address = Union[str, bytes]
Signature = Union[bytes, Mapping[str, Any]]


def _keccak256(data: bytes) -> bytes:
    return keccak.new(digest_bits=256, data=data).digest()


def _address_bytes(value: Address) -> bytes:
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


def _check_nonce(nonce: int) -> int:
    if isinstance(nonce, bool) or not isinstance(nonce, int) or not 0 <= nonce <= _U64_MAX:
        raise GenericParseError(f"nonce must be an unsigned 64-bit integer, got {nonce!r}")
    return nonce


def hyperliquid_chain(is_mainnet: bool) -> str:
    """Name of the chain that user-signed actions must carry."""
    return "Mainnet" if is_mainnet else "Testnet"


def action_payload(action: Any) -> dict:
    """The JSON-ready wire form of an action, or a copy of an already-built mapping."""
    if isinstance(action, Mapping):
        return dict(action)
    to_wire = getattr(action, "to_wire", None)
    if to_wire is None:
        raise GenericParseError(f"not an action: {action!r}")
    return to_wire()


def action_hash(action: Any, nonce: int, vault_address: Optional[Address] = None) -> bytes:
    """Connection id of an L1 action: keccak of msgpack(action), nonce and vault."""
    try:
        packed = msgpack.packb(action_payload(action), use_bin_type=True)
    except (TypeError, ValueError, OverflowError) as exc:
        raise RmpParseError(str(exc)) from exc
    data = bytearray(packed)
    data += _check_nonce(nonce).to_bytes(8, "big")
    if vault_address is None:
        data.append(0)
    else:
        data.append(1)
        data += _address_bytes(vault_address)
    return _keccak256(bytes(data))


def _hex_quantity(value: Any, name: str) -> str:
    if isinstance(value, str):
        try:
            value = int(value, 16)
        except ValueError:
            raise GenericParseError(f"invalid signature component `{name}`: {value!r}") from None
    if isinstance(value, (bytes, bytearray)):
        value = int.from_bytes(value, "big")
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < 2**256:
        raise GenericParseError(f"invalid signature component `{name}`: {value!r}")
    return hex(value)


def _signature_wire(signature: Signature) -> dict:
    if isinstance(signature, (bytes, bytearray)):
        if len(signature) != 65:
            raise GenericParseError(f"signature must be 65 bytes, got {len(signature)}")
        r, s, v = signature[:32], signature[32:64], signature[64]
    elif isinstance(signature, Mapping):
        try:
            r, s, v = signature["r"], signature["s"], signature["v"]
        except KeyError as exc:
            raise GenericParseError(f"missing signature component {exc}") from None
    else:
        raise GenericParseError(f"unsupported signature: {signature!r}")
    if isinstance(v, str):
        try:
            v = int(v, 0)
        except ValueError:
            raise GenericParseError(f"invalid signature component `v`: {v!r}") from None
    if isinstance(v, bool) or not isinstance(v, int) or not 0 <= v <= _U64_MAX:
        raise GenericParseError(f"invalid signature component `v`: {v!r}")
    return {"r": _hex_quantity(r, "r"), "s": _hex_quantity(s, "s"), "v": v}


def exchange_request_body(
    action: Any,
    signature: Signature,
    nonce: int,
    vault_address: Optional[Address] = None,
) -> str:
    """Compact JSON body posted to the exchange endpoint."""
    body = {
        "action": action_payload(action),
        "signature": _signature_wire(signature),
        "nonce": _check_nonce(nonce),
        "vaultAddress": None if vault_address is None else "0x" + _address_bytes(vault_address).hex(),
    }
    return json.dumps(body, separators=(",", ":"))