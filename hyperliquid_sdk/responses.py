"""Responses returned by the exchange endpoint."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Tuple

from .errors import JsonParseError


class StatusKind(Enum):
    SUCCESS = "success"
    WAITING_FOR_FILL = "waitingForFill"
    WAITING_FOR_TRIGGER = "waitingForTrigger"
    ERROR = "error"
    RESTING = "resting"
    FILLED = "filled"


_UNIT_KINDS = {StatusKind.SUCCESS, StatusKind.WAITING_FOR_FILL, StatusKind.WAITING_FOR_TRIGGER}


def _kind(tag: Any) -> StatusKind:
    try:
        return StatusKind(tag)
    except ValueError:
        raise JsonParseError(f"unknown variant `{tag}`") from None


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise JsonParseError(f"expected {what} object, got {data!r}")
    return data


def _field(data: Mapping[str, Any], key: str, kind: type) -> Any:
    if key not in data:
        raise JsonParseError(f"missing field `{key}`")
    value = data[key]
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise JsonParseError(f"invalid type for `{key}`: {value!r}")
    if kind is int and value < 0:
        raise JsonParseError(f"invalid value for `{key}`: {value!r}")
    return value


@dataclass(frozen=True)
class RestingOrder:
    oid: int


@dataclass(frozen=True)
class FilledOrder:
    total_sz: str
    avg_px: str
    oid: int


@dataclass(frozen=True)
class ExchangeDataStatus:
    """Outcome of one order in a batch."""

    kind: StatusKind
    error: Optional[str] = None
    resting: Optional[RestingOrder] = None
    filled: Optional[FilledOrder] = None

    @classmethod
    def from_json(cls, data: Any) -> "ExchangeDataStatus":
        if isinstance(data, str):
            kind = _kind(data)
            if kind not in _UNIT_KINDS:
                raise JsonParseError(f"variant `{data}` needs content")
            return cls(kind)
        if not isinstance(data, Mapping) or len(data) != 1:
            raise JsonParseError(f"invalid status: {data!r}")
        ((tag, body),) = data.items()
        kind = _kind(tag)
        if kind in _UNIT_KINDS:
            if body is not None:
                raise JsonParseError(f"variant `{tag}` takes no content")
            return cls(kind)
        if kind is StatusKind.ERROR:
            if not isinstance(body, str):
                raise JsonParseError(f"invalid error message: {body!r}")
            return cls(kind, error=body)
        body = _mapping(body, tag)
        if kind is StatusKind.RESTING:
            return cls(kind, resting=RestingOrder(oid=_field(body, "oid", int)))
        return cls(
            kind,
            filled=FilledOrder(
                total_sz=_field(body, "totalSz", str),
                avg_px=_field(body, "avgPx", str),
                oid=_field(body, "oid", int),
            ),
        )


@dataclass(frozen=True)
class ExchangeResponse:
    response_type: str
    statuses: Optional[Tuple[ExchangeDataStatus, ...]] = None

    @classmethod
    def from_json(cls, data: Any) -> "ExchangeResponse":
        data = _mapping(data, "response")
        response_type = _field(data, "type", str)
        payload = data.get("data")
        if payload is None:
            return cls(response_type)
        statuses = _field(_mapping(payload, "data"), "statuses", list)
        return cls(response_type, tuple(ExchangeDataStatus.from_json(s) for s in statuses))


@dataclass(frozen=True)
class ExchangeResponseStatus:
    """Top-level reply: either a response or an error message."""

    ok: bool
    response: Optional[ExchangeResponse] = None
    error: Optional[str] = None

    @classmethod
    def from_json(cls, data: Any) -> "ExchangeResponseStatus":
        data = _mapping(data, "status")
        status = _field(data, "status", str)
        if "response" not in data:
            raise JsonParseError("missing field `response`")
        body = data["response"]
        if status == "ok":
            return cls(True, response=ExchangeResponse.from_json(body))
        if status == "err":
            if not isinstance(body, str):
                raise JsonParseError(f"invalid error message: {body!r}")
            return cls(False, error=body)
        raise JsonParseError(f"unknown variant `{status}`")


def parse_exchange_response(text: str) -> ExchangeResponseStatus:
    """Parse the JSON body returned by the exchange endpoint."""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        raise JsonParseError(str(exc)) from exc
    return ExchangeResponseStatus.from_json(data)