"""Exception hierarchy raised by the SDK."""

from __future__ import annotations

import json
from typing import Optional


def _debug_str(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _debug_optional(value: object) -> str:
    if value is None:
        return "None"
    if isinstance(value, str):
        return f"Some({_debug_str(value)})"
    return f"Some({value})"


class HyperliquidError(Exception):
    """Base class of every error the SDK raises."""

    default_message = "Hyperliquid error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message if message is not None else self.default_message)


class _DetailError(HyperliquidError):
    prefix = "Error"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"{self.prefix}: {_debug_str(str(detail))}")


class ClientRequestError(HyperliquidError):
    """The server rejected a request with a 4xx status."""

    def __init__(
        self,
        status_code: int,
        error_code: Optional[int],
        error_message: str,
        error_data: Optional[str],
    ) -> None:
        self.status_code = status_code
        self.error_code = error_code
        self.error_message = error_message
        self.error_data = error_data
        super().__init__(
            f"Client error: status code: {status_code}, "
            f"error code: {_debug_optional(error_code)}, "
            f"error message: {error_message}, "
            f"error data: {_debug_optional(error_data)}"
        )


class ServerRequestError(HyperliquidError):
    """The server failed with a 5xx status."""

    def __init__(self, status_code: int, error_message: str) -> None:
        self.status_code = status_code
        self.error_message = error_message
        super().__init__(
            f"Server error: status code: {status_code}, error message: {error_message}"
        )


class GenericRequestError(_DetailError):
    prefix = "Generic request error"


class ChainNotAllowedError(HyperliquidError):
    default_message = "Chain type not allowed for this function"


class AssetNotFoundError(HyperliquidError):
    default_message = "Asset not found"


class Eip712Error(_DetailError):
    prefix = "Error from Eip712 struct"


class JsonParseError(_DetailError):
    prefix = "Json parse error"


class GenericParseError(_DetailError):
    prefix = "Generic parse error"


class WalletError(_DetailError):
    prefix = "Wallet error"


class WebsocketError(_DetailError):
    prefix = "Websocket error"


class SubscriptionNotFoundError(HyperliquidError):
    default_message = "Subscription not found"


class WsManagerNotFoundError(HyperliquidError):
    default_message = "WS manager not instantiated"


class WsSendError(_DetailError):
    prefix = "WS send error"


class ReaderDataNotFoundError(HyperliquidError):
    default_message = "Reader data not found"


class GenericReaderError(_DetailError):
    prefix = "Reader error"


class ReaderTextConversionError(_DetailError):
    prefix = "Reader text conversion error"


class OrderTypeNotFoundError(HyperliquidError):
    default_message = "Order type not found"


class RandGenError(_DetailError):
    prefix = "Issue with generating random data"


class PrivateKeyParseError(_DetailError):
    prefix = "Private key parse error"


class UserEventsError(HyperliquidError):
    default_message = "Cannot subscribe to multiple user events"


class RmpParseError(_DetailError):
    prefix = "Rmp parse error"


class FloatStringParseError(HyperliquidError):
    default_message = "Invalid input number"


class NoCloidError(HyperliquidError):
    default_message = "No cloid found in order request when expected"


class SignatureFailureError(_DetailError):
    prefix = "ECDSA signature failed"


class VaultAddressNotFoundError(HyperliquidError):
    default_message = "Vault address not found"