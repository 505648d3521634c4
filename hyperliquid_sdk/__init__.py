"""Order wire formats, action and EIP-712 hashing, price rounding and response parsing for the Hyperliquid exchange API."""

__version__ = "0.6.0"