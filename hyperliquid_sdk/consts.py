"""Endpoints and numeric constants shared across the SDK."""

MAINNET_API_URL = "https://api.hyperliquid.xyz"
TESTNET_API_URL = "https://api.hyperliquid-testnet.xyz"
LOCAL_API_URL = "http://localhost:3001"

EPSILON = 1e-9

INF_BPS = 10_001