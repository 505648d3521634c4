# hyperliquid-sdk

Building blocks for talking to the Hyperliquid exchange API from Python.

The package turns order and transfer requests into the wire structures the
exchange expects. It computes the msgpack-based action hashes and the EIP-712
hashes that get signed, builds the JSON body for the `/exchange` endpoint, and
parses what the exchange sends back.

## Installation

```
pip install .
pip install ".[test]"   # adds pytest
```

## Modules

- `hyperliquid_sdk.consts`: API base URLs (`MAINNET_API_URL`,
  `TESTNET_API_URL`, `LOCAL_API_URL`), `EPSILON` and `INF_BPS`.
- `hyperliquid_sdk.errors`: the exception hierarchy. Everything derives from
  `HyperliquidError`, for example `AssetNotFoundError`, `JsonParseError`,
  `RmpParseError`, `Eip712Error`, `GenericParseError`,
  `VaultAddressNotFoundError` and `FloatStringParseError`.
- `hyperliquid_sdk.helpers`: `next_nonce()`, `float_to_string_for_hashing()`,
  `uuid_to_hex_string()`, `generate_random_key()`, `truncate_float()`,
  `bps_diff()` and the `BaseUrl` enum.
- `hyperliquid_sdk.orders`: client-side requests (`ClientOrderRequest`,
  `ClientLimit`, `ClientTrigger`, `ClientCancelRequest`,
  `ClientCancelRequestCloid`, `ClientModifyRequest`) and their wire forms
  (`OrderRequest`, `Limit`, `Trigger`, `CancelRequest`, `CancelRequestCloid`,
  `ModifyRequest`, `BuilderInfo`). It also holds the `MarketOrderParams` and
  `MarketCloseParams` records.
- `hyperliquid_sdk.actions`: exchange actions (`BulkOrder`, `BulkCancel`,
  `BulkCancelCloid`, `BulkModify`, `UpdateLeverage`, `UpdateIsolatedMargin`,
  `UsdSend`, `SpotSend`, `Withdraw3`, `SpotUser`/`ClassTransfer`,
  `VaultTransfer`, `ApproveAgent`, `SetReferrer`, `ApproveBuilderFee`), each
  with `to_wire()`. `UsdSend`, `SpotSend`, `Withdraw3` and `ApproveAgent` also
  have `struct_hash()` and `signing_hash()`. The module-level
  `eip712_domain_separator()` and `eip712_signing_hash()` expose the domain
  hashing.
- `hyperliquid_sdk.payload`: `action_hash()` (the "connection id"),
  `exchange_request_body()`, `action_payload()` and `hyperliquid_chain()`.
- `hyperliquid_sdk.pricing`: `slippage_price()`, `round_to_decimals()`,
  `round_to_significant_and_decimal()`, `usdc_to_wire()` and
  `margin_to_wire()`.
- `hyperliquid_sdk.responses`: `parse_exchange_response()` and the
  `ExchangeResponseStatus`, `ExchangeResponse`, `ExchangeDataStatus`,
  `StatusKind`, `RestingOrder` and `FilledOrder` types.

## Building an order

```python
from hyperliquid_sdk.actions import BulkOrder
from hyperliquid_sdk.helpers import next_nonce
from hyperliquid_sdk.orders import ClientLimit, ClientOrderRequest
from hyperliquid_sdk.payload import action_hash, exchange_request_body

coin_to_asset = {"BTC": 0, "ETH": 1}

order = ClientOrderRequest(
    asset="ETH",
    is_buy=True,
    reduce_only=False,
    limit_px=1800.0,
    sz=0.01,
    order_type=ClientLimit(tif="Gtc"),
)

action = BulkOrder(orders=[order.convert(coin_to_asset)], grouping="na")
nonce = next_nonce()
connection_id = action_hash(action, nonce, None)
```

`action_hash` packs the action's wire form with msgpack. It appends the nonce
as eight big-endian bytes, then a vault marker byte (and the vault address if
one is given), and returns the keccak-256 digest. Converting an order for a
coin missing from `coin_to_asset` raises `AssetNotFoundError`.

Once you have a signature, `exchange_request_body(action, signature, nonce,
vault_address)` returns the compact JSON document to post. The signature may
be 65 raw bytes (`r`, `s`, `v`) or a mapping with `r`, `s` and `v` keys.

## User-signed actions

Transfers, withdrawals and agent approvals are signed as EIP-712 typed data:

```python
from hyperliquid_sdk.actions import UsdSend
from hyperliquid_sdk.helpers import next_nonce
from hyperliquid_sdk.payload import hyperliquid_chain

send = UsdSend(
    hyperliquid_chain=hyperliquid_chain(False),
    destination="0x0000000000000000000000000000000000000001",
    amount="1",
    time=next_nonce(),
)
digest = send.signing_hash()   # 32 bytes to sign
wire = send.to_wire()
```

## Prices and sizes

Prices and sizes go over the wire as strings with at most eight decimals and
no trailing zeros:

```python
from hyperliquid_sdk.helpers import float_to_string_for_hashing

float_to_string_for_hashing(0.00076)       # "0.00076"
float_to_string_for_hashing(987654321.0)   # "987654321"
float_to_string_for_hashing(-0.0)          # "0"
```

`slippage_price(mid_px, is_buy, slippage, asset_index, sz_decimals)` moves the
mid price by the slippage. It then rounds to five significant figures and to
the price decimals the asset allows: six for perps, eight for spot assets
(index 10000 and up), minus the size decimals.

## Reading responses

```python
from hyperliquid_sdk.responses import parse_exchange_response

status = parse_exchange_response(response_text)
if status.ok:
    for entry in status.response.statuses or ():
        print(entry.kind, entry.resting, entry.filled, entry.error)
else:
    print(status.error)
```

Malformed or unexpected JSON raises `JsonParseError`.

## Networks

`BaseUrl.MAINNET`, `BaseUrl.TESTNET` and `BaseUrl.LOCALHOST` select a
deployment, and `BaseUrl.url()` gives its API root.

## What the package does not do

- It sends no HTTP or websocket traffic. There is no client that posts to
  `/exchange`, queries market or account data, or subscribes to feeds.
- It holds no private keys and produces no ECDSA signatures. It gives you the
  digests to sign (`action_hash`, `signing_hash`), and you sign them with the
  signer of your choice. For L1 actions such as orders, cancels and leverage
  updates, you sign the connection id yourself under the exchange's
  agent-signing scheme. The package does not build that typed data.
- It ships no command-line tools or trading strategies.