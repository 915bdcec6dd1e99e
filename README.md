# tronkit

Offline building blocks for working with TRON accounts and contracts:

- `tronkit.address` – the `Address` type and conversions between
  base58check, hex and base64 forms, plus address derivation from an
  uncompressed secp256k1 public key.
- `tronkit.abi` – contract ABI parameter encoding and method selectors.
- `tronkit.model` – `AccountDetails`, a JSON-ready view of an account's
  balances, frozen resources and votes.
- `tronkit.flags` – `TronAddressFlag`, a flag value that only accepts
  valid base58 addresses.
- `tronkit.permissions`, `tronkit.governance`, `tronkit.assets`,
  `tronkit.exchange` – parsing and arithmetic for votes, permissions,
  proposals, witnesses, TRC10 issues and bancor exchange trades.
- `tronkit.config` – a YAML settings file.
- `tronkit.cli` – the `tronctl` command.

## Installation

```
pip install .
```

Tests:

```
pip install ".[test]"
pytest
```

## Addresses

```python
from tronkit.address import base58_to_address, hex_to_address

addr = base58_to_address(text)      # raises ValueError on a bad checksum or character
addr.hex()                          # '0x41...'
str(hex_to_address(addr.hex()))     # the base58 form again
```

- `hex_to_address(s)` accepts an optional `0x` prefix and returns `None`
  if the text is not hex.
- `base64_to_address(s)` decodes standard base64.
- `big_to_address(n)` left-pads an integer to 21 bytes.
- `pubkey_to_address(key)` takes 64 raw bytes, 65 bytes starting with
  `0x04`, or an `(x, y)` pair of integers.
- `str(address)` is base58check; an address starting with a zero byte is
  shown as a decimal integer, and an empty one as `""`.
- `Address.scan(src)` loads raw database bytes, raising `TypeError` for
  non-bytes and `ValueError` unless they are 21 bytes long;
  `Address.value()` returns the raw bytes.

## ABI parameters

```python
from tronkit.abi import get_padded_param, pack, signature

signature("transfer(address,uint256)").hex()   # 'a9059cbb'

data = get_padded_param([{"uint256": "43981"}, {"uint256": "0xABCD"}])
len(data)   # 64
```

Each parameter is a single-entry mapping from a type to its value.
Supported types are `bool`, `string`, `address`, `bytes`, `bytesN`,
`intN`/`uintN`, fixed arrays `T[k]` and slices `T[]`. Integers may be
numbers or decimal strings; above 64 bits, `0x` hex strings too. Addresses
are base58 strings or `Address` values; `bytes`/`bytesN` may be hex or
base64 text.

- `pack(method, params)` – selector followed by the encoded parameters.
- `load_from_json(text)` – the same parameter list from JSON text.
- `AbiType.parse(text)` – parse a type string.
- `get_parser(abi, method)` / `get_inputs_parser(abi, method)` – the
  output or input `Argument`s of a method, from a mapping with an
  `"entrys"` list (or an object or list of entries); `LookupError` if the
  method is absent.

## Argument helpers

```python
from tronkit.permissions import trx_to_sun
from tronkit.assets import parse_issue_ratio
from tronkit.exchange import normalize_token
from tronkit.governance import witness_productivity
from tronkit.cli import format_timestamp

trx_to_sun("1.5")               # 1500000
parse_issue_ratio("2:3")        # (2, 3)
parse_issue_ratio("0.5")        # (5, 10)
normalize_token("TRX", "2")     # ('_', 2000000.0)
witness_productivity(3, 1)      # 75.0
format_timestamp(0)             # '1970-01-01T00:00:00Z'
```

- `permissions`: `parse_votes` (`"WITNESS:COUNT"` entries),
  `parse_key_weights` (`"ADDR-WEIGHT+ADDR-WEIGHT"`), `parse_permissions`
  (`"TYPE:THRESHOLD:KEYS"` rules into owner, witness and active
  permissions), `prepare_message` (optionally Keccak-256 hashed).
- `governance`: `parse_proposal_params`, `filter_proposals` (newest first,
  optionally only unexpired), `witness_productivity`, `parse_brokerage`
  (0 to 100).
- `assets`: `validate_decimals` (0 to 6), `parse_issue_ratio`,
  `parse_frozen_supply`, `scale_total_supply`, `token_price`.
- `exchange`: `normalize_token`, `validate_pair`, `expected_trade_amount`.
- `cli.parse_contract_human_readable` drops `XXX_` fields and shows
  address fields and votes in base58.

Invalid input raises `ValueError`.

## Configuration

The settings file is YAML with the keys `node`, `ledger`, `verbose`,
`timeout`, `noPretty`, `apiKey` and `withTLS`.

```python
from tronkit.config import init_config, set_config_value, get_config_value, save_config

config = init_config(config_dir)            # default: $HOME/.config/tronctl
set_config_value(config, "node", "127.0.0.1")
get_config_value(config, "node")            # '127.0.0.1:50051'
```

`init_config` creates the directory and writes defaults (node
`grpc.trongrid.io:50051`, timeout 20) to `config.default` when the file is
missing, unreadable or has no node. `set_config_value` accepts `node`,
`ledger`, `verbose`, `nopretty`, `apiKey` and `withTLS`; it does not save,
so call `save_config(config, path)`. `get_config_value` also accepts
`all`. Unknown names raise `LookupError`.

## Command line

```
tronctl --help
tronctl version
tronctl completion
tronctl config set node 127.0.0.1
tronctl config get all
tronctl utility base58-to-addr <BASE58_ADDRESS>
tronctl utility addr-to-base58 <HEX_ADDRESS>
```

`--config-dir` chooses the settings directory. `utility metadata` and
`utility metrics` do nothing. Errors are printed to standard error and the
command exits with status 1.

## What is not included

tronkit does not talk to a node. There is no network client, no key
store or wallet, no transaction building or signing, and no commands for
balances, transfers, voting, proposals, TRC10/TRC20 tokens or exchanges;
the helpers above only parse and compute the values such operations need.