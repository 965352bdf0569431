# signum-explorer

Building blocks for exploring the Signum blockchain and its markets.

## Modules

- `signum_explorer.common` converts chain timestamps (seconds since the genesis
  block) to UTC datetimes and strings, formats numbers and NQT amounts with
  thousands separators, and parses user input such as `"1,5k"` (`parse_number`
  raises `NumberParseError` on bad input).
- `signum_explorer.config` holds the bot's commands, button labels, help texts,
  periods (`DAY`, `WEEK`, `MONTH`, `ALL`) and the account checks
  `is_valid_account` and `is_valid_account_rs`.
- `signum_explorer.api_client.JsonApiClient` sends a request to one host with
  the parameters in the query string and returns decoded JSON (or raw bytes for
  `image/jpeg` answers). Failures raise `ApiError`. `secretPhrase` and
  `messageToEncrypt` are kept out of the debug log.
- `signum_explorer.gecko.GeckoClient` and `signum_explorer.cmc.CmcClient`
  return SIGNA and BTC quotes from `get_prices()`, cached for `cache_ttl`
  (a `timedelta` or seconds). A failed refresh is logged and the last quotes are
  returned.
- `signum_explorer.signum.models` holds the request and answer types of the
  Signum node API (`Account`, `Transaction`, `MiningInfo`, `SuggestFee`,
  `TransactionRequest`, ...) with `from_json` constructors, and
  `default_mining_info()`.
- `signum_explorer.signum.base` has `SignumClientBase`, which keeps a pool of
  nodes, ranks them with `rebuild_api_clients()` by block height (one block of
  slack) and latency, and sends each `request()` to them in turn. It also has
  `TtlCache`, `order_nodes`, `probe_host`, `delete_substr` and
  `SignumApiError`.
- `signum_explorer.signum.accounts.AccountsMixin` adds account, block,
  blockchain status, mining info, fee, AT, asset and distribution queries, with
  cached variants and name lookup for well known accounts.
- `signum_explorer.calculator` estimates mining rewards from capacity and
  commitment (`calculate`, `reverse_calculate`, `calculate_entire_range`) and
  simulates a year of weekly reinvestment (`calculate_reinvestment`).
- `signum_explorer.crossing` checks plot file names (`ACCOUNT_START_AMOUNT`)
  for overlapping nonce ranges.
- `signum_explorer.database` holds the SQLAlchemy models (`DbUser`,
  `DbAccount`, `NetworkInfo`, `Price`, `Faucet`, `Donation`, `ConfigEntry`) and
  the helpers `build_connection_url`, `connect_database`, `connect_from_env`
  and `migrate`. Table names take the prefix in `EXPLORER_BOT_DB_PREFIX`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Mining rewards for 10 TiB with 50,000 SIGNA committed:

```python
from signum_explorer.calculator import calculate, calculate_reinvestment
from signum_explorer.signum.models import default_mining_info

info = default_mining_info()
result = calculate(info, 10, 50_000)
print(result.capacity_multiplier, result.my_monthly)
print(calculate_reinvestment(info, result).daily_after_year)
```

Checking plots for overlaps:

```python
from signum_explorer.crossing import check_plots_for_crossing

report = check_plots_for_crossing("1234_0_1000 1234_500_1000")
print(report["1234"].shared_nonces)  # 500
```

Parsing and formatting numbers:

```python
from signum_explorer.common import format_nqt, parse_number

print(parse_number("1,5k"))        # 1500.0
print(format_nqt(123_456_789_000))  # 1,234.57
```

Querying the network, combining the node pool with the account queries:

```python
from signum_explorer.signum.accounts import AccountsMixin
from signum_explorer.signum.base import SignumClientBase


class NodeClient(AccountsMixin, SignumClientBase):
    pass


client = NodeClient(
    api_hosts=["https://europe.signum.network"],
    cache_ttl=120,
    last_index=9,
    rebuild_period=1800,
    preload_names=False,
)
client.rebuild_api_clients()
account = client.get_cached_account("S-AAAA-BBBB-CCCC-DDDDD")
print(account.name, account.total_balance_nqt)
```

Creating the tables on any SQLAlchemy engine:

```python
from sqlalchemy import create_engine
from signum_explorer.database import migrate

engine = create_engine("sqlite://")
migrate(engine)
```

`connect_from_env` reads `DATABASE_URL` and `DB_SSLMODE` and opens a
PostgreSQL engine; a PostgreSQL driver for SQLAlchemy has to be installed
separately.

Amounts from the node are in NQT (1 SIGNA = 10^8 NQT).

## What the package does not do

- There is no chat bot, command-line program or server: nothing here receives
  messages or answers users. The texts in `config` are only data.
- There is no complete node client class. Transaction history queries, sending
  money or messages, commitments, decryption and QR codes are not provided;
  `TransactionRequest.to_params()` only builds the parameters of a transaction.
- Nothing runs in the background. `rebuild_period` and `preload_names` are
  stored on `SignumClientBase` but the pool is rebuilt, and big wallet names
  preloaded, only when `rebuild_api_clients()` and
  `preload_names_for_big_wallets()` are called.
- No price or network history is sampled, stored or charted; the database
  module only defines the tables.