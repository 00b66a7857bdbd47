# swechain

This package holds two application-state modules. Both keep their state in memory.

- `swechain.ipfs` keeps **coding trajectories**. Each trajectory is a record with four fields: `creator`, a string `index`, `title` and `data`.
- `swechain.issuemarket` keeps **auctions** and **bids**. Auctions get sequential integer ids starting at 0. Bids are keyed by a string `index`.

Each module has the same four parts:

- `types`: dataclasses for the records, the messages, the query requests, `Params` and `GenesisState`.
- `keeper.Keeper`: holds the state.
- `keeper.MsgServer`: creates, updates and deletes records, and updates the parameters.
- `keeper.QueryServer`: answers single lookups, paginated listings and parameter queries.
- `module.AppModule`: reads and writes genesis state as JSON, and describes the module's commands.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Addresses

Signers are bech32 strings.

- `swechain.address.Bech32Codec(prefix)` converts between raw bytes and bech32 text. The default prefix is `"cosmos"`. The methods are `string_to_bytes` and `bytes_to_string`. `string_to_bytes` raises `AddressError` (a subclass of `ValueError`) in these cases:
  - the text is malformed;
  - the checksum is bad;
  - the prefix is wrong;
  - the data is empty.
- `module_address(name)` derives the 20-byte account address of a named module.
- `module_address_or_bech32(value, prefix)` decodes `value` as a bech32 address. If that fails, it derives a module address from `value` instead.

```python
from swechain.address import Bech32Codec, module_address

codec = Bech32Codec("cosmos")
authority = module_address("gov")
creator = codec.bytes_to_string(b"signerAddr__________________")
```

## Coding trajectories

```python
from swechain.ipfs.keeper import Keeper, MsgServer, QueryServer
from swechain.ipfs.types import (
    MsgCreateCodingTraj, MsgUpdateCodingTraj, QueryGetCodingTrajRequest,
)

keeper = Keeper(codec, authority)
msgs = MsgServer(keeper)
queries = QueryServer(keeper)

msgs.create_coding_traj(MsgCreateCodingTraj(creator=creator, index="0", title="t", data="d"))
msgs.update_coding_traj(MsgUpdateCodingTraj(creator=creator, index="0", title="t2", data="d2"))
print(queries.get_coding_traj(QueryGetCodingTrajRequest(index="0")))
```

## Auctions and bids

```python
from swechain.issuemarket.keeper import Keeper, MsgServer, QueryServer
from swechain.issuemarket.types import MsgCreateAuction, MsgCreateBid, QueryAllBidRequest
from swechain.store import PageRequest

keeper = Keeper(codec, authority)
msgs = MsgServer(keeper)
queries = QueryServer(keeper)

auction_id = msgs.create_auction(MsgCreateAuction(creator=creator, issue="#1"))
msgs.create_bid(MsgCreateBid(creator=creator, index="b0", auction_id=str(auction_id)))
bids, page = queries.list_bid(QueryAllBidRequest(pagination=PageRequest(limit=10, count_total=True)))
```

`create_auction` returns the id of the new auction.

## Errors

Message handlers raise `swechain.errors.ChainError`. To find out which registered error it is, call `matches(...)` with one of these:

| Registered error | Raised when |
| --- | --- |
| `ERR_INVALID_ADDRESS` | the creator is not a valid address |
| `ERR_INVALID_REQUEST` | the index is already set |
| `ERR_KEY_NOT_FOUND` | there is no record with that key |
| `ERR_UNAUTHORIZED` | the signer does not own the record |

`update_params` raises differently:

- If the authority string cannot be decoded, it raises `AddressError`.
- If the authority string decodes to an address that is not the keeper's authority, it raises a `ChainError` that matches the module's `ERR_INVALID_SIGNER`.

Queries raise `swechain.errors.StatusError`, which carries a `StatusCode`:

| Status code | Raised when |
| --- | --- |
| `INVALID_ARGUMENT` | the request is `None` |
| `NOT_FOUND` | the record or the params are missing |
| `INTERNAL` | the pagination request is invalid |

There is one exception to this. `issuemarket` `get_auction` raises a `ChainError` matching `ERR_KEY_NOT_FOUND` when the id is missing, not a `StatusError`.

## Pagination

`swechain.store.paginate` serves the listing queries. Each listing takes an optional `PageRequest` and returns the values together with a `PageResponse`.

`PageRequest` has these fields:

- `key`: the key to start from.
- `offset`: how many values to skip.
- `limit`: how many values to return. A limit of 0 means the default of 100, and it also counts the total.
- `count_total`: whether to count all values.
- `reverse`: whether to list in reverse key order.

Use either `key` or `offset`, not both.

`PageResponse.next_key` is the key at which the next page starts. `PageResponse.total` is the total count, when a count was asked for. Values are listed in key order.

## Genesis

`AppModule` has these methods:

- `default_genesis()` returns the default genesis state as JSON.
- `validate_genesis(raw)` raises `ValueError` in these cases:
  - the JSON cannot be decoded;
  - an index is duplicated;
  - an auction id is duplicated;
  - an auction id is not below `auction_count`.
- `init_genesis(raw)` loads the state.
- `export_genesis()` returns the current state as JSON.
- `consensus_version()` returns 1.
- `begin_block()` and `end_block()` only count how many times they are called.
- `autocli_options()` returns the `CommandOption` entries for the query and tx services.

`provide_module(address_codec, authority)` builds a keeper and its module together. If `authority` is empty, the authority is the `gov` module account.

Neither module defines any parameters yet. `Params` is empty, and its `validate()` always passes.

## What this package does not do

- **State is not persistent.** It lives in memory inside each `Keeper` and is lost when the process ends. The only way to save it or restore it is through the genesis JSON.
- **There is no network service.** No blocks are produced and no transactions are signed.
- **There is no command-line program.** `autocli_options()` only describes commands; nothing here parses or runs them.