"""State, message and query types of the issuemarket module."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any

from swechain.errors import register
from swechain.store import PageRequest

MODULE_NAME = "issuemarket"
STORE_KEY = MODULE_NAME
GOV_MODULE_NAME = "gov"

PARAMS_KEY = "p_issuemarket"
AUCTION_KEY = "auction/value/"
AUCTION_COUNT_KEY = "auction/count/"
BID_KEY = "Bid/value/"

ERR_INVALID_SIGNER = register(
    MODULE_NAME, 1100, "expected gov account as only signer for proposal message"
)


@dataclass(frozen=True)
class Params:
    """Module parameters; the module currently defines none."""

    def validate(self) -> None:
        """Raise ValueError if any parameter is unset."""
        for param in fields(self):
            if getattr(self, param.name) is None:
                raise ValueError(f"param {param.name} must be set")


@dataclass
class Auction:
    """An auction for an issue, keyed by its sequential id."""

    id: int = 0
    issue: str = ""
    description: str = ""
    status: str = ""
    winner: str = ""
    creator: str = ""


@dataclass
class Bid:
    """A bid on an auction, stored under its index."""

    index: str = ""
    auction_id: str = ""
    bidder: str = ""
    amount: str = ""
    description: str = ""
    creator: str = ""


def _uint(value: Any, what: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{what} must be an unsigned integer")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and value.isdigit():
        number = int(value)
    else:
        raise ValueError(f"{what} must be an unsigned integer, got {value!r}")
    if number < 0 or number >= 1 << 64:
        raise ValueError(f"{what} out of uint64 range")
    return number


def _build(cls: type, data: Any, what: str) -> Any:
    if not isinstance(data, dict):
        raise ValueError(f"{what} must be an object, got {type(data).__name__}")
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"unknown field {unknown[0]!r} in {what}")
    return cls(**data)


def _list(data: dict[str, Any], key: str) -> list[Any]:
    items = data.get(key) or []
    if not isinstance(items, list):
        raise ValueError(f"{key} must be a list")
    return items


def _build_auction(item: Any) -> Auction:
    auction = _build(Auction, item, "auction")
    auction.id = _uint(auction.id, "auction id")
    return auction


@dataclass
class GenesisState:
    """The module's exported or initial state."""

    params: Params = field(default_factory=Params)
    auction_list: list[Auction] = field(default_factory=list)
    auction_count: int = 0
    bid_list: list[Bid] = field(default_factory=list)

    def validate(self) -> None:
        """Raise ValueError on repeated or out-of-range ids, repeated indexes or bad params."""
        auction_ids: set[int] = set()
        for elem in self.auction_list:
            if elem.id in auction_ids:
                raise ValueError("duplicated id for auction")
            if elem.id >= self.auction_count:
                raise ValueError("auction id should be lower or equal than the last id")
            auction_ids.add(elem.id)

        bid_indexes: set[str] = set()
        for elem in self.bid_list:
            index = str(elem.index)
            if index in bid_indexes:
                raise ValueError("duplicated index for bid")
            bid_indexes.add(index)

        self.params.validate()

    def to_dict(self) -> dict[str, Any]:
        return {
            "params": asdict(self.params),
            "auction_list": [asdict(item) for item in self.auction_list],
            "auction_count": self.auction_count,
            "bid_list": [asdict(item) for item in self.bid_list],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GenesisState":
        if not isinstance(data, dict):
            raise ValueError("genesis state must be an object")
        allowed = {"params", "auction_list", "auction_count", "bid_list"}
        unknown = sorted(set(data) - allowed)
        if unknown:
            raise ValueError(f"unknown field {unknown[0]!r} in genesis state")
        return cls(
            params=_build(Params, data.get("params") or {}, "params"),
            auction_list=[_build_auction(item) for item in _list(data, "auction_list")],
            auction_count=_uint(data.get("auction_count", 0), "auction_count"),
            bid_list=[_build(Bid, item, "bid") for item in _list(data, "bid_list")],
        )


@dataclass
class MsgCreateAuction:
    creator: str = ""
    issue: str = ""
    description: str = ""
    status: str = ""
    winner: str = ""


@dataclass
class MsgUpdateAuction:
    creator: str = ""
    id: int = 0
    issue: str = ""
    description: str = ""
    status: str = ""
    winner: str = ""


@dataclass
class MsgDeleteAuction:
    creator: str = ""
    id: int = 0


@dataclass
class MsgCreateBid:
    creator: str = ""
    index: str = ""
    auction_id: str = ""
    bidder: str = ""
    amount: str = ""
    description: str = ""


@dataclass
class MsgUpdateBid:
    creator: str = ""
    index: str = ""
    auction_id: str = ""
    bidder: str = ""
    amount: str = ""
    description: str = ""


@dataclass
class MsgDeleteBid:
    creator: str = ""
    index: str = ""


@dataclass
class MsgUpdateParams:
    authority: str = ""
    params: Params = field(default_factory=Params)


@dataclass(frozen=True)
class QueryParamsRequest:
    pass


@dataclass(frozen=True)
class QueryGetAuctionRequest:
    id: int = 0


@dataclass(frozen=True)
class QueryAllAuctionRequest:
    pagination: PageRequest | None = None


@dataclass(frozen=True)
class QueryGetBidRequest:
    index: str = ""


@dataclass(frozen=True)
class QueryAllBidRequest:
    pagination: PageRequest | None = None


MSG_TYPES = (
    MsgCreateBid,
    MsgUpdateBid,
    MsgDeleteBid,
    MsgCreateAuction,
    MsgUpdateAuction,
    MsgDeleteAuction,
    MsgUpdateParams,
)


def default_params() -> Params:
    return Params()


def default_genesis() -> GenesisState:
    return GenesisState(params=default_params(), auction_list=[], bid_list=[])