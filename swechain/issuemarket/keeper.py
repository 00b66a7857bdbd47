"""State keeper, message handlers and queries of the issuemarket module."""

from __future__ import annotations

from swechain.address import AddressError, Bech32Codec
from swechain.errors import (
    ERR_INVALID_ADDRESS,
    ERR_INVALID_REQUEST,
    ERR_KEY_NOT_FOUND,
    ERR_UNAUTHORIZED,
    StatusCode,
    StatusError,
)
from swechain.issuemarket.types import (
    AUCTION_COUNT_KEY,
    AUCTION_KEY,
    BID_KEY,
    ERR_INVALID_SIGNER,
    PARAMS_KEY,
    Auction,
    Bid,
    GenesisState,
    MsgCreateAuction,
    MsgCreateBid,
    MsgDeleteAuction,
    MsgDeleteBid,
    MsgUpdateAuction,
    MsgUpdateBid,
    MsgUpdateParams,
    Params,
    QueryAllAuctionRequest,
    QueryAllBidRequest,
    QueryGetAuctionRequest,
    QueryGetBidRequest,
    QueryParamsRequest,
    default_genesis,
)
from swechain.store import (
    STRING_KEY,
    UINT64_KEY,
    Item,
    Map,
    NotFoundError,
    PageResponse,
    Sequence,
    paginate,
)


class Keeper:
    """Holds the module's params, auctions and bids."""

    def __init__(self, address_codec: Bech32Codec, authority: bytes) -> None:
        try:
            address_codec.bytes_to_string(authority)
        except AddressError as exc:
            raise ValueError(f"invalid authority address {authority!r}: {exc}") from exc
        self.address_codec = address_codec
        self._authority = bytes(authority)
        self.params: Item[Params] = Item(PARAMS_KEY, "params")
        self.auction_seq = Sequence(AUCTION_COUNT_KEY, "auction_seq")
        self.auction: Map[int, Auction] = Map(AUCTION_KEY, "auction", UINT64_KEY)
        self.bid: Map[str, Bid] = Map(BID_KEY, "bid", STRING_KEY)

    @property
    def authority(self) -> bytes:
        """The address allowed to update the params."""
        return self._authority

    def init_genesis(self, genesis: GenesisState) -> None:
        for auction in genesis.auction_list:
            self.auction.set(auction.id, auction)
        self.auction_seq.set(genesis.auction_count)
        for bid in genesis.bid_list:
            self.bid.set(bid.index, bid)
        self.params.set(genesis.params)

    def export_genesis(self) -> GenesisState:
        genesis = default_genesis()
        genesis.params = self.params.get()
        genesis.auction_list = [value for _, value in self.auction.items()]
        genesis.auction_count = self.auction_seq.peek()
        genesis.bid_list = [value for _, value in self.bid.items()]
        return genesis


class MsgServer:
    """Handles the module's transaction messages."""

    def __init__(self, keeper: Keeper) -> None:
        self.keeper = keeper

    def _check_signer(self, creator: str, label: str) -> None:
        try:
            self.keeper.address_codec.string_to_bytes(creator)
        except AddressError as exc:
            raise ERR_INVALID_ADDRESS.wrap(f"{label}: {exc}") from exc

    def _owned_auction(self, auction_id: int, creator: str) -> Auction:
        try:
            current = self.keeper.auction.get(auction_id)
        except NotFoundError:
            raise ERR_KEY_NOT_FOUND.wrap(f"key {auction_id} doesn't exist") from None
        if creator != current.creator:
            raise ERR_UNAUTHORIZED.wrap("incorrect owner")
        return current

    def _owned_bid(self, index: str, creator: str) -> Bid:
        try:
            current = self.keeper.bid.get(index)
        except NotFoundError:
            raise ERR_KEY_NOT_FOUND.wrap("index not set") from None
        if creator != current.creator:
            raise ERR_UNAUTHORIZED.wrap("incorrect owner")
        return current

    def create_auction(self, msg: MsgCreateAuction) -> int:
        """Store a new auction and return its id."""
        self._check_signer(msg.creator, "invalid address")
        next_id = self.keeper.auction_seq.next()
        self.keeper.auction.set(
            next_id,
            Auction(
                id=next_id,
                creator=msg.creator,
                issue=msg.issue,
                description=msg.description,
                status=msg.status,
                winner=msg.winner,
            ),
        )
        return next_id

    def update_auction(self, msg: MsgUpdateAuction) -> None:
        self._check_signer(msg.creator, "invalid address")
        self._owned_auction(msg.id, msg.creator)
        self.keeper.auction.set(
            msg.id,
            Auction(
                id=msg.id,
                creator=msg.creator,
                issue=msg.issue,
                description=msg.description,
                status=msg.status,
                winner=msg.winner,
            ),
        )

    def delete_auction(self, msg: MsgDeleteAuction) -> None:
        self._check_signer(msg.creator, "invalid address")
        self._owned_auction(msg.id, msg.creator)
        self.keeper.auction.remove(msg.id)

    def create_bid(self, msg: MsgCreateBid) -> None:
        self._check_signer(msg.creator, "invalid address")
        if self.keeper.bid.has(msg.index):
            raise ERR_INVALID_REQUEST.wrap("index already set")
        self.keeper.bid.set(msg.index, _bid_from(msg))

    def update_bid(self, msg: MsgUpdateBid) -> None:
        self._check_signer(msg.creator, "invalid signer address")
        self._owned_bid(msg.index, msg.creator)
        self.keeper.bid.set(msg.index, _bid_from(msg))

    def delete_bid(self, msg: MsgDeleteBid) -> None:
        self._check_signer(msg.creator, "invalid signer address")
        self._owned_bid(msg.index, msg.creator)
        self.keeper.bid.remove(msg.index)

    def update_params(self, msg: MsgUpdateParams) -> None:
        codec = self.keeper.address_codec
        try:
            authority = codec.string_to_bytes(msg.authority)
        except AddressError as exc:
            raise AddressError(f"invalid authority address: {exc}") from exc
        if authority != self.keeper.authority:
            expected = codec.bytes_to_string(self.keeper.authority)
            raise ERR_INVALID_SIGNER.wrap(
                f"invalid authority; expected {expected}, got {msg.authority}"
            )
        msg.params.validate()
        self.keeper.params.set(msg.params)


def _bid_from(msg: MsgCreateBid | MsgUpdateBid) -> Bid:
    return Bid(
        creator=msg.creator,
        index=msg.index,
        auction_id=msg.auction_id,
        bidder=msg.bidder,
        amount=msg.amount,
        description=msg.description,
    )


_INVALID_REQUEST = StatusError(StatusCode.INVALID_ARGUMENT, "invalid request")


class QueryServer:
    """Answers read-only queries against the keeper."""

    def __init__(self, keeper: Keeper) -> None:
        self.keeper = keeper

    def params(self, request: QueryParamsRequest | None) -> Params:
        if request is None:
            raise _INVALID_REQUEST
        try:
            return self.keeper.params.get()
        except NotFoundError:
            raise StatusError(StatusCode.NOT_FOUND, "not found") from None

    def list_auction(
        self, request: QueryAllAuctionRequest | None
    ) -> tuple[list[Auction], PageResponse]:
        if request is None:
            raise _INVALID_REQUEST
        try:
            return paginate(self.keeper.auction, request.pagination)
        except ValueError as exc:
            raise StatusError(StatusCode.INTERNAL, str(exc)) from exc

    def get_auction(self, request: QueryGetAuctionRequest | None) -> Auction:
        if request is None:
            raise _INVALID_REQUEST
        try:
            return self.keeper.auction.get(request.id)
        except NotFoundError:
            raise ERR_KEY_NOT_FOUND.wrap() from None

    def list_bid(self, request: QueryAllBidRequest | None) -> tuple[list[Bid], PageResponse]:
        if request is None:
            raise _INVALID_REQUEST
        try:
            return paginate(self.keeper.bid, request.pagination)
        except ValueError as exc:
            raise StatusError(StatusCode.INTERNAL, str(exc)) from exc

    def get_bid(self, request: QueryGetBidRequest | None) -> Bid:
        if request is None:
            raise _INVALID_REQUEST
        try:
            return self.keeper.bid.get(request.index)
        except NotFoundError:
            raise StatusError(StatusCode.NOT_FOUND, "not found") from None