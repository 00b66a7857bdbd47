"""Application module wiring for the issuemarket module."""

from __future__ import annotations

import json
from dataclasses import dataclass

from swechain.address import Bech32Codec, module_address, module_address_or_bech32
from swechain.issuemarket.keeper import Keeper
from swechain.issuemarket.types import (
    GOV_MODULE_NAME,
    MODULE_NAME,
    GenesisState,
    default_genesis,
)

__all__ = ["CONSENSUS_VERSION", "AppModule", "CommandOption", "provide_module"]

CONSENSUS_VERSION = 1


@dataclass(frozen=True)
class CommandOption:
    """Describes how one service method is offered on the command line."""

    rpc_method: str
    use: str = ""
    short: str = ""
    alias: tuple[str, ...] = ()
    positional_args: tuple[str, ...] = ()
    skip: bool = False


_QUERY_COMMANDS = (
    CommandOption("Params", use="params", short="Shows the parameters of the module"),
    CommandOption("ListAuction", use="list-auction", short="List all auction"),
    CommandOption(
        "GetAuction",
        use="get-auction [id]",
        short="Gets a auction by id",
        alias=("show-auction",),
        positional_args=("id",),
    ),
    CommandOption("ListBid", use="list-bid", short="List all bid"),
    CommandOption(
        "GetBid",
        use="get-bid [id]",
        short="Gets a bid",
        alias=("show-bid",),
        positional_args=("index",),
    ),
)

_TX_COMMANDS = (
    CommandOption("UpdateParams", skip=True),
    CommandOption(
        "CreateAuction",
        use="create-auction [issue] [description] [status] [winner]",
        short="Create auction",
        positional_args=("issue", "description", "status", "winner"),
    ),
    CommandOption(
        "UpdateAuction",
        use="update-auction [id] [issue] [description] [status] [winner]",
        short="Update auction",
        positional_args=("id", "issue", "description", "status", "winner"),
    ),
    CommandOption(
        "DeleteAuction",
        use="delete-auction [id]",
        short="Delete auction",
        positional_args=("id",),
    ),
    CommandOption(
        "CreateBid",
        use="create-bid [index] [auctionId] [bidder] [amount] [description]",
        short="Create a new bid",
        positional_args=("index", "auctionId", "bidder", "amount", "description"),
    ),
    CommandOption(
        "UpdateBid",
        use="update-bid [index] [auctionId] [bidder] [amount] [description]",
        short="Update bid",
        positional_args=("index", "auctionId", "bidder", "amount", "description"),
    ),
    CommandOption(
        "DeleteBid",
        use="delete-bid [index]",
        short="Delete bid",
        positional_args=("index",),
    ),
)


def _decode(raw: str | bytes) -> GenesisState:
    try:
        return GenesisState.from_dict(json.loads(raw))
    except (ValueError, TypeError) as exc:
        raise ValueError(f"failed to unmarshal {MODULE_NAME} genesis state: {exc}") from exc


def _encode(genesis: GenesisState) -> str:
    return json.dumps(genesis.to_dict(), sort_keys=True)


class AppModule:
    """Connects the issuemarket keeper to genesis handling and the command line."""

    def __init__(self, keeper: Keeper) -> None:
        self.keeper = keeper
        self.blocks_begun = 0
        self.blocks_ended = 0

    @property
    def name(self) -> str:
        return MODULE_NAME

    def default_genesis(self) -> str:
        """Return the default genesis state as JSON."""
        return _encode(default_genesis())

    def validate_genesis(self, raw: str | bytes) -> None:
        """Decode a JSON genesis state and raise ValueError if it is invalid."""
        _decode(raw).validate()

    def init_genesis(self, raw: str | bytes) -> None:
        """Load the module's state from a JSON genesis state."""
        self.keeper.init_genesis(_decode(raw))

    def export_genesis(self) -> str:
        """Return the module's current state as JSON."""
        return _encode(self.keeper.export_genesis())

    def consensus_version(self) -> int:
        return CONSENSUS_VERSION

    def begin_block(self) -> None:
        """Run at the start of each block; only counts the block."""
        self.blocks_begun += 1

    def end_block(self) -> None:
        """Run at the end of each block; only counts the block."""
        self.blocks_ended += 1

    def autocli_options(self) -> dict[str, tuple[CommandOption, ...]]:
        """Return the command options for the query and tx services."""
        return {"query": _QUERY_COMMANDS, "tx": _TX_COMMANDS}


def provide_module(address_codec: Bech32Codec, authority: str = "") -> tuple[Keeper, AppModule]:
    """Build the keeper and module; the authority defaults to the gov module account."""
    if authority:
        authority_bytes = module_address_or_bech32(authority, address_codec.prefix)
    else:
        authority_bytes = module_address(GOV_MODULE_NAME)
    keeper = Keeper(address_codec, authority_bytes)
    return keeper, AppModule(keeper)