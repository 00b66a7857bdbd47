"""Application module wiring for the ipfs module."""

from __future__ import annotations

import json
from dataclasses import dataclass

from swechain.address import Bech32Codec, module_address, module_address_or_bech32
from swechain.ipfs.keeper import Keeper
from swechain.ipfs.types import GOV_MODULE_NAME, MODULE_NAME, GenesisState, default_genesis

CONSENSUS_VERSION = 1


@dataclass(frozen=True)
class CommandOption:
    """How one RPC method is exposed as a command-line command."""

    rpc_method: str
    use: str = ""
    short: str = ""
    alias: tuple[str, ...] = ()
    positional_args: tuple[str, ...] = ()
    skip: bool = False


_QUERY_COMMANDS = (
    CommandOption("Params", use="params", short="Shows the parameters of the module"),
    CommandOption("ListCodingTraj", use="list-coding-traj", short="List all coding_traj"),
    CommandOption(
        "GetCodingTraj",
        use="get-coding-traj [id]",
        short="Gets a coding_traj",
        alias=("show-coding-traj",),
        positional_args=("index",),
    ),
)

_TX_COMMANDS = (
    CommandOption("UpdateParams", skip=True),
    CommandOption(
        "CreateCodingTraj",
        use="create-coding-traj [index] [title] [data]",
        short="Create a new coding_traj",
        positional_args=("index", "title", "data"),
    ),
    CommandOption(
        "UpdateCodingTraj",
        use="update-coding-traj [index] [title] [data]",
        short="Update coding_traj",
        positional_args=("index", "title", "data"),
    ),
    CommandOption(
        "DeleteCodingTraj",
        use="delete-coding-traj [index]",
        short="Delete coding_traj",
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
    """Connects the ipfs keeper to genesis handling and the command line."""

    def __init__(self, keeper: Keeper) -> None:
        self.keeper = keeper
        self.blocks_begun = 0
        self.blocks_ended = 0

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