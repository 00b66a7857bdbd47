"""State keeper, message handlers and queries of the ipfs module."""

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
from swechain.ipfs.types import (
    CODING_TRAJ_KEY,
    ERR_INVALID_SIGNER,
    PARAMS_KEY,
    CodingTraj,
    GenesisState,
    MsgCreateCodingTraj,
    MsgDeleteCodingTraj,
    MsgUpdateCodingTraj,
    MsgUpdateParams,
    Params,
    QueryAllCodingTrajRequest,
    QueryGetCodingTrajRequest,
    QueryParamsRequest,
    default_genesis,
)
from swechain.store import STRING_KEY, Item, Map, NotFoundError, PageResponse, paginate


class Keeper:
    """Holds the module's params and coding trajectories."""

    def __init__(self, address_codec: Bech32Codec, authority: bytes) -> None:
        try:
            address_codec.bytes_to_string(authority)
        except AddressError as exc:
            raise ValueError(f"invalid authority address {authority!r}: {exc}") from exc
        self.address_codec = address_codec
        self._authority = bytes(authority)
        self.params: Item[Params] = Item(PARAMS_KEY, "params")
        self.coding_traj: Map[str, CodingTraj] = Map(CODING_TRAJ_KEY, "codingTraj", STRING_KEY)

    @property
    def authority(self) -> bytes:
        """The address allowed to update the params."""
        return self._authority

    def init_genesis(self, genesis: GenesisState) -> None:
        for elem in genesis.coding_traj_list:
            self.coding_traj.set(elem.index, elem)
        self.params.set(genesis.params)

    def export_genesis(self) -> GenesisState:
        genesis = default_genesis()
        genesis.params = self.params.get()
        genesis.coding_traj_list = [value for _, value in self.coding_traj.items()]
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

    def _owned(self, index: str, creator: str) -> CodingTraj:
        try:
            current = self.keeper.coding_traj.get(index)
        except NotFoundError:
            raise ERR_KEY_NOT_FOUND.wrap("index not set") from None
        if creator != current.creator:
            raise ERR_UNAUTHORIZED.wrap("incorrect owner")
        return current

    def create_coding_traj(self, msg: MsgCreateCodingTraj) -> None:
        self._check_signer(msg.creator, "invalid address")
        if self.keeper.coding_traj.has(msg.index):
            raise ERR_INVALID_REQUEST.wrap("index already set")
        self.keeper.coding_traj.set(
            msg.index,
            CodingTraj(creator=msg.creator, index=msg.index, title=msg.title, data=msg.data),
        )

    def update_coding_traj(self, msg: MsgUpdateCodingTraj) -> None:
        self._check_signer(msg.creator, "invalid signer address")
        self._owned(msg.index, msg.creator)
        self.keeper.coding_traj.set(
            msg.index,
            CodingTraj(creator=msg.creator, index=msg.index, title=msg.title, data=msg.data),
        )

    def delete_coding_traj(self, msg: MsgDeleteCodingTraj) -> None:
        self._check_signer(msg.creator, "invalid signer address")
        self._owned(msg.index, msg.creator)
        self.keeper.coding_traj.remove(msg.index)

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

    def list_coding_traj(
        self, request: QueryAllCodingTrajRequest | None
    ) -> tuple[list[CodingTraj], PageResponse]:
        if request is None:
            raise _INVALID_REQUEST
        try:
            return paginate(self.keeper.coding_traj, request.pagination)
        except ValueError as exc:
            raise StatusError(StatusCode.INTERNAL, str(exc)) from exc

    def get_coding_traj(self, request: QueryGetCodingTrajRequest | None) -> CodingTraj:
        if request is None:
            raise _INVALID_REQUEST
        try:
            return self.keeper.coding_traj.get(request.index)
        except NotFoundError:
            raise StatusError(StatusCode.NOT_FOUND, "not found") from None