"""State, message and query types of the ipfs module."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any

from swechain.errors import register
from swechain.store import PageRequest

MODULE_NAME = "ipfs"
STORE_KEY = MODULE_NAME
GOV_MODULE_NAME = "gov"

PARAMS_KEY = "p_ipfs"
CODING_TRAJ_KEY = "CodingTraj/value/"

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
class CodingTraj:
    """A coding trajectory record stored under its index."""

    index: str = ""
    title: str = ""
    data: str = ""
    creator: str = ""


def _build(cls: type, data: Any, what: str) -> Any:
    if not isinstance(data, dict):
        raise ValueError(f"{what} must be an object, got {type(data).__name__}")
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"unknown field {unknown[0]!r} in {what}")
    return cls(**data)


@dataclass
class GenesisState:
    """The module's exported or initial state."""

    params: Params = field(default_factory=Params)
    coding_traj_list: list[CodingTraj] = field(default_factory=list)

    def validate(self) -> None:
        """Raise ValueError if any index repeats or the params are invalid."""
        seen: set[str] = set()
        for elem in self.coding_traj_list:
            index = str(elem.index)
            if index in seen:
                raise ValueError("duplicated index for codingTraj")
            seen.add(index)
        self.params.validate()

    def to_dict(self) -> dict[str, Any]:
        return {
            "params": asdict(self.params),
            "coding_traj_list": [asdict(item) for item in self.coding_traj_list],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GenesisState":
        if not isinstance(data, dict):
            raise ValueError("genesis state must be an object")
        unknown = sorted(set(data) - {"params", "coding_traj_list"})
        if unknown:
            raise ValueError(f"unknown field {unknown[0]!r} in genesis state")
        params = _build(Params, data.get("params") or {}, "params")
        items = data.get("coding_traj_list") or []
        if not isinstance(items, list):
            raise ValueError("coding_traj_list must be a list")
        return cls(
            params=params,
            coding_traj_list=[_build(CodingTraj, item, "codingTraj") for item in items],
        )


@dataclass
class MsgCreateCodingTraj:
    creator: str = ""
    index: str = ""
    title: str = ""
    data: str = ""


@dataclass
class MsgUpdateCodingTraj:
    creator: str = ""
    index: str = ""
    title: str = ""
    data: str = ""


@dataclass
class MsgDeleteCodingTraj:
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
class QueryGetCodingTrajRequest:
    index: str = ""


@dataclass(frozen=True)
class QueryAllCodingTrajRequest:
    pagination: PageRequest | None = None


MSG_TYPES = (
    MsgCreateCodingTraj,
    MsgUpdateCodingTraj,
    MsgDeleteCodingTraj,
    MsgUpdateParams,
)


def default_params() -> Params:
    return Params()


def default_genesis() -> GenesisState:
    return GenesisState(params=default_params(), coding_traj_list=[])