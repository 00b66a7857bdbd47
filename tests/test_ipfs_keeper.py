import pytest

from swechain.address import AddressError, Bech32Codec, module_address
from swechain.errors import (
    ERR_INVALID_ADDRESS,
    ERR_INVALID_REQUEST,
    ERR_KEY_NOT_FOUND,
    ERR_UNAUTHORIZED,
    ChainError,
    StatusCode,
    StatusError,
)
from swechain.ipfs.keeper import Keeper, MsgServer, QueryServer
from swechain.ipfs.types import (
    ERR_INVALID_SIGNER,
    GOV_MODULE_NAME,
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
    default_params,
)
from swechain.store import PageRequest

CODEC = Bech32Codec()
CREATOR = CODEC.bytes_to_string(b"signerAddr__________________")
UNAUTHORIZED = CODEC.bytes_to_string(b"unauthorizedAddr___________")


@pytest.fixture
def keeper():
    k = Keeper(CODEC, module_address(GOV_MODULE_NAME))
    k.params.set(default_params())
    return k


def create_n(keeper, n):
    items = [CodingTraj(index=str(i)) for i in range(n)]
    for item in items:
        keeper.coding_traj.set(item.index, item)
    return items


def test_genesis(keeper):
    state = GenesisState(
        params=default_params(),
        coding_traj_list=[CodingTraj(index="0"), CodingTraj(index="1")],
    )
    keeper.init_genesis(state)
    got = keeper.export_genesis()
    assert got.params == state.params
    assert sorted(got.coding_traj_list, key=lambda c: c.index) == state.coding_traj_list


def test_create(keeper):
    srv = MsgServer(keeper)
    for i in range(5):
        srv.create_coding_traj(MsgCreateCodingTraj(creator=CREATOR, index=str(i)))
        assert keeper.coding_traj.get(str(i)).creator == CREATOR


def test_create_duplicate(keeper):
    srv = MsgServer(keeper)
    srv.create_coding_traj(MsgCreateCodingTraj(creator=CREATOR, index="0"))
    with pytest.raises(ChainError) as info:
        srv.create_coding_traj(MsgCreateCodingTraj(creator=CREATOR, index="0"))
    assert info.value.matches(ERR_INVALID_REQUEST)


CASES = [
    ("invalid", "0", ERR_INVALID_ADDRESS),
    (UNAUTHORIZED, "0", ERR_UNAUTHORIZED),
    (CREATOR, "100000", ERR_KEY_NOT_FOUND),
]


@pytest.mark.parametrize("creator, index, error", CASES)
def test_update_errors(keeper, creator, index, error):
    srv = MsgServer(keeper)
    srv.create_coding_traj(MsgCreateCodingTraj(creator=CREATOR, index="0"))
    with pytest.raises(ChainError) as info:
        srv.update_coding_traj(MsgUpdateCodingTraj(creator=creator, index=index))
    assert info.value.matches(error)


def test_update_completed(keeper):
    srv = MsgServer(keeper)
    srv.create_coding_traj(MsgCreateCodingTraj(creator=CREATOR, index="0"))
    srv.update_coding_traj(MsgUpdateCodingTraj(creator=CREATOR, index="0", title="new"))
    stored = keeper.coding_traj.get("0")
    assert stored.creator == CREATOR
    assert stored.title == "new"


@pytest.mark.parametrize("creator, index, error", CASES)
def test_delete_errors(keeper, creator, index, error):
    srv = MsgServer(keeper)
    srv.create_coding_traj(MsgCreateCodingTraj(creator=CREATOR, index="0"))
    with pytest.raises(ChainError) as info:
        srv.delete_coding_traj(MsgDeleteCodingTraj(creator=creator, index=index))
    assert info.value.matches(error)
    assert keeper.coding_traj.has("0")


def test_delete_completed(keeper):
    srv = MsgServer(keeper)
    srv.create_coding_traj(MsgCreateCodingTraj(creator=CREATOR, index="0"))
    srv.delete_coding_traj(MsgDeleteCodingTraj(creator=CREATOR, index="0"))
    assert keeper.coding_traj.has("0") is False


def test_update_params_invalid_authority(keeper):
    srv = MsgServer(keeper)
    with pytest.raises(AddressError, match="invalid authority"):
        srv.update_params(MsgUpdateParams(authority="invalid", params=default_params()))


def test_update_params_wrong_signer(keeper):
    srv = MsgServer(keeper)
    with pytest.raises(ChainError) as info:
        srv.update_params(MsgUpdateParams(authority=CREATOR, params=default_params()))
    assert info.value.matches(ERR_INVALID_SIGNER)
    assert "invalid authority" in str(info.value)


@pytest.mark.parametrize("params", [Params(), default_params()])
def test_update_params_ok(keeper, params):
    srv = MsgServer(keeper)
    authority = CODEC.bytes_to_string(keeper.authority)
    srv.update_params(MsgUpdateParams(authority=authority, params=params))
    assert keeper.params.get() == params


def test_query_single(keeper):
    qs = QueryServer(keeper)
    msgs = create_n(keeper, 2)
    assert qs.get_coding_traj(QueryGetCodingTrajRequest(index=msgs[0].index)) == msgs[0]
    assert qs.get_coding_traj(QueryGetCodingTrajRequest(index=msgs[1].index)) == msgs[1]
    with pytest.raises(StatusError) as info:
        qs.get_coding_traj(QueryGetCodingTrajRequest(index="100000"))
    assert info.value == StatusError(StatusCode.NOT_FOUND, "not found")
    with pytest.raises(StatusError) as info:
        qs.get_coding_traj(None)
    assert info.value == StatusError(StatusCode.INVALID_ARGUMENT, "invalid request")


def test_query_paginated_by_offset(keeper):
    qs = QueryServer(keeper)
    msgs = create_n(keeper, 5)
    for offset in range(0, len(msgs), 2):
        items, _ = qs.list_coding_traj(
            QueryAllCodingTrajRequest(PageRequest(offset=offset, limit=2))
        )
        assert len(items) <= 2
        assert all(item in msgs for item in items)


def test_query_paginated_by_key(keeper):
    qs = QueryServer(keeper)
    msgs = create_n(keeper, 5)
    next_key = None
    seen = []
    for _ in range(0, len(msgs), 2):
        items, page = qs.list_coding_traj(
            QueryAllCodingTrajRequest(PageRequest(key=next_key, limit=2))
        )
        assert len(items) <= 2
        seen.extend(items)
        next_key = page.next_key
    assert seen == msgs


def test_query_paginated_total(keeper):
    qs = QueryServer(keeper)
    msgs = create_n(keeper, 5)
    items, page = qs.list_coding_traj(
        QueryAllCodingTrajRequest(PageRequest(limit=0, count_total=True))
    )
    assert page.total == len(msgs)
    assert sorted(items, key=lambda c: c.index) == msgs


def test_query_list_invalid_request(keeper):
    with pytest.raises(StatusError) as info:
        QueryServer(keeper).list_coding_traj(None)
    assert info.value == StatusError(StatusCode.INVALID_ARGUMENT, "invalid request")


def test_params_query(keeper):
    qs = QueryServer(keeper)
    keeper.params.set(default_params())
    assert qs.params(QueryParamsRequest()) == default_params()


def test_params_query_not_found():
    qs = QueryServer(Keeper(CODEC, module_address(GOV_MODULE_NAME)))
    with pytest.raises(StatusError) as info:
        qs.params(QueryParamsRequest())
    assert info.value.code == StatusCode.NOT_FOUND