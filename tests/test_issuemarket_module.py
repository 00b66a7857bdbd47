import json

import pytest

from swechain.address import Bech32Codec, module_address
from swechain.issuemarket.keeper import MsgServer
from swechain.issuemarket.module import AppModule, provide_module
from swechain.issuemarket.types import (
    Auction,
    Bid,
    GenesisState,
    MsgCreateAuction,
    default_genesis,
)
from swechain.store import NotFoundError


@pytest.fixture
def codec():
    return Bech32Codec()


@pytest.fixture
def module(codec):
    _, app = provide_module(codec)
    return app


def _sample_genesis_json():
    genesis = GenesisState(
        auction_list=[Auction(id=0, issue="a"), Auction(id=1, issue="b")],
        auction_count=2,
        bid_list=[Bid(index="0"), Bid(index="1", amount="10")],
    )
    return json.dumps(genesis.to_dict())


def test_default_genesis_decodes_to_default_state(module):
    raw = module.default_genesis()
    assert GenesisState.from_dict(json.loads(raw)) == default_genesis()


def test_validate_genesis_rejects_duplicated_auction(module):
    raw = json.dumps(
        GenesisState(auction_list=[Auction(id=0), Auction(id=0)], auction_count=2).to_dict()
    )
    with pytest.raises(ValueError, match="duplicated id for auction"):
        module.validate_genesis(raw)


def test_validate_genesis_rejects_id_beyond_count(module):
    raw = json.dumps(GenesisState(auction_list=[Auction(id=1)], auction_count=0).to_dict())
    with pytest.raises(ValueError, match="auction id should be lower or equal"):
        module.validate_genesis(raw)


def test_validate_genesis_rejects_bad_json(module):
    with pytest.raises(ValueError, match="failed to unmarshal issuemarket genesis state"):
        module.validate_genesis("{not json")


def test_init_genesis_rejects_unknown_field(module):
    with pytest.raises(ValueError, match="failed to unmarshal issuemarket genesis state"):
        module.init_genesis(json.dumps({"bogus": 1}))


def test_init_then_export_round_trip(module):
    raw = _sample_genesis_json()
    module.init_genesis(raw)
    exported = json.loads(module.export_genesis())
    assert exported == json.loads(raw)


def test_export_feeds_a_fresh_module(codec, module):
    module.init_genesis(_sample_genesis_json())
    exported = module.export_genesis()
    _, other = provide_module(codec)
    other.init_genesis(exported)
    assert other.export_genesis() == exported


def test_export_without_params_fails(module):
    with pytest.raises(NotFoundError):
        module.export_genesis()


def test_messages_show_up_in_export(codec):
    keeper, app = provide_module(codec)
    app.init_genesis(app.default_genesis())
    creator = codec.bytes_to_string(b"signerAddr__________________")
    new_id = MsgServer(keeper).create_auction(MsgCreateAuction(creator=creator, issue="x"))
    exported = GenesisState.from_dict(json.loads(app.export_genesis()))
    assert exported.auction_count == new_id + 1
    assert [a.creator for a in exported.auction_list] == [creator]


def test_blocks_leave_state_unchanged(module):
    module.init_genesis(_sample_genesis_json())
    before = module.export_genesis()
    module.begin_block()
    module.end_block()
    assert module.export_genesis() == before


def test_consensus_version(module):
    assert module.consensus_version() == 1


def test_autocli_query_commands(module):
    query = module.autocli_options()["query"]
    assert [c.rpc_method for c in query] == [
        "Params",
        "ListAuction",
        "GetAuction",
        "ListBid",
        "GetBid",
    ]
    get_auction = next(c for c in query if c.rpc_method == "GetAuction")
    assert get_auction.alias == ("show-auction",)
    assert get_auction.positional_args == ("id",)


def test_autocli_tx_commands(module):
    tx = {c.rpc_method: c for c in module.autocli_options()["tx"]}
    assert tx["UpdateParams"].skip
    assert not tx["CreateBid"].skip
    assert tx["CreateBid"].positional_args == (
        "index",
        "auctionId",
        "bidder",
        "amount",
        "description",
    )
    assert tx["UpdateAuction"].use == "update-auction [id] [issue] [description] [status] [winner]"
    assert tx["DeleteBid"].short == "Delete bid"


def test_provide_module_defaults_to_gov_authority(codec):
    keeper, app = provide_module(codec)
    assert keeper.authority == module_address("gov")
    assert app.keeper is keeper


def test_provide_module_with_bech32_authority(codec):
    raw = b"authority___________"
    keeper, _ = provide_module(codec, codec.bytes_to_string(raw))
    assert keeper.authority == raw


def test_provide_module_with_module_name_authority(codec):
    keeper, _ = provide_module(codec, "distribution")
    assert keeper.authority == module_address("distribution")


def test_app_module_wraps_given_keeper(codec):
    keeper, _ = provide_module(codec)
    app = AppModule(keeper)
    app.init_genesis(_sample_genesis_json())
    assert keeper.bid.get("1").amount == "10"