import pytest

from tronkit.abi import signature
from tronkit.permissions import (
    parse_key_weights,
    parse_permissions,
    parse_votes,
    prepare_message,
    trx_to_sun,
)

WITNESS_A = "TEvHMZWyfjCAdDJEKYxYVL8rRpigddLC1R"
WITNESS_B = "TSvT6Bg3siokv3dbdtt9o4oM1CTXmymGn1"
CONTRACT_TYPES = [
    "TransferContract",
    "UpdateBrokerageContract",
    "VoteWitnessContract",
    "ShieldedTransferContract",
]


def test_trx_to_sun_whole_amount():
    assert trx_to_sun("1") == 1000000


def test_trx_to_sun_accepts_numbers():
    assert trx_to_sun(2) == trx_to_sun("2")


def test_trx_to_sun_is_symmetric():
    assert trx_to_sun("-3.25") == -trx_to_sun("3.25")


@pytest.mark.parametrize("bad", ["abc", "", " 1", "1_0", "nan", "inf"])
def test_trx_to_sun_rejects_invalid(bad):
    with pytest.raises(ValueError):
        trx_to_sun(bad)


def test_parse_votes_collects_counts():
    votes = parse_votes([f"{WITNESS_A}:100", f"{WITNESS_B}:7"])
    assert votes == {WITNESS_A: 100, WITNESS_B: 7}


def test_parse_votes_empty():
    assert parse_votes([]) == {}


def test_parse_votes_collision():
    with pytest.raises(ValueError, match="vote colision"):
        parse_votes([f"{WITNESS_A}:1", f"{WITNESS_A}:2"])


def test_parse_votes_zero_vote_can_be_replaced():
    assert parse_votes([f"{WITNESS_A}:0", f"{WITNESS_A}:5"]) == {WITNESS_A: 5}


def test_parse_votes_bad_format():
    with pytest.raises(ValueError, match="invalid vote"):
        parse_votes([WITNESS_A])


def test_parse_votes_bad_address():
    with pytest.raises(ValueError, match="invalid address"):
        parse_votes(["notanaddress:1"])


def test_parse_votes_bad_count():
    with pytest.raises(ValueError, match="invalid vote count"):
        parse_votes([f"{WITNESS_A}:many"])


def test_parse_key_weights():
    assert parse_key_weights(f"{WITNESS_A}-1+{WITNESS_B}-2") == {WITNESS_A: 1, WITNESS_B: 2}


@pytest.mark.parametrize("bad", ["A", "A-1-2", "A-x", "A-1+B"])
def test_parse_key_weights_errors(bad):
    with pytest.raises(ValueError, match="invalid key"):
        parse_key_weights(bad)


def test_parse_permissions_owner_and_witness():
    owner, witness, actives = parse_permissions(
        [f"O:2:{WITNESS_A}-1+{WITNESS_B}-1", f"w:1:{WITNESS_B}-1"], CONTRACT_TYPES
    )
    assert owner == {"name": "owner", "threshold": 2, "keys": {WITNESS_A: 1, WITNESS_B: 1}}
    assert witness == {"name": "witness", "threshold": 1, "keys": {WITNESS_B: 1}}
    assert actives == []


def test_parse_permissions_active_operations():
    owner, witness, actives = parse_permissions([f"a:1:{WITNESS_A}-1"], CONTRACT_TYPES)
    assert owner is None and witness is None
    assert len(actives) == 1
    active = actives[0]
    assert active["name"] == "active0"
    assert active["threshold"] == 1
    assert active["keys"] == {WITNESS_A: 1}
    assert active["operations"] == {"TransferContract": True, "VoteWitnessContract": True}


def test_parse_permissions_requires_a_rule():
    with pytest.raises(ValueError, match="at least one rule is expected"):
        parse_permissions([], CONTRACT_TYPES)


def test_parse_permissions_single_owner():
    with pytest.raises(ValueError, match="only one owner"):
        parse_permissions(["O:1:A-1", "o:1:B-1"], CONTRACT_TYPES)


def test_parse_permissions_single_witness():
    with pytest.raises(ValueError, match="only one witness"):
        parse_permissions(["W:1:A-1", "W:1:B-1"], CONTRACT_TYPES)


def test_parse_permissions_bad_format():
    with pytest.raises(ValueError, match="invalid format"):
        parse_permissions(["O:1"], CONTRACT_TYPES)


def test_parse_permissions_bad_type():
    with pytest.raises(ValueError, match="invalid type: X"):
        parse_permissions(["X:1:A-1"], CONTRACT_TYPES)


def test_parse_permissions_bad_threshold():
    with pytest.raises(ValueError, match="invalid threshold: high"):
        parse_permissions(["A:high:A-1"], CONTRACT_TYPES)


def test_prepare_message_plain():
    assert prepare_message("hello", False) == b"hello"
    assert prepare_message(b"hello", False) == b"hello"


def test_prepare_message_hashed():
    method = "transfer(address,uint256)"
    digest = prepare_message(method, True)
    assert len(digest) == 32
    assert digest[:4] == signature(method)
    assert prepare_message(method.encode(), True) == digest