import pytest

from tronkit.exchange import expected_trade_amount, normalize_token, validate_pair


@pytest.mark.parametrize("alias", ["TRX", "0"])
def test_normalize_trx_aliases(alias):
    assert normalize_token(alias, "2") == ("_", 2_000_000.0)


def test_normalize_other_token_unchanged():
    assert normalize_token("1000001", "12.5") == ("1000001", 12.5)


def test_normalize_accepts_numbers():
    assert normalize_token("TRX", 3) == normalize_token("TRX", "3")


@pytest.mark.parametrize("amount", ["0", "-1", "abc", "", " 1", "1_0"])
def test_normalize_rejects_bad_amounts(amount):
    with pytest.raises(ValueError):
        normalize_token("1000001", amount)


def test_validate_pair_same_id():
    with pytest.raises(ValueError, match="token ID cannot be the same"):
        validate_pair("1000001", "1", "1000001", "2")


def test_validate_pair_same_id_checked_before_amount():
    with pytest.raises(ValueError, match="cannot be the same"):
        validate_pair("1000001", "-1", "1000001", "2")


@pytest.mark.parametrize("a1,a2", [("0", "1"), ("1", "-2")])
def test_validate_pair_non_positive(a1, a2):
    with pytest.raises(ValueError, match="invalid token amount"):
        validate_pair("1000001", a1, "1000002", a2)


def test_validate_pair_unparsable_amount():
    with pytest.raises(ValueError):
        validate_pair("1000001", "x", "1000002", "1")


def test_validate_pair_normalizes_trx():
    first, second = validate_pair("TRX", "1", "1000002", "5")
    assert first == normalize_token("TRX", "1")
    assert second == ("1000002", 5.0)


def test_validate_pair_trx_and_zero_are_distinct_names():
    first, second = validate_pair("TRX", "1", "0", "1")
    assert first[0] == second[0] == "_"


def test_expected_amount_symmetric():
    a = expected_trade_amount("A", 500, "A", 1000, "B", 3000)
    b = expected_trade_amount("A", 500, "B", 3000, "A", 1000)
    assert a == b


def test_expected_amount_worked_example():
    assert expected_trade_amount("A", 1000, "A", 1000, "B", 1000) == 500


def test_expected_amount_below_spot_value():
    amount = 200
    result = expected_trade_amount("B", amount, "A", 5000, "B", 2000)
    assert 0 < result < amount * 5000 / 2000


def test_expected_amount_bytes_ids():
    assert expected_trade_amount("_", 10, b"_", 100, b"1000001", 100) == expected_trade_amount(
        "_", 10, "_", 100, "1000001", 100
    )


def test_expected_amount_unknown_token():
    with pytest.raises(ValueError, match="does not match"):
        expected_trade_amount("C", 10, "A", 100, "B", 100)


def test_expected_amount_empty_other_side():
    assert expected_trade_amount("A", 10, "A", 100, "B", 0) == 0