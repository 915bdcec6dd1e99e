import base64

import pytest

from tronkit.address import (
    ADDRESS_LENGTH,
    TRON_BYTE_PREFIX,
    Address,
    base58_to_address,
    base64_to_address,
    big_to_address,
    hex_to_address,
    pubkey_to_address,
)

VALID = "TSvT6Bg3siokv3dbdtt9o4oM1CTXmymGn1"
OTHER = "TEvHMZWyfjCAdDJEKYxYVL8rRpigddLC1R"


def test_scan_valid():
    valid = base58_to_address(VALID)
    a = Address()
    a.scan(bytes(valid))
    assert bytes(a) == bytes(valid)


def test_scan_invalid_type():
    a = Address()
    with pytest.raises(TypeError):
        a.scan("not a byte slice")


@pytest.mark.parametrize("length", [4, 22])
def test_scan_invalid_length(length):
    a = Address()
    with pytest.raises(ValueError):
        a.scan(bytes(length))
    assert len(a) == 0


def test_base58_round_trip():
    addr = base58_to_address(VALID)
    assert len(addr) == ADDRESS_LENGTH
    assert addr[0] == TRON_BYTE_PREFIX
    assert str(addr) == VALID


def test_base58_bad_checksum():
    with pytest.raises(ValueError):
        base58_to_address(VALID[:-1] + "2")


def test_base58_bad_character():
    with pytest.raises(ValueError):
        base58_to_address("T0O")


def test_hex_to_address_matches_base58():
    addr = hex_to_address("0x41364b03e0815687edaf90b81ff58e496dea7383d7")
    assert str(addr) == OTHER
    assert addr.hex() == "0x41364b03e0815687edaf90b81ff58e496dea7383d7"


def test_hex_to_address_invalid():
    assert hex_to_address("zz") is None


def test_hex_of_empty():
    assert Address().hex() == "0x0"
    assert str(Address()) == ""


def test_base64_round_trip():
    addr = base58_to_address(VALID)
    encoded = base64.b64encode(bytes(addr)).decode()
    assert base64_to_address(encoded) == addr


def test_base64_invalid():
    with pytest.raises(ValueError):
        base64_to_address("@@@")


def test_big_to_address():
    addr = big_to_address(5)
    assert len(addr) == ADDRESS_LENGTH
    assert str(addr) == "5"
    assert str(big_to_address(0)) == "0"


def test_big_to_address_too_large():
    with pytest.raises(ValueError):
        big_to_address(1 << (8 * ADDRESS_LENGTH))


def test_value_is_raw_bytes():
    addr = base58_to_address(VALID)
    assert addr.value() == bytes(addr)


def test_pubkey_to_address_generator_point():
    x = 0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798
    y = 0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8
    addr = pubkey_to_address((x, y))
    assert addr.hex() == "0x417e5f4552091a69125d5dfcb7b8c2659029395bdf"
    raw = b"\x04" + x.to_bytes(32, "big") + y.to_bytes(32, "big")
    assert pubkey_to_address(raw) == addr


def test_pubkey_to_address_bad_length():
    with pytest.raises(ValueError):
        pubkey_to_address(b"\x01" * 10)