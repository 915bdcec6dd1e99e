"""Tron account addresses and their textual encodings."""

from __future__ import annotations

import base64
import binascii
import hashlib

from Crypto.Hash import keccak

HASH_LENGTH = 32
ADDRESS_LENGTH = 21
ADDRESS_LENGTH_BASE58 = 34
TRON_BYTE_PREFIX = 0x41

_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_ALPHABET_INDEX = {char: index for index, char in enumerate(_ALPHABET)}


def _b58encode(data: bytes) -> str:
    number = int.from_bytes(data, "big")
    digits = []
    while number:
        number, remainder = divmod(number, 58)
        digits.append(_ALPHABET[remainder])
    leading_zeros = len(data) - len(data.lstrip(b"\0"))
    return "1" * leading_zeros + "".join(reversed(digits))


def _b58decode(text: str) -> bytes:
    number = 0
    for char in text:
        try:
            number = number * 58 + _ALPHABET_INDEX[char]
        except KeyError:
            raise ValueError(f"invalid base58 character {char!r}") from None
    body = number.to_bytes((number.bit_length() + 7) // 8, "big")
    leading_ones = len(text) - len(text.lstrip("1"))
    return b"\0" * leading_ones + body


def _checksum(data: bytes) -> bytes:
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()[:4]


def _encode_check(data: bytes) -> str:
    return _b58encode(data + _checksum(data))


def _decode_check(text: str) -> bytes:
    raw = _b58decode(text)
    if len(raw) <= 4:
        raise ValueError("b58 check error")
    payload, check = raw[:-4], raw[-4:]
    if _checksum(payload) != check:
        raise ValueError("b58 check error")
    return payload


def _keccak256(data: bytes) -> bytes:
    return keccak.new(digest_bits=256, data=data).digest()


class Address:
    """A Tron account address: normally 21 bytes starting with 0x41."""

    __slots__ = ("_data",)

    def __init__(self, data: bytes | bytearray | memoryview = b"") -> None:
        self._data = bytes(data)

    def __bytes__(self) -> bytes:
        return self._data

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, index):
        return self._data[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Address):
            return self._data == other._data
        if isinstance(other, (bytes, bytearray, memoryview)):
            return self._data == bytes(other)
        return NotImplemented

    __hash__ = None  # mutable through scan()

    def __str__(self) -> str:
        if not self._data:
            return ""
        if self._data[0] == 0:
            return str(int.from_bytes(self._data, "big"))
        return _encode_check(self._data)

    def __repr__(self) -> str:
        return f"Address({str(self)!r})"

    def hex(self) -> str:
        """Return the address as a 0x-prefixed hex string."""
        return "0x" + (self._data.hex() or "0")

    def scan(self, src: object) -> None:
        """Load the address from a raw database value."""
        if not isinstance(src, (bytes, bytearray, memoryview)):
            raise TypeError(f"can't scan {type(src).__name__} into Address")
        if len(src) != ADDRESS_LENGTH:
            raise ValueError(
                f"can't scan bytes of len {len(src)} into Address, want {ADDRESS_LENGTH}"
            )
        self._data = bytes(src)

    def value(self) -> bytes:
        """Return the raw value stored in a database."""
        return self._data


def base58_to_address(s: str) -> Address:
    """Decode a base58check address string."""
    return Address(_decode_check(s))


def hex_to_address(s: str) -> Address | None:
    """Decode a hex address, with or without 0x prefix; None if it is not hex."""
    if s[:2] in ("0x", "0X"):
        s = s[2:]
    if len(s) % 2:
        s = "0" + s
    try:
        return Address(binascii.unhexlify(s))
    except (binascii.Error, ValueError):
        return None


def base64_to_address(s: str) -> Address:
    """Decode a standard base64 address."""
    return Address(base64.b64decode(s, validate=True))


def big_to_address(value: int) -> Address:
    """Build an address from an integer, left padded with zeros."""
    if value < 0:
        raise ValueError("address value cannot be negative")
    raw = value.to_bytes((value.bit_length() + 7) // 8, "big")
    if len(raw) > ADDRESS_LENGTH:
        raise ValueError(f"value does not fit in {ADDRESS_LENGTH} bytes")
    return Address(raw.rjust(ADDRESS_LENGTH, b"\0"))


def pubkey_to_address(public_key) -> Address:
    """Derive the address of an uncompressed secp256k1 public key.

    The key is either 64 raw bytes (x then y), 65 bytes with a leading 0x04,
    or an (x, y) pair of integers.
    """
    if isinstance(public_key, tuple):
        x, y = public_key
        raw = x.to_bytes(32, "big") + y.to_bytes(32, "big")
    else:
        raw = bytes(public_key)
        if len(raw) == 65 and raw[0] == 0x04:
            raw = raw[1:]
    if len(raw) != 64:
        raise ValueError("public key must be 64 bytes of uncompressed coordinates")
    return Address(bytes([TRON_BYTE_PREFIX]) + _keccak256(raw)[-20:])