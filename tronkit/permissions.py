"""Parsing of account command arguments: amounts, votes, permissions, messages."""

from __future__ import annotations

import math
import re
from collections.abc import Iterable

from Crypto.Hash import keccak

from tronkit.address import base58_to_address

SUN_PER_TRX = 1_000_000
EXCLUDED_OPERATIONS = frozenset({"UpdateBrokerageContract", "ShieldedTransferContract"})

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def _parse_int64(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid syntax: {text!r}")
    value = int(text, 10)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"value out of range: {text!r}")
    return value


def _parse_float(value) -> float:
    if isinstance(value, str):
        if not value or value != value.strip() or "_" in value:
            raise ValueError(f"invalid amount: {value!r}")
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"invalid amount: {value!r}") from None
    return float(value)


def trx_to_sun(value) -> int:
    """Convert a TRX amount (number or decimal text) to whole sun, truncating."""
    amount = _parse_float(value)
    if math.isnan(amount) or math.isinf(amount):
        raise ValueError(f"invalid amount: {value!r}")
    return int(amount * SUN_PER_TRX)


def parse_votes(entries: Iterable[str]) -> dict[str, int]:
    """Parse "WITNESS:COUNT" entries into a map of witness address to vote count."""
    votes: dict[str, int] = {}
    for vote in entries:
        parts = vote.split(":")
        if len(parts) != 2:
            raise ValueError(f"invalid vote [{' '.join(parts)}]")
        witness, count_text = parts
        previous = votes.get(witness, 0)
        if previous > 0:
            raise ValueError(f"vote colision {witness}:{previous} -> {vote}")
        try:
            address = base58_to_address(witness)
        except ValueError as exc:
            raise ValueError(f"invalid address {witness}. {exc}") from exc
        try:
            count = _parse_int64(count_text)
        except ValueError as exc:
            raise ValueError(f"invalid vote count {count_text}. {exc}") from exc
        votes[str(address)] = count
    return votes


def parse_key_weights(text: str) -> dict[str, int]:
    """Parse "ADDRESS1-WEIGHT+ADDRESS2-WEIGHT" into a map of key to weight."""
    keys: dict[str, int] = {}
    for key in text.split("+"):
        parts = key.split("-")
        if len(parts) != 2:
            raise ValueError(f"invalid key: {key}")
        try:
            keys[parts[0]] = _parse_int64(parts[1])
        except ValueError:
            raise ValueError(f"invalid key: {key}") from None
    return keys


def _threshold(text: str) -> int:
    try:
        return _parse_int64(text)
    except ValueError:
        raise ValueError(f"invalid threshold: {text}") from None


def parse_permissions(entries, contract_types: Iterable[str]):
    """Parse "TYPE:THRESHOLD:KEYS" rules into (owner, witness, actives).

    TYPE is O for owner, W for witness or A for active, in either case.
    Owner and witness are None when not given. Every active permission is
    allowed all contract types except brokerage updates and shielded transfers.
    """
    entries = list(entries)
    if not entries:
        raise ValueError("at least one rule is expected")
    contract_types = list(contract_types)

    owner = None
    witness = None
    actives: list[dict] = []
    actives_counter = 0

    for rule in entries:
        parts = rule.split(":")
        if len(parts) != 3:
            raise ValueError(f"invalid format: {rule}")
        kind, threshold_text, keys_text = parts
        if kind in ("O", "o"):
            if owner is not None:
                raise ValueError("can have only one owner permission")
            owner = {
                "name": "owner",
                "threshold": _threshold(threshold_text),
                "keys": parse_key_weights(keys_text),
            }
        elif kind in ("W", "w"):
            if witness is not None:
                raise ValueError("can have only one witness permission")
            witness = {
                "name": "witness",
                "threshold": _threshold(threshold_text),
                "keys": parse_key_weights(keys_text),
            }
        elif kind in ("A", "a"):
            threshold = _threshold(threshold_text)
            keys = parse_key_weights(keys_text)
            operations = {
                name: True for name in contract_types if name not in EXCLUDED_OPERATIONS
            }
            actives.append(
                {
                    "name": f"active{actives_counter}",
                    "threshold": threshold,
                    "keys": keys,
                    "operations": operations,
                }
            )
        else:
            raise ValueError(f"invalid type: {kind}")

    return owner, witness, actives


def prepare_message(message, hash_message: bool) -> bytes:
    """Return the bytes to sign, replaced by their Keccak-256 hash if asked."""
    data = message.encode() if isinstance(message, str) else bytes(message)
    if hash_message:
        data = keccak.new(digest_bits=256, data=data).digest()
    return data