"""Helpers for issuing and pricing TRC10 assets."""

from __future__ import annotations

import math
import re
import struct
from collections.abc import Iterable

MAX_DECIMALS = 6
RATIO_PRECISION = 10**6

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT32_RANGE = (-(1 << 31), (1 << 31) - 1)
_INT64_RANGE = (-(1 << 63), (1 << 63) - 1)


def _parse_int(text: str, limits: tuple[int, int]) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid syntax: {text!r}")
    value = int(text, 10)
    low, high = limits
    if not low <= value <= high:
        raise ValueError(f"value out of range: {text!r}")
    return value


def _parse_float(text: str) -> float:
    if not text or text != text.strip() or "_" in text:
        raise ValueError(f"invalid syntax: {text!r}")
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"invalid syntax: {text!r}") from None


def _to_single(value: float) -> float:
    """Round a float to single precision, as a 32-bit parse would."""
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        raise ValueError(f"value out of range: {value!r}") from None


def validate_decimals(decimals: int) -> int:
    """Check that an asset's decimal precision lies between 0 and 6."""
    if decimals > MAX_DECIMALS or decimals < 0:
        raise ValueError(f"decimals should be >= 0 &&  <= 6, found {decimals}")
    return decimals


def parse_issue_ratio(text: str) -> tuple[int, int]:
    """Parse an ICO price into (trx_num, token_num).

    The ratio is either "TRX:TOKENS" or a decimal number of TRX per token,
    kept to six decimals and turned into the smallest matching whole ratio.
    """
    if ":" in text:
        colon = text.index(":")
        trx_num = _parse_int(text[:colon], _INT32_RANGE)
        token_num = _parse_int(text[colon + 1:], _INT32_RANGE)
        return trx_num, token_num

    ratio = _to_single(_parse_float(text))
    if math.isnan(ratio) or math.isinf(ratio):
        raise ValueError(f"invalid ratio: {text}")
    ratio = int(ratio * RATIO_PRECISION) / RATIO_PRECISION
    token_num = 1
    while float(int(ratio)) != ratio and token_num <= RATIO_PRECISION:
        ratio *= 10
        token_num *= 10
    if token_num > RATIO_PRECISION:
        raise ValueError("invalid ratio")
    return int(ratio), token_num


def parse_frozen_supply(entries: Iterable[str], decimals: int) -> dict[str, str]:
    """Parse "DAYS:AMOUNT" entries into a map of days to amount in base units."""
    frozen: dict[str, str] = {}
    for value in entries:
        parts = value.split(":")
        if len(parts) != 2:
            raise ValueError(f"invalid frozen supply [{' '.join(parts)}]")
        days, amount_text = parts
        if frozen.get(days):
            raise ValueError(
                f"frozen supply date colision {days}:{frozen[days]} -> {value}"
            )
        try:
            amount = _parse_float(amount_text)
        except ValueError:
            raise ValueError(f"invalid frozen supply: {value}") from None
        scaled = amount * 10.0**decimals
        if math.isnan(scaled) or math.isinf(scaled):
            raise ValueError(f"invalid frozen supply: {value}")
        frozen[days] = str(int(scaled))
    return frozen


def scale_total_supply(total, decimals: int) -> int:
    """Return the total supply expressed in the asset's smallest unit."""
    if isinstance(total, str):
        total = _parse_int(total, _INT64_RANGE)
    return int(float(total) * 10.0**decimals)


def token_price(trx_num: int, num: int) -> float:
    """Return the TRX price of one token from an issue's trx_num/num ratio."""
    if num == 0:
        if trx_num == 0:
            return math.nan
        return math.copysign(math.inf, trx_num)
    return float(trx_num) / float(num)