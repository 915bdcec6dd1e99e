"""Amount handling for TRC10 bancor exchanges."""

from __future__ import annotations

import math

TRX_TOKEN_ID = "_"
TRX_ALIASES = ("TRX", "0")
TRX_DECIMALS = 6


def _parse_amount(value) -> float:
    if isinstance(value, str):
        if not value or value != value.strip() or "_" in value:
            raise ValueError(f"invalid token amount: {value!r}")
        try:
            amount = float(value)
        except ValueError:
            raise ValueError(f"invalid token amount: {value!r}") from None
    else:
        amount = float(value)
    if math.isnan(amount):
        raise ValueError(f"invalid token amount: {value!r}")
    return amount


def _token_text(token_id) -> str:
    if isinstance(token_id, (bytes, bytearray, memoryview)):
        return bytes(token_id).decode()
    return str(token_id)


def normalize_token(token_id: str, amount) -> tuple[str, float]:
    """Return the exchange token id and amount, with TRX expressed in sun.

    "TRX" and "0" both name TRX, whose exchange id is "_". Amounts must be
    positive. Other tokens keep their id and amount unchanged.
    """
    value = _parse_amount(amount)
    if value <= 0:
        raise ValueError("invalid token amount")
    if token_id in TRX_ALIASES:
        return TRX_TOKEN_ID, value * 10.0**TRX_DECIMALS
    return token_id, value


def validate_pair(token1: str, amount1, token2: str, amount2):
    """Check a token pair for a new exchange and return both normalized.

    The result is ((id1, amount1), (id2, amount2)) as given by normalize_token.
    """
    value1 = _parse_amount(amount1)
    value2 = _parse_amount(amount2)
    if token1 == token2:
        raise ValueError("token ID cannot be the same")
    if value1 <= 0 or value2 <= 0:
        raise ValueError("invalid token amount")
    return normalize_token(token1, value1), normalize_token(token2, value2)


def expected_trade_amount(
    token_id,
    amount,
    first_token_id,
    first_balance,
    second_token_id,
    second_balance,
) -> int:
    """Estimate how much of the other token a trade returns, rounded to nearest.

    ``token_id`` must be one of the exchange's two tokens; ``amount`` is what
    is sold, in the token's smallest unit.
    """
    token = _token_text(token_id)
    first = _token_text(first_token_id)
    second = _token_text(second_token_id)
    value = float(amount)
    if token == first:
        numerator = float(first_balance) + value
        denominator = float(second_balance)
    elif token == second:
        numerator = float(second_balance) + value
        denominator = float(first_balance)
    else:
        raise ValueError(f"Token ID provided does not match excahnge {first}/{second}")

    if denominator == 0:
        if numerator == 0:
            raise ValueError("exchange has no liquidity")
        return 0
    ratio = numerator / denominator
    if ratio == 0:
        raise ValueError("exchange has no liquidity")
    return int(math.floor(value / ratio + 0.5))