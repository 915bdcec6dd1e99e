"""Helpers for network proposals and super representatives (witnesses)."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone

from tronkit.address import Address

BROKERAGE_MIN = 0
BROKERAGE_MAX = 100

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


def _field(obj, name: str, default=None):
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _from_millis(milliseconds: int) -> datetime:
    seconds = int(milliseconds)
    # Truncate toward zero, as whole seconds are kept from a millisecond stamp.
    seconds = seconds // 1000 if seconds >= 0 else -((-seconds) // 1000)
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def parse_proposal_params(entries: Iterable[str]) -> dict[int, int]:
    """Parse "ID:VALUE" entries into a map of parameter id to proposed value."""
    proposals: dict[int, int] = {}
    for proposal in entries:
        parts = proposal.split(":")
        if len(parts) != 2:
            raise ValueError(f"invalid proposal [{' '.join(parts)}]")
        id_text, value_text = parts
        try:
            param_id = _parse_int(id_text, _INT64_RANGE)
        except ValueError as exc:
            raise ValueError(f"invalid param ID: {id_text} {exc}") from exc
        previous = proposals.get(param_id, 0)
        if previous > 0:
            raise ValueError(f"proposal colision {param_id}:{previous} -> {proposal}")
        try:
            value = _parse_int(value_text, _INT64_RANGE)
        except ValueError as exc:
            raise ValueError(f"invalid vote count {value_text}. {exc}") from exc
        proposals[param_id] = value
    return proposals


def filter_proposals(proposals, new_only: bool = False, now: datetime | None = None) -> list[dict]:
    """Summarise proposals, newest first.

    Each proposal is a mapping or object with proposal_id, proposer_address,
    create_time and expiration_time (milliseconds), parameters and approvals.
    With new_only, proposals that expired before ``now`` are left out.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    summaries: list[dict] = []
    for proposal in proposals:
        expiration = _from_millis(_field(proposal, "expiration_time", 0))
        expired = expiration < now
        if new_only and expired:
            continue
        summaries.append(
            {
                "ID": _field(proposal, "proposal_id", 0),
                "Proposer": str(Address(_field(proposal, "proposer_address", b"") or b"")),
                "CreateTime": _from_millis(_field(proposal, "create_time", 0)),
                "ExpirationTime": expiration,
                "Expired": expired,
                "Parameters": dict(_field(proposal, "parameters", {}) or {}),
                "Approvals": [str(Address(a)) for a in _field(proposal, "approvals", []) or []],
            }
        )
    summaries.reverse()
    return summaries


def witness_productivity(produced: int, missed: int) -> float:
    """Return the percentage of scheduled blocks a witness produced."""
    total = produced + missed
    if total > 0:
        return produced / total * 100
    return 0.0


def parse_brokerage(text: str) -> int:
    """Parse a brokerage commission percentage in the range 0 to 100."""
    value = _parse_int(text, _INT32_RANGE)
    if not BROKERAGE_MIN <= value <= BROKERAGE_MAX:
        raise ValueError(
            f"invalid brokerage range {BROKERAGE_MIN} <= X <= {BROKERAGE_MAX}"
        )
    return value