"""Detailed account view as shown by the account commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class ResourceCode(IntEnum):
    """Resource that frozen TRX is exchanged for."""

    BANDWIDTH = 0
    ENERGY = 1
    TRON_POWER = 2


@dataclass
class FrozenResource:
    """TRX frozen by an account, possibly delegated to another."""

    type: ResourceCode
    amount: int
    delegate_to: str = ""
    expire: int = 0


@dataclass
class UnfrozenResource:
    """TRX being released from freezing."""

    type: ResourceCode
    amount: int
    expire: int = 0


def _frozen_dict(resource: FrozenResource) -> dict:
    return {
        "Type": int(resource.type),
        "Amount": resource.amount,
        "DelegateTo": resource.delegate_to,
        "Expire": resource.expire,
    }


def _unfrozen_dict(resource: UnfrozenResource) -> dict:
    return {
        "Type": int(resource.type),
        "Amount": resource.amount,
        "Expire": resource.expire,
    }


@dataclass
class AccountDetails:
    """Balances, resources and votes of one account."""

    address: str = ""
    account_type: str = ""
    name: str = ""
    id: str = ""
    balance: int = 0
    allowance: int = 0
    last_withdraw: int = 0
    is_witness: bool = False
    is_elected: bool = False
    assets: dict[str, int] = field(default_factory=dict)
    tron_power: int = 0
    tron_power_used: int = 0
    frozen_balance: int = 0
    frozen_resources: list[FrozenResource] = field(default_factory=list)
    frozen_balance_v2: int = 0
    frozen_resources_v2: list[FrozenResource] = field(default_factory=list)
    unfrozen_resources: list[UnfrozenResource] = field(default_factory=list)
    votes: dict[str, int] = field(default_factory=dict)
    bandwidth_total: int = 0
    bandwidth_used: int = 0
    energy_total: int = 0
    energy_used: int = 0
    rewards: int = 0
    withdrawable_balance: int = 0
    unfreeze_left: int = 0
    max_can_delegate_bandwidth: int = 0
    max_can_delegate_energy: int = 0

    def to_dict(self) -> dict:
        """Return the JSON-ready form with the wire field names."""
        return {
            "address": self.address,
            "type": self.account_type,
            "name": self.name,
            "id": self.id,
            "balance": self.balance,
            "allowance": self.allowance,
            "lastWithdraw": self.last_withdraw,
            "isWitness": self.is_witness,
            "isElected": self.is_elected,
            "assetList": dict(self.assets),
            "tronPower": self.tron_power,
            "tronPowerUsed": self.tron_power_used,
            "frozenBalance": self.frozen_balance,
            "frozenList": [_frozen_dict(r) for r in self.frozen_resources],
            "frozenBalanceV2": self.frozen_balance_v2,
            "frozenListV2": [_frozen_dict(r) for r in self.frozen_resources_v2],
            "unfrozenList": [_unfrozen_dict(r) for r in self.unfrozen_resources],
            "voteList": dict(self.votes),
            "bandwidthTotal": self.bandwidth_total,
            "bandwidthUsed": self.bandwidth_used,
            "energyTotal": self.energy_total,
            "energyUsed": self.energy_used,
            "rewards": self.rewards,
            "withdrawableBalance": self.withdrawable_balance,
            "countUnfreezeLeft": self.unfreeze_left,
            "maxCanDelegateBandwidth": self.max_can_delegate_bandwidth,
            "maxCanDelegateEnergy": self.max_can_delegate_energy,
        }