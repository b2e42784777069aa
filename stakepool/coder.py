"""Account kind dispatch: maps each known account kind to its decoder."""

from __future__ import annotations

from enum import Enum
from typing import Any

from stakepool.state import (
    Identifier,
    RewardDistributor,
    RewardEntry,
    StakeAuthorizationRecord,
    StakeEntry,
    StakePool,
)


class AccountKind(Enum):
    STAKE_POOL = "stakePool"
    STAKE_ENTRY = "stakeEntry"
    IDENTIFIER = "identifier"
    STAKE_AUTHORIZATION_RECORD = "stakeAuthorizationRecord"
    REWARD_DISTRIBUTOR = "rewardDistributor"
    REWARD_ENTRY = "rewardEntry"


_RECORD_TYPES: dict[AccountKind, Any] = {
    AccountKind.STAKE_POOL: StakePool,
    AccountKind.STAKE_ENTRY: StakeEntry,
    AccountKind.IDENTIFIER: Identifier,
    AccountKind.STAKE_AUTHORIZATION_RECORD: StakeAuthorizationRecord,
    AccountKind.REWARD_DISTRIBUTOR: RewardDistributor,
    AccountKind.REWARD_ENTRY: RewardEntry,
}


def decode(kind: AccountKind, data: bytes) -> Any:
    """Decode raw account bytes as ``kind``. Raises DecodeError on any mismatch."""
    return _RECORD_TYPES[kind].from_bytes(data)
