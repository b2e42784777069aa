"""On-chain account data structures for the stake pool and reward distributor programs.

Binary layout matches the Anchor (Borsh) serialization of the program's
#[account] structs: an 8-byte discriminator followed by the fields in
declaration order. Deserialization tolerates extra trailing bytes since
accounts are allocated with slack.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Generic, TypeVar

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from stakepool.discriminator import (
    DISCRIMINATOR_IDENTIFIER,
    DISCRIMINATOR_REWARD_DISTRIBUTOR,
    DISCRIMINATOR_REWARD_ENTRY,
    DISCRIMINATOR_SIZE,
    DISCRIMINATOR_STAKE_AUTHORIZATION_RECORD,
    DISCRIMINATOR_STAKE_ENTRY,
    DISCRIMINATOR_STAKE_POOL,
    validate_discriminator,
)
from stakepool.reader import IncrementalReader

T = TypeVar("T")


class StakeEntryKind(IntEnum):
    PERMISSIONLESS = 0
    PERMISSIONED = 1


class RewardDistributorKind(IntEnum):
    MINT = 1
    TREASURY = 2


@dataclass(frozen=True)
class AccountData(Generic[T]):
    """A decoded account paired with the address it was read from."""

    pubkey: Pubkey
    parsed: T


def _reader(data: bytes, discriminator: bytes) -> IncrementalReader:
    validate_discriminator(data, discriminator)
    return IncrementalReader(bytes(data), DISCRIMINATOR_SIZE)


# ---------------------------------------------------------------------------
# Stake pool program
# ---------------------------------------------------------------------------


@dataclass
class StakePool:
    bump: int  # u8
    identifier: int  # u64
    authority: Pubkey
    requires_creators: list[Pubkey]
    requires_collections: list[Pubkey]
    requires_authorization: bool
    overlay_text: str
    image_uri: str
    reset_on_stake: bool

    DISCRIMINATOR = DISCRIMINATOR_STAKE_POOL

    @classmethod
    def from_bytes(cls, data: bytes) -> StakePool:
        r = _reader(data, cls.DISCRIMINATOR)
        return cls(
            bump=r.read_u8(),
            identifier=r.read_u64(),
            authority=r.read_pubkey(),
            requires_creators=r.read_pubkey_vec(),
            requires_collections=r.read_pubkey_vec(),
            requires_authorization=r.read_bool(),
            overlay_text=r.read_string(),
            image_uri=r.read_string(),
            reset_on_stake=r.read_bool(),
        )


@dataclass
class StakeEntry:
    bump: int  # u8
    pool: Pubkey
    amount: int  # u64
    original_mint: Pubkey
    original_mint_claimed: bool
    last_staker: Pubkey
    last_staked_at: int  # i64 unix seconds
    total_stake_seconds: int  # i64
    stake_mint_claimed: bool
    kind: int  # u8, see StakeEntryKind
    stake_mint: Pubkey | None

    DISCRIMINATOR = DISCRIMINATOR_STAKE_ENTRY

    @classmethod
    def from_bytes(cls, data: bytes) -> StakeEntry:
        r = _reader(data, cls.DISCRIMINATOR)
        return cls(
            bump=r.read_u8(),
            pool=r.read_pubkey(),
            amount=r.read_u64(),
            original_mint=r.read_pubkey(),
            original_mint_claimed=r.read_bool(),
            last_staker=r.read_pubkey(),
            last_staked_at=r.read_i64(),
            total_stake_seconds=r.read_i64(),
            stake_mint_claimed=r.read_bool(),
            kind=r.read_u8(),
            stake_mint=r.read_option(r.read_pubkey),
        )

    @property
    def is_active(self) -> bool:
        """False for closed or never-staked entries (default last staker)."""
        return self.last_staker != Pubkey.default()


@dataclass
class Identifier:
    bump: int  # u8
    count: int  # u64

    DISCRIMINATOR = DISCRIMINATOR_IDENTIFIER

    @classmethod
    def from_bytes(cls, data: bytes) -> Identifier:
        r = _reader(data, cls.DISCRIMINATOR)
        return cls(bump=r.read_u8(), count=r.read_u64())


@dataclass
class StakeAuthorizationRecord:
    bump: int  # u8
    pool: Pubkey
    mint: Pubkey

    DISCRIMINATOR = DISCRIMINATOR_STAKE_AUTHORIZATION_RECORD

    @classmethod
    def from_bytes(cls, data: bytes) -> StakeAuthorizationRecord:
        r = _reader(data, cls.DISCRIMINATOR)
        return cls(bump=r.read_u8(), pool=r.read_pubkey(), mint=r.read_pubkey())


# ---------------------------------------------------------------------------
# Reward distributor program
# ---------------------------------------------------------------------------


@dataclass
class RewardDistributor:
    bump: int  # u8
    stake_pool: Pubkey
    kind: int  # u8, see RewardDistributorKind
    authority: Pubkey
    reward_mint: Pubkey
    reward_amount: int  # u64
    reward_duration_seconds: int  # u64
    rewards_issued: int  # u64
    max_supply: int | None  # Option<u64>
    default_multiplier: int  # u64
    multiplier_decimals: int  # u8

    DISCRIMINATOR = DISCRIMINATOR_REWARD_DISTRIBUTOR

    @classmethod
    def from_bytes(cls, data: bytes) -> RewardDistributor:
        r = _reader(data, cls.DISCRIMINATOR)
        return cls(
            bump=r.read_u8(),
            stake_pool=r.read_pubkey(),
            kind=r.read_u8(),
            authority=r.read_pubkey(),
            reward_mint=r.read_pubkey(),
            reward_amount=r.read_u64(),
            reward_duration_seconds=r.read_u64(),
            rewards_issued=r.read_u64(),
            max_supply=r.read_option(r.read_u64),
            default_multiplier=r.read_u64(),
            multiplier_decimals=r.read_u8(),
        )


@dataclass
class RewardEntry:
    bump: int  # u8
    mint: Pubkey
    reward_distributor: Pubkey
    reward_seconds_received: int  # u64
    multiplier: int  # u64
    reward_amount_received: int  # u64

    DISCRIMINATOR = DISCRIMINATOR_REWARD_ENTRY

    @classmethod
    def from_bytes(cls, data: bytes) -> RewardEntry:
        r = _reader(data, cls.DISCRIMINATOR)
        return cls(
            bump=r.read_u8(),
            mint=r.read_pubkey(),
            reward_distributor=r.read_pubkey(),
            reward_seconds_received=r.read_u64(),
            multiplier=r.read_u64(),
            reward_amount_received=r.read_u64(),
        )
