"""Account decoding tests against locally encoded fixtures."""

import hashlib

import pytest
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from stakepool.coder import AccountKind, decode
from stakepool.config import POOL_OFFSET, REWARD_DISTRIBUTOR_OFFSET, STAKER_OFFSET
from stakepool.discriminator import DISCRIMINATOR_STAKE_ENTRY, DISCRIMINATOR_STAKE_POOL
from stakepool.errors import DecodeError
from stakepool.state import (
    Identifier,
    RewardDistributor,
    RewardDistributorKind,
    RewardEntry,
    StakeAuthorizationRecord,
    StakeEntry,
    StakeEntryKind,
    StakePool,
)
from stakepool.tests.builders import (
    encode_identifier,
    encode_reward_distributor,
    encode_reward_entry,
    encode_stake_authorization_record,
    encode_stake_entry,
    encode_stake_pool,
    key,
)


def test_discriminator_is_anchor_account_hash():
    assert DISCRIMINATOR_STAKE_ENTRY == hashlib.sha256(b"account:StakeEntry").digest()[:8]
    assert DISCRIMINATOR_STAKE_POOL != DISCRIMINATOR_STAKE_ENTRY


class TestStakePool:
    def test_deserialize(self):
        data = encode_stake_pool(
            identifier=12,
            authority=key(9),
            requires_creators=[key(10), key(11)],
            requires_collections=[key(12)],
            requires_authorization=True,
            overlay_text="LOCKED",
            image_uri="ipfs://pool",
            reset_on_stake=False,
        )
        pool = StakePool.from_bytes(data)
        assert pool == StakePool(
            bump=254,
            identifier=12,
            authority=key(9),
            requires_creators=[key(10), key(11)],
            requires_collections=[key(12)],
            requires_authorization=True,
            overlay_text="LOCKED",
            image_uri="ipfs://pool",
            reset_on_stake=False,
        )

    def test_empty_vectors_and_strings(self):
        pool = StakePool.from_bytes(encode_stake_pool(overlay_text="", image_uri=""))
        assert pool.requires_creators == []
        assert pool.requires_collections == []
        assert pool.overlay_text == ""


class TestStakeEntry:
    def test_deserialize(self):
        data = encode_stake_entry(
            pool=key(5),
            last_staker=key(6),
            amount=3,
            original_mint=key(7),
            last_staked_at=-1,
            total_stake_seconds=86_400,
            kind=StakeEntryKind.PERMISSIONED,
            stake_mint=key(8),
        )
        entry = StakeEntry.from_bytes(data)
        assert entry.pool == key(5)
        assert entry.last_staker == key(6)
        assert entry.amount == 3
        assert entry.original_mint == key(7)
        assert entry.original_mint_claimed is True
        assert entry.last_staked_at == -1
        assert entry.total_stake_seconds == 86_400
        assert entry.kind == StakeEntryKind.PERMISSIONED
        assert entry.stake_mint == key(8)
        assert entry.is_active

    def test_default_staker_is_inactive(self):
        entry = StakeEntry.from_bytes(
            encode_stake_entry(pool=key(5), last_staker=Pubkey.default())
        )
        assert entry.stake_mint is None
        assert not entry.is_active

    def test_filter_offsets_match_layout(self):
        data = encode_stake_entry(pool=key(5), last_staker=key(6))
        assert data[POOL_OFFSET : POOL_OFFSET + 32] == bytes(key(5))
        assert data[STAKER_OFFSET : STAKER_OFFSET + 32] == bytes(key(6))

    def test_trailing_bytes_ignored(self):
        data = encode_stake_entry(pool=key(5), last_staker=key(6), padding=64)
        assert StakeEntry.from_bytes(data).pool == key(5)


def test_identifier():
    assert Identifier.from_bytes(encode_identifier(count=99)) == Identifier(bump=255, count=99)


def test_stake_authorization_record():
    record = StakeAuthorizationRecord.from_bytes(
        encode_stake_authorization_record(pool=key(5), mint=key(7))
    )
    assert record == StakeAuthorizationRecord(bump=252, pool=key(5), mint=key(7))


class TestRewardAccounts:
    def test_reward_distributor(self):
        rd = RewardDistributor.from_bytes(
            encode_reward_distributor(stake_pool=key(5), kind=RewardDistributorKind.TREASURY, max_supply=None)
        )
        assert rd.stake_pool == key(5)
        assert rd.kind == RewardDistributorKind.TREASURY
        assert rd.max_supply is None
        assert rd.reward_duration_seconds == 60

    def test_reward_entry(self):
        data = encode_reward_entry(mint=key(7), reward_distributor=key(20))
        assert data[REWARD_DISTRIBUTOR_OFFSET : REWARD_DISTRIBUTOR_OFFSET + 32] == bytes(key(20))
        re = RewardEntry.from_bytes(data)
        assert re.mint == key(7)
        assert re.reward_distributor == key(20)
        assert re.reward_amount_received == 20


# ---------------------------------------------------------------------------
# Malformed buffers
# ---------------------------------------------------------------------------

_ENCODED = {
    AccountKind.STAKE_POOL: lambda: encode_stake_pool(requires_creators=[key(1)]),
    AccountKind.STAKE_ENTRY: lambda: encode_stake_entry(pool=key(5), last_staker=key(6), padding=0),
    AccountKind.IDENTIFIER: lambda: encode_identifier(),
    AccountKind.STAKE_AUTHORIZATION_RECORD: lambda: encode_stake_authorization_record(pool=key(5), mint=key(7)),
    AccountKind.REWARD_DISTRIBUTOR: lambda: encode_reward_distributor(stake_pool=key(5)),
    AccountKind.REWARD_ENTRY: lambda: encode_reward_entry(mint=key(7), reward_distributor=key(20)),
}


@pytest.mark.parametrize("kind", list(AccountKind))
def test_decode_dispatches_by_kind(kind):
    record = decode(kind, _ENCODED[kind]())
    assert type(record).DISCRIMINATOR == _ENCODED[kind]()[:8]


@pytest.mark.parametrize("kind", list(AccountKind))
def test_every_truncation_raises_decode_error(kind):
    data = _ENCODED[kind]()
    for n in range(len(data)):
        with pytest.raises(DecodeError):
            decode(kind, data[:n])


@pytest.mark.parametrize("kind", list(AccountKind))
def test_wrong_discriminator(kind):
    data = _ENCODED[kind]()
    other = AccountKind.IDENTIFIER if kind is not AccountKind.IDENTIFIER else AccountKind.STAKE_POOL
    with pytest.raises(DecodeError, match="invalid discriminator"):
        decode(other, data)


def test_vector_length_exceeding_buffer():
    data = bytearray(encode_stake_pool())
    # requires_creators length prefix sits after discriminator, bump, identifier, authority.
    offset = 8 + 1 + 8 + 32
    data[offset : offset + 4] = (1000).to_bytes(4, "little")
    with pytest.raises(DecodeError):
        StakePool.from_bytes(bytes(data))


def test_invalid_option_tag_in_stake_entry():
    data = bytearray(encode_stake_entry(pool=key(5), last_staker=key(6), padding=0))
    data[-1] = 7
    with pytest.raises(DecodeError, match="option tag"):
        StakeEntry.from_bytes(bytes(data))


def test_invalid_bool_in_stake_entry():
    data = bytearray(encode_stake_entry(pool=key(5), last_staker=key(6)))
    # original_mint_claimed sits just before last_staker.
    data[STAKER_OFFSET - 1] = 2
    with pytest.raises(DecodeError, match="invalid bool 2"):
        StakeEntry.from_bytes(bytes(data))
