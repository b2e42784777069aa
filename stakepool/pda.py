"""PDA derivation for stake pool and reward distributor program accounts."""

import struct

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from stakepool.errors import DerivationExhaustedError

SEED_IDENTIFIER = b"identifier"
SEED_STAKE_POOL = b"stake-pool"
SEED_STAKE_ENTRY = b"stake-entry"
SEED_STAKE_AUTHORIZATION = b"stake-authorization"
SEED_REWARD_DISTRIBUTOR = b"reward-distributor"
SEED_REWARD_ENTRY = b"reward-entry"


def find_program_address(
    seeds: list[bytes], program_id: Pubkey
) -> tuple[Pubkey, int]:
    """Like ``Pubkey.find_program_address``, but raises DerivationExhaustedError
    when no bump seed yields an off-curve address.
    """
    for bump in range(255, -1, -1):
        try:
            return Pubkey.create_program_address(seeds + [bytes([bump])], program_id), bump
        except ValueError:
            continue
    raise DerivationExhaustedError(
        f"no viable bump seed for seeds {[s.hex() for s in seeds]} under {program_id}"
    )


def derive_identifier_pda(program_id: Pubkey) -> tuple[Pubkey, int]:
    return find_program_address([SEED_IDENTIFIER], program_id)


def derive_stake_pool_pda(
    program_id: Pubkey, identifier: int
) -> tuple[Pubkey, int]:
    identifier_bytes = struct.pack("<Q", identifier)
    return find_program_address([SEED_STAKE_POOL, identifier_bytes], program_id)


def derive_stake_entry_pda(
    program_id: Pubkey, stake_pool: Pubkey, original_mint: Pubkey
) -> tuple[Pubkey, int]:
    return find_program_address(
        [SEED_STAKE_ENTRY, bytes(stake_pool), bytes(original_mint)], program_id
    )


def derive_stake_authorization_pda(
    program_id: Pubkey, stake_pool: Pubkey, mint: Pubkey
) -> tuple[Pubkey, int]:
    return find_program_address(
        [SEED_STAKE_AUTHORIZATION, bytes(stake_pool), bytes(mint)], program_id
    )


def derive_reward_distributor_pda(
    program_id: Pubkey, stake_pool: Pubkey
) -> tuple[Pubkey, int]:
    return find_program_address(
        [SEED_REWARD_DISTRIBUTOR, bytes(stake_pool)], program_id
    )


def derive_reward_entry_pda(
    program_id: Pubkey, reward_distributor: Pubkey, mint: Pubkey
) -> tuple[Pubkey, int]:
    return find_program_address(
        [SEED_REWARD_ENTRY, bytes(reward_distributor), bytes(mint)], program_id
    )
