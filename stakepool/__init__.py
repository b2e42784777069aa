from stakepool.client import Client
from stakepool.coder import AccountKind, decode
from stakepool.config import (
    POOL_OFFSET,
    PROGRAM_ID,
    REWARD_DISTRIBUTOR_PROGRAM_ID,
    SOLANA_RPC_URLS,
    STAKER_OFFSET,
)
from stakepool.discriminator import (
    DISCRIMINATOR_IDENTIFIER,
    DISCRIMINATOR_REWARD_DISTRIBUTOR,
    DISCRIMINATOR_REWARD_ENTRY,
    DISCRIMINATOR_STAKE_AUTHORIZATION_RECORD,
    DISCRIMINATOR_STAKE_ENTRY,
    DISCRIMINATOR_STAKE_POOL,
)
from stakepool.errors import (
    DecodeError,
    DerivationExhaustedError,
    NotFoundError,
    StakePoolError,
    TransportError,
)
from stakepool.pda import (
    derive_identifier_pda,
    derive_reward_distributor_pda,
    derive_reward_entry_pda,
    derive_stake_authorization_pda,
    derive_stake_entry_pda,
    derive_stake_pool_pda,
)
from stakepool.rpc import new_rpc_client
from stakepool.state import (
    AccountData,
    Identifier,
    RewardDistributor,
    RewardDistributorKind,
    RewardEntry,
    StakeAuthorizationRecord,
    StakeEntry,
    StakeEntryKind,
    StakePool,
)

__all__ = [
    "AccountData",
    "AccountKind",
    "Client",
    "POOL_OFFSET",
    "PROGRAM_ID",
    "REWARD_DISTRIBUTOR_PROGRAM_ID",
    "SOLANA_RPC_URLS",
    "STAKER_OFFSET",
    "decode",
    "DecodeError",
    "DerivationExhaustedError",
    "NotFoundError",
    "StakePoolError",
    "TransportError",
    "Identifier",
    "RewardDistributor",
    "RewardDistributorKind",
    "RewardEntry",
    "StakeAuthorizationRecord",
    "StakeEntry",
    "StakeEntryKind",
    "StakePool",
    "DISCRIMINATOR_IDENTIFIER",
    "DISCRIMINATOR_REWARD_DISTRIBUTOR",
    "DISCRIMINATOR_REWARD_ENTRY",
    "DISCRIMINATOR_STAKE_AUTHORIZATION_RECORD",
    "DISCRIMINATOR_STAKE_ENTRY",
    "DISCRIMINATOR_STAKE_POOL",
    "derive_identifier_pda",
    "derive_reward_distributor_pda",
    "derive_reward_entry_pda",
    "derive_stake_authorization_pda",
    "derive_stake_entry_pda",
    "derive_stake_pool_pda",
    "new_rpc_client",
]
