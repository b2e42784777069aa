"""Network configuration for the stake pool program."""

PROGRAM_ID = "stkBL96RZkjY5ine4TvPihGqW8UHJfch2cokjAPzV8i"
REWARD_DISTRIBUTOR_PROGRAM_ID = "rwdNPNPS6zStSwTtZTnTYnbD4AXsmBRCuBmNgL9y4Ju"

SOLANA_RPC_URLS = {
    "mainnet-beta": "https://api.mainnet-beta.solana.com",
    "testnet": "https://api.testnet.solana.com",
    "devnet": "https://api.devnet.solana.com",
    "localnet": "http://localhost:8899",
}

# Overrides the per-environment URL in Client.from_env when set.
RPC_URL_ENV_VAR = "STAKE_POOL_RPC_URL"

# Raw byte offsets into a serialized StakeEntry (discriminator included).
# 8 discriminator + 1 bump
POOL_OFFSET = 9
# POOL_OFFSET + 32 pool + 8 amount + 32 original_mint + 1 original_mint_claimed
STAKER_OFFSET = 82

# Raw byte offset of RewardEntry.reward_distributor: 8 discriminator + 1 bump + 32 mint.
REWARD_DISTRIBUTOR_OFFSET = 41

# getMultipleAccounts accepts at most this many keys per request.
MAX_MULTIPLE_ACCOUNTS = 100
