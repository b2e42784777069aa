import hashlib

from stakepool.errors import DecodeError

DISCRIMINATOR_SIZE = 8


def account_discriminator(name: str) -> bytes:
    """Anchor account discriminator: first 8 bytes of sha256("account:<Name>")."""
    return hashlib.sha256(f"account:{name}".encode()).digest()[:DISCRIMINATOR_SIZE]


DISCRIMINATOR_STAKE_POOL = account_discriminator("StakePool")
DISCRIMINATOR_STAKE_ENTRY = account_discriminator("StakeEntry")
DISCRIMINATOR_IDENTIFIER = account_discriminator("Identifier")
DISCRIMINATOR_STAKE_AUTHORIZATION_RECORD = account_discriminator(
    "StakeAuthorizationRecord"
)
DISCRIMINATOR_REWARD_DISTRIBUTOR = account_discriminator("RewardDistributor")
DISCRIMINATOR_REWARD_ENTRY = account_discriminator("RewardEntry")


def validate_discriminator(data: bytes, expected: bytes) -> None:
    """Validate the 8-byte discriminator prefix. Raises DecodeError on mismatch."""
    if len(data) < DISCRIMINATOR_SIZE:
        raise DecodeError(
            f"data too short: {len(data)} bytes, need at least {DISCRIMINATOR_SIZE}"
        )
    got = bytes(data[:DISCRIMINATOR_SIZE])
    if got != expected:
        raise DecodeError(
            f"invalid discriminator: got {got.hex()}, want {expected.hex()}"
        )
