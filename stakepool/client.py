"""RPC client for fetching stake pool program accounts."""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from operator import attrgetter
from typing import Any, Callable, Iterator, Protocol, Sequence

import base58  # type: ignore[import-untyped]
import httpx
from solana.exceptions import SolanaRpcException  # type: ignore[import-untyped]
from solana.rpc.core import RPCException  # type: ignore[import-untyped]
from solana.rpc.types import MemcmpOpts  # type: ignore[import-untyped]
from solders.pubkey import Pubkey  # type: ignore[import-untyped]
from solders.rpc.responses import (  # type: ignore[import-untyped]
    GetAccountInfoResp,
    GetMultipleAccountsResp,
    GetProgramAccountsResp,
)

from stakepool.coder import AccountKind, decode
from stakepool.config import (
    MAX_MULTIPLE_ACCOUNTS,
    POOL_OFFSET,
    PROGRAM_ID,
    REWARD_DISTRIBUTOR_OFFSET,
    REWARD_DISTRIBUTOR_PROGRAM_ID,
    RPC_URL_ENV_VAR,
    SOLANA_RPC_URLS,
    STAKER_OFFSET,
)
from stakepool.errors import DecodeError, NotFoundError, TransportError
from stakepool.pda import (
    derive_identifier_pda,
    derive_reward_distributor_pda,
    derive_reward_entry_pda,
)
from stakepool.rpc import new_rpc_client
from stakepool.state import (
    AccountData,
    Identifier,
    RewardDistributor,
    RewardEntry,
    StakeAuthorizationRecord,
    StakeEntry,
    StakePool,
)

logger = logging.getLogger(__name__)

DecodeErrorHook = Callable[[Pubkey, DecodeError], None]

_TRANSPORT_ERRORS = (httpx.HTTPError, SolanaRpcException, RPCException)


class SolanaClient(Protocol):
    def get_account_info(self, pubkey: Pubkey) -> GetAccountInfoResp: ...

    def get_multiple_accounts(
        self, pubkeys: list[Pubkey], encoding: str = ...
    ) -> GetMultipleAccountsResp: ...

    def get_program_accounts(
        self,
        pubkey: Pubkey,
        encoding: str = ...,
        filters: Sequence[MemcmpOpts] | None = ...,
    ) -> GetProgramAccountsResp: ...


@contextmanager
def _rpc_call(method: str) -> Iterator[None]:
    try:
        yield
    except _TRANSPORT_ERRORS as e:
        raise TransportError(f"{method} failed: {e}") from e


def _memcmp(offset: int, value: bytes) -> MemcmpOpts:
    return MemcmpOpts(offset=offset, bytes=base58.b58encode(value).decode())


def _stake_entry_filters(
    stake_pool_id: Pubkey, staker: Pubkey | None = None
) -> list[MemcmpOpts]:
    filters = [_memcmp(POOL_OFFSET, bytes(stake_pool_id))]
    if staker is not None:
        filters.append(_memcmp(STAKER_OFFSET, bytes(staker)))
    return filters


class Client:
    """Read-only client for stake pool program accounts.

    Single-account fetches raise NotFoundError and DecodeError. Filtered
    scans skip accounts that fail to decode and report each one to
    ``on_decode_error`` when given.
    """

    def __init__(
        self,
        solana_rpc: SolanaClient,
        program_id: Pubkey,
        reward_distributor_program_id: Pubkey | None = None,
        on_decode_error: DecodeErrorHook | None = None,
    ) -> None:
        self._solana_rpc = solana_rpc
        self._program_id = program_id
        self._reward_distributor_program_id = (
            reward_distributor_program_id
            or Pubkey.from_string(REWARD_DISTRIBUTOR_PROGRAM_ID)
        )
        self._on_decode_error = on_decode_error

    @classmethod
    def from_env(
        cls,
        env: str,
        rpc_url: str | None = None,
        on_decode_error: DecodeErrorHook | None = None,
    ) -> Client:
        """Create a client configured for the given environment.

        Args:
            env: Environment name ("mainnet-beta", "testnet", "devnet", "localnet")
            rpc_url: Explicit RPC URL. Falls back to $STAKE_POOL_RPC_URL, then
                the environment's public endpoint.
            on_decode_error: Called with (pubkey, error) for each account a
                scan skips because it does not decode.
        """
        url = rpc_url or os.environ.get(RPC_URL_ENV_VAR) or SOLANA_RPC_URLS[env]
        return cls(
            new_rpc_client(url),
            Pubkey.from_string(PROGRAM_ID),
            on_decode_error=on_decode_error,
        )

    @classmethod
    def mainnet_beta(cls) -> Client:
        return cls.from_env("mainnet-beta")

    @classmethod
    def testnet(cls) -> Client:
        return cls.from_env("testnet")

    @classmethod
    def devnet(cls) -> Client:
        return cls.from_env("devnet")

    @classmethod
    def localnet(cls) -> Client:
        return cls.from_env("localnet")

    @property
    def program_id(self) -> Pubkey:
        return self._program_id

    # -- Stake pools --

    def get_stake_pool(self, stake_pool_id: Pubkey) -> AccountData[StakePool]:
        return self._fetch_one(AccountKind.STAKE_POOL, stake_pool_id)

    def get_stake_pools(
        self, stake_pool_ids: Sequence[Pubkey]
    ) -> list[AccountData[StakePool] | None]:
        return self._fetch_many(AccountKind.STAKE_POOL, stake_pool_ids)

    def get_pool_identifier(self) -> AccountData[Identifier]:
        addr, _ = derive_identifier_pda(self._program_id)
        return self._fetch_one(AccountKind.IDENTIFIER, addr)

    # -- Stake entries --

    def get_stake_entry(self, stake_entry_id: Pubkey) -> AccountData[StakeEntry]:
        return self._fetch_one(AccountKind.STAKE_ENTRY, stake_entry_id)

    def get_stake_entries(
        self, stake_entry_ids: Sequence[Pubkey]
    ) -> list[AccountData[StakeEntry] | None]:
        return self._fetch_many(AccountKind.STAKE_ENTRY, stake_entry_ids)

    def get_stake_entries_for_pool(
        self, stake_pool_id: Pubkey
    ) -> list[AccountData[StakeEntry]]:
        """Active stake entries of a pool, sorted by entry address."""
        return self._scan(
            AccountKind.STAKE_ENTRY,
            self._program_id,
            _stake_entry_filters(stake_pool_id),
            attrgetter("is_active"),
        )

    def get_stake_entries_for_pool_and_user(
        self, stake_pool_id: Pubkey, user: Pubkey
    ) -> list[AccountData[StakeEntry]]:
        """Active stake entries of a pool last staked by ``user``, sorted by entry address."""
        return self._scan(
            AccountKind.STAKE_ENTRY,
            self._program_id,
            _stake_entry_filters(stake_pool_id, user),
            attrgetter("is_active"),
        )

    def get_stake_authorization(
        self, stake_authorization_id: Pubkey
    ) -> AccountData[StakeAuthorizationRecord]:
        return self._fetch_one(
            AccountKind.STAKE_AUTHORIZATION_RECORD, stake_authorization_id
        )

    # -- Reward distributor program --

    def get_reward_distributor(
        self, stake_pool_id: Pubkey
    ) -> AccountData[RewardDistributor]:
        addr, _ = derive_reward_distributor_pda(
            self._reward_distributor_program_id, stake_pool_id
        )
        return self._fetch_one(AccountKind.REWARD_DISTRIBUTOR, addr)

    def get_reward_entry(
        self, reward_distributor_id: Pubkey, mint: Pubkey
    ) -> AccountData[RewardEntry]:
        addr, _ = derive_reward_entry_pda(
            self._reward_distributor_program_id, reward_distributor_id, mint
        )
        return self._fetch_one(AccountKind.REWARD_ENTRY, addr)

    def get_reward_entries(
        self, reward_entry_ids: Sequence[Pubkey]
    ) -> list[AccountData[RewardEntry] | None]:
        return self._fetch_many(AccountKind.REWARD_ENTRY, reward_entry_ids)

    def get_reward_entries_for_distributor(
        self, reward_distributor_id: Pubkey
    ) -> list[AccountData[RewardEntry]]:
        return self._scan(
            AccountKind.REWARD_ENTRY,
            self._reward_distributor_program_id,
            [_memcmp(REWARD_DISTRIBUTOR_OFFSET, bytes(reward_distributor_id))],
        )

    # -- Internal helpers --

    def _fetch_one(self, kind: AccountKind, addr: Pubkey) -> AccountData[Any]:
        logger.debug("getAccountInfo %s (%s)", addr, kind.value)
        with _rpc_call("getAccountInfo"):
            resp = self._solana_rpc.get_account_info(addr)
        if resp.value is None:
            raise NotFoundError(addr)
        return AccountData(pubkey=addr, parsed=decode(kind, bytes(resp.value.data)))

    def _fetch_many(
        self, kind: AccountKind, addrs: Sequence[Pubkey]
    ) -> list[AccountData[Any] | None]:
        results: list[AccountData[Any] | None] = []
        for start in range(0, len(addrs), MAX_MULTIPLE_ACCOUNTS):
            chunk = list(addrs[start : start + MAX_MULTIPLE_ACCOUNTS])
            logger.debug("getMultipleAccounts %d keys (%s)", len(chunk), kind.value)
            with _rpc_call("getMultipleAccounts"):
                resp = self._solana_rpc.get_multiple_accounts(chunk, encoding="base64")
            if len(resp.value) != len(chunk):
                raise TransportError(
                    f"getMultipleAccounts returned {len(resp.value)} accounts for {len(chunk)} keys"
                )
            for addr, acct in zip(chunk, resp.value):
                if acct is None:
                    results.append(None)
                    continue
                results.append(
                    AccountData(pubkey=addr, parsed=decode(kind, bytes(acct.data)))
                )
        return results

    def _scan(
        self,
        kind: AccountKind,
        program_id: Pubkey,
        filters: list[MemcmpOpts],
        is_valid: Callable[[Any], bool] | None = None,
    ) -> list[AccountData[Any]]:
        """Sorted by code point on the base58 address ("B..." before "a..."), not locale order."""
        with _rpc_call("getProgramAccounts"):
            resp = self._solana_rpc.get_program_accounts(
                program_id,
                encoding="base64",
                filters=filters,
            )
        results: list[AccountData[Any]] = []
        for acct in resp.value:
            try:
                parsed = decode(kind, bytes(acct.account.data))
            except DecodeError as e:
                logger.debug("skipping %s: not a %s: %s", acct.pubkey, kind.value, e)
                if self._on_decode_error is not None:
                    self._on_decode_error(acct.pubkey, e)
                continue
            if is_valid is not None and not is_valid(parsed):
                continue
            results.append(AccountData(pubkey=acct.pubkey, parsed=parsed))
        logger.debug(
            "getProgramAccounts %s: %d returned, %d kept",
            kind.value,
            len(resp.value),
            len(results),
        )
        return sorted(results, key=lambda a: str(a.pubkey))
