#!/usr/bin/env python3
"""Example CLI that fetches and displays a stake pool and its active stake entries."""

import argparse
import logging
import sys

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from stakepool import Client, StakePoolError


def main() -> None:
    parser = argparse.ArgumentParser(description="Fetch stake pool data")
    parser.add_argument("pool", nargs="?", help="Stake pool address")
    parser.add_argument(
        "--env",
        default="mainnet-beta",
        choices=["mainnet-beta", "testnet", "devnet", "localnet"],
        help="Environment to connect to",
    )
    parser.add_argument("--rpc-url", default=None, help="Override the RPC endpoint")
    parser.add_argument("--user", default=None, help="Only show entries last staked by this wallet")
    parser.add_argument("--verbose", action="store_true", help="Log RPC calls and skipped accounts")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print(f"Fetching stake pool data from {args.env}...\n")

    skipped: list[Pubkey] = []
    client = Client.from_env(
        args.env,
        rpc_url=args.rpc_url,
        on_decode_error=lambda pubkey, err: skipped.append(pubkey),
    )

    try:
        identifier = client.get_pool_identifier()
    except StakePoolError as e:
        print(f"Error fetching identifier: {e}")
        sys.exit(1)

    print("=== Identifier ===")
    print(f"Address:                {identifier.pubkey}")
    print(f"Pools created:          {identifier.parsed.count}")
    print()

    if args.pool is None:
        return

    pool_id = Pubkey.from_string(args.pool)
    try:
        pool = client.get_stake_pool(pool_id)
    except StakePoolError as e:
        print(f"Error fetching stake pool: {e}")
        sys.exit(1)

    p = pool.parsed
    print("=== Stake Pool ===")
    print(f"Address:                {pool.pubkey}")
    print(f"Identifier:             {p.identifier}")
    print(f"Authority:              {p.authority}")
    print(f"Requires Authorization: {p.requires_authorization}")
    print(f"Required Creators:      {len(p.requires_creators)}")
    print(f"Required Collections:   {len(p.requires_collections)}")
    print(f"Overlay Text:           {p.overlay_text!r}")
    print(f"Reset On Stake:         {p.reset_on_stake}")
    print()

    try:
        if args.user:
            entries = client.get_stake_entries_for_pool_and_user(
                pool_id, Pubkey.from_string(args.user)
            )
        else:
            entries = client.get_stake_entries_for_pool(pool_id)
    except StakePoolError as e:
        print(f"Error fetching stake entries: {e}")
        sys.exit(1)

    print(f"=== Active Stake Entries ({len(entries)}) ===")
    for entry in entries:
        e = entry.parsed
        print(
            f"{entry.pubkey}  mint={e.original_mint}  staker={e.last_staker}"
            f"  amount={e.amount}  staked_at={e.last_staked_at}"
        )
    if skipped:
        print(f"\nSkipped {len(skipped)} accounts that did not decode as stake entries.")


if __name__ == "__main__":
    main()
