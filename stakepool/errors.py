"""Errors raised by the stake pool client."""

from __future__ import annotations


class StakePoolError(Exception):
    """Base class for all stake pool client errors."""


class NotFoundError(StakePoolError, ValueError):
    """The requested address holds no account."""

    def __init__(self, address: object) -> None:
        super().__init__(f"account not found: {address}")
        self.address = address


class DecodeError(StakePoolError, ValueError):
    """Account bytes do not match the expected layout."""


class TransportError(StakePoolError):
    """The underlying RPC call failed."""


class DerivationExhaustedError(StakePoolError):
    """No bump seed produced a valid program-derived address."""
