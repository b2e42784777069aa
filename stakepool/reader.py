"""Borsh deserialization reader.

Provides cursor-based reading of Borsh-serialized account data. Every read
is bounds-checked and raises DecodeError instead of IndexError or
struct.error, so callers can treat a malformed account as a value rather
than a crash.
"""

from __future__ import annotations

import struct
from typing import Callable, TypeVar

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from stakepool.errors import DecodeError

T = TypeVar("T")

PUBKEY_SIZE = 32


class IncrementalReader:
    """Cursor-based Borsh binary reader."""

    def __init__(self, data: bytes, offset: int = 0) -> None:
        self._data = data
        self._offset = offset

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def _need(self, n: int, what: str) -> None:
        if self._offset + n > len(self._data):
            raise DecodeError(
                f"borsh: not enough data for {what} at offset {self._offset}"
                f" (need {n}, have {self.remaining})"
            )

    def _unpack(self, fmt: str, size: int, what: str) -> int:
        self._need(size, what)
        (v,) = struct.unpack_from(fmt, self._data, self._offset)
        self._offset += size
        return v

    def read_u8(self) -> int:
        return self._unpack("<B", 1, "u8")

    def read_bool(self) -> bool:
        at = self._offset
        v = self.read_u8()
        if v > 1:
            raise DecodeError(f"borsh: invalid bool {v} at offset {at}")
        return v == 1

    def read_u32(self) -> int:
        return self._unpack("<I", 4, "u32")

    def read_u64(self) -> int:
        return self._unpack("<Q", 8, "u64")

    def read_i64(self) -> int:
        return self._unpack("<q", 8, "i64")

    def read_bytes(self, n: int) -> bytes:
        self._need(n, f"{n} bytes")
        v = bytes(self._data[self._offset : self._offset + n])
        self._offset += n
        return v

    def read_pubkey(self) -> Pubkey:
        return Pubkey.from_bytes(self.read_bytes(PUBKEY_SIZE))

    def read_string(self) -> str:
        length = self.read_u32()
        raw = self.read_bytes(length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"borsh: invalid utf-8 string: {e}") from e

    def read_pubkey_vec(self) -> list[Pubkey]:
        length = self.read_u32()
        # Check the whole vector up front so a corrupt length fails fast.
        self._need(length * PUBKEY_SIZE, f"vec of {length} pubkeys")
        return [self.read_pubkey() for _ in range(length)]

    def read_option(self, read: Callable[[], T]) -> T | None:
        """Read an Option<T>: a one-byte tag followed by T when the tag is 1."""
        at = self._offset
        tag = self.read_u8()
        if tag == 0:
            return None
        if tag == 1:
            return read()
        raise DecodeError(f"borsh: invalid option tag {tag} at offset {at}")
