"""Seed-material hashing used to derive generator keys and counters."""

from __future__ import annotations

import hashlib
import struct
from dataclasses import dataclass
from typing import Iterable

from splitrand.core.errors import err

_MASK64 = (1 << 64) - 1


def encode_label(value: str) -> bytes:
    """Length-prefixed UTF-8 encoding so concatenated labels cannot collide."""
    data = value.encode("utf-8")
    return struct.pack("<I", len(data)) + data


def encode_u64(value: int) -> bytes:
    if not (0 <= value <= _MASK64):
        raise err("E_SEED_RANGE", f"value {value} outside [0, 2^64)")
    return struct.pack("<Q", value)


def sha256_concat(parts: Iterable[bytes]) -> bytes:
    h = hashlib.sha256()
    for part in parts:
        h.update(part)
    return h.digest()


@dataclass(frozen=True)
class KeyMaterial:
    """Philox key and 128-bit counter carved out of one SHA-256 digest."""

    key: int
    counter_hi: int
    counter_lo: int

    @classmethod
    def from_digest(cls, digest: bytes) -> "KeyMaterial":
        if len(digest) != 32:
            raise err("E_SEED_RANGE", "key material requires a 32-byte digest")
        return cls(
            key=int.from_bytes(digest[0:8], byteorder="little"),
            counter_hi=int.from_bytes(digest[16:24], byteorder="big"),
            counter_lo=int.from_bytes(digest[24:32], byteorder="big"),
        )


def derive_key_material(*parts: bytes) -> KeyMaterial:
    return KeyMaterial.from_digest(sha256_concat(parts))


__all__ = [
    "KeyMaterial",
    "derive_key_material",
    "encode_label",
    "encode_u64",
    "sha256_concat",
]
