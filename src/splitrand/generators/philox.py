"""Counter-based Philox2x64-10 generator with hash-derived splitting.

The state is a 64-bit key plus a 128-bit counter.  ``next`` encrypts the
current counter under the key and advances the counter by one block; the
first output word is the draw.  ``split`` never touches the counter stream:
it hashes the parent key, counter and a branch label into fresh key
material, so the two children and the parent lineage do not overlap.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from splitrand.core.hashing import (
    derive_key_material,
    encode_label,
    encode_u64,
)

_MASK64 = (1 << 64) - 1
_PHILOX_MULT = 0xD2B74407B1CE6E93
_PHILOX_WEYL = 0x9E3779B97F4A7C15

PHILOX_RANGE: Tuple[int, int] = (0, _MASK64)
DEFAULT_ROOT_LABEL = "splitrand.root"
_SPLIT_LABEL = "splitrand.split"


def _mulhi_lo(x: int, y: int) -> Tuple[int, int]:
    product = (x & _MASK64) * (y & _MASK64)
    return (product >> 64) & _MASK64, product & _MASK64


def _add_u128(hi: int, lo: int, increment: int) -> Tuple[int, int]:
    total = ((hi << 64) | lo) + increment
    total %= 1 << 128
    return (total >> 64) & _MASK64, total & _MASK64


def philox2x64_10(key: int, counter: Tuple[int, int]) -> Tuple[int, int]:
    """Ten Philox rounds over a (hi, lo) counter pair."""
    ctr_hi, ctr_lo = counter
    c0 = ctr_lo & _MASK64
    c1 = ctr_hi & _MASK64
    k = key & _MASK64
    for _ in range(10):
        hi, lo = _mulhi_lo(_PHILOX_MULT, c0)
        c0, c1 = (hi ^ k ^ c1) & _MASK64, lo
        k = (k + _PHILOX_WEYL) & _MASK64
    return c0, c1


@dataclass(frozen=True)
class PhiloxGen:
    key: int
    counter_hi: int = 0
    counter_lo: int = 0

    @classmethod
    def from_seed(cls, seed: int, *, label: str = DEFAULT_ROOT_LABEL) -> "PhiloxGen":
        """Derive the root state from a 64-bit seed and a domain label."""
        material = derive_key_material(encode_label(label), encode_u64(seed))
        return cls(material.key, material.counter_hi, material.counter_lo)

    def gen_range(self) -> Tuple[int, int]:
        return PHILOX_RANGE

    def next(self) -> Tuple[int, "PhiloxGen"]:
        x0, _ = philox2x64_10(self.key, (self.counter_hi, self.counter_lo))
        hi, lo = _add_u128(self.counter_hi, self.counter_lo, 1)
        return x0, PhiloxGen(self.key, hi, lo)

    def split(self) -> Tuple["PhiloxGen", "PhiloxGen"]:
        return self._branch("left"), self._branch("right")

    def _branch(self, branch: str) -> "PhiloxGen":
        material = derive_key_material(
            encode_label(_SPLIT_LABEL),
            encode_label(branch),
            encode_u64(self.key & _MASK64),
            encode_u64(self.counter_hi & _MASK64),
            encode_u64(self.counter_lo & _MASK64),
        )
        return PhiloxGen(material.key, material.counter_hi, material.counter_lo)

    @property
    def counters(self) -> Tuple[int, int]:
        """Return the (hi, lo) counter words for logging."""
        return self.counter_hi, self.counter_lo


__all__ = ["DEFAULT_ROOT_LABEL", "PHILOX_RANGE", "PhiloxGen", "philox2x64_10"]
