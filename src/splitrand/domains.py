"""Finite value domains: bounded ordinals and fixed-width bit vectors."""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Sequence, Tuple

from splitrand.core.errors import err


@total_ordering
@dataclass(frozen=True)
class Fin:
    """An ordinal ``val`` with ``0 <= val < n``."""

    n: int
    val: int

    def __post_init__(self) -> None:
        if self.n < 1:
            raise err("E_DOMAIN_FIN", f"Fin modulus must be positive, got {self.n}")
        if not (0 <= self.val < self.n):
            raise err("E_DOMAIN_FIN", f"value {self.val} outside Fin {self.n}")

    @classmethod
    def last(cls, n: int) -> "Fin":
        return cls(n, n - 1)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Fin):
            return NotImplemented
        if other.n != self.n:
            raise err("E_DOMAIN_MISMATCH", f"cannot compare Fin {self.n} with Fin {other.n}")
        return self.val < other.val

    def __int__(self) -> int:
        return self.val

    def __index__(self) -> int:
        return self.val


@total_ordering
@dataclass(frozen=True)
class Bitvec:
    """A ``width``-bit unsigned pattern stored as its integer value."""

    width: int
    bits: int

    def __post_init__(self) -> None:
        if self.width < 0:
            raise err("E_DOMAIN_BITVEC", f"bit width must be non-negative, got {self.width}")
        if not (0 <= self.bits < (1 << self.width)):
            raise err("E_DOMAIN_BITVEC", f"pattern {self.bits} does not fit {self.width} bits")

    @property
    def modulus(self) -> int:
        return 1 << self.width

    @classmethod
    def from_fin(cls, width: int, value: Fin) -> "Bitvec":
        if value.n != (1 << width):
            raise err(
                "E_DOMAIN_MISMATCH",
                f"Fin {value.n} does not represent {width}-bit vectors",
            )
        return cls(width, value.val)

    def to_fin(self) -> Fin:
        return Fin(self.modulus, self.bits)

    @classmethod
    def from_bools(cls, bools: Sequence[bool]) -> "Bitvec":
        """Most significant bit first."""
        bits = 0
        for bit in bools:
            bits = (bits << 1) | int(bool(bit))
        return cls(len(bools), bits)

    def to_bools(self) -> Tuple[bool, ...]:
        return tuple(bool((self.bits >> i) & 1) for i in reversed(range(self.width)))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Bitvec):
            return NotImplemented
        if other.width != self.width:
            raise err(
                "E_DOMAIN_MISMATCH",
                f"cannot compare {self.width}-bit and {other.width}-bit vectors",
            )
        return self.bits < other.bits

    def __str__(self) -> str:
        if self.width == 0:
            return ""
        return format(self.bits, f"0{self.width}b")


__all__ = ["Bitvec", "Fin"]
