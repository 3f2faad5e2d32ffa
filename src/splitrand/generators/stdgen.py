"""L'Ecuyer combined multiplicative congruential generator.

Two Park-Miller style components with moduli 2147483563 and 2147483399 are
stepped independently (Schrage's method keeps intermediates small) and their
difference is folded into ``[1, 2147483562]``.  Splitting perturbs each
component in opposite directions and pairs it with the successor of the
other component.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from splitrand.core.errors import err

STD_RANGE: Tuple[int, int] = (1, 2147483562)

_M1 = 2147483563
_M2 = 2147483399


@dataclass(frozen=True)
class StdGen:
    s1: int
    s2: int

    def __post_init__(self) -> None:
        if not (1 <= self.s1 < _M1):
            raise err("E_SEED_RANGE", f"StdGen s1 {self.s1} outside [1, {_M1 - 1}]")
        if not (1 <= self.s2 < _M2):
            raise err("E_SEED_RANGE", f"StdGen s2 {self.s2} outside [1, {_M2 - 1}]")

    def gen_range(self) -> Tuple[int, int]:
        return STD_RANGE

    def next(self) -> Tuple[int, "StdGen"]:
        k = self.s1 // 53668
        s1 = 40014 * (self.s1 - k * 53668) - k * 12211
        if s1 < 0:
            s1 += _M1
        k2 = self.s2 // 52774
        s2 = 40692 * (self.s2 - k2 * 52774) - k2 * 3791
        if s2 < 0:
            s2 += _M2
        z = s1 - s2
        if z < 1:
            z += 2147483562
        else:
            z %= 2147483562
        return z, StdGen(s1, s2)

    def split(self) -> Tuple["StdGen", "StdGen"]:
        new_s1 = 1 if self.s1 == _M1 - 1 else self.s1 + 1
        new_s2 = _M2 - 1 if self.s2 == 1 else self.s2 - 1
        _, successor = self.next()
        left = StdGen(new_s1, successor.s2)
        right = StdGen(successor.s1, new_s2)
        return left, right

    def __repr__(self) -> str:
        return f"StdGen({self.s1}, {self.s2})"


def mk_std_gen(seed: int = 0) -> StdGen:
    """Build a :class:`StdGen` from a non-negative integer seed."""
    if seed < 0:
        raise err("E_SEED_RANGE", f"seed {seed} must be non-negative")
    q, s1 = divmod(seed, 2147483562)
    s2 = q % 2147483398
    return StdGen(s1 + 1, s2 + 1)


__all__ = ["STD_RANGE", "StdGen", "mk_std_gen"]
