"""Unbiased sampling of natural numbers from an inclusive range.

Every derived sampler reduces to :func:`random_nat_range`.  The reduction
never takes a plain remainder of a single generator word: words are
combined in base ``gen_hi - gen_lo + 1`` until the accumulated span covers
the target size ``k``, and any accumulated value at or above the largest
multiple of ``k`` that fits in the span is discarded and redrawn.  The
accepted region is then an exact multiple of ``k``, so ``value % k`` is
uniform.  Each attempt is rejected with probability below one half.
"""

from __future__ import annotations

import logging
from typing import Tuple

from splitrand.core.config import DEFAULT_MAX_WIDTH_BITS
from splitrand.core.errors import err
from splitrand.core.logging import get_logger
from splitrand.generators.base import RandomGen
from splitrand.rand import Rand

logger = get_logger(__name__)


def check_range(lo: int, hi: int, *, max_width_bits: int = DEFAULT_MAX_WIDTH_BITS) -> int:
    """Validate an integer range and return its width ``hi - lo``."""
    # bool is an int subclass; it has its own sampler
    if any(isinstance(x, bool) or not isinstance(x, int) for x in (lo, hi)):
        raise err(
            "E_DOMAIN_MISMATCH",
            f"range endpoints must be integers, got {type(lo).__name__}/{type(hi).__name__}",
        )
    if lo > hi:
        raise err("E_RANGE_ORDER", f"lower bound {lo} exceeds upper bound {hi}")
    width = hi - lo
    if width.bit_length() > max_width_bits:
        raise err(
            "E_RANGE_WIDTH",
            f"range width needs {width.bit_length()} bits, limit is {max_width_bits}",
        )
    return width


def sample_below(k: int, gen: RandomGen) -> Tuple[int, RandomGen]:
    """Draw uniformly from ``[0, k)`` and return the successor state."""
    gen_lo, gen_hi = gen.gen_range()
    if gen_hi <= gen_lo:
        raise err("E_GEN_RANGE", f"generator range [{gen_lo}, {gen_hi}] is empty")
    base = gen_hi - gen_lo + 1
    attempts = 0
    while True:
        attempts += 1
        value, span = 0, 1
        while span < k:
            word, gen = gen.next()
            value = value * base + (word - gen_lo)
            span *= base
        limit = span - span % k
        if value < limit:
            if attempts > 1 and logger.isEnabledFor(logging.DEBUG):
                logger.debug("sample_below(%d) accepted after %d attempts", k, attempts)
            return value % k, gen


def random_nat_range(
    lo: int,
    hi: int,
    *,
    max_width_bits: int = DEFAULT_MAX_WIDTH_BITS,
) -> Rand[int]:
    """Uniform natural number ``v`` with ``lo <= v <= hi``.

    Bounds are checked here, before any generator is involved, so a bad call
    leaves every generator state untouched.
    """
    if isinstance(lo, int) and not isinstance(lo, bool) and lo < 0:
        raise err("E_DOMAIN_NAT", f"natural lower bound {lo} is negative")
    width = check_range(lo, hi, max_width_bits=max_width_bits)
    return _shifted(int(lo), width)


def _shifted(lo: int, width: int) -> Rand[int]:
    size = width + 1

    def stepped(gen: RandomGen) -> Tuple[int, RandomGen]:
        offset, gen1 = sample_below(size, gen)
        return lo + offset, gen1

    return Rand(stepped)


def random_int_range(
    lo: int,
    hi: int,
    *,
    max_width_bits: int = DEFAULT_MAX_WIDTH_BITS,
) -> Rand[int]:
    """Uniform signed integer in ``[lo, hi]``; the range may straddle zero."""
    width = check_range(lo, hi, max_width_bits=max_width_bits)
    return _shifted(int(lo), width)


def uniform_index(n: int) -> Rand[int]:
    """Uniform index into a collection of ``n >= 1`` items."""
    if n < 1:
        raise err("E_EMPTY_CHOICE", f"cannot draw an index below {n}")
    return random_nat_range(0, n - 1)


__all__ = [
    "check_range",
    "random_int_range",
    "random_nat_range",
    "sample_below",
    "uniform_index",
]
