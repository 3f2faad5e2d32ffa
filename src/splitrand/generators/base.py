"""Minimal generator capability every concrete PRNG must satisfy.

A generator is an immutable value.  ``next`` returns a word drawn from the
generator's native inclusive range together with a successor state, and
``split`` returns two successor states that behave as independent lineages.
Neither operation mutates the receiver, so replaying a state replays its
outputs.
"""

from __future__ import annotations

from typing import Protocol, Tuple, TypeVar, runtime_checkable

from splitrand.core.errors import err

G = TypeVar("G", bound="RandomGen")


@runtime_checkable
class RandomGen(Protocol):
    def next(self: G) -> Tuple[int, G]:
        ...

    def split(self: G) -> Tuple[G, G]:
        ...

    def gen_range(self) -> Tuple[int, int]:
        ...


def ensure_generator(gen: object) -> RandomGen:
    """Check that ``gen`` honours the capability and declares a usable range."""
    if not isinstance(gen, RandomGen):
        raise err(
            "E_GEN_CAPABILITY",
            f"{type(gen).__name__} does not provide next/split/gen_range",
        )
    lo, hi = gen.gen_range()
    if lo < 0 or hi <= lo:
        raise err("E_GEN_RANGE", f"generator range [{lo}, {hi}] is empty or negative")
    return gen


__all__ = ["G", "RandomGen", "ensure_generator"]
