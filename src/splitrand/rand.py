"""State-threading sampling computations.

A :class:`Rand` describes how to turn a generator state into a value and a
successor state.  Nothing happens until :meth:`Rand.run` is given a concrete
generator, so the same computation can be replayed from the same state and
always produces the same ``(value, state)`` pair.  Composition is strictly
left to right: each step receives the state produced by the previous one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, List, Tuple, TypeVar

from splitrand.core.errors import err
from splitrand.generators.base import RandomGen, ensure_generator
from splitrand.generators.stdgen import mk_std_gen

A = TypeVar("A")
B = TypeVar("B")

Step = Callable[[Any], Tuple[A, Any]]


@dataclass(frozen=True)
class Rand(Generic[A]):
    """A ``G -> (A, G)`` step function over some generator type ``G``."""

    step: Step

    @classmethod
    def pure(cls, value: A) -> "Rand[A]":
        return cls(lambda gen: (value, gen))

    def run(self, gen: RandomGen) -> Tuple[A, RandomGen]:
        return self.step(gen)

    def eval(self, gen: RandomGen) -> A:
        return self.step(gen)[0]

    def bind(self, fn: Callable[[A], "Rand[B]"]) -> "Rand[B]":
        def stepped(gen: RandomGen) -> Tuple[B, RandomGen]:
            value, gen1 = self.step(gen)
            return fn(value).step(gen1)

        return Rand(stepped)

    def map(self, fn: Callable[[A], B]) -> "Rand[B]":
        def stepped(gen: RandomGen) -> Tuple[B, RandomGen]:
            value, gen1 = self.step(gen)
            return fn(value), gen1

        return Rand(stepped)

    def then(self, other: "Rand[B]") -> "Rand[B]":
        return self.bind(lambda _: other)


def pure(value: A) -> Rand[A]:
    return Rand.pure(value)


def bind(rand: Rand[A], fn: Callable[[A], Rand[B]]) -> Rand[B]:
    return rand.bind(fn)


def run(rand: Rand[A], gen: RandomGen) -> Tuple[A, RandomGen]:
    """Supply the initial state and return the value with the final state."""
    return rand.run(gen)


def both(first: Rand[A], second: Rand[B]) -> Rand[Tuple[A, B]]:
    return first.bind(lambda a: second.map(lambda b: (a, b)))


def sequence(rands: Iterable[Rand[A]]) -> Rand[List[A]]:
    """Run each computation in order, collecting the values."""
    steps = tuple(rands)

    def stepped(gen: RandomGen) -> Tuple[List[A], RandomGen]:
        values: List[A] = []
        for rand in steps:
            value, gen = rand.step(gen)
            values.append(value)
        return values, gen

    return Rand(stepped)


def replicate(count: int, rand: Rand[A]) -> Rand[List[A]]:
    if count < 0:
        raise err("E_REPLICATE_COUNT", f"cannot replicate a sampler {count} times")
    return sequence([rand] * count)


def next_word() -> Rand[int]:
    """Draw one word from the generator's native range."""
    return Rand(lambda gen: gen.next())


def gen_range_of() -> Rand[Tuple[int, int]]:
    """Read the generator's native range without advancing it."""
    return Rand(lambda gen: (gen.gen_range(), gen))


def split_gen() -> Rand[RandomGen]:
    """Split the current state.

    The left branch is handed out as the value, for an independent
    sub-computation; the right branch continues the outer computation.
    """

    def stepped(gen: RandomGen) -> Tuple[RandomGen, RandomGen]:
        left, right = gen.split()
        return left, right

    return Rand(stepped)


def run_with_seed(
    rand: Rand[A],
    seed: int,
    factory: Callable[[int], RandomGen] = mk_std_gen,
) -> A:
    """Seed a fresh generator with ``factory`` and return only the value."""
    return rand.eval(ensure_generator(factory(seed)))


__all__ = [
    "Rand",
    "bind",
    "both",
    "gen_range_of",
    "next_word",
    "pure",
    "replicate",
    "run",
    "run_with_seed",
    "sequence",
    "split_gen",
]
