"""Lazy, infinite streams of independently sampled values.

Running :func:`random_series` splits the incoming state once: one branch
continues the outer computation, the other seeds a :class:`SampleStream`.
The stream produces element ``i`` only when it is pulled, by splitting its
current state into an element state and a rest state, sampling one value
from the element state and moving on to the rest.  A stream is single-pass:
pulled elements are gone, and replaying the sequence means building a new
stream from the same seed state.
"""

from __future__ import annotations

import logging
from itertools import islice
from typing import Generic, Iterator, List, Optional, TypeVar

from splitrand.core.logging import get_logger
from splitrand.generators.base import RandomGen
from splitrand.instances import BoundedRandom, RandomValue, random_range, random_value
from splitrand.rand import Rand, split_gen

logger = get_logger(__name__)

T = TypeVar("T")


class SampleStream(Generic[T]):
    """Pull-based infinite sequence; each element comes from its own split."""

    def __init__(self, element: Rand[T], gen: RandomGen) -> None:
        self._element = element
        self._state = gen
        self._produced = 0

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        element_gen, rest = self._state.split()
        value = self._element.eval(element_gen)
        self._state = rest
        self._produced += 1
        return value

    def take(self, count: int) -> List[T]:
        """Pull the next ``count`` elements."""
        return list(islice(self, count))

    @property
    def state(self) -> RandomGen:
        """State that will seed the next element."""
        return self._state

    @property
    def produced(self) -> int:
        return self._produced


def series_from(element: Rand[T], gen: RandomGen) -> SampleStream[T]:
    return SampleStream(element, gen)


def series_of(element: Rand[T]) -> Rand[SampleStream[T]]:
    """Stream of repeated runs of ``element``, seeded by one split."""

    def build(sub: RandomGen) -> SampleStream[T]:
        logger.debug("sample stream seeded from split branch %r", sub)
        return SampleStream(element, sub)

    return split_gen().map(build)


def random_series(sampler: RandomValue[T]) -> Rand[SampleStream[T]]:
    return series_of(random_value(sampler))


def random_series_range(
    lo: T,
    hi: T,
    sampler: Optional[BoundedRandom[T]] = None,
) -> Rand[SampleStream[T]]:
    return series_of(random_range(lo, hi, sampler))


__all__ = [
    "SampleStream",
    "random_series",
    "random_series_range",
    "series_from",
    "series_of",
]
