"""Sampler interfaces and the instances derived from the bounded primitive.

Two capabilities exist per value type:

* :class:`RandomValue` -- a canonical, bound-free random value (booleans,
  ``Fin n``, ``Bitvec n``);
* :class:`BoundedRandom` -- a uniform value from an inclusive range.

Every instance bottoms out in :func:`splitrand.bounded.random_nat_range`, so
instances that describe the same underlying naturals produce identical
outputs from identical generator states.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence, TypeVar, runtime_checkable

from splitrand.bounded import random_int_range, random_nat_range, uniform_index
from splitrand.core.config import DEFAULT_MAX_WIDTH_BITS, SamplerConfig
from splitrand.core.errors import err
from splitrand.domains import Bitvec, Fin
from splitrand.rand import Rand

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class RandomValue(Protocol[T_co]):
    def random(self) -> Rand[T_co]:
        ...


@runtime_checkable
class BoundedRandom(Protocol[T]):
    def random_range(self, lo: T, hi: T) -> Rand[T]:
        ...


@dataclass(frozen=True)
class NatSampler:
    max_width_bits: int = DEFAULT_MAX_WIDTH_BITS

    def random_range(self, lo: int, hi: int) -> Rand[int]:
        return random_nat_range(lo, hi, max_width_bits=self.max_width_bits)


@dataclass(frozen=True)
class IntSampler:
    max_width_bits: int = DEFAULT_MAX_WIDTH_BITS

    def random_range(self, lo: int, hi: int) -> Rand[int]:
        return random_int_range(lo, hi, max_width_bits=self.max_width_bits)


def _to_bool(k: int) -> bool:
    return k == 1


@dataclass(frozen=True)
class BoolSampler:
    def random(self) -> Rand[bool]:
        return random_nat_range(0, 1).map(_to_bool)

    def random_range(self, lo: bool, hi: bool) -> Rand[bool]:
        if not isinstance(lo, bool) or not isinstance(hi, bool):
            raise err("E_DOMAIN_MISMATCH", "boolean range endpoints must be bool")
        return random_nat_range(int(lo), int(hi)).map(_to_bool)


@dataclass(frozen=True)
class FinSampler:
    n: int
    max_width_bits: int = DEFAULT_MAX_WIDTH_BITS

    def __post_init__(self) -> None:
        if self.n < 1:
            raise err("E_DOMAIN_FIN", f"Fin modulus must be positive, got {self.n}")

    def _wrap(self, value: int) -> Fin:
        return Fin(self.n, value)

    def random(self) -> Rand[Fin]:
        return random_nat_range(0, self.n - 1, max_width_bits=self.max_width_bits).map(self._wrap)

    def random_range(self, lo: Fin, hi: Fin) -> Rand[Fin]:
        for endpoint in (lo, hi):
            if not isinstance(endpoint, Fin) or endpoint.n != self.n:
                raise err("E_DOMAIN_MISMATCH", f"endpoint {endpoint!r} is not a Fin {self.n}")
        return random_nat_range(lo.val, hi.val, max_width_bits=self.max_width_bits).map(self._wrap)


@dataclass(frozen=True)
class BitvecSampler:
    width: int
    max_width_bits: int = DEFAULT_MAX_WIDTH_BITS

    def __post_init__(self) -> None:
        if self.width < 0:
            raise err("E_DOMAIN_BITVEC", f"bit width must be non-negative, got {self.width}")

    @property
    def _fin(self) -> FinSampler:
        return FinSampler(1 << self.width, max_width_bits=self.max_width_bits)

    def _from_fin(self, value: Fin) -> Bitvec:
        return Bitvec.from_fin(self.width, value)

    def random(self) -> Rand[Bitvec]:
        return self._fin.random().map(self._from_fin)

    def random_range(self, lo: Bitvec, hi: Bitvec) -> Rand[Bitvec]:
        for endpoint in (lo, hi):
            if not isinstance(endpoint, Bitvec) or endpoint.width != self.width:
                raise err(
                    "E_DOMAIN_MISMATCH",
                    f"endpoint {endpoint!r} is not a {self.width}-bit vector",
                )
        return self._fin.random_range(lo.to_fin(), hi.to_fin()).map(self._from_fin)


NAT = NatSampler()
INT = IntSampler()
BOOL = BoolSampler()


def fin(n: int) -> FinSampler:
    return FinSampler(n)


def bitvec(width: int) -> BitvecSampler:
    return BitvecSampler(width)


@dataclass(frozen=True)
class SamplerSet:
    """Samplers sharing one range-width cap."""

    max_width_bits: int = DEFAULT_MAX_WIDTH_BITS

    @property
    def nat(self) -> NatSampler:
        return NatSampler(self.max_width_bits)

    @property
    def integer(self) -> IntSampler:
        return IntSampler(self.max_width_bits)

    @property
    def boolean(self) -> BoolSampler:
        return BOOL

    def fin(self, n: int) -> FinSampler:
        return FinSampler(n, max_width_bits=self.max_width_bits)

    def bitvec(self, width: int) -> BitvecSampler:
        return BitvecSampler(width, max_width_bits=self.max_width_bits)


def samplers_for(config: SamplerConfig) -> SamplerSet:
    """Samplers honouring ``config.max_width_bits``."""
    return SamplerSet(config.max_width_bits)


def instance_for(value: Any) -> BoundedRandom[Any]:
    """Pick the bounded sampler matching the type of ``value``."""
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return BOOL
    if isinstance(value, Fin):
        return FinSampler(value.n)
    if isinstance(value, Bitvec):
        return BitvecSampler(value.width)
    if isinstance(value, int):
        return INT
    raise err("E_NO_INSTANCE", f"no bounded sampler for {type(value).__name__}")


def random_value(sampler: RandomValue[T]) -> Rand[T]:
    """Canonical random value for the type ``sampler`` describes."""
    if not isinstance(sampler, RandomValue):
        raise err(
            "E_NO_INSTANCE",
            f"{type(sampler).__name__} has no canonical random value",
        )
    return sampler.random()


def random_range(lo: T, hi: T, sampler: Optional[BoundedRandom[T]] = None) -> Rand[T]:
    """Uniform value ``v`` with ``lo <= v <= hi``.

    When ``sampler`` is omitted it is inferred from ``lo``; mismatched
    endpoint types are rejected by the inferred sampler.
    """
    chosen = sampler if sampler is not None else instance_for(lo)
    if not isinstance(chosen, BoundedRandom):
        raise err("E_NO_INSTANCE", f"{type(chosen).__name__} cannot sample ranges")
    return chosen.random_range(lo, hi)


def one_of(items: Sequence[T]) -> Rand[T]:
    """Uniform choice from a non-empty sequence."""
    pool = tuple(items)
    if not pool:
        raise err("E_EMPTY_CHOICE", "cannot choose from an empty sequence")
    return uniform_index(len(pool)).map(pool.__getitem__)


__all__ = [
    "BOOL",
    "BitvecSampler",
    "BoolSampler",
    "BoundedRandom",
    "FinSampler",
    "INT",
    "IntSampler",
    "NAT",
    "NatSampler",
    "RandomValue",
    "SamplerSet",
    "bitvec",
    "fin",
    "instance_for",
    "one_of",
    "random_range",
    "random_value",
    "samplers_for",
]
