"""Composable, splittable pseudo-random sampling.

Public surface: the :class:`Rand` computation and its combinators, the
generator capability with two concrete generators, bounded and canonical
samplers for naturals, integers, booleans, ``Fin n`` and ``Bitvec n``, and
lazy sample streams.
"""

from .bounded import random_int_range, random_nat_range, uniform_index
from .core.config import SamplerConfig, build_generator, load_sampler_config
from .core.errors import FailureCategory, RandError
from .domains import Bitvec, Fin
from .generators import (
    DrawRecorder,
    PhiloxGen,
    RandomGen,
    StdGen,
    TracedGen,
    draw_budget,
    mk_std_gen,
    traced,
)
from .instances import (
    BOOL,
    INT,
    NAT,
    BitvecSampler,
    BoundedRandom,
    FinSampler,
    RandomValue,
    SamplerSet,
    bitvec,
    fin,
    one_of,
    random_range,
    random_value,
    samplers_for,
)
from .rand import (
    Rand,
    bind,
    both,
    gen_range_of,
    next_word,
    pure,
    replicate,
    run,
    run_with_seed,
    sequence,
    split_gen,
)
from .series import SampleStream, random_series, random_series_range, series_from, series_of

__all__ = [
    "BOOL",
    "Bitvec",
    "BitvecSampler",
    "BoundedRandom",
    "DrawRecorder",
    "FailureCategory",
    "Fin",
    "FinSampler",
    "INT",
    "NAT",
    "PhiloxGen",
    "Rand",
    "RandError",
    "RandomGen",
    "RandomValue",
    "SampleStream",
    "SamplerConfig",
    "SamplerSet",
    "StdGen",
    "TracedGen",
    "bind",
    "bitvec",
    "both",
    "build_generator",
    "draw_budget",
    "fin",
    "gen_range_of",
    "load_sampler_config",
    "mk_std_gen",
    "next_word",
    "one_of",
    "pure",
    "random_int_range",
    "random_nat_range",
    "random_range",
    "random_series",
    "random_series_range",
    "random_value",
    "replicate",
    "run",
    "run_with_seed",
    "samplers_for",
    "sequence",
    "series_from",
    "series_of",
    "split_gen",
    "traced",
    "uniform_index",
]
