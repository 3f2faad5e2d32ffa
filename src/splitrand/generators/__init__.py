"""Generator capability and the concrete generators shipped with splitrand."""

from .base import RandomGen, ensure_generator
from .philox import PHILOX_RANGE, PhiloxGen
from .stdgen import STD_RANGE, StdGen, mk_std_gen
from .traced import DrawRecorder, TracedGen, draw_budget, traced

__all__ = [
    "DrawRecorder",
    "PHILOX_RANGE",
    "PhiloxGen",
    "RandomGen",
    "STD_RANGE",
    "StdGen",
    "TracedGen",
    "draw_budget",
    "ensure_generator",
    "mk_std_gen",
    "traced",
]
