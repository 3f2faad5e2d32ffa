"""Statistical checks over sampled output.

These validators back the uniformity and split-independence guarantees:
a chi-squared goodness-of-fit test against the uniform distribution on an
integer range, and a Pearson cross-correlation between two sample
sequences.  Failures are raised as ``E_VALIDATION_*`` errors so callers can
treat them like any other contract breach.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from scipy import stats

from splitrand.core.errors import err


@dataclass(frozen=True)
class UniformityReport:
    lo: int
    hi: int
    samples: int
    counts: tuple[int, ...]
    chi_squared: float
    p_value: float

    @property
    def expected(self) -> float:
        return self.samples / len(self.counts)

    def as_dict(self) -> dict[str, object]:
        return {
            "lo": self.lo,
            "hi": self.hi,
            "samples": self.samples,
            "counts": list(self.counts),
            "chi_squared": self.chi_squared,
            "p_value": self.p_value,
        }


def uniformity_report(samples: Sequence[int], lo: int, hi: int) -> UniformityReport:
    """Chi-squared goodness of fit of ``samples`` against uniform ``[lo, hi]``."""
    if hi <= lo:
        raise err("E_VALIDATION_SAMPLES", f"uniformity needs at least two bins, got [{lo}, {hi}]")
    values = np.asarray(samples, dtype=np.int64)
    if values.size == 0:
        raise err("E_VALIDATION_SAMPLES", "no samples to test")
    if values.min() < lo or values.max() > hi:
        raise err(
            "E_VALIDATION_SAMPLES",
            f"samples span [{values.min()}, {values.max()}], outside [{lo}, {hi}]",
        )
    counts = np.bincount(values - lo, minlength=hi - lo + 1)
    statistic, p_value = stats.chisquare(counts)
    return UniformityReport(
        lo=lo,
        hi=hi,
        samples=int(values.size),
        counts=tuple(int(c) for c in counts),
        chi_squared=float(statistic),
        p_value=float(p_value),
    )


def assert_uniform(report: UniformityReport, *, alpha: float = 0.001) -> UniformityReport:
    if report.p_value < alpha:
        raise err(
            "E_VALIDATION_UNIFORMITY",
            f"chi-squared {report.chi_squared:.3f} over [{report.lo}, {report.hi}] "
            f"has p={report.p_value:.2e} < {alpha}",
        )
    return report


def cross_correlation(first: Sequence[float], second: Sequence[float]) -> float:
    """Pearson correlation coefficient of two equally long sequences."""
    a = np.asarray(first, dtype=np.float64)
    b = np.asarray(second, dtype=np.float64)
    if a.shape != b.shape or a.size < 2:
        raise err(
            "E_VALIDATION_SAMPLES",
            f"correlation needs two equal sequences of length >= 2, got {a.size} and {b.size}",
        )
    if np.std(a) == 0.0 or np.std(b) == 0.0:
        raise err("E_VALIDATION_SAMPLES", "correlation undefined for a constant sequence")
    return float(np.corrcoef(a, b)[0, 1])


def assert_independent(
    first: Sequence[float],
    second: Sequence[float],
    *,
    threshold: float = 0.05,
) -> float:
    coefficient = cross_correlation(first, second)
    if abs(coefficient) > threshold:
        raise err(
            "E_VALIDATION_CORRELATION",
            f"|r|={abs(coefficient):.4f} exceeds {threshold}",
        )
    return coefficient


__all__ = [
    "UniformityReport",
    "assert_independent",
    "assert_uniform",
    "cross_correlation",
    "uniformity_report",
]
