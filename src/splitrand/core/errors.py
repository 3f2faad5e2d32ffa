"""Failure taxonomy shared by every sampler and generator.

Contract violations surface as a :class:`RandError` carrying a stable
``E_*`` code.  The code maps onto a small set of failure categories so that
callers (and tests) can branch on the kind of violation rather than on the
message text.  None of these are expected runtime conditions: they signal a
caller bug, raised before any generator state is consumed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Tuple


class FailureCategory(Enum):
    """High-level failure buckets."""

    F1_PRECONDITION = "precondition_violation"
    F2_OVERFLOW = "width_overflow"
    F3_GENERATOR = "generator_contract"
    F4_INSTANCE = "missing_instance"
    F5_CONFIG = "config_invalid"
    F6_TRACE = "rng_budget_violation"
    F7_VALIDATION = "validation_failure"


_FAILURE_CODE_MAP: Mapping[str, Tuple[FailureCategory, str]] = {
    "E_RANGE_ORDER": (FailureCategory.F1_PRECONDITION, "range_lo_above_hi"),
    "E_DOMAIN_NAT": (FailureCategory.F1_PRECONDITION, "nat_negative"),
    "E_DOMAIN_FIN": (FailureCategory.F1_PRECONDITION, "fin_out_of_bounds"),
    "E_DOMAIN_BITVEC": (FailureCategory.F1_PRECONDITION, "bitvec_out_of_bounds"),
    "E_DOMAIN_MISMATCH": (FailureCategory.F1_PRECONDITION, "endpoint_domain_mismatch"),
    "E_EMPTY_CHOICE": (FailureCategory.F1_PRECONDITION, "choice_from_empty"),
    "E_REPLICATE_COUNT": (FailureCategory.F1_PRECONDITION, "replicate_negative"),
    "E_RANGE_WIDTH": (FailureCategory.F2_OVERFLOW, "range_width_overflow"),
    "E_GEN_CAPABILITY": (FailureCategory.F3_GENERATOR, "generator_capability_missing"),
    "E_GEN_RANGE": (FailureCategory.F3_GENERATOR, "generator_range_invalid"),
    "E_SEED_RANGE": (FailureCategory.F3_GENERATOR, "seed_out_of_range"),
    "E_NO_INSTANCE": (FailureCategory.F4_INSTANCE, "no_sampler_for_type"),
    "E_CONFIG_IO": (FailureCategory.F5_CONFIG, "config_file_missing"),
    "E_CONFIG_ROOT": (FailureCategory.F5_CONFIG, "config_root_not_mapping"),
    "E_CONFIG_SCHEMA": (FailureCategory.F5_CONFIG, "config_schema_violation"),
    "E_CONFIG_GENERATOR": (FailureCategory.F5_CONFIG, "config_unknown_generator"),
    "E_RNG_BUDGET": (FailureCategory.F6_TRACE, "rng_budget_violation"),
    "E_VALIDATION_UNIFORMITY": (FailureCategory.F7_VALIDATION, "uniformity_rejected"),
    "E_VALIDATION_CORRELATION": (FailureCategory.F7_VALIDATION, "correlation_detected"),
    "E_VALIDATION_SAMPLES": (FailureCategory.F7_VALIDATION, "samples_invalid"),
}


@dataclass(frozen=True)
class ErrorContext:
    """Structured payload describing a failure.

    ``code`` is the local ``E_*`` identifier raised by the code; the helper
    properties map it onto the failure taxonomy.
    """

    code: str
    detail: str

    def as_message(self) -> str:
        return f"{self.code}: {self.detail}"

    @property
    def failure_category(self) -> FailureCategory:
        return _FAILURE_CODE_MAP.get(
            self.code, (FailureCategory.F1_PRECONDITION, self.code)
        )[0]

    @property
    def failure_code(self) -> str:
        return _FAILURE_CODE_MAP.get(
            self.code, (FailureCategory.F1_PRECONDITION, self.code)
        )[1]


class RandError(RuntimeError):
    """Runtime error that preserves the canonical failure context."""

    def __init__(self, context: ErrorContext) -> None:
        super().__init__(context.as_message())
        self.context = context

    @property
    def code(self) -> str:
        return self.context.code

    def failure_record(self) -> Dict[str, str]:
        return {
            "code": self.context.code,
            "detail": self.context.detail,
            "failure_category": self.context.failure_category.value,
            "failure_code": self.context.failure_code,
        }


def err(code: str, detail: str) -> RandError:
    """Utility to build a :class:`RandError` with minimal ceremony."""

    return RandError(ErrorContext(code=code, detail=detail))


__all__ = ["ErrorContext", "FailureCategory", "RandError", "err"]
