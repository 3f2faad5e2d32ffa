"""Sampler configuration loaded from YAML and checked against JSON Schema."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml
from jsonschema import Draft202012Validator

from splitrand.core.errors import err
from splitrand.generators.base import RandomGen
from splitrand.generators.philox import DEFAULT_ROOT_LABEL, PhiloxGen
from splitrand.generators.stdgen import mk_std_gen

DEFAULT_MAX_WIDTH_BITS = 4096
GENERATOR_KINDS = ("stdgen", "philox")

SAMPLER_CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "generator": {"type": "string", "enum": list(GENERATOR_KINDS)},
        "seed": {"type": "integer", "minimum": 0, "maximum": 2**64 - 1},
        "label": {"type": "string", "minLength": 1},
        "max_width_bits": {"type": "integer", "minimum": 1},
    },
    "required": ["generator", "seed"],
    "additionalProperties": False,
}


@dataclass(frozen=True)
class SamplerConfig:
    generator: str
    seed: int
    label: str = DEFAULT_ROOT_LABEL
    max_width_bits: int = DEFAULT_MAX_WIDTH_BITS

    @classmethod
    def default(cls) -> "SamplerConfig":
        return cls(generator="stdgen", seed=0)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SamplerConfig":
        validator = Draft202012Validator(SAMPLER_CONFIG_SCHEMA)
        errors = sorted(validator.iter_errors(dict(data)), key=lambda e: list(e.path))
        if errors:
            messages = "; ".join(
                f"{'/'.join(str(p) for p in e.path) or '<root>'}: {e.message}" for e in errors
            )
            raise err("E_CONFIG_SCHEMA", messages)
        return cls(
            generator=str(data["generator"]),
            seed=int(data["seed"]),
            label=str(data.get("label") or DEFAULT_ROOT_LABEL),
            max_width_bits=int(data.get("max_width_bits") or DEFAULT_MAX_WIDTH_BITS),
        )

    def with_seed(self, seed: int) -> "SamplerConfig":
        return SamplerConfig(
            generator=self.generator,
            seed=seed,
            label=self.label,
            max_width_bits=self.max_width_bits,
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "generator": self.generator,
            "seed": self.seed,
            "label": self.label,
            "max_width_bits": self.max_width_bits,
        }


def load_sampler_config(path: Path) -> SamplerConfig:
    if not path.exists():
        raise err("E_CONFIG_IO", f"sampler config missing at '{path}'")
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise err("E_CONFIG_ROOT", "sampler config YAML must decode to a mapping")
    return SamplerConfig.from_mapping(data)


def build_generator(config: SamplerConfig) -> RandomGen:
    """Seed the generator kind named by ``config``."""
    if config.generator == "stdgen":
        return mk_std_gen(config.seed)
    if config.generator == "philox":
        return PhiloxGen.from_seed(config.seed, label=config.label)
    raise err("E_CONFIG_GENERATOR", f"unknown generator kind '{config.generator}'")


__all__ = [
    "DEFAULT_MAX_WIDTH_BITS",
    "GENERATOR_KINDS",
    "SAMPLER_CONFIG_SCHEMA",
    "SamplerConfig",
    "build_generator",
    "load_sampler_config",
]
