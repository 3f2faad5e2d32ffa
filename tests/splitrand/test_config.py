from __future__ import annotations

import importlib
import logging
from pathlib import Path

import pytest
import yaml

from splitrand import bounded, series
from splitrand.core.config import (
    DEFAULT_MAX_WIDTH_BITS,
    SamplerConfig,
    build_generator,
    load_sampler_config,
)
from splitrand.core.errors import FailureCategory, RandError, err
from splitrand.core import logging as slog
from splitrand.core.logging import add_file_handler, configure_logging, get_logger
from splitrand.generators import PhiloxGen, StdGen, mk_std_gen


def _write(tmp_path: Path, payload: object) -> Path:
    path = tmp_path / "sampler.yaml"
    path.write_text(yaml.safe_dump(payload), encoding="utf-8")
    return path


def test_load_sampler_config_round_trips_fields(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        {"generator": "philox", "seed": 42, "label": "unit_test", "max_width_bits": 128},
    )
    config = load_sampler_config(path)
    assert config == SamplerConfig(generator="philox", seed=42, label="unit_test", max_width_bits=128)
    assert build_generator(config) == PhiloxGen.from_seed(42, label="unit_test")


def test_defaults_fill_optional_fields(tmp_path: Path) -> None:
    config = load_sampler_config(_write(tmp_path, {"generator": "stdgen", "seed": 7}))
    assert config.max_width_bits == DEFAULT_MAX_WIDTH_BITS
    assert build_generator(config) == mk_std_gen(7)
    assert isinstance(build_generator(SamplerConfig.default()), StdGen)
    assert config.with_seed(8).as_dict()["seed"] == 8


@pytest.mark.parametrize(
    "payload",
    [
        {"generator": "mersenne", "seed": 1},
        {"generator": "stdgen"},
        {"generator": "stdgen", "seed": -1},
        {"generator": "philox", "seed": 2**64},
        {"generator": "stdgen", "seed": 1, "extra": True},
        {"generator": "philox", "seed": 1, "max_width_bits": 0},
    ],
)
def test_schema_violations_are_config_errors(tmp_path: Path, payload: dict) -> None:
    with pytest.raises(RandError) as excinfo:
        load_sampler_config(_write(tmp_path, payload))
    assert excinfo.value.code == "E_CONFIG_SCHEMA"
    assert excinfo.value.context.failure_category is FailureCategory.F5_CONFIG


def test_missing_or_non_mapping_config(tmp_path: Path) -> None:
    with pytest.raises(RandError) as excinfo:
        load_sampler_config(tmp_path / "absent.yaml")
    assert excinfo.value.code == "E_CONFIG_IO"
    with pytest.raises(RandError) as excinfo:
        load_sampler_config(_write(tmp_path, ["stdgen", 1]))
    assert excinfo.value.code == "E_CONFIG_ROOT"


def test_build_generator_rejects_unknown_kind() -> None:
    with pytest.raises(RandError) as excinfo:
        build_generator(SamplerConfig(generator="xorshift", seed=1))
    assert excinfo.value.code == "E_CONFIG_GENERATOR"


def test_failure_record_maps_codes_onto_taxonomy() -> None:
    record = err("E_RANGE_WIDTH", "too wide").failure_record()
    assert record == {
        "code": "E_RANGE_WIDTH",
        "detail": "too wide",
        "failure_category": "width_overflow",
        "failure_code": "range_width_overflow",
    }
    unknown = err("E_SOMETHING_ELSE", "x")
    assert unknown.context.failure_code == "E_SOMETHING_ELSE"
    assert str(unknown) == "E_SOMETHING_ELSE: x"


def test_configure_logging_only_touches_package_logger(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(slog, "_STREAM_HANDLER", None)
    package = logging.getLogger("splitrand")
    saved_level = package.level
    saved_handlers = list(package.handlers)
    root_handlers = list(logging.getLogger().handlers)
    try:
        logger = configure_logging(logging.DEBUG)
        again = configure_logging(logging.DEBUG)
        assert logger is again
        assert logger.name == "splitrand"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == len(saved_handlers) + 1
        assert logging.getLogger().handlers == root_handlers
    finally:
        for handler in package.handlers[len(saved_handlers):]:
            package.removeHandler(handler)
        package.setLevel(saved_level)
    assert package.handlers == saved_handlers


def test_package_logs_reach_file_handler(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(slog, "_FILE_HANDLERS", {})
    package = logging.getLogger("splitrand")
    saved_level = package.level
    saved_handlers = list(package.handlers)
    log_path = tmp_path / "logs" / "splitrand.log"
    try:
        add_file_handler(log_path, level=logging.DEBUG)
        logger = get_logger("unit")
        assert logger.name == "splitrand.unit"
        logger.info("sampler configured")
        for handler in package.handlers:
            handler.flush()
        assert "sampler configured" in log_path.read_text(encoding="utf-8")
    finally:
        for handler in package.handlers[len(saved_handlers):]:
            package.removeHandler(handler)
            handler.close()
        package.setLevel(saved_level)


def test_library_modules_log_under_package_namespace() -> None:
    assert get_logger("splitrand.bounded") is bounded.logger
    assert series.logger.name == "splitrand.series"
    traced_module = importlib.import_module("splitrand.generators.traced")
    assert traced_module.logger.name == "splitrand.generators.traced"
    assert get_logger("bounded") is bounded.logger
