"""Draw accounting for any generator.

``TracedGen`` wraps an inner generator value and reports every ``next`` and
``split`` to a shared :class:`DrawRecorder`.  The wrapper changes nothing
about the outputs: a traced lineage yields exactly the words of the inner
lineage.  The recorder optionally appends one JSON line per call to a trace
file, and :func:`draw_budget` checks that a block of sampling code consumed
exactly the draws it declared.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Mapping, Optional, Tuple

from splitrand.core.errors import err
from splitrand.core.logging import get_logger
from splitrand.generators.base import RandomGen

logger = get_logger(__name__)


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _append_jsonl(path: Path, record: Mapping[str, object]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(record, sort_keys=True))
        handle.write("\n")


@dataclass(eq=False)
class DrawRecorder:
    """Mutable tally of generator calls, shared by a whole traced lineage."""

    label: str = "trace"
    trace_path: Optional[Path] = None
    draws: int = 0
    splits: int = 0
    _events: int = field(default=0, repr=False)

    def record(self, event: str, payload: Optional[Mapping[str, object]] = None) -> None:
        if event == "next":
            self.draws += 1
        elif event == "split":
            self.splits += 1
        else:
            raise ValueError(f"unknown generator event '{event}'")
        self._events += 1
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s: %s #%d", self.label, event, self._events)
        if self.trace_path is not None:
            _append_jsonl(
                self.trace_path,
                {
                    "ts_utc": _utc_timestamp(),
                    "label": self.label,
                    "event": event,
                    "draws_total": self.draws,
                    "splits_total": self.splits,
                    "payload": dict(payload or {}),
                },
            )

    @property
    def events(self) -> int:
        return self._events


@dataclass(frozen=True)
class TracedGen:
    inner: RandomGen
    recorder: DrawRecorder

    def gen_range(self) -> Tuple[int, int]:
        return self.inner.gen_range()

    def next(self) -> Tuple[int, "TracedGen"]:
        word, successor = self.inner.next()
        self.recorder.record("next", {"word": word})
        return word, TracedGen(successor, self.recorder)

    def split(self) -> Tuple["TracedGen", "TracedGen"]:
        left, right = self.inner.split()
        self.recorder.record("split")
        return TracedGen(left, self.recorder), TracedGen(right, self.recorder)


def traced(gen: RandomGen, *, label: str = "trace", trace_path: Optional[Path] = None) -> TracedGen:
    """Wrap ``gen`` with a fresh recorder."""
    return TracedGen(gen, DrawRecorder(label=label, trace_path=trace_path))


@contextmanager
def draw_budget(
    recorder: DrawRecorder,
    *,
    expected_draws: Optional[int] = None,
    expected_splits: Optional[int] = None,
    event: str = "sample",
) -> Iterator[DrawRecorder]:
    """Fail with ``E_RNG_BUDGET`` when the block's draws differ from the budget."""
    before_draws = recorder.draws
    before_splits = recorder.splits
    yield recorder
    draws = recorder.draws - before_draws
    splits = recorder.splits - before_splits
    if expected_draws is not None and draws != expected_draws:
        raise err(
            "E_RNG_BUDGET",
            f"event '{event}' expected {expected_draws} draws, observed {draws}",
        )
    if expected_splits is not None and splits != expected_splits:
        raise err(
            "E_RNG_BUDGET",
            f"event '{event}' expected {expected_splits} splits, observed {splits}",
        )


__all__ = ["DrawRecorder", "TracedGen", "draw_budget", "traced"]
