from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Tuple

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge

_log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Metric updates are best-effort: a broken registry must never abort table
# generation or loading. Failures are logged at debug level.
# -----------------------------------------------------------------------------
def _best_effort(msg: str, fn: Callable[[], Any]) -> None:
    try:
        fn()
    except Exception as e:  # pragma: no cover
        _log.debug("%s: %s", msg, e)


def _registered(name: str, kind: type, reg: CollectorRegistry) -> Optional[Any]:
    try:
        names_map = getattr(reg, "_names_to_collectors", None)
        if isinstance(names_map, dict):
            existing = names_map.get(name)
            if isinstance(existing, kind):
                return existing
    except Exception as e:  # pragma: no cover
        _log.debug("lookup %s failed: %s", name, e)
    return None


def _get_or_create_counter(
    name: str,
    doc: str,
    labelnames: Tuple[str, ...] = (),
    registry: Optional[CollectorRegistry] = None,
) -> Counter:
    reg = registry or REGISTRY
    existing = _registered(name, Counter, reg)
    if existing is not None:
        return existing
    try:
        return Counter(name, doc, labelnames=labelnames, registry=reg)
    except ValueError:
        # Another module created it first; fetch and reuse.
        found = _registered(name, Counter, reg)
        if found is not None:
            return found
        return Counter(name, doc, labelnames=labelnames, registry=None)


def _get_or_create_gauge(
    name: str,
    doc: str,
    labelnames: Tuple[str, ...] = (),
    registry: Optional[CollectorRegistry] = None,
) -> Gauge:
    reg = registry or REGISTRY
    existing = _registered(name, Gauge, reg)
    if existing is not None:
        return existing
    try:
        return Gauge(name, doc, labelnames=labelnames, registry=reg)
    except ValueError:
        found = _registered(name, Gauge, reg)
        if found is not None:
            return found
        return Gauge(name, doc, labelnames=labelnames, registry=None)


# --- Generator metrics --------------------------------------------------------

_generator_records_total = _get_or_create_counter(
    "emojiseq_generator_records_total",
    "Sequence records emitted while compiling the emoji table",
    ("source",),
)
_generator_skipped_lines_total = _get_or_create_counter(
    "emojiseq_generator_skipped_lines_total",
    "Source lines skipped for lacking a type field",
    ("source",),
)

# --- Runtime table ------------------------------------------------------------

_table_sequences = _get_or_create_gauge(
    "emojiseq_table_sequences",
    "Distinct emoji sequences in the loaded process table",
    ("origin",),
)


def generator_report(*, source: str = "", records: int = 0, skipped: int = 0) -> None:
    label = source or "unknown"

    def _do() -> None:
        if records:
            _generator_records_total.labels(source=label).inc(records)
        if skipped:
            _generator_skipped_lines_total.labels(source=label).inc(skipped)

    _best_effort("inc generator metrics", _do)


def table_loaded(*, origin: str, sequences: int) -> None:
    _best_effort(
        "set table size gauge",
        lambda: _table_sequences.labels(origin=origin).set(sequences),
    )
