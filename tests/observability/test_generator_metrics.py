from __future__ import annotations

from prometheus_client import REGISTRY

from emojiseq.generator import parse_lines
from emojiseq.observability.metrics import table_loaded


def _value(name: str, **labels: str) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_generator_counts_records_and_skips() -> None:
    before_records = _value("emojiseq_generator_records_total", source="metrics-test.txt")
    before_skipped = _value("emojiseq_generator_skipped_lines_total", source="metrics-test.txt")

    parse_lines(["1F600 ; Basic_Emoji", "stray annotation"], source="metrics-test.txt")

    assert _value("emojiseq_generator_records_total", source="metrics-test.txt") == before_records + 2
    assert (
        _value("emojiseq_generator_skipped_lines_total", source="metrics-test.txt")
        == before_skipped + 1
    )


def test_table_gauge() -> None:
    table_loaded(origin="metrics-test", sequences=42)
    assert _value("emojiseq_table_sequences", origin="metrics-test") == 42.0
