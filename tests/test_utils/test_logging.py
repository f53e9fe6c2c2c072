"""Tests for saju_compat.utils.logging."""

from __future__ import annotations

import json
import logging

import pytest

from saju_compat.config import LoggingConfig
from saju_compat.models.inputs import CandidateName, NameCharacter
from saju_compat.scoring.ranker import score_candidates
from saju_compat.scoring.scorer import evaluate_name
from saju_compat.utils.logging import (
    LOG_FORMAT,
    EvaluationLogAdapter,
    _JsonFormatter,
    _TextFormatter,
    configure_logging,
)

_WATER_METAL = CandidateName(characters=(
    NameCharacter(character="水", resource_element="WATER"),
    NameCharacter(character="金", resource_element="METAL"),
))


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("saju_compat.test", logging.INFO, __file__, 1, msg, None, None)
    for key, val in extra.items():
        setattr(record, key, val)
    return record


def test_json_formatter_fields() -> None:
    """One JSON object with ts, level, logger and msg."""
    payload = json.loads(_JsonFormatter().format(_record("scored 3")))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "saju_compat.test"
    assert payload["msg"] == "scored 3"
    assert payload["ts"].endswith("Z")


def test_json_formatter_extra_and_hangul() -> None:
    """Extra attributes pass through; Hangul is not escaped."""
    line = _JsonFormatter().format(_record("이름 평가", candidate="하윤"))
    assert "이름 평가" in line
    assert json.loads(line)["candidate"] == "하윤"


def test_text_formatter_appends_context() -> None:
    """Chart, candidate and score are appended in a fixed order."""
    line = _TextFormatter(LOG_FORMAT).format(
        _record("Evaluated name.", candidate="水金", final_score=71.19, chart="GAP-JA")
    )
    assert line.endswith("Evaluated name. [chart=GAP-JA candidate=水金 final_score=71.19]")


def test_text_formatter_plain_without_context() -> None:
    line = _TextFormatter(LOG_FORMAT).format(_record("loaded config"))
    assert line.endswith("saju_compat.test: loaded config")


def test_adapter_merges_call_extra() -> None:
    """Per-call extra is added to the bound context, not substituted for it."""
    adapter = EvaluationLogAdapter(logging.getLogger("saju_compat.test"), chart="GAP-JA")
    _, kwargs = adapter.process("msg", {"extra": {"candidate": "하윤"}})
    assert kwargs["extra"] == {"chart": "GAP-JA", "candidate": "하윤"}
    _, kwargs = adapter.process("msg", {})
    assert kwargs["extra"] == {"chart": "GAP-JA"}


def test_scorer_record_carries_evaluation(caplog, sample_chart, full_context) -> None:
    with caplog.at_level(logging.DEBUG, logger="saju_compat.scoring.scorer"):
        evaluate_name(sample_chart, full_context, _WATER_METAL)
    record = next(r for r in caplog.records if r.name == "saju_compat.scoring.scorer")
    assert record.chart == sample_chart.label()
    assert record.candidate == "水金"
    assert record.final_score == pytest.approx(71.19, abs=0.01)


def test_ranker_record_carries_chart(caplog, sample_chart, full_context) -> None:
    with caplog.at_level(logging.INFO, logger="saju_compat.scoring.ranker"):
        score_candidates(sample_chart, full_context, [_WATER_METAL])
    record = next(r for r in caplog.records if r.name == "saju_compat.scoring.ranker")
    assert record.chart == sample_chart.label()
    assert record.getMessage() == "Scored 1 candidate(s)."


def test_configure_logging_file(tmp_path) -> None:
    """A log file is created, parent directories included."""
    log_file = tmp_path / "logs" / "run.log"
    configure_logging(LoggingConfig(level="DEBUG", log_file=str(log_file)))
    logging.getLogger("saju_compat.test").debug("hello")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert log_file.exists()
    assert "hello" in log_file.read_text(encoding="utf-8")
    configure_logging(LoggingConfig())
