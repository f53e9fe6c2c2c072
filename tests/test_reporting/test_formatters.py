"""Tests for saju_compat.reporting.formatters."""

from __future__ import annotations

from saju_compat.analysis.relations import find_relations
from saju_compat.models.inputs import CandidateName, NameCharacter
from saju_compat.reporting.formatters import (
    format_breakdown,
    format_hidden_stems,
    format_ranking,
    format_relations,
    format_result,
    format_trace,
)
from saju_compat.scoring.ranker import top_n
from saju_compat.scoring.scorer import evaluate_name
from saju_compat.tables.hidden_stems import hidden_stems
from saju_compat.taxonomy.element_taxonomy import Branch

_WATER_METAL = CandidateName(characters=(
    NameCharacter(character="水", resource_element="WATER"),
    NameCharacter(character="金", resource_element="METAL"),
))


# ── format_breakdown / format_result ──────────────────────────────────────────


def test_breakdown_full(sample_chart, full_context) -> None:
    """Every component row is printed and the result passes."""
    text = format_breakdown(evaluate_name(sample_chart, full_context, _WATER_METAL).breakdown)
    for key in ("balance", "yongshin_match", "strength", "ten_god", "final"):
        assert key in text
    assert "[PASS]" in text
    assert "fallbacks" not in text


def test_breakdown_dropped_scores(sample_chart) -> None:
    """Dropped sub-scores print as -- and fallbacks are listed."""
    text = format_breakdown(evaluate_name(sample_chart, None, _WATER_METAL).breakdown)
    strength_row = next(line for line in text.split("\n") if line.startswith("strength"))
    assert "--" in strength_row
    assert "MISSING_FAVORABLE_ELEMENT" in text
    assert "confidence 0.35" in text


def test_trace_numbered_in_order(sample_chart, full_context) -> None:
    result = evaluate_name(sample_chart, full_context, _WATER_METAL)
    text = format_trace(result.trace)
    assert text.startswith("[1] distribution")
    assert text.index("[3] balance") < text.index("[8] final")
    assert "cites:" in text


def test_result_without_trace(sample_chart, full_context) -> None:
    result = evaluate_name(sample_chart, full_context, _WATER_METAL)
    assert "Trace:" not in format_result(result, show_trace=False)
    assert "Trace:" in format_result(result)
    assert "Name: 水金" in format_result(result)


# ── format_ranking ────────────────────────────────────────────────────────────


def test_ranking_rows(sample_chart, full_context) -> None:
    results = [evaluate_name(sample_chart, full_context, _WATER_METAL)]
    text = format_ranking(top_n(results))
    lines = text.split("\n")
    assert len(lines) == 3
    assert "水金" in lines[2]
    assert "PASS" in lines[2]


def test_ranking_empty() -> None:
    assert "no candidates" in format_ranking([])


# ── Tables / relations ────────────────────────────────────────────────────────


def test_hidden_stems_table() -> None:
    text = format_hidden_stems(hidden_stems(Branch.IN))
    lines = text.split("\n")
    assert len(lines) == 5
    assert lines[2].startswith("RESIDUAL")
    assert "戊" in lines[2]
    assert lines[4].startswith("MAIN")
    assert "甲" in lines[4]


def test_relations_listing() -> None:
    text = format_relations(find_relations([Branch.JA, Branch.O]))
    assert text.strip() == "CLASH JA-O"


def test_relations_empty() -> None:
    assert "no relations" in format_relations([])
