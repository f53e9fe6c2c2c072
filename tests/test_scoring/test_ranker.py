"""
Tests for saju_compat/scoring/ranker.py.

What we test
------------
score_candidates():
  - One result per candidate, input order preserved.
  - max_candidates evaluates only the first N.
  - A zero-character candidate aborts with StructuralViolationError.

top_n():
  - Sorted by final score descending; 1-based ranks.
  - Ties keep input order.
  - n larger than the input returns everything; empty input -> empty list.
"""

from __future__ import annotations

import pytest

from saju_compat.errors import StructuralViolationError
from saju_compat.models.inputs import CandidateName, NameCharacter
from saju_compat.scoring.ranker import score_candidates, top_n
from saju_compat.taxonomy.element_taxonomy import Element

E = Element


def _name(label: str, *elements: Element) -> CandidateName:
    return CandidateName(
        label=label,
        characters=tuple(
            NameCharacter(character=label[i % len(label)], resource_element=e)
            for i, e in enumerate(elements)
        ),
    )


@pytest.fixture
def candidates() -> list[CandidateName]:
    return [
        _name("firearth", E.FIRE, E.EARTH),
        _name("watermetal", E.WATER, E.METAL),
        _name("waterwater", E.WATER, E.WATER),
        _name("waterwater2", E.WATER, E.WATER),
    ]


class TestScoreCandidates:
    def test_input_order(self, sample_chart, full_context, candidates):
        results = score_candidates(sample_chart, full_context, candidates)
        assert [r.name for r in results] == [c.label for c in candidates]

    def test_max_candidates(self, sample_chart, full_context, candidates):
        results = score_candidates(sample_chart, full_context, candidates, max_candidates=2)
        assert [r.name for r in results] == ["firearth", "watermetal"]

    def test_empty_candidate_rejected(self, sample_chart, full_context, candidates):
        bad = candidates + [CandidateName(characters=())]
        with pytest.raises(StructuralViolationError):
            score_candidates(sample_chart, full_context, bad)


class TestTopN:
    def test_sorted_with_ranks(self, sample_chart, full_context, candidates):
        ranked = top_n(score_candidates(sample_chart, full_context, candidates), n=3)
        assert [r.rank for r in ranked] == [1, 2, 3]
        scores = [r.final_score for r in ranked]
        assert scores == sorted(scores, reverse=True)
        assert ranked[0].result.name == "waterwater"

    def test_ties_keep_input_order(self, sample_chart, full_context, candidates):
        ranked = top_n(score_candidates(sample_chart, full_context, candidates))
        assert ranked[0].final_score == ranked[1].final_score
        assert (ranked[0].index, ranked[1].index) == (2, 3)

    def test_n_larger_than_input(self, sample_chart, full_context, candidates):
        ranked = top_n(score_candidates(sample_chart, full_context, candidates), n=50)
        assert len(ranked) == 4
        assert ranked[-1].result.name == "firearth"

    def test_empty(self):
        assert top_n([], n=5) == []
