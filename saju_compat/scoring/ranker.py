"""
Candidate ranker: scores many candidate names against one chart and selects
the top-N.

Usage flow
----------
1. score_candidates(chart, context, candidates, config)
   -> list[CompatibilityResult]  (input order, one per evaluated candidate)

2. top_n(results, n=10)
   -> list[RankedCandidate]  (best first)

Each evaluation is independent of every other, so callers that want
parallelism may fan ``evaluate_name`` out themselves; nothing here holds
state across calls.  Candidate caps belong to the caller and are passed in as
``max_candidates``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from saju_compat.config import ScoringConfig
from saju_compat.models.chart import BirthChart
from saju_compat.models.inputs import CandidateName, ChartContext
from saju_compat.models.scoring import CompatibilityResult
from saju_compat.scoring.scorer import evaluate_name
from saju_compat.utils.logging import EvaluationLogAdapter

logger = logging.getLogger(__name__)


@dataclass
class RankedCandidate:
    """A scored candidate with its 1-based rank.

    Attributes:
        rank:   Position after sorting (1 = best).
        result: The candidate's full compatibility result.
        index:  Position of the candidate in the input sequence.
    """

    rank:   int
    result: CompatibilityResult
    index:  int

    @property
    def final_score(self) -> float:
        return self.result.breakdown.final_score


def score_candidates(
    chart:          BirthChart,
    context:        Optional[ChartContext],
    candidates:     Sequence[CandidateName],
    config:         Optional[ScoringConfig] = None,
    max_candidates: Optional[int] = None,
) -> list[CompatibilityResult]:
    """Evaluate every candidate (up to ``max_candidates``) against ``chart``.

    Args:
        chart:          The four resolved pillars.
        context:        Upstream judgments shared by all candidates.
        candidates:     Candidate names, in caller order.
        config:         Scoring configuration.
        max_candidates: Evaluate at most this many (the first N); ``None`` = all.

    Returns:
        One ``CompatibilityResult`` per evaluated candidate, input order.

    Raises:
        StructuralViolationError: If any evaluated candidate has zero characters.
    """
    log = EvaluationLogAdapter(logger, chart=chart.label())
    selected = list(candidates)
    if max_candidates is not None and len(selected) > max_candidates:
        log.info(
            "Candidate cap %d reached; skipping %d candidate(s).",
            max_candidates, len(selected) - max_candidates,
        )
        selected = selected[:max_candidates]

    results = [evaluate_name(chart, context, name, config) for name in selected]
    log.info("Scored %d candidate(s).", len(results))
    return results


def top_n(results: Sequence[CompatibilityResult], n: int = 10) -> list[RankedCandidate]:
    """Best ``n`` results by final score; ties keep input order."""
    order = sorted(
        range(len(results)),
        key=lambda i: (-results[i].breakdown.final_score, i),
    )
    return [
        RankedCandidate(rank=pos + 1, result=results[i], index=i)
        for pos, i in enumerate(order[:n])
    ]
