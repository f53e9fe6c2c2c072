"""
Append-only trace recorder for one evaluation.

Steps are kept in the order ``add()`` is called; ``steps()`` returns an
immutable snapshot.  A recorder belongs to exactly one evaluation and is
never shared between calls.
"""

from __future__ import annotations

from typing import Iterable, Optional

from saju_compat.models.scoring import TraceStep


class TraceRecorder:
    """Collects ``TraceStep`` entries in execution order."""

    def __init__(self) -> None:
        self._steps: list[TraceStep] = []

    def add(
        self,
        key: str,
        evidence: Iterable[str] = (),
        reasoning: Iterable[str] = (),
        citations: Iterable[str] = (),
        confidence: Optional[float] = None,
    ) -> TraceStep:
        step = TraceStep(
            key=key,
            evidence=tuple(evidence),
            reasoning=tuple(reasoning),
            citations=tuple(citations),
            confidence=None if confidence is None else round(confidence, 4),
        )
        self._steps.append(step)
        return step

    def steps(self) -> tuple[TraceStep, ...]:
        return tuple(self._steps)
