"""
ASCII terminal formatters for CLI commands.

All formatters accept result models and return plain multi-line strings
suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Sub-scores that were dropped for missing input print as ``--`` with
weight ``0.0000`` so a reader can tell "not scored" from "scored zero".
"""

from __future__ import annotations

from typing import Sequence

from saju_compat.models.relation import BranchRelation, HiddenStemEntry
from saju_compat.models.scoring import CompatibilityResult, ScoringBreakdown, TraceStep
from saju_compat.scoring.elements import format_distribution
from saju_compat.scoring.ranker import RankedCandidate
from saju_compat.tables.cycles import STEM_HANJA, stem_element

_RULE = "-" * 60


def _fmt_score(score: float | None) -> str:
    return "   --" if score is None else f"{score:6.2f}"


def format_breakdown(breakdown: ScoringBreakdown) -> str:
    """Sub-scores, penalties and final score as an aligned table."""
    lines = [
        f"{'component':<16}{'score':>8}{'weight':>10}{'effective':>11}",
        _RULE,
    ]
    for key, sub in breakdown.sub_scores().items():
        lines.append(
            f"{key:<16}{_fmt_score(sub.score):>8}{sub.weight:>10.4f}{sub.effective_weight:>11.4f}"
        )
    p = breakdown.penalties
    lines += [
        _RULE,
        f"{'weighted':<16}{breakdown.weighted_before_penalty:>8.2f}",
        f"{'penalties':<16}{-p.total:>8.2f}   "
        f"(gishin {p.gishin:g}, gushin {p.gushin:g}, structure {p.structure:g})",
        f"{'final':<16}{breakdown.final_score:>8.2f}   "
        f"[{'PASS' if breakdown.is_passed else 'FAIL'}] confidence {breakdown.confidence:.2f}",
        "",
        f"combined: {format_distribution(breakdown.combined_distribution)}",
    ]
    if breakdown.fallbacks:
        lines.append("fallbacks: " + ", ".join(f.value for f in breakdown.fallbacks))
    return "\n".join(lines)


def format_trace(trace: Sequence[TraceStep]) -> str:
    """Numbered trace steps with indented evidence and reasoning."""
    lines: list[str] = []
    for idx, step in enumerate(trace, start=1):
        header = f"[{idx}] {step.key}"
        if step.confidence is not None:
            header += f"  (confidence {step.confidence:.2f})"
        lines.append(header)
        lines += [f"    - {item}" for item in step.evidence]
        lines += [f"    > {item}" for item in step.reasoning]
        if step.citations:
            lines.append(f"    cites: {', '.join(step.citations)}")
    return "\n".join(lines)


def format_result(result: CompatibilityResult, show_trace: bool = True) -> str:
    parts = [f"Name: {result.name}", "", format_breakdown(result.breakdown)]
    if show_trace:
        parts += ["", "Trace:", format_trace(result.trace)]
    return "\n".join(parts)


def format_ranking(ranked: Sequence[RankedCandidate]) -> str:
    """One line per ranked candidate."""
    if not ranked:
        return "  (no candidates)"
    lines = [f"{'rank':>4}  {'name':<12}{'final':>8}{'conf':>7}  status", _RULE]
    for entry in ranked:
        b = entry.result.breakdown
        lines.append(
            f"{entry.rank:>4}  {entry.result.name:<12}{b.final_score:>8.2f}"
            f"{b.confidence:>7.2f}  {'PASS' if b.is_passed else 'FAIL'}"
        )
    return "\n".join(lines)


def format_hidden_stems(entries: Sequence[HiddenStemEntry]) -> str:
    lines = [f"{'role':<10}{'stem':<8}{'hanja':<7}{'element':<8}{'days':>4}", _RULE[:37]]
    for e in entries:
        lines.append(
            f"{e.role.value:<10}{e.stem.value:<8}{STEM_HANJA[e.stem]:<7}"
            f"{stem_element(e.stem).value:<8}{e.days:>4}"
        )
    return "\n".join(lines)


def format_relations(relations: Sequence[BranchRelation]) -> str:
    if not relations:
        return "  (no relations)"
    return "\n".join(f"  {r.describe()}" for r in relations)
