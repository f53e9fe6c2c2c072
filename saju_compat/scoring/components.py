"""
Sub-score components of the compatibility score.  Pure functions, no I/O.

Each component returns a ``ComponentResult`` (score plus the evidence and
reasoning lines that the scorer copies into its trace).

balance (0–100)
---------------
Compare the sorted combined (chart + name) distribution with the best one
achievable by adding the name's characters to the chart: the "optimal"
distribution fills one count at a time into the currently smallest element.
    moves        = Σ max(0, optimal_i − actual_i)   (sorted, element-blind)
    extra_zeros  = max(0, zeros(actual) − zeros(optimal))
    extra_spread = max(0, spread(actual) − spread(optimal))
    score        = clamp(100 − 20·moves − 10·extra_zeros − 5·extra_spread)
A name that reaches the optimal shape scores 100.

yongshin_match (0–100)
----------------------
Per-character affinity, first match wins:
    yongshin 1.0 · heeshin 0.5 · gishin −0.6 · gushin −1.0 ·
    element generating the yongshin 0.3 · anything else 0.
    normalized = clamp((mean_affinity + 1) · 50)
    score      = 50 + (normalized − 50) · (0.55 + 0.45 · confidence)
yongshin has the highest affinity, so one more yongshin character can only
raise the mean.

strength (0–100)
----------------
STRONG day master: output, wealth and authority elements help (+1); same
element and resource hurt (−1).  WEAK day master: the reverse.
    intensity = support/(support+oppose) for STRONG, oppose share for WEAK,
                or the day master's mean root weight in the chart's
                branches (1 − ratio for WEAK) when totals are absent.
    score     = clamp(50 + mean_role · 50 · (0.6 + 0.4 · intensity))

ten_god (0–100)
---------------
Each ten-god group maps to an element through the day master.  With counts:
    deviation(g) = (mean − count_g) / max(mean, 1), surplus (negative) ×0.5
With only group lists: weak groups +1.0, dominant groups −0.5.
    score = clamp(50 + mean_deviation_of_name_elements · 50)

penalties (points)
------------------
    gishin    = chars on gishin × gishin_per_char
    gushin    = chars on gushin × gushin_per_char
    structure = chars breaking a confident FOLLOW (supporting the day master)
                or TRANSFORMATION (controlling the transformed element)
                structure × structure_per_char
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from saju_compat.config import AffinityConfig, PenaltyConfig
from saju_compat.models.inputs import (
    FavorableElementSet,
    StrengthProfile,
    StructureClassification,
    TenGodProfile,
)
from saju_compat.models.scoring import ElementMatches, PenaltyBreakdown
from saju_compat.tables.cycles import (
    ELEMENT_ORDER,
    controlled_by,
    controls,
    element_relation,
    generated_by,
    generates,
)
from saju_compat.taxonomy.chart_taxonomy import (
    StrengthLevel,
    StructureCategory,
    TenGodGroup,
)
from saju_compat.taxonomy.element_taxonomy import Element, ElementRelation

_MOVE_PENALTY   = 20.0
_ZERO_PENALTY   = 10.0
_SPREAD_PENALTY = 5.0

_SUPPORTING: frozenset[ElementRelation] = frozenset({
    ElementRelation.SAME, ElementRelation.GENERATED_BY,
})
_DRAINING: frozenset[ElementRelation] = frozenset({
    ElementRelation.GENERATES, ElementRelation.CONTROLS, ElementRelation.CONTROLLED_BY,
})

_RELATION_ROLE: dict[ElementRelation, str] = {
    ElementRelation.SAME:          "friend",
    ElementRelation.GENERATES:     "output",
    ElementRelation.CONTROLS:      "wealth",
    ElementRelation.CONTROLLED_BY: "authority",
    ElementRelation.GENERATED_BY:  "resource",
}


@dataclass
class ComponentResult:
    """One sub-score with its explanation.

    Attributes:
        score:     0–100, rounded to 2 decimals.
        evidence:  Observed facts (one line each).
        reasoning: How the facts produced ``score``.
    """

    score:     float
    evidence:  list[str] = field(default_factory=list)
    reasoning: list[str] = field(default_factory=list)


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


# ── Balance ───────────────────────────────────────────────────────────────────


def optimal_sorted(chart_counts: dict[Element, int], additions: int) -> list[int]:
    """Most even sorted distribution reachable by adding ``additions`` counts."""
    counts = sorted(chart_counts.get(e, 0) for e in ELEMENT_ORDER)
    for _ in range(additions):
        counts[0] += 1
        counts.sort()
    return counts


def balance_score(
    chart_counts: dict[Element, int],
    combined_counts: dict[Element, int],
    name_length: int,
) -> ComponentResult:
    """Score how close the combined distribution is to the best achievable one.

    Args:
        chart_counts:    Chart-only element counts.
        combined_counts: Chart + name element counts.
        name_length:     Number of name characters added to the chart.
    """
    optimal = optimal_sorted(chart_counts, name_length)
    actual = sorted(combined_counts.get(e, 0) for e in ELEMENT_ORDER)

    moves = sum(max(0, o - a) for o, a in zip(optimal, actual))
    extra_zeros = max(0, actual.count(0) - optimal.count(0))
    extra_spread = max(0, (actual[-1] - actual[0]) - (optimal[-1] - optimal[0]))

    score = _clamp(
        100.0
        - _MOVE_PENALTY * moves
        - _ZERO_PENALTY * extra_zeros
        - _SPREAD_PENALTY * extra_spread,
        0.0, 100.0,
    )
    return ComponentResult(
        score=round(score, 2),
        evidence=[
            f"actual sorted {actual}",
            f"optimal sorted {optimal}",
        ],
        reasoning=[
            f"moves={moves} extra_zeros={extra_zeros} extra_spread={extra_spread}",
            f"100 - {_MOVE_PENALTY:g}*{moves} - {_ZERO_PENALTY:g}*{extra_zeros}"
            f" - {_SPREAD_PENALTY:g}*{extra_spread} -> {score:.2f}",
        ],
    )


# ── Yongshin match ────────────────────────────────────────────────────────────


def yongshin_affinity(
    element: Element,
    favorable: FavorableElementSet,
    affinity: AffinityConfig,
) -> tuple[float, str]:
    """Affinity of one name element and the label of the rule that matched."""
    if favorable.yongshin is not None and element == favorable.yongshin:
        return affinity.yongshin, "yongshin"
    if favorable.heeshin is not None and element == favorable.heeshin:
        return affinity.heeshin, "heeshin"
    if favorable.gishin is not None and element == favorable.gishin:
        return affinity.gishin, "gishin"
    if favorable.gushin is not None and element == favorable.gushin:
        return affinity.gushin, "gushin"
    if favorable.yongshin is not None and element == generated_by(favorable.yongshin):
        return affinity.yongshin_generator, "generates yongshin"
    return 0.0, "neutral"


def yongshin_match_score(
    name_elements: Sequence[Element],
    favorable: FavorableElementSet,
    affinity: AffinityConfig,
) -> ComponentResult:
    """Score how well the name's elements line up with the favorable set."""
    evidence: list[str] = []
    values: list[float] = []
    for idx, element in enumerate(name_elements):
        value, label = yongshin_affinity(element, favorable, affinity)
        values.append(value)
        evidence.append(f"char[{idx}] {element.value}: {label} ({value:+.2f})")

    avg = _mean(values)
    normalized = _clamp((avg + 1.0) * 50.0, 0.0, 100.0)
    shrink = 0.55 + 0.45 * favorable.confidence
    score = _clamp(50.0 + (normalized - 50.0) * shrink, 0.0, 100.0)
    return ComponentResult(
        score=round(score, 2),
        evidence=evidence,
        reasoning=[
            f"mean affinity {avg:+.3f} -> normalized {normalized:.2f}",
            f"confidence {favorable.confidence:.2f} -> factor {shrink:.3f} -> {score:.2f}",
        ],
    )


# ── Strength role ─────────────────────────────────────────────────────────────


def strength_intensity(profile: StrengthProfile, root_ratio: float) -> tuple[float, str]:
    """How pronounced the strength judgment is, 0–1, and where it came from."""
    if profile.has_totals:
        support, oppose = profile.support or 0.0, profile.oppose or 0.0
        ratio = support / (support + oppose)
        source = f"support {support:g} / oppose {oppose:g}"
    else:
        ratio = root_ratio
        source = f"day-master root ratio {root_ratio:.3f}"
    intensity = ratio if profile.level == StrengthLevel.STRONG else 1.0 - ratio
    return _clamp(intensity, 0.0, 1.0), source


def strength_score(
    name_elements: Sequence[Element],
    day_master_element: Element,
    profile: StrengthProfile,
    root_ratio: float,
) -> ComponentResult:
    """Score whether the name corrects the day master's strength imbalance."""
    wanted = _DRAINING if profile.level == StrengthLevel.STRONG else _SUPPORTING

    evidence: list[str] = []
    roles: list[float] = []
    for idx, element in enumerate(name_elements):
        relation = element_relation(day_master_element, element)
        value = 1.0 if relation in wanted else -1.0
        roles.append(value)
        evidence.append(
            f"char[{idx}] {element.value}: {_RELATION_ROLE[relation]} of "
            f"{day_master_element.value} ({'helps' if value > 0 else 'hurts'})"
        )

    intensity, source = strength_intensity(profile, root_ratio)
    scale = 0.6 + 0.4 * intensity
    avg = _mean(roles)
    score = _clamp(50.0 + avg * 50.0 * scale, 0.0, 100.0)
    return ComponentResult(
        score=round(score, 2),
        evidence=evidence,
        reasoning=[
            f"level {profile.level.value}: wants "
            + ", ".join(sorted(_RELATION_ROLE[r] for r in wanted)),
            f"intensity {intensity:.3f} from {source} -> scale {scale:.3f}",
            f"mean role {avg:+.3f} -> {score:.2f}",
        ],
    )


# ── Ten-god role ──────────────────────────────────────────────────────────────


def group_element(group: TenGodGroup, day_master_element: Element) -> Element:
    """Element a ten-god group stands for, relative to the day master."""
    return {
        TenGodGroup.FRIEND:    day_master_element,
        TenGodGroup.OUTPUT:    generates(day_master_element),
        TenGodGroup.WEALTH:    controls(day_master_element),
        TenGodGroup.AUTHORITY: controlled_by(day_master_element),
        TenGodGroup.RESOURCE:  generated_by(day_master_element),
    }[group]


def group_deviations(profile: TenGodProfile) -> dict[TenGodGroup, float]:
    """Per-group need in [-1, 1]: positive = under-represented."""
    total = sum(profile.counts.values())
    if total > 0:
        avg = total / len(TenGodGroup)
        deviations: dict[TenGodGroup, float] = {}
        for group in TenGodGroup:
            dev = (avg - profile.counts.get(group, 0.0)) / max(avg, 1.0)
            if dev < 0:
                dev *= 0.5
            deviations[group] = _clamp(dev, -1.0, 1.0)
        return deviations

    deviations = {group: 0.0 for group in TenGodGroup}
    for group in profile.dominant_groups:
        deviations[group] = -0.5
    for group in profile.weak_groups:
        deviations[group] = 1.0
    return deviations


def has_ten_god_signal(profile: Optional[TenGodProfile]) -> bool:
    if profile is None:
        return False
    return sum(profile.counts.values()) > 0 or bool(profile.dominant_groups or profile.weak_groups)


def ten_god_score(
    name_elements: Sequence[Element],
    day_master_element: Element,
    profile: TenGodProfile,
) -> ComponentResult:
    """Score whether the name reinforces under-represented ten-god groups."""
    deviations = group_deviations(profile)
    by_element = {group_element(g, day_master_element): g for g in TenGodGroup}

    evidence: list[str] = []
    values: list[float] = []
    for idx, element in enumerate(name_elements):
        group = by_element[element]
        values.append(deviations[group])
        evidence.append(f"char[{idx}] {element.value}: {group.value} ({deviations[group]:+.3f})")

    avg = _mean(values)
    score = _clamp(50.0 + avg * 50.0, 0.0, 100.0)
    source = "counts" if sum(profile.counts.values()) > 0 else "group lists"
    return ComponentResult(
        score=round(score, 2),
        evidence=evidence,
        reasoning=[
            f"group need from {source}: "
            + ", ".join(f"{g.value} {deviations[g]:+.3f}" for g in TenGodGroup),
            f"mean need {avg:+.3f} -> {score:.2f}",
        ],
    )


# ── Penalties & matches ───────────────────────────────────────────────────────


def element_matches(
    name_elements: Sequence[Element], favorable: Optional[FavorableElementSet]
) -> ElementMatches:
    if favorable is None:
        return ElementMatches()
    return ElementMatches(
        yongshin=sum(1 for e in name_elements if e == favorable.yongshin),
        heeshin=sum(1 for e in name_elements if e == favorable.heeshin),
        gishin=sum(1 for e in name_elements if e == favorable.gishin),
        gushin=sum(1 for e in name_elements if e == favorable.gushin),
    )


def structure_violations(
    name_elements: Sequence[Element],
    day_master_element: Element,
    structure: Optional[StructureClassification],
    confidence_threshold: float,
) -> int:
    """Characters that work against a confidently classified special structure."""
    if structure is None or structure.confidence < confidence_threshold:
        return 0
    if structure.category == StructureCategory.FOLLOW:
        return sum(
            1 for e in name_elements
            if element_relation(day_master_element, e) in _SUPPORTING
        )
    if (
        structure.category == StructureCategory.TRANSFORMATION
        and structure.transformed_element is not None
    ):
        breaker = controlled_by(structure.transformed_element)
        return sum(1 for e in name_elements if e == breaker)
    return 0


def compute_penalties(
    matches: ElementMatches,
    structure_hits: int,
    rates: PenaltyConfig,
) -> PenaltyBreakdown:
    gishin = matches.gishin * rates.gishin_per_char
    gushin = matches.gushin * rates.gushin_per_char
    structure = structure_hits * rates.structure_per_char
    return PenaltyBreakdown(
        gishin=round(gishin, 2),
        gushin=round(gushin, 2),
        structure=round(structure, 2),
        total=round(gishin + gushin + structure, 2),
    )
