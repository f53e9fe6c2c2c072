"""
Five-element distributions for a chart and a candidate name.

Chart distribution: each pillar contributes its stem's element and its
branch's element (4 pillars × 2 = 8 counts, unweighted).
Name distribution: one count per character's resource element.

Every distribution dict carries all five elements (zeros included) in
``ELEMENT_ORDER`` so that traces and serialized output are stable.
"""

from __future__ import annotations

from typing import Iterable

from saju_compat.models.chart import BirthChart
from saju_compat.tables.cycles import ELEMENT_ORDER, branch_element, stem_element
from saju_compat.taxonomy.element_taxonomy import Element


def empty_distribution() -> dict[Element, int]:
    return {e: 0 for e in ELEMENT_ORDER}


def chart_distribution(chart: BirthChart) -> dict[Element, int]:
    """Unweighted element counts over the chart's 4 stems and 4 branches."""
    counts = empty_distribution()
    for pillar in chart.pillars:
        counts[stem_element(pillar.stem)] += 1
        counts[branch_element(pillar.branch)] += 1
    return counts


def name_distribution(elements: Iterable[Element]) -> dict[Element, int]:
    counts = empty_distribution()
    for element in elements:
        counts[element] += 1
    return counts


def combine_distributions(*dists: dict[Element, int]) -> dict[Element, int]:
    combined = empty_distribution()
    for dist in dists:
        for element, count in dist.items():
            combined[element] += count
    return combined


def format_distribution(dist: dict[Element, int]) -> str:
    """``WOOD 2 FIRE 3 EARTH 1 METAL 0 WATER 2``."""
    return " ".join(f"{e.value} {dist.get(e, 0)}" for e in ELEMENT_ORDER)
