"""
Shared pytest fixtures for the saju-compat test suite.

Provides:
  - ``sample_chart``: GAP-JA / BYEONG-IN / GAP-O / GYEONG-O (day master GAP).
    Element counts: WOOD 3, FIRE 3, EARTH 0, METAL 1, WATER 1.
  - Upstream-context fixtures, from fully resolved to empty.
  - ``default_scoring``: ``ScoringConfig()`` (mirrors config/default.toml).
"""

from __future__ import annotations

import pytest

from saju_compat.config import ScoringConfig
from saju_compat.models.chart import BirthChart, Pillar
from saju_compat.models.inputs import (
    ChartContext,
    FavorableElementSet,
    StrengthProfile,
    TenGodProfile,
)
from saju_compat.taxonomy.chart_taxonomy import StrengthLevel, TenGodGroup
from saju_compat.taxonomy.element_taxonomy import Branch, Element, Stem


# ── Chart fixtures ────────────────────────────────────────────────────────────

@pytest.fixture
def sample_chart() -> BirthChart:
    return BirthChart(
        year=Pillar(stem=Stem.GAP, branch=Branch.JA),
        month=Pillar(stem=Stem.BYEONG, branch=Branch.IN),
        day=Pillar(stem=Stem.GAP, branch=Branch.O),
        hour=Pillar(stem=Stem.GYEONG, branch=Branch.O),
    )


# ── Context fixtures ──────────────────────────────────────────────────────────

@pytest.fixture
def favorable() -> FavorableElementSet:
    return FavorableElementSet(
        yongshin=Element.WATER,
        heeshin=Element.METAL,
        gishin=Element.FIRE,
        gushin=Element.EARTH,
    )


@pytest.fixture
def ten_god_profile() -> TenGodProfile:
    return TenGodProfile(
        counts={
            TenGodGroup.FRIEND: 3,
            TenGodGroup.OUTPUT: 3,
            TenGodGroup.WEALTH: 0,
            TenGodGroup.AUTHORITY: 1,
            TenGodGroup.RESOURCE: 1,
        }
    )


@pytest.fixture
def full_context(favorable: FavorableElementSet, ten_god_profile: TenGodProfile) -> ChartContext:
    return ChartContext(
        favorable=favorable,
        strength=StrengthProfile(level=StrengthLevel.WEAK),
        ten_god=ten_god_profile,
    )


@pytest.fixture
def favorable_only_context(favorable: FavorableElementSet) -> ChartContext:
    return ChartContext(favorable=favorable)


@pytest.fixture
def default_scoring() -> ScoringConfig:
    return ScoringConfig()
