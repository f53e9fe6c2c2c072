"""
Tests for saju_compat/scoring/components.py.

What we test
------------
balance_score():
  - 100 when the name reaches the optimal shape.
  - Deductions for misplaced counts, extra zeros and extra spread.

yongshin_match_score():
  - Affinity labels and precedence (yongshin before generator).
  - Confidence shrinks the score toward 50.
  - Adding a yongshin character never lowers the score.

strength_score():
  - WEAK day master rewards same/resource, STRONG rewards the others.
  - Intensity from support/oppose totals or from the root ratio.

ten_god_score():
  - Counts path: under-represented groups raise the score.
  - Group-list fallback.

penalties / structure_violations / element_matches.
"""

from __future__ import annotations

import pytest

from saju_compat.config import AffinityConfig, PenaltyConfig
from saju_compat.models.inputs import (
    FavorableElementSet,
    StrengthProfile,
    StructureClassification,
    TenGodProfile,
)
from saju_compat.models.scoring import ElementMatches
from saju_compat.scoring.components import (
    balance_score,
    compute_penalties,
    element_matches,
    group_deviations,
    group_element,
    has_ten_god_signal,
    optimal_sorted,
    strength_intensity,
    strength_score,
    structure_violations,
    ten_god_score,
    yongshin_affinity,
    yongshin_match_score,
)
from saju_compat.scoring.elements import combine_distributions, name_distribution
from saju_compat.taxonomy.chart_taxonomy import StrengthLevel, StructureCategory, TenGodGroup
from saju_compat.taxonomy.element_taxonomy import Element

E = Element
_CHART = {E.WOOD: 3, E.FIRE: 3, E.EARTH: 0, E.METAL: 1, E.WATER: 1}


def _balance(*name: Element) -> float:
    combined = combine_distributions(_CHART, name_distribution(name))
    return balance_score(_CHART, combined, len(name)).score


# ── Balance ───────────────────────────────────────────────────────────────────


class TestBalance:
    def test_optimal_fill(self):
        assert optimal_sorted(_CHART, 2) == [1, 1, 2, 3, 3]

    def test_optimal_name_scores_100(self):
        assert _balance(E.EARTH, E.METAL) == 100.0
        assert _balance(E.EARTH, E.WATER) == 100.0

    def test_one_misplaced_count(self):
        # actual [0,2,2,3,3] vs optimal [1,1,2,3,3]: 1 move, 1 extra zero, +1 spread
        assert _balance(E.WATER, E.METAL) == pytest.approx(65.0)

    def test_worst_case_deductions(self):
        # actual [0,1,1,3,5]: 2 moves, 1 extra zero, +3 spread
        assert _balance(E.FIRE, E.FIRE) == pytest.approx(35.0)

    def test_clamped_at_zero(self):
        assert _balance(*([E.FIRE] * 8)) == 0.0

    def test_explanation_present(self):
        combined = combine_distributions(_CHART, name_distribution([E.EARTH]))
        result = balance_score(_CHART, combined, 1)
        assert result.evidence and result.reasoning


# ── Yongshin match ────────────────────────────────────────────────────────────


@pytest.fixture
def affinity() -> AffinityConfig:
    return AffinityConfig()


class TestYongshinMatch:
    def test_affinity_labels(self, favorable, affinity):
        assert yongshin_affinity(E.WATER, favorable, affinity) == (1.0, "yongshin")
        assert yongshin_affinity(E.METAL, favorable, affinity) == (0.5, "heeshin")
        assert yongshin_affinity(E.FIRE, favorable, affinity) == (-0.6, "gishin")
        assert yongshin_affinity(E.EARTH, favorable, affinity) == (-1.0, "gushin")
        assert yongshin_affinity(E.WOOD, favorable, affinity) == (0.0, "neutral")

    def test_generator_credit(self, affinity):
        fav = FavorableElementSet(yongshin=E.FIRE)
        assert yongshin_affinity(E.WOOD, fav, affinity) == (0.3, "generates yongshin")

    def test_score_values(self, favorable, affinity):
        assert yongshin_match_score([E.WATER, E.WATER], favorable, affinity).score == 100.0
        assert yongshin_match_score([E.WATER, E.METAL], favorable, affinity).score == pytest.approx(87.5)
        assert yongshin_match_score([E.EARTH], favorable, affinity).score == 0.0

    def test_confidence_shrinks_toward_50(self, affinity):
        fav = FavorableElementSet(yongshin=E.WATER, confidence=0.0)
        # normalized 100 → 50 + 50 * 0.55
        assert yongshin_match_score([E.WATER], fav, affinity).score == pytest.approx(77.5)

    @pytest.mark.parametrize(
        "base",
        [
            [], [E.FIRE], [E.EARTH, E.EARTH], [E.METAL, E.WOOD], [E.WATER],
            [E.FIRE, E.EARTH, E.WOOD],
        ],
    )
    def test_adding_yongshin_never_decreases(self, favorable, affinity, base):
        before = yongshin_match_score(base, favorable, affinity).score if base else None
        after = yongshin_match_score(base + [E.WATER], favorable, affinity).score
        if before is not None:
            assert after >= before


# ── Strength ──────────────────────────────────────────────────────────────────


class TestStrength:
    def test_weak_rewards_support(self):
        profile = StrengthProfile(level=StrengthLevel.WEAK)
        result = strength_score([E.WATER, E.WATER], E.WOOD, profile, root_ratio=0.25)
        # intensity 0.75 → scale 0.9 → 50 + 50*0.9
        assert result.score == pytest.approx(95.0)

    def test_weak_mixed_is_neutral(self):
        profile = StrengthProfile(level=StrengthLevel.WEAK)
        assert strength_score([E.WATER, E.METAL], E.WOOD, profile, 0.25).score == pytest.approx(50.0)

    def test_strong_rewards_drain(self):
        profile = StrengthProfile(level=StrengthLevel.STRONG)
        high = strength_score([E.FIRE], E.WOOD, profile, root_ratio=1.0).score
        low = strength_score([E.WOOD], E.WOOD, profile, root_ratio=1.0).score
        assert high == pytest.approx(100.0)
        assert low == pytest.approx(0.0)

    def test_intensity_from_totals(self):
        profile = StrengthProfile(level=StrengthLevel.STRONG, support=6, oppose=2)
        intensity, source = strength_intensity(profile, root_ratio=0.0)
        assert intensity == pytest.approx(0.75)
        assert "support" in source

    def test_intensity_weak_inverts_ratio(self):
        profile = StrengthProfile(level=StrengthLevel.WEAK)
        intensity, _ = strength_intensity(profile, root_ratio=0.25)
        assert intensity == pytest.approx(0.75)


# ── Ten-god ───────────────────────────────────────────────────────────────────


class TestTenGod:
    def test_group_elements_for_wood(self):
        assert group_element(TenGodGroup.FRIEND, E.WOOD) == E.WOOD
        assert group_element(TenGodGroup.OUTPUT, E.WOOD) == E.FIRE
        assert group_element(TenGodGroup.WEALTH, E.WOOD) == E.EARTH
        assert group_element(TenGodGroup.AUTHORITY, E.WOOD) == E.METAL
        assert group_element(TenGodGroup.RESOURCE, E.WOOD) == E.WATER

    def test_deviations_from_counts(self, ten_god_profile):
        dev = group_deviations(ten_god_profile)
        assert dev[TenGodGroup.WEALTH] == pytest.approx(1.0)
        assert dev[TenGodGroup.RESOURCE] == pytest.approx(0.375)
        assert dev[TenGodGroup.FRIEND] == pytest.approx(-0.4375)

    def test_score_from_counts(self, ten_god_profile):
        assert ten_god_score([E.WATER, E.METAL], E.WOOD, ten_god_profile).score == pytest.approx(68.75)
        assert ten_god_score([E.EARTH], E.WOOD, ten_god_profile).score == pytest.approx(100.0)

    def test_group_list_fallback(self):
        profile = TenGodProfile(
            weak_groups=(TenGodGroup.RESOURCE,),
            dominant_groups=(TenGodGroup.OUTPUT,),
        )
        assert ten_god_score([E.WATER], E.WOOD, profile).score == pytest.approx(100.0)
        assert ten_god_score([E.FIRE], E.WOOD, profile).score == pytest.approx(25.0)
        assert ten_god_score([E.EARTH], E.WOOD, profile).score == pytest.approx(50.0)

    def test_signal_detection(self, ten_god_profile):
        assert has_ten_god_signal(ten_god_profile) is True
        assert has_ten_god_signal(TenGodProfile()) is False
        assert has_ten_god_signal(None) is False
        assert has_ten_god_signal(TenGodProfile(counts={TenGodGroup.FRIEND: 0})) is False
        assert has_ten_god_signal(TenGodProfile(weak_groups=(TenGodGroup.WEALTH,))) is True


# ── Penalties ─────────────────────────────────────────────────────────────────


class TestPenalties:
    def test_element_matches(self, favorable):
        matches = element_matches([E.FIRE, E.EARTH, E.WATER, E.FIRE], favorable)
        assert matches == ElementMatches(yongshin=1, heeshin=0, gishin=2, gushin=1)

    def test_element_matches_without_favorable(self):
        assert element_matches([E.FIRE], None) == ElementMatches()

    def test_compute_penalties(self):
        matches = ElementMatches(gishin=2, gushin=1)
        p = compute_penalties(matches, structure_hits=1, rates=PenaltyConfig())
        assert (p.gishin, p.gushin, p.structure, p.total) == (12.0, 10.0, 4.0, 26.0)

    def test_follow_structure_hits_supporting_chars(self):
        follow = StructureClassification(name="종재격", category=StructureCategory.FOLLOW, confidence=0.9)
        assert structure_violations([E.WATER, E.WOOD, E.FIRE], E.WOOD, follow, 0.7) == 2

    def test_low_confidence_structure_ignored(self):
        follow = StructureClassification(name="종재격", category=StructureCategory.FOLLOW, confidence=0.5)
        assert structure_violations([E.WATER, E.WOOD], E.WOOD, follow, 0.7) == 0

    def test_transformation_hits_controlling_chars(self):
        transform = StructureClassification(
            name="갑기합화토격",
            category=StructureCategory.TRANSFORMATION,
            transformed_element=E.EARTH,
        )
        assert structure_violations([E.WOOD, E.FIRE], E.WOOD, transform, 0.7) == 1

    def test_normal_structure_no_hits(self):
        normal = StructureClassification(name="정관격", category=StructureCategory.NORMAL)
        assert structure_violations([E.WOOD], E.WOOD, normal, 0.7) == 0
