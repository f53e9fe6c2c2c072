"""
Tests for saju_compat/analysis/roots.py.

What we test
------------
- The three documented examples (GAP in IN / HAE / YU).
- MAIN stem of every branch is a STRONG root.
- MIDDLE and RESIDUAL stems are WEAK roots.
- Counterpart (same element, opposite polarity) anywhere gives WEAK.
- NONE whenever neither the stem nor its counterpart is hidden.
- chart_roots / root_ratio over a chart's branches.
"""

from __future__ import annotations

import itertools

import pytest

from saju_compat.analysis.roots import chart_roots, has_root, root_ratio, root_strength
from saju_compat.errors import InvalidIndexError
from saju_compat.tables.cycles import counterpart
from saju_compat.tables.hidden_stems import hidden_stems, main_stem
from saju_compat.taxonomy.element_taxonomy import Branch, Stem
from saju_compat.taxonomy.relation_taxonomy import HiddenRole, RootStrength


class TestRootStrength:
    def test_documented_examples(self):
        assert root_strength(Stem.GAP, Branch.IN) == RootStrength.STRONG
        assert root_strength(Stem.GAP, Branch.HAE) == RootStrength.WEAK
        assert root_strength(Stem.GAP, Branch.YU) == RootStrength.NONE

    @pytest.mark.parametrize("branch", list(Branch))
    def test_main_stem_is_strong(self, branch):
        assert root_strength(main_stem(branch), branch) == RootStrength.STRONG

    @pytest.mark.parametrize("branch", list(Branch))
    def test_non_main_hidden_stems_are_weak(self, branch):
        for entry in hidden_stems(branch):
            if entry.role != HiddenRole.MAIN:
                assert root_strength(entry.stem, branch) == RootStrength.WEAK

    def test_counterpart_gives_weak(self):
        # EUL is not hidden in IN, but its counterpart GAP is the MAIN stem.
        assert root_strength(Stem.EUL, Branch.IN) == RootStrength.WEAK
        # GYEONG is not hidden in YU; its counterpart SIN is.
        assert root_strength(Stem.GYEONG, Branch.YU) == RootStrength.WEAK

    @pytest.mark.parametrize("stem,branch", list(itertools.product(list(Stem), list(Branch))))
    def test_none_when_unrelated(self, stem, branch):
        hidden = {e.stem for e in hidden_stems(branch)}
        related = hidden | {counterpart(s) for s in hidden}
        if stem not in related:
            assert root_strength(stem, branch) == RootStrength.NONE
        else:
            assert root_strength(stem, branch) != RootStrength.NONE

    def test_has_root(self):
        assert has_root(Stem.GAP, Branch.MYO) is True
        assert has_root(Stem.GAP, Branch.YU) is False

    def test_accepts_hanja(self):
        assert root_strength("甲", "寅") == RootStrength.STRONG

    def test_invalid_stem(self):
        with pytest.raises(InvalidIndexError):
            root_strength(10, Branch.JA)


class TestChartRoots:
    def test_sample_chart(self, sample_chart):
        roots = chart_roots(sample_chart.day_master, sample_chart.branches)
        assert roots == [
            RootStrength.NONE, RootStrength.STRONG, RootStrength.NONE, RootStrength.NONE,
        ]

    def test_root_ratio(self, sample_chart):
        assert root_ratio(sample_chart.day_master, sample_chart.branches) == pytest.approx(0.25)

    def test_root_ratio_weak_counts_half(self):
        assert root_ratio(Stem.GAP, [Branch.HAE, Branch.YU]) == pytest.approx(0.25)

    def test_root_ratio_empty(self):
        assert root_ratio(Stem.GAP, []) == 0.0
