"""
Tests for saju_compat/models/inputs.py.

What we test
------------
FavorableElementSet: element coercion, confidence range, overlap rejection.
StrengthProfile:     has_totals only when both totals are present and > 0.
TenGodProfile:       negative counts rejected; codes accepted as keys.
StructureClassification: TRANSFORMATION requires transformed_element.
NameCharacter / CandidateName: element coercion, text, empty names allowed.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from saju_compat.models.inputs import (
    CandidateName,
    ChartContext,
    FavorableElementSet,
    NameCharacter,
    StrengthProfile,
    StructureClassification,
    TenGodProfile,
)
from saju_compat.taxonomy.chart_taxonomy import StrengthLevel, StructureCategory, TenGodGroup
from saju_compat.taxonomy.element_taxonomy import Element


class TestFavorableElementSet:
    def test_coerces_codes(self):
        fav = FavorableElementSet(yongshin="water", gishin="Fire")
        assert fav.yongshin == Element.WATER
        assert fav.gishin == Element.FIRE
        assert fav.heeshin is None
        assert fav.confidence == 1.0

    def test_blank_is_none(self):
        assert FavorableElementSet(yongshin="").yongshin is None

    def test_unknown_element(self):
        with pytest.raises(ValidationError):
            FavorableElementSet(yongshin="AIR")

    def test_confidence_range(self):
        with pytest.raises(ValidationError):
            FavorableElementSet(yongshin="WATER", confidence=1.5)

    def test_overlap_rejected(self):
        with pytest.raises(ValidationError, match="both favorable and unfavorable"):
            FavorableElementSet(yongshin="WATER", gushin="WATER")


class TestStrengthProfile:
    def test_without_totals(self):
        assert StrengthProfile(level=StrengthLevel.STRONG).has_totals is False

    def test_with_totals(self):
        assert StrengthProfile(level="WEAK", support=2, oppose=5).has_totals is True

    def test_zero_totals(self):
        assert StrengthProfile(level="WEAK", support=0, oppose=0).has_totals is False

    def test_negative_total(self):
        with pytest.raises(ValidationError):
            StrengthProfile(level="WEAK", support=-1, oppose=1)


class TestTenGodProfile:
    def test_negative_count(self):
        with pytest.raises(ValidationError):
            TenGodProfile(counts={TenGodGroup.FRIEND: -1})

    def test_counts_by_code(self):
        profile = TenGodProfile.model_validate({"counts": {"WEALTH": 2}})
        assert profile.counts == {TenGodGroup.WEALTH: 2.0}


class TestStructureClassification:
    def test_transformation_requires_element(self):
        with pytest.raises(ValidationError):
            StructureClassification(name="갑기합화토격", category=StructureCategory.TRANSFORMATION)

    def test_transformation_with_element(self):
        s = StructureClassification(
            name="갑기합화토격", category="TRANSFORMATION", transformed_element="earth",
        )
        assert s.transformed_element == Element.EARTH

    def test_normal(self):
        s = StructureClassification(name="정관격", category="NORMAL", confidence=0.4)
        assert s.transformed_element is None


class TestCandidateName:
    def test_elements_and_text(self):
        name = CandidateName(characters=(
            NameCharacter(character="河", resource_element="water"),
            NameCharacter(character="潤", resource_element=Element.WATER),
        ))
        assert name.elements == (Element.WATER, Element.WATER)
        assert name.text == "河潤"

    def test_label_overrides_text(self):
        name = CandidateName(
            label="하윤",
            characters=(NameCharacter(character="河", resource_element="WATER"),),
        )
        assert name.text == "하윤"

    def test_empty_accepted(self):
        assert CandidateName(characters=()).elements == ()

    def test_blank_character_rejected(self):
        with pytest.raises(ValidationError):
            NameCharacter(character="", resource_element="WATER")


class TestChartContext:
    def test_all_optional(self):
        ctx = ChartContext()
        assert (ctx.favorable, ctx.strength, ctx.ten_god, ctx.structure) == (None, None, None, None)
