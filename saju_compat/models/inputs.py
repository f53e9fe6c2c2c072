"""
Scorer inputs resolved outside the core.

Upstream judgments (``ChartContext`` and its parts) come from a structure /
strength resolver; the candidate name comes from a naming collaborator.
Every part of ``ChartContext`` is optional: an absent part is an
incomplete-input condition the scorer absorbs, never a validation error.

Element fields accept case-insensitive codes (``"wood"`` → ``Element.WOOD``).
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from saju_compat.tables.cycles import coerce_element
from saju_compat.taxonomy.chart_taxonomy import StrengthLevel, StructureCategory, TenGodGroup
from saju_compat.taxonomy.element_taxonomy import Element


def _element_or_none(v: Any) -> Optional[Element]:
    if v is None or v == "":
        return None
    return coerce_element(v)


class FavorableElementSet(BaseModel):
    """Resolved favorable / unfavorable elements (용희기구).

    Attributes:
        yongshin:   Most beneficial element (용신).
        heeshin:    Secondarily beneficial element (희신).
        gishin:     Unfavorable element (기신).
        gushin:     Obstructive element (구신).
        confidence: Upstream confidence in the resolution, 0–1.
    """

    model_config = ConfigDict(frozen=True)

    yongshin: Optional[Element] = None
    heeshin: Optional[Element] = None
    gishin: Optional[Element] = None
    gushin: Optional[Element] = None
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)

    @field_validator("yongshin", "heeshin", "gishin", "gushin", mode="before")
    @classmethod
    def coerce_elements(cls, v: Any) -> Optional[Element]:
        return _element_or_none(v)

    @model_validator(mode="after")
    def validate_no_overlap(self) -> "FavorableElementSet":
        """A favorable element cannot also be listed as unfavorable."""
        favorable = {self.yongshin, self.heeshin} - {None}
        unfavorable = {self.gishin, self.gushin} - {None}
        if favorable & unfavorable:
            raise ValueError(
                f"Elements {sorted(e.value for e in favorable & unfavorable)} "
                "are both favorable and unfavorable."
            )
        return self


class StrengthProfile(BaseModel):
    """Day-master strength judgment (신강/신약).

    Attributes:
        level:   ``STRONG`` or ``WEAK``.
        support: Optional total of supporting forces (same + resource).
        oppose:  Optional total of opposing forces (output + wealth + authority).
    """

    model_config = ConfigDict(frozen=True)

    level: StrengthLevel
    support: Optional[float] = Field(default=None, ge=0.0)
    oppose: Optional[float] = Field(default=None, ge=0.0)

    @property
    def has_totals(self) -> bool:
        return (
            self.support is not None
            and self.oppose is not None
            and self.support + self.oppose > 0
        )


class TenGodProfile(BaseModel):
    """Ten-god (십성) distribution of the chart, by group.

    Attributes:
        counts:          Weighted count per group; groups absent count as 0.
        dominant_groups: Over-represented groups, used when ``counts`` is empty.
        weak_groups:     Under-represented groups, used when ``counts`` is empty.
    """

    model_config = ConfigDict(frozen=True)

    counts: dict[TenGodGroup, float] = {}
    dominant_groups: tuple[TenGodGroup, ...] = ()
    weak_groups: tuple[TenGodGroup, ...] = ()

    @field_validator("counts")
    @classmethod
    def validate_counts(cls, v: dict[TenGodGroup, float]) -> dict[TenGodGroup, float]:
        for group, count in v.items():
            if count < 0:
                raise ValueError(f"Ten-god count for {group} must be >= 0, got {count}.")
        return v


class StructureClassification(BaseModel):
    """Structural classification (격국) of the chart.

    Attributes:
        name:                Upstream structure name, e.g. ``"정관격"``.
        category:            ``NORMAL``, ``FOLLOW`` or ``TRANSFORMATION``.
        confidence:          Upstream confidence, 0–1.
        transformed_element: Element the day master transforms into; required
                             for ``TRANSFORMATION`` structures.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    category: StructureCategory
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    transformed_element: Optional[Element] = None

    @field_validator("transformed_element", mode="before")
    @classmethod
    def coerce_transformed(cls, v: Any) -> Optional[Element]:
        return _element_or_none(v)

    @model_validator(mode="after")
    def validate_transformation(self) -> "StructureClassification":
        if (
            self.category == StructureCategory.TRANSFORMATION
            and self.transformed_element is None
        ):
            raise ValueError("TRANSFORMATION structures require transformed_element.")
        return self


class ChartContext(BaseModel):
    """Everything the scorer consumes from upstream besides the pillars."""

    model_config = ConfigDict(frozen=True)

    favorable: Optional[FavorableElementSet] = None
    strength: Optional[StrengthProfile] = None
    ten_god: Optional[TenGodProfile] = None
    structure: Optional[StructureClassification] = None


class NameCharacter(BaseModel):
    """One character of a candidate name and its resource element (자원오행)."""

    model_config = ConfigDict(frozen=True)

    character: str = Field(min_length=1)
    resource_element: Element

    @field_validator("resource_element", mode="before")
    @classmethod
    def coerce_resource(cls, v: Any) -> Element:
        return coerce_element(v)


class CandidateName(BaseModel):
    """A candidate name as an ordered list of characters.

    An empty ``characters`` list is accepted here; the scorer rejects it with
    ``StructuralViolationError``.
    """

    model_config = ConfigDict(frozen=True)

    characters: tuple[NameCharacter, ...]
    label: Optional[str] = None

    @property
    def elements(self) -> tuple[Element, ...]:
        return tuple(c.resource_element for c in self.characters)

    @property
    def text(self) -> str:
        return self.label or "".join(c.character for c in self.characters)
