"""
Birth-chart models: the four resolved pillars handed over by the calendar layer.

``Pillar`` and ``BirthChart`` accept any stem/branch identifier form that
``saju_compat.tables.cycles`` understands (enum member, code, Hangul, Hanja,
index) and store canonical enum members.  Invalid identifiers fail model
validation; nothing is clamped.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from saju_compat.tables.cycles import coerce_branch, coerce_stem
from saju_compat.taxonomy.chart_taxonomy import PillarPosition
from saju_compat.taxonomy.element_taxonomy import Branch, Stem


class Pillar(BaseModel):
    """One stem/branch pair (주)."""

    model_config = ConfigDict(frozen=True)

    stem: Stem
    branch: Branch

    @field_validator("stem", mode="before")
    @classmethod
    def coerce_stem_code(cls, v: Any) -> Stem:
        return coerce_stem(v)

    @field_validator("branch", mode="before")
    @classmethod
    def coerce_branch_code(cls, v: Any) -> Branch:
        return coerce_branch(v)

    def label(self) -> str:
        return f"{self.stem.value}-{self.branch.value}"


class BirthChart(BaseModel):
    """The four pillars of a birth chart (사주팔자).

    Attributes:
        year:  Year pillar.
        month: Month pillar; its branch drives seasonal-need lookups.
        day:   Day pillar; its stem is the day master (일간).
        hour:  Hour pillar.
    """

    model_config = ConfigDict(frozen=True)

    year: Pillar
    month: Pillar
    day: Pillar
    hour: Pillar

    @property
    def pillars(self) -> tuple[Pillar, Pillar, Pillar, Pillar]:
        """Pillars in position order: year, month, day, hour."""
        return (self.year, self.month, self.day, self.hour)

    @property
    def positions(self) -> tuple[PillarPosition, ...]:
        return tuple(PillarPosition)

    @property
    def stems(self) -> tuple[Stem, ...]:
        return tuple(p.stem for p in self.pillars)

    @property
    def branches(self) -> tuple[Branch, ...]:
        return tuple(p.branch for p in self.pillars)

    @property
    def day_master(self) -> Stem:
        return self.day.stem

    def label(self) -> str:
        return " ".join(p.label() for p in self.pillars)
