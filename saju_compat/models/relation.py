"""
Value objects produced by the canonical tables and the relation classifier.

All are frozen pydantic models; none is stored anywhere.  Relations are
derived from the tables on demand and compare equal regardless of the order
the branches were passed in (``branches`` is kept in canonical index order).
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from saju_compat.taxonomy.element_taxonomy import Branch, Element, Stem
from saju_compat.taxonomy.relation_taxonomy import (
    HalfCombinationType,
    HiddenRole,
    RelationType,
)

_BRANCH_ORDER = list(Branch)


def _canonical(branches: tuple[Branch, ...]) -> tuple[Branch, ...]:
    return tuple(sorted(branches, key=_BRANCH_ORDER.index))


class HiddenStemEntry(BaseModel):
    """One hidden stem (지장간) of a branch.

    Attributes:
        stem: The hidden stem.
        role: ``RESIDUAL``, ``MIDDLE`` or ``MAIN``.
        days: Days of the branch's 30-day rule period this stem governs.
    """

    model_config = ConfigDict(frozen=True)

    stem: Stem
    role: HiddenRole
    days: int

    @field_validator("days")
    @classmethod
    def validate_days(cls, v: int) -> int:
        if not 0 < v <= 30:
            raise ValueError(f"days must be in (0, 30], got {v}.")
        return v


class HalfCombination(BaseModel):
    """Two of the three members of a seasonal trio (반합)."""

    model_config = ConfigDict(frozen=True)

    half_type: HalfCombinationType
    element: Element
    branches: tuple[Branch, Branch]

    @field_validator("branches")
    @classmethod
    def canonical_order(cls, v: tuple[Branch, Branch]) -> tuple[Branch, ...]:
        return _canonical(v)

    @property
    def strength_rank(self) -> int:
        """2 when the peak branch is present, 1 for generative + storage."""
        return 1 if self.half_type == HalfCombinationType.GENERATIVE_STORAGE else 2


class HiddenCombination(BaseModel):
    """Stem-level combination between two branches' hidden stems (암합).

    Attributes:
        branches:   The two branches, canonical order.
        stem_pairs: Every combining hidden-stem pair, MAIN pair first.
        element:    Element produced by the MAIN pair.
    """

    model_config = ConfigDict(frozen=True)

    branches: tuple[Branch, Branch]
    stem_pairs: tuple[tuple[Stem, Stem], ...]
    element: Element

    @field_validator("branches")
    @classmethod
    def canonical_order(cls, v: tuple[Branch, Branch]) -> tuple[Branch, ...]:
        return _canonical(v)


class BranchRelation(BaseModel):
    """A relation found among a chart's branches.

    Attributes:
        relation_type: Kind of relation.
        branches:      Participating branches, canonical order.
        positions:     Pillar positions (0 = year … 3 = hour) of the
                       participants, ascending; empty when classified
                       outside a chart.
        element:       Element produced, for combinations.
        half_type:     Set only for ``HALF_COMBINATION``.
    """

    model_config = ConfigDict(frozen=True)

    relation_type: RelationType
    branches: tuple[Branch, ...]
    positions: tuple[int, ...] = ()
    element: Optional[Element] = None
    half_type: Optional[HalfCombinationType] = None

    @field_validator("branches")
    @classmethod
    def canonical_order(cls, v: tuple[Branch, ...]) -> tuple[Branch, ...]:
        return _canonical(v)

    def describe(self) -> str:
        """Compact one-line form, e.g. ``CLASH JA-O`` or ``TRI_COMBINATION SHIN-JA-JIN -> WATER``."""
        label = self.relation_type.value
        if self.half_type is not None:
            label = f"{label}[{self.half_type.value}]"
        text = f"{label} {'-'.join(b.value for b in self.branches)}"
        if self.element is not None:
            text += f" -> {self.element.value}"
        return text


class ClimateNeed(BaseModel):
    """Seasonal-need (조후) recommendation for a day stem born in a month branch."""

    model_config = ConfigDict(frozen=True)

    day_stem: Stem
    month_branch: Branch
    primary: Stem
    secondary: Stem
