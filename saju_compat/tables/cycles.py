"""
Stem/branch attributes, the five-phase cycle, and identifier coercion.

Every other module reaches stems and branches through the coercion helpers
here, so the accepted input forms are defined in exactly one place:

  - an enum member (``Stem.GAP``, ``Branch.JA``),
  - its code string, case-insensitive (``"gap"``, ``"JA"``),
  - the Hangul or Hanja character (``"갑"`` / ``"甲"``, ``"자"`` / ``"子"``),
  - a cyclic index (``0``-``9`` for stems, ``0``-``11`` for branches).

Integer branch indices are normalized modulo 12 only when the caller asks for
it (``wrap=True``); that is the table-lookup contract.  Relation functions
use strict coercion and reject out-of-range integers.

Five-phase cycle
----------------
Order WOOD → FIRE → EARTH → METAL → WATER.  For an element at index ``i``:
    generates     = ORDER[(i + 1) % 5]
    controls      = ORDER[(i + 2) % 5]
    controlled_by = ORDER[(i + 3) % 5]
    generated_by  = ORDER[(i + 4) % 5]
"""

from __future__ import annotations

from typing import Union

from saju_compat.errors import InvalidIndexError
from saju_compat.taxonomy.element_taxonomy import (
    Branch,
    Element,
    ElementRelation,
    Polarity,
    Stem,
)
from saju_compat.taxonomy.relation_taxonomy import BranchType

StemLike = Union[Stem, str, int]
BranchLike = Union[Branch, str, int]

STEMS: tuple[Stem, ...] = tuple(Stem)
BRANCHES: tuple[Branch, ...] = tuple(Branch)
ELEMENT_ORDER: tuple[Element, ...] = (
    Element.WOOD, Element.FIRE, Element.EARTH, Element.METAL, Element.WATER,
)

# ── Display characters ────────────────────────────────────────────────────────

STEM_HANJA:   dict[Stem, str] = dict(zip(STEMS, "甲乙丙丁戊己庚辛壬癸"))
STEM_HANGUL:  dict[Stem, str] = dict(zip(STEMS, "갑을병정무기경신임계"))
BRANCH_HANJA:  dict[Branch, str] = dict(zip(BRANCHES, "子丑寅卯辰巳午未申酉戌亥"))
BRANCH_HANGUL: dict[Branch, str] = dict(zip(BRANCHES, "자축인묘진사오미신유술해"))

_STEM_ALIASES: dict[str, Stem] = {
    **{v: k for k, v in STEM_HANJA.items()},
    **{v: k for k, v in STEM_HANGUL.items()},
}
_BRANCH_ALIASES: dict[str, Branch] = {
    **{v: k for k, v in BRANCH_HANJA.items()},
    **{v: k for k, v in BRANCH_HANGUL.items()},
}

# ── Attributes ────────────────────────────────────────────────────────────────

BRANCH_ELEMENT: dict[Branch, Element] = {
    Branch.JA:   Element.WATER,
    Branch.CHUK: Element.EARTH,
    Branch.IN:   Element.WOOD,
    Branch.MYO:  Element.WOOD,
    Branch.JIN:  Element.EARTH,
    Branch.SA:   Element.FIRE,
    Branch.O:    Element.FIRE,
    Branch.MI:   Element.EARTH,
    Branch.SHIN: Element.METAL,
    Branch.YU:   Element.METAL,
    Branch.SUL:  Element.EARTH,
    Branch.HAE:  Element.WATER,
}

BRANCH_TYPE: dict[Branch, BranchType] = {
    Branch.JA:   BranchType.PEAK,
    Branch.MYO:  BranchType.PEAK,
    Branch.O:    BranchType.PEAK,
    Branch.YU:   BranchType.PEAK,
    Branch.IN:   BranchType.GENERATIVE,
    Branch.SA:   BranchType.GENERATIVE,
    Branch.SHIN: BranchType.GENERATIVE,
    Branch.HAE:  BranchType.GENERATIVE,
    Branch.JIN:  BranchType.STORAGE,
    Branch.MI:   BranchType.STORAGE,
    Branch.SUL:  BranchType.STORAGE,
    Branch.CHUK: BranchType.STORAGE,
}


# ── Coercion ──────────────────────────────────────────────────────────────────


def coerce_stem(value: StemLike) -> Stem:
    """Resolve any accepted stem identifier to a ``Stem``.

    Raises:
        InvalidIndexError: For unknown codes, non-integer/non-string input,
            or an integer outside ``0``-``9``.
    """
    if isinstance(value, Stem):
        return value
    if isinstance(value, bool):
        raise InvalidIndexError("stem", value)
    if isinstance(value, int):
        if 0 <= value < len(STEMS):
            return STEMS[value]
        raise InvalidIndexError("stem", value)
    if isinstance(value, str):
        key = value.strip()
        if key in _STEM_ALIASES:
            return _STEM_ALIASES[key]
        try:
            return Stem(key.upper())
        except ValueError:
            raise InvalidIndexError("stem", value) from None
    raise InvalidIndexError("stem", value)


def coerce_branch(value: BranchLike, wrap: bool = False) -> Branch:
    """Resolve any accepted branch identifier to a ``Branch``.

    Args:
        value: Branch identifier.
        wrap:  Normalize integer input modulo 12 instead of rejecting it.

    Raises:
        InvalidIndexError: For unknown codes, non-integer/non-string input,
            or (when ``wrap`` is False) an integer outside ``0``-``11``.
    """
    if isinstance(value, Branch):
        return value
    if isinstance(value, bool):
        raise InvalidIndexError("branch", value)
    if isinstance(value, int):
        if wrap:
            return BRANCHES[value % len(BRANCHES)]
        if 0 <= value < len(BRANCHES):
            return BRANCHES[value]
        raise InvalidIndexError("branch", value)
    if isinstance(value, str):
        key = value.strip()
        if key in _BRANCH_ALIASES:
            return _BRANCH_ALIASES[key]
        try:
            return Branch(key.upper())
        except ValueError:
            raise InvalidIndexError("branch", value) from None
    raise InvalidIndexError("branch", value)


def coerce_element(value: Union[Element, str]) -> Element:
    """Resolve an element code (case-insensitive) to an ``Element``."""
    if isinstance(value, Element):
        return value
    try:
        return Element(str(value).strip().upper())
    except ValueError:
        raise InvalidIndexError("element", value) from None


# ── Stem / branch attributes ──────────────────────────────────────────────────


def stem_index(stem: StemLike) -> int:
    return STEMS.index(coerce_stem(stem))


def branch_index(branch: BranchLike) -> int:
    return BRANCHES.index(coerce_branch(branch))


def stem_element(stem: StemLike) -> Element:
    """Stems come in element pairs: GAP/EUL wood, BYEONG/JEONG fire, …"""
    return ELEMENT_ORDER[stem_index(stem) // 2]


def stem_polarity(stem: StemLike) -> Polarity:
    return Polarity.YANG if stem_index(stem) % 2 == 0 else Polarity.YIN


def branch_element(branch: BranchLike) -> Element:
    return BRANCH_ELEMENT[coerce_branch(branch)]


def branch_polarity(branch: BranchLike) -> Polarity:
    return Polarity.YANG if branch_index(branch) % 2 == 0 else Polarity.YIN


def branch_type(branch: BranchLike) -> BranchType:
    return BRANCH_TYPE[coerce_branch(branch)]


def counterpart(stem: StemLike) -> Stem:
    """Opposite-polarity stem of the same element (GAP↔EUL, …, IM↔GYE)."""
    return STEMS[stem_index(stem) ^ 1]


# ── Five-phase cycle ──────────────────────────────────────────────────────────


def _shift(element: Element, steps: int) -> Element:
    i = ELEMENT_ORDER.index(coerce_element(element))
    return ELEMENT_ORDER[(i + steps) % len(ELEMENT_ORDER)]


def generates(element: Element) -> Element:
    """The element that ``element`` generates."""
    return _shift(element, 1)


def controls(element: Element) -> Element:
    """The element that ``element`` controls."""
    return _shift(element, 2)


def controlled_by(element: Element) -> Element:
    """The element that controls ``element``."""
    return _shift(element, 3)


def generated_by(element: Element) -> Element:
    """The element that generates ``element``."""
    return _shift(element, 4)


def element_relation(reference: Element, target: Element) -> ElementRelation:
    """How ``target`` stands relative to ``reference`` in the cycle."""
    offset = (
        ELEMENT_ORDER.index(coerce_element(target))
        - ELEMENT_ORDER.index(coerce_element(reference))
    ) % len(ELEMENT_ORDER)
    return (
        ElementRelation.SAME,
        ElementRelation.GENERATES,
        ElementRelation.CONTROLS,
        ElementRelation.CONTROLLED_BY,
        ElementRelation.GENERATED_BY,
    )[offset]
