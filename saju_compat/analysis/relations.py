"""
Relation classifier: pure functions over two or three branches.

Pair relations (order-independent)
----------------------------------
is_clash            : b == (a + 6) mod 12.
is_six_combination  : one of the six fixed 육합 pairs.
half_combination    : exactly two members of a seasonal trio; GENERATIVE_PEAK
                      and PEAK_STORAGE outrank GENERATIVE_STORAGE.
is_resentment_pair  : one of the six 원진 pairs.
hidden_combination  : the pair's MAIN hidden stems combine (CHUK–IN also
                      through its MIDDLE stems).
is_punishment / is_self_punishment / is_break / is_harm.

Trio relations
--------------
tri_combination / directional_combination require three *distinct* branches
that exactly equal a fixed trio; subsets never match.

Revealed stems (투출)
--------------------
tuchul(branch, visible_stems) filters the branch's hidden composition by
membership, preserving RESIDUAL → MIDDLE → MAIN order.  When one dominant
revealed stem is needed, ``dominant_revealed`` takes the highest role
(MAIN > MIDDLE > RESIDUAL) from that result.

Identifiers are coerced strictly: an unknown code or an integer outside
0–11 raises ``InvalidIndexError``.  No-match results are ``None`` / ``False``
/ an empty list.
"""

from __future__ import annotations

import itertools
import logging
from typing import Iterable, Optional, Sequence

from saju_compat.models.relation import (
    BranchRelation,
    HalfCombination,
    HiddenCombination,
    HiddenStemEntry,
)
from saju_compat.tables.combinations import (
    BREAK_PAIRS,
    DIRECTIONAL_COMBINATIONS,
    HARM_PAIRS,
    MIDDLE_STEM_COMBINATION_PAIRS,
    PUNISHMENT_GROUPS,
    RESENTMENT_PAIRS,
    SELF_PUNISHMENT,
    SIX_COMBINATIONS,
    STEM_COMBINATIONS,
    TRI_COMBINATIONS,
)
from saju_compat.tables.cycles import (
    BRANCHES,
    BranchLike,
    StemLike,
    branch_index,
    coerce_branch,
    coerce_stem,
)
from saju_compat.tables.hidden_stems import hidden_stems, main_stem, middle_stem
from saju_compat.taxonomy.element_taxonomy import Branch, Element
from saju_compat.taxonomy.relation_taxonomy import (
    HalfCombinationType,
    HiddenRole,
    RelationType,
)

logger = logging.getLogger(__name__)

_ROLE_RANK: dict[HiddenRole, int] = {
    HiddenRole.RESIDUAL: 0,
    HiddenRole.MIDDLE:   1,
    HiddenRole.MAIN:     2,
}

# Which two trio slots are present -> half-combination type
_HALF_TYPES: dict[tuple[int, int], HalfCombinationType] = {
    (0, 1): HalfCombinationType.GENERATIVE_PEAK,
    (1, 2): HalfCombinationType.PEAK_STORAGE,
    (0, 2): HalfCombinationType.GENERATIVE_STORAGE,
}


def _pair(a: BranchLike, b: BranchLike) -> frozenset[Branch]:
    return frozenset({coerce_branch(a), coerce_branch(b)})


def _trio(a: BranchLike, b: BranchLike, c: BranchLike) -> Optional[frozenset[Branch]]:
    trio = [coerce_branch(a), coerce_branch(b), coerce_branch(c)]
    members = frozenset(trio)
    return members if len(members) == 3 else None


# ── Pair relations ────────────────────────────────────────────────────────────


def is_clash(a: BranchLike, b: BranchLike) -> bool:
    """True iff the branches sit six positions apart (충)."""
    return branch_index(b) == (branch_index(a) + 6) % len(BRANCHES)


def six_combination_element(a: BranchLike, b: BranchLike) -> Optional[Element]:
    """Union element of a six-combination pair, or ``None``."""
    return SIX_COMBINATIONS.get(_pair(a, b))


def is_six_combination(a: BranchLike, b: BranchLike) -> bool:
    return six_combination_element(a, b) is not None


def half_combination(a: BranchLike, b: BranchLike) -> Optional[HalfCombination]:
    """Half-combination (반합) formed by two distinct members of a seasonal trio."""
    first, second = coerce_branch(a), coerce_branch(b)
    if first == second:
        return None
    for trio, element in TRI_COMBINATIONS.items():
        if first in trio and second in trio:
            slots = tuple(sorted((trio.index(first), trio.index(second))))
            return HalfCombination(
                half_type=_HALF_TYPES[slots],
                element=element,
                branches=(first, second),
            )
    return None


def is_resentment_pair(a: BranchLike, b: BranchLike) -> bool:
    return _pair(a, b) in RESENTMENT_PAIRS


def hidden_combination(a: BranchLike, b: BranchLike) -> Optional[HiddenCombination]:
    """Hidden (stem-level) combination between two branches (암합).

    The MAIN hidden stems of both branches must form a stem combination; for
    CHUK–IN the MIDDLE stems (SIN + BYEONG → WATER) are reported as a second
    pair.  The result element is always the MAIN pair's.
    """
    pair = _pair(a, b)
    if len(pair) < 2:
        return None

    first, second = sorted(pair, key=BRANCHES.index)
    main_pair = (main_stem(first), main_stem(second))
    element = STEM_COMBINATIONS.get(frozenset(main_pair))
    if element is None:
        return None

    stem_pairs = [main_pair]
    if pair in MIDDLE_STEM_COMBINATION_PAIRS:
        mid_a, mid_b = middle_stem(first), middle_stem(second)
        if mid_a is not None and mid_b is not None and frozenset({mid_a, mid_b}) in STEM_COMBINATIONS:
            stem_pairs.append((mid_a, mid_b))
    return HiddenCombination(branches=(first, second), stem_pairs=tuple(stem_pairs), element=element)


def is_hidden_combination(a: BranchLike, b: BranchLike) -> bool:
    return hidden_combination(a, b) is not None


def is_punishment(a: BranchLike, b: BranchLike) -> bool:
    """Two distinct branches that belong to the same punishment group (형)."""
    pair = _pair(a, b)
    return len(pair) == 2 and any(pair <= group for group in PUNISHMENT_GROUPS)


def is_self_punishment(a: BranchLike, b: BranchLike) -> bool:
    """JIN, O, YU or HAE meeting itself (자형)."""
    first, second = coerce_branch(a), coerce_branch(b)
    return first == second and first in SELF_PUNISHMENT


def is_break(a: BranchLike, b: BranchLike) -> bool:
    return _pair(a, b) in BREAK_PAIRS


def is_harm(a: BranchLike, b: BranchLike) -> bool:
    return _pair(a, b) in HARM_PAIRS


# ── Trio relations ────────────────────────────────────────────────────────────


def tri_combination(a: BranchLike, b: BranchLike, c: BranchLike) -> Optional[Element]:
    """Element of a complete seasonal trio (삼합), or ``None``."""
    members = _trio(a, b, c)
    if members is None:
        return None
    for trio, element in TRI_COMBINATIONS.items():
        if members == frozenset(trio):
            return element
    return None


def is_tri_combination(a: BranchLike, b: BranchLike, c: BranchLike) -> bool:
    return tri_combination(a, b, c) is not None


def directional_combination(a: BranchLike, b: BranchLike, c: BranchLike) -> Optional[Element]:
    """Element of a complete directional trio (방합), or ``None``."""
    members = _trio(a, b, c)
    if members is None:
        return None
    for trio, element in DIRECTIONAL_COMBINATIONS.items():
        if members == frozenset(trio):
            return element
    return None


def is_directional_combination(a: BranchLike, b: BranchLike, c: BranchLike) -> bool:
    return directional_combination(a, b, c) is not None


def is_punishment_trio(a: BranchLike, b: BranchLike, c: BranchLike) -> bool:
    """A complete three-branch punishment (삼형)."""
    members = _trio(a, b, c)
    return members is not None and members in PUNISHMENT_GROUPS


# ── Revealed stems ────────────────────────────────────────────────────────────


def tuchul(branch: BranchLike, visible_stems: Iterable[StemLike]) -> list[HiddenStemEntry]:
    """Hidden entries of ``branch`` whose stem is among ``visible_stems``."""
    visible = {coerce_stem(s) for s in visible_stems}
    return [e for e in hidden_stems(coerce_branch(branch)) if e.stem in visible]


def dominant_revealed(
    branch: BranchLike, visible_stems: Iterable[StemLike]
) -> Optional[HiddenStemEntry]:
    """Highest-role revealed entry (MAIN > MIDDLE > RESIDUAL), or ``None``."""
    revealed = tuchul(branch, visible_stems)
    if not revealed:
        return None
    return max(revealed, key=lambda e: _ROLE_RANK[e.role])


# ── Chart scan ────────────────────────────────────────────────────────────────


def _pair_relations(
    a: Branch, b: Branch, positions: tuple[int, ...]
) -> list[BranchRelation]:
    found: list[BranchRelation] = []

    def add(rel_type: RelationType, element: Optional[Element] = None, **extra) -> None:
        found.append(BranchRelation(
            relation_type=rel_type, branches=(a, b), positions=positions,
            element=element, **extra,
        ))

    if (element := six_combination_element(a, b)) is not None:
        add(RelationType.SIX_COMBINATION, element)
    if (half := half_combination(a, b)) is not None:
        add(RelationType.HALF_COMBINATION, half.element, half_type=half.half_type)
    if (hidden := hidden_combination(a, b)) is not None:
        add(RelationType.HIDDEN_COMBINATION, hidden.element)
    if is_clash(a, b):
        add(RelationType.CLASH)
    if is_punishment(a, b):
        add(RelationType.PUNISHMENT)
    if is_self_punishment(a, b):
        add(RelationType.SELF_PUNISHMENT)
    if is_break(a, b):
        add(RelationType.BREAK)
    if is_harm(a, b):
        add(RelationType.HARM)
    if is_resentment_pair(a, b):
        add(RelationType.RESENTMENT)
    return found


def _trio_relations(
    a: Branch, b: Branch, c: Branch, positions: tuple[int, ...]
) -> list[BranchRelation]:
    found: list[BranchRelation] = []
    if (element := tri_combination(a, b, c)) is not None:
        found.append(BranchRelation(
            relation_type=RelationType.TRI_COMBINATION, branches=(a, b, c),
            positions=positions, element=element,
        ))
    if (element := directional_combination(a, b, c)) is not None:
        found.append(BranchRelation(
            relation_type=RelationType.DIRECTIONAL_COMBINATION, branches=(a, b, c),
            positions=positions, element=element,
        ))
    if is_punishment_trio(a, b, c):
        found.append(BranchRelation(
            relation_type=RelationType.PUNISHMENT, branches=(a, b, c),
            positions=positions,
        ))
    return found


def find_relations(branches: Sequence[BranchLike]) -> list[BranchRelation]:
    """Every pair and trio relation among ``branches``.

    Pairs come first, then trios; within each, combinations of positions are
    visited in ascending order.  ``positions`` on each result index into
    ``branches`` (0 = year … 3 = hour for a chart).

    Args:
        branches: Branch identifiers, typically a chart's four branches.

    Returns:
        List of ``BranchRelation`` (empty when nothing relates).
    """
    resolved = [coerce_branch(b) for b in branches]
    found: list[BranchRelation] = []

    for i, j in itertools.combinations(range(len(resolved)), 2):
        found.extend(_pair_relations(resolved[i], resolved[j], (i, j)))
    for i, j, k in itertools.combinations(range(len(resolved)), 3):
        found.extend(_trio_relations(resolved[i], resolved[j], resolved[k], (i, j, k)))

    logger.debug(
        "Scanned %d branches: %d relation(s) found.", len(resolved), len(found)
    )
    return found
