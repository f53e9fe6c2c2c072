"""
Root-strength resolver (통근).

Resolution order for ``root_strength(stem, branch)``:
    1. stem is the branch's MAIN hidden stem            -> STRONG
    2. stem is a MIDDLE or RESIDUAL hidden stem          -> WEAK
    3. stem's counterpart (same element, opposite
       polarity) is anywhere in the hidden composition   -> WEAK
    4. otherwise                                         -> NONE

MAIN is checked first even though a stem never occupies two roles in one
branch.  Examples: GAP in IN -> STRONG, GAP in HAE -> WEAK (RESIDUAL),
GAP in YU -> NONE.
"""

from __future__ import annotations

from typing import Iterable

from saju_compat.tables.cycles import BranchLike, StemLike, coerce_branch, coerce_stem, counterpart
from saju_compat.tables.hidden_stems import hidden_stems, main_stem
from saju_compat.taxonomy.relation_taxonomy import RootStrength

ROOT_WEIGHT: dict[RootStrength, float] = {
    RootStrength.STRONG: 1.0,
    RootStrength.WEAK:   0.5,
    RootStrength.NONE:   0.0,
}


def root_strength(stem: StemLike, branch: BranchLike) -> RootStrength:
    """Root strength of ``stem`` in ``branch``.

    Raises:
        InvalidIndexError: For invalid stem or branch identifiers.
    """
    s = coerce_stem(stem)
    b = coerce_branch(branch)

    if main_stem(b) == s:
        return RootStrength.STRONG

    hidden = [e.stem for e in hidden_stems(b)]
    if s in hidden:
        return RootStrength.WEAK
    if counterpart(s) in hidden:
        return RootStrength.WEAK
    return RootStrength.NONE


def has_root(stem: StemLike, branch: BranchLike) -> bool:
    return root_strength(stem, branch) != RootStrength.NONE


def chart_roots(stem: StemLike, branches: Iterable[BranchLike]) -> list[RootStrength]:
    """Root strength of ``stem`` in each of ``branches``, in order."""
    return [root_strength(stem, b) for b in branches]


def root_ratio(stem: StemLike, branches: Iterable[BranchLike]) -> float:
    """Mean root weight over ``branches`` (STRONG = 1, WEAK = 0.5, NONE = 0).

    Returns 0.0 for an empty sequence.
    """
    roots = chart_roots(stem, branches)
    if not roots:
        return 0.0
    return sum(ROOT_WEIGHT[r] for r in roots) / len(roots)
