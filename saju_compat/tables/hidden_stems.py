"""
Hidden-stem composition (지장간) of the 12 branches.

Each branch holds 1–3 ``HiddenStemEntry`` values ordered
RESIDUAL → MIDDLE → MAIN whose ``days`` sum to 30 (one month of rule).

    Branch  RESIDUAL    MIDDLE       MAIN
    ------  ----------  -----------  -----------
    JA                               GYE    30
    CHUK    GYE    9    SIN     3    GI     18
    IN      MU     7    BYEONG  7    GAP    16
    MYO                              EUL    30
    JIN     EUL    9    GYE     3    MU     18
    SA      MU     7    GYEONG  7    BYEONG 16
    O       GI     9                 JEONG  21
    MI      JEONG  9    EUL     3    GI     18
    SHIN    MU     7    IM      7    GYEONG 16
    YU                               SIN    30
    SUL     SIN    9    JEONG   3    MU     18
    HAE     GAP    7                 IM     23

O and HAE follow the 9/21 and 7/23 split.  Other schools give 10/20 for
both; this table is the single authoritative source for the package.

Projections
-----------
``hidden_stems``, ``main_stem``, ``middle_stem`` and ``residual_stem`` are
total over the 12 branches.  Integer inputs are normalized modulo 12 so
callers may pass unnormalized offsets; anything else that is not a branch
identifier raises ``OutOfRangeError``.
"""

from __future__ import annotations

from typing import Optional

from saju_compat.errors import InvalidIndexError, OutOfRangeError
from saju_compat.models.relation import HiddenStemEntry
from saju_compat.tables.cycles import BranchLike, coerce_branch
from saju_compat.taxonomy.element_taxonomy import Branch, Stem
from saju_compat.taxonomy.relation_taxonomy import HiddenRole

_R, _M, _MAIN = HiddenRole.RESIDUAL, HiddenRole.MIDDLE, HiddenRole.MAIN


def _entries(*rows: tuple[Stem, HiddenRole, int]) -> tuple[HiddenStemEntry, ...]:
    return tuple(HiddenStemEntry(stem=s, role=r, days=d) for s, r, d in rows)


HIDDEN_STEMS: dict[Branch, tuple[HiddenStemEntry, ...]] = {
    Branch.JA:   _entries((Stem.GYE, _MAIN, 30)),
    Branch.CHUK: _entries((Stem.GYE, _R, 9), (Stem.SIN, _M, 3), (Stem.GI, _MAIN, 18)),
    Branch.IN:   _entries((Stem.MU, _R, 7), (Stem.BYEONG, _M, 7), (Stem.GAP, _MAIN, 16)),
    Branch.MYO:  _entries((Stem.EUL, _MAIN, 30)),
    Branch.JIN:  _entries((Stem.EUL, _R, 9), (Stem.GYE, _M, 3), (Stem.MU, _MAIN, 18)),
    Branch.SA:   _entries((Stem.MU, _R, 7), (Stem.GYEONG, _M, 7), (Stem.BYEONG, _MAIN, 16)),
    Branch.O:    _entries((Stem.GI, _R, 9), (Stem.JEONG, _MAIN, 21)),
    Branch.MI:   _entries((Stem.JEONG, _R, 9), (Stem.EUL, _M, 3), (Stem.GI, _MAIN, 18)),
    Branch.SHIN: _entries((Stem.MU, _R, 7), (Stem.IM, _M, 7), (Stem.GYEONG, _MAIN, 16)),
    Branch.YU:   _entries((Stem.SIN, _MAIN, 30)),
    Branch.SUL:  _entries((Stem.SIN, _R, 9), (Stem.JEONG, _M, 3), (Stem.MU, _MAIN, 18)),
    Branch.HAE:  _entries((Stem.GAP, _R, 7), (Stem.IM, _MAIN, 23)),
}


def _lookup(branch: BranchLike) -> tuple[HiddenStemEntry, ...]:
    try:
        return HIDDEN_STEMS[coerce_branch(branch, wrap=True)]
    except InvalidIndexError as exc:
        raise OutOfRangeError("branch", exc.value) from None


def _with_role(branch: BranchLike, role: HiddenRole) -> Optional[Stem]:
    for entry in _lookup(branch):
        if entry.role == role:
            return entry.stem
    return None


def hidden_stems(branch: BranchLike) -> tuple[HiddenStemEntry, ...]:
    """Full hidden composition of ``branch``, RESIDUAL → MIDDLE → MAIN."""
    return _lookup(branch)


def main_stem(branch: BranchLike) -> Stem:
    """The MAIN (본기) hidden stem; every branch has exactly one."""
    return next(e.stem for e in _lookup(branch) if e.role == _MAIN)


def middle_stem(branch: BranchLike) -> Optional[Stem]:
    """The MIDDLE (중기) hidden stem, or ``None`` for peak branches and O/HAE."""
    return _with_role(branch, _M)


def residual_stem(branch: BranchLike) -> Optional[Stem]:
    """The RESIDUAL (여기) hidden stem, or ``None`` for JA, MYO and YU."""
    return _with_role(branch, _R)
