"""
Seasonal-need (조후용신) table: which stems a day master born in a given
month branch needs to temper the season's heat, cold, dryness or damp.

Rows are keyed by (day stem, month branch) and give a primary and a
secondary stem, following the classical 궁통보감 tabulation.  The table is
complete: 10 stems × 12 branches = 120 rows.
"""

from __future__ import annotations

from saju_compat.models.relation import ClimateNeed
from saju_compat.tables.cycles import BranchLike, StemLike, coerce_branch, coerce_stem
from saju_compat.taxonomy.element_taxonomy import Branch as B
from saju_compat.taxonomy.element_taxonomy import Stem as S

# Month order within each row: IN MYO JIN SA O MI SHIN YU SUL HAE JA CHUK
_MONTHS: tuple[B, ...] = (
    B.IN, B.MYO, B.JIN, B.SA, B.O, B.MI, B.SHIN, B.YU, B.SUL, B.HAE, B.JA, B.CHUK,
)

_ROWS: dict[S, tuple[tuple[S, S], ...]] = {
    S.GAP: (
        (S.BYEONG, S.GYE), (S.GYEONG, S.BYEONG), (S.GYEONG, S.IM),
        (S.GYE, S.GYEONG), (S.GYE, S.GYEONG), (S.GYE, S.GYEONG),
        (S.JEONG, S.GYEONG), (S.JEONG, S.GYEONG), (S.GYEONG, S.GAP),
        (S.GYEONG, S.JEONG), (S.JEONG, S.GYEONG), (S.JEONG, S.GYEONG),
    ),
    S.EUL: (
        (S.BYEONG, S.GYE), (S.BYEONG, S.GYE), (S.GYE, S.BYEONG),
        (S.GYE, S.BYEONG), (S.GYE, S.BYEONG), (S.GYE, S.BYEONG),
        (S.BYEONG, S.GYE), (S.BYEONG, S.GYE), (S.GYE, S.BYEONG),
        (S.BYEONG, S.GYE), (S.BYEONG, S.GYE), (S.BYEONG, S.GYE),
    ),
    S.BYEONG: (
        (S.IM, S.GYEONG), (S.IM, S.GI), (S.IM, S.GAP),
        (S.IM, S.GYEONG), (S.IM, S.GYEONG), (S.IM, S.GYEONG),
        (S.IM, S.GAP), (S.IM, S.GAP), (S.GAP, S.IM),
        (S.GAP, S.MU), (S.GAP, S.MU), (S.GAP, S.MU),
    ),
    S.JEONG: (
        (S.GAP, S.GYEONG), (S.GAP, S.GYEONG), (S.GAP, S.GYEONG),
        (S.GAP, S.IM), (S.GAP, S.IM), (S.GAP, S.IM),
        (S.GAP, S.GYEONG), (S.GAP, S.GYEONG), (S.GAP, S.GYEONG),
        (S.GAP, S.GYEONG), (S.GAP, S.GYEONG), (S.GAP, S.GYEONG),
    ),
    S.MU: (
        (S.BYEONG, S.GAP), (S.BYEONG, S.GAP), (S.BYEONG, S.GAP),
        (S.IM, S.GAP), (S.IM, S.GAP), (S.GYE, S.BYEONG),
        (S.BYEONG, S.GYE), (S.BYEONG, S.GYE), (S.GAP, S.IM),
        (S.GAP, S.BYEONG), (S.BYEONG, S.GAP), (S.BYEONG, S.GAP),
    ),
    S.GI: (
        (S.BYEONG, S.GYE), (S.BYEONG, S.GYE), (S.BYEONG, S.GYE),
        (S.GYE, S.BYEONG), (S.GYE, S.BYEONG), (S.GYE, S.BYEONG),
        (S.BYEONG, S.GYE), (S.BYEONG, S.GYE), (S.GAP, S.BYEONG),
        (S.BYEONG, S.GAP), (S.BYEONG, S.GAP), (S.BYEONG, S.GAP),
    ),
    S.GYEONG: (
        (S.BYEONG, S.JEONG), (S.JEONG, S.GAP), (S.JEONG, S.GAP),
        (S.IM, S.JEONG), (S.IM, S.GYE), (S.JEONG, S.GAP),
        (S.JEONG, S.GAP), (S.JEONG, S.GAP), (S.JEONG, S.GAP),
        (S.JEONG, S.BYEONG), (S.JEONG, S.BYEONG), (S.JEONG, S.BYEONG),
    ),
    S.SIN: (
        (S.BYEONG, S.IM), (S.IM, S.GAP), (S.IM, S.GAP),
        (S.IM, S.GI), (S.IM, S.GI), (S.IM, S.GI),
        (S.IM, S.GAP), (S.IM, S.GAP), (S.IM, S.GAP),
        (S.BYEONG, S.IM), (S.BYEONG, S.IM), (S.BYEONG, S.IM),
    ),
    S.IM: (
        (S.MU, S.BYEONG), (S.MU, S.SIN), (S.GAP, S.GYEONG),
        (S.GYEONG, S.IM), (S.GYEONG, S.GYE), (S.GYEONG, S.SIN),
        (S.MU, S.JEONG), (S.GAP, S.MU), (S.GAP, S.BYEONG),
        (S.MU, S.BYEONG), (S.MU, S.BYEONG), (S.BYEONG, S.MU),
    ),
    S.GYE: (
        (S.SIN, S.BYEONG), (S.SIN, S.BYEONG), (S.BYEONG, S.SIN),
        (S.SIN, S.GYEONG), (S.GYEONG, S.SIN), (S.GYEONG, S.SIN),
        (S.JEONG, S.GAP), (S.JEONG, S.GAP), (S.SIN, S.GAP),
        (S.BYEONG, S.SIN), (S.BYEONG, S.SIN), (S.BYEONG, S.SIN),
    ),
}

CLIMATE_TABLE: dict[tuple[S, B], ClimateNeed] = {
    (stem, month): ClimateNeed(
        day_stem=stem, month_branch=month, primary=primary, secondary=secondary,
    )
    for stem, row in _ROWS.items()
    for month, (primary, secondary) in zip(_MONTHS, row)
}


def climate_need(day_stem: StemLike, month_branch: BranchLike) -> ClimateNeed:
    """Seasonal-need recommendation for ``day_stem`` born in ``month_branch``."""
    return CLIMATE_TABLE[(coerce_stem(day_stem), coerce_branch(month_branch))]
