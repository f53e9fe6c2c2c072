"""
Fixed relation tables between branches, and between stems.

Pairs are stored as ``frozenset`` keys so every lookup is order-independent.
Trios are stored generative → peak → storage (seasonal) or in calendar order
(directional); membership tests compare as sets.

Clash is not tabulated: two branches clash iff they are six positions apart.
"""

from __future__ import annotations

from saju_compat.taxonomy.element_taxonomy import Branch as B
from saju_compat.taxonomy.element_taxonomy import Element as E
from saju_compat.taxonomy.element_taxonomy import Stem as S

# ── Combinations ──────────────────────────────────────────────────────────────

SIX_COMBINATIONS: dict[frozenset[B], E] = {
    frozenset({B.JA, B.CHUK}):  E.EARTH,
    frozenset({B.IN, B.HAE}):   E.WOOD,
    frozenset({B.MYO, B.SUL}):  E.FIRE,
    frozenset({B.JIN, B.YU}):   E.METAL,
    frozenset({B.SA, B.SHIN}):  E.WATER,
    frozenset({B.O, B.MI}):     E.EARTH,
}

# (generative, peak, storage) -> element
TRI_COMBINATIONS: dict[tuple[B, B, B], E] = {
    (B.SHIN, B.JA, B.JIN):  E.WATER,
    (B.HAE, B.MYO, B.MI):   E.WOOD,
    (B.IN, B.O, B.SUL):     E.FIRE,
    (B.SA, B.YU, B.CHUK):   E.METAL,
}

DIRECTIONAL_COMBINATIONS: dict[tuple[B, B, B], E] = {
    (B.IN, B.MYO, B.JIN):   E.WOOD,
    (B.SA, B.O, B.MI):      E.FIRE,
    (B.SHIN, B.YU, B.SUL):  E.METAL,
    (B.HAE, B.JA, B.CHUK):  E.WATER,
}

# Hidden combinations follow from the MAIN stems alone; CHUK–IN also
# combines through its MIDDLE stems (SIN + BYEONG).
MIDDLE_STEM_COMBINATION_PAIRS: frozenset[frozenset[B]] = frozenset({
    frozenset({B.CHUK, B.IN}),
})

STEM_COMBINATIONS: dict[frozenset[S], E] = {
    frozenset({S.GAP, S.GI}):      E.EARTH,
    frozenset({S.EUL, S.GYEONG}):  E.METAL,
    frozenset({S.BYEONG, S.SIN}):  E.WATER,
    frozenset({S.JEONG, S.IM}):    E.WOOD,
    frozenset({S.MU, S.GYE}):      E.FIRE,
}

# ── Conflicts ─────────────────────────────────────────────────────────────────

RESENTMENT_PAIRS: frozenset[frozenset[B]] = frozenset({
    frozenset({B.JA, B.MI}),
    frozenset({B.CHUK, B.O}),
    frozenset({B.IN, B.YU}),
    frozenset({B.MYO, B.SHIN}),
    frozenset({B.JIN, B.HAE}),
    frozenset({B.SA, B.SUL}),
})

# 삼형: IN-SA-SHIN (무은지형), CHUK-SUL-MI (지세지형); 상형: JA-MYO (무례지형)
PUNISHMENT_GROUPS: tuple[frozenset[B], ...] = (
    frozenset({B.IN, B.SA, B.SHIN}),
    frozenset({B.CHUK, B.SUL, B.MI}),
    frozenset({B.JA, B.MYO}),
)
SELF_PUNISHMENT: frozenset[B] = frozenset({B.JIN, B.O, B.YU, B.HAE})

BREAK_PAIRS: frozenset[frozenset[B]] = frozenset({
    frozenset({B.JA, B.YU}),
    frozenset({B.CHUK, B.JIN}),
    frozenset({B.IN, B.HAE}),
    frozenset({B.MYO, B.O}),
    frozenset({B.SA, B.SHIN}),
    frozenset({B.MI, B.SUL}),
})

HARM_PAIRS: frozenset[frozenset[B]] = frozenset({
    frozenset({B.JA, B.MI}),
    frozenset({B.CHUK, B.O}),
    frozenset({B.IN, B.SA}),
    frozenset({B.MYO, B.JIN}),
    frozenset({B.SHIN, B.HAE}),
    frozenset({B.YU, B.SUL}),
})
