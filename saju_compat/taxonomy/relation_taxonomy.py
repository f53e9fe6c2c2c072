"""
Relation taxonomy: tags produced by the table layer and relation classifier.

  - ``HiddenRole``          — role of a hidden stem inside a branch.
  - ``BranchType``          — peak / generative / storage branch family.
  - ``RelationType``        — kind of branch relation found in a chart.
  - ``HalfCombinationType`` — which two of a seasonal trio are present.
  - ``RootStrength``        — how firmly a visible stem is rooted in a branch.

This module has NO imports from any other ``saju_compat`` package.
"""

from enum import StrEnum


class HiddenRole(StrEnum):
    """Role of a hidden stem (지장간) inside its branch, weakest first."""

    RESIDUAL = "RESIDUAL"
    """여기(餘氣). Carry-over from the previous branch."""

    MIDDLE = "MIDDLE"
    """중기(中氣). Present only in generative and storage branches."""

    MAIN = "MAIN"
    """본기(本氣). Exactly one per branch; the branch's own qi."""


class BranchType(StrEnum):
    """Seasonal family of a branch."""

    PEAK = "PEAK"
    """왕지(旺支). JA, MYO, O, YU — the middle month of a season."""

    GENERATIVE = "GENERATIVE"
    """생지(生支). IN, SA, SHIN, HAE — the first month of a season."""

    STORAGE = "STORAGE"
    """고지(庫支). JIN, MI, SUL, CHUK — the last month of a season."""


class RelationType(StrEnum):
    """Kind of relation between two or three branches."""

    # ── Combinations ──────────────────────────────────────────────────────────
    SIX_COMBINATION = "SIX_COMBINATION"
    """육합(六合). Fixed pair producing a union element."""

    TRI_COMBINATION = "TRI_COMBINATION"
    """삼합(三合). Generative + peak + storage branch of one element."""

    DIRECTIONAL_COMBINATION = "DIRECTIONAL_COMBINATION"
    """방합(方合). The three branches of one season/direction."""

    HALF_COMBINATION = "HALF_COMBINATION"
    """반합(半合). Two of the three members of a seasonal trio."""

    HIDDEN_COMBINATION = "HIDDEN_COMBINATION"
    """암합(暗合). The branches' hidden stems form a stem combination."""

    # ── Conflicts ─────────────────────────────────────────────────────────────
    CLASH = "CLASH"
    """충(沖). Branches six positions apart."""

    PUNISHMENT = "PUNISHMENT"
    """형(刑). Members of a punishment group."""

    SELF_PUNISHMENT = "SELF_PUNISHMENT"
    """자형(自刑). JIN, O, YU or HAE paired with itself."""

    BREAK = "BREAK"
    """파(破). Fixed destruction pair."""

    HARM = "HARM"
    """해(害). Fixed harm pair; the clash partner of a six-combination."""

    RESENTMENT = "RESENTMENT"
    """원진(怨嗔). Fixed resentment pair."""


class HalfCombinationType(StrEnum):
    """Which two members of a seasonal trio are present."""

    GENERATIVE_PEAK = "GENERATIVE_PEAK"
    """생지 + 왕지. Strong half-combination."""

    PEAK_STORAGE = "PEAK_STORAGE"
    """왕지 + 고지. Strong half-combination."""

    GENERATIVE_STORAGE = "GENERATIVE_STORAGE"
    """생지 + 고지. Peak branch absent; weakest form."""


class RootStrength(StrEnum):
    """Root (통근) strength of a visible stem in a branch."""

    STRONG = "STRONG"
    """Stem is the branch's MAIN hidden stem."""

    WEAK = "WEAK"
    """Stem is a MIDDLE/RESIDUAL hidden stem, or its counterpart is hidden."""

    NONE = "NONE"
    """No root."""
