"""
Chart-level taxonomy: upstream judgments consumed by the scorer.

  - ``PillarPosition``    — year / month / day / hour.
  - ``StrengthLevel``     — resolved day-master strength.
  - ``TenGodGroup``       — the five ten-god (십성) families.
  - ``StructureCategory`` — family of the chart's structure (격국).
  - ``FallbackReason``    — why a sub-score was dropped during scoring.

This module has NO imports from any other ``saju_compat`` package.
"""

from enum import StrEnum


class PillarPosition(StrEnum):
    """Position of a pillar in the chart."""

    YEAR = "YEAR"
    MONTH = "MONTH"
    DAY = "DAY"
    HOUR = "HOUR"


class StrengthLevel(StrEnum):
    """Day-master strength as judged upstream."""

    STRONG = "STRONG"
    """신강(身强). Wants elements that drain or restrain the day master."""

    WEAK = "WEAK"
    """신약(身弱). Wants elements that support the day master."""


class TenGodGroup(StrEnum):
    """Ten-god families, named by their relation to the day master."""

    FRIEND = "FRIEND"
    """비겁(比劫). Same element as the day master."""

    OUTPUT = "OUTPUT"
    """식상(食傷). Element the day master generates."""

    WEALTH = "WEALTH"
    """재성(財星). Element the day master controls."""

    AUTHORITY = "AUTHORITY"
    """관성(官星). Element that controls the day master."""

    RESOURCE = "RESOURCE"
    """인성(印星). Element that generates the day master."""


class StructureCategory(StrEnum):
    """Family of the chart's structural classification."""

    NORMAL = "NORMAL"
    """정격/내격. Ordinary balance-seeking structure."""

    FOLLOW = "FOLLOW"
    """종격(從格). Day master yields to the dominant force."""

    TRANSFORMATION = "TRANSFORMATION"
    """화격(化格). Day master transforms into a combined element."""


class FallbackReason(StrEnum):
    """Optional upstream input that was absent during an evaluation."""

    MISSING_FAVORABLE_ELEMENT = "MISSING_FAVORABLE_ELEMENT"
    """No yongshin resolved; the yongshin-match sub-score is dropped."""

    MISSING_STRENGTH_LEVEL = "MISSING_STRENGTH_LEVEL"
    """No strength level resolved; the strength sub-score is dropped."""

    MISSING_TEN_GOD_PROFILE = "MISSING_TEN_GOD_PROFILE"
    """No ten-god counts or group lists; the ten-god sub-score is dropped."""
