"""
Element taxonomy for Four-Pillars chart analysis.

Four closed enumerations describe every visible symbol in a chart, and
``ElementRelation`` names how two elements stand in the five-phase cycle:
  - ``Element``  — the five phases (the *what*).
  - ``Polarity`` — yang / yin.
  - ``Stem``     — the 10 heavenly stems (천간).
  - ``Branch``   — the 12 earthly branches (지지).

Member order is significant: ``list(Stem)`` and ``list(Branch)`` give the
canonical cyclic index order (GAP = 0 … GYE = 9, JA = 0 … HAE = 11) that
every index-based rule (clash offset, modulo normalization) relies on.

Usage example::

    from saju_compat.taxonomy.element_taxonomy import Branch, Stem

    day_master = Stem.GAP
    month      = Branch.IN

This module has NO imports from any other ``saju_compat`` package.
"""

from enum import StrEnum


class Element(StrEnum):
    """The five phases, in generating-cycle order."""

    WOOD = "WOOD"
    """목(木). Generates FIRE, controls EARTH."""

    FIRE = "FIRE"
    """화(火). Generates EARTH, controls METAL."""

    EARTH = "EARTH"
    """토(土). Generates METAL, controls WATER."""

    METAL = "METAL"
    """금(金). Generates WATER, controls WOOD."""

    WATER = "WATER"
    """수(水). Generates WOOD, controls FIRE."""


class Polarity(StrEnum):
    """Yang / yin polarity of a stem or branch."""

    YANG = "YANG"
    YIN = "YIN"


class Stem(StrEnum):
    """The 10 heavenly stems (천간), in cyclic order."""

    GAP = "GAP"
    """갑(甲). Yang wood."""

    EUL = "EUL"
    """을(乙). Yin wood."""

    BYEONG = "BYEONG"
    """병(丙). Yang fire."""

    JEONG = "JEONG"
    """정(丁). Yin fire."""

    MU = "MU"
    """무(戊). Yang earth."""

    GI = "GI"
    """기(己). Yin earth."""

    GYEONG = "GYEONG"
    """경(庚). Yang metal."""

    SIN = "SIN"
    """신(辛). Yin metal."""

    IM = "IM"
    """임(壬). Yang water."""

    GYE = "GYE"
    """계(癸). Yin water."""


class Branch(StrEnum):
    """The 12 earthly branches (지지), in cyclic order."""

    JA = "JA"
    """자(子). Yang water; peak branch of winter."""

    CHUK = "CHUK"
    """축(丑). Yin earth; storage branch of metal."""

    IN = "IN"
    """인(寅). Yang wood; generative branch of fire."""

    MYO = "MYO"
    """묘(卯). Yin wood; peak branch of spring."""

    JIN = "JIN"
    """진(辰). Yang earth; storage branch of water."""

    SA = "SA"
    """사(巳). Yin fire; generative branch of metal."""

    O = "O"
    """오(午). Yang fire; peak branch of summer."""

    MI = "MI"
    """미(未). Yin earth; storage branch of wood."""

    SHIN = "SHIN"
    """신(申). Yang metal; generative branch of water."""

    YU = "YU"
    """유(酉). Yin metal; peak branch of autumn."""

    SUL = "SUL"
    """술(戌). Yang earth; storage branch of fire."""

    HAE = "HAE"
    """해(亥). Yin water; generative branch of wood."""


class ElementRelation(StrEnum):
    """Relation of a target element to a reference element."""

    SAME = "SAME"
    """Target is the reference element (비화)."""

    GENERATES = "GENERATES"
    """Reference generates the target (생)."""

    CONTROLS = "CONTROLS"
    """Reference controls the target (극)."""

    GENERATED_BY = "GENERATED_BY"
    """Target generates the reference (피생)."""

    CONTROLLED_BY = "CONTROLLED_BY"
    """Target controls the reference (피극)."""
