"""Frozen pydantic value objects shared across the package.

Modules
-------
relation : HiddenStemEntry, BranchRelation, HalfCombination,
           HiddenCombination, ClimateNeed.
chart    : Pillar, BirthChart.
inputs   : FavorableElementSet, StrengthProfile, TenGodProfile,
           StructureClassification, ChartContext, NameCharacter, CandidateName.
scoring  : SubScore, PenaltyBreakdown, ElementMatches, TraceStep,
           ScoringBreakdown, CompatibilityResult.
request  : ScoreRequest, RankRequest (CLI request documents).
"""
