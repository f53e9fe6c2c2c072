"""Canonical, immutable lookup tables for stems, branches and their relations.

Modules
-------
cycles        : stem/branch attributes, five-phase cycle, identifier coercion.
hidden_stems  : HIDDEN_STEMS table + hidden_stems() / main_stem() /
                middle_stem() / residual_stem() projections.
combinations  : combination, clash-family and stem-combination tables.
climate       : 10×12 seasonal-need table + climate_need().
"""
