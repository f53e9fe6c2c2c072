"""Closed StrEnum taxonomies.  No module here imports other saju_compat code."""
