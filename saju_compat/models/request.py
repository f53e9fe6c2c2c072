"""
Request documents accepted by the CLI (``score`` and ``rank`` commands).

A request bundles the four pillars, the upstream context and the candidate
name(s) into one JSON object::

    {
      "chart": {
        "year":  {"stem": "GAP", "branch": "JA"},
        "month": {"stem": "BYEONG", "branch": "IN"},
        "day":   {"stem": "GAP", "branch": "O"},
        "hour":  {"stem": "GYEONG", "branch": "O"}
      },
      "context": {
        "favorable": {"yongshin": "WATER", "heeshin": "METAL", "gishin": "FIRE"},
        "strength":  {"level": "WEAK"}
      },
      "name": {"characters": [{"character": "水", "resource_element": "WATER"}]}
    }

``RankRequest`` replaces ``name`` with ``candidates`` (a list of names).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from saju_compat.models.chart import BirthChart
from saju_compat.models.inputs import CandidateName, ChartContext


class ScoreRequest(BaseModel):
    """One chart, one candidate name."""

    model_config = ConfigDict(frozen=True)

    chart: BirthChart
    context: ChartContext = ChartContext()
    name: CandidateName


class RankRequest(BaseModel):
    """One chart, many candidate names."""

    model_config = ConfigDict(frozen=True)

    chart: BirthChart
    context: ChartContext = ChartContext()
    candidates: list[CandidateName]
