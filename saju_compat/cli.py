"""
saju-compat — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Execute (table lookup, relation scan, scoring).
  5. Report result to stdout.

Install and run::

    pip install -e .
    saju-compat --help
    saju-compat validate-config
    saju-compat hidden-stems IN
    saju-compat root GAP HAE
    saju-compat relations JA O MYO YU
    saju-compat score request.json
    saju-compat rank candidates.json --top 5
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, TypeVar, Union

import typer
from pydantic import BaseModel, ValidationError

app = typer.Typer(
    name="saju-compat",
    help="Four-Pillars relation engine and name compatibility scorer.",
    add_completion=False,
)

_RequestT = TypeVar("_RequestT", bound=BaseModel)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from saju_compat.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except (ValidationError, ValueError) as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from saju_compat.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_request_or_exit(path: str, model: type[_RequestT]) -> _RequestT:
    """Read and validate a JSON request document."""
    request_path = Path(path)
    if not request_path.exists():
        typer.echo(f"[ERROR] Request file not found: {request_path}", err=True)
        raise typer.Exit(code=1)
    try:
        return model.model_validate_json(request_path.read_text(encoding="utf-8"))
    except ValidationError as exc:
        typer.echo(f"[ERROR] {exc.error_count()} validation error(s) in {request_path}:", err=True)
        for err in exc.errors()[:5]:
            loc = ".".join(str(p) for p in err["loc"])
            typer.echo(f"  {loc}: {err['msg']}", err=True)
        raise typer.Exit(code=1)


def _invalid_input(exc: Exception) -> typer.Exit:
    typer.echo(f"[ERROR] {exc}", err=True)
    return typer.Exit(code=1)


def _as_code(value: str) -> Union[int, str]:
    """Integer-looking arguments become indices; anything else stays a code."""
    return int(value) if value.lstrip("-").isdigit() else value


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)
    weights = config.scoring.weights

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(
        f"  Weights:          balance {weights.balance:g}, yongshin {weights.yongshin_match:g}, "
        f"strength {weights.strength:g}, ten-god {weights.ten_god:g}"
    )
    typer.echo(
        f"  Penalties:        gishin {config.scoring.penalties.gishin_per_char:g}, "
        f"gushin {config.scoring.penalties.gushin_per_char:g}, "
        f"structure {config.scoring.penalties.structure_per_char:g}"
    )
    typer.echo(f"  Pass threshold:   {config.scoring.pass_threshold:g}")
    typer.echo(f"  Ranking top-N:    {config.ranking.top_n}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("hidden-stems")
def hidden_stems_cmd(
    branch: str = typer.Argument(..., help="Branch code, index, Hangul or Hanja (e.g. IN, 2, 인, 寅)."),
) -> None:
    """Print a branch's hidden-stem composition (RESIDUAL → MIDDLE → MAIN)."""
    from saju_compat.errors import InvalidIndexError
    from saju_compat.reporting.formatters import format_hidden_stems
    from saju_compat.tables.cycles import BRANCH_HANJA, coerce_branch
    from saju_compat.tables.hidden_stems import hidden_stems

    try:
        resolved = coerce_branch(_as_code(branch), wrap=True)
    except InvalidIndexError as exc:
        raise _invalid_input(exc)

    typer.echo(f"Hidden stems of {resolved.value} ({BRANCH_HANJA[resolved]}):")
    typer.echo(format_hidden_stems(hidden_stems(resolved)))


@app.command("root")
def root_cmd(
    stem: str = typer.Argument(..., help="Visible stem code, index, Hangul or Hanja (e.g. GAP, 0, 갑, 甲)."),
    branch: str = typer.Argument(..., help="Branch code, index, Hangul or Hanja (e.g. HAE, 11, 해, 亥)."),
) -> None:
    """Print the root strength of STEM in BRANCH."""
    from saju_compat.analysis.roots import root_strength
    from saju_compat.errors import InvalidIndexError
    from saju_compat.tables.cycles import coerce_branch, coerce_stem

    try:
        resolved_stem = coerce_stem(_as_code(stem))
        resolved_branch = coerce_branch(_as_code(branch))
        strength = root_strength(resolved_stem, resolved_branch)
    except InvalidIndexError as exc:
        raise _invalid_input(exc)
    typer.echo(f"{resolved_stem.value} in {resolved_branch.value}: {strength.value}")


@app.command("relations")
def relations_cmd(
    branches: list[str] = typer.Argument(..., help="Two to four branches in pillar order."),
) -> None:
    """List every relation among the given branches."""
    from saju_compat.analysis.relations import find_relations
    from saju_compat.errors import InvalidIndexError
    from saju_compat.reporting.formatters import format_relations

    if not 2 <= len(branches) <= 4:
        typer.echo("[ERROR] Pass between 2 and 4 branches.", err=True)
        raise typer.Exit(code=1)
    try:
        found = find_relations([_as_code(b) for b in branches])
    except InvalidIndexError as exc:
        raise _invalid_input(exc)

    typer.echo(f"Relations among {' '.join(branches)}:")
    typer.echo(format_relations(found))


@app.command("score")
def score(
    request_file: str = typer.Argument(..., help="JSON request: chart, context, name."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
    no_trace: bool = typer.Option(False, "--no-trace", help="Omit the trace from text output."),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Score one candidate name against one birth chart."""
    from saju_compat.errors import StructuralViolationError
    from saju_compat.models.request import ScoreRequest
    from saju_compat.reporting.formatters import format_result
    from saju_compat.scoring.scorer import evaluate_name

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    request = _load_request_or_exit(request_file, ScoreRequest)

    try:
        result = evaluate_name(request.chart, request.context, request.name, config.scoring)
    except StructuralViolationError as exc:
        raise _invalid_input(exc)

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
        return
    typer.echo(format_result(result, show_trace=not no_trace))
    typer.echo("")
    typer.echo("[OK] Scored.")


@app.command("rank")
def rank(
    request_file: str = typer.Argument(..., help="JSON request: chart, context, candidates."),
    top: Optional[int] = typer.Option(
        None, "--top", min=0, help="How many to show (default: config ranking.top_n).",
    ),
    max_candidates: Optional[int] = typer.Option(
        None,
        "--max-candidates",
        min=0,
        help="Evaluate at most this many candidates (default: config ranking.max_candidates).",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print ranked results as JSON."),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Score many candidate names and print the best ones."""
    from saju_compat.errors import StructuralViolationError
    from saju_compat.models.request import RankRequest
    from saju_compat.reporting.formatters import format_ranking
    from saju_compat.scoring.ranker import score_candidates, top_n

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    request = _load_request_or_exit(request_file, RankRequest)

    try:
        results = score_candidates(
            request.chart,
            request.context,
            request.candidates,
            config.scoring,
            max_candidates=(
                max_candidates if max_candidates is not None
                else config.ranking.max_candidates
            ),
        )
    except StructuralViolationError as exc:
        raise _invalid_input(exc)

    ranked = top_n(results, top if top is not None else config.ranking.top_n)
    if as_json:
        payload = [
            {"rank": r.rank, "index": r.index, **r.result.model_dump(mode="json")}
            for r in ranked
        ]
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    typer.echo(f"Chart: {request.chart.label()}  ({len(results)} candidate(s) scored)")
    typer.echo(format_ranking(ranked))
    typer.echo("")
    typer.echo("[OK] Ranked.")


if __name__ == "__main__":
    app()
