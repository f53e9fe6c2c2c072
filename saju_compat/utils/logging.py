"""
Structured logging setup for saju-compat.

Call ``configure_logging(config)`` once at CLI entry (before any scoring work)
to set up the root logger with the configured level and optional file handler.

All internal modules use ``logging.getLogger(__name__)``; never call
``configure_logging`` or ``basicConfig`` from within library code.  The scorer
and ranker wrap their loggers in ``EvaluationLogAdapter`` so each record
carries the chart label and, per name, the candidate and its final score.
Text lines end with those fields in brackets::

    ... saju_compat.scoring.scorer: Evaluated name: confidence=1.00 passed=True [chart=GAP-JA ... candidate=水金 final_score=71.19]

JSON format (set ``json_format = true`` in config/default.toml [logging]):
  Emits one JSON object per line::

    {"ts": "2026-02-24T15:00:00Z", "level": "DEBUG", "logger": "...", "msg": "...",
     "chart": "...", "candidate": "...", "final_score": 71.19}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from saju_compat.config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Per-evaluation context attached by ``EvaluationLogAdapter``; rendered in
# this order by the text formatter.
EVALUATION_FIELDS = ("chart", "candidate", "final_score")

# Attributes every LogRecord carries; anything else came from ``extra=``.
_RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message"}


class EvaluationLogAdapter(logging.LoggerAdapter):
    """Attach the chart label and candidate name to every record.

    Unlike the stdlib adapter, per-call ``extra=`` is merged over the bound
    context instead of replacing it.

    Example::

        log = EvaluationLogAdapter(logger, chart=chart.label(), candidate="水金")
        log.debug("Evaluated.", extra={"final_score": 71.19})
    """

    def __init__(self, logger: logging.Logger, **context) -> None:
        super().__init__(logger, context)

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs


class _TextFormatter(logging.Formatter):
    """``LOG_FORMAT`` plus a ``[chart=… candidate=…]`` suffix when present."""

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        context = [
            f"{field}={getattr(record, field)}"
            for field in EVALUATION_FIELDS
            if getattr(record, field, None) is not None
        ]
        return f"{line} [{' '.join(context)}]" if context else line


class _JsonFormatter(logging.Formatter):
    """Emit one JSON object per log line.

    Fields: ``ts``, ``level``, ``logger``, ``msg``.
    Extra fields from ``extra=`` kwargs are included at the top level.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
                LOG_DATE_FORMAT
            ),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        for key, val in record.__dict__.items():
            if key not in _RESERVED and not key.startswith("_"):
                payload[key] = val
        return json.dumps(payload, default=str, ensure_ascii=False)


def configure_logging(config: "LoggingConfig") -> None:
    """Configure the root logger from a ``LoggingConfig`` instance.

    Sets up:
      - StreamHandler (stderr) at the configured level, so command output on
        stdout stays machine-readable.
      - Optional FileHandler if ``config.log_file`` is set.
      - JSON line format if ``config.json_format`` is ``True``.

    Args:
        config: Logging configuration section from ``AppConfig``.
    """
    level = getattr(logging, config.level.upper(), logging.INFO)

    formatter: logging.Formatter
    if config.json_format:
        formatter = _JsonFormatter()
    else:
        formatter = _TextFormatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    handlers: list[logging.Handler] = []

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    handlers.append(console)

    # File handler (create parent dirs if needed)
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)
