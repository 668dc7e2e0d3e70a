from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(stage)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

LOG_REQUEST_ID: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("log_request_id", default=None)
LOG_STAGE: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("log_stage", default=None)


class ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = LOG_REQUEST_ID.get() or "-"
        record.stage = LOG_STAGE.get() or "-"
        return True


@contextmanager
def log_context(
    request_id: Optional[str] = None,
    stage: Optional[str] = None,
) -> Iterator[None]:
    tokens = []
    if request_id is not None:
        tokens.append((LOG_REQUEST_ID, LOG_REQUEST_ID.set(request_id)))
    if stage is not None:
        tokens.append((LOG_STAGE, LOG_STAGE.set(stage)))
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


def _level_from(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def configure_logging(
    log_file: str = "logs/app.log",
    level: int | str = logging.INFO,
    enable_console: bool = False,
    force: bool = False,
) -> logging.Logger:
    root = logging.getLogger()
    if getattr(root, "_veoprompt_logging_configured", False) and not force:
        return root

    if force:
        for handler in list(root.handlers):
            root.removeHandler(handler)

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)
    context_filter = ContextFilter()

    # Filters on the root logger do not see records propagated from children,
    # so the context fields are attached per handler.
    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setFormatter(formatter)
    file_handler.addFilter(context_filter)

    root.addHandler(file_handler)
    if enable_console:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        stream_handler.addFilter(context_filter)
        root.addHandler(stream_handler)

    root.setLevel(_level_from(level))
    root._veoprompt_logging_configured = True
    return root


def configure_logging_from_config(config: Mapping[str, Any], force: bool = False) -> logging.Logger:
    """Apply the ``log_file``/``log_level``/``log_console`` keys of a loaded config."""
    return configure_logging(
        log_file=config.get("log_file", "logs/app.log"),
        level=config.get("log_level", logging.INFO),
        enable_console=bool(config.get("log_console", False)),
        force=force,
    )
