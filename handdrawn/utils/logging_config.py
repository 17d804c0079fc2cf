"""Logging setup shared by library users, scripts and tests.

The library itself only creates module loggers (``logging.getLogger(__name__)``)
and never installs handlers.  Applications that want formatted output call
``setup_logging`` once.

Public API:
    setup_logging(log_level="DEBUG", log_file="perturb.log", context={"job": "a6"})
    get_logger(name)
    push_context(shape="Circle", seed=42)
    pop_context(keys=["seed"])
    log_context(batch=3)   # context manager

Format examples:
    Human: 2026-10-16T13:45:12.345Z | DEBUG    | shape=Circle | polar, 100 samples
    JSON: {"t":"2026-10-16T13:45:12.345+00:00","lvl":"DEBUG","shape":"Circle","msg":"..."}

Context uses contextvars, so fields pushed inside a worker thread stay in
that thread.  Repeated setup_logging() calls replace handlers instead of
stacking them.
"""

import contextlib
import contextvars
import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional


_context_var: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar(
    'handdrawn_logging_context', default={}
)

_installed_handlers: List[logging.Handler] = []


class ContextFormatter(logging.Formatter):
    """Formatter that appends contextual fields to each record.

    Supports a human-readable line (optionally colourised) and a
    single-line JSON mode for machine ingestion.
    """

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, fmt_mode: str = "human", use_color: bool = True):
        super().__init__()
        if fmt_mode not in ("human", "json"):
            raise ValueError(f"Unknown format mode: {fmt_mode}. Use 'human' or 'json'.")
        self.fmt_mode = fmt_mode
        self.use_color = use_color and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        context = _context_var.get()
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)

        if self.fmt_mode == "json":
            payload = {
                't': ts.isoformat(),
                'lvl': record.levelname,
                'name': record.name,
                'pid': os.getpid(),
                **context,
                'msg': record.getMessage(),
            }
            if record.exc_info:
                payload['exc'] = self.formatException(record.exc_info)
            return json.dumps(payload, default=str)

        level = f"{record.levelname:8s}"
        if self.use_color:
            level = f"{self.COLORS.get(record.levelname, '')}{level}{self.RESET}"

        parts = [ts.strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3] + 'Z', level]
        if context:
            parts.append(' '.join(f"{k}={v}" for k, v in context.items()))
        parts.append(record.getMessage())

        line = ' | '.join(parts)
        if record.exc_info:
            line += '\n' + self.formatException(record.exc_info)
        return line


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    *,
    json_format: bool = False,
    color: bool = True,
    to_stderr: bool = True,
    rotate: Optional[Dict[str, Any]] = None,
    context: Optional[Dict[str, Any]] = None,
    logger_name: str = "handdrawn",
) -> List[logging.Handler]:
    """Attach formatted handlers to the ``handdrawn`` logger (idempotent).

    Parameters
    ----------
    log_level : str
        "DEBUG", "INFO", "WARNING", "ERROR" or "CRITICAL"
    log_file : str, optional
        Also write to this file (parent directories are created)
    json_format : bool
        JSON lines instead of human-readable lines, default False
    color : bool
        ANSI colours on the console when stderr is a TTY, default True
    to_stderr : bool
        Log to stderr, default True
    rotate : dict, optional
        File rotation:
        - {"mode": "size", "max_bytes": 10_000_000, "backup_count": 5}
        - {"mode": "time", "when": "D", "interval": 1, "backup_count": 7}
    context : dict, optional
        Initial contextual fields
    logger_name : str
        Logger to configure, default the package logger

    Returns
    -------
    list[logging.Handler]
        Handlers that were installed

    Raises
    ------
    ValueError
        On an unknown log level or rotation mode
    """
    level = getattr(logging, log_level.upper(), None)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    target = logging.getLogger(logger_name)
    for handler in _installed_handlers:
        target.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    target.setLevel(level)

    if to_stderr:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(ContextFormatter("json" if json_format else "human", color))
        _installed_handlers.append(console)

    if log_file:
        _installed_handlers.append(_create_file_handler(log_file, rotate, json_format))

    for handler in _installed_handlers:
        target.addHandler(handler)

    if context:
        push_context(**context)

    return list(_installed_handlers)


def _create_file_handler(
    log_file: str,
    rotate: Optional[Dict[str, Any]],
    json_format: bool,
) -> logging.Handler:
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    if rotate:
        mode = rotate.get('mode', 'size')
        if mode == 'size':
            handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=rotate.get('max_bytes', 10_000_000),
                backupCount=rotate.get('backup_count', 5),
            )
        elif mode == 'time':
            handler = logging.handlers.TimedRotatingFileHandler(
                log_path,
                when=rotate.get('when', 'D'),
                interval=rotate.get('interval', 1),
                backupCount=rotate.get('backup_count', 7),
            )
        else:
            raise ValueError(f"Unknown rotation mode: {mode}. Use 'size' or 'time'.")
    else:
        handler = logging.FileHandler(log_path)

    handler.setFormatter(ContextFormatter("json" if json_format else "human", use_color=False))
    return handler


def get_logger(name: str) -> logging.Logger:
    """Get logger by name (typically ``__name__``)."""
    return logging.getLogger(name)


def set_level(level: str, logger_name: str = "handdrawn") -> None:
    """Change the package logger level at runtime."""
    logging.getLogger(logger_name).setLevel(getattr(logging, level.upper()))


def push_context(**kwargs: Any) -> None:
    """Add contextual fields to all subsequent records in this context.

    Examples
    --------
    >>> push_context(shape="Polygon", seed=7)
    >>> logger.debug("polar")  # → "... | shape=Polygon seed=7 | polar"
    """
    _context_var.set({**_context_var.get(), **kwargs})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Remove the given contextual fields, or all of them when *keys* is None."""
    if keys is None:
        _context_var.set({})
        return
    current = dict(_context_var.get())
    for key in keys:
        current.pop(key, None)
    _context_var.set(current)


def get_context() -> Dict[str, Any]:
    """Snapshot of the current contextual fields."""
    return dict(_context_var.get())


@contextlib.contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Temporarily add contextual fields; restores the previous set on exit."""
    token = _context_var.set({**_context_var.get(), **kwargs})
    try:
        yield
    finally:
        _context_var.reset(token)
