"""
Package-level logging configuration.

* Rich console output (colourised, nicely formatted).
* Rotating log file ``logrando.log`` inside ``$LOGRANDO_LOG_DIR`` when set,
  else the configured log directory, else the package-local ``logs/``.
* Optional plain-text mirror controlled via ``--save-logfile`` on the CLI.

The public helper :func:`setup_logging` wires everything and should be the
sole entry-point used by the CLI.
"""

from __future__ import annotations

import atexit
import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional

import structlog
from rich.logging import RichHandler
from structlog.dev import ConsoleRenderer as StructlogConsoleRenderer
from structlog.stdlib import LoggerFactory

__all__ = ["setup_logging", "log_file_path"]

LOG_FILE_NAME = "logrando.log"


# --------------------------------------------------------------------------- #
# Internal helpers – file-based handlers                                      #
# --------------------------------------------------------------------------- #
def log_file_path(log_dir: Path | None = None) -> Path:
    """Return the rotating log file location for *log_dir* (see module doc)."""
    env_dir = os.environ.get("LOGRANDO_LOG_DIR")
    if env_dir:
        logdir = Path(env_dir).expanduser()
    elif log_dir is not None:
        logdir = Path(log_dir).expanduser()
    else:
        logdir = Path(__file__).resolve().parents[1] / "logs"
    return logdir / LOG_FILE_NAME


def _rotating_file_handler(log_dir: Path | None, level: int) -> logging.Handler:
    """Return a rotating file handler writing to :func:`log_file_path`."""
    path = log_file_path(log_dir)
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=5_000_000,  # ~5 MB before rollover
        backupCount=3,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    )
    return handler


def _plain_text_file_handler(
    path: Optional[Path], level: int
) -> logging.Handler | None:
    """Return a plain-text file handler or *None* when *path* is *None*."""
    if path is None:
        return None

    path = path.expanduser().resolve()
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(path, encoding="utf-8", mode="a")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    # Ensure the buffer is flushed on interpreter exit.
    atexit.register(handler.close)
    return handler


# --------------------------------------------------------------------------- #
# Public API – main entry-point                                               #
# --------------------------------------------------------------------------- #
def setup_logging(
    *,
    log_dir: Path | None = None,
    verbose: bool = False,
    debug: bool = False,
    extra_text_log: Optional[Path] = None,
) -> None:
    """Configure rich console logging and file mirrors.

    Args:
        log_dir: Directory for the rotating log file (``$LOGRANDO_LOG_DIR``
            takes precedence).
        verbose: Emit INFO-level messages to the console.
        debug: Emit DEBUG-level messages plus rich tracebacks.
        extra_text_log: Optional path for a plain-text mirror of console output.
    """
    console_lvl = (
        logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    )
    file_lvl = logging.DEBUG if debug else logging.INFO

    handlers: list[logging.Handler] = [
        RichHandler(
            level=console_lvl,
            rich_tracebacks=debug,
            tracebacks_show_locals=False,
            markup=False,
        ),
        _rotating_file_handler(log_dir, file_lvl),
    ]

    txt_handler = _plain_text_file_handler(extra_text_log, console_lvl)
    if txt_handler:
        handlers.append(txt_handler)

    # Root logger stays at DEBUG; handlers filter.  ``force`` lets repeated
    # CLI invocations inside one process (tests) swap handlers cleanly.
    logging.basicConfig(
        level=logging.DEBUG,
        handlers=handlers,
        format="%(message)s",
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            (
                StructlogConsoleRenderer(colors=False)
                if verbose or debug
                else structlog.processors.JSONRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(file_lvl),
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=False,
    )
