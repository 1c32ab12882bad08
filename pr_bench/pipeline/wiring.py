"""pr_bench.pipeline.wiring

This module is the **composition root** for the Python runtime.

"Composition root" means: the single place where we *assemble* the running
application from its building blocks:

- load configuration / environment variables (``.env`` via python-dotenv)
- configure logging
- build the high-level pipeline facade object

Keeping this wiring in one place prevents configuration and dependency setup
from being duplicated across entrypoints (CLI, CI scripts, tests).
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from pr_bench.pipeline.pipeline import PRBenchPipeline
from pr_bench.tools.core_root import find_repo_root


ENV_FILE = ".env"
LOG_LEVEL_ENV_VAR = "PR_BENCH_LOG_LEVEL"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def load_env(dotenv_path: Optional[Path] = None) -> bool:
    """Load ``.env`` (default: at the repo root) so local runs behave like CI runs.

    Variables already set in the environment (i.e. provided by CI) win.
    """
    if dotenv_path is None:
        dotenv_path = find_repo_root() / ENV_FILE
    if not dotenv_path.exists():
        return False
    return bool(load_dotenv(dotenv_path, override=False))


def configure_logging(level: Optional[str] = None) -> None:
    """Send diagnostics to stderr; stdout stays the build log proper."""
    name = (level or os.environ.get(LOG_LEVEL_ENV_VAR) or "INFO").upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        raise SystemExit(f"Invalid log level: {name}")

    root = logging.getLogger()
    root.setLevel(numeric)
    if not any(getattr(h, "_pr_bench", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._pr_bench = True  # type: ignore[attr-defined]
        root.addHandler(handler)


def build_pipeline(*, load_dotenv_file: bool = True, log_level: Optional[str] = None) -> PRBenchPipeline:
    """Build the high-level pipeline facade.

    This is the place to swap implementations for tests (see
    :class:`~pr_bench.pipeline.pipeline.PRBenchPipeline` constructor hooks).
    """

    if load_dotenv_file:
        load_env()
    configure_logging(log_level)

    return PRBenchPipeline()
