"""pr_bench.tools.core_root

Shared *repository root* locator used by tools/* and pipeline/* modules.

The repository being benchmarked is the directory the runner is invoked from
(Travis runs ``after_script`` from the build directory), not wherever this
package happens to be installed. ``PR_BENCH_ROOT`` points the runner at a
different checkout.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

ROOT_ENV_VAR = "PR_BENCH_ROOT"


def find_repo_root(environ: Optional[Mapping[str, str]] = None) -> Path:
    """``$PR_BENCH_ROOT`` if set, else the current working directory."""
    env = os.environ if environ is None else environ
    explicit = env.get(ROOT_ENV_VAR)
    return Path(explicit).expanduser().resolve() if explicit else Path.cwd().resolve()


# Resolved at import time; entrypoints call find_repo_root() again after .env is loaded.
ROOT_DIR = find_repo_root()
