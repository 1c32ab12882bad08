"""pr_bench.pipeline.execution.record

Filesystem side effects for run receipts.

Rule
----
Only this module writes receipts. Receipts are opt-in (``--receipt``) so a
default PR run writes nothing besides the two benchmark artifacts.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, Optional

from pr_bench.pipeline.models import BenchSettings, BuildContext
from pr_bench.tools.io import write_json

from .model import RunResult, now_iso


def build_receipt(
    *,
    ctx: BuildContext,
    settings: BenchSettings,
    result: RunResult,
    mode: str,
    git_branch: Optional[str] = None,
    git_commit: Optional[str] = None,
    dry_run: bool = False,
) -> Dict[str, Any]:
    """Assemble the receipt payload (pure)."""

    return {
        "mode": mode,
        "written_at": now_iso(),
        "dry_run": bool(dry_run),
        "build": {
            "pull_request": ctx.pull_request,
            "branch": ctx.branch,
            "is_pull_request": ctx.is_pull_request,
        },
        "git": {
            "branch_before": git_branch,
            "commit_before": git_commit,
        },
        "settings": settings.to_dict(),
        "exit_code": result.exit_code,
        "skipped": result.skipped,
        "failed_step": result.failed_step,
        "artifacts": [str(p) for p in result.artifacts],
        "steps": [e.to_dict() for e in result.executions],
        "python_executable": sys.executable,
        "argv": list(sys.argv),
    }


def write_receipt(path: Path, receipt: Dict[str, Any]) -> Path:
    out = Path(path).expanduser().resolve()
    write_json(out, receipt)
    return out
