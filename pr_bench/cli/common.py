"""pr_bench.cli.common

Small shared helpers for CLI command modules.

Both modes resolve settings the same way; keeping that here avoids subtle
drift between ``run`` and ``compare``.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict, Optional

from pr_bench.pipeline.models import BenchSettings
from pr_bench.pipeline.settings import load_settings
from pr_bench.tools.core_root import find_repo_root


def settings_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """CLI flags that override config/env values (None = not given)."""
    return {
        "bench_cmd": args.bench_cmd,
        "compare_cmd": args.compare_cmd,
        "remote": args.remote,
        "benches_dir": args.benches_dir,
        "timeout_seconds": args.timeout_seconds,
    }


def resolve_repo_root(args: argparse.Namespace) -> Path:
    """``--repo-root``, else ``$PR_BENCH_ROOT``, else the current directory."""
    if args.repo_root:
        return Path(args.repo_root).expanduser().resolve()
    return find_repo_root()


def resolve_settings(args: argparse.Namespace) -> BenchSettings:
    return load_settings(
        config_path=args.config,
        overrides=settings_overrides(args),
        repo_root=resolve_repo_root(args),
    )


def receipt_path(args: argparse.Namespace) -> Optional[Path]:
    return Path(args.receipt) if args.receipt else None
