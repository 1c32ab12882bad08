from __future__ import annotations

import argparse
import logging

from pr_bench.cli.common import receipt_path, resolve_repo_root, resolve_settings
from pr_bench.pipeline.ci_context import is_sentinel_flag, read_build_context
from pr_bench.pipeline.models import BenchSettings, ConfigError
from pr_bench.pipeline.orchestrator import RunRequest
from pr_bench.pipeline.pipeline import PRBenchPipeline

logger = logging.getLogger(__name__)


def run_pr_mode(args: argparse.Namespace, pipeline: PRBenchPipeline) -> int:
    try:
        settings = resolve_settings(args)
    except ConfigError as e:
        # A push build never reads the config, so a broken one must not fail it.
        if is_sentinel_flag(BenchSettings(repo_root=resolve_repo_root(args)), pr=args.pr):
            logger.warning("not a pull request build; ignoring invalid configuration: %s", e)
            return 0
        raise

    ctx = read_build_context(settings, pr=args.pr, branch=args.branch)

    if ctx.is_pull_request and args.dry_run:
        print("\nPR benchmark (dry-run)")
        print(f"  Build   : {ctx.describe()}")
        print(f"  Output  : {settings.benches_path}")

    req = RunRequest(
        context=ctx,
        settings=settings,
        dry_run=bool(args.dry_run),
        receipt_path=receipt_path(args),
    )
    return int(pipeline.run(req))
