from __future__ import annotations

import argparse

from pr_bench.cli.common import receipt_path, resolve_settings
from pr_bench.pipeline.orchestrator import CompareRequest
from pr_bench.pipeline.pipeline import PRBenchPipeline


def run_compare_mode(args: argparse.Namespace, pipeline: PRBenchPipeline) -> int:
    if not args.baseline or not args.candidate:
        raise SystemExit("compare mode requires --baseline and --candidate (artifact names in the benches dir).")

    req = CompareRequest(
        settings=resolve_settings(args),
        baseline=str(args.baseline),
        candidate=str(args.candidate),
        dry_run=bool(args.dry_run),
        receipt_path=receipt_path(args),
    )
    return int(pipeline.compare(req))
