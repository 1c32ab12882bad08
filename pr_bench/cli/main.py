"""
CI helper: benchmark a pull request against its target branch.

In a PR build this runs the benchmark suite on the PR code, checks out the
target branch, runs the suite again, and prints a comparison of the two runs.
Outside a PR build it does nothing.

Run from the root of the checkout being benchmarked.

Usage (Travis ``after_script``):
  pr-bench

Local / other CI:
  pr-bench --pr 123 --branch main
  pr-bench --pr 123 --branch main --dry-run
  pr-bench --mode compare --baseline main --candidate PR_123
"""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from pr_bench.cli.args.base import add_base_args
from pr_bench.cli.dispatch import dispatch
from pr_bench.pipeline.wiring import build_pipeline


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pr-bench",
        description="Benchmark a pull request and its target branch, then compare the results.",
    )
    add_base_args(parser)
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    pipeline = build_pipeline(log_level=args.log_level)
    raise SystemExit(dispatch(args, pipeline))


if __name__ == "__main__":
    main()
