from __future__ import annotations

import argparse

from pr_bench.pipeline.core import DEFAULT_BENCHES_DIR, DEFAULT_CONFIG_NAME


def add_base_args(parser: argparse.ArgumentParser) -> None:
    """Register CLI flags that are shared across modes.

    This includes:
    - mode selection
    - build context overrides
    - tool/config overrides
    - execution knobs
    """

    parser.add_argument(
        "--mode",
        choices=["run", "compare"],
        default="run",
        help=(
            "run = benchmark the PR and its target branch, then compare (default); "
            "compare = only re-run the comparison over existing artifacts"
        ),
    )

    # Build context (defaults come from the CI environment)
    parser.add_argument(
        "--pr",
        help="Pull request id (default: $TRAVIS_PULL_REQUEST; 'false' means not a PR build)",
    )
    parser.add_argument("--branch", help="Target branch (default: $TRAVIS_BRANCH)")

    # Configuration
    parser.add_argument(
        "--config",
        help=f"YAML config file (default: <repo_root>/{DEFAULT_CONFIG_NAME} if present, or $PR_BENCH_CONFIG)",
    )
    parser.add_argument(
        "--repo-root",
        default=None,
        help="Repository to benchmark (default: $PR_BENCH_ROOT, else the current directory)",
    )
    parser.add_argument("--bench-cmd", help="Benchmark command (default: 'cargo bench')")
    parser.add_argument("--compare-cmd", help="Comparison command (default: 'cargo benchcmp')")
    parser.add_argument("--remote", help="Git remote to fetch the target branch from (default: origin)")
    parser.add_argument(
        "--benches-dir",
        help=f"Directory for benchmark artifacts, relative to the repo root (default: {DEFAULT_BENCHES_DIR})",
    )
    parser.add_argument(
        "--timeout-seconds",
        type=int,
        default=None,
        help="Per-command timeout; 0 disables (default: 0)",
    )

    # Compare mode
    parser.add_argument("--baseline", help="(compare mode) Baseline artifact name in the benches dir")
    parser.add_argument("--candidate", help="(compare mode) Candidate artifact name in the benches dir")

    # Execution
    parser.add_argument("--dry-run", action="store_true", help="Print steps but do not execute")
    parser.add_argument("--receipt", help="Write a JSON run receipt to this path (off by default)")
    parser.add_argument(
        "--log-level",
        help="Diagnostics log level (default: $PR_BENCH_LOG_LEVEL or INFO)",
    )
