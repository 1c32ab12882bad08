from __future__ import annotations

import argparse
import sys

from pr_bench.cli.commands.compare import run_compare_mode
from pr_bench.cli.commands.run import run_pr_mode
from pr_bench.pipeline.models import ConfigError
from pr_bench.pipeline.pipeline import PRBenchPipeline

EXIT_CONFIG_ERROR = 2


def dispatch(args: argparse.Namespace, pipeline: PRBenchPipeline) -> int:
    """Route to the selected mode; configuration errors exit 2 with a message."""
    try:
        if args.mode == "compare":
            return int(run_compare_mode(args, pipeline))
        return int(run_pr_mode(args, pipeline))
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
