#!/usr/bin/env python3
"""
Checkout-local launcher for the PR benchmark runner (same as ``pr-bench``).

Usage (from the root of the checkout being benchmarked):
  python path/to/bench_cli.py
  python path/to/bench_cli.py --pr 123 --branch main --dry-run
"""

from pr_bench.cli.main import main


if __name__ == "__main__":
    main()
