"""pr_bench.pipeline.pipeline

A *single, high-level* object that represents this repo's capabilities.

Callers (CLI, CI scripts, tests) go through :class:`PRBenchPipeline` instead of
wiring the orchestrator, planner and runner themselves:

- ``run(...)``: the PR benchmark comparison (no-op outside PR builds)
- ``compare(...)``: comparison-only over existing artifacts

The facade is intentionally thin: it delegates to :mod:`pr_bench.pipeline.orchestrator`.
Swapping the functions is how tests drive the CLI without running tools.
"""

from __future__ import annotations

from collections.abc import Callable

from pr_bench.pipeline.execution.model import RunResult
from pr_bench.pipeline.orchestrator import CompareRequest, RunRequest, run_compare, run_pr_benchmark


class PRBenchPipeline:
    """High-level facade over the pipeline.

    Build it via :func:`pr_bench.pipeline.wiring.build_pipeline`.
    """

    def __init__(
        self,
        *,
        run_fn: Callable[[RunRequest], RunResult] = run_pr_benchmark,
        compare_fn: Callable[[CompareRequest], RunResult] = run_compare,
    ) -> None:
        self._run_fn = run_fn
        self._compare_fn = compare_fn

    def run(self, req: RunRequest) -> int:
        """Run the PR benchmark comparison and return the process exit code."""
        return int(self._run_fn(req).exit_code)

    def compare(self, req: CompareRequest) -> int:
        """Compare two existing artifacts and return the process exit code."""
        return int(self._compare_fn(req).exit_code)
