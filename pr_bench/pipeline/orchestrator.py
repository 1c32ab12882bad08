"""pr_bench.pipeline.orchestrator

High-level orchestration entrypoints for the PR benchmark pipeline.

Design principles
-----------------
- Keep the CLI thin: parse args + resolve settings/context + call these functions.
- Planning is pure (:mod:`pr_bench.pipeline.execution.plan`); process execution lives in
  :mod:`pr_bench.pipeline.execution.runner`.
- Fail fast: the first failing command ends the run with its exit code. Nothing
  is retried, cleaned up or rolled back (the checkout stays, artifacts stay).

This module is intentionally "boring": it wires together existing components.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from pr_bench.pipeline.execution.model import COMMAND, RunResult, Step, StepExecution
from pr_bench.pipeline.execution.plan import plan_compare, plan_pr_benchmark
from pr_bench.pipeline.execution.record import build_receipt, write_receipt
from pr_bench.pipeline.execution.runner import run_step
from pr_bench.pipeline.models import BenchSettings, BuildContext, ConfigError
from pr_bench.tools.core_git import get_git_branch, get_git_commit

logger = logging.getLogger(__name__)

StepRunner = Callable[..., StepExecution]


@dataclass(frozen=True)
class RunRequest:
    """Parameters for one PR benchmark run."""

    context: BuildContext
    settings: BenchSettings
    dry_run: bool = False
    receipt_path: Optional[Path] = None


@dataclass(frozen=True)
class CompareRequest:
    """Parameters for comparison-only mode."""

    settings: BenchSettings
    baseline: str
    candidate: str
    dry_run: bool = False
    receipt_path: Optional[Path] = None


def execute_steps(
    steps: Sequence[Step],
    *,
    step_runner: StepRunner = run_step,
    dry_run: bool = False,
    timeout_seconds: int = 0,
) -> RunResult:
    """Run steps in order, stopping at the first failing command."""

    executions: List[StepExecution] = []
    artifacts: List[Path] = []

    for step in steps:
        ex = step_runner(step, dry_run=dry_run, timeout_seconds=timeout_seconds)
        executions.append(ex)

        if step.stdout_path is not None and not dry_run:
            # A failed run still leaves its (possibly partial) artifact behind.
            artifacts.append(Path(step.stdout_path))

        if step.kind == COMMAND and not ex.ok:
            logger.error("aborting: step %r failed with exit code %d", step.name, ex.exit_code)
            return RunResult(
                exit_code=ex.exit_code,
                executions=executions,
                failed_step=step.name,
                artifacts=artifacts,
            )

    return RunResult(exit_code=0, executions=executions, artifacts=artifacts)


def _maybe_write_receipt(
    path: Optional[Path],
    *,
    mode: str,
    ctx: BuildContext,
    settings: BenchSettings,
    result: RunResult,
    git_branch: Optional[str],
    git_commit: Optional[str],
    dry_run: bool,
) -> None:
    if path is None:
        return
    receipt = build_receipt(
        ctx=ctx,
        settings=settings,
        result=result,
        mode=mode,
        git_branch=git_branch,
        git_commit=git_commit,
        dry_run=dry_run,
    )
    out = write_receipt(path, receipt)
    logger.info("receipt written to %s", out)


def run_pr_benchmark(req: RunRequest, *, step_runner: StepRunner = run_step) -> RunResult:
    """Benchmark the PR, check out the target branch, benchmark it, compare.

    A non-PR build is a successful no-op: nothing is executed or written
    (not even a receipt).
    """

    ctx = req.context
    settings = req.settings

    if not ctx.is_pull_request:
        logger.info("%s=%s: not a pull request build, nothing to benchmark", settings.pr_env_var, ctx.pull_request)
        return RunResult(exit_code=0, skipped=True)

    logger.info("benchmarking %s", ctx.describe())

    git_branch = git_commit = None
    if req.receipt_path is not None:
        # Provenance of the PR checkout, captured before we switch branches.
        git_branch = get_git_branch(settings.repo_root, git_bin=settings.git_bin)
        git_commit = get_git_commit(settings.repo_root, git_bin=settings.git_bin)

    steps = plan_pr_benchmark(ctx, settings)
    result = execute_steps(
        steps,
        step_runner=step_runner,
        dry_run=req.dry_run,
        timeout_seconds=settings.timeout_seconds,
    )

    _maybe_write_receipt(
        req.receipt_path,
        mode="run",
        ctx=ctx,
        settings=settings,
        result=result,
        git_branch=git_branch,
        git_commit=git_commit,
        dry_run=req.dry_run,
    )
    return result


def run_compare(req: CompareRequest, *, step_runner: StepRunner = run_step) -> RunResult:
    """Re-run only the comparison over two artifacts already in the benches dir."""

    settings = req.settings
    benches = settings.benches_path

    if not req.dry_run:
        missing = [name for name in (req.baseline, req.candidate) if not (benches / name).is_file()]
        if missing:
            raise ConfigError(f"Missing benchmark artifacts under {benches}: {', '.join(missing)}")

    steps = plan_compare(settings, baseline=req.baseline, candidate=req.candidate)
    result = execute_steps(
        steps,
        step_runner=step_runner,
        dry_run=req.dry_run,
        timeout_seconds=settings.timeout_seconds,
    )

    _maybe_write_receipt(
        req.receipt_path,
        mode="compare",
        ctx=BuildContext(pull_request=req.candidate, branch=req.baseline, sentinel=settings.sentinel),
        settings=settings,
        result=result,
        git_branch=None,
        git_commit=None,
        dry_run=req.dry_run,
    )
    return result
