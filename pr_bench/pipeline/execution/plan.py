"""pr_bench.pipeline.execution.plan

Pure planning for :mod:`pr_bench.pipeline.orchestrator`.

Design rules
------------
This module should stay *pure*:
* no subprocess execution
* no filesystem writes
* no environment reads (the build context is resolved by the caller)
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from pr_bench.pipeline.core import branch_artifact_name, build_compare_command, pr_artifact_name
from pr_bench.pipeline.models import BenchSettings, BuildContext
from pr_bench.tools.core_git import checkout_cmd, fetch_cmd, set_branches_cmd

from .model import ANNOUNCE, COMMAND, Step


def announce(name: str, message: str) -> Step:
    return Step(name=name, kind=ANNOUNCE, message=message)


def bench_step(name: str, settings: BenchSettings, artifact: Path) -> Step:
    return Step(
        name=name,
        kind=COMMAND,
        cmd=list(settings.bench_cmd),
        cwd=Path(settings.repo_root),
        stdout_path=artifact,
    )


def compare_step(settings: BenchSettings, *, baseline: str, candidate: str) -> Step:
    """Comparison runs from inside the benches dir so it sees bare artifact names."""
    return Step(
        name="compare",
        kind=COMMAND,
        cmd=build_compare_command(settings.compare_cmd, baseline=baseline, candidate=candidate),
        cwd=settings.benches_path,
    )


def plan_pr_benchmark(ctx: BuildContext, settings: BenchSettings) -> List[Step]:
    """Ordered steps for a PR build. Empty for a non-PR build."""

    if not ctx.is_pull_request:
        return []

    pr = str(ctx.pr_id)
    branch = str(ctx.branch)
    pr_name = pr_artifact_name(pr)
    branch_name = branch_artifact_name(branch)
    benches = settings.benches_path
    root = Path(settings.repo_root)
    git = settings.git_bin

    return [
        announce("announce_pr", f"Benchmarking PR #{pr}..."),
        bench_step("bench_pr", settings, benches / pr_name),
        announce("announce_checkout", f"Checking out {branch}..."),
        Step(name="git_set_branches", kind=COMMAND, cmd=set_branches_cmd(settings.remote, branch, git_bin=git), cwd=root),
        Step(name="git_fetch", kind=COMMAND, cmd=fetch_cmd(settings.remote, branch, git_bin=git), cwd=root),
        Step(name="git_checkout", kind=COMMAND, cmd=checkout_cmd(branch, git_bin=git), cwd=root),
        announce("announce_branch", f"Benchmarking {branch}"),
        bench_step("bench_branch", settings, benches / branch_name),
        announce("announce_compare", "Performance comparison:"),
        compare_step(settings, baseline=branch_name, candidate=pr_name),
    ]


def plan_compare(settings: BenchSettings, *, baseline: str, candidate: str) -> List[Step]:
    """Steps for comparison-only mode over existing artifacts."""

    return [
        announce("announce_compare", "Performance comparison:"),
        compare_step(settings, baseline=baseline, candidate=candidate),
    ]
