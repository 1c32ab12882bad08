# pipeline/core.py
from __future__ import annotations

from pathlib import Path
from typing import List

from pr_bench.tools.core_root import ROOT_DIR

# Travis CI names. Other CI systems can remap these via config.
DEFAULT_PR_ENV_VAR = "TRAVIS_PULL_REQUEST"
DEFAULT_BRANCH_ENV_VAR = "TRAVIS_BRANCH"
NOT_A_PR = "false"

DEFAULT_BENCH_CMD: List[str] = ["cargo", "bench"]
DEFAULT_COMPARE_CMD: List[str] = ["cargo", "benchcmp"]
DEFAULT_GIT = "git"
DEFAULT_REMOTE = "origin"
DEFAULT_BENCHES_DIR = "benches"
DEFAULT_CONFIG_NAME = "pr_bench.yml"

PR_ARTIFACT_PREFIX = "PR_"


def pr_artifact_name(pr: str) -> str:
    """Artifact file name for the PR benchmark run (e.g. ``PR_123``)."""
    return f"{PR_ARTIFACT_PREFIX}{pr}"


def branch_artifact_name(branch: str) -> str:
    """Artifact file name for the target-branch benchmark run.

    The branch name is used verbatim, so ``feature/x`` lands in a subdirectory.
    """
    return branch


def resolve_benches_dir(benches_dir: str | Path, repo_root: Path = ROOT_DIR) -> Path:
    """Anchor a relative benches dir under the repository root."""
    p = Path(benches_dir).expanduser()
    return p if p.is_absolute() else (Path(repo_root) / p)


def build_compare_command(compare_cmd: List[str], *, baseline: str, candidate: str) -> List[str]:
    """Comparison command: baseline artifact first, candidate second."""
    return [*compare_cmd, baseline, candidate]
