"""pr_bench.pipeline.models

Lightweight data structures used across the pipeline.

These dataclasses provide a small, explicit vocabulary for:
- which build we are running in (BuildContext)
- which tools we invoke and where results go (BenchSettings)

They are frozen: both are resolved once at startup and never change for the
rest of the run.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from pr_bench.pipeline.core import (
    DEFAULT_BENCH_CMD,
    DEFAULT_BENCHES_DIR,
    DEFAULT_BRANCH_ENV_VAR,
    DEFAULT_COMPARE_CMD,
    DEFAULT_GIT,
    DEFAULT_PR_ENV_VAR,
    DEFAULT_REMOTE,
    NOT_A_PR,
    ROOT_DIR,
    resolve_benches_dir,
)


class ConfigError(ValueError):
    """Invalid configuration or build context. Raised before any side effect."""


@dataclass(frozen=True)
class BuildContext:
    """The CI build being run.

    ``pull_request`` is the raw build-context flag. When it equals the
    sentinel the build is not a PR and ``branch`` may be None.
    """

    pull_request: str
    branch: Optional[str] = None
    sentinel: str = NOT_A_PR

    @property
    def is_pull_request(self) -> bool:
        return self.pull_request != self.sentinel

    @property
    def pr_id(self) -> Optional[str]:
        return self.pull_request if self.is_pull_request else None

    def describe(self) -> str:
        if not self.is_pull_request:
            return "push build (not a pull request)"
        return f"PR #{self.pull_request} -> {self.branch}"


@dataclass(frozen=True)
class BenchSettings:
    """Which commands to run and where artifacts live."""

    bench_cmd: List[str] = field(default_factory=lambda: list(DEFAULT_BENCH_CMD))
    compare_cmd: List[str] = field(default_factory=lambda: list(DEFAULT_COMPARE_CMD))
    git_bin: str = DEFAULT_GIT
    remote: str = DEFAULT_REMOTE
    benches_dir: str = DEFAULT_BENCHES_DIR
    pr_env_var: str = DEFAULT_PR_ENV_VAR
    branch_env_var: str = DEFAULT_BRANCH_ENV_VAR
    sentinel: str = NOT_A_PR
    repo_root: Path = ROOT_DIR
    timeout_seconds: int = 0

    @property
    def benches_path(self) -> Path:
        return resolve_benches_dir(self.benches_dir, self.repo_root)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["repo_root"] = str(self.repo_root)
        return d
