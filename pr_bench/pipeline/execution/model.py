"""pr_bench.pipeline.execution.model

Shared data structures for a PR benchmark run.

The execution layer is split into:

* :mod:`pr_bench.pipeline.execution.plan`   – pure planning (what to run)
* :mod:`pr_bench.pipeline.execution.runner` – subprocess execution (side effects)
* :mod:`pr_bench.pipeline.execution.record` – optional JSON receipt (side effects)

These dataclasses intentionally contain no side effects so they can be used
freely across the planner/runner/recorder.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

ANNOUNCE = "announce"
COMMAND = "command"


def now_iso() -> str:
    """Return current UTC time as ISO-8601 string."""

    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class Step:
    """One planned unit of a run: an announcement line or a command."""

    name: str
    kind: str
    message: Optional[str] = None
    cmd: List[str] = field(default_factory=list)
    cwd: Optional[Path] = None
    # stdout redirect target (benchmark artifacts)
    stdout_path: Optional[Path] = None

    @property
    def command_str(self) -> str:
        s = " ".join(self.cmd)
        if self.stdout_path is not None:
            s += f" > {self.stdout_path}"
        return s

    def describe(self) -> str:
        if self.kind == ANNOUNCE:
            return f"echo {self.message!r}"
        if self.cwd is not None:
            return f"(cd {self.cwd} && {self.command_str})"
        return self.command_str


@dataclass(frozen=True)
class StepExecution:
    """The result of executing a step."""

    step: Step
    exit_code: int
    started: str
    finished: str
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.step.name,
            "kind": self.step.kind,
            "command": list(self.step.cmd) or None,
            "cwd": str(self.step.cwd) if self.step.cwd else None,
            "stdout_path": str(self.step.stdout_path) if self.step.stdout_path else None,
            "message": self.step.message,
            "exit_code": self.exit_code,
            "started": self.started,
            "finished": self.finished,
            "error": self.error,
        }


@dataclass(frozen=True)
class RunResult:
    """What a run did. ``exit_code`` is what the CLI exits with."""

    exit_code: int
    skipped: bool = False
    executions: List[StepExecution] = field(default_factory=list)
    failed_step: Optional[str] = None
    artifacts: List[Path] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.exit_code == 0
