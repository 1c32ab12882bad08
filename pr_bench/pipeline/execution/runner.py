"""pr_bench.pipeline.execution.runner

Step execution for :mod:`pr_bench.pipeline.orchestrator`.

Rule
----
Only this module should start benchmark/git/compare processes.
"""

from __future__ import annotations

import logging
import sys

from pr_bench.tools.core_cmd import run_cmd

from .model import ANNOUNCE, Step, StepExecution, now_iso

logger = logging.getLogger(__name__)


def run_step(step: Step, *, dry_run: bool = False, timeout_seconds: int = 0) -> StepExecution:
    """Execute one step.

    Announcements print a line to stdout and always succeed. Commands run with
    their output passed through to the build log (or redirected into the
    step's artifact file) and report their exit code.
    """

    started = now_iso()

    if step.kind == ANNOUNCE:
        print(step.message, flush=True)
        return StepExecution(step=step, exit_code=0, started=started, finished=now_iso())

    if dry_run:
        print(f"  Command : {step.describe()}")
        print("  (dry-run: not executing)")
        return StepExecution(step=step, exit_code=0, started=started, finished=now_iso())

    logger.info("running %s: %s", step.name, step.describe())
    # Keep our own lines ahead of the child's output in the CI log.
    sys.stdout.flush()
    sys.stderr.flush()

    res = run_cmd(
        list(step.cmd),
        cwd=step.cwd,
        timeout_seconds=timeout_seconds,
        stdout_path=step.stdout_path,
        capture=False,
    )
    if res.error:
        logger.error("%s: %s (%s)", step.name, res.error, res.command_str)
    elif res.exit_code != 0:
        logger.error("%s exited with code %d", step.name, res.exit_code)
    else:
        logger.debug("%s finished in %.2fs", step.name, res.elapsed_seconds)

    return StepExecution(
        step=step,
        exit_code=int(res.exit_code),
        started=started,
        finished=now_iso(),
        error=res.error,
    )
