"""pr_bench.tools.core_cmd

Command-execution helper shared by the benchmark runner and git helpers.

This module deliberately avoids tool-specific knowledge. :func:`run_cmd` runs
subprocesses (no shell=True), either capturing output, passing it through to
the build log, or redirecting stdout into a file.

Exit codes follow what a POSIX shell reports for the same failure, so a CI
log reads the same as the equivalent ``cmd > file && ...`` chain.
"""

from __future__ import annotations

import os
import subprocess
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional


EXIT_GENERAL = 1  # failed redirect or cd
EXIT_TIMEOUT = 124
EXIT_CANNOT_EXECUTE = 126
EXIT_NOT_FOUND = 127
EXIT_SIGNAL_BASE = 128


@dataclass(frozen=True)
class CmdResult:
    exit_code: int
    elapsed_seconds: float
    command_str: str
    stdout: str
    stderr: str
    error: Optional[str] = None


def shell_exit_code(returncode: int) -> int:
    """Map a ``subprocess`` return code to a shell exit status.

    A child killed by signal N is reported by Python as ``-N``; shells report
    ``128 + N`` (SIGKILL -> 137).
    """
    return EXIT_SIGNAL_BASE - returncode if returncode < 0 else returncode


def _failed(exit_code: int, t0: float, command_str: str, error: str) -> CmdResult:
    return CmdResult(
        exit_code=exit_code,
        elapsed_seconds=time.time() - t0,
        command_str=command_str,
        stdout="",
        stderr="",
        error=error,
    )


def run_cmd(
    cmd: List[str],
    *,
    cwd: Optional[Path] = None,
    timeout_seconds: int = 0,
    env: Optional[Dict[str, str]] = None,
    stdout_path: Optional[Path] = None,
    capture: bool = True,
    print_stderr: bool = True,
) -> CmdResult:
    """Run a subprocess (no ``shell=True``).

    Output handling:

    * ``stdout_path`` set: stdout is written to that file (created or
      truncated before the process starts, like a shell ``>`` redirect);
      stderr passes through.
    * ``capture=True``: stdout/stderr are captured and returned.
    * ``capture=False``: both streams pass through to the parent process.

    Never raises on process failures; those are reported through
    ``exit_code`` and ``error``:

    * missing ``cwd`` or unwritable ``stdout_path`` -> 1 (nothing is started)
    * executable not found -> 127, not executable -> 126
    * timeout -> 124, killed by signal N -> 128 + N
    """
    t0 = time.time()
    command_str = " ".join(cmd)

    # If env is provided, merge it onto the current process environment.
    env2 = None
    if env is not None:
        env2 = os.environ.copy()
        env2.update(env)

    if cwd is not None and not Path(cwd).is_dir():
        return _failed(EXIT_GENERAL, t0, command_str, f"working directory not found: {cwd}")

    out_fh = None
    if stdout_path is not None:
        stdout_path = Path(stdout_path)
        try:
            stdout_path.parent.mkdir(parents=True, exist_ok=True)
            out_fh = stdout_path.open("w", encoding="utf-8")
        except OSError as e:
            return _failed(EXIT_GENERAL, t0, command_str, f"cannot write {stdout_path}: {e}")

    timeout = timeout_seconds if timeout_seconds and timeout_seconds > 0 else None
    kwargs: Dict[str, object] = {}
    if out_fh is not None:
        kwargs["stdout"] = out_fh
    elif capture:
        kwargs["capture_output"] = True

    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            text=True,
            timeout=timeout,
            env=env2,
            **kwargs,
        )
    except FileNotFoundError as e:
        return _failed(EXIT_NOT_FOUND, t0, command_str, f"command not found: {e}")
    except PermissionError as e:
        return _failed(EXIT_CANNOT_EXECUTE, t0, command_str, f"cannot execute: {e}")
    except subprocess.TimeoutExpired:
        return _failed(EXIT_TIMEOUT, t0, command_str, f"timed out after {timeout_seconds}s")
    finally:
        if out_fh is not None:
            out_fh.close()
    elapsed = time.time() - t0

    out = proc.stdout if isinstance(proc.stdout, str) else ""
    err = proc.stderr if isinstance(proc.stderr, str) else ""

    # Many tools write progress to stderr even on success.
    if print_stderr and err:
        print(err, file=sys.stderr)

    exit_code = shell_exit_code(proc.returncode)
    return CmdResult(
        exit_code=exit_code,
        elapsed_seconds=elapsed,
        command_str=command_str,
        stdout=out,
        stderr=err,
        error=f"killed by signal {-proc.returncode}" if proc.returncode < 0 else None,
    )
