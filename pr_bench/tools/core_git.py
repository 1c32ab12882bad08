"""pr_bench.tools.core_git

Git helpers.

These are used in two contexts:

1) Best-effort provenance for run receipts, via :func:`get_git_commit` and
   :func:`get_git_branch`. These never raise.
2) Switching the working tree to the PR's target branch, via
   :func:`set_branches_cmd`, :func:`fetch_cmd` and :func:`checkout_cmd`. These
   are *command builders*: the plan turns each into its own step, so a failing
   fetch/checkout aborts the run like any other step and the receipt names
   which one failed.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from .core_cmd import run_cmd


def get_git_commit(repo_path: Path, *, git_bin: str = "git") -> Optional[str]:
    """Return the current commit SHA for the repo at repo_path.

    Returns None if repo_path is not a git repo or git is unavailable.
    """
    res = run_cmd(
        [git_bin, "-C", str(repo_path), "rev-parse", "HEAD"],
        timeout_seconds=20,
        print_stderr=False,
    )
    sha = (res.stdout or "").strip()
    return sha if res.exit_code == 0 and sha else None


def get_git_branch(repo_path: Path, *, git_bin: str = "git") -> Optional[str]:
    """Return the current branch name for the repo at repo_path.

    Returns None if the repo is detached (HEAD) or git is unavailable.
    Travis checks PR builds out detached, so None is the common case there.
    """
    res = run_cmd(
        [git_bin, "-C", str(repo_path), "rev-parse", "--abbrev-ref", "HEAD"],
        timeout_seconds=20,
        print_stderr=False,
    )
    b = (res.stdout or "").strip()
    if res.exit_code != 0 or not b or b == "HEAD":
        return None
    return b


def set_branches_cmd(remote: str, branch: str, *, git_bin: str = "git") -> List[str]:
    """Restrict the remote's tracked branches to ``branch``.

    CI clones are usually single-branch; without this the fetch below would not
    create ``refs/remotes/<remote>/<branch>`` and the checkout could not find it.
    """
    return [git_bin, "remote", "set-branches", remote, branch]


def fetch_cmd(remote: str, branch: str, *, git_bin: str = "git") -> List[str]:
    return [git_bin, "fetch", remote, branch]


def checkout_cmd(branch: str, *, git_bin: str = "git") -> List[str]:
    return [git_bin, "checkout", branch]
