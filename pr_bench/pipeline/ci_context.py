"""pr_bench.pipeline.ci_context

Resolve the CI build context (PR flag + target branch) once at startup.

Values are used verbatim: the PR id and branch name end up in artifact file
names and git refs exactly as the CI system provided them.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from pr_bench.pipeline.models import BenchSettings, BuildContext, ConfigError

logger = logging.getLogger(__name__)


def is_sentinel_flag(
    settings: BenchSettings,
    *,
    environ: Optional[Mapping[str, str]] = None,
    pr: Optional[str] = None,
) -> bool:
    """True when the build-context flag marks a non-PR build."""
    env = os.environ if environ is None else environ
    flag = pr if pr is not None else env.get(settings.pr_env_var)
    return flag == settings.sentinel


def read_build_context(
    settings: BenchSettings,
    *,
    environ: Optional[Mapping[str, str]] = None,
    pr: Optional[str] = None,
    branch: Optional[str] = None,
) -> BuildContext:
    """Build a :class:`BuildContext` from the environment.

    ``pr`` / ``branch`` (CLI overrides) win over the environment.

    Only the exact sentinel value marks a non-PR build. A missing or empty flag
    is rejected instead of being treated as a PR, since it would otherwise
    produce an artifact named ``PR_`` and benchmark against an empty ref.
    """
    env = os.environ if environ is None else environ

    flag = pr if pr is not None else env.get(settings.pr_env_var)
    if flag is None or not flag.strip():
        raise ConfigError(
            f"Missing {settings.pr_env_var}. Run this inside a CI build, "
            f"or pass --pr <id> (use --pr {settings.sentinel} to skip)."
        )

    target = branch if branch is not None else env.get(settings.branch_env_var)
    target = target or None

    ctx = BuildContext(pull_request=flag, branch=target, sentinel=settings.sentinel)
    if ctx.is_pull_request and (target is None or not target.strip()):
        raise ConfigError(
            f"Missing {settings.branch_env_var} for PR #{flag}. "
            "Set it in the environment or pass --branch <name>."
        )

    logger.debug("build context: %s", ctx.describe())
    return ctx
