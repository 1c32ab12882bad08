"""pr_bench.pipeline.settings

Layered configuration for the PR benchmark runner.

Precedence (highest first):

1. explicit overrides (CLI flags)
2. environment variables (``PR_BENCH_*``)
3. YAML config file (``pr_bench.yml`` at the repo root, or ``--config``)
4. built-in defaults (Travis CI + cargo)

Example ``pr_bench.yml``::

    bench_cmd: cargo bench --all
    compare_cmd: [cargo, benchcmp, --threshold, "5"]
    remote: upstream
    benches_dir: target/pr-benches
"""

from __future__ import annotations

import logging
import os
import shlex
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from pr_bench.pipeline.core import DEFAULT_CONFIG_NAME, ROOT_DIR
from pr_bench.pipeline.models import BenchSettings, ConfigError

logger = logging.getLogger(__name__)

CONFIG_KEYS = {
    "bench_cmd",
    "compare_cmd",
    "git",
    "remote",
    "benches_dir",
    "pr_env_var",
    "branch_env_var",
    "sentinel",
    "timeout_seconds",
}

ENV_KEYS: Dict[str, str] = {
    "PR_BENCH_CMD": "bench_cmd",
    "PR_BENCH_COMPARE_CMD": "compare_cmd",
    "PR_BENCH_GIT": "git",
    "PR_BENCH_REMOTE": "remote",
    "PR_BENCH_DIR": "benches_dir",
    "PR_BENCH_TIMEOUT": "timeout_seconds",
}

CONFIG_ENV_VAR = "PR_BENCH_CONFIG"


def split_command(value: Any, *, key: str) -> List[str]:
    """Normalize a command given as a string (shlex-split) or a list."""
    if isinstance(value, str):
        parts = shlex.split(value)
    elif isinstance(value, (list, tuple)):
        parts = [str(x) for x in value]
    else:
        raise ConfigError(f"{key} must be a string or a list, got {type(value).__name__}")
    if not parts:
        raise ConfigError(f"{key} must not be empty")
    return parts


def load_config_file(path: str | Path) -> Dict[str, Any]:
    """Load the YAML config file. Unknown keys are rejected."""
    import yaml

    p = Path(path).expanduser().resolve()
    if not p.exists():
        raise ConfigError(f"Config file not found: {p}")
    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {p}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"Config YAML must be a mapping/object at top level: {p}")

    unknown = sorted(set(raw) - CONFIG_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config keys in {p}: {', '.join(unknown)}")
    return dict(raw)


def _default_config_path(repo_root: Path, env: Mapping[str, str]) -> Optional[Path]:
    explicit = env.get(CONFIG_ENV_VAR)
    if explicit:
        return Path(explicit)
    candidate = repo_root / DEFAULT_CONFIG_NAME
    return candidate if candidate.exists() else None


def _env_values(env: Mapping[str, str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for var, key in ENV_KEYS.items():
        val = env.get(var)
        if val:
            out[key] = val
    return out


def _as_timeout(value: Any) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"timeout_seconds must be an integer, got {value!r}") from e
    if n < 0:
        raise ConfigError(f"timeout_seconds must be >= 0, got {n}")
    return n


def load_settings(
    *,
    config_path: Optional[str | Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    repo_root: Path = ROOT_DIR,
) -> BenchSettings:
    """Resolve :class:`BenchSettings` from all configuration layers."""
    env = os.environ if environ is None else environ

    merged: Dict[str, Any] = {}

    path = Path(config_path) if config_path else _default_config_path(repo_root, env)
    if path is not None:
        if not path.is_absolute():
            path = repo_root / path
        merged.update(load_config_file(path))
        logger.debug("loaded config file %s", path)

    merged.update(_env_values(env))
    merged.update({k: v for k, v in (overrides or {}).items() if v is not None})

    kwargs: Dict[str, Any] = {"repo_root": Path(repo_root)}
    if "bench_cmd" in merged:
        kwargs["bench_cmd"] = split_command(merged["bench_cmd"], key="bench_cmd")
    if "compare_cmd" in merged:
        kwargs["compare_cmd"] = split_command(merged["compare_cmd"], key="compare_cmd")
    if "timeout_seconds" in merged:
        kwargs["timeout_seconds"] = _as_timeout(merged["timeout_seconds"])
    if "git" in merged:
        kwargs["git_bin"] = str(merged["git"])
    for key in ("remote", "benches_dir", "pr_env_var", "branch_env_var", "sentinel"):
        if key in merged:
            val = str(merged[key])
            if not val:
                raise ConfigError(f"{key} must not be empty")
            kwargs[key] = val

    settings = BenchSettings(**kwargs)
    logger.debug("resolved settings: %s", settings.to_dict())
    return settings
