from __future__ import annotations

from pathlib import Path

import pytest

from pr_bench.pipeline.models import ConfigError
from pr_bench.pipeline.settings import load_settings, split_command


def test_defaults_are_travis_and_cargo(tmp_path: Path) -> None:
    s = load_settings(environ={}, repo_root=tmp_path)
    assert s.bench_cmd == ["cargo", "bench"]
    assert s.compare_cmd == ["cargo", "benchcmp"]
    assert s.remote == "origin"
    assert s.git_bin == "git"
    assert s.pr_env_var == "TRAVIS_PULL_REQUEST"
    assert s.branch_env_var == "TRAVIS_BRANCH"
    assert s.sentinel == "false"
    assert s.benches_path == tmp_path / "benches"


def test_yaml_config_at_repo_root_is_picked_up(tmp_path: Path) -> None:
    (tmp_path / "pr_bench.yml").write_text(
        "bench_cmd: cargo bench --all\n"
        "compare_cmd: [cargo, benchcmp, --threshold, '5']\n"
        "remote: upstream\n"
        "benches_dir: target/pr-benches\n",
        encoding="utf-8",
    )
    s = load_settings(environ={}, repo_root=tmp_path)
    assert s.bench_cmd == ["cargo", "bench", "--all"]
    assert s.compare_cmd == ["cargo", "benchcmp", "--threshold", "5"]
    assert s.remote == "upstream"
    assert s.benches_path == tmp_path / "target" / "pr-benches"


def test_precedence_cli_over_env_over_yaml(tmp_path: Path) -> None:
    cfg = tmp_path / "custom.yml"
    cfg.write_text("remote: from-yaml\nbenches_dir: yaml-benches\nbench_cmd: make bench\n", encoding="utf-8")
    env = {"PR_BENCH_REMOTE": "from-env", "PR_BENCH_DIR": "env-benches"}

    s = load_settings(
        config_path=cfg,
        environ=env,
        overrides={"remote": "from-cli", "benches_dir": None},
        repo_root=tmp_path,
    )
    assert s.remote == "from-cli"
    assert s.benches_dir == "env-benches"
    assert s.bench_cmd == ["make", "bench"]


def test_config_path_from_env(tmp_path: Path) -> None:
    cfg = tmp_path / "elsewhere.yaml"
    cfg.write_text("sentinel: 'no'\n", encoding="utf-8")
    s = load_settings(environ={"PR_BENCH_CONFIG": str(cfg)}, repo_root=tmp_path)
    assert s.sentinel == "no"


def test_unknown_yaml_keys_are_rejected(tmp_path: Path) -> None:
    cfg = tmp_path / "pr_bench.yml"
    cfg.write_text("bench_command: cargo bench\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="bench_command"):
        load_settings(environ={}, repo_root=tmp_path)


def test_non_mapping_yaml_is_rejected(tmp_path: Path) -> None:
    cfg = tmp_path / "pr_bench.yml"
    cfg.write_text("- cargo\n- bench\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(environ={}, repo_root=tmp_path)


def test_missing_explicit_config_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_settings(config_path=tmp_path / "nope.yml", environ={}, repo_root=tmp_path)


def test_bad_timeout_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_settings(environ={"PR_BENCH_TIMEOUT": "soon"}, repo_root=tmp_path)
    with pytest.raises(ConfigError):
        load_settings(environ={}, overrides={"timeout_seconds": -1}, repo_root=tmp_path)


def test_split_command() -> None:
    assert split_command("cargo bench -- --nocapture", key="bench_cmd") == ["cargo", "bench", "--", "--nocapture"]
    assert split_command(["a", 1], key="bench_cmd") == ["a", "1"]
    with pytest.raises(ConfigError):
        split_command("", key="bench_cmd")
    with pytest.raises(ConfigError):
        split_command({"a": 1}, key="bench_cmd")
