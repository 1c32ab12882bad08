from __future__ import annotations

import signal
import sys
import tempfile
import unittest
from pathlib import Path
from typing import Dict, List

from pr_bench.pipeline.execution.model import ANNOUNCE, Step, StepExecution, now_iso
from pr_bench.pipeline.execution.runner import run_step
from pr_bench.pipeline.models import BenchSettings, BuildContext, ConfigError
from pr_bench.pipeline.orchestrator import CompareRequest, RunRequest, run_compare, run_pr_benchmark


class FakeRunner:
    """Records steps; command steps succeed unless listed in ``fail``.

    Benchmark steps create their artifact file like a shell redirect would,
    so tests can assert on the filesystem.
    """

    def __init__(self, fail: Dict[str, int] | None = None) -> None:
        self.fail = fail or {}
        self.steps: List[Step] = []

    def __call__(self, step: Step, *, dry_run: bool = False, timeout_seconds: int = 0) -> StepExecution:
        self.steps.append(step)
        if step.stdout_path is not None and not dry_run:
            step.stdout_path.parent.mkdir(parents=True, exist_ok=True)
            step.stdout_path.write_text(f"output of {step.name}\n", encoding="utf-8")
        code = 0 if step.kind == ANNOUNCE else self.fail.get(step.name, 0)
        t = now_iso()
        return StepExecution(step=step, exit_code=code, started=t, finished=t)

    @property
    def names(self) -> List[str]:
        return [s.name for s in self.steps]

    def step(self, name: str) -> Step:
        return next(s for s in self.steps if s.name == name)


class TestRunPRBenchmark(unittest.TestCase):
    def setUp(self) -> None:
        self._td = tempfile.TemporaryDirectory()
        self.root = Path(self._td.name)
        self.settings = BenchSettings(repo_root=self.root)
        self.benches = self.root / "benches"

    def tearDown(self) -> None:
        self._td.cleanup()

    def _run(self, ctx: BuildContext, runner: FakeRunner, **kwargs):
        return run_pr_benchmark(RunRequest(context=ctx, settings=self.settings, **kwargs), step_runner=runner)

    def test_not_a_pr_is_a_noop(self) -> None:
        runner = FakeRunner()
        result = self._run(BuildContext(pull_request="false", branch="main"), runner)

        self.assertEqual(0, result.exit_code)
        self.assertTrue(result.skipped)
        self.assertEqual([], runner.steps)
        self.assertEqual([], list(self.root.iterdir()))

    def test_not_a_pr_writes_no_receipt(self) -> None:
        runner = FakeRunner()
        receipt = self.root / "receipt.json"
        self._run(BuildContext(pull_request="false"), runner, receipt_path=receipt)
        self.assertFalse(receipt.exists())

    def test_successful_pr_run_writes_two_artifacts_and_compares_branch_first(self) -> None:
        runner = FakeRunner()
        result = self._run(BuildContext(pull_request="123", branch="main"), runner)

        self.assertEqual(0, result.exit_code)
        self.assertFalse(result.skipped)
        self.assertIsNone(result.failed_step)
        self.assertEqual(
            [
                "announce_pr",
                "bench_pr",
                "announce_checkout",
                "git_set_branches",
                "git_fetch",
                "git_checkout",
                "announce_branch",
                "bench_branch",
                "announce_compare",
                "compare",
            ],
            runner.names,
        )
        self.assertEqual(["PR_123", "main"], sorted(p.name for p in self.benches.iterdir()))
        self.assertEqual([self.benches / "PR_123", self.benches / "main"], result.artifacts)

        compare = runner.step("compare")
        self.assertEqual(["cargo", "benchcmp", "main", "PR_123"], compare.cmd)
        self.assertEqual(self.benches, compare.cwd)

    def test_git_steps_use_remote_and_branch(self) -> None:
        runner = FakeRunner()
        self._run(BuildContext(pull_request="7", branch="develop"), runner)

        self.assertEqual(["git", "remote", "set-branches", "origin", "develop"], runner.step("git_set_branches").cmd)
        self.assertEqual(["git", "fetch", "origin", "develop"], runner.step("git_fetch").cmd)
        self.assertEqual(["git", "checkout", "develop"], runner.step("git_checkout").cmd)

    def test_first_bench_failure_stops_before_checkout(self) -> None:
        runner = FakeRunner(fail={"bench_pr": 101})
        result = self._run(BuildContext(pull_request="123", branch="main"), runner)

        self.assertEqual(101, result.exit_code)
        self.assertEqual("bench_pr", result.failed_step)
        self.assertEqual(["announce_pr", "bench_pr"], runner.names)
        self.assertFalse((self.benches / "main").exists())

    def test_checkout_failure_keeps_pr_artifact_and_skips_second_bench(self) -> None:
        runner = FakeRunner(fail={"git_checkout": 1})
        result = self._run(BuildContext(pull_request="123", branch="main"), runner)

        self.assertEqual(1, result.exit_code)
        self.assertEqual("git_checkout", result.failed_step)
        self.assertNotIn("bench_branch", runner.names)
        self.assertNotIn("compare", runner.names)
        self.assertTrue((self.benches / "PR_123").exists())
        self.assertFalse((self.benches / "main").exists())

    def test_fetch_failure_exit_code_propagates(self) -> None:
        runner = FakeRunner(fail={"git_fetch": 128})
        result = self._run(BuildContext(pull_request="5", branch="main"), runner)
        self.assertEqual(128, result.exit_code)
        self.assertNotIn("git_checkout", runner.names)

    @unittest.skipUnless(hasattr(signal, "SIGKILL"), "POSIX signals only")
    def test_bench_killed_by_signal_exits_like_a_shell(self) -> None:
        settings = BenchSettings(
            repo_root=self.root,
            bench_cmd=[sys.executable, "-c", "import os, signal; os.kill(os.getpid(), signal.SIGKILL)"],
        )
        result = run_pr_benchmark(
            RunRequest(context=BuildContext(pull_request="6", branch="main"), settings=settings),
            step_runner=run_step,
        )
        self.assertEqual(137, result.exit_code)
        self.assertEqual("bench_pr", result.failed_step)
        self.assertEqual(["announce_pr", "bench_pr"], [ex.step.name for ex in result.executions])

    def test_compare_failure_is_the_run_result(self) -> None:
        runner = FakeRunner(fail={"compare": 2})
        result = self._run(BuildContext(pull_request="5", branch="main"), runner)
        self.assertEqual(2, result.exit_code)
        self.assertEqual("compare", result.failed_step)
        self.assertEqual(2, len(result.artifacts))

    def test_dry_run_writes_nothing(self) -> None:
        runner = FakeRunner()
        result = self._run(BuildContext(pull_request="9", branch="main"), runner, dry_run=True)
        self.assertEqual(0, result.exit_code)
        self.assertEqual(10, len(runner.steps))
        self.assertEqual([], result.artifacts)
        self.assertFalse(self.benches.exists())

    def test_receipt_records_steps(self) -> None:
        from pr_bench.tools.io import read_json

        runner = FakeRunner(fail={"git_fetch": 128})
        receipt = self.root / "out" / "receipt.json"
        self._run(BuildContext(pull_request="5", branch="main"), runner, receipt_path=receipt)

        data = read_json(receipt)
        self.assertEqual("run", data["mode"])
        self.assertEqual(128, data["exit_code"])
        self.assertEqual("git_fetch", data["failed_step"])
        self.assertEqual("5", data["build"]["pull_request"])
        self.assertEqual(
            ["announce_pr", "bench_pr", "announce_checkout", "git_set_branches", "git_fetch"],
            [s["name"] for s in data["steps"]],
        )


class TestRunCompare(unittest.TestCase):
    def test_compare_requires_existing_artifacts(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            settings = BenchSettings(repo_root=Path(td))
            runner = FakeRunner()
            with self.assertRaises(ConfigError):
                run_compare(CompareRequest(settings=settings, baseline="main", candidate="PR_1"), step_runner=runner)
            self.assertEqual([], runner.steps)

    def test_compare_runs_tool_in_benches_dir(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            settings = BenchSettings(repo_root=Path(td), compare_cmd=["benchcmp"])
            benches = settings.benches_path
            benches.mkdir()
            (benches / "main").write_text("a\n", encoding="utf-8")
            (benches / "PR_1").write_text("b\n", encoding="utf-8")

            runner = FakeRunner()
            result = run_compare(
                CompareRequest(settings=settings, baseline="main", candidate="PR_1"), step_runner=runner
            )

            self.assertEqual(0, result.exit_code)
            self.assertEqual(["announce_compare", "compare"], runner.names)
            self.assertEqual(["benchcmp", "main", "PR_1"], runner.step("compare").cmd)
            self.assertEqual(benches, runner.step("compare").cwd)


if __name__ == "__main__":
    unittest.main()
