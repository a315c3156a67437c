"""
Shared pytest fixtures for toolchain_matrix tests.

The toolchain is replaced by a recording fake: no cargo, no rustup, no
network.  Each call is appended to ``calls`` and answered from a table of
exit codes keyed by position or by command prefix.
"""
from __future__ import annotations

import os
from typing import Dict, List, Optional, Tuple

import pytest

from toolchain_matrix.core.executor import ExecResult

PINNED = "1.31.0"
STABLE = "stable"

# Commands the stock profile issues, by target
BUILD_PINNED = ["cargo", "+1.31.0", "build"]
BUILD_STABLE = ["cargo", "+stable", "build"]
TEST_PINNED = ["cargo", "+1.31.0", "test", "--all", "--", "--quiet"]
TEST_STABLE = ["cargo", "+stable", "test", "--all", "--", "--quiet"]
BUILD_RELEASE_PINNED = ["cargo", "+1.31.0", "build", "--release", "--verbose"]
BUILD_RELEASE_STABLE = ["cargo", "+stable", "build", "--release", "--verbose"]
TEST_RELEASE_PINNED = ["cargo", "+1.31.0", "test", "--all", "--release", "--verbose"]
TEST_RELEASE_STABLE = ["cargo", "+stable", "test", "--all", "--release", "--verbose"]


class RecordingExecutor:
    """Fake executor: records argv, answers with scripted results."""

    def __init__(
        self,
        fail_at: Optional[int] = None,
        exit_code: int = 101,
        stdout: str = "",
        stderr: str = "",
        fail_on: Optional[Tuple[str, ...]] = None,
        results: Optional[Dict[int, ExecResult]] = None,
    ):
        self.calls: List[List[str]] = []
        self.fail_at = fail_at
        self.fail_on = fail_on
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        self.results = results or {}

    def __call__(self, argv: List[str]) -> ExecResult:
        index = len(self.calls)
        self.calls.append(list(argv))

        if index in self.results:
            return self.results[index]

        failing = index == self.fail_at or (
            self.fail_on is not None and tuple(argv[: len(self.fail_on)]) == self.fail_on
        )
        if failing:
            return ExecResult(
                exit_code=self.exit_code,
                stdout=self.stdout,
                stderr=self.stderr or "error: could not compile `users`\n",
                duration_ms=5,
            )
        return ExecResult(exit_code=0, stdout=self.stdout, duration_ms=5)


@pytest.fixture
def recorder() -> RecordingExecutor:
    """Executor where every invocation succeeds."""
    return RecordingExecutor()


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove MATRIX_* variables and run from an empty directory (no .env)."""
    for key in list(os.environ):
        if key.startswith("MATRIX_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    return tmp_path
