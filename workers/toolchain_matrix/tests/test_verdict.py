"""
test_verdict — invocation classification and profile validation.
"""
import pytest

from toolchain_matrix.core.executor import ExecResult
from toolchain_matrix.policy.profile import MatrixProfile
from toolchain_matrix.policy.verdict import (
    FailureReason,
    Status,
    judge_invocation,
    run_exit_code,
)


class TestJudgeInvocation:

    def test_zero_is_success(self):
        assert judge_invocation(ExecResult(exit_code=0)) == (Status.SUCCESS, [])

    def test_compile_failure(self):
        status, reasons = judge_invocation(
            ExecResult(exit_code=101, stderr="error[E0308]: mismatched types\n")
        )
        assert status == Status.FAILED
        assert reasons == [FailureReason.INVOCATION_FAILED.value]

    def test_launch_error_is_missing_toolchain(self):
        status, reasons = judge_invocation(
            ExecResult(exit_code=127, launch_error="cargo: No such file or directory")
        )
        assert status == Status.FAILED
        assert reasons == [FailureReason.TOOLCHAIN_NOT_FOUND.value]

    def test_rustup_message_is_missing_toolchain(self):
        result = ExecResult(
            exit_code=1,
            stderr="error: toolchain '1.31.0-x86_64-unknown-linux-gnu' is not installed\n",
        )
        assert judge_invocation(result)[1] == [FailureReason.TOOLCHAIN_NOT_FOUND.value]

    @pytest.mark.parametrize("code, expected", [(101, 101), (1, 1), (-15, 1)])
    def test_run_exit_code_never_zero(self, code, expected):
        assert run_exit_code(ExecResult(exit_code=code)) == expected


class TestProfile:

    def test_v1(self):
        profile = MatrixProfile.v1()

        assert profile.selectors == ("1.31.0", "stable")
        assert profile.program == "cargo"
        assert profile.default_target == "all"
        assert profile.profile_id == "cargo-1.31.0-stable"

    @pytest.mark.parametrize("kwargs", [
        {"program": "", "pinned": "1.31.0", "stable": "stable"},
        {"program": "cargo", "pinned": "", "stable": "stable"},
        {"program": "cargo", "pinned": "1.31.0", "stable": ""},
    ])
    def test_empty_values_rejected(self, kwargs):
        with pytest.raises(ValueError):
            MatrixProfile(**kwargs)
