"""
Executor — run one toolchain command as a blocking subprocess.

Two output modes:
  - pass-through (default): the child inherits our stdout/stderr, so the
    toolchain's own output reaches the user unmodified and live.
  - capture: output is collected as bytes, then relayed unmodified to our
    stdout/stderr once the child exits, and handed back to the caller
    (decoded as UTF-8 with replacement, for log files in the run receipt).

No timeout is applied; a hanging toolchain blocks the run.
"""
from __future__ import annotations

import logging
import subprocess
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, TextIO

log = logging.getLogger(__name__)

# Shell conventions for "could not execute"
EXIT_NOT_FOUND = 127
EXIT_NOT_EXECUTABLE = 126


@dataclass
class ExecResult:
    """Outcome of a single subprocess call."""
    exit_code: int
    stdout: str = ""
    stderr: str = ""
    duration_ms: int = 0
    launch_error: Optional[str] = None  # set when the program never started

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


Executor = Callable[[List[str]], ExecResult]


class SubprocessExecutor:
    """Runs commands with ``subprocess.run`` in a fixed working directory."""

    def __init__(
        self,
        cwd: Optional[Path] = None,
        capture: bool = False,
        env: Optional[Dict[str, str]] = None,
    ):
        self.cwd = Path(cwd) if cwd is not None else None
        self.capture = capture
        self.env = env

    def __call__(self, argv: List[str]) -> ExecResult:
        t0 = time.monotonic()
        try:
            result = subprocess.run(
                argv,
                cwd=str(self.cwd) if self.cwd else None,
                env=self.env,
                capture_output=self.capture,
                check=False,
            )
        except FileNotFoundError as e:
            return self._launch_failure(argv, EXIT_NOT_FOUND, e, t0)
        except OSError as e:
            return self._launch_failure(argv, EXIT_NOT_EXECUTABLE, e, t0)

        duration = int((time.monotonic() - t0) * 1000)
        raw_stdout = result.stdout or b""
        raw_stderr = result.stderr or b""
        if self.capture:
            self._relay(sys.stdout, raw_stdout)
            self._relay(sys.stderr, raw_stderr)

        log.debug("%s exited %d after %d ms", argv[0], result.returncode, duration)
        return ExecResult(
            exit_code=result.returncode,
            stdout=raw_stdout.decode("utf-8", errors="replace"),
            stderr=raw_stderr.decode("utf-8", errors="replace"),
            duration_ms=duration,
        )

    def _launch_failure(
        self, argv: List[str], code: int, err: OSError, t0: float
    ) -> ExecResult:
        message = f"{argv[0]}: {err.strerror or err}"
        print(message, file=sys.stderr, flush=True)
        return ExecResult(
            exit_code=code,
            stderr=message + "\n",
            duration_ms=int((time.monotonic() - t0) * 1000),
            launch_error=message,
        )

    @staticmethod
    def _relay(stream: TextIO, data: bytes) -> None:
        """Write the child's bytes as-is; decode only for text-only streams."""
        if not data:
            return
        stream.flush()
        buffer = getattr(stream, "buffer", None)
        if buffer is not None:
            buffer.write(data)
            buffer.flush()
        else:
            stream.write(data.decode("utf-8", errors="replace"))
            stream.flush()
