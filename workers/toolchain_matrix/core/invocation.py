"""
Invocation — one call of the external toolchain.

An invocation is fully described by four values: which toolchain
(selector), what to do (operation), how to build (configuration) and how
much to print (verbosity).  ``to_argv`` renders it as a command line for a
rustup-style toolchain proxy:

    <program> +<selector> <operation> [--all] [--release] [--verbose | -- --quiet]

No process handling here; see ``core.executor``.
"""
from dataclasses import dataclass
from enum import Enum, unique
from typing import List


@unique
class Operation(str, Enum):
    """What the toolchain is asked to do."""
    BUILD = "build"
    TEST = "test"


@unique
class Configuration(str, Enum):
    """Build mode.  Release implies optimized compilation."""
    DEBUG = "debug"
    RELEASE = "release"


@unique
class Verbosity(str, Enum):
    DEFAULT = "default"
    VERBOSE = "verbose"
    QUIET = "quiet"


@dataclass(frozen=True)
class Invocation:
    """A single toolchain call, immutable once resolved."""

    selector: str
    operation: Operation
    configuration: Configuration = Configuration.DEBUG
    verbosity: Verbosity = Verbosity.DEFAULT

    def to_argv(self, program: str) -> List[str]:
        """Render the command line for *program* (e.g. ``cargo``)."""
        argv = [program, f"+{self.selector}", self.operation.value]

        # Tests always cover the whole workspace
        if self.operation == Operation.TEST:
            argv.append("--all")

        if self.configuration == Configuration.RELEASE:
            argv.append("--release")

        if self.verbosity == Verbosity.VERBOSE:
            argv.append("--verbose")
        elif self.verbosity == Verbosity.QUIET:
            # Forwarded to the test harness, not the toolchain driver
            argv.extend(["--", "--quiet"])

        return argv

    @property
    def label(self) -> str:
        """Short human-readable tag, e.g. ``1.31.0:test:release``."""
        return f"{self.selector}:{self.operation.value}:{self.configuration.value}"
