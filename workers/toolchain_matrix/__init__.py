"""
toolchain_matrix — build/test matrix runner for a pinned and a stable toolchain.

Resolves a named target (build, build-release, test, test-release, all,
all-release) into an ordered list of toolchain invocations and runs them
one at a time, stopping at the first failure.

Every leaf target issues exactly two invocations: the pinned toolchain
first, then stable.
"""

__version__ = "1.0.0"
RUNNER_VERSION = "v1"
PACKAGE_NAME = "toolchain_matrix"
SCHEMA_VERSION = "1.0"
