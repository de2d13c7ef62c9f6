#!/usr/bin/env python3
# Copyright 2026 oasmerge Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the oasmerge CI checks locally: format, lint, tests, and build.

Usage::

    python tools/ci.py                 # every step
    python tools/ci.py --only tests    # a subset, by step key
    python tools/ci.py --fail-fast     # stop at the first failing step
"""

import argparse
import subprocess
import sys
import time
from dataclasses import dataclass
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class Step:
    """One CI command.

    Attributes:
        key: Short identifier used with ``--only``.
        title: Heading printed before the command runs.
        command: The command line, run from the repository root.
    """

    key: str
    title: str
    command: list[str]


STEPS: list[Step] = [
    Step("format", "Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"]),
    Step("lint", "Lint", ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"]),
    Step("tests", "Tests", ["uv", "run", "pytest", "--cov=oasmerge", "--cov-report=term-missing"]),
    Step("build", "Build", ["uv", "build"]),
]


def main() -> int:
    """Run the selected CI steps and print a summary."""
    parser = argparse.ArgumentParser(description="Run the oasmerge CI checks.")
    parser.add_argument(
        "--only",
        nargs="+",
        choices=[step.key for step in STEPS],
        help="Run only these steps",
    )
    parser.add_argument("--fail-fast", action="store_true", help="Stop after the first failing step")
    args = parser.parse_args()

    selected = [step for step in STEPS if not args.only or step.key in args.only]
    results: list[tuple[Step, bool, float]] = []
    for step in selected:
        passed, elapsed = _run_step(step)
        results.append((step, passed, elapsed))
        if not passed and args.fail_fast:
            break

    _print_summary(results, skipped=len(selected) - len(results))
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################

_RULE = "=" * 60


def _run_step(step: Step) -> tuple[bool, float]:
    print(f"\n{chalk.blue(_RULE)}")
    print(chalk.blue(step.title))
    print(chalk.blue(_RULE))
    start = time.monotonic()
    proc = subprocess.run(step.command, cwd=_repo_root())
    return proc.returncode == 0, time.monotonic() - start


def _print_summary(results: list[tuple[Step, bool, float]], skipped: int) -> None:
    print(f"\n{chalk.blue(_RULE)}")
    print(chalk.blue("  Summary"))
    print(chalk.blue(_RULE))
    for step, passed, elapsed in results:
        color = chalk.green if passed else chalk.red
        status = "PASS" if passed else "FAIL"
        print(color(f"  {status}  {step.title} ({elapsed:.1f}s)"))
    if skipped:
        print(chalk.yellow(f"  SKIP  {skipped} step(s) after the first failure"))
    print()


def _repo_root() -> Path:
    return Path(__file__).resolve().parent.parent


if __name__ == "__main__":
    sys.exit(main())
