#!/usr/bin/env python3
# Copyright 2026 ModelSchema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the CI checks locally: format, lint, type check, tests, and build.

Usage::

    tools/ci.py                 # all steps
    tools/ci.py tests lint      # selected steps only
    tools/ci.py --fail-fast     # stop at the first failing step
"""

import argparse
import pathlib
import subprocess
import sys
import time
from dataclasses import dataclass

from yachalk import chalk

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class Step:
    """A named CI command run from the repository root."""

    key: str
    title: str
    command: list[str]


STEPS: list[Step] = [
    Step("format", "Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"]),
    Step("lint", "Lint", ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"]),
    Step("types", "Type check", ["uv", "run", "ty", "check", "src/"]),
    Step("tests", "Tests", ["uv", "run", "pytest", "--cov=modelschema", "--cov-report=term-missing"]),
    Step("build", "Build", ["uv", "build"]),
]


def main(argv: list[str] | None = None) -> int:
    """Run the selected CI steps and print a summary. Returns the process exit code."""
    args = _parse_args(argv)
    selected = [step for step in STEPS if not args.steps or step.key in args.steps]

    results: list[tuple[Step, bool, float]] = []
    for step in selected:
        _banner(step.title)
        start = time.monotonic()
        proc = subprocess.run(step.command, cwd=_repo_root())
        passed = proc.returncode == 0
        results.append((step, passed, time.monotonic() - start))
        if not passed and args.fail_fast:
            break

    _banner("  Summary")
    for step, passed, elapsed in results:
        color = chalk.green if passed else chalk.red
        print(color(f"  {'PASS' if passed else 'FAIL'}  {step.title} ({elapsed:.1f}s)"))
    skipped = [step.title for step in selected[len(results) :]]
    if skipped:
        print(chalk.yellow(f"  SKIP  {', '.join(skipped)}"))

    print()
    return 0 if results and all(passed for _, passed, _ in results) and not skipped else 1


# ################
# Implementation
# ################


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run modelschema CI checks.")
    keys = [step.key for step in STEPS]
    parser.add_argument("steps", nargs="*", metavar="STEP", help=f"steps to run, any of: {', '.join(keys)}")
    parser.add_argument("--fail-fast", action="store_true", help="stop at the first failing step")
    args = parser.parse_args(argv)
    unknown = [key for key in args.steps if key not in keys]
    if unknown:
        parser.error(f"unknown step(s): {', '.join(unknown)}")
    return args


def _banner(title: str) -> None:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}")
    print(chalk.blue(title))
    print(sep)


def _repo_root() -> str:
    return str(pathlib.Path(__file__).parent.parent)


if __name__ == "__main__":
    sys.exit(main())
