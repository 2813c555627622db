#!/usr/bin/env python3
# Copyright 2026 SQL Compiler Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the local CI checks for the SQL compiler: format, lint, types, tests, build."""

import argparse
import subprocess
import sys
import time
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: dict[str, list[str]] = {
    "format": ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"],
    "lint": ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"],
    "types": ["uv", "run", "ty", "check", "src/"],
    "tests": ["uv", "run", "pytest", "--cov=sqlcompiler", "--cov-report=term-missing"],
    "build": ["uv", "build"],
}


def main() -> int:
    """Run the selected CI steps and print a summary."""
    parser = argparse.ArgumentParser(description="Run the SQL compiler CI checks locally.")
    parser.add_argument(
        "--skip",
        action="append",
        choices=list(STEPS),
        default=[],
        help="Step to skip (may be given more than once)",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop after the first failing step",
    )
    args = parser.parse_args()

    results: list[tuple[str, bool, float]] = []
    for name, cmd in STEPS.items():
        if name in args.skip:
            continue
        passed, elapsed = _run_step(name, cmd)
        results.append((name, passed, elapsed))
        if not passed and args.fail_fast:
            break

    _print_summary(results)
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################

_RULE = "=" * 60


def _run_step(name: str, cmd: list[str]) -> tuple[bool, float]:
    print(f"\n{chalk.blue(_RULE)}")
    print(chalk.blue(name.capitalize()))
    print(chalk.blue(_RULE))
    start = time.monotonic()
    proc = subprocess.run(cmd, cwd=Path(__file__).resolve().parent.parent)
    return proc.returncode == 0, time.monotonic() - start


def _print_summary(results: list[tuple[str, bool, float]]) -> None:
    print(f"\n{chalk.blue(_RULE)}")
    print(chalk.blue("  Summary"))
    print(chalk.blue(_RULE))
    for name, passed, elapsed in results:
        colour = chalk.green if passed else chalk.red
        status = "PASS" if passed else "FAIL"
        print(colour(f"  {status}  {name} ({elapsed:.1f}s)"))
    print()


if __name__ == "__main__":
    sys.exit(main())
