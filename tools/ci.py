#!/usr/bin/env python3
# Copyright 2026 genconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the genconf CI checks locally.

Steps can be selected by name on the command line, e.g. ``tools/ci.py tests samples``.
Without arguments every step runs in order.
"""

import subprocess
import sys
import time
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: list[tuple[str, str, list[str]]] = [
    ("format", "Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"]),
    ("lint", "Lint", ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"]),
    ("types", "Type check", ["uv", "run", "ty", "check", "src/"]),
    ("tests", "Tests", ["uv", "run", "pytest", "--cov=genconf", "--cov-report=term-missing"]),
    ("samples", "Sample project", ["uv", "run", "genconf", "check", "samples/"]),
    ("build", "Build", ["uv", "build"]),
]


def main(argv: list[str] | None = None) -> int:
    """Run the selected CI steps and report results."""
    selected = argv if argv is not None else sys.argv[1:]
    known = {key for key, _, _ in STEPS}
    unknown = [key for key in selected if key not in known]
    if unknown:
        print(chalk.red(f"Unknown step(s): {', '.join(unknown)}. Known steps: {', '.join(sorted(known))}"))
        return 2

    results: list[tuple[str, bool, float]] = []
    for key, title, cmd in STEPS:
        if selected and key not in selected:
            continue
        results.append(_run_step(title, cmd))

    return 0 if _print_summary(results) else 1


# ################
# Implementation
# ################

_REPO_ROOT = Path(__file__).resolve().parent.parent
_RULE = "=" * 60


def _run_step(title: str, cmd: list[str]) -> tuple[str, bool, float]:
    print(f"\n{chalk.blue(_RULE)}")
    print(chalk.blue(title))
    print(chalk.blue(_RULE))
    start = time.monotonic()
    proc = subprocess.run(cmd, cwd=_REPO_ROOT)
    return title, proc.returncode == 0, time.monotonic() - start


def _print_summary(results: list[tuple[str, bool, float]]) -> bool:
    print(f"\n{chalk.blue(_RULE)}")
    print(chalk.blue("  Summary"))
    print(chalk.blue(_RULE))
    for title, passed, elapsed in results:
        color = chalk.green if passed else chalk.red
        status = "PASS" if passed else "FAIL"
        print(color(f"  {status}  {title} ({elapsed:.1f}s)"))
    print()
    return all(passed for _, passed, _ in results)


if __name__ == "__main__":
    sys.exit(main())
