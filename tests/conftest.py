"""Pytest configuration, shared fixtures & custom summary hook.

Also ensures the project root is on sys.path so 'import proc_opt' works
without installing the package.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_root = Path(__file__).resolve().parents[1]
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from proc_opt.models import Job  # noqa: E402

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def example_jobs() -> list[Job]:
    """Seven job instance: Schrage Cmax 53, best permutation 50, preemptive 49."""
    return [
        Job(10, 5, 7),  # 1
        Job(13, 6, 26),  # 2
        Job(11, 7, 24),  # 3
        Job(20, 4, 21),  # 4
        Job(30, 3, 8),  # 5
        Job(0, 6, 17),  # 6
        Job(30, 2, 0),  # 7
    ]


def pytest_terminal_summary(
    terminalreporter: pytest.TerminalReporter,
    exitstatus: int,
    config: pytest.Config,
) -> None:  # noqa: D401
    """Append a compact custom summary at the end of test session."""
    stats = terminalreporter.stats
    passed = len(stats.get("passed", []))
    failed = len(stats.get("failed", []))
    errors = len(stats.get("error", []))
    skipped = len(stats.get("skipped", []))

    terminalreporter.section("Custom summary", sep="=")
    terminalreporter.write_line(
        f"Passed: {passed} | Failed: {failed} | Errors: {errors} | Skipped: {skipped}"
    )
    if failed:
        terminalreporter.write_line("Failed tests:")
        for rep in stats["failed"]:
            terminalreporter.write_line(f"  - {rep.nodeid}")
