"""Pytest tests for `parse_rpq_data`.

Tests read the bundled fixtures or create a temporary instance file and assert
either successful parsing or the correct exception.
"""

from __future__ import annotations

import os
import tempfile
from contextlib import contextmanager

import pytest

from proc_opt.models import Job
from proc_opt.parser import list_instances, parse_rpq_data


@contextmanager
def temp_instance(content: str):
    fd, path = tempfile.mkstemp(text=True)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        yield path
    finally:
        try:
            os.remove(path)
        except FileNotFoundError:  # pragma: no cover
            pass


def test_parse_labelled_fixture(fixtures_dir, example_jobs) -> None:
    path = str(fixtures_dir / "schrage.txt")
    assert list_instances(path) == ["data.000", "data.001", "data.002"]
    assert parse_rpq_data(path) == example_jobs
    ten = parse_rpq_data(path, instance_number=1)
    assert len(ten) == 10
    assert ten[0] == Job(52, 1, 56)
    assert len(parse_rpq_data(path, instance_number=2)) == 20


def test_parse_header_with_extra_tokens(fixtures_dir) -> None:
    jobs = parse_rpq_data(str(fixtures_dir / "preemption.txt"))
    assert jobs == [Job(0, 27, 78), Job(140, 7, 67), Job(14, 36, 54), Job(133, 76, 5)]


def test_parse_unlabelled_instances_get_default_labels() -> None:
    with temp_instance("1\n0 1 2\n\n2\n3 4 5\n6 7 8\n0\n") as path:
        assert list_instances(path) == ["data.000", "data.001", "data.002"]
        assert parse_rpq_data(path, 1) == [Job(3, 4, 5), Job(6, 7, 8)]
        assert parse_rpq_data(path, 2) == []


@pytest.mark.parametrize("instance_number", [-1, 3])
def test_parse_instance_number_out_of_range(fixtures_dir, instance_number) -> None:
    with pytest.raises(IndexError):
        parse_rpq_data(str(fixtures_dir / "schrage.txt"), instance_number=instance_number)


@pytest.mark.parametrize(
    "content",
    [
        """x\n0 1 2\n""",  # invalid header
        """-1\n""",  # negative job count
        """2\n0 1 2\n""",  # declares 2 jobs, provides 1
        """1\n0 1\n""",  # invalid token count
        """1\n0 1 a\n""",  # non-integer value
        """1\n0 -1 2\n""",  # negative processing time
        """1\n0 1 2\n0 5 5\n""",  # stray job row after a complete instance
        """1\n0 1 2\n9 5 5\n""",  # stray row with a large first value
        """2 3 4 5\n0 1 2\n0 1 2\n""",  # header with too many tokens
    ],
)
def test_parse_errors(content: str) -> None:
    with temp_instance(content) as path:
        with pytest.raises(ValueError):
            parse_rpq_data(path)
