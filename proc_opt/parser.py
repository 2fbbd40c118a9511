"""Reader for RPQ instance files.

Format (whitespace separated, blank lines ignored)::

    data.000:
    3
    0 14 20
    5 8 7
    42 10 5

The ``data.XXX:`` label is optional. A header line holds the number of
jobs ``n``, optionally followed by one extra token, and is followed by ``n`` rows
``r p q``. Several instances may be stacked in one file.
"""

from __future__ import annotations

import logging

from .models import Job

logger = logging.getLogger("proc_opt.parser")


def _read_instances(file_path: str) -> list[tuple[str, list[Job]]]:
    with open(file_path, "r", encoding="utf-8") as f:
        lines = iter([line.strip() for line in f if line.strip()])

    instances: list[tuple[str, list[Job]]] = []
    label = None
    for line in lines:
        if line.endswith(":"):
            label = line[:-1]
            continue
        header = line.split()
        if len(header) == 3:
            raise ValueError(f"Unexpected job row outside an instance: {line!r}")
        if len(header) > 3:
            raise ValueError(f"Invalid instance header: {line!r}")
        try:
            n = int(header[0])
        except ValueError as e:
            raise ValueError(f"Invalid instance header: {line!r}") from e
        if n < 0:
            raise ValueError(f"Negative job count in header: {line!r}")

        jobs: list[Job] = []
        for k in range(n):
            try:
                row = next(lines)
            except StopIteration:
                raise ValueError(f"Expected {n} job rows, found {k}") from None
            tokens = row.split()
            if len(tokens) != 3:
                raise ValueError(f"Expected 3 values (r p q) per row, got {row!r}")
            try:
                r, p, q = map(int, tokens)
            except ValueError as e:
                raise ValueError(f"Non-integer value in row {row!r}") from e
            jobs.append(Job(r, p, q))

        instances.append((label or f"data.{len(instances):03d}", jobs))
        label = None
    return instances


def list_instances(file_path: str) -> list[str]:
    """Return the labels of all instances stored in ``file_path``."""
    return [label for label, _ in _read_instances(file_path)]


def parse_rpq_data(file_path: str, instance_number: int = 0) -> list[Job]:
    """Parse one instance of an RPQ data file.

    Args:
        file_path: Path to the instance file.
        instance_number: 0-based position of the instance in the file.

    Returns:
        Jobs in file order.

    Raises:
        ValueError: On a malformed header, row, value or missing rows.
        IndexError: If ``instance_number`` is out of range.
    """
    instances = _read_instances(file_path)
    if instance_number < 0 or instance_number >= len(instances):
        raise IndexError(f"instance_number {instance_number} out of range")
    label, jobs = instances[instance_number]
    logger.info("Loaded %s from %s: %d jobs", label, file_path, len(jobs))
    return jobs
