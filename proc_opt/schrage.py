"""Schrage's algorithm for 1|r_j,q_j|C_max, with and without preemptions.

Jobs are scheduled greedily as early as possible. When several jobs are
available, the one with the largest cooldown time ``q`` goes first, larger
processing time ``p`` breaking ties. Without preemptions this is a heuristic;
with preemptions (a running job is interrupted whenever a newly released job
may overtake it) the resulting schedule is optimal.

Ready pool: min-heap (``heapq``) of ``(-q, -p, index, job)``.
The index makes exact ``(q, p)`` ties pop the earlier job first and keeps
``Job`` objects out of the comparison.
"""

from __future__ import annotations

import heapq
import logging
from typing import Iterable

from .models import Job, JobList, JobSchedule, TimetableEntry

logger = logging.getLogger("proc_opt.schrage")


def priority(job: Job) -> tuple[int, int]:
    """Priority of an available job; a larger tuple runs first."""
    return job.cooldown_time, job.processing_time


class ReadyQueue:
    """Jobs released and waiting for the machine, highest priority first."""

    def __init__(self) -> None:
        self._heap: list[tuple[int, int, int, Job]] = []

    def push(self, job: Job, index: int) -> None:
        q, p = priority(job)
        heapq.heappush(self._heap, (-q, -p, index, job))

    def pop(self) -> tuple[Job, int]:
        _, _, index, job = heapq.heappop(self._heap)
        return job, index

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)


def schrage(jobs: Iterable[Job]) -> JobList:
    """Order jobs with Schrage's heuristic (no preemptions).

    Runs in O(n log n) time for n jobs.

    Args:
        jobs: Jobs in any order; may be empty.

    Returns:
        JobList with the jobs in the order they should be loaded on the
        machine. It is a permutation of the input.

    Example:
        >>> js = [Job(10, 5, 7), Job(13, 6, 26), Job(11, 7, 24), Job(20, 4, 21),
        ...       Job(30, 3, 8), Job(0, 6, 17), Job(30, 2, 0)]
        >>> schrage(js).c_max()
        53
    """
    by_delivery = sorted(jobs, key=lambda job: job.delivery_time)
    ready_to_run = ReadyQueue()
    t = 0
    pi = JobList()
    next_job = 0

    while next_job < len(by_delivery) or ready_to_run:
        while (
            next_job < len(by_delivery)
            and by_delivery[next_job].delivery_time <= t
        ):
            ready_to_run.push(by_delivery[next_job], next_job)
            next_job += 1
        if ready_to_run:
            job, _ = ready_to_run.pop()
            pi.jobs.append(job)
            t += job.processing_time
        else:
            # nothing available: skip to the nearest release
            t = by_delivery[next_job].delivery_time

    logger.debug("schrage: scheduled %d jobs, finished processing at t=%d", len(pi), t)
    return pi


def schrage_preemptive(jobs: Iterable[Job]) -> JobSchedule:
    """Schedule jobs with preemptive Schrage, minimizing the makespan.

    Runs in O(n log n) time for n jobs.

    Args:
        jobs: Jobs in any order; may be empty.

    Returns:
        JobSchedule whose ``jobs`` are sorted by ascending delivery time and
        whose timetable lists every start or resumption as
        ``(time, index into jobs)``.

    Example:
        >>> result = schrage_preemptive(
        ...     [Job(0, 27, 78), Job(140, 7, 67), Job(14, 36, 54), Job(133, 76, 5)]
        ... )
        >>> result.timetable
        [(0, 0), (27, 1), (133, 2), (140, 3), (147, 2)]
        >>> result.c_max()
        221
    """
    by_delivery = sorted(jobs, key=lambda job: job.delivery_time)
    # entries hold a copy of the job carrying its remaining processing time
    ready_to_run = ReadyQueue()
    t = 0
    timetable: list[TimetableEntry] = []
    next_job = 0
    interruptions = 0

    while next_job < len(by_delivery) or ready_to_run:
        while (
            next_job < len(by_delivery)
            and by_delivery[next_job].delivery_time <= t
        ):
            ready_to_run.push(by_delivery[next_job], next_job)
            next_job += 1
        if not ready_to_run:
            t = by_delivery[next_job].delivery_time
            continue

        job, i = ready_to_run.pop()
        # continuing the job that already runs needs no new entry
        if not timetable or timetable[-1][1] != i:
            timetable.append((t, i))
        t += job.processing_time
        if next_job < len(by_delivery):
            next_delivery = by_delivery[next_job].delivery_time
            if next_delivery < t:
                remaining = Job(job.delivery_time, t - next_delivery, job.cooldown_time)
                ready_to_run.push(remaining, i)
                t = next_delivery
                interruptions += 1

    logger.debug(
        "schrage_preemptive: %d jobs, %d timetable entries, %d interruptions",
        len(by_delivery),
        len(timetable),
        interruptions,
    )
    return JobSchedule(jobs=by_delivery, timetable=timetable)
