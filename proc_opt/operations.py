"""Schedule utilities: expansion into segments and validation.

Concepts
--------
Segment
    A ``ScheduleSegment(start, end, job_index)`` describing one stretch of
    machine time spent on a single job. Ordered sequences and preemptive
    timetables are both replayed into segments, which makes the invariants of
    a schedule (no start before release, every job processed for exactly its
    processing time) directly checkable.
"""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from .models import Job, JobSchedule, ScheduleSegment, TimetableEntry


def expand_sequence(jobs: Sequence[Job]) -> list[ScheduleSegment]:
    """Replay an ordered sequence into one segment per job.

    Each job starts at ``max(machine free, delivery_time)`` and runs to the end.
    ``job_index`` is the position in ``jobs``.
    """
    segments: list[ScheduleSegment] = []
    s = 0
    for index, job in enumerate(jobs):
        start = max(s, job.delivery_time)
        s = start + job.processing_time
        segments.append(ScheduleSegment(start=start, end=s, job_index=index))
    return segments


def expand_timetable(
    jobs: Sequence[Job],
    timetable: Sequence[TimetableEntry],
) -> list[ScheduleSegment]:
    """Replay a preemptive timetable into segments.

    An entry runs its job until the next entry or until the job's remaining
    processing time is used up, whichever comes first; the machine idles for
    the rest of the interval. The last entry runs to completion.

    Args:
        jobs: Jobs referenced by timetable indices.
        timetable: ``(time, job_index)`` events ordered by time.

    Returns:
        One segment per timetable entry, in timetable order.
    """
    remaining = [job.processing_time for job in jobs]
    segments: list[ScheduleSegment] = []
    for pos, (time, index) in enumerate(timetable):
        run = remaining[index]
        if pos + 1 < len(timetable):
            run = max(0, min(run, timetable[pos + 1][0] - time))
        remaining[index] -= run
        segments.append(ScheduleSegment(start=time, end=time + run, job_index=index))
    return segments


def validate_sequence(original: Sequence[Job], sequence: Sequence[Job]) -> bool:
    """Check that ``sequence`` is a reordering of ``original``.

    Returns:
        True if the multisets of jobs are equal.

    Raises:
        ValueError: If a job is missing, duplicated or foreign.
    """
    if len(original) != len(sequence):
        raise ValueError(
            f"Sequence length {len(sequence)} differs from job count {len(original)}"
        )
    missing = Counter(original) - Counter(sequence)
    if missing:
        raise ValueError(f"Sequence is not a permutation of the jobs, missing: {dict(missing)}")
    return True


def validate_schedule(schedule: JobSchedule) -> bool:
    """Validate timetable consistency of a preemptive schedule.

    Args:
        schedule: Schedule to check.

    Returns:
        True if the schedule is valid (return value mostly for use inside
        assertions).

    Raises:
        ValueError: If an index is out of range, times go backwards, an entry
            repeats the previous job, a job starts before its delivery time,
            a job is resumed after it finished, or any job is not processed
            for exactly its processing time.
    """
    jobs = schedule.jobs
    timetable = schedule.timetable
    if bool(jobs) != bool(timetable):
        raise ValueError("Timetable must be non-empty exactly when there are jobs")

    prev_time: int | None = None
    prev_index: int | None = None
    for time, index in timetable:
        if not (0 <= index < len(jobs)):
            raise ValueError(f"Job index out of range: {index}")
        if prev_time is not None and time < prev_time:
            raise ValueError(f"Timetable not ordered by time at t={time}")
        if index == prev_index:
            raise ValueError(f"Redundant timetable entry for job {index} at t={time}")
        if time < jobs[index].delivery_time:
            raise ValueError(
                f"Job {index} starts at t={time} before its delivery time "
                f"{jobs[index].delivery_time}"
            )
        prev_time, prev_index = time, index

    executed = [0] * len(jobs)
    started: set[int] = set()
    for segment in expand_timetable(jobs, timetable):
        index = segment.job_index
        if index in started and executed[index] == jobs[index].processing_time:
            raise ValueError(f"Job {index} resumed at t={segment.start} after completion")
        if segment.duration == 0 and jobs[index].processing_time > 0:
            raise ValueError(f"Job {index} gets no machine time at t={segment.start}")
        started.add(index)
        executed[index] += segment.duration
    for index, job in enumerate(jobs):
        if index not in started or executed[index] != job.processing_time:
            raise ValueError(
                f"Job {index} processed for {executed[index]} instead of {job.processing_time}"
            )
    return True
