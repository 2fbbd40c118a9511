"""Makespan (Cmax) evaluation kept apart from models.py to avoid circular imports.

Two replays are provided: one for a plain ordered sequence and one for a
preemptive schedule described by (time, job_index) start/resume events.
``makespan`` picks the right one for a scheduler result.
"""

from __future__ import annotations

from typing import Sequence

from .models import Job, JobList, JobSchedule, TimetableEntry


def c_max_sequence(jobs: Sequence[Job]) -> int:
    makespan = 0
    s = 0  # current time
    for job in jobs:
        if job.delivery_time > s:
            # machine idles until the release, then runs
            s = job.delivery_time + job.processing_time
        else:
            s += job.processing_time
        makespan = max(makespan, s + job.cooldown_time)
    return makespan


def c_max_schedule(jobs: Sequence[Job], timetable: Sequence[TimetableEntry]) -> int:
    """Compute the makespan of a preemptive schedule.

    Every entry is first scored as if its job ran uninterrupted from that
    entry to completion; the remaining processing time is then reduced by the
    time that passed until the next entry. The last score of a job is the one
    taken when it is no longer preempted, so the maximum over all scores is
    the makespan.

    Args:
        jobs: Jobs referenced by the timetable indices.
        timetable: ``(time, job_index)`` events in ascending time order.

    Returns:
        Makespan, or 0 for an empty timetable.
    """
    if not timetable:
        return 0
    remaining = [job.processing_time for job in jobs]
    makespan = 0
    prev_time, prev_index = timetable[0]
    for time, index in timetable[1:]:
        makespan = max(
            makespan,
            prev_time + remaining[prev_index] + jobs[prev_index].cooldown_time,
        )
        remaining[prev_index] = max(0, remaining[prev_index] - (time - prev_time))
        prev_time, prev_index = time, index
    return max(
        makespan,
        prev_time + remaining[prev_index] + jobs[prev_index].cooldown_time,
    )


def makespan(result: JobList | JobSchedule | Sequence[Job]) -> int:
    """Return Cmax of a scheduler result.

    A bare sequence of jobs is evaluated in the given order.

    Raises:
        TypeError: For anything that is neither a schedule nor a job sequence.
    """
    if isinstance(result, JobSchedule):
        return c_max_schedule(result.jobs, result.timetable)
    if isinstance(result, JobList):
        return c_max_sequence(result.jobs)
    if isinstance(result, (list, tuple)) and all(isinstance(j, Job) for j in result):
        return c_max_sequence(result)
    raise TypeError(f"Cannot compute makespan of {type(result).__name__}")
