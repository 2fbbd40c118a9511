"""Core data structures for single machine RPQ instances.

This module defines:
    Job             -- immutable (delivery_time, processing_time, cooldown_time) triple.
    JobList         -- ordered job sequence run without interruptions.
    JobSchedule     -- preemptive schedule: jobs plus a (time, job_index) timetable.
    ScheduleSegment -- one uninterrupted stretch of machine time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

TimetableEntry = tuple[int, int]  # (time, job_index)


@dataclass(frozen=True)
class Job:
    """Single job of the 1|r_j,q_j|C_max problem.

    Attributes:
        delivery_time: Release time ``r``; the job cannot start earlier.
        processing_time: Machine time ``p`` the job needs.
        cooldown_time: Tail ``q`` elapsing after processing, off the machine.
    """

    delivery_time: int
    processing_time: int
    cooldown_time: int

    def __post_init__(self) -> None:
        for name in ("delivery_time", "processing_time", "cooldown_time"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an int, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    def total_time(self) -> int:
        return self.delivery_time + self.processing_time + self.cooldown_time

    def __str__(self) -> str:
        return f"({self.delivery_time}, {self.processing_time}, {self.cooldown_time})"


@dataclass(frozen=True)
class ScheduleSegment:
    """Interval ``[start, end)`` during which ``job_index`` occupies the machine."""

    start: int
    end: int
    job_index: int

    @property
    def duration(self) -> int:
        return self.end - self.start


@dataclass
class JobList:
    """Ordered sequence of jobs; position in ``jobs`` is the schedule."""

    jobs: list[Job] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.jobs)

    def __iter__(self) -> Iterator[Job]:
        return iter(self.jobs)

    def __str__(self) -> str:
        return "".join(f"{job}\n" for job in self.jobs)

    def sorted_by_delivery_time(self) -> list[Job]:
        return sorted(self.jobs, key=lambda job: job.delivery_time)

    def sorted_by_processing_time(self) -> list[Job]:
        return sorted(self.jobs, key=lambda job: job.processing_time)

    def sorted_by_cooldown_time(self) -> list[Job]:
        return sorted(self.jobs, key=lambda job: job.cooldown_time)

    def c_max(self) -> int:
        """Makespan when the jobs run on one machine in list order."""
        from proc_opt.evaluation import c_max_sequence

        return c_max_sequence(self.jobs)

    def segments(self) -> list[ScheduleSegment]:
        from proc_opt.operations import expand_sequence

        return expand_sequence(self.jobs)


@dataclass
class JobSchedule:
    """Single machine schedule with possible preemptions.

    Fields:
        jobs: Jobs in release-ascending order; timetable indices point here.
        timetable: For every start or resumption of a job, the time and the
            job's position in ``jobs``. A job listed more than once was
            preempted in between.
    """

    jobs: list[Job] = field(default_factory=list)
    timetable: list[TimetableEntry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.jobs)

    def __str__(self) -> str:
        return "".join(
            f"t={time}: {index} {self.jobs[index]}\n" for time, index in self.timetable
        )

    def c_max(self) -> int:
        """Time at which all jobs, including their cooldown, are completed."""
        from proc_opt.evaluation import c_max_schedule

        return c_max_schedule(self.jobs, self.timetable)

    def segments(self) -> list[ScheduleSegment]:
        from proc_opt.operations import expand_timetable

        return expand_timetable(self.jobs, self.timetable)
