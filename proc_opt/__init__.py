"""Single machine scheduling with release and delivery times (1|r_j,q_j|C_max).

Exports the job model, Schrage's algorithms and makespan evaluation.
"""

from proc_opt.evaluation import makespan  # noqa: F401
from proc_opt.generator import generate_rpq_instance  # noqa: F401
from proc_opt.models import Job, JobList, JobSchedule  # noqa: F401
from proc_opt.parser import parse_rpq_data  # noqa: F401
from proc_opt.schrage import priority, schrage, schrage_preemptive  # noqa: F401

__all__ = [
    "Job",
    "JobList",
    "JobSchedule",
    "generate_rpq_instance",
    "makespan",
    "parse_rpq_data",
    "priority",
    "schrage",
    "schrage_preemptive",
]
