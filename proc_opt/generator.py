import random
from typing import List

from .models import Job


def generate_rpq_instance(
    n: int,
    seed: int = 0,
    max_processing: int = 29,
) -> List[Job]:
    """Generate a Carlier-like random 1|r_j,q_j|C_max instance.

    Processing times are drawn from ``1..max_processing``; release and cooldown
    times from ``1..A`` with ``A = n * max_processing`` so that both tails
    matter for the makespan.
    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    rng = random.Random(seed)
    span = max(1, n * max_processing)
    return [
        Job(
            rng.randint(1, span),  # r
            rng.randint(1, max_processing),  # p
            rng.randint(1, span),  # q
        )
        for _ in range(n)
    ]
