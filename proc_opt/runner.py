"""Algorithm dispatch and single-instance runs.

``run_algorithm`` invokes one scheduler uniformly (timing included) and
``run_all`` runs a selection of them on one instance, logs a summary and
persists the results as JSON, optionally with Gantt charts.
"""
from __future__ import annotations

import json
import logging
import os
import time
from datetime import datetime
from typing import Any, Dict, Iterable, Optional, Sequence

from .models import Job, JobList, JobSchedule
from .schrage import schrage, schrage_preemptive
from .visualization import next_unique_path, plot_gantt

logger = logging.getLogger("proc_opt.runner")

ALGORITHMS = ("natural", "schrage", "schrage_preemptive")


def run_algorithm(
    name: str,
    jobs: Sequence[Job],
) -> tuple[JobList | JobSchedule, int, float]:
    """Execute selected algorithm and return its result triple.

    Args:
        name: One of ``ALGORITHMS``; ``"natural"`` keeps the input order.
        jobs: Instance jobs.

    Returns:
        Tuple ``(result, cmax, elapsed_seconds)``.

    Raises:
        ValueError: If an unknown algorithm name is provided.
    """
    t0 = time.perf_counter()
    if name == "natural":
        result: JobList | JobSchedule = JobList(list(jobs))
    elif name == "schrage":
        result = schrage(jobs)
    elif name == "schrage_preemptive":
        result = schrage_preemptive(jobs)
    else:
        raise ValueError(f"Unknown algorithm: {name}")
    cmax = result.c_max()
    return result, cmax, time.perf_counter() - t0


def _result_to_dict(result: JobList | JobSchedule) -> Dict[str, Any]:
    block: Dict[str, Any] = {
        "jobs": [
            [job.delivery_time, job.processing_time, job.cooldown_time] for job in result.jobs
        ]
    }
    if isinstance(result, JobSchedule):
        block["timetable"] = [[time, index] for time, index in result.timetable]
    return block


def run_all(
    jobs: Sequence[Job],
    instance_name: str,
    results_dir: str,
    algorithms: Iterable[str] = ALGORITHMS,
    charts_dir: Optional[str] = None,
) -> Dict[str, Any]:
    """Run several algorithms on one instance and persist the results.

    Args:
        jobs: Instance jobs.
        instance_name: Name stored in the JSON output and used in file names.
        results_dir: Directory for ``results_<instance>_<timestamp>.json``
            (created if missing).
        algorithms: Algorithm names, see ``ALGORITHMS``.
        charts_dir: When given, a Gantt chart per algorithm is saved there.

    Returns:
        The JSON payload as a dict.
    """
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    results: Dict[str, Any] = {}
    outcomes: Dict[str, JobList | JobSchedule] = {}
    for name in algorithms:
        result, cmax, elapsed = run_algorithm(name, jobs)
        outcomes[name] = result
        results[name] = {"cmax": cmax, "time": elapsed, **_result_to_dict(result)}
        logger.info("%-18s: cmax=%d (%.6fs)", name, cmax, elapsed)

    if results:
        best_name = min(results, key=lambda k: results[k]["cmax"])
        logger.info("Best algorithm=%s cmax=%s", best_name, results[best_name]["cmax"])

    payload = {
        "instance": instance_name,
        "jobs_number": len(jobs),
        "timestamp": stamp,
        "results": results,
    }
    os.makedirs(results_dir, exist_ok=True)
    results_path = next_unique_path(
        os.path.join(results_dir, f"results_{instance_name}_{stamp}.json")
    )
    with open(results_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
    logger.info("Saved results JSON to %s", results_path)

    if charts_dir:
        for name, result in outcomes.items():
            try:
                g_path = next_unique_path(
                    os.path.join(
                        charts_dir,
                        f"gantt_{name}_c{results[name]['cmax']}_{instance_name}_{stamp}.png",
                    )
                )
                plot_gantt(
                    result,
                    save_path=g_path,
                    title=f"{name}: Cmax = {results[name]['cmax']}",
                )
                logger.info("Saved Gantt chart for %s to %s", name, g_path)
            except Exception as e:  # pragma: no cover
                logger.warning("Failed to create Gantt chart for %s: %s", name, e)
    return payload
