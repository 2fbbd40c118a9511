import os
from pathlib import Path
from typing import Optional

import matplotlib

matplotlib.use("Agg")  # Must be set before importing pyplot
import matplotlib.pyplot as plt  # noqa: E402

from .models import JobList, JobSchedule  # noqa: E402


def _ensure_dir(path: str):
    if path:
        os.makedirs(path, exist_ok=True)


def plot_gantt(
    result: JobList | JobSchedule,
    save_path: str,
    title: Optional[str] = None,
    show_legend: Optional[bool] = None,
) -> str:
    """Draw a Gantt chart of a single machine schedule and save it.

    One row per job: solid bars are processing segments (several for a
    preempted job), the hatched bar is the cooldown after the job's last
    segment. A dashed line marks Cmax.

    Args:
        result: Ordered sequence or preemptive schedule.
        save_path: Target image path; parent directories are created.
        title: Optional chart title, ``"Gantt Chart - Cmax = ..."`` by default.
        show_legend: Force the legend on/off; auto (jobs <= 40) when None.

    Returns:
        The path the chart was saved to.
    """
    jobs = result.jobs
    n = len(jobs)
    segments = result.segments()
    cmax = result.c_max()

    fig, ax = plt.subplots(
        figsize=(min(10 + n * 0.05, 18), min(0.4 * n + 2, 16)),
        constrained_layout=True,
    )
    cmap = matplotlib.colormaps["tab20"]
    colors = [cmap(i % 20) for i in range(n)]

    completion: dict[int, int] = {}
    for seg in segments:
        ax.barh(
            seg.job_index,
            seg.duration,
            left=seg.start,
            height=0.8,
            color=colors[seg.job_index],
            alpha=0.85,
            edgecolor="black",
            linewidth=0.6,
        )
        completion[seg.job_index] = max(completion.get(seg.job_index, 0), seg.end)
    for index, end in completion.items():
        ax.barh(
            index,
            jobs[index].cooldown_time,
            left=end,
            height=0.4,
            color=colors[index],
            alpha=0.35,
            hatch="//",
            edgecolor="gray",
            linewidth=0.4,
        )

    ax.axvline(x=cmax, color="red", linestyle="--", linewidth=1.2)
    ax.set_xlabel("Time", fontsize=12)
    ax.set_ylabel("Job", fontsize=12)
    ax.set_title(title or f"Gantt Chart - Cmax = {cmax}", fontsize=14, fontweight="bold")
    ax.set_yticks(range(n))
    ax.set_yticklabels([str(job) for job in jobs], fontsize=8)
    ax.invert_yaxis()
    ax.grid(True, alpha=0.25, axis="x", linestyle="--", linewidth=0.7)

    if show_legend is None:
        show_legend = 0 < n <= 40
    if show_legend:
        legend_elements = [
            plt.Rectangle(
                (0, 0), 1, 1, facecolor=colors[i], alpha=0.85, edgecolor="black", label=f"Job {i}"
            )
            for i in range(n)
        ]
        ax.legend(
            handles=legend_elements,
            bbox_to_anchor=(1.02, 1),
            loc="upper left",
            borderaxespad=0.0,
            fontsize=8,
            frameon=False,
            ncol=1 if n <= 25 else 2,
        )

    _ensure_dir(os.path.dirname(save_path))
    fig.savefig(save_path, dpi=180)
    plt.close(fig)
    return save_path


def next_unique_path(path: str | Path) -> str:
    """If the file exists, append _1, _2 ... until a free name is found."""
    p = Path(path)
    if not p.exists():
        return str(p)
    stem = p.stem
    suffix = p.suffix
    parent = p.parent
    counter = 1
    while True:
        candidate = parent / f"{stem}_{counter}{suffix}"
        if not candidate.exists():
            return str(candidate)
        counter += 1
