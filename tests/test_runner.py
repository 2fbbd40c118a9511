"""Tests for algorithm dispatch, JSON results and the config-driven entry point.

Output artefacts go to pytest's tmp_path.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from main import load_config, main
from proc_opt.models import JobList, JobSchedule
from proc_opt.runner import ALGORITHMS, run_algorithm, run_all
from proc_opt.visualization import next_unique_path, plot_gantt


def test_run_algorithm_dispatch(example_jobs) -> None:
    natural, c_nat, t_nat = run_algorithm("natural", example_jobs)
    assert isinstance(natural, JobList) and natural.jobs == example_jobs
    assert c_nat == 58
    assert t_nat >= 0.0
    assert run_algorithm("schrage", example_jobs)[1] == 53
    preemptive, c_pre, _ = run_algorithm("schrage_preemptive", example_jobs)
    assert isinstance(preemptive, JobSchedule)
    assert c_pre == 49


def test_run_algorithm_unknown(example_jobs) -> None:
    with pytest.raises(ValueError):
        run_algorithm("carlier", example_jobs)


def test_run_all_writes_results_and_charts(tmp_path: Path, example_jobs) -> None:
    results_dir = tmp_path / "results"
    charts_dir = tmp_path / "charts"
    payload = run_all(
        example_jobs,
        instance_name="ex1",
        results_dir=str(results_dir),
        charts_dir=str(charts_dir),
    )
    assert payload["instance"] == "ex1"
    assert payload["jobs_number"] == 7
    assert set(payload["results"]) == set(ALGORITHMS)
    assert payload["results"]["schrage"]["cmax"] == 53
    assert payload["results"]["schrage_preemptive"]["timetable"][0] == [0, 0]

    json_files = list(results_dir.glob("results_ex1_*.json"))
    assert len(json_files) == 1
    data = json.loads(json_files[0].read_text())
    assert data["results"]["natural"]["cmax"] == 58
    assert data["results"]["schrage_preemptive"]["cmax"] == 49
    assert len(data["results"]["schrage"]["jobs"]) == 7

    assert len(list(charts_dir.glob("gantt_*.png"))) == len(ALGORITHMS)


def test_plot_gantt_and_unique_path(tmp_path: Path, example_jobs) -> None:
    from proc_opt.schrage import schrage_preemptive

    target = tmp_path / "nested" / "gantt.png"
    saved = plot_gantt(schrage_preemptive(example_jobs), save_path=str(target))
    assert Path(saved).exists()
    assert next_unique_path(target) == str(tmp_path / "nested" / "gantt_1.png")
    # empty schedules still render
    assert Path(plot_gantt(JobList(), save_path=str(tmp_path / "empty.png"))).exists()


def test_main_with_instance_file(tmp_path: Path, fixtures_dir: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "log_level: WARNING\n"
        f"instance: {fixtures_dir / 'schrage.txt'}\n"
        "instance_number: 1\n"
        "algorithms: [schrage, schrage_preemptive]\n"
        f"results_dir: {tmp_path / 'results'}\n"
        "charts:\n"
        "  enabled: false\n"
    )
    payload = main(load_config(str(config_path)))
    assert payload["instance"] == "schrage_instance1"
    assert payload["results"]["schrage"]["cmax"] == 213
    assert set(payload["results"]) == {"schrage", "schrage_preemptive"}
    assert not (tmp_path / "charts").exists()


def test_main_with_generator_json_config(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps(
            {
                "generator": {"enabled": True, "n": 12, "seed": 3},
                "results_dir": str(tmp_path / "results"),
            }
        )
    )
    payload = main(load_config(str(config_path)))
    assert payload["instance"] == "generated_n12_seed3"
    results = payload["results"]
    assert results["schrage_preemptive"]["cmax"] <= results["schrage"]["cmax"]


def test_main_config_errors(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.yaml"))
    with pytest.raises(ValueError):
        main({"results_dir": str(tmp_path)})
