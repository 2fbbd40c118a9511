#!/usr/bin/env python3
import argparse
import json
import logging
import os
from typing import Any, Dict

import yaml

from proc_opt.generator import generate_rpq_instance
from proc_opt.parser import parse_rpq_data
from proc_opt.runner import ALGORITHMS, run_all

logger = logging.getLogger("proc_opt")


def load_config(config_file: str = "config.yaml") -> Dict[str, Any]:
    """Load configuration from a YAML (or JSON) file."""
    if not os.path.isfile(config_file):
        raise FileNotFoundError(f"Config file not found: {config_file}")
    with open(config_file, "r", encoding="utf-8") as f:
        text = f.read()
    if config_file.endswith(".json"):
        return json.loads(text)
    return yaml.safe_load(text) or {}


def main(config: Dict[str, Any]) -> Dict[str, Any]:
    log_level = config.get("log_level", "INFO")
    logging.basicConfig(
        level=getattr(logging, str(log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    gen_cfg = config.get("generator") or {}
    if gen_cfg.get("enabled"):
        n = int(gen_cfg.get("n", 10))
        seed = int(gen_cfg.get("seed", 0))
        jobs = generate_rpq_instance(n, seed=seed)
        instance_name = f"generated_n{n}_seed{seed}"
        logger.info("Generated instance %s", instance_name)
    else:
        instance_path = config.get("instance")
        if not instance_path:
            raise ValueError("Config needs 'instance' or an enabled 'generator' section")
        instance_number = int(config.get("instance_number", 0))
        jobs = parse_rpq_data(instance_path, instance_number=instance_number)
        data_name = os.path.basename(instance_path).split(".")[0]
        instance_name = f"{data_name}_instance{instance_number}"

    algorithms = config.get("algorithms") or list(ALGORITHMS)
    charts_cfg = config.get("charts") or {}
    charts_dir = charts_cfg.get("dir", "charts") if charts_cfg.get("enabled") else None

    payload = run_all(
        jobs,
        instance_name=instance_name,
        results_dir=config.get("results_dir", "results"),
        algorithms=algorithms,
        charts_dir=charts_dir,
    )
    for name, block in payload["results"].items():
        print(f"Final cmax for {name}: {block['cmax']}")
    return payload


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Schrage scheduling for 1|r_j,q_j|C_max")
    parser.add_argument(
        "--config",
        default="config.yaml",
        help="Path to the YAML/JSON configuration file",
    )
    args = parser.parse_args()
    main(load_config(args.config))
