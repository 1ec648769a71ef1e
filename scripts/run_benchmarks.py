#!/usr/bin/env python3
"""Time full synthesis and per-scenario reduction from the empty board."""
from __future__ import annotations

import argparse
import logging
import math
import statistics as stats
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple

from tictree.dominance import scenario_policies
from tictree.reducer import reduce_tree
from tictree.synthesis import synthesize
from tictree.tracking import log_metrics, log_params, tracking_run


def ci95(values: List[float]) -> Tuple[float, float]:
    if not values:
        return (float("nan"), float("nan"))
    m = stats.fmean(values)
    s = stats.pstdev(values) if len(values) > 1 else 0.0
    half = 1.96 * (s / math.sqrt(len(values)))
    return m, half


@dataclass
class Config:
    repeats: int = 3
    tracking: str = "none"  # or "mlflow"
    log_dir: Path = Path("runs")


def main() -> int:
    ap = argparse.ArgumentParser(description=__doc__)
    ap.add_argument("--repeats", type=int, default=Config.repeats)
    ap.add_argument("--tracking", choices=["none", "mlflow"], default=Config.tracking)
    ns = ap.parse_args()
    cfg = Config(repeats=ns.repeats, tracking=ns.tracking)
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

    with tracking_run(cfg.tracking, run_name="benchmarks", log_dir=cfg.log_dir):
        log_params({"repeats": cfg.repeats})
        build_times: List[float] = []
        reduce_times: Dict[str, List[float]] = {name: [] for name in scenario_policies()}
        for _ in range(cfg.repeats):
            t0 = time.perf_counter()
            tree = synthesize()
            build_times.append(time.perf_counter() - t0)
            for name, dominator in scenario_policies().items():
                t1 = time.perf_counter()
                reduce_tree(tree, dominator)
                reduce_times[name].append(time.perf_counter() - t1)

        metrics: Dict[str, float] = {}
        m, h = ci95(build_times)
        metrics["synthesize_mean_s"], metrics["synthesize_ci95_half_s"] = m, h
        logging.info("synthesize: mean=%.3fs ± %.3fs (95%% CI)", m, h)
        for name, times in reduce_times.items():
            m, h = ci95(times)
            metrics[f"reduce_{name}_mean_s"] = m
            logging.info("reduce %s: mean=%.3fs ± %.3fs (95%% CI)", name, m, h)
        log_metrics(metrics)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
