"""
Benchmark entry point for the DPLL solver on random 3-SAT.

Usage:
    python benchmark.py
    python benchmark.py benchmark.n_formulas=1000 benchmark.var_max=20
    python benchmark.py solver.search=iterative solver.heuristic=max_occurrence
"""

import logging

import hydra
from omegaconf import DictConfig, OmegaConf

from dpll_sat.collector import run_benchmark, save_results
from dpll_sat.config import from_dictconfig

logger = logging.getLogger(__name__)


@hydra.main(version_base=None, config_path="configs", config_name="default")
def main(cfg: DictConfig):
    # Ensure logging shows on console (Hydra can redirect it)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s", force=True)

    app = from_dictconfig(cfg)

    print("=" * 60)
    print("DPLL Benchmark")
    print("=" * 60)
    print(OmegaConf.to_yaml(cfg))

    results = run_benchmark(app.benchmark, app.solver)
    summary = results["summary"]
    print(f"SAT: {summary['sat']}, UNSAT: {summary['unsat']}")
    print(f"Mean decisions: {summary['mean_decisions']:.1f}, "
          f"mean time: {summary['mean_seconds'] * 1000:.2f} ms")

    if app.benchmark.output:
        # Hydra may change cwd; resolve against the original one
        save_results(results, hydra.utils.to_absolute_path(app.benchmark.output))
    logger.info("Benchmark complete.")


if __name__ == "__main__":
    main()
