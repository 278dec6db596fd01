"""
Benchmark runs over random formulas.
"""

import json
import logging
import random
import time
from dataclasses import asdict
from pathlib import Path
from statistics import mean
from typing import Dict, Union

from tqdm import tqdm

from .config import BenchmarkConfig, SolverConfig
from .formula import generate_random_formula
from .solver import DPLLSolver
from .verifier import SolutionVerifier

logger = logging.getLogger(__name__)


def run_benchmark(bench: BenchmarkConfig, solver_config: SolverConfig) -> Dict:
    """
    Solve random formulas and check every answer.

    Args:
        bench: Formula distribution, seed and verification switches.
        solver_config: Options passed to every DPLLSolver.

    Returns:
        Dictionary with per-formula records and totals.

    Raises:
        VerificationError: if any answer fails a check.
    """
    rng = random.Random(bench.seed)
    records = []

    for index in tqdm(range(bench.n_formulas), desc="Solving formulas"):
        n_vars = rng.randint(bench.var_min, bench.var_max)
        clauses, var_range = generate_random_formula(
            n_vars, clause_length=bench.clause_length, max_var=max(25, n_vars), rng=rng
        )

        solver = DPLLSolver(clauses, solver_config)
        start = time.perf_counter()
        satisfiable = solver.solve()
        elapsed = time.perf_counter() - start

        verifier = SolutionVerifier(clauses)
        if satisfiable:
            verifier.check_model(solver.assignment)
        elif n_vars <= bench.brute_force_max_vars:
            verifier.check_unsat(bench.brute_force_max_vars)
        if bench.cross_check:
            verifier.cross_check(satisfiable, solver.assignment if satisfiable else None)

        records.append({
            "index": index,
            "n_vars": n_vars,
            "n_clauses": len(clauses),
            "first_var": var_range.start,
            "satisfiable": satisfiable,
            "seconds": elapsed,
            **asdict(solver.stats),
        })

    n_sat = sum(1 for r in records if r["satisfiable"])
    summary = {
        "n_formulas": len(records),
        "sat": n_sat,
        "unsat": len(records) - n_sat,
        "mean_decisions": mean(r["decisions"] for r in records) if records else 0.0,
        "mean_seconds": mean(r["seconds"] for r in records) if records else 0.0,
    }
    logger.info(
        "Solved %d formulas: %d SAT, %d UNSAT, %.1f decisions on average",
        summary["n_formulas"], summary["sat"], summary["unsat"], summary["mean_decisions"]
    )

    return {
        "solver": asdict(solver_config),
        "benchmark": asdict(bench),
        "summary": summary,
        "records": records,
    }


def save_results(results: Dict, path: Union[str, Path]) -> None:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w') as f:
        json.dump(results, f, indent=2)
    logger.info("Saved results to %s", output_path)
