#!/usr/bin/env python3
"""
Solve CNF formulas with the DPLL solver.

Usage:
    python solve.py                                  # Interactive prompt
    python solve.py --formula "(1 OR -2) AND (2)"    # One formula
    python solve.py --dimacs problem.cnf             # DIMACS file
    python solve.py --set solver.search=iterative    # Config override
"""

import argparse
import logging
import sys

from dpll_sat import (
    InteractiveSession,
    InvalidFormulaError,
    SolutionVerifier,
    VerificationError,
    fmt_model,
    load_config,
    read_dimacs,
    solve,
)

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="DPLL SAT solver")
    parser.add_argument(
        "--formula",
        type=str,
        help="Solve one formula, e.g. \"(1 OR -2) AND (-1 OR 3)\""
    )
    parser.add_argument(
        "--dimacs",
        type=str,
        help="Solve a DIMACS CNF file"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML config file (default: built-in defaults)"
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Config override, e.g. solver.heuristic=max_occurrence (repeatable)"
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Cross-check every answer with PySAT"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log search decisions"
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s"
    )

    config = load_config(args.config, args.overrides)
    session = InteractiveSession(config.solver, verify=args.verify)

    if args.dimacs:
        return solve_dimacs(args.dimacs, config.solver, args.verify)

    if args.formula is not None:
        reply = session.respond(args.formula)
        if reply is not None:
            print(reply)
        return 1 if session.failures else 0

    session.run(sys.stdin, sys.stdout)
    return 1 if session.failures else 0


def solve_dimacs(path: str, solver_config, verify: bool) -> int:
    """Solve a DIMACS file and print the answer in competition format."""
    try:
        formula = read_dimacs(path)
    except InvalidFormulaError as e:
        logger.error("%s", e)
        return 1

    logger.info("Read %d clauses from %s", len(formula), path)
    result = solve(formula, solver_config)
    if verify:
        try:
            SolutionVerifier(formula).cross_check(result.satisfiable, result.assignment)
        except VerificationError as e:
            logger.error("%s", e)
            return 1

    if result.satisfiable:
        print("s SATISFIABLE")
        print(fmt_model(result.assignment))
    else:
        print("s UNSATISFIABLE")
    logger.info(
        "%d decisions, %d propagations, %d conflicts",
        result.stats.decisions, result.stats.propagations, result.stats.conflicts
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
