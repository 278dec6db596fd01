#!/usr/bin/env python3
"""
Tests for the DPLL solver.

Checks:
1. Soundness: SAT answers satisfy every clause of the input
2. Completeness: UNSAT answers agree with exhaustive enumeration
3. Recursive and iterative search give identical results
4. Completion assigns every variable of the input
5. The shared assignment is overwritten, never undone, on backtracking
"""

import random
import sys

from dpll_sat import (
    DPLLSolver,
    SolutionVerifier,
    SolverConfig,
    brute_force_model,
    complete_assignment,
    dpll,
    generate_random_formula,
    is_satisfied,
    solve,
    variables,
    verify_solver_result,
)
from dpll_sat.errors import ConfigError, VerificationError
from dpll_sat.solver import select_first_literal, select_max_occurrence


def test_scenario_three_clauses():
    formula = [[1, -2], [-1, 3], [2, -3]]
    result = solve(formula)
    assert result.satisfiable
    assert is_satisfied(formula, result.assignment)
    assert result.assignment == {1: True, 2: True, 3: True}


def test_scenario_unit_conflict():
    result = solve([[1], [-1]])
    assert not result.satisfiable
    assert result.assignment is None
    assert result.stats.decisions == 0
    assert result.stats.conflicts == 1


def test_scenario_full_case_split():
    solver = DPLLSolver([[1, 2], [-1, 2], [1, -2], [-1, -2]], SolverConfig(record_trace=True))
    assert not solver.solve()
    assert solver.stats.decisions == 1
    assert solver.stats.backtracks == 1
    assert solver.stats.conflicts == 2
    assert solver.trace == [
        ("DECIDE", 1),
        ("PROPAGATE", 2),
        ("CONFLICT", None),
        ("BACKTRACK", 1),
        ("PROPAGATE", 2),
        ("CONFLICT", None),
        ("UNSAT", None),
    ]


def test_scenario_single_unit():
    result = solve([[5]])
    assert result.satisfiable
    assert result.assignment == {5: True}


def test_scenario_pure_literal():
    result = solve([[1, 2], [1, 3]])
    assert result.satisfiable
    assert result.assignment[1] is True
    assert result.stats.decisions == 0
    assert result.stats.pure_literals == 3


def test_empty_formula_and_empty_clause():
    assert solve([]).satisfiable
    assert solve([]).assignment == {}
    assert not solve([[]]).satisfiable
    assert not solve([[1, 2], []]).satisfiable


def test_tautology():
    result = solve([[1, -1]])
    assert result.satisfiable
    assert result.assignment == {1: True}


def test_backtrack_overwrites_without_undo():
    # x2 is set inside the failed x1=True branch and keeps its value
    solver = DPLLSolver([[-1, 2], [-1, -2], [3, 1]], SolverConfig(record_trace=True))
    assert solver.solve()
    assert solver.assignment == {1: False, 2: True, 3: True}
    assert solver.trace == [
        ("PURE", 3),
        ("DECIDE", 1),
        ("PROPAGATE", 2),
        ("CONFLICT", None),
        ("BACKTRACK", 1),
        ("SAT", None),
    ]
    assert is_satisfied(solver.clauses, solver.assignment)


def test_completion_totality():
    result = solve([[1, 2]], SolverConfig(pure_literals=False))
    assert result.assignment == {1: True, 2: True}

    result = solve([[1, 2]], SolverConfig(pure_literals=False, default_value=False))
    assert result.assignment == {1: True, 2: False}

    assignment = complete_assignment([[1, -7], [3]], {3: False})
    assert assignment == {3: False, 1: True, 7: True}


def test_dpll_partial_assignment():
    assignment = {}
    assert dpll([[1, 2], [1, 3]], assignment)
    assert assignment == {1: True, 2: True, 3: True}

    assignment = {}
    assert not dpll([[1], [-1, 2], [-2]], assignment)


def test_soundness_and_completeness():
    rng = random.Random(2024)
    for i in range(150):
        n_vars = 3 + i % 4  # 3-6 variables
        formula, _ = generate_random_formula(n_vars, rng=rng)
        result = solve(formula)
        model = brute_force_model(formula)

        assert result.satisfiable == (model is not None), formula
        if result.satisfiable:
            assert is_satisfied(formula, result.assignment), formula
            assert set(variables(formula)) <= set(result.assignment)


def test_search_modes_agree():
    rng = random.Random(5)
    for i in range(60):
        formula, _ = generate_random_formula(5 + i % 8, rng=rng)
        recursive = DPLLSolver(formula, SolverConfig(search="recursive", record_trace=True))
        iterative = DPLLSolver(formula, SolverConfig(search="iterative", record_trace=True))

        assert recursive.solve() == iterative.solve()
        assert recursive.assignment == iterative.assignment
        assert recursive.stats == iterative.stats
        assert recursive.trace == iterative.trace


def _pair_chain(n_pairs):
    # Each pair of clauses costs one decision
    formula = []
    for k in range(n_pairs):
        a, b = 2 * k + 1, 2 * k + 2
        formula.append([a, b])
        formula.append([-a, -b])
    return formula


def test_iterative_deep_search():
    n_pairs = 1100
    formula = _pair_chain(n_pairs)

    solver = DPLLSolver(formula, SolverConfig(search="iterative"))
    assert solver.solve()
    assert solver.stats.decisions == n_pairs
    assert solver.stats.max_depth == n_pairs
    assert is_satisfied(formula, solver.assignment)


def test_default_search_deep_formula():
    # Deeper than the recursion limit, with the default recursive mode
    n_pairs = 1100
    formula = _pair_chain(n_pairs)
    assert SolverConfig().search == "recursive"

    result = solve(formula)
    assert result.satisfiable
    assert is_satisfied(formula, result.assignment)
    assert result.stats.decisions == n_pairs
    assert result.stats.max_depth == n_pairs


def test_heuristics():
    assert select_first_literal([[-4, 1], [2]]) == 4
    assert select_max_occurrence([[1, 2], [2, 3], [-2, 4]]) == 2
    assert select_max_occurrence([[3, 1], [1, 3]]) == 3

    rng = random.Random(9)
    for _ in range(40):
        formula, _ = generate_random_formula(7, rng=rng)
        first = solve(formula, SolverConfig(heuristic="first"))
        busiest = solve(formula, SolverConfig(heuristic="max_occurrence"))
        assert first.satisfiable == busiest.satisfiable
        if busiest.satisfiable:
            assert is_satisfied(formula, busiest.assignment)


def test_invalid_config():
    for config in (SolverConfig(search="parallel"), SolverConfig(heuristic="vsids")):
        try:
            DPLLSolver([[1]], config)
        except ConfigError:
            continue
        raise AssertionError(f"{config} accepted")


def test_verifier():
    formula = [[1, -2], [2]]
    verifier = SolutionVerifier(formula)
    verifier.check_model({1: True, 2: True})

    for bad in ({1: False, 2: True}, {2: True}):
        try:
            verifier.check_model(bad)
        except VerificationError:
            continue
        raise AssertionError(f"{bad} accepted")

    try:
        verifier.check_unsat()
    except VerificationError:
        pass
    else:
        raise AssertionError("satisfiable formula reported UNSAT")

    SolutionVerifier([[1], [-1]]).check_unsat()


def test_cross_check_with_pysat():
    rng = random.Random(3)
    for _ in range(20):
        formula, _ = generate_random_formula(8, rng=rng)
        solver = DPLLSolver(formula)
        solver.solve()
        assert verify_solver_result(solver, cross_check=True)

    try:
        SolutionVerifier([[1], [-1]]).cross_check(True, {1: True})
    except VerificationError:
        pass
    else:
        raise AssertionError("wrong SAT answer accepted")


def test_verify_requires_solve():
    try:
        verify_solver_result(DPLLSolver([[1]]))
    except ValueError:
        return
    raise AssertionError("unsolved solver accepted")


def main():
    """Run all tests."""
    print("=" * 50)
    print("DPLL Solver Tests")
    print("=" * 50)

    tests = [
        test_scenario_three_clauses,
        test_scenario_unit_conflict,
        test_scenario_full_case_split,
        test_scenario_single_unit,
        test_scenario_pure_literal,
        test_empty_formula_and_empty_clause,
        test_tautology,
        test_backtrack_overwrites_without_undo,
        test_completion_totality,
        test_dpll_partial_assignment,
        test_soundness_and_completeness,
        test_search_modes_agree,
        test_iterative_deep_search,
        test_default_search_deep_formula,
        test_heuristics,
        test_invalid_config,
        test_verifier,
        test_cross_check_with_pysat,
        test_verify_requires_solve,
    ]
    failed = 0
    for test in tests:
        try:
            test()
            print(f"  {test.__name__}: PASS")
        except AssertionError as e:
            failed += 1
            print(f"  {test.__name__}: FAIL {e}")

    print("\n" + "=" * 50)
    print("ALL TESTS PASSED" if not failed else f"{failed} TESTS FAILED")
    print("=" * 50)
    return 0 if not failed else 1


if __name__ == "__main__":
    sys.exit(main())
