"""
CNF formula model and random formula generation.

A formula is a list of clauses, a clause is a list of signed integer
literals. Positive literals are unnegated variables, negative literals are
negated ones, and the magnitude is the variable identifier.
"""

import random
from typing import Dict, List, Optional, Tuple

Literal = int
Clause = List[Literal]
Formula = List[Clause]
Assignment = Dict[int, bool]


# Empirically determined clause counts for balanced (phase transition) 3-SAT
BALANCED_CLAUSE_COUNTS = {
    3: 19, 4: 24, 5: 28, 6: 33, 7: 37, 8: 41, 9: 45, 10: 50,
    11: 54, 12: 58, 13: 63, 14: 67, 15: 71, 16: 76, 17: 79,
    18: 83, 19: 87, 20: 92
}


def variables(formula: Formula) -> List[int]:
    """Sorted distinct variable identifiers mentioned in the formula."""
    return sorted({abs(lit) for clause in formula for lit in clause})


def literal_value(literal: Literal, assignment: Assignment) -> Optional[bool]:
    """Truth value of a literal under an assignment, None if unassigned."""
    value = assignment.get(abs(literal))
    if value is None:
        return None
    return value if literal > 0 else not value


def copy_formula(formula: Formula) -> Formula:
    return [list(clause) for clause in formula]


def generate_random_formula(
    n_vars: int,
    clause_length: int = 3,
    variance: float = 0.1,
    n_clauses: Optional[int] = None,
    max_var: int = 25,
    rng: Optional[random.Random] = None
) -> Tuple[Formula, range]:
    """
    Generate a random k-SAT formula near the phase transition.

    Args:
        n_vars: Number of variables.
        clause_length: Number of literals per clause (default 3 for 3-SAT).
        variance: Relative standard deviation in clause count (e.g., 0.1 = +/-10%).
        n_clauses: Fixed number of clauses. If None, uses phase transition estimate.
        max_var: Largest variable identifier the window may reach.
        rng: Random source, for reproducible formulas.

    Returns:
        Tuple of (clauses, variable_range) where:
        - clauses: List of clauses, each clause is a list of literals
        - variable_range: Range of variable identifiers used
    """
    if clause_length > n_vars:
        raise ValueError(
            f"clause_length {clause_length} exceeds number of variables {n_vars}"
        )
    rng = rng or random.Random()

    if n_clauses is None:
        base = BALANCED_CLAUSE_COUNTS.get(n_vars, int(n_vars * 4.26))
        delta = int(base * variance)
        n_clauses = rng.randint(base - delta, base + delta)

    # Random starting identifier so formulas do not always begin at 1
    interval_start = rng.randint(1, max(1, max_var + 1 - n_vars))
    var_range = range(interval_start, interval_start + n_vars)

    clauses = []
    for _ in range(n_clauses):
        clause_vars = rng.sample(list(var_range), clause_length)
        clause = [var if rng.random() < 0.5 else -var for var in clause_vars]
        clauses.append(clause)

    return clauses, var_range
