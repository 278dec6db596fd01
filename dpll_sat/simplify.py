"""
Formula simplification passes used by the DPLL search.

Every pass returns a new formula and leaves its input untouched, so sibling
branches of the search never see each other's rewrites. An empty clause is
kept in the result as the conflict marker.
"""

from collections import Counter
from typing import List, Optional, Tuple

from .formula import Assignment, Formula


def substitute(formula: Formula, variable: int, value: bool) -> Formula:
    """
    Simplify the formula under ``variable = value``.

    Clauses containing the literal made true are dropped, the literal made
    false is removed from the remaining clauses.
    """
    true_lit = variable if value else -variable
    false_lit = -true_lit

    new_formula = []
    for clause in formula:
        if true_lit in clause:
            continue
        new_formula.append([lit for lit in clause if lit != false_lit])
    return new_formula


def unit_propagate(
    formula: Formula,
    assignment: Assignment,
    forced: Optional[List[int]] = None
) -> Tuple[Formula, bool]:
    """
    Unit propagation to a fixed point.

    The first unit clause in clause order is resolved next, then the scan
    restarts on the rewritten formula.

    Args:
        formula: Formula to simplify.
        assignment: Receives the value of every forced variable.
        forced: Optional list receiving each forced literal in order.

    Returns:
        (simplified formula, ok) where ok is False iff an empty clause remains.
    """
    while True:
        unit = None
        for clause in formula:
            if len(clause) == 1:
                unit = clause[0]
                break
        if unit is None:
            break

        variable = abs(unit)
        value = unit > 0
        assignment[variable] = value
        if forced is not None:
            forced.append(unit)
        formula = substitute(formula, variable, value)

    for clause in formula:
        if not clause:
            return formula, False
    return formula, True


def eliminate_pure_literals(
    formula: Formula,
    assignment: Assignment,
    forced: Optional[List[int]] = None
) -> Formula:
    """
    Assign every pure literal true in one sweep.

    Purity is computed once from the occurrence counts before the sweep; no
    fixed point is sought. Pure literals are handled in ascending order.
    """
    counts = Counter(lit for clause in formula for lit in clause)
    pure = sorted(lit for lit, count in counts.items() if count > 0 and counts[-lit] == 0)

    for lit in pure:
        variable = abs(lit)
        value = lit > 0
        assignment[variable] = value
        if forced is not None:
            forced.append(lit)
        formula = substitute(formula, variable, value)
    return formula
