"""Extend a satisfying partial assignment to every variable of a formula."""

from .formula import Assignment, Formula


def complete_assignment(formula: Formula, assignment: Assignment, default: bool = True) -> Assignment:
    """
    Give ``default`` to every variable of ``formula`` missing from ``assignment``.

    The search can stop as soon as all clauses are satisfied, before every
    variable was branched on or propagated. Values already present are kept.
    The assignment is updated in place and returned.
    """
    for clause in formula:
        for lit in clause:
            if abs(lit) not in assignment:
                assignment[abs(lit)] = default
    return assignment
