"""
Independent checks of solver answers.

SAT answers are checked by evaluating every clause under the returned
assignment, UNSAT answers by exhaustive enumeration on small formulas, and
both against PySAT's Glucose3.
"""

import itertools
import logging
from typing import List, Optional

from pysat.solvers import Glucose3

from .errors import VerificationError
from .formula import Assignment, Formula, literal_value, variables

logger = logging.getLogger(__name__)


def falsified_clauses(formula: Formula, assignment: Assignment) -> List[int]:
    """Indices of clauses with no literal made true by the assignment."""
    return [
        i for i, clause in enumerate(formula)
        if not any(literal_value(lit, assignment) for lit in clause)
    ]


def is_satisfied(formula: Formula, assignment: Assignment) -> bool:
    return not falsified_clauses(formula, assignment)


def brute_force_model(formula: Formula, max_vars: int = 20) -> Optional[Assignment]:
    """
    Find a model by trying every assignment.

    Returns the first satisfying assignment in enumeration order, or None if
    there is none. Raises ValueError for formulas with more than ``max_vars``
    variables.
    """
    vars_ = variables(formula)
    if len(vars_) > max_vars:
        raise ValueError(f"{len(vars_)} variables exceed brute force limit of {max_vars}")

    for values in itertools.product((False, True), repeat=len(vars_)):
        assignment = dict(zip(vars_, values))
        if is_satisfied(formula, assignment):
            return assignment
    return None


class SolutionVerifier:
    """Verifies SAT/UNSAT answers for one formula."""

    def __init__(self, clauses: Formula):
        self.clauses = clauses

    def check_model(self, assignment: Assignment):
        """Every clause must be satisfied and every variable assigned."""
        missing = [var for var in variables(self.clauses) if var not in assignment]
        if missing:
            raise VerificationError("total assignment", f"unassigned variables {missing}")

        failed = falsified_clauses(self.clauses, assignment)
        if failed:
            raise VerificationError(
                "all clauses satisfied",
                f"clauses {failed} falsified",
                context=f"first falsified clause: {self.clauses[failed[0]]}"
            )

    def check_unsat(self, max_vars: int = 20):
        """No assignment over the formula's variables may satisfy it."""
        model = brute_force_model(self.clauses, max_vars)
        if model is not None:
            raise VerificationError("UNSAT", "SAT", context=f"model found by enumeration: {model}")

    def cross_check(self, satisfiable: bool, assignment: Optional[Assignment] = None):
        """Compare against Glucose3, and have it accept the model as assumptions."""
        with Glucose3(bootstrap_with=self.clauses) as g:
            expected = g.solve()
        if expected != satisfiable:
            raise VerificationError(
                "SAT" if expected else "UNSAT",
                "SAT" if satisfiable else "UNSAT",
                context="result mismatch with Glucose3"
            )

        if satisfiable and assignment is not None:
            assumptions = [var if val else -var for var, val in sorted(assignment.items())]
            with Glucose3(bootstrap_with=self.clauses) as g:
                if not g.solve(assumptions=assumptions):
                    raise VerificationError("model accepted", "model rejected by Glucose3")
        logger.debug("Glucose3 agrees: %s", "SAT" if satisfiable else "UNSAT")


def verify_solver_result(solver, max_vars: int = 20, cross_check: bool = False) -> bool:
    """
    Verify the answer of a DPLLSolver after solve() has been called.

    Args:
        solver: Solved DPLLSolver instance.
        max_vars: UNSAT answers on formulas up to this many variables are
            checked by enumeration; larger ones are skipped.
        cross_check: Also compare against PySAT.

    Returns:
        True if all checks passed, False otherwise.
    """
    verifier = SolutionVerifier(solver.clauses)
    if solver.satisfiable is None:
        raise ValueError("solver has not been run")

    satisfiable = solver.satisfiable
    try:
        if satisfiable:
            verifier.check_model(solver.assignment)
        elif len(variables(solver.clauses)) <= max_vars:
            verifier.check_unsat(max_vars)
        if cross_check:
            verifier.cross_check(satisfiable, solver.assignment if satisfiable else None)
    except VerificationError as e:
        logger.warning("%s", e)
        return False
    return True
