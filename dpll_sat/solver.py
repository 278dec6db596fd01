"""
DPLL SAT solver.

The search interleaves unit propagation and pure literal elimination with a
two-way case split on one variable. One assignment dict is shared by the
whole search: a failed branch is not undone, its variables are overwritten
by the sibling branch, which assigns the same branching variable first.

Two equivalent drivers are provided:
- recursive: one Python frame per decision
- iterative: an explicit stack of branch frames, for formulas with more
  variables than the interpreter's recursion limit allows
Both visit the same nodes in the same order. The recursive driver hands
over to the iterative one when the variable count nears the recursion limit.
"""

import logging
import sys
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from .completion import complete_assignment
from .config import SolverConfig
from .formula import Assignment, Formula, copy_formula, variables
from .simplify import eliminate_pure_literals, substitute, unit_propagate

logger = logging.getLogger(__name__)


def select_first_literal(formula: Formula) -> int:
    """Variable of the first literal of the first clause."""
    return abs(formula[0][0])


def select_max_occurrence(formula: Formula) -> int:
    """Variable with the most occurrences; ties go to the one seen first."""
    counts: Dict[int, int] = {}
    for clause in formula:
        for lit in clause:
            var = abs(lit)
            counts[var] = counts.get(var, 0) + 1
    return max(counts, key=counts.get)


SELECTORS: Dict[str, Callable[[Formula], int]] = {
    "first": select_first_literal,
    "max_occurrence": select_max_occurrence,
}


@dataclass
class SearchStats:
    decisions: int = 0
    backtracks: int = 0
    propagations: int = 0
    pure_literals: int = 0
    conflicts: int = 0
    max_depth: int = 0


@dataclass
class SolveResult:
    """Outcome of one solve call. ``assignment`` is None when unsatisfiable."""
    satisfiable: bool
    assignment: Optional[Assignment]
    stats: SearchStats = field(default_factory=SearchStats)
    trace: List[Tuple[str, Optional[int]]] = field(default_factory=list)


@dataclass
class _Frame:
    formula: Formula
    variable: int
    depth: int
    value: bool = True


class DPLLSolver:
    """
    DPLL SAT solver with optional event trace.

    The solver maintains:
    - assignment: variable -> bool mapping, completed over all variables on SAT
    - stats: counters for decisions, backtracks, propagations and conflicts
    - trace: (event, literal or variable) tuples when config.record_trace is set
    """

    def __init__(self, clauses: Formula, config: Optional[SolverConfig] = None):
        # Input
        self.clauses = clauses
        self.config = (config or SolverConfig()).validate()
        self._select = SELECTORS[self.config.heuristic]

        # State
        self.assignment: Assignment = {}
        self.stats = SearchStats()
        self.trace: List[Tuple[str, Optional[int]]] = []
        self.satisfiable: Optional[bool] = None

    def solve(self) -> bool:
        """
        Decide satisfiability of the input clauses.

        Returns True if satisfiable, False if unsatisfiable.
        """
        self.stats = SearchStats()
        self.trace = []
        satisfiable = self.search(copy_formula(self.clauses), {})

        if satisfiable:
            complete_assignment(self.clauses, self.assignment, self.config.default_value)
            self._record("SAT")
        else:
            self._record("UNSAT")
        self.satisfiable = satisfiable

        logger.debug(
            "%s after %d decisions, %d conflicts",
            "SAT" if satisfiable else "UNSAT", self.stats.decisions, self.stats.conflicts
        )
        return satisfiable

    def search(self, formula: Formula, assignment: Assignment) -> bool:
        """Run the configured search, writing forced and chosen values into ``assignment``."""
        self.assignment = assignment
        if self.config.search == "iterative":
            return self._search_iterative(formula)

        # One frame per decision; depth is bounded by the variable count
        n_vars = len(variables(formula))
        if n_vars >= sys.getrecursionlimit() // 2:
            logger.debug("%d variables exceed the recursion budget, searching iteratively", n_vars)
            return self._search_iterative(formula)
        return self._search_recursive(formula, 0)

    def result(self) -> SolveResult:
        """Snapshot of the last solve() call."""
        if self.satisfiable is None:
            raise ValueError("solver has not been run")
        return SolveResult(
            satisfiable=self.satisfiable,
            assignment=dict(self.assignment) if self.satisfiable else None,
            stats=self.stats,
            trace=list(self.trace),
        )

    def _search_recursive(self, formula: Formula, depth: int) -> bool:
        self.stats.max_depth = max(self.stats.max_depth, depth)

        formula = self._simplify(formula)
        if formula is None:
            return False
        if not formula:
            return True

        variable = self._select(formula)
        self._decide(variable, depth)
        if self._search_recursive(substitute(formula, variable, True), depth + 1):
            return True

        self._backtrack(variable, depth)
        return self._search_recursive(substitute(formula, variable, False), depth + 1)

    def _search_iterative(self, formula: Formula) -> bool:
        stack: List[_Frame] = []
        depth = 0

        while True:
            self.stats.max_depth = max(self.stats.max_depth, depth)
            simplified = self._simplify(formula)

            if simplified is not None:
                if not simplified:
                    return True
                variable = self._select(simplified)
                stack.append(_Frame(simplified, variable, depth))
                self._decide(variable, depth)
                formula = substitute(simplified, variable, True)
                depth += 1
                continue

            # Conflict: resume the deepest frame whose false branch is untried
            while stack and not stack[-1].value:
                stack.pop()
            if not stack:
                return False

            frame = stack[-1]
            frame.value = False
            self._backtrack(frame.variable, frame.depth)
            formula = substitute(frame.formula, frame.variable, False)
            depth = frame.depth + 1

    def _simplify(self, formula: Formula) -> Optional[Formula]:
        """Unit propagation then one pure literal sweep. None on conflict."""
        forced: List[int] = []
        formula, ok = unit_propagate(formula, self.assignment, forced)
        self.stats.propagations += len(forced)
        for lit in forced:
            self._record("PROPAGATE", lit)

        if not ok:
            self.stats.conflicts += 1
            self._record("CONFLICT")
            return None

        if self.config.pure_literals:
            pure: List[int] = []
            formula = eliminate_pure_literals(formula, self.assignment, pure)
            self.stats.pure_literals += len(pure)
            for lit in pure:
                self._record("PURE", lit)

        return formula

    def _decide(self, variable: int, depth: int):
        self.stats.decisions += 1
        self.assignment[variable] = True
        self._record("DECIDE", variable)
        logger.debug("Decide x%d = True at depth %d", variable, depth)

    def _backtrack(self, variable: int, depth: int):
        self.stats.backtracks += 1
        self.assignment[variable] = False
        self._record("BACKTRACK", variable)
        logger.debug("Backtrack x%d = False at depth %d", variable, depth)

    def _record(self, event: str, value: Optional[int] = None):
        if self.config.record_trace:
            self.trace.append((event, value))


def dpll(formula: Formula, assignment: Assignment, config: Optional[SolverConfig] = None) -> bool:
    """
    Run the DPLL search on ``formula``, extending ``assignment`` in place.

    No completion is applied: on success ``assignment`` is a satisfying
    partial assignment.
    """
    return DPLLSolver(formula, config).search(formula, assignment)


def solve(formula: Formula, config: Optional[SolverConfig] = None) -> SolveResult:
    """
    Solve a CNF formula.

    Args:
        formula: List of clauses, each a list of nonzero integer literals.
        config: Solver options, defaults to SolverConfig().

    Returns:
        SolveResult with a total assignment over the formula's variables when
        satisfiable, ``assignment=None`` when unsatisfiable.
    """
    solver = DPLLSolver(formula, config)
    solver.solve()
    return solver.result()
