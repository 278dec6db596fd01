"""
Conversion of propositional formulas to CNF.

Two conversions are offered:
- distribute_cnf: negation normal form by De Morgan's laws, then OR is
  distributed over AND. The result is equivalent but can grow exponentially.
- switching_cnf: like distribute_cnf, except that a disjunction of two
  multi-clause sides P v Q becomes (Z -> P) ^ (~Z -> Q) with a fresh
  switching variable Z. The result is equisatisfiable and stays small.

Named variables are numbered by a VariablePool in order of first appearance;
switching variables are numbered after them.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

from .errors import NormalizationError
from .formula import Assignment, Clause, Formula


@dataclass(frozen=True)
class Var:
    name: str


@dataclass(frozen=True)
class Not:
    operand: "Prop"


@dataclass(frozen=True)
class And:
    left: "Prop"
    right: "Prop"


@dataclass(frozen=True)
class Or:
    left: "Prop"
    right: "Prop"


@dataclass(frozen=True)
class Implies:
    left: "Prop"
    right: "Prop"


@dataclass(frozen=True)
class Iff:
    left: "Prop"
    right: "Prop"


@dataclass(frozen=True)
class Xor:
    left: "Prop"
    right: "Prop"


Prop = Union[Var, Not, And, Or, Implies, Iff, Xor]

_BINARY_SYMBOLS = {And: "^", Or: "v", Implies: "->", Iff: "<->", Xor: "xor"}


def fmt_prop(prop: Prop) -> str:
    """Format formula: Or(Var('A'), Not(Var('B'))) -> '(A v ~B)'"""
    if isinstance(prop, Var):
        return prop.name
    if isinstance(prop, Not):
        return "~" + fmt_prop(prop.operand)
    symbol = _BINARY_SYMBOLS.get(type(prop))
    if symbol is None:
        raise NormalizationError(prop, "unknown node type")
    return f"({fmt_prop(prop.left)} {symbol} {fmt_prop(prop.right)})"


def evaluate_prop(prop: Prop, env: Dict[str, bool]) -> bool:
    """Truth value of a formula under a name -> bool environment."""
    if isinstance(prop, Var):
        return env[prop.name]
    if isinstance(prop, Not):
        return not evaluate_prop(prop.operand, env)
    if isinstance(prop, And):
        return evaluate_prop(prop.left, env) and evaluate_prop(prop.right, env)
    if isinstance(prop, Or):
        return evaluate_prop(prop.left, env) or evaluate_prop(prop.right, env)
    if isinstance(prop, Implies):
        return not evaluate_prop(prop.left, env) or evaluate_prop(prop.right, env)
    if isinstance(prop, Iff):
        return evaluate_prop(prop.left, env) == evaluate_prop(prop.right, env)
    if isinstance(prop, Xor):
        return evaluate_prop(prop.left, env) != evaluate_prop(prop.right, env)
    raise NormalizationError(prop, "unknown node type")


class VariablePool:
    """Maps variable names to positive integer identifiers."""

    def __init__(self):
        self._ids: Dict[str, int] = {}
        self._names: Dict[int, str] = {}
        self._next = 1

    def __len__(self) -> int:
        return self._next - 1

    def id(self, name: str) -> int:
        if name not in self._ids:
            self._ids[name] = self._next
            self._names[self._next] = name
            self._next += 1
        return self._ids[name]

    def fresh(self) -> int:
        """New anonymous variable, used for switching variables."""
        var = self._next
        self._next += 1
        return var

    def name(self, var: int) -> Optional[str]:
        return self._names.get(var)

    def decode(self, assignment: Assignment) -> Dict[str, bool]:
        """Translate a solver assignment back to names, dropping anonymous variables."""
        return {self._names[var]: value for var, value in assignment.items() if var in self._names}


def to_nnf(prop: Prop, negate: bool = False) -> Prop:
    """
    Negation normal form over Var, Not, And and Or.

    Implications, equivalences and exclusive ors are rewritten first;
    negations are pushed onto variables with De Morgan's laws and double
    negations cancel.
    """
    if isinstance(prop, Var):
        return Not(prop) if negate else prop
    if isinstance(prop, Not):
        return to_nnf(prop.operand, not negate)
    if isinstance(prop, And):
        left, right = to_nnf(prop.left, negate), to_nnf(prop.right, negate)
        return Or(left, right) if negate else And(left, right)
    if isinstance(prop, Or):
        left, right = to_nnf(prop.left, negate), to_nnf(prop.right, negate)
        return And(left, right) if negate else Or(left, right)
    if isinstance(prop, Implies):
        return to_nnf(Or(Not(prop.left), prop.right), negate)
    if isinstance(prop, Iff):
        return to_nnf(And(Implies(prop.left, prop.right), Implies(prop.right, prop.left)), negate)
    if isinstance(prop, Xor):
        return to_nnf(Or(And(prop.left, Not(prop.right)), And(Not(prop.left), prop.right)), negate)
    raise NormalizationError(prop, "unknown node type")


def distribute_cnf(prop: Prop, pool: Optional[VariablePool] = None) -> Tuple[Formula, VariablePool]:
    """Equivalent CNF by De Morgan's laws and distribution."""
    if pool is None:
        pool = VariablePool()
    nnf = to_nnf(prop)
    _register(nnf, pool)
    return _clauses(nnf, pool, switching=False), pool


def switching_cnf(prop: Prop, pool: Optional[VariablePool] = None) -> Tuple[Formula, VariablePool]:
    """Equisatisfiable CNF using switching variables for disjunctions of conjunctions."""
    if pool is None:
        pool = VariablePool()
    nnf = to_nnf(prop)
    _register(nnf, pool)
    return _clauses(nnf, pool, switching=True), pool


def to_cnf(prop: Prop, method: str = "distribute", pool: Optional[VariablePool] = None) -> Tuple[Formula, VariablePool]:
    if method == "distribute":
        return distribute_cnf(prop, pool)
    if method == "switching":
        return switching_cnf(prop, pool)
    raise NormalizationError(prop, f"unknown method {method!r}")


def _register(nnf: Prop, pool: VariablePool):
    # Named variables first, so switching variables get the higher identifiers
    if isinstance(nnf, Var):
        pool.id(nnf.name)
    elif isinstance(nnf, Not):
        _register(nnf.operand, pool)
    else:
        _register(nnf.left, pool)
        _register(nnf.right, pool)


def _clauses(nnf: Prop, pool: VariablePool, switching: bool) -> Formula:
    if isinstance(nnf, Var):
        return [[pool.id(nnf.name)]]
    if isinstance(nnf, Not):
        if not isinstance(nnf.operand, Var):
            raise NormalizationError(nnf, "negation of a compound formula after NNF")
        return [[-pool.id(nnf.operand.name)]]
    if isinstance(nnf, And):
        return _clauses(nnf.left, pool, switching) + _clauses(nnf.right, pool, switching)
    if isinstance(nnf, Or):
        left = _clauses(nnf.left, pool, switching)
        right = _clauses(nnf.right, pool, switching)
        if switching and len(left) > 1 and len(right) > 1:
            z = pool.fresh()
            return [[-z] + clause for clause in left] + [[z] + clause for clause in right]
        return [_merge(a, b) for a in left for b in right]
    raise NormalizationError(nnf, "not in negation normal form")


def _merge(a: Clause, b: Clause) -> Clause:
    return a + [lit for lit in b if lit not in a]
