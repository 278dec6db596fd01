"""
Formula readers.

Two input syntaxes are accepted:
- the terminal grammar ``(1 OR -2) AND (-1 OR 3) AND (2 OR -3)``
- DIMACS CNF files

Both guarantee the solver's preconditions: every clause is non-empty and
every literal is a nonzero integer.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional, Union

from .errors import InvalidFormulaError
from .formula import Clause, Formula

logger = logging.getLogger(__name__)

AND_PATTERN = re.compile(r"\s+AND\s+")
OR_PATTERN = re.compile(r"\s+OR\s+")
LITERAL_PATTERN = re.compile(r"[+-]?\d+")


def parse_cnf(text: str) -> Formula:
    """
    Parse a formula in the terminal grammar.

    Format: "(" lit {" OR " lit} ")" {" AND " "(" lit {" OR " lit} ")"}

    Returns:
        List of clauses.

    Raises:
        InvalidFormulaError: if the text does not follow the grammar.
    """
    stripped = text.strip()
    if not stripped:
        raise InvalidFormulaError(text, "empty formula")

    formula = []
    for part in AND_PATTERN.split(stripped):
        formula.append(_parse_clause(text, part.strip()))
    return formula


def _parse_clause(text: str, part: str) -> Clause:
    if len(part) < 2 or part[0] != "(" or part[-1] != ")":
        raise InvalidFormulaError(text, f"clause {part!r} is not enclosed in parentheses")

    body = part[1:-1].strip()
    if not body:
        raise InvalidFormulaError(text, f"clause {part!r} is empty")

    clause = []
    for token in OR_PATTERN.split(body):
        token = token.strip()
        if not LITERAL_PATTERN.fullmatch(token):
            raise InvalidFormulaError(text, f"literal {token!r} is not an integer")
        lit = int(token)
        if lit == 0:
            raise InvalidFormulaError(text, "literal 0 is not allowed")
        clause.append(lit)
    return clause


def validate_cnf(text: str) -> bool:
    """Check whether text follows the terminal grammar."""
    try:
        parse_cnf(text)
    except InvalidFormulaError:
        return False
    return True


def parse_dimacs(text: str) -> Formula:
    """
    Parse DIMACS CNF.

    Comment lines start with 'c', the 'p cnf <vars> <clauses>' header is
    optional, clauses end with 0 and may span lines, and a line starting
    with '%' ends the clause section.
    """
    clauses: Formula = []
    current: Clause = []
    header: Optional[List[int]] = None

    for lineno, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("c"):
            continue
        if line.startswith("%"):
            break
        if line.startswith("p"):
            fields = line.split()
            if len(fields) != 4 or fields[1] != "cnf":
                raise InvalidFormulaError(line, f"bad problem line at line {lineno}")
            try:
                header = [int(fields[2]), int(fields[3])]
            except ValueError:
                raise InvalidFormulaError(line, f"bad problem line at line {lineno}") from None
            continue

        for token in line.split():
            if not LITERAL_PATTERN.fullmatch(token):
                raise InvalidFormulaError(line, f"literal {token!r} is not an integer at line {lineno}")
            lit = int(token)
            if lit == 0:
                if not current:
                    raise InvalidFormulaError(line, f"empty clause at line {lineno}")
                clauses.append(current)
                current = []
            else:
                current.append(lit)

    if current:
        raise InvalidFormulaError(" ".join(map(str, current)), "last clause is not terminated by 0")

    if header is not None:
        n_vars, n_clauses = header
        max_var = max((abs(lit) for clause in clauses for lit in clause), default=0)
        if n_clauses != len(clauses):
            logger.warning("Header declares %d clauses, found %d", n_clauses, len(clauses))
        if max_var > n_vars:
            logger.warning("Header declares %d variables, found variable %d", n_vars, max_var)

    return clauses


def read_dimacs(path: Union[str, Path]) -> Formula:
    """Read a DIMACS CNF file."""
    with open(path) as f:
        return parse_dimacs(f.read())
