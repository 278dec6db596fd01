"""
Formatting utilities for formulas and assignments.

fmt_formula produces the terminal grammar read back by parse_cnf.
"""

from typing import Dict, List

from .formula import variables


def fmt_clause(clause: List[int]) -> str:
    """Format clause: [1, -2, 3] -> '(1 OR -2 OR 3)'"""
    return "(" + " OR ".join(str(lit) for lit in clause) + ")"


def fmt_formula(formula: List[List[int]]) -> str:
    """Format formula: [[1, -2], [3]] -> '(1 OR -2) AND (3)'"""
    return " AND ".join(fmt_clause(clause) for clause in formula)


def fmt_assignment(assignment: Dict[int, bool]) -> str:
    """Format assignment: {2: False, 1: True} -> '1 = True , 2 = False'"""
    if not assignment:
        return ''
    sorted_items = sorted(assignment.items(), key=lambda x: x[0])
    return ' , '.join(f"{var} = {value}" for var, value in sorted_items)


def fmt_model(assignment: Dict[int, bool]) -> str:
    """Format assignment as a DIMACS value line: {1: True, 2: False} -> 'v 1 -2 0'"""
    lits = [str(var if value else -var) for var, value in sorted(assignment.items())]
    return "v " + " ".join(lits + ["0"])


def to_dimacs(formula: List[List[int]]) -> str:
    """Render formula as DIMACS CNF text."""
    vars_ = variables(formula)
    lines = [f"p cnf {max(vars_, default=0)} {len(formula)}"]
    for clause in formula:
        lines.append(" ".join(str(lit) for lit in clause) + " 0")
    return "\n".join(lines) + "\n"
