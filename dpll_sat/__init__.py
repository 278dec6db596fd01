"""
DPLL SAT Solver Package

This package decides satisfiability of CNF formulas with the
Davis-Putnam-Logemann-Loveland procedure, and provides the readers,
CNF conversion, verification and benchmark tools around it.
"""

from .formula import generate_random_formula, variables
from .simplify import substitute, unit_propagate, eliminate_pure_literals
from .solver import DPLLSolver, SearchStats, SolveResult, dpll, solve
from .completion import complete_assignment
from .verifier import SolutionVerifier, brute_force_model, is_satisfied, verify_solver_result
from .parser import parse_cnf, validate_cnf, parse_dimacs, read_dimacs
from .format import fmt_clause, fmt_formula, fmt_assignment, fmt_model, to_dimacs
from .normalize import (
    Var, Not, And, Or, Implies, Iff, Xor,
    VariablePool, to_nnf, distribute_cnf, switching_cnf, to_cnf
)
from .config import AppConfig, BenchmarkConfig, SolverConfig, load_config
from .collector import run_benchmark, save_results
from .interactive import InteractiveSession
from .errors import InvalidFormulaError, ConfigError, NormalizationError, VerificationError

__all__ = [
    # Formula model
    'generate_random_formula',
    'variables',

    # Simplification
    'substitute',
    'unit_propagate',
    'eliminate_pure_literals',

    # Search
    'DPLLSolver',
    'SearchStats',
    'SolveResult',
    'dpll',
    'solve',
    'complete_assignment',

    # Verification
    'SolutionVerifier',
    'brute_force_model',
    'is_satisfied',
    'verify_solver_result',

    # Input and output
    'parse_cnf',
    'validate_cnf',
    'parse_dimacs',
    'read_dimacs',
    'fmt_clause',
    'fmt_formula',
    'fmt_assignment',
    'fmt_model',
    'to_dimacs',

    # CNF conversion
    'Var',
    'Not',
    'And',
    'Or',
    'Implies',
    'Iff',
    'Xor',
    'VariablePool',
    'to_nnf',
    'distribute_cnf',
    'switching_cnf',
    'to_cnf',

    # Configuration and front ends
    'AppConfig',
    'BenchmarkConfig',
    'SolverConfig',
    'load_config',
    'run_benchmark',
    'save_results',
    'InteractiveSession',

    # Errors
    'InvalidFormulaError',
    'ConfigError',
    'NormalizationError',
    'VerificationError',
]
