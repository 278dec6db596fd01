"""
Interactive terminal session.

Reads one formula per line in the terminal grammar and answers with the
satisfiability verdict, until the user types 'exit'.
"""

import logging
from typing import Optional, TextIO

from .config import SolverConfig
from .errors import InvalidFormulaError, VerificationError
from .format import fmt_assignment
from .parser import parse_cnf
from .solver import solve
from .verifier import SolutionVerifier

logger = logging.getLogger(__name__)

BANNER = (
    "Welcome to the Interactive DPLL SAT Solver\n"
    "Input your CNF formula using the format: (1 OR -2) AND (-1 OR 3) AND (2 OR -3)\n"
    "Type 'exit' to quit the program."
)
PROMPT = "\nEnter your formula: "
FORMAT_HINT = "Invalid CNF format. Please use the format: (literal1 OR literal2) AND (literal3 OR ... )"
GOODBYE = "Exiting the program. Goodbye!"
VERIFY_FAILED = "VERIFICATION FAILED: the answer disagrees with PySAT"


class InteractiveSession:
    """Answers formulas typed at the terminal."""

    def __init__(self, config: Optional[SolverConfig] = None, verify: bool = False):
        self.config = config or SolverConfig()
        self.verify = verify
        self.failures = 0

    def respond(self, line: str) -> Optional[str]:
        """
        Reply to one input line.

        Returns:
            The reply text, or None when the user asked to exit.
        """
        text = line.strip()
        if text.lower() == "exit":
            return None

        try:
            formula = parse_cnf(text)
        except InvalidFormulaError as e:
            logger.debug("%s", e)
            return FORMAT_HINT

        result = solve(formula, self.config)
        if self.verify:
            try:
                SolutionVerifier(formula).cross_check(result.satisfiable, result.assignment)
            except VerificationError as e:
                logger.error("%s", e)
                self.failures += 1
                return VERIFY_FAILED

        if result.satisfiable:
            return f"SATISFIABLE with assignment: {fmt_assignment(result.assignment)}"
        return "UNSATISFIABLE"

    def run(self, stdin: TextIO, stdout: TextIO):
        """Prompt loop until 'exit' or end of input."""
        print(BANNER, file=stdout)
        while True:
            print(PROMPT, end="", file=stdout, flush=True)
            line = stdin.readline()
            if not line:
                break
            reply = self.respond(line)
            if reply is None:
                print(GOODBYE, file=stdout)
                break
            print(reply, file=stdout)
