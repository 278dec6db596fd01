"""
Custom exceptions for the DPLL solver package.

The search itself never raises: a conflict is an ordinary negative result.
These exceptions belong to the layers around it.
"""


class InvalidFormulaError(Exception):
    """Raised when formula text does not follow the CNF grammar."""

    def __init__(self, text: str, reason: str = ""):
        self.text = text
        self.reason = reason
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"Invalid CNF formula: {repr(self.text)}"
        if self.reason:
            msg += f"\n  Reason: {self.reason}"
        return msg


class ConfigError(Exception):
    """Raised when solver or benchmark configuration is invalid."""

    def __init__(self, message: str):
        super().__init__(message)


class NormalizationError(Exception):
    """Raised when a propositional formula cannot be converted to CNF."""

    def __init__(self, node: object, reason: str = ""):
        self.node = node
        self.reason = reason
        msg = f"Cannot normalize {node!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class VerificationError(Exception):
    """Raised when a solver answer fails an independent check."""

    def __init__(self, expected: str, actual: str, context: str = ""):
        self.expected = expected
        self.actual = actual
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = "Verification failed:\n"
        msg += f"  Expected: {self.expected}\n"
        msg += f"  Actual:   {self.actual}"
        if self.context:
            msg += f"\n  Context:  {self.context}"
        return msg
