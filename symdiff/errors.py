"""
Exception hierarchy for symdiff.

Evaluation errors are raised by Expression.evaluate / evaluate_batch, parse errors
by the tokenizer and the recursive-descent parser. Tree construction and symbolic
differentiation never raise these: a malformed node is a programming error and
surfaces as TypeError / ValueError from the node constructors instead.
"""

from typing import Any, Optional


class SymDiffError(Exception):
    """Base class for all symdiff runtime errors"""


class EvaluationError(SymDiffError):
    """Raised while computing the numeric value of an expression"""


class UnboundVariableError(EvaluationError, KeyError):

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No value supplied for variable '{name}'")

    def __str__(self) -> str:
        # KeyError quotes its argument, keep the plain message
        return self.args[0]


class DivisionByZeroError(EvaluationError, ZeroDivisionError):

    def __init__(self, numerator: Any = None):
        self.numerator = numerator
        super().__init__("Division by zero")


class InvalidDomainError(EvaluationError, ValueError):

    def __init__(self, function: str, value: Any):
        self.function = function
        self.value = value
        super().__init__(f"{function}() is undefined for argument {value!r}")


class ParseError(SymDiffError, ValueError):
    """Raised when text cannot be turned into an expression tree"""

    def __init__(self, message: str, position: Optional[int] = None):
        self.position = position
        if position is not None:
            message = f"{message} (at position {position})"
        super().__init__(message)


class UnknownCharacterError(ParseError):

    def __init__(self, character: str, position: int):
        self.character = character
        super().__init__(f"Unknown character in expression: {character!r}", position)


class ExpectedTokenError(ParseError):

    def __init__(self, expected, found):
        self.expected = expected
        self.found = found
        super().__init__(
            f"Expected {expected.describe()} but found {found.describe()}", found.position
        )


class UnexpectedTokenError(ParseError):

    def __init__(self, token):
        self.token = token
        super().__init__(f"Unexpected {token.describe()}", token.position)


class TrailingTokensError(ParseError):

    def __init__(self, token):
        self.token = token
        super().__init__(f"Trailing tokens after expression, starting with {token.describe()}", token.position)
