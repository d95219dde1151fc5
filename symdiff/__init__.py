"""symdiff

Symbolic expression trees over real or complex numbers: evaluation,
substitution, printing, symbolic differentiation and an infix parser.
"""

from .expression_tree import (
  Expression, sin, cos, ln, exp, power,
  Node, ConstantNode, VariableNode, BinaryOpNode, UnaryOpNode,
  NodeKind, format_constant
)
from .parser import parse_expression, tokenize, Token, TokenType
from .errors import (
  SymDiffError, EvaluationError, UnboundVariableError, DivisionByZeroError,
  InvalidDomainError, ParseError, UnknownCharacterError, ExpectedTokenError,
  UnexpectedTokenError, TrailingTokensError
)
from .config import SymDiffConfig
from .logging_system import LogLevel, configure_logging, get_logger

__version__ = "0.1.0"
__all__ = [
  "Expression", "sin", "cos", "ln", "exp", "power",
  "Node", "ConstantNode", "VariableNode", "BinaryOpNode", "UnaryOpNode",
  "NodeKind", "format_constant",
  "parse_expression", "tokenize", "Token", "TokenType",
  "SymDiffError", "EvaluationError", "UnboundVariableError", "DivisionByZeroError",
  "InvalidDomainError", "ParseError", "UnknownCharacterError", "ExpectedTokenError",
  "UnexpectedTokenError", "TrailingTokensError",
  "SymDiffConfig", "LogLevel", "configure_logging", "get_logger"
]
