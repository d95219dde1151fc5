"""Expression Tree Module

Immutable expression trees over real or complex constants, with evaluation,
substitution, printing and symbolic differentiation.
"""

from .expression import Expression, sin, cos, ln, exp, power
from .core.node import (
    Node,
    ConstantNode,
    VariableNode,
    BinaryOpNode,
    UnaryOpNode
)
from .core.operators import (
    NodeKind,
    BINARY_OP_SYMBOLS,
    UNARY_FUNC_NAMES,
    format_constant
)
from .core.differentiation import differentiate
from .utils import ExpressionValidator, to_sympy_expression, latex_representation

__all__ = [
    "Expression", "sin", "cos", "ln", "exp", "power",
    "Node", "ConstantNode", "VariableNode", "BinaryOpNode", "UnaryOpNode",
    "NodeKind", "BINARY_OP_SYMBOLS", "UNARY_FUNC_NAMES", "format_constant",
    "differentiate",
    "ExpressionValidator", "to_sympy_expression", "latex_representation"
]
