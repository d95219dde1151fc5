"""Core expression tree components."""

from .node import Node, ConstantNode, VariableNode, BinaryOpNode, UnaryOpNode
from .operators import (
    NodeKind, BINARY_KINDS, UNARY_KINDS,
    BINARY_OP_SYMBOLS, UNARY_FUNC_NAMES, BINARY_OP_MAP, UNARY_OP_MAP,
    evaluate_binary_op, evaluate_unary_op,
    evaluate_binary_op_batch, evaluate_unary_op_batch,
    format_constant
)
from .differentiation import differentiate

__all__ = [
    'Node', 'ConstantNode', 'VariableNode', 'BinaryOpNode', 'UnaryOpNode',
    'NodeKind', 'BINARY_KINDS', 'UNARY_KINDS',
    'BINARY_OP_SYMBOLS', 'UNARY_FUNC_NAMES', 'BINARY_OP_MAP', 'UNARY_OP_MAP',
    'evaluate_binary_op', 'evaluate_unary_op',
    'evaluate_binary_op_batch', 'evaluate_unary_op_batch',
    'format_constant', 'differentiate'
]
