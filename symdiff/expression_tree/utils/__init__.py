"""Utilities for expression trees."""

from .sympy_utils import to_sympy_expression, latex_representation, derivatives_agree
from .validator import ExpressionValidator
from .tree_utils import (
    get_all_nodes, calculate_tree_depth, find_nodes_by_kind,
    get_variable_usage_counts, get_variable_names, clone_tree,
    validate_tree_structure, get_constants, get_variables,
    get_binary_ops, get_unary_ops
)

__all__ = [
    'to_sympy_expression', 'latex_representation', 'derivatives_agree',
    'ExpressionValidator',
    'get_all_nodes', 'calculate_tree_depth', 'find_nodes_by_kind',
    'get_variable_usage_counts', 'get_variable_names', 'clone_tree',
    'validate_tree_structure', 'get_constants', 'get_variables',
    'get_binary_ops', 'get_unary_ops'
]
