"""
Tree Utility Functions

Traversal and inspection helpers for expression trees. None of these
functions modify the tree they are given.
"""

from typing import List, Dict, cast
from collections import Counter

from ..core.node import Node, BinaryOpNode, UnaryOpNode, ConstantNode, VariableNode
from ..core.operators import NodeKind, BINARY_KINDS, UNARY_KINDS


def get_all_nodes(node: Node, traversal_order: str = 'breadth_first') -> List[Node]:
    """
    Get all nodes in the tree using specified traversal order.

    Args:
        node: Root node of the tree
        traversal_order: 'breadth_first' (default) or 'depth_first'

    Returns:
        List of all nodes in the tree
    """
    if traversal_order == 'breadth_first':
        return _breadth_first_traversal(node)
    elif traversal_order == 'depth_first':
        return _depth_first_traversal(node)
    else:
        raise ValueError(f"Invalid traversal_order: {traversal_order}")


def _breadth_first_traversal(node: Node) -> List[Node]:
    """Breadth-first traversal (iterative, non-recursive)"""
    nodes_to_visit = [node]
    all_nodes = []

    while nodes_to_visit:
        current_node = nodes_to_visit.pop(0)  # FIFO for breadth-first
        all_nodes.append(current_node)
        nodes_to_visit.extend(current_node.children())

    return all_nodes


def _depth_first_traversal(node: Node) -> List[Node]:
    """Depth-first pre-order traversal (recursive)"""
    nodes = [node]
    for child in node.children():
        nodes.extend(_depth_first_traversal(child))
    return nodes


def calculate_tree_depth(node: Node) -> int:
    """
    Calculate the maximum depth of the tree.

    Args:
        node: Root node of the tree

    Returns:
        Maximum depth (leaf nodes have depth 1)
    """
    children = node.children()
    if not children:
        return 1
    return 1 + max(calculate_tree_depth(child) for child in children)


def find_nodes_by_kind(node: Node, kind: NodeKind) -> List[Node]:
    """
    Find all nodes of a specific kind in the tree.

    Args:
        node: Root node of the tree
        kind: NodeKind to look for (e.g. NodeKind.POWER)

    Returns:
        List of matching nodes in breadth-first order
    """
    return [n for n in get_all_nodes(node) if n.kind == kind]


def get_variable_usage_counts(node: Node) -> Dict[str, int]:
    """
    Count the usage frequency of each variable in the tree.

    Args:
        node: Root node of the tree

    Returns:
        Dictionary mapping variable names to their usage counts
    """
    return dict(Counter(var_node.name for var_node in get_variables(node)))


def get_variable_names(node: Node) -> List[str]:
    """Sorted distinct variable names occurring in the tree."""
    return sorted(get_variable_usage_counts(node))


def clone_tree(node: Node) -> Node:
    """
    Create a deep copy of the entire tree.

    Args:
        node: Root node of the tree to clone

    Returns:
        Deep copy of the tree sharing no nodes with the original
    """
    return node.copy()


def validate_tree_structure(node: Node) -> bool:
    """
    Validate that the tree structure is consistent and well-formed.

    Checks that every node has the arity its kind requires and that the
    tree contains no node twice (strict ownership, no shared subtrees).

    Args:
        node: Root node of the tree

    Returns:
        True if tree structure is valid, False otherwise
    """
    seen = set()
    for current in get_all_nodes(node):
        if id(current) in seen:
            return False
        seen.add(id(current))

        if isinstance(current, BinaryOpNode):
            if current.kind not in BINARY_KINDS or len(current.children()) != 2:
                return False
        elif isinstance(current, UnaryOpNode):
            if current.kind not in UNARY_KINDS or len(current.children()) != 1:
                return False
        elif isinstance(current, (ConstantNode, VariableNode)):
            if current.children():
                return False
        else:
            # Unknown node type
            return False

    return True


# Convenience functions for common operations
def get_constants(node: Node) -> List[ConstantNode]:
    """Get all constant nodes in the tree."""
    return cast(List[ConstantNode], find_nodes_by_kind(node, NodeKind.CONSTANT))


def get_variables(node: Node) -> List[VariableNode]:
    """Get all variable nodes in the tree."""
    return cast(List[VariableNode], find_nodes_by_kind(node, NodeKind.VARIABLE))


def get_binary_ops(node: Node) -> List[BinaryOpNode]:
    """Get all binary operator nodes in the tree."""
    return [n for n in get_all_nodes(node) if isinstance(n, BinaryOpNode)]


def get_unary_ops(node: Node) -> List[UnaryOpNode]:
    """Get all unary function nodes in the tree."""
    return [n for n in get_all_nodes(node) if isinstance(n, UnaryOpNode)]
