from symdiff import Expression, sin, NodeKind, VariableNode, BinaryOpNode, ConstantNode
from symdiff.expression_tree.utils import (
    get_all_nodes, calculate_tree_depth, find_nodes_by_kind, get_variable_usage_counts,
    clone_tree, validate_tree_structure, get_constants, get_variables,
    get_binary_ops, get_unary_ops, ExpressionValidator
)


def _sample():
    x = Expression.variable("x")
    y = Expression.variable("y")
    return (x * sin(x) + y / 2).root


def test_traversal_orders():
    root = _sample()
    breadth = get_all_nodes(root)
    depth = get_all_nodes(root, traversal_order='depth_first')
    assert len(breadth) == len(depth) == 8
    assert breadth[0] is root and depth[0] is root
    assert [n.kind for n in depth[:3]] == [NodeKind.ADD, NodeKind.MULTIPLY, NodeKind.VARIABLE]
    assert [n.kind for n in breadth[:3]] == [NodeKind.ADD, NodeKind.MULTIPLY, NodeKind.DIVIDE]


def test_depth_and_kind_queries():
    root = _sample()
    assert calculate_tree_depth(root) == 4
    assert len(find_nodes_by_kind(root, NodeKind.SIN)) == 1
    assert [c.value for c in get_constants(root)] == [2.0]
    assert len(get_variables(root)) == 3
    assert get_variable_usage_counts(root) == {"x": 2, "y": 1}
    assert len(get_binary_ops(root)) == 3
    assert len(get_unary_ops(root)) == 1


def test_clone_and_structure_checks():
    root = _sample()
    clone = clone_tree(root)
    assert clone is not root
    assert clone.to_string() == root.to_string()
    assert validate_tree_structure(clone)

    shared = VariableNode("x")
    assert not validate_tree_structure(BinaryOpNode(NodeKind.ADD, shared, shared))


def test_validator_dtype_checks():
    real = BinaryOpNode(NodeKind.ADD, ConstantNode(1.0), VariableNode("x"))
    assert ExpressionValidator.infer_dtype(real) is float
    assert ExpressionValidator.is_valid_expression(real, float)
    assert not ExpressionValidator.is_valid_expression(real, complex)
