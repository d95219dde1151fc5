"""
Symbolic differentiation of expression trees.

One rule per node kind. Results are deliberately left unsimplified: they may
contain terms such as ``(1 * x)`` or ``(0 + 1)``. Any subtree that ends up under
more than one parent is copied first, so the result never aliases the input.
"""

from typing import Callable, Dict
from .node import Node, ConstantNode, VariableNode, BinaryOpNode, UnaryOpNode
from .operators import NodeKind


def differentiate(node: Node, var: str, dtype=float) -> Node:
  """Return d(node)/d(var) as a new tree whose constants are of type ``dtype``"""
  return _RULES[node.kind](node, var, dtype)


def _const(value, dtype) -> ConstantNode:
  return ConstantNode(dtype(value))


def _add(left: Node, right: Node) -> BinaryOpNode:
  return BinaryOpNode(NodeKind.ADD, left, right)


def _sub(left: Node, right: Node) -> BinaryOpNode:
  return BinaryOpNode(NodeKind.SUBTRACT, left, right)


def _mul(left: Node, right: Node) -> BinaryOpNode:
  return BinaryOpNode(NodeKind.MULTIPLY, left, right)


def _div(left: Node, right: Node) -> BinaryOpNode:
  return BinaryOpNode(NodeKind.DIVIDE, left, right)


def _d_constant(node: ConstantNode, var, dtype):
  return _const(0, dtype)


def _d_variable(node: VariableNode, var, dtype):
  return _const(1 if node.name == var else 0, dtype)


def _d_add(node: BinaryOpNode, var, dtype):
  return _add(differentiate(node.left, var, dtype), differentiate(node.right, var, dtype))


def _d_subtract(node: BinaryOpNode, var, dtype):
  return _sub(differentiate(node.left, var, dtype), differentiate(node.right, var, dtype))


def _d_multiply(node: BinaryOpNode, var, dtype):
  # (f * g)' = f' * g + f * g'
  f, g = node.left, node.right
  return _add(
    _mul(differentiate(f, var, dtype), g.copy()),
    _mul(f.copy(), differentiate(g, var, dtype))
  )


def _d_divide(node: BinaryOpNode, var, dtype):
  # (f / g)' = (f' * g - f * g') / (g * g)
  f, g = node.left, node.right
  return _div(
    _sub(
      _mul(differentiate(f, var, dtype), g.copy()),
      _mul(f.copy(), differentiate(g, var, dtype))
    ),
    _mul(g.copy(), g.copy())
  )


def _d_power(node: BinaryOpNode, var, dtype):
  base, exponent = node.left, node.right
  if isinstance(exponent, ConstantNode):
    # (f^c)' = c * f^(c-1) * f'
    c = exponent.value
    return _mul(
      _mul(_const(c, dtype), BinaryOpNode(NodeKind.POWER, base.copy(), _const(c - 1, dtype))),
      differentiate(base, var, dtype)
    )
  # (f^g)' = f^g * (g' * ln(f) + g * f' / f)
  return _mul(
    node.copy(),
    _add(
      _mul(differentiate(exponent, var, dtype), UnaryOpNode(NodeKind.LN, base.copy())),
      _mul(exponent.copy(), _div(differentiate(base, var, dtype), base.copy()))
    )
  )


def _d_sin(node: UnaryOpNode, var, dtype):
  return _mul(UnaryOpNode(NodeKind.COS, node.operand.copy()), differentiate(node.operand, var, dtype))


def _d_cos(node: UnaryOpNode, var, dtype):
  return _mul(
    _const(-1, dtype),
    _mul(UnaryOpNode(NodeKind.SIN, node.operand.copy()), differentiate(node.operand, var, dtype))
  )


def _d_ln(node: UnaryOpNode, var, dtype):
  return _div(differentiate(node.operand, var, dtype), node.operand.copy())


def _d_exp(node: UnaryOpNode, var, dtype):
  return _mul(UnaryOpNode(NodeKind.EXP, node.operand.copy()), differentiate(node.operand, var, dtype))


_RULES: Dict[NodeKind, Callable[[Node, str, type], Node]] = {
  NodeKind.CONSTANT: _d_constant,
  NodeKind.VARIABLE: _d_variable,
  NodeKind.ADD: _d_add,
  NodeKind.SUBTRACT: _d_subtract,
  NodeKind.MULTIPLY: _d_multiply,
  NodeKind.DIVIDE: _d_divide,
  NodeKind.POWER: _d_power,
  NodeKind.SIN: _d_sin,
  NodeKind.COS: _d_cos,
  NodeKind.LN: _d_ln,
  NodeKind.EXP: _d_exp,
}
