import pytest

from symdiff import (
  Expression, sin, cos, ln, exp, power,
  ConstantNode, VariableNode, BinaryOpNode, UnaryOpNode, NodeKind
)


def test_constant_and_variable_leaves():
  five = Expression.constant(5.0)
  x = Expression.variable("x")
  assert five.kind == NodeKind.CONSTANT
  assert x.kind == NodeKind.VARIABLE
  assert five.to_string() == "5"
  assert x.to_string() == "x"
  assert five.dtype is float
  assert Expression.constant(2 + 3j).dtype is complex


@pytest.mark.parametrize("build, kind, text", [
  (lambda a, b: a + b, NodeKind.ADD, "(2 + 3)"),
  (lambda a, b: a - b, NodeKind.SUBTRACT, "(2 - 3)"),
  (lambda a, b: a * b, NodeKind.MULTIPLY, "(2 * 3)"),
  (lambda a, b: a / b, NodeKind.DIVIDE, "(2 / 3)"),
  (lambda a, b: a ** b, NodeKind.POWER, "(2 ^ 3)"),
  (lambda a, b: power(a, b), NodeKind.POWER, "(2 ^ 3)"),
])
def test_binary_combinators(build, kind, text):
  result = build(Expression.constant(2.0), Expression.constant(3.0))
  assert result.kind == kind
  assert str(result) == text


@pytest.mark.parametrize("func, name", [(sin, "sin"), (cos, "cos"), (ln, "ln"), (exp, "exp")])
def test_unary_functions(func, name):
  x = Expression.variable("x")
  assert func(x).to_string() == f"{name}(x)"
  assert getattr(x, name)().to_string() == f"{name}(x)"


def test_numbers_are_coerced_to_constants():
  x = Expression.variable("x")
  assert str(x + 1) == "(x + 1)"
  assert str(2 * x) == "(2 * x)"
  assert str(1 - x) == "(1 - x)"
  assert str(1 / x) == "(1 / x)"
  assert str(2 ** x) == "(2 ^ x)"
  assert str(x ** 0.5) == "(x ^ 0.5)"


def test_combinators_copy_operands():
  """Results never share nodes with their inputs"""
  a = Expression.variable("a")
  b = Expression.variable("b")
  total = a + b
  assert total.root.left is not a.root
  assert total.root.right is not b.root
  doubled = a + a
  assert doubled.root.left is not doubled.root.right
  wrapped = sin(total)
  assert wrapped.root.operand is not total.root


def test_nodes_are_immutable():
  node = ConstantNode(1.0)
  with pytest.raises(AttributeError):
    node.value = 2.0
  add = BinaryOpNode(NodeKind.ADD, VariableNode("x"), ConstantNode(1.0))
  with pytest.raises(AttributeError):
    add.left = VariableNode("y")


def test_construction_errors():
  with pytest.raises(ValueError):
    VariableNode("")
  with pytest.raises(TypeError):
    ConstantNode("1")
  with pytest.raises(TypeError):
    ConstantNode(True)
  with pytest.raises(ValueError):
    BinaryOpNode(NodeKind.SIN, ConstantNode(1.0), ConstantNode(2.0))
  with pytest.raises(ValueError):
    UnaryOpNode(NodeKind.ADD, ConstantNode(1.0))
  with pytest.raises(TypeError):
    BinaryOpNode(NodeKind.ADD, ConstantNode(1.0), None)


def test_mixing_numeric_types_is_rejected():
  real = Expression.variable("x")
  cplx = Expression.variable("z", dtype=complex)
  with pytest.raises(TypeError):
    real + cplx
  with pytest.raises(TypeError):
    real + 1j
  assert str(cplx + 1) == "(z + (1+0j))"


def test_wrapping_raw_tree_validates():
  shared = VariableNode("x")
  with pytest.raises(ValueError):
    Expression(BinaryOpNode(NodeKind.ADD, shared, shared))
  mixed = BinaryOpNode(NodeKind.ADD, ConstantNode(1.0), ConstantNode(2j))
  with pytest.raises(TypeError):
    Expression(mixed)
  homogeneous = BinaryOpNode(NodeKind.ADD, ConstantNode(1 + 0j), VariableNode("z"))
  assert Expression(homogeneous).dtype is complex


def test_inspection_helpers():
  expr = sin(Expression.variable("x")) * (Expression.variable("y") + 2)
  assert expr.type_name() == "Multiply"
  assert expr.size() == 6
  assert expr.depth() == 3
  assert expr.variables() == ["x", "y"]
  clone = expr.copy()
  assert clone.root is not expr.root
  assert str(clone) == str(expr)
  assert repr(Expression.variable("x") + 1) == "Expression('(x + 1)', dtype=float)"


def test_constant_rendering():
  assert str(Expression.constant(0.5)) == "0.5"
  assert str(Expression.constant(-1.0)) == "-1"
  assert str(Expression.constant(1e16)) == "1e+16"
  assert str(Expression.constant(2 + 3j)) == "(2+3j)"
  assert str(Expression.constant(complex(0, -1))) == "(0-1j)"
