import numbers
import numpy as np
import sympy as sp
from abc import ABC, abstractmethod
from typing import Dict, Mapping, Tuple
from .operators import (
  NodeKind, BINARY_KINDS, UNARY_KINDS, BINARY_OP_SYMBOLS, UNARY_FUNC_NAMES,
  evaluate_binary_op, evaluate_unary_op, evaluate_binary_op_batch, evaluate_unary_op_batch,
  check_divisor, check_log_domain, format_constant
)
from ...errors import UnboundVariableError


class Node(ABC):
  """Immutable expression tree node; every transform returns a new tree"""

  __slots__ = ()

  kind: NodeKind

  def __setattr__(self, name, value):
    raise AttributeError(f"{type(self).__name__} nodes are immutable")

  def __delattr__(self, name):
    raise AttributeError(f"{type(self).__name__} nodes are immutable")

  def _init_field(self, name, value):
    object.__setattr__(self, name, value)

  @property
  def type_name(self) -> str:
    return self.kind.display_name

  @abstractmethod
  def children(self) -> Tuple['Node', ...]:
    pass

  @abstractmethod
  def evaluate(self, variables: Mapping[str, np.generic]) -> np.generic:
    pass

  @abstractmethod
  def evaluate_batch(self, variables: Mapping[str, np.ndarray], n_samples: int, dtype) -> np.ndarray:
    pass

  @abstractmethod
  def to_string(self) -> str:
    pass

  @abstractmethod
  def copy(self) -> 'Node':
    pass

  @abstractmethod
  def substitute(self, name: str, value) -> 'Node':
    pass

  @abstractmethod
  def to_sympy(self) -> sp.Expr:
    pass

  def size(self) -> int:
    return 1 + sum(child.size() for child in self.children())

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"<{type(self).__name__} {self.to_string()}>"


class ConstantNode(Node):
  __slots__ = ('value',)

  kind = NodeKind.CONSTANT

  def __init__(self, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Number):
      raise TypeError(f"Constant value must be a real or complex number, got {value!r}")
    if isinstance(value, numbers.Real):
      value = float(value)
    else:
      value = complex(value)
    self._init_field('value', value)

  def children(self) -> Tuple[Node, ...]:
    return ()

  def evaluate(self, variables):
    if isinstance(self.value, complex):
      return np.complex128(self.value)
    return np.float64(self.value)

  def evaluate_batch(self, variables, n_samples, dtype):
    return np.full(n_samples, self.value, dtype=dtype)

  def to_string(self) -> str:
    return format_constant(self.value)

  def copy(self) -> 'ConstantNode':
    return ConstantNode(self.value)

  def substitute(self, name, value) -> 'ConstantNode':
    return self.copy()

  def to_sympy(self):
    if isinstance(self.value, complex):
      return sp.Float(self.value.real) + sp.I * sp.Float(self.value.imag)
    return sp.Float(self.value)


class VariableNode(Node):
  __slots__ = ('name',)

  kind = NodeKind.VARIABLE

  def __init__(self, name: str):
    if not isinstance(name, str):
      raise TypeError(f"Variable name must be a string, got {name!r}")
    if not name:
      raise ValueError("Variable name must not be empty")
    self._init_field('name', name)

  def children(self) -> Tuple[Node, ...]:
    return ()

  def evaluate(self, variables):
    try:
      return variables[self.name]
    except KeyError:
      raise UnboundVariableError(self.name) from None

  def evaluate_batch(self, variables, n_samples, dtype):
    try:
      return variables[self.name]
    except KeyError:
      raise UnboundVariableError(self.name) from None

  def to_string(self) -> str:
    return self.name

  def copy(self) -> 'VariableNode':
    return VariableNode(self.name)

  def substitute(self, name, value) -> Node:
    if self.name == name:
      return ConstantNode(value)
    return self.copy()

  def to_sympy(self):
    return sp.Symbol(self.name)


class BinaryOpNode(Node):
  __slots__ = ('kind', 'left', 'right')

  def __init__(self, kind: NodeKind, left: Node, right: Node):
    if kind not in BINARY_KINDS:
      raise ValueError(f"{kind!r} is not a binary operator")
    if not isinstance(left, Node) or not isinstance(right, Node):
      raise TypeError("Binary operator requires two child nodes")
    self._init_field('kind', NodeKind(kind))
    self._init_field('left', left)
    self._init_field('right', right)

  @property
  def operator(self) -> str:
    return BINARY_OP_SYMBOLS[self.kind]

  def children(self) -> Tuple[Node, ...]:
    return (self.left, self.right)

  def evaluate(self, variables):
    left_val = self.left.evaluate(variables)
    right_val = self.right.evaluate(variables)
    return evaluate_binary_op(left_val, right_val, self.kind)

  def evaluate_batch(self, variables, n_samples, dtype):
    left_val = self.left.evaluate_batch(variables, n_samples, dtype)
    right_val = self.right.evaluate_batch(variables, n_samples, dtype)
    if self.kind == NodeKind.DIVIDE:
      check_divisor(right_val)
    return evaluate_binary_op_batch(left_val, right_val, int(self.kind))

  def to_string(self) -> str:
    return f"({self.left.to_string()} {self.operator} {self.right.to_string()})"

  def copy(self) -> 'BinaryOpNode':
    return BinaryOpNode(self.kind, self.left.copy(), self.right.copy())

  def substitute(self, name, value) -> 'BinaryOpNode':
    return BinaryOpNode(self.kind, self.left.substitute(name, value), self.right.substitute(name, value))

  def to_sympy(self):
    left = self.left.to_sympy()
    right = self.right.to_sympy()
    if self.kind == NodeKind.ADD:
      return sp.Add(left, right)
    elif self.kind == NodeKind.SUBTRACT:
      return sp.Add(left, sp.Mul(-1, right))
    elif self.kind == NodeKind.MULTIPLY:
      return sp.Mul(left, right)
    elif self.kind == NodeKind.DIVIDE:
      return sp.Mul(left, sp.Pow(right, -1))
    return sp.Pow(left, right)


class UnaryOpNode(Node):
  __slots__ = ('kind', 'operand')

  _SYMPY_FUNCS: Dict[NodeKind, sp.Function] = {
    NodeKind.SIN: sp.sin, NodeKind.COS: sp.cos, NodeKind.LN: sp.log, NodeKind.EXP: sp.exp,
  }

  def __init__(self, kind: NodeKind, operand: Node):
    if kind not in UNARY_KINDS:
      raise ValueError(f"{kind!r} is not a unary function")
    if not isinstance(operand, Node):
      raise TypeError("Unary function requires one child node")
    self._init_field('kind', NodeKind(kind))
    self._init_field('operand', operand)

  @property
  def operator(self) -> str:
    return UNARY_FUNC_NAMES[self.kind]

  @property
  def arg(self) -> Node:
    return self.operand

  def children(self) -> Tuple[Node, ...]:
    return (self.operand,)

  def evaluate(self, variables):
    return evaluate_unary_op(self.operand.evaluate(variables), self.kind)

  def evaluate_batch(self, variables, n_samples, dtype):
    operand_val = self.operand.evaluate_batch(variables, n_samples, dtype)
    if self.kind == NodeKind.LN:
      check_log_domain(operand_val)
    return evaluate_unary_op_batch(operand_val, int(self.kind))

  def to_string(self) -> str:
    return f"{self.operator}({self.operand.to_string()})"

  def copy(self) -> 'UnaryOpNode':
    return UnaryOpNode(self.kind, self.operand.copy())

  def substitute(self, name, value) -> 'UnaryOpNode':
    return UnaryOpNode(self.kind, self.operand.substitute(name, value))

  def to_sympy(self):
    return self._SYMPY_FUNCS[self.kind](self.operand.to_sympy())
