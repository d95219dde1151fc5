import numbers
import numpy as np
import sympy as sp
from typing import Dict, List, Mapping, Optional, Union
from .core.node import Node, ConstantNode, VariableNode, BinaryOpNode, UnaryOpNode
from .core.operators import NodeKind
from .core.differentiation import differentiate
from .utils.tree_utils import calculate_tree_depth, get_variable_names
from .utils.validator import ExpressionValidator
from ..logging_system import log_debug

Operand = Union['Expression', numbers.Number]

_SCALAR_TYPES = {float: np.float64, complex: np.complex128}


def _coerce(value, dtype: type):
  """Convert a plain number to the tree's numeric type (float or complex)"""
  if isinstance(value, bool) or not isinstance(value, numbers.Number):
    raise TypeError(f"Expected a number, got {value!r}")
  if dtype is float and not isinstance(value, numbers.Real):
    raise TypeError(f"Cannot use complex value {value!r} in a real expression")
  return dtype(value)


class Expression:
  """
  Owning handle on an immutable expression tree of numeric type ``dtype``.

  ``dtype`` is ``float`` or ``complex`` and is shared by every constant in
  the tree. Combinators (``+ - * / **`` and ``sin/cos/ln/exp``) place deep
  copies of their operands under a new root, so results never share nodes
  with their inputs.
  """

  __slots__ = ('_root', '_dtype', '_string_cache')

  def __init__(self, root: Node, dtype: Optional[type] = None, validate: bool = True):
    if not isinstance(root, Node):
      raise TypeError(f"Expression root must be a Node, got {type(root).__name__}")
    if dtype is None:
      dtype = ExpressionValidator.infer_dtype(root)
    if dtype not in _SCALAR_TYPES:
      raise TypeError(f"Unsupported numeric type {dtype!r}, expected float or complex")
    if validate:
      ExpressionValidator.check(root, dtype)
    self._root = root
    self._dtype = dtype
    self._string_cache: Optional[str] = None

  @property
  def root(self) -> Node:
    return self._root

  @property
  def dtype(self) -> type:
    return self._dtype

  @property
  def kind(self) -> NodeKind:
    return self._root.kind

  # Leaf constructors

  @classmethod
  def constant(cls, value, dtype: Optional[type] = None) -> 'Expression':
    if dtype is None:
      dtype = complex if isinstance(value, complex) else float
    return cls(ConstantNode(_coerce(value, dtype)), dtype, validate=False)

  @classmethod
  def variable(cls, name: str, dtype: type = float) -> 'Expression':
    return cls(VariableNode(name), dtype, validate=False)

  @classmethod
  def from_string(cls, expr_str: str) -> 'Expression':
    from ..parser import parse_expression
    return parse_expression(expr_str)

  # Combinators

  def _as_node(self, other) -> Optional[Node]:
    if isinstance(other, Expression):
      if other.dtype is not self.dtype:
        raise TypeError(
          f"Cannot combine {self.dtype.__name__} and {other.dtype.__name__} expressions"
        )
      return other.root
    if isinstance(other, numbers.Number) and not isinstance(other, bool):
      return ConstantNode(_coerce(other, self.dtype))
    return None

  def _binary(self, kind: NodeKind, other, reflected: bool = False):
    other_node = self._as_node(other)
    if other_node is None:
      return NotImplemented
    left, right = self.root.copy(), other_node.copy()
    if reflected:
      left, right = right, left
    return Expression(BinaryOpNode(kind, left, right), self.dtype, validate=False)

  def _unary(self, kind: NodeKind) -> 'Expression':
    return Expression(UnaryOpNode(kind, self.root.copy()), self.dtype, validate=False)

  def __add__(self, other: Operand) -> 'Expression':
    return self._binary(NodeKind.ADD, other)

  def __radd__(self, other: Operand) -> 'Expression':
    return self._binary(NodeKind.ADD, other, reflected=True)

  def __sub__(self, other: Operand) -> 'Expression':
    return self._binary(NodeKind.SUBTRACT, other)

  def __rsub__(self, other: Operand) -> 'Expression':
    return self._binary(NodeKind.SUBTRACT, other, reflected=True)

  def __mul__(self, other: Operand) -> 'Expression':
    return self._binary(NodeKind.MULTIPLY, other)

  def __rmul__(self, other: Operand) -> 'Expression':
    return self._binary(NodeKind.MULTIPLY, other, reflected=True)

  def __truediv__(self, other: Operand) -> 'Expression':
    return self._binary(NodeKind.DIVIDE, other)

  def __rtruediv__(self, other: Operand) -> 'Expression':
    return self._binary(NodeKind.DIVIDE, other, reflected=True)

  def __pow__(self, other: Operand) -> 'Expression':
    return self._binary(NodeKind.POWER, other)

  def __rpow__(self, other: Operand) -> 'Expression':
    return self._binary(NodeKind.POWER, other, reflected=True)

  def sin(self) -> 'Expression':
    return self._unary(NodeKind.SIN)

  def cos(self) -> 'Expression':
    return self._unary(NodeKind.COS)

  def ln(self) -> 'Expression':
    return self._unary(NodeKind.LN)

  def exp(self) -> 'Expression':
    return self._unary(NodeKind.EXP)

  # Structural recursions

  def evaluate(self, variables: Optional[Mapping[str, numbers.Number]] = None):
    """
    Numeric value of the tree under ``variables``.

    Raises UnboundVariableError, DivisionByZeroError or InvalidDomainError.
    Returns a plain ``float`` or ``complex`` matching the tree's type.
    """
    scalar_type = _SCALAR_TYPES[self.dtype]
    env = {}
    for name, value in (variables or {}).items():
      env[name] = scalar_type(_coerce(value, self.dtype))
    with np.errstate(all='ignore'):
      result = self.root.evaluate(env)
    return self.dtype(result)

  def evaluate_batch(self, variables: Optional[Mapping[str, object]] = None) -> np.ndarray:
    """
    Elementwise evaluation over sample arrays of equal length.

    Scalars in ``variables`` are broadcast to the sample length. Any zero
    divisor or invalid logarithm argument among the samples raises.
    """
    array_type = _SCALAR_TYPES[self.dtype]
    arrays: Dict[str, np.ndarray] = {}
    scalars: Dict[str, object] = {}
    for name, value in (variables or {}).items():
      if np.ndim(value) == 0:
        scalars[name] = value
        continue
      if self.dtype is float and np.iscomplexobj(value):
        raise TypeError(f"Cannot use complex samples for '{name}' in a real expression")
      array = np.ascontiguousarray(value, dtype=array_type)
      if array.ndim != 1:
        raise ValueError(f"Samples for '{name}' must be one-dimensional, got shape {array.shape}")
      arrays[name] = array

    lengths = {array.shape[0] for array in arrays.values()}
    if len(lengths) > 1:
      raise ValueError(f"Sample arrays have different lengths: {sorted(lengths)}")
    n_samples = lengths.pop() if lengths else 1
    for name, value in scalars.items():
      arrays[name] = np.full(n_samples, _coerce(value, self.dtype), dtype=array_type)

    with np.errstate(all='ignore'):
      result = self.root.evaluate_batch(arrays, n_samples, array_type)
    return np.array(result, dtype=array_type)

  def substitute(self, name: str, value) -> 'Expression':
    """Replace every occurrence of variable ``name`` with a constant."""
    return Expression(self.root.substitute(name, _coerce(value, self.dtype)), self.dtype, validate=False)

  def derivative(self, var: str) -> 'Expression':
    """Unsimplified symbolic derivative with respect to ``var``."""
    if not isinstance(var, str) or not var:
      raise ValueError(f"Differentiation variable must be a non-empty string, got {var!r}")
    result = differentiate(self.root, var, self.dtype)
    log_debug(f"d/d{var}: {self.size()} nodes -> {result.size()} nodes")
    return Expression(result, self.dtype, validate=False)

  def to_string(self) -> str:
    if self._string_cache is None:
      self._string_cache = self.root.to_string()
    return self._string_cache

  def to_sympy(self) -> sp.Expr:
    return self.root.to_sympy()

  # Inspection

  def copy(self) -> 'Expression':
    return Expression(self.root.copy(), self.dtype, validate=False)

  def size(self) -> int:
    """Node count"""
    return self.root.size()

  def depth(self) -> int:
    return calculate_tree_depth(self.root)

  def variables(self) -> List[str]:
    return get_variable_names(self.root)

  def type_name(self) -> str:
    return self.root.type_name

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"Expression({self.to_string()!r}, dtype={self.dtype.__name__})"


def _lift(expr) -> Expression:
  if isinstance(expr, Expression):
    return expr
  return Expression.constant(expr)


def sin(expr: Operand) -> Expression:
  return _lift(expr).sin()


def cos(expr: Operand) -> Expression:
  return _lift(expr).cos()


def ln(expr: Operand) -> Expression:
  return _lift(expr).ln()


def exp(expr: Operand) -> Expression:
  return _lift(expr).exp()


def power(base: Operand, exponent: Operand) -> Expression:
  return _lift(base) ** exponent
