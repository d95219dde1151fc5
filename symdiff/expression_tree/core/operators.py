import numpy as np
import numba
from enum import IntEnum

from ...errors import DivisionByZeroError, InvalidDomainError


class NodeKind(IntEnum):
  # Leaves
  CONSTANT = 0
  VARIABLE = 1
  # Binary ops
  ADD = 2
  SUBTRACT = 3
  MULTIPLY = 4
  DIVIDE = 5
  POWER = 6
  # Unary functions
  SIN = 7
  COS = 8
  LN = 9
  EXP = 10

  @property
  def display_name(self) -> str:
    return KIND_NAMES[self]


KIND_NAMES = {
  NodeKind.CONSTANT: 'Constant', NodeKind.VARIABLE: 'Variable',
  NodeKind.ADD: 'Add', NodeKind.SUBTRACT: 'Subtract', NodeKind.MULTIPLY: 'Multiply',
  NodeKind.DIVIDE: 'Divide', NodeKind.POWER: 'Power',
  NodeKind.SIN: 'Sin', NodeKind.COS: 'Cos', NodeKind.LN: 'Ln', NodeKind.EXP: 'Exp',
}

BINARY_KINDS = frozenset({NodeKind.ADD, NodeKind.SUBTRACT, NodeKind.MULTIPLY, NodeKind.DIVIDE, NodeKind.POWER})
UNARY_KINDS = frozenset({NodeKind.SIN, NodeKind.COS, NodeKind.LN, NodeKind.EXP})

# Mapping dictionaries
BINARY_OP_SYMBOLS = {
  NodeKind.ADD: '+', NodeKind.SUBTRACT: '-', NodeKind.MULTIPLY: '*',
  NodeKind.DIVIDE: '/', NodeKind.POWER: '^',
}
UNARY_FUNC_NAMES = {
  NodeKind.SIN: 'sin', NodeKind.COS: 'cos', NodeKind.LN: 'ln', NodeKind.EXP: 'exp',
}
BINARY_OP_MAP = {symbol: kind for kind, symbol in BINARY_OP_SYMBOLS.items()}
UNARY_OP_MAP = {name: kind for kind, name in UNARY_FUNC_NAMES.items()}

# Plain ints for the jitted kernels
_ADD = int(NodeKind.ADD)
_SUBTRACT = int(NodeKind.SUBTRACT)
_MULTIPLY = int(NodeKind.MULTIPLY)
_DIVIDE = int(NodeKind.DIVIDE)
_POWER = int(NodeKind.POWER)
_SIN = int(NodeKind.SIN)
_COS = int(NodeKind.COS)
_LN = int(NodeKind.LN)
_EXP = int(NodeKind.EXP)


def format_real(value) -> str:
  """Shortest round-trip decimal, without a trailing '.0'"""
  text = repr(float(value))
  if text.endswith('.0'):
    text = text[:-2]
  return text


def format_constant(value) -> str:
  if isinstance(value, complex):
    real = format_real(value.real)
    imag = format_real(value.imag)
    sign = '' if imag.startswith('-') else '+'
    return f"({real}{sign}{imag}j)"
  return format_real(value)


def is_complex_value(value) -> bool:
  return np.iscomplexobj(value)


def evaluate_binary_op(left_val, right_val, kind: NodeKind):
  """Scalar binary op with the strict error policy (numpy scalars in, numpy scalar out)"""
  if kind == NodeKind.ADD:
    return left_val + right_val
  elif kind == NodeKind.SUBTRACT:
    return left_val - right_val
  elif kind == NodeKind.MULTIPLY:
    return left_val * right_val
  elif kind == NodeKind.DIVIDE:
    if right_val == 0:
      raise DivisionByZeroError(left_val)
    return left_val / right_val
  elif kind == NodeKind.POWER:
    return np.power(left_val, right_val)
  raise ValueError(f"Not a binary operator: {kind!r}")


def evaluate_unary_op(operand_val, kind: NodeKind):
  if kind == NodeKind.SIN:
    return np.sin(operand_val)
  elif kind == NodeKind.COS:
    return np.cos(operand_val)
  elif kind == NodeKind.LN:
    check_log_domain(operand_val)
    return np.log(operand_val)
  elif kind == NodeKind.EXP:
    return np.exp(operand_val)
  raise ValueError(f"Not a unary function: {kind!r}")


def check_log_domain(operand_val):
  # Complex arguments use the principal branch; only zero is rejected.
  if is_complex_value(operand_val):
    if np.any(operand_val == 0):
      raise InvalidDomainError('ln', _first_offending(operand_val, operand_val == 0))
  elif np.any(operand_val <= 0):
    raise InvalidDomainError('ln', _first_offending(operand_val, operand_val <= 0))


def check_divisor(right_val):
  if np.any(right_val == 0):
    raise DivisionByZeroError()


def _first_offending(values, mask):
  if np.ndim(values) == 0:
    return values.item() if hasattr(values, 'item') else values
  return values[np.argmax(mask)].item()


@numba.njit(cache=True, error_model='numpy')
def evaluate_binary_op_batch(left_val, right_val, op_code):
  """Elementwise binary op over sample arrays; divisors are checked by the caller"""
  if op_code == _ADD:
    return left_val + right_val
  elif op_code == _SUBTRACT:
    return left_val - right_val
  elif op_code == _MULTIPLY:
    return left_val * right_val
  elif op_code == _DIVIDE:
    return left_val / right_val
  elif op_code == _POWER:
    return np.power(left_val, right_val)
  raise ValueError("unknown binary op code")


@numba.njit(cache=True, error_model='numpy')
def evaluate_unary_op_batch(operand_val, op_code):
  """Elementwise unary function over a sample array; log domain is checked by the caller"""
  if op_code == _SIN:
    return np.sin(operand_val)
  elif op_code == _COS:
    return np.cos(operand_val)
  elif op_code == _LN:
    return np.log(operand_val)
  elif op_code == _EXP:
    return np.exp(operand_val)
  raise ValueError("unknown unary op code")
