from typing import Optional
from ..core.node import Node
from .tree_utils import validate_tree_structure, get_constants


class ExpressionValidator:

  @staticmethod
  def is_valid_expression(node: Node, dtype: Optional[type] = None) -> bool:
    if not validate_tree_structure(node):
      return False
    if dtype is not None:
      return ExpressionValidator.has_uniform_dtype(node, dtype)
    return True

  @staticmethod
  def has_uniform_dtype(node: Node, dtype: type) -> bool:
    """All constants carry the tree's numeric type (float or complex)"""
    return all(type(constant.value) is dtype for constant in get_constants(node))

  @staticmethod
  def infer_dtype(node: Node) -> type:
    """complex if any constant is complex, float otherwise"""
    if any(isinstance(constant.value, complex) for constant in get_constants(node)):
      return complex
    return float

  @staticmethod
  def check(node: Node, dtype: type):
    """Raise if the tree breaks a construction invariant"""
    if not validate_tree_structure(node):
      raise ValueError("Malformed expression tree (wrong arity or shared subtree)")
    if not ExpressionValidator.has_uniform_dtype(node, dtype):
      raise TypeError(f"Expression tree mixes constant types, expected only {dtype.__name__}")
