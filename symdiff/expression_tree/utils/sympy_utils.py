import sympy as sp
from typing import Iterable, Mapping, TYPE_CHECKING
import numpy as np

if TYPE_CHECKING:
  from ..expression import Expression


def to_sympy_expression(expr: 'Expression') -> sp.Expr:
  """SymPy view of the tree, for export and cross-checking only"""
  return expr.root.to_sympy()


def latex_representation(expr: 'Expression') -> str:
  """Get LaTeX representation of the expression"""
  return sp.latex(to_sympy_expression(expr))


def derivatives_agree(expr: 'Expression', var: str,
                      points: Iterable[Mapping[str, complex]],
                      rtol: float = 1e-9, atol: float = 1e-12) -> bool:
  """
  Compare our unsimplified derivative with SymPy's diff at sample points.

  Each point must bind every variable of the expression.
  """
  ours = expr.derivative(var)
  symbol = sp.Symbol(var)
  reference = sp.diff(to_sympy_expression(expr), symbol)

  for point in points:
    subs = {sp.Symbol(name): value for name, value in point.items()}
    expected = complex(reference.evalf(subs=subs))
    actual = complex(ours.evaluate(point))
    if not np.isclose(actual, expected, rtol=rtol, atol=atol):
      return False
  return True
