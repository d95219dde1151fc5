import pytest

from symdiff import (
  Expression, parse_expression, tokenize, TokenType, NodeKind,
  ParseError, UnknownCharacterError, ExpectedTokenError, UnexpectedTokenError, TrailingTokensError
)
from symdiff.expression_tree.utils.tree_utils import validate_tree_structure


def test_tokenize_example():
  tokens = tokenize("sin(x)*  (2+y) ^3")
  assert [t.type for t in tokens] == [
    TokenType.FUNC_SIN, TokenType.LPAREN, TokenType.VARIABLE, TokenType.RPAREN,
    TokenType.MUL, TokenType.LPAREN, TokenType.NUMBER, TokenType.PLUS,
    TokenType.VARIABLE, TokenType.RPAREN, TokenType.POW, TokenType.NUMBER, TokenType.END,
  ]
  assert tokens[6].text == "2"
  assert tokens[6].position == 10


def test_function_names_only_match_whole_words():
  tokens = tokenize("sinx ln exp cosy")
  assert [t.type for t in tokens] == [
    TokenType.VARIABLE, TokenType.FUNC_LN, TokenType.FUNC_EXP, TokenType.VARIABLE, TokenType.END,
  ]


def test_parse_and_print_example():
  expr = parse_expression("sin(x)*  (2+y) ^3")
  assert expr.to_string() == "(sin(x) * ((2 + y) ^ 3))"
  assert expr.dtype is float


def test_basic_evaluation():
  assert parse_expression("2+2").evaluate({}) == 4.0
  assert parse_expression("x^2").evaluate({"x": 3.0}) == 9.0
  assert parse_expression("1.5 + .5 + 3.").evaluate() == 5.0


def test_precedence_and_left_associativity():
  assert parse_expression("2+3*4").evaluate() == 14.0
  assert parse_expression("2-3-4").evaluate() == -5.0
  assert parse_expression("8/4/2").evaluate() == 1.0
  assert parse_expression("2*3^2").evaluate() == 18.0
  assert parse_expression("(2+3)*4").evaluate() == 20.0


def test_power_is_left_associative():
  expr = parse_expression("2^3^2")
  assert expr.to_string() == "((2 ^ 3) ^ 2)"
  assert expr.evaluate() == 64.0


def test_functions():
  expr = parse_expression("exp(ln(x)) + cos(0)")
  assert expr.root.left.kind == NodeKind.EXP
  assert expr.evaluate({"x": 2.0}) == pytest.approx(3.0)


def test_long_chain_builds_unshared_left_leaning_tree():
  text = " + ".join(f"x{chr(ord('a') + i % 26)}" for i in range(200))
  expr = parse_expression(text)
  assert expr.size() == 399
  assert expr.depth() == 200
  assert validate_tree_structure(expr.root)
  assert expr.root.kind == NodeKind.ADD
  assert expr.root.right.kind == NodeKind.VARIABLE


def test_parsed_tree_is_real_valued():
  expr = parse_expression("sin(2) * y")
  assert expr.dtype is float
  assert expr.root.left.kind == NodeKind.SIN
  assert expr.root.left.arg.value == 2.0


def test_from_string_alias():
  assert Expression.from_string("x*y").to_string() == "(x * y)"


@pytest.mark.parametrize("text, char", [("2 $ 3", "$"), (".", "."), ("x_1", "_"), ("3 % 2", "%")])
def test_unknown_character(text, char):
  with pytest.raises(UnknownCharacterError) as excinfo:
    parse_expression(text)
  assert excinfo.value.character == char


def test_missing_close_paren_after_function():
  with pytest.raises(ExpectedTokenError) as excinfo:
    parse_expression("sin(x")
  assert excinfo.value.expected is TokenType.RPAREN
  assert excinfo.value.found.type is TokenType.END


def test_missing_open_paren_after_function():
  with pytest.raises(ExpectedTokenError) as excinfo:
    parse_expression("sin x")
  assert excinfo.value.expected is TokenType.LPAREN


def test_unbalanced_group():
  with pytest.raises(ExpectedTokenError):
    parse_expression("(2+3")


@pytest.mark.parametrize("text", ["2+", "", "*3", "()", "-2"])
def test_unexpected_token(text):
  with pytest.raises(UnexpectedTokenError):
    parse_expression(text)


@pytest.mark.parametrize("text", ["2+2)", "2 3", "1.2.3", "x y"])
def test_trailing_tokens(text):
  with pytest.raises(TrailingTokensError):
    parse_expression(text)


def test_parse_errors_are_value_errors():
  with pytest.raises(ValueError):
    parse_expression("2 +")
  with pytest.raises(ParseError) as excinfo:
    parse_expression("2 ? 1")
  assert excinfo.value.position == 2
