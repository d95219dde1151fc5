"""
Infix expression parser.

Turns text such as ``"sin(x)*  (2+y) ^3"`` into a real-valued Expression.

Grammar, lowest precedence first::

    expr    := term (('+' | '-') term)*
    term    := factor (('*' | '/') factor)*
    factor  := primary ('^' primary)*
    primary := NUMBER | VARIABLE | func '(' expr ')' | '(' expr ')'

All binary operators are left-associative, including '^': ``2^3^2`` parses
as ``(2^3)^2``.
"""

from enum import Enum
from typing import List, NamedTuple

from .errors import (
    UnknownCharacterError, ExpectedTokenError, UnexpectedTokenError, TrailingTokensError
)
from .expression_tree.core.node import Node, ConstantNode, VariableNode, BinaryOpNode, UnaryOpNode
from .expression_tree.core.operators import BINARY_OP_MAP, UNARY_OP_MAP
from .expression_tree.expression import Expression
from .logging_system import log_debug


class TokenType(Enum):
    NUMBER = 'number'
    VARIABLE = 'variable'
    PLUS = "'+'"
    MINUS = "'-'"
    MUL = "'*'"
    DIV = "'/'"
    POW = "'^'"
    LPAREN = "'('"
    RPAREN = "')'"
    FUNC_SIN = "'sin'"
    FUNC_COS = "'cos'"
    FUNC_EXP = "'exp'"
    FUNC_LN = "'ln'"
    END = 'end of input'

    def describe(self) -> str:
        return self.value


class Token(NamedTuple):
    type: TokenType
    text: str
    position: int

    def describe(self) -> str:
        if self.type in (TokenType.NUMBER, TokenType.VARIABLE):
            return f"{self.type.value} {self.text!r}"
        return self.type.value


SINGLE_CHAR_TOKENS = {
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.MUL,
    '/': TokenType.DIV,
    '^': TokenType.POW,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
}

FUNCTION_TOKENS = {
    'sin': TokenType.FUNC_SIN,
    'cos': TokenType.FUNC_COS,
    'exp': TokenType.FUNC_EXP,
    'ln': TokenType.FUNC_LN,
}

FUNCTION_TYPES = frozenset(FUNCTION_TOKENS.values())


def _is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


def _is_ascii_letter(ch: str) -> bool:
    return ('a' <= ch <= 'z') or ('A' <= ch <= 'Z')


def tokenize(text: str) -> List[Token]:
    """
    Split ``text`` into tokens, ending with an END token.

    Numbers are digit runs with at most one decimal point and at least one
    digit; there is no sign or exponent notation. Letter runs become function
    tokens when they spell a known function name, variables otherwise.

    Raises:
        UnknownCharacterError: on any other character
    """
    tokens: List[Token] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch.isspace():
            i += 1
        elif _is_digit(ch) or ch == '.':
            start = i
            seen_point = False
            seen_digit = False
            while i < n and (_is_digit(text[i]) or (text[i] == '.' and not seen_point)):
                if text[i] == '.':
                    seen_point = True
                else:
                    seen_digit = True
                i += 1
            if not seen_digit:
                raise UnknownCharacterError(ch, start)
            tokens.append(Token(TokenType.NUMBER, text[start:i], start))
        elif _is_ascii_letter(ch):
            start = i
            while i < n and _is_ascii_letter(text[i]):
                i += 1
            word = text[start:i]
            tokens.append(Token(FUNCTION_TOKENS.get(word, TokenType.VARIABLE), word, start))
        elif ch in SINGLE_CHAR_TOKENS:
            tokens.append(Token(SINGLE_CHAR_TOKENS[ch], ch, i))
            i += 1
        else:
            raise UnknownCharacterError(ch, i)
    tokens.append(Token(TokenType.END, '', n))
    return tokens


class Parser:
    """
    Recursive-descent parser over a token list.

    The parse methods return bare nodes. Every subtree is built fresh from
    the tokens, so binary nodes take their operands without copying them and
    only ``parse`` wraps the finished root in an Expression.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def _advance(self) -> Token:
        token = self.tokens[self.pos]
        if token.type is not TokenType.END:
            self.pos += 1
        return token

    def _expect(self, token_type: TokenType) -> Token:
        if self.current.type is not token_type:
            raise ExpectedTokenError(token_type, self.current)
        return self._advance()

    def parse(self) -> Expression:
        root = self.parse_expr()
        if self.current.type is not TokenType.END:
            raise TrailingTokensError(self.current)
        return Expression(root, float, validate=False)

    def _parse_left_assoc(self, operators, operand) -> Node:
        left = operand()
        while self.current.type in operators:
            op = self._advance()
            left = BinaryOpNode(BINARY_OP_MAP[op.text], left, operand())
        return left

    def parse_expr(self) -> Node:
        return self._parse_left_assoc((TokenType.PLUS, TokenType.MINUS), self.parse_term)

    def parse_term(self) -> Node:
        return self._parse_left_assoc((TokenType.MUL, TokenType.DIV), self.parse_factor)

    def parse_factor(self) -> Node:
        return self._parse_left_assoc((TokenType.POW,), self.parse_primary)

    def parse_primary(self) -> Node:
        token = self.current
        if token.type is TokenType.NUMBER:
            self._advance()
            return ConstantNode(float(token.text))
        elif token.type is TokenType.VARIABLE:
            self._advance()
            return VariableNode(token.text)
        elif token.type in FUNCTION_TYPES:
            self._advance()
            self._expect(TokenType.LPAREN)
            arg = self.parse_expr()
            self._expect(TokenType.RPAREN)
            return UnaryOpNode(UNARY_OP_MAP[token.text], arg)
        elif token.type is TokenType.LPAREN:
            self._advance()
            inner = self.parse_expr()
            self._expect(TokenType.RPAREN)
            return inner
        raise UnexpectedTokenError(token)


def parse_expression(text: str) -> Expression:
    """Parse infix ``text`` into a real-valued Expression."""
    tokens = tokenize(text)
    log_debug(f"Tokenized {text!r} into {len(tokens)} tokens")
    return Parser(tokens).parse()
