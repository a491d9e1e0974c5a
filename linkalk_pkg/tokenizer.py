"""Tokenizer turning raw expression text into typed tokens.

Classification happens left to right from the unconsumed text and a single
flag, ``expect_operator``: it is set after a number, the variable or a
closing parenthesis, and that is how a minus sign with no left operand is
told apart from subtraction. Whitespace tokens are kept in the output and
leave the flag untouched.

Example:
    "4 +7=10" -> [4, ' ', +, 7, =, 10]
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from . import config
from .logging_config import get_logger
from .types import (
    InputTooLongError,
    InvalidFunctionNameError,
    InvalidOperatorError,
    MalformedNumberError,
)

logger = get_logger("tokenizer")

DIGITS = "0123456789"
LEFT_PAREN = "("
RIGHT_PAREN = ")"
COMMA = ","
EQUALS = "="
MINUS = "-"


class TokenKind(Enum):
    WHITESPACE = "whitespace"
    COMMA = "comma"
    NUMBER = "number"
    OPERATOR = "operator"
    FUNCTION = "function"
    LEFT_PAREN = "left_paren"
    RIGHT_PAREN = "right_paren"
    VARIABLE = "variable"
    EQUALS = "equals"


# Token kinds after which a binary operator is expected
OPERAND_KINDS = frozenset({TokenKind.NUMBER, TokenKind.VARIABLE, TokenKind.RIGHT_PAREN})

SINGLE_CHAR_KINDS = {
    COMMA: TokenKind.COMMA,
    LEFT_PAREN: TokenKind.LEFT_PAREN,
    RIGHT_PAREN: TokenKind.RIGHT_PAREN,
    EQUALS: TokenKind.EQUALS,
}


@dataclass(frozen=True)
class Token:
    text: str
    kind: TokenKind
    value: float | None = None

    def __str__(self) -> str:
        return f"{self.text!r}:{self.kind.value}"


def _is_letter(char: str) -> bool:
    return char.isascii() and char.isalpha()


class Tokenizer:
    """Single-use scanner over one expression string."""

    def __init__(self, expression: str) -> None:
        self.expression = expression
        self.pos = 0
        self.expect_operator = False

    def _remaining(self) -> int:
        return len(self.expression) - self.pos

    def _scan_number(self) -> str:
        """Scan digits and dots; the first character is already known to be a digit."""
        s = self.expression
        end = self.pos + 1
        dots = 0
        while end < len(s):
            char = s[end]
            if _is_letter(char) or char == LEFT_PAREN:
                raise MalformedNumberError(
                    "Invalid floating number: contains invalid characters"
                )
            if char not in DIGITS and char != ".":
                break
            dots += char == "."
            end += 1
        if dots > 1:
            raise MalformedNumberError("Invalid floating number: too many dots")
        return s[self.pos:end]

    def _scan_function_name(self) -> str:
        s = self.expression
        end = self.pos + 1
        while end < len(s) and _is_letter(s[end]):
            end += 1
        if end < len(s) and s[end] != LEFT_PAREN and s[end] not in config.WHITESPACE_CHARS:
            raise InvalidFunctionNameError("Invalid function definition")
        return s[self.pos:end]

    def _starts_variable(self) -> bool:
        s = self.expression
        if s[self.pos] != config.VARIABLE_SYMBOL:
            return False
        # "x" followed by a letter starts a function name such as "xor("
        return not (self._remaining() > 2 and _is_letter(s[self.pos + 1]))

    def next_token(self) -> Token:
        char = self.expression[self.pos]

        if char in config.WHITESPACE_CHARS:
            token = Token(char, TokenKind.WHITESPACE)
        elif char == COMMA:
            token = Token(char, TokenKind.COMMA)
        elif char in DIGITS:
            text = self._scan_number()
            token = Token(text, TokenKind.NUMBER, float(text))
        elif self._starts_variable():
            token = Token(char, TokenKind.VARIABLE)
        elif _is_letter(char):
            token = Token(self._scan_function_name(), TokenKind.FUNCTION)
        elif char in SINGLE_CHAR_KINDS:
            token = Token(char, SINGLE_CHAR_KINDS[char])
        elif char == MINUS and not self.expect_operator:
            token = Token(config.NEGATION_SYMBOL, TokenKind.OPERATOR)
        elif char in config.OPERATOR_CHARS:
            token = Token(char, TokenKind.OPERATOR)
        else:
            raise InvalidOperatorError(f"Invalid operator {char!r}")

        if token.kind in (TokenKind.NUMBER, TokenKind.FUNCTION):
            self.pos += len(token.text)
        else:
            self.pos += 1

        if token.kind in OPERAND_KINDS:
            self.expect_operator = True
        elif token.kind is not TokenKind.WHITESPACE:
            self.expect_operator = False
        return token

    def tokens(self) -> list[Token]:
        result: list[Token] = []
        while self.pos < len(self.expression):
            token = self.next_token()
            logger.debug("Token: %s", token)
            result.append(token)
        return result


def tokenize(expression: str) -> list[Token]:
    """Split ``expression`` into tokens, whitespace included.

    Raises:
        LexicalError: on malformed numbers, function names or operators,
            or when the input exceeds ``MAX_INPUT_LENGTH``
    """
    if len(expression) > config.MAX_INPUT_LENGTH:
        raise InputTooLongError(
            f"Input too long (max {config.MAX_INPUT_LENGTH} characters)"
        )
    return Tokenizer(expression).tokens()
