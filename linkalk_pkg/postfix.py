"""Shunting-yard conversion to postfix order and the postfix stack machine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Union

from .logging_config import get_logger
from .operations import DEFAULT_REGISTRY, Operation, OperationRegistry, Role
from .polynomial import Polynomial
from .tokenizer import Token, TokenKind
from .types import (
    ExcessOperandsError,
    InsufficientOperandsError,
    MismatchedParenError,
    UnknownTokenError,
)

logger = get_logger("postfix")


@dataclass(frozen=True)
class ValueNode:
    """A number or the variable, already converted to a polynomial."""

    value: Polynomial
    label: str

    def feed(self, stack: List[Polynomial]) -> None:
        stack.append(self.value)


@dataclass(frozen=True)
class OperationNode:
    """An operator or function applied to the topmost ``arity`` values."""

    operation: Operation

    @property
    def label(self) -> str:
        return self.operation.identifier

    def feed(self, stack: List[Polynomial]) -> None:
        arity = self.operation.arity
        if len(stack) < arity:
            raise InsufficientOperandsError(
                f"Insufficient number of operands for {self.operation.identifier}"
            )
        split = len(stack) - arity
        args = stack[split:]
        del stack[split:]
        stack.append(self.operation.apply(args))


PostfixNode = Union[ValueNode, OperationNode]


def format_postfix(nodes: Iterable[PostfixNode]) -> str:
    return " ".join(node.label for node in nodes)


def _value_node(token: Token) -> ValueNode:
    if token.kind is TokenKind.VARIABLE:
        return ValueNode(Polynomial.variable(), token.text)
    return ValueNode(Polynomial.constant(token.value), token.text)


class PostfixBuilder:
    """Shunting-yard over one token sequence.

    Operators, function names and opening parentheses wait on a stack of
    tokens; they are resolved against the registry only when they move to
    the output.
    """

    def __init__(self, registry: OperationRegistry = DEFAULT_REGISTRY) -> None:
        self.registry = registry
        self.output: List[PostfixNode] = []
        self.pending: List[Token] = []

    def _resolve(self, token: Token) -> OperationNode:
        if token.kind is TokenKind.OPERATOR:
            return OperationNode(self.registry.resolve(token.text, Role.OPERATOR))
        if token.kind is TokenKind.FUNCTION:
            return OperationNode(self.registry.resolve(token.text, Role.FUNCTION))
        raise UnknownTokenError(f"Unknown token: {token.text}")

    def _pop_to_output(self) -> None:
        self.output.append(self._resolve(self.pending.pop()))

    def _unwind_to_left_paren(self, missing_message: str) -> None:
        while self.pending and self.pending[-1].kind is not TokenKind.LEFT_PAREN:
            self._pop_to_output()
        if not self.pending:
            raise MismatchedParenError(missing_message)

    def _push_operator(self, token: Token) -> None:
        precedence = self.registry.precedence(token.text)
        while (
            self.pending
            and self.pending[-1].kind is TokenKind.OPERATOR
            and self.registry.precedence(self.pending[-1].text) >= precedence
        ):
            self._pop_to_output()
        self.pending.append(token)

    def feed(self, token: Token) -> None:
        logger.debug("Processing: %s", token)
        kind = token.kind
        if kind is TokenKind.WHITESPACE:
            return
        if kind in (TokenKind.NUMBER, TokenKind.VARIABLE):
            self.output.append(_value_node(token))
        elif kind is TokenKind.OPERATOR:
            self._push_operator(token)
        elif kind in (TokenKind.FUNCTION, TokenKind.LEFT_PAREN):
            self.pending.append(token)
        elif kind is TokenKind.COMMA:
            self._unwind_to_left_paren(
                "Invalid function declaration: missing left parentheses"
            )
        elif kind is TokenKind.RIGHT_PAREN:
            self._unwind_to_left_paren("Invalid parentheses: missing left parentheses")
            self.pending.pop()
            # a closed argument list belongs to the function right below it
            if self.pending and self.pending[-1].kind is TokenKind.FUNCTION:
                self._pop_to_output()
        else:
            raise UnknownTokenError(f"Unknown token: {token.text}")

    def finish(self) -> List[PostfixNode]:
        while self.pending:
            if self.pending[-1].kind in (TokenKind.LEFT_PAREN, TokenKind.RIGHT_PAREN):
                raise MismatchedParenError("Mismatched parentheses")
            self._pop_to_output()
        logger.debug("Postfix sequence: %s", format_postfix(self.output))
        return self.output


def build_postfix(
    tokens: Iterable[Token], registry: OperationRegistry = DEFAULT_REGISTRY
) -> List[PostfixNode]:
    """Convert infix tokens to a postfix node sequence.

    Raises:
        StructuralError: on unbalanced parentheses, tokens that cannot appear
            in an expression, or identifiers missing from ``registry``
    """
    builder = PostfixBuilder(registry)
    for token in tokens:
        builder.feed(token)
    return builder.finish()


def evaluate_postfix(nodes: Sequence[PostfixNode]) -> Polynomial:
    """Reduce a postfix sequence to exactly one polynomial.

    Raises:
        EvaluationError: when operands run short or values are left over
        AlgebraError: from the arithmetic and functions being applied
    """
    stack: List[Polynomial] = []
    for node in nodes:
        node.feed(stack)
    if not stack:
        raise InsufficientOperandsError("Insufficient values left after evaluation")
    if len(stack) > 1:
        raise ExcessOperandsError("Too many values left after evaluation")
    return stack[0]
