"""Operators, functions and the registry that resolves them by identifier.

The registry is built once and never mutated. Extending the calculator with
a new function means registering another :class:`Operation`::

    registry = DEFAULT_REGISTRY.with_function(
        Operation(
            "tan",
            1,
            lambda args: Polynomial.constant(math.tan(args[0].constant_term())),
            constant_args=True,
        )
    )

Tokenizer, postfix builder and evaluator need no change for that.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, Sequence

from . import config
from .polynomial import Polynomial
from .types import (
    ArityMismatchError,
    DomainError,
    NonConstantArgumentError,
    UnknownSymbolError,
)

Rule = Callable[[Sequence[Polynomial]], Polynomial]


class Role(Enum):
    """Syntactic role an identifier is resolved under."""

    OPERATOR = "operator"
    FUNCTION = "function"


@dataclass(frozen=True)
class Operation:
    """Descriptor of an infix operator or a named function.

    ``precedence`` only matters for operators; functions are always fully
    bracketed and never compared. ``constant_args`` requires every argument
    to be a constant polynomial.
    """

    identifier: str
    arity: int
    rule: Rule
    precedence: int = 0
    constant_args: bool = False

    def apply(self, args: Sequence[Polynomial]) -> Polynomial:
        if len(args) != self.arity:
            raise ArityMismatchError(f"Invalid number of parameters for {self.identifier}")
        if self.constant_args:
            for value in args:
                if not value.is_constant():
                    raise NonConstantArgumentError(
                        f"Can't use {self.identifier} on polynomials of degree >= 2"
                    )
        return self.rule(args)


def _numeric(fn: Callable[..., float]) -> Rule:
    """Lift a float function to a rule over constant polynomials."""

    def rule(args: Sequence[Polynomial]) -> Polynomial:
        operands = [value.constant_term() for value in args]
        try:
            return Polynomial.constant(fn(*operands))
        except (ValueError, OverflowError) as e:
            raise DomainError(f"Math error in {fn.__name__}: {e}") from e

    return rule


def _log(args: Sequence[Polynomial]) -> Polynomial:
    value = args[0].constant_term()
    # an argument equal to the tolerance is accepted, only smaller ones fail
    if value < config.ZERO_TOLERANCE:
        raise DomainError("Can't take logarithm of a number less than or equal to 0")
    return Polynomial.constant(math.log(value))


def _function(identifier: str, arity: int, rule: Rule) -> Operation:
    return Operation(identifier, arity, rule, constant_args=True)


BUILTIN_OPERATORS = (
    Operation("+", 2, lambda args: args[0] + args[1], config.OPERATOR_PRECEDENCE["+"]),
    Operation("-", 2, lambda args: args[0] - args[1], config.OPERATOR_PRECEDENCE["-"]),
    Operation("*", 2, lambda args: args[0] * args[1], config.OPERATOR_PRECEDENCE["*"]),
    Operation("/", 2, lambda args: args[0] / args[1], config.OPERATOR_PRECEDENCE["/"]),
    Operation(
        config.NEGATION_SYMBOL,
        1,
        lambda args: -args[0],
        config.OPERATOR_PRECEDENCE[config.NEGATION_SYMBOL],
    ),
)

BUILTIN_FUNCTIONS = (
    _function("log", 1, _log),
    _function("max", 2, _numeric(max)),
    _function("min", 2, _numeric(min)),
    _function("pow", 2, _numeric(math.pow)),
    _function("sin", 1, _numeric(math.sin)),
    _function("cos", 1, _numeric(math.cos)),
)


class OperationRegistry:
    """Immutable mapping from (role, identifier) to :class:`Operation`."""

    def __init__(
        self,
        operators: Sequence[Operation] = (),
        functions: Sequence[Operation] = (),
    ) -> None:
        self._tables: Mapping[Role, Mapping[str, Operation]] = MappingProxyType(
            {
                Role.OPERATOR: MappingProxyType({op.identifier: op for op in operators}),
                Role.FUNCTION: MappingProxyType({fn.identifier: fn for fn in functions}),
            }
        )

    @property
    def operators(self) -> Mapping[str, Operation]:
        return self._tables[Role.OPERATOR]

    @property
    def functions(self) -> Mapping[str, Operation]:
        return self._tables[Role.FUNCTION]

    def resolve(self, identifier: str, role: Role) -> Operation:
        try:
            return self._tables[role][identifier]
        except KeyError:
            kind = "operator" if role is Role.OPERATOR else "function"
            raise UnknownSymbolError(
                f"Invalid mathematical {kind} {identifier}"
            ) from None

    def precedence(self, identifier: str) -> int:
        return self.resolve(identifier, Role.OPERATOR).precedence

    def with_operator(self, operation: Operation) -> "OperationRegistry":
        return OperationRegistry(
            [*self.operators.values(), operation], list(self.functions.values())
        )

    def with_function(self, operation: Operation) -> "OperationRegistry":
        return OperationRegistry(
            list(self.operators.values()), [*self.functions.values(), operation]
        )


def build_default_registry() -> OperationRegistry:
    return OperationRegistry(BUILTIN_OPERATORS, BUILTIN_FUNCTIONS)


DEFAULT_REGISTRY = build_default_registry()
