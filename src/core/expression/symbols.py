"""
Symbol Table — операторы, функции и константы языка выражений

Неизменяемая конфигурация, общая для tokenizer, parser и evaluator.
Передаётся явно (аргумент по умолчанию DEFAULT_SYMBOLS), без изменяемого
глобального состояния: таблица безопасно читается из любого количества
одновременных вызовов.

ОПЕРАТОРЫ (precedence / associativity):
    +  -    2 / left
    *  /    3 / left
    ^       4 / right
    унарные + -   4 / right (префиксные, никогда не выталкивают стек при push)

ФУНКЦИИ (унарные): sin, cos, tan, log (base 10), ln, sqrt, abs, exp
КОНСТАНТЫ: pi, e
"""

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Final, Mapping, Optional

from src.core.math.numerical_safeguards import ieee_unary


# =============================================================================
# ENUMS
# =============================================================================


class Associativity(str, Enum):
    """Ассоциативность оператора"""

    LEFT = "left"
    RIGHT = "right"


# =============================================================================
# ОПИСАНИЯ СИМВОЛОВ
# =============================================================================


@dataclass(frozen=True)
class OperatorSpec:
    """Описание оператора: символ, приоритет, ассоциативность."""

    symbol: str
    precedence: int
    associativity: Associativity

    @property
    def is_left_associative(self) -> bool:
        return self.associativity == Associativity.LEFT


@dataclass(frozen=True)
class FunctionSpec:
    """
    Описание унарной функции.

    domain: предикат допустимости аргумента (None — функция определена везде)
    domain_message: текст ошибки при нарушении domain
    """

    name: str
    func: Callable[[float], float]
    domain: Optional[Callable[[float], bool]] = None
    domain_message: str = ""

    def accepts(self, argument: float) -> bool:
        """True если аргумент в области определения функции."""
        if self.domain is None:
            return True
        return self.domain(argument)


@dataclass(frozen=True)
class SymbolTable:
    """
    Полная таблица символов языка выражений.

    Все отображения — read-only (MappingProxyType). Имена функций и констант
    хранятся в нижнем регистре; lookup выполняется по нормализованному имени.
    """

    operators: Mapping[str, OperatorSpec]
    unary_operators: Mapping[str, OperatorSpec]
    functions: Mapping[str, FunctionSpec]
    constants: Mapping[str, float]
    variable: str = "x"

    def is_operator(self, symbol: str) -> bool:
        return symbol in self.operators

    def is_function(self, name: str) -> bool:
        return name.lower() in self.functions

    def is_constant(self, name: str) -> bool:
        return name.lower() in self.constants

    def is_variable(self, name: str) -> bool:
        return name.lower() == self.variable

    def function(self, name: str) -> FunctionSpec:
        return self.functions[name.lower()]

    def constant(self, name: str) -> float:
        return self.constants[name.lower()]


# =============================================================================
# ФУНКЦИИ С ДОМЕННЫМИ ОГРАНИЧЕНИЯМИ
# =============================================================================


def _is_positive(value: float) -> bool:
    return value > 0


def _is_non_negative(value: float) -> bool:
    return value >= 0


_FUNCTIONS: Final[dict[str, FunctionSpec]] = {
    "sin": FunctionSpec("sin", ieee_unary(math.sin)),
    "cos": FunctionSpec("cos", ieee_unary(math.cos)),
    "tan": FunctionSpec("tan", ieee_unary(math.tan)),
    "log": FunctionSpec(
        "log", math.log10, _is_positive, "log requires positive argument"
    ),
    "ln": FunctionSpec(
        "ln", math.log, _is_positive, "ln requires positive argument"
    ),
    "sqrt": FunctionSpec(
        "sqrt", math.sqrt, _is_non_negative, "sqrt requires non-negative argument"
    ),
    "abs": FunctionSpec("abs", ieee_unary(math.fabs)),
    "exp": FunctionSpec("exp", ieee_unary(math.exp)),
}

_BINARY_OPERATORS: Final[dict[str, OperatorSpec]] = {
    "+": OperatorSpec("+", 2, Associativity.LEFT),
    "-": OperatorSpec("-", 2, Associativity.LEFT),
    "*": OperatorSpec("*", 3, Associativity.LEFT),
    "/": OperatorSpec("/", 3, Associativity.LEFT),
    "^": OperatorSpec("^", 4, Associativity.RIGHT),
}

# Унарный знак: -x^2 == -(x^2), 2^-x == 2^(-x), -2*x == (-2)*x
_UNARY_OPERATORS: Final[dict[str, OperatorSpec]] = {
    "+": OperatorSpec("+", 4, Associativity.RIGHT),
    "-": OperatorSpec("-", 4, Associativity.RIGHT),
}

_CONSTANTS: Final[dict[str, float]] = {
    "pi": math.pi,
    "e": math.e,
}


DEFAULT_SYMBOLS: Final[SymbolTable] = SymbolTable(
    operators=MappingProxyType(_BINARY_OPERATORS),
    unary_operators=MappingProxyType(_UNARY_OPERATORS),
    functions=MappingProxyType(_FUNCTIONS),
    constants=MappingProxyType(_CONSTANTS),
)
