"""
Ошибки движка выражений

Таксономия:
- LexError: нераспознанный символ или идентификатор — фатально для разбора
- ParseError: несбалансированные скобки или некорректная последовательность токенов
  — фатально, частичная программа не возвращается
- EvalError: ожидаемый результат одного вычисления (значение, не исключение);
  не портит программу, её можно повторно вычислить с другим x
- EvaluationError: exception-обёртка над EvalError для вызывающего кода,
  который предпочитает исключения
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# =============================================================================
# EXCEPTIONS (ФАТАЛЬНЫЕ ДЛЯ ПРИЁМА ВЫРАЖЕНИЯ)
# =============================================================================


class ExpressionError(ValueError):
    """Базовый класс ошибок приёма выражения (lex/parse)."""

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.position = position


class LexError(ExpressionError):
    """
    Символ или идентификатор не принадлежит ни одному классу токенов.

    Атрибуты:
        position: индекс символа в исходной строке
        character: нераспознанный фрагмент
    """

    def __init__(self, message: str, position: int, character: str):
        super().__init__(message, position)
        self.character = character


class ParseError(ExpressionError):
    """
    Структурный дефект выражения.

    Атрибуты:
        reason: короткий машиночитаемый код (см. константы ниже)
        position: позиция токена, на котором обнаружен дефект (None — конец ввода)
    """

    EXTRA_CLOSING_PAREN = "extra closing parenthesis"
    MISSING_CLOSING_PAREN = "missing closing parenthesis"
    EMPTY_EXPRESSION = "empty expression"
    MISSING_OPERAND = "missing operand"
    MISSING_OPERATOR = "missing operator"
    FUNCTION_WITHOUT_PARENS = "function requires '('"

    def __init__(self, reason: str, message: str, position: Optional[int] = None):
        super().__init__(message, position)
        self.reason = reason


# =============================================================================
# EVALUATION FAILURES (ЗНАЧЕНИЯ)
# =============================================================================


class EvalErrorKind(str, Enum):
    """Вид ошибки вычисления"""

    INSUFFICIENT_OPERANDS = "insufficient_operands"
    DIVISION_BY_ZERO = "division_by_zero"
    DOMAIN_ERROR = "domain_error"
    NO_RESULT = "no_result"


@dataclass(frozen=True)
class EvalError:
    """
    Ошибка одного вычисления программы.

    kind: вид ошибки
    message: человекочитаемое описание
    symbol: оператор или функция, на которой произошла ошибка (если применимо)
    """

    kind: EvalErrorKind
    message: str
    symbol: Optional[str] = None

    def __str__(self) -> str:
        return self.message


class EvaluationError(ArithmeticError):
    """Exception-обёртка над EvalError (см. evaluate_or_raise)."""

    def __init__(self, error: EvalError, x: float):
        super().__init__(f"{error.message} (x={x!r})")
        self.error = error
        self.x = x
