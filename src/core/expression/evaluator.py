"""
Evaluator — стековая машина для PostfixProgram

Выполнение:
- PushConst / PushVariable: положить литерал / значение x
- ApplyBinaryOp: снять правый, затем левый операнд; < 2 значений → INSUFFICIENT_OPERANDS
  "/" с |divisor| < EPS_DIVISION → DIVISION_BY_ZERO (вместо inf)
  "^" — IEEE pow; неопределённый вещественный результат → DOMAIN_ERROR("^")
- ApplyUnaryOp: снять одно значение, применить знак
- ApplyFunction: снять одно значение; log/ln требуют > 0, sqrt требует >= 0,
  иначе DOMAIN_ERROR(function); sin, cos, tan, abs, exp никогда не ошибаются
- После выполнения: пустой стек → NO_RESULT, иначе вершина стека

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ошибки вычисления возвращаются значением (Evaluation.error), не исключением
2. evaluate — чистая функция (program, x): нет побочных эффектов и состояния между вызовами
3. Программа не перепроверяется: инвариант одного значения установлен parser'ом
"""

from dataclasses import dataclass
from typing import Optional

from src.core.expression.errors import EvalError, EvalErrorKind, EvaluationError
from src.core.expression.program import (
    ApplyBinaryOp,
    ApplyFunction,
    ApplyUnaryOp,
    PostfixProgram,
    PushConst,
    PushVariable,
)
from src.core.expression.symbols import DEFAULT_SYMBOLS, SymbolTable
from src.core.math.numerical_safeguards import EPS_DIVISION, ieee_pow, is_division_safe


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class Evaluation:
    """Результат одного вычисления: value при успехе, error при ошибке."""

    value: Optional[float] = None
    error: Optional[EvalError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self, x: float = float("nan")) -> float:
        """Значение или EvaluationError."""
        if self.error is not None:
            raise EvaluationError(self.error, x)
        return self.value


class _Failure(Exception):
    """Внутренний сигнал прерывания выполнения; наружу не выходит."""

    def __init__(self, error: EvalError):
        self.error = error


# =============================================================================
# EVALUATOR
# =============================================================================


class Evaluator:
    """
    Вычислитель, связанный с одной программой.

    Используется integrator'ом для многократных вызовов с разными x.
    Не хранит состояние между вызовами.
    """

    def __init__(self, program: PostfixProgram, symbols: SymbolTable = DEFAULT_SYMBOLS):
        self.program = program
        self.symbols = symbols

    def __call__(self, x: float) -> Evaluation:
        return self.evaluate(x)

    def evaluate(self, x: float) -> Evaluation:
        """
        Выполнение программы при заданном x.

        Args:
            x: Значение переменной

        Returns:
            Evaluation с value или error
        """
        stack: list[float] = []
        try:
            for instruction in self.program.instructions:
                if isinstance(instruction, PushConst):
                    stack.append(instruction.value)
                elif isinstance(instruction, PushVariable):
                    stack.append(x)
                elif isinstance(instruction, ApplyBinaryOp):
                    self._apply_binary(instruction.symbol, stack)
                elif isinstance(instruction, ApplyUnaryOp):
                    self._apply_unary(instruction.symbol, stack)
                elif isinstance(instruction, ApplyFunction):
                    self._apply_function(instruction.name, stack)
                else:
                    raise TypeError(f"Unknown instruction: {instruction!r}")
        except _Failure as failure:
            return Evaluation(error=failure.error)

        if not stack:
            return Evaluation(
                error=EvalError(
                    EvalErrorKind.NO_RESULT, "Invalid expression: no result computed"
                )
            )
        return Evaluation(value=stack[-1])

    # -- Приватные ---------------------------------------------------------

    @staticmethod
    def _apply_binary(symbol: str, stack: list[float]) -> None:
        if len(stack) < 2:
            raise _Failure(
                EvalError(
                    EvalErrorKind.INSUFFICIENT_OPERANDS,
                    f"Invalid expression: not enough operands for operator '{symbol}'",
                    symbol,
                )
            )
        right = stack.pop()
        left = stack.pop()

        if symbol == "+":
            result = left + right
        elif symbol == "-":
            result = left - right
        elif symbol == "*":
            result = left * right
        elif symbol == "/":
            if not is_division_safe(right, EPS_DIVISION):
                raise _Failure(
                    EvalError(EvalErrorKind.DIVISION_BY_ZERO, "Division by zero", symbol)
                )
            result = left / right
        elif symbol == "^":
            try:
                result = ieee_pow(left, right)
            except ValueError:
                raise _Failure(
                    EvalError(
                        EvalErrorKind.DOMAIN_ERROR,
                        f"Domain error: {left!r} ^ {right!r} is not a real number",
                        symbol,
                    )
                ) from None
        else:
            raise ValueError(f"Unknown binary operator: {symbol!r}")

        stack.append(result)

    @staticmethod
    def _apply_unary(symbol: str, stack: list[float]) -> None:
        if not stack:
            raise _Failure(
                EvalError(
                    EvalErrorKind.INSUFFICIENT_OPERANDS,
                    f"Invalid expression: unary '{symbol}' requires an operand",
                    symbol,
                )
            )
        if symbol == "-":
            stack.append(-stack.pop())
        elif symbol != "+":
            raise ValueError(f"Unknown unary operator: {symbol!r}")

    def _apply_function(self, name: str, stack: list[float]) -> None:
        if not stack:
            raise _Failure(
                EvalError(
                    EvalErrorKind.INSUFFICIENT_OPERANDS,
                    f"Invalid expression: {name} requires an argument",
                    name,
                )
            )
        argument = stack.pop()
        spec = self.symbols.function(name)
        if not spec.accepts(argument):
            raise _Failure(
                EvalError(
                    EvalErrorKind.DOMAIN_ERROR,
                    f"Domain error: {spec.domain_message}",
                    name,
                )
            )
        stack.append(spec.func(argument))


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def evaluate(
    program: PostfixProgram, x: float, symbols: SymbolTable = DEFAULT_SYMBOLS
) -> Evaluation:
    """
    Вычисление программы при заданном x.

    Examples:
        >>> from src.core.expression.parser import parse
        >>> evaluate(parse("x^2"), 3.0).value
        9.0
        >>> evaluate(parse("1/x"), 0.0).error.kind.value
        'division_by_zero'
    """
    return Evaluator(program, symbols).evaluate(x)


def evaluate_or_raise(
    program: PostfixProgram, x: float, symbols: SymbolTable = DEFAULT_SYMBOLS
) -> float:
    """
    Вычисление с исключением вместо значения ошибки.

    Raises:
        EvaluationError: При любой EvalError
    """
    return evaluate(program, x, symbols).unwrap(x)
