"""
NumericalIntegrator — приближённое вычисление определённого интеграла

Методы (h = (upper - lower) / n):
    Trapezoidal: h * [½(f(a) + f(b)) + Σ_{i=1}^{n-1} f(a + i·h)]
    Simpson:     n нечётное → n + 1; (h/3) * [f(a) + f(b) + Σ_{i=1}^{n-1} w_i·f(a + i·h)],
                 w_i = 4 для нечётных i, 2 для чётных
    Midpoint:    h * Σ_{i=0}^{n-1} f(a + (i + ½)·h)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Любая ошибка вычисления прерывает только текущий метод; остальные методы
   в compute_all() выполняются независимо
2. Точки выборки обходятся в порядке индекса: сообщается первая ошибка по индексу
3. Integrator не работает с исходным текстом и токенами после компиляции:
   только с PostfixProgram (read-only)
4. Коррекция n для Simpson не скрыта: фиксируется в QuadratureResult.warnings и в логе
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final, Iterable, Optional

from src.core.contracts import validate_integration_request
from src.core.expression.errors import EvalError
from src.core.expression.evaluator import Evaluation, Evaluator
from src.core.expression.parser import parse
from src.core.expression.program import PostfixProgram
from src.core.expression.symbols import DEFAULT_SYMBOLS, SymbolTable
from src.core.math.numerical_safeguards import round_up_to_even
from src.integration.settings import (
    DEFAULT_LOWER_BOUND,
    DEFAULT_SUBDIVISIONS,
    DEFAULT_UPPER_BOUND,
    ConfigurationWarning,
    IntegrationSettings,
    WarningKind,
)

logger = logging.getLogger(__name__)


# Точки для проверки функции (probe)
DEFAULT_PROBE_POINTS: Final[tuple[float, ...]] = (0.0, 0.5, 1.0, 2.0, -1.0, math.pi, math.e)


# =============================================================================
# RESULTS
# =============================================================================


class QuadratureMethod(str, Enum):
    """Метод численного интегрирования"""

    TRAPEZOIDAL = "trapezoidal"
    SIMPSON = "simpson"
    MIDPOINT = "midpoint"


@dataclass(frozen=True)
class QuadratureResult:
    """Результат одного метода: value при успехе, error (+ точка x) при ошибке."""

    method: QuadratureMethod
    value: Optional[float]
    subdivisions: int

    error: Optional[EvalError] = None
    failed_at: Optional[float] = None

    warnings: tuple[ConfigurationWarning, ...] = ()

    @property
    def ok(self) -> bool:
        return self.error is None

    def describe(self) -> str:
        """Значение или "Error - <описание>"."""
        if self.error is not None:
            return f"Error - {self.error.message}"
        return f"{self.value:.10g}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "method": self.method.value,
            "value": self.value,
            "subdivisions": self.subdivisions,
            "error": None
            if self.error is None
            else {
                "kind": self.error.kind.value,
                "message": self.error.message,
                "symbol": self.error.symbol,
            },
            "failed_at": self.failed_at,
            "warnings": [
                {"kind": w.kind.value, "message": w.message} for w in self.warnings
            ],
        }


@dataclass(frozen=True)
class IntegrationReport:
    """Результаты трёх методов для одной задачи (compute_all)."""

    expression: str
    lower_bound: float
    upper_bound: float
    subdivisions: int

    trapezoidal: QuadratureResult
    simpson: QuadratureResult
    midpoint: QuadratureResult

    @property
    def results(self) -> tuple[QuadratureResult, ...]:
        return (self.trapezoidal, self.simpson, self.midpoint)

    def to_dict(self) -> dict[str, Any]:
        """Plain payload, соответствующий контракту integration_report."""
        return {
            "expression": self.expression,
            "lower_bound": self.lower_bound,
            "upper_bound": self.upper_bound,
            "subdivisions": self.subdivisions,
            "results": [result.to_dict() for result in self.results],
        }


@dataclass(frozen=True)
class ProbeResult:
    """Значение функции в одной точке проверки."""

    x: float
    evaluation: Evaluation


@dataclass(frozen=True)
class IntegratorInfo:
    """Снимок текущих настроек integrator'а."""

    expression: str
    postfix: str
    lower_bound: float
    upper_bound: float
    subdivisions: int


class _SampleFailure(Exception):
    """Внутренний сигнал: ошибка вычисления в точке x прерывает метод."""

    def __init__(self, error: EvalError, x: float):
        self.error = error
        self.x = x


# =============================================================================
# INTEGRATOR
# =============================================================================


class NumericalIntegrator:
    """
    Численный интегратор над скомпилированным выражением.

    Владеет границами и subdivisions; программа используется только на чтение.
    Методы квадратуры не изменяют состояние integrator'а.
    """

    def __init__(
        self,
        program: PostfixProgram,
        settings: Optional[IntegrationSettings] = None,
        symbols: SymbolTable = DEFAULT_SYMBOLS,
    ):
        """
        Args:
            program: скомпилированное выражение
            settings: границы и subdivisions (default: [0, 1], n = 1000)
            symbols: таблица символов для evaluator
        """
        self.symbols = symbols
        self._program = program
        self._settings = settings or IntegrationSettings()
        self._evaluator = Evaluator(program, symbols)

    # -- Конструкторы ------------------------------------------------------

    @classmethod
    def from_expression(
        cls,
        expression: str,
        lower_bound: float = DEFAULT_LOWER_BOUND,
        upper_bound: float = DEFAULT_UPPER_BOUND,
        subdivisions: int = DEFAULT_SUBDIVISIONS,
        symbols: SymbolTable = DEFAULT_SYMBOLS,
    ) -> "NumericalIntegrator":
        """
        Компиляция выражения и создание integrator'а.

        Raises:
            LexError, ParseError: выражение не принято
        """
        program = parse(expression, symbols)
        settings = IntegrationSettings(
            lower_bound=lower_bound, upper_bound=upper_bound, subdivisions=subdivisions
        )
        return cls(program, settings, symbols)

    @classmethod
    def from_request(
        cls, payload: dict[str, Any], symbols: SymbolTable = DEFAULT_SYMBOLS
    ) -> "NumericalIntegrator":
        """
        Создание integrator'а из plain payload (контракт integration_request).

        Raises:
            jsonschema.ValidationError: payload не соответствует контракту
            LexError, ParseError: выражение не принято
        """
        validate_integration_request(payload)
        return cls.from_expression(
            payload["expression"],
            lower_bound=payload.get("lower_bound", DEFAULT_LOWER_BOUND),
            upper_bound=payload.get("upper_bound", DEFAULT_UPPER_BOUND),
            subdivisions=payload.get("subdivisions", DEFAULT_SUBDIVISIONS),
            symbols=symbols,
        )

    # -- Состояние ---------------------------------------------------------

    @property
    def program(self) -> PostfixProgram:
        return self._program

    @property
    def settings(self) -> IntegrationSettings:
        return self._settings

    @property
    def expression(self) -> str:
        return self._program.source

    def set_expression(self, expression: str) -> PostfixProgram:
        """
        Замена выражения. При ошибке разбора текущая программа сохраняется.

        Raises:
            LexError, ParseError: выражение не принято
        """
        program = parse(expression, self.symbols)
        self._program = program
        self._evaluator = Evaluator(program, self.symbols)
        return program

    def set_bounds(self, lower: float, upper: float) -> tuple[ConfigurationWarning, ...]:
        """Установка границ (с перестановкой при lower > upper); возвращает коррекции."""
        self._settings = self._settings.with_bounds(lower, upper)
        return self._settings.adjustments

    def set_subdivisions(self, subdivisions: int) -> tuple[ConfigurationWarning, ...]:
        """Установка subdivisions (clamp до >= 1); возвращает коррекции."""
        self._settings = self._settings.with_subdivisions(subdivisions)
        return self._settings.adjustments

    # -- Квадратура --------------------------------------------------------

    def trapezoidal(self) -> QuadratureResult:
        """Правило трапеций."""
        n = self._settings.subdivisions
        lower = self._settings.lower_bound
        upper = self._settings.upper_bound
        h = self._settings.width / n

        try:
            f_lower = self._f(lower)
            interior = 0.0
            for i in range(1, n):
                interior += self._f(lower + i * h)
            f_upper = self._f(upper)
        except _SampleFailure as failure:
            return self._failed(QuadratureMethod.TRAPEZOIDAL, n, failure)

        total = 0.5 * (f_lower + f_upper) + interior
        return self._succeeded(QuadratureMethod.TRAPEZOIDAL, h * total, n)

    def simpson(self) -> QuadratureResult:
        """Правило Симпсона (нечётное n округляется вверх до чётного)."""
        n, adjusted = round_up_to_even(self._settings.subdivisions)
        warnings: tuple[ConfigurationWarning, ...] = ()
        if adjusted:
            warning = ConfigurationWarning(
                kind=WarningKind.SIMPSON_SUBDIVISIONS_ROUNDED_UP,
                message=(
                    f"Simpson's rule requires an even number of subdivisions: "
                    f"using {n} instead of {self._settings.subdivisions}"
                ),
            )
            logger.warning("%s", warning.message)
            warnings = (warning,)

        lower = self._settings.lower_bound
        upper = self._settings.upper_bound
        h = self._settings.width / n

        try:
            f_lower = self._f(lower)
            weighted = 0.0
            for i in range(1, n):
                weight = 4.0 if i % 2 == 1 else 2.0
                weighted += weight * self._f(lower + i * h)
            f_upper = self._f(upper)
        except _SampleFailure as failure:
            return self._failed(QuadratureMethod.SIMPSON, n, failure, warnings)

        total = f_lower + f_upper + weighted
        return self._succeeded(QuadratureMethod.SIMPSON, (h / 3.0) * total, n, warnings)

    def midpoint(self) -> QuadratureResult:
        """Правило средних прямоугольников."""
        n = self._settings.subdivisions
        lower = self._settings.lower_bound
        h = self._settings.width / n

        try:
            total = 0.0
            for i in range(n):
                total += self._f(lower + (i + 0.5) * h)
        except _SampleFailure as failure:
            return self._failed(QuadratureMethod.MIDPOINT, n, failure)

        return self._succeeded(QuadratureMethod.MIDPOINT, h * total, n)

    def integrate(self, method: QuadratureMethod) -> QuadratureResult:
        """Диспетчеризация по QuadratureMethod."""
        if method == QuadratureMethod.TRAPEZOIDAL:
            return self.trapezoidal()
        if method == QuadratureMethod.SIMPSON:
            return self.simpson()
        if method == QuadratureMethod.MIDPOINT:
            return self.midpoint()
        raise ValueError(f"Unknown quadrature method: {method!r}")

    def compute_all(self) -> IntegrationReport:
        """Все три метода; ошибка одного метода не влияет на остальные."""
        report = IntegrationReport(
            expression=self.expression,
            lower_bound=self._settings.lower_bound,
            upper_bound=self._settings.upper_bound,
            subdivisions=self._settings.subdivisions,
            trapezoidal=self.trapezoidal(),
            simpson=self.simpson(),
            midpoint=self.midpoint(),
        )
        logger.info(
            "Integrated f(x) = %s on [%s, %s], n=%d: %s",
            report.expression,
            report.lower_bound,
            report.upper_bound,
            report.subdivisions,
            ", ".join(f"{r.method.value}={r.describe()}" for r in report.results),
        )
        return report

    # -- Диагностика -------------------------------------------------------

    def probe(self, points: Iterable[float] = DEFAULT_PROBE_POINTS) -> list[ProbeResult]:
        """Значения функции в точках проверки (ошибки — по каждой точке отдельно)."""
        return [ProbeResult(x=x, evaluation=self._evaluator.evaluate(x)) for x in points]

    def describe(self) -> IntegratorInfo:
        """Снимок настроек: выражение, postfix-запись, границы, n."""
        return IntegratorInfo(
            expression=self.expression,
            postfix=self._program.to_text(),
            lower_bound=self._settings.lower_bound,
            upper_bound=self._settings.upper_bound,
            subdivisions=self._settings.subdivisions,
        )

    # -- Приватные ---------------------------------------------------------

    def _f(self, x: float) -> float:
        evaluation = self._evaluator.evaluate(x)
        if evaluation.error is not None:
            raise _SampleFailure(evaluation.error, x)
        return evaluation.value

    @staticmethod
    def _succeeded(
        method: QuadratureMethod,
        value: float,
        n: int,
        warnings: tuple[ConfigurationWarning, ...] = (),
    ) -> QuadratureResult:
        logger.debug("%s: %r (n=%d)", method.value, value, n)
        return QuadratureResult(method=method, value=value, subdivisions=n, warnings=warnings)

    @staticmethod
    def _failed(
        method: QuadratureMethod,
        n: int,
        failure: _SampleFailure,
        warnings: tuple[ConfigurationWarning, ...] = (),
    ) -> QuadratureResult:
        logger.info(
            "%s aborted at x=%r: %s", method.value, failure.x, failure.error.message
        )
        return QuadratureResult(
            method=method,
            value=None,
            subdivisions=n,
            error=failure.error,
            failed_at=failure.x,
            warnings=warnings,
        )
