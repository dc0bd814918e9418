"""
Reference problems — эталонные интегралы с известными точными значениями

Используются CLI (--self-test) как быстрая проверка движка на месте:
    ∫₀¹ x² dx          = 1/3
    ∫₀^π sin(x) dx     = 2
    ∫₀¹ eˣ dx          = e - 1
    ∫₀¹⁰ (100 + 25x) dx = 2250
"""

import math
from dataclasses import dataclass
from typing import Final, Iterable, Optional

from src.integration.integrator import IntegrationReport, NumericalIntegrator

# Допуск по абсолютной ошибке для эталонных задач
REFERENCE_TOLERANCE: Final[float] = 1e-4


@dataclass(frozen=True)
class ReferenceProblem:
    """Эталонная задача: выражение, отрезок, n и точное значение интеграла."""

    title: str
    expression: str
    lower_bound: float
    upper_bound: float
    subdivisions: int
    exact: float


@dataclass(frozen=True)
class ReferenceOutcome:
    """Результат прогона эталонной задачи."""

    problem: ReferenceProblem
    report: IntegrationReport
    tolerance: float

    @property
    def max_abs_error(self) -> Optional[float]:
        """Максимальная ошибка по трём методам (None если какой-либо метод упал)."""
        errors = []
        for result in self.report.results:
            if not result.ok:
                return None
            errors.append(abs(result.value - self.problem.exact))
        return max(errors)

    @property
    def passed(self) -> bool:
        error = self.max_abs_error
        return error is not None and error <= self.tolerance


REFERENCE_PROBLEMS: Final[tuple[ReferenceProblem, ...]] = (
    ReferenceProblem("Simple polynomial", "x^2", 0.0, 1.0, 1000, 1.0 / 3.0),
    ReferenceProblem("Sine function", "sin(x)", 0.0, math.pi, 1000, 2.0),
    ReferenceProblem("Exponential", "exp(x)", 0.0, 1.0, 1000, math.e - 1.0),
    ReferenceProblem("Multi-digit numbers", "100 + 25*x", 0.0, 10.0, 100, 2250.0),
)


def run_reference_problems(
    problems: Iterable[ReferenceProblem] = REFERENCE_PROBLEMS,
    tolerance: float = REFERENCE_TOLERANCE,
) -> list[ReferenceOutcome]:
    """Прогон эталонных задач всеми тремя методами."""
    outcomes = []
    for problem in problems:
        integrator = NumericalIntegrator.from_expression(
            problem.expression,
            lower_bound=problem.lower_bound,
            upper_bound=problem.upper_bound,
            subdivisions=problem.subdivisions,
        )
        outcomes.append(
            ReferenceOutcome(problem=problem, report=integrator.compute_all(), tolerance=tolerance)
        )
    return outcomes
