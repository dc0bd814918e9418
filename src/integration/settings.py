"""
IntegrationSettings — параметры задачи интегрирования

Immutable Pydantic модель: границы интегрирования и количество subdivisions.

Нормализация выполняется при создании (auto-correct, не блокирует вычисление):
- lower_bound > upper_bound → границы переставляются (BOUNDS_SWAPPED)
- subdivisions < 1 → используется 1 (SUBDIVISIONS_CLAMPED)

Каждая коррекция фиксируется как ConfigurationWarning в поле adjustments
и пишется в лог на уровне WARNING. Границы обязаны быть конечными (NaN/Inf → ValidationError).
"""

import logging
import math
from enum import Enum
from typing import Any, Final

from pydantic import BaseModel, Field, model_validator

from src.core.math.numerical_safeguards import (
    MIN_SUBDIVISIONS,
    clamp_subdivisions,
    order_bounds,
)

logger = logging.getLogger(__name__)


# =============================================================================
# DEFAULTS
# =============================================================================

DEFAULT_LOWER_BOUND: Final[float] = 0.0
DEFAULT_UPPER_BOUND: Final[float] = 1.0
DEFAULT_SUBDIVISIONS: Final[int] = 1000


# =============================================================================
# CONFIGURATION WARNINGS
# =============================================================================


class WarningKind(str, Enum):
    """Вид автоматической коррекции параметров"""

    BOUNDS_SWAPPED = "bounds_swapped"
    SUBDIVISIONS_CLAMPED = "subdivisions_clamped"
    SIMPSON_SUBDIVISIONS_ROUNDED_UP = "simpson_subdivisions_rounded_up"


class ConfigurationWarning(BaseModel):
    """Нефатальная коррекция параметров: наблюдаема, но не блокирует вычисление."""

    kind: WarningKind = Field(..., description="Вид коррекции")
    message: str = Field(..., min_length=1, description="Описание коррекции")

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return self.message


def _as_float(value: Any) -> Any:
    # Невалидный тип оставляем pydantic для штатной ValidationError
    if isinstance(value, bool):
        return value
    try:
        return float(value)
    except OverflowError:
        # int вне диапазона float: ±inf отклоняется allow_inf_nan=False
        return math.inf if value > 0 else -math.inf
    except (TypeError, ValueError):
        return value


def _as_int(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return value
    return value


# =============================================================================
# SETTINGS MODEL
# =============================================================================


class IntegrationSettings(BaseModel):
    """
    Параметры интегрирования ∫[lower_bound, upper_bound] f(x) dx.

    Инвариант после создания: lower_bound <= upper_bound, subdivisions >= 1.

    Examples:
        >>> s = IntegrationSettings(lower_bound=1.0, upper_bound=0.0, subdivisions=0)
        >>> (s.lower_bound, s.upper_bound, s.subdivisions)
        (0.0, 1.0, 1)
        >>> [w.kind.value for w in s.adjustments]
        ['bounds_swapped', 'subdivisions_clamped']
    """

    lower_bound: float = Field(
        DEFAULT_LOWER_BOUND, allow_inf_nan=False, description="Нижняя граница интегрирования"
    )
    upper_bound: float = Field(
        DEFAULT_UPPER_BOUND, allow_inf_nan=False, description="Верхняя граница интегрирования"
    )
    subdivisions: int = Field(
        DEFAULT_SUBDIVISIONS, ge=MIN_SUBDIVISIONS, description="Количество разбиений отрезка"
    )
    adjustments: tuple[ConfigurationWarning, ...] = Field(
        default=(), description="Коррекции, применённые при нормализации"
    )

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def normalize(cls, data: Any) -> Any:
        """Перестановка границ и clamp subdivisions до валидации типов."""
        if not isinstance(data, dict):
            return data

        data = dict(data)
        adjustments = list(data.get("adjustments", ()))

        lower = _as_float(data.get("lower_bound", DEFAULT_LOWER_BOUND))
        upper = _as_float(data.get("upper_bound", DEFAULT_UPPER_BOUND))
        if isinstance(lower, float) and isinstance(upper, float):
            lower, upper, swapped = order_bounds(lower, upper)
            if swapped:
                adjustments.append(
                    ConfigurationWarning(
                        kind=WarningKind.BOUNDS_SWAPPED,
                        message=f"Bounds were swapped (lower > upper): using [{lower}, {upper}]",
                    )
                )
        data["lower_bound"] = lower
        data["upper_bound"] = upper

        subdivisions = _as_int(data.get("subdivisions", DEFAULT_SUBDIVISIONS))
        if isinstance(subdivisions, int) and not isinstance(subdivisions, bool):
            requested = subdivisions
            subdivisions, clamped = clamp_subdivisions(subdivisions)
            if clamped:
                adjustments.append(
                    ConfigurationWarning(
                        kind=WarningKind.SUBDIVISIONS_CLAMPED,
                        message=(
                            f"Subdivisions must be at least {MIN_SUBDIVISIONS}, "
                            f"got {requested}. Using {subdivisions}."
                        ),
                    )
                )
        data["subdivisions"] = subdivisions

        for warning in adjustments[len(data.get("adjustments", ())):]:
            logger.warning("%s", warning.message)

        data["adjustments"] = tuple(adjustments)
        return data

    @property
    def width(self) -> float:
        """Длина отрезка интегрирования (>= 0)."""
        return self.upper_bound - self.lower_bound

    def with_bounds(self, lower: float, upper: float) -> "IntegrationSettings":
        """Новые настройки с другими границами (adjustments только от этой коррекции)."""
        return IntegrationSettings(
            lower_bound=lower, upper_bound=upper, subdivisions=self.subdivisions
        )

    def with_subdivisions(self, subdivisions: int) -> "IntegrationSettings":
        """Новые настройки с другим количеством subdivisions."""
        return IntegrationSettings(
            lower_bound=self.lower_bound,
            upper_bound=self.upper_bound,
            subdivisions=subdivisions,
        )
