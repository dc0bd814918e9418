"""
Numerical Safeguards — Safe Math Primitives для движка выражений

Модуль обеспечивает численную устойчивость вычислений evaluator и integrator:
- Epsilon-порог для детекции деления на ноль
- IEEE-семантика для pow и унарных функций (overflow → inf, без исключений)
- Проверка валидности float (NaN/Inf)
- Нормализация параметров интегрирования (порядок границ, clamp subdivisions)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление на |divisor| < EPS_DIVISION никогда не выполняется (вызывающий код
   получает сигнал через is_division_safe и формирует DivisionByZero)
2. Функции без доменных ограничений (sin, cos, tan, abs, exp) никогда не бросают
   исключения: overflow → ±inf, невалидный вход → nan
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Callable, Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Минимальный модуль делителя: при |b| < EPS_DIVISION деление считается делением на ноль
EPS_DIVISION: Final[float] = 1e-15

# Минимальное количество subdivisions для любого метода квадратуры
MIN_SUBDIVISIONS: Final[int] = 1


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


# =============================================================================
# БЕЗОПАСНОЕ ДЕЛЕНИЕ
# =============================================================================


def is_division_safe(denominator: float, eps: float = EPS_DIVISION) -> bool:
    """
    Проверка, что делитель достаточно далёк от нуля.

    Args:
        denominator: Делитель
        eps: Минимальный абсолютный порог (default: EPS_DIVISION)

    Returns:
        True если abs(denominator) >= eps

    Examples:
        >>> is_division_safe(2.0)
        True
        >>> is_division_safe(0.0)
        False
        >>> is_division_safe(1e-16)
        False
    """
    if eps <= 0:
        raise ValueError(f"eps must be positive, got {eps}")

    # NaN делитель не является "нулём": результат деления будет nan
    return not abs(denominator) < eps


# =============================================================================
# IEEE-СЕМАНТИКА ДЛЯ pow И УНАРНЫХ ФУНКЦИЙ
# =============================================================================


def ieee_pow(base: float, exponent: float) -> float:
    """
    Возведение в степень с IEEE-поведением при overflow.

    math.pow бросает OverflowError там, где IEEE pow возвращает ±inf;
    здесь overflow конвертируется в inf с корректным знаком.

    Args:
        base: Основание
        exponent: Показатель

    Returns:
        base ** exponent как float

    Raises:
        ValueError: Если вещественный результат не определён
            (отрицательное основание с нецелым показателем, 0 в отрицательной степени)

    Examples:
        >>> ieee_pow(2.0, 10.0)
        1024.0
        >>> ieee_pow(10.0, 400.0)
        inf
        >>> ieee_pow(-10.0, 401.0)
        -inf
    """
    try:
        return math.pow(base, exponent)
    except OverflowError:
        # Знак определяется только для отрицательного основания и нечётного показателя
        negative = base < 0 and float(exponent).is_integer() and int(exponent) % 2 == 1
        return -math.inf if negative else math.inf


def ieee_unary(func: Callable[[float], float]) -> Callable[[float], float]:
    """
    Обёртка унарной функции math.* в IEEE-семантику.

    - OverflowError → inf (например, exp(1000))
    - ValueError на невалидном входе (например, sin(inf)) → nan

    Args:
        func: Унарная функция из модуля math

    Returns:
        Функция, которая никогда не бросает исключения для float входа
    """

    def wrapped(value: float) -> float:
        try:
            return func(value)
        except OverflowError:
            return math.inf
        except ValueError:
            if not is_valid_float(value):
                return math.nan
            raise

    wrapped.__name__ = getattr(func, "__name__", "ieee_unary")
    wrapped.__doc__ = func.__doc__
    return wrapped


# =============================================================================
# НОРМАЛИЗАЦИЯ ПАРАМЕТРОВ
# =============================================================================


def order_bounds(lower: float, upper: float) -> tuple[float, float, bool]:
    """
    Упорядочивание границ интегрирования.

    Args:
        lower: Нижняя граница
        upper: Верхняя граница

    Returns:
        (lower, upper, was_swapped):
            - границы с гарантией lower <= upper
            - was_swapped: True если исходные границы были переставлены

    Examples:
        >>> order_bounds(0.0, 1.0)
        (0.0, 1.0, False)
        >>> order_bounds(1.0, 0.0)
        (0.0, 1.0, True)
    """
    if lower > upper:
        return (upper, lower, True)
    return (lower, upper, False)


def clamp_subdivisions(n: int, minimum: int = MIN_SUBDIVISIONS) -> tuple[int, bool]:
    """
    Clamp количества subdivisions снизу.

    Args:
        n: Запрошенное количество
        minimum: Минимально допустимое значение (default: MIN_SUBDIVISIONS)

    Returns:
        (clamped_n, was_clamped)

    Examples:
        >>> clamp_subdivisions(100)
        (100, False)
        >>> clamp_subdivisions(0)
        (1, True)
        >>> clamp_subdivisions(-5)
        (1, True)
    """
    if n < minimum:
        return (minimum, True)
    return (n, False)


def round_up_to_even(n: int) -> tuple[int, bool]:
    """
    Округление количества разбиений вверх до чётного (требование правила Симпсона).

    Returns:
        (even_n, was_adjusted)

    Examples:
        >>> round_up_to_even(4)
        (4, False)
        >>> round_up_to_even(5)
        (6, True)
    """
    if n % 2 != 0:
        return (n + 1, True)
    return (n, False)
