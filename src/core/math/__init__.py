"""
Core math modules для движка численного интегрирования

Численные примитивы с гарантией стабильности: epsilon-защита деления,
IEEE-семантика pow и унарных функций, нормализация параметров квадратуры.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_DIVISION,
    MIN_SUBDIVISIONS,
    # Safe division
    is_division_safe,
    # NaN/Inf
    is_valid_float,
    # IEEE semantics
    ieee_pow,
    ieee_unary,
    # Normalization
    clamp_subdivisions,
    order_bounds,
    round_up_to_even,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_DIVISION",
    "MIN_SUBDIVISIONS",
    # Numerical Safeguards — Safe division
    "is_division_safe",
    # Numerical Safeguards — NaN/Inf
    "is_valid_float",
    # Numerical Safeguards — IEEE semantics
    "ieee_pow",
    "ieee_unary",
    # Numerical Safeguards — Normalization
    "clamp_subdivisions",
    "order_bounds",
    "round_up_to_even",
]
