"""Integration — численное интегрирование скомпилированных выражений.

- IntegrationSettings: границы и subdivisions с автоматической нормализацией
- NumericalIntegrator: правила трапеций, Симпсона и средних прямоугольников
- Reference problems: эталонные задачи с известными точными значениями
"""

from .integrator import (
    DEFAULT_PROBE_POINTS,
    IntegrationReport,
    IntegratorInfo,
    NumericalIntegrator,
    ProbeResult,
    QuadratureMethod,
    QuadratureResult,
)
from .reference import REFERENCE_PROBLEMS, ReferenceOutcome, ReferenceProblem, run_reference_problems
from .settings import (
    DEFAULT_LOWER_BOUND,
    DEFAULT_SUBDIVISIONS,
    DEFAULT_UPPER_BOUND,
    ConfigurationWarning,
    IntegrationSettings,
    WarningKind,
)

__all__ = [
    "DEFAULT_LOWER_BOUND",
    "DEFAULT_UPPER_BOUND",
    "DEFAULT_SUBDIVISIONS",
    "DEFAULT_PROBE_POINTS",
    "ConfigurationWarning",
    "WarningKind",
    "IntegrationSettings",
    "NumericalIntegrator",
    "QuadratureMethod",
    "QuadratureResult",
    "IntegrationReport",
    "IntegratorInfo",
    "ProbeResult",
    "REFERENCE_PROBLEMS",
    "ReferenceProblem",
    "ReferenceOutcome",
    "run_reference_problems",
]
