"""
Тесты для IntegrationSettings (Pydantic модель)

Проверяет:
1. Значения по умолчанию
2. Auto-correct: перестановка границ, clamp subdivisions (+ ConfigurationWarning, лог)
3. Immutability и валидацию (NaN/Inf, невалидные типы)
4. with_bounds / with_subdivisions
"""

import logging

import pytest
from pydantic import ValidationError

from src.integration import (
    DEFAULT_LOWER_BOUND,
    DEFAULT_SUBDIVISIONS,
    DEFAULT_UPPER_BOUND,
    ConfigurationWarning,
    IntegrationSettings,
    WarningKind,
)


@pytest.fixture
def settings() -> IntegrationSettings:
    return IntegrationSettings(lower_bound=0.0, upper_bound=2.0, subdivisions=10)


# =============================================================================
# DEFAULTS
# =============================================================================


class TestDefaults:
    """Тесты значений по умолчанию"""

    def test_default_values(self) -> None:
        """[0, 1], n = 1000"""
        s = IntegrationSettings()
        assert s.lower_bound == DEFAULT_LOWER_BOUND == 0.0
        assert s.upper_bound == DEFAULT_UPPER_BOUND == 1.0
        assert s.subdivisions == DEFAULT_SUBDIVISIONS == 1000
        assert s.adjustments == ()

    def test_width(self, settings: IntegrationSettings) -> None:
        """Длина отрезка"""
        assert settings.width == 2.0

    def test_integer_bounds_coerced(self) -> None:
        """Целые границы приводятся к float"""
        s = IntegrationSettings(lower_bound=1, upper_bound=3)
        assert isinstance(s.lower_bound, float)
        assert s.upper_bound == 3.0


# =============================================================================
# AUTO-CORRECT
# =============================================================================


class TestNormalization:
    """Тесты нормализации параметров"""

    def test_bounds_swapped(self) -> None:
        """lower > upper → перестановка + предупреждение"""
        s = IntegrationSettings(lower_bound=5.0, upper_bound=-1.0)
        assert (s.lower_bound, s.upper_bound) == (-1.0, 5.0)
        assert len(s.adjustments) == 1
        assert s.adjustments[0].kind == WarningKind.BOUNDS_SWAPPED
        assert "swapped" in s.adjustments[0].message

    def test_equal_bounds_allowed(self) -> None:
        """Вырожденный отрезок допустим без предупреждения"""
        s = IntegrationSettings(lower_bound=2.0, upper_bound=2.0)
        assert s.width == 0.0
        assert s.adjustments == ()

    @pytest.mark.parametrize("requested", [0, -5])
    def test_subdivisions_clamped(self, requested: int) -> None:
        """n < 1 → 1 + предупреждение"""
        s = IntegrationSettings(subdivisions=requested)
        assert s.subdivisions == 1
        assert s.adjustments[0].kind == WarningKind.SUBDIVISIONS_CLAMPED
        assert f"got {requested}" in s.adjustments[0].message

    def test_both_corrections(self) -> None:
        """Обе коррекции фиксируются в порядке применения"""
        s = IntegrationSettings(lower_bound=1.0, upper_bound=0.0, subdivisions=0)
        assert [w.kind for w in s.adjustments] == [
            WarningKind.BOUNDS_SWAPPED,
            WarningKind.SUBDIVISIONS_CLAMPED,
        ]

    def test_corrections_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Коррекции пишутся в лог на уровне WARNING"""
        with caplog.at_level(logging.WARNING, logger="src.integration.settings"):
            IntegrationSettings(lower_bound=1.0, upper_bound=0.0)
        assert any("swapped" in record.getMessage() for record in caplog.records)

    def test_valid_settings_not_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Корректные параметры не порождают предупреждений"""
        with caplog.at_level(logging.WARNING, logger="src.integration.settings"):
            IntegrationSettings(lower_bound=0.0, upper_bound=1.0, subdivisions=4)
        assert caplog.records == []

    def test_warning_str(self) -> None:
        """str(ConfigurationWarning) — сообщение"""
        warning = ConfigurationWarning(kind=WarningKind.BOUNDS_SWAPPED, message="swapped")
        assert str(warning) == "swapped"


# =============================================================================
# ВАЛИДАЦИЯ И IMMUTABILITY
# =============================================================================


class TestValidation:
    """Тесты валидации"""

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_bounds_rejected(self, bad: float) -> None:
        """NaN/Inf границы → ValidationError"""
        with pytest.raises(ValidationError):
            IntegrationSettings(lower_bound=bad, upper_bound=1.0)
        with pytest.raises(ValidationError):
            IntegrationSettings(lower_bound=0.0, upper_bound=bad)

    @pytest.mark.parametrize("bad", [10**400, -(10**400)])
    def test_bound_beyond_float_range_rejected(self, bad: int) -> None:
        """int вне диапазона float → ValidationError, не OverflowError"""
        with pytest.raises(ValidationError):
            IntegrationSettings(lower_bound=bad)
        with pytest.raises(ValidationError):
            IntegrationSettings(upper_bound=bad)

    def test_non_numeric_bound_rejected(self) -> None:
        """Нечисловая граница → ValidationError"""
        with pytest.raises(ValidationError):
            IntegrationSettings(lower_bound="abc")

    def test_fractional_subdivisions_rejected(self) -> None:
        """Дробное n → ValidationError"""
        with pytest.raises(ValidationError):
            IntegrationSettings(subdivisions=2.5)

    def test_frozen(self, settings: IntegrationSettings) -> None:
        """Модель immutable"""
        with pytest.raises(ValidationError):
            settings.subdivisions = 5


# =============================================================================
# ПРОИЗВОДНЫЕ НАСТРОЙКИ
# =============================================================================


class TestDerivedSettings:
    """Тесты with_bounds / with_subdivisions"""

    def test_with_bounds_returns_new(self, settings: IntegrationSettings) -> None:
        """with_bounds не изменяет исходные настройки"""
        updated = settings.with_bounds(-1.0, 1.0)
        assert (updated.lower_bound, updated.upper_bound) == (-1.0, 1.0)
        assert updated.subdivisions == 10
        assert settings.lower_bound == 0.0

    def test_with_bounds_swaps(self, settings: IntegrationSettings) -> None:
        """with_bounds нормализует порядок"""
        updated = settings.with_bounds(3.0, 1.0)
        assert (updated.lower_bound, updated.upper_bound) == (1.0, 3.0)
        assert updated.adjustments[0].kind == WarningKind.BOUNDS_SWAPPED

    def test_with_subdivisions(self, settings: IntegrationSettings) -> None:
        """with_subdivisions сохраняет границы и clamp'ит n"""
        updated = settings.with_subdivisions(0)
        assert updated.subdivisions == 1
        assert updated.upper_bound == 2.0
        assert updated.adjustments[0].kind == WarningKind.SUBDIVISIONS_CLAMPED
