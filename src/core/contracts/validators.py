"""
JSON Schema Contract Validators

Модуль для валидации plain payload'ов движка интегрирования согласно формальным
JSON Schema контрактам. Использует библиотеку jsonschema для проверки соответствия.

Схемы (src/core/contracts/schema/):
- integration_request.json: выражение, границы, subdivisions
- integration_report.json: результаты трёх методов квадратуры
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются вместе с пакетом в каталоге schema/ рядом с этим модулем.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'integration_request')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)


class IntegrationRequestValidator(ContractValidator):
    """Валидатор для integration_request контракта."""

    def __init__(self):
        super().__init__("integration_request")


class IntegrationReportValidator(ContractValidator):
    """Валидатор для integration_report контракта."""

    def __init__(self):
        super().__init__("integration_report")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_integration_request(data: Dict[str, Any]) -> None:
    """
    Валидация integration_request данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    IntegrationRequestValidator().validate(data)


def validate_integration_report(data: Dict[str, Any]) -> None:
    """
    Валидация integration_report данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    IntegrationReportValidator().validate(data)
