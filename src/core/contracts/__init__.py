"""
Contract Validation Module

Модуль для валидации JSON контрактов движка интегрирования
(integration_request, integration_report).
"""

from .validators import (
    ContractValidator,
    IntegrationReportValidator,
    IntegrationRequestValidator,
    SchemaLoader,
    validate_integration_report,
    validate_integration_request,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "IntegrationRequestValidator",
    "IntegrationReportValidator",
    # Functions
    "validate_integration_request",
    "validate_integration_report",
]
