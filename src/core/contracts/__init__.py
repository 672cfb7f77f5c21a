"""
Contract Validation Module

Модуль для валидации JSON контрактов сериализованных векторов.
"""

from .validators import (
    ContractValidator,
    SchemaLoader,
    VectorObjectValidator,
    validate_vector_object,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "VectorObjectValidator",
    # Functions
    "validate_vector_object",
]
