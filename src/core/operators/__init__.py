"""
Operator systems для векторной арифметики

Контракт арифметического backend'а и две реализации: native (float)
и precise (Decimal произвольной точности).
"""

# Contract
from src.core.operators.types import (
    InvalidOperandError,
    Operand,
    OperatorDomainError,
    OperatorSystem,
)

# Backends
from src.core.operators.native import NativeOperatorSystem
from src.core.operators.precise import (
    DEFAULT_PRECISION,
    DEFAULT_ROUNDING,
    PreciseOperatorSystem,
    PreciseSettings,
)

# Registry
from src.core.operators.registry import (
    DEFAULT_OPERATOR_SYSTEM,
    NATIVE_OPERATOR_SYSTEM,
    OPERATOR_SYSTEMS,
    PRECISE_OPERATOR_SYSTEM,
    OperatorSystemKind,
    get_operator_system,
    register_operator_system,
    resolve_operator_system,
)

__all__ = [
    # Contract
    "Operand",
    "OperatorSystem",
    "OperatorDomainError",
    "InvalidOperandError",
    # Backends
    "NativeOperatorSystem",
    "PreciseOperatorSystem",
    "PreciseSettings",
    "DEFAULT_PRECISION",
    "DEFAULT_ROUNDING",
    # Registry
    "OperatorSystemKind",
    "OPERATOR_SYSTEMS",
    "NATIVE_OPERATOR_SYSTEM",
    "PRECISE_OPERATOR_SYSTEM",
    "DEFAULT_OPERATOR_SYSTEM",
    "get_operator_system",
    "register_operator_system",
    "resolve_operator_system",
]
