"""
Operator System Registry — выбор backend'а по имени

Единственная точка, где backend выбирается строкой: конфигурация вектора.
Внутри векторной логики используется только ссылка на экземпляр.

ВАЖНО: неизвестное имя НЕ является ошибкой: подставляется backend по
умолчанию (precise), событие пишется в лог с уровнем WARNING.
"""

import logging
from enum import Enum
from typing import Dict, Optional, Union

from src.core.operators.native import NativeOperatorSystem
from src.core.operators.precise import PreciseOperatorSystem
from src.core.operators.types import OperatorSystem

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================


class OperatorSystemKind(str, Enum):
    """Встроенные backend'ы"""

    NATIVE = "native"
    PRECISE = "precise"


# =============================================================================
# REGISTRY
# =============================================================================

NATIVE_OPERATOR_SYSTEM = NativeOperatorSystem()
PRECISE_OPERATOR_SYSTEM = PreciseOperatorSystem()

DEFAULT_OPERATOR_SYSTEM: OperatorSystem = PRECISE_OPERATOR_SYSTEM

OPERATOR_SYSTEMS: Dict[str, OperatorSystem] = {
    OperatorSystemKind.NATIVE.value: NATIVE_OPERATOR_SYSTEM,
    OperatorSystemKind.PRECISE.value: PRECISE_OPERATOR_SYSTEM,
}

SystemSpec = Union[str, OperatorSystemKind, OperatorSystem, None]


def register_operator_system(system: OperatorSystem, name: Optional[str] = None) -> None:
    """
    Регистрация пользовательского backend'а.

    Args:
        system: Экземпляр OperatorSystem
        name: Имя в реестре (default: system.name)

    Raises:
        TypeError: Если system не реализует OperatorSystem
    """
    if not isinstance(system, OperatorSystem):
        raise TypeError(f"Expected OperatorSystem instance, got {type(system).__name__}")

    key = name or system.name
    OPERATOR_SYSTEMS[key] = system
    logger.debug("Registered operator system %r as %r", system, key)


def get_operator_system(
    name: Union[str, OperatorSystemKind],
    default: Optional[OperatorSystem] = None,
) -> OperatorSystem:
    """
    Поиск backend'а по имени с fallback на default.

    Args:
        name: Имя backend'а ("native", "precise" или зарегистрированное)
        default: Backend при промахе (default: DEFAULT_OPERATOR_SYSTEM)

    Returns:
        Найденный backend или default
    """
    key = name.value if isinstance(name, OperatorSystemKind) else name
    fallback = default if default is not None else DEFAULT_OPERATOR_SYSTEM

    system = OPERATOR_SYSTEMS.get(key)
    if system is None:
        logger.warning(
            "Unknown operator system %r, falling back to %r (known: %s)",
            key,
            fallback,
            ", ".join(sorted(OPERATOR_SYSTEMS)),
        )
        return fallback

    return system


def resolve_operator_system(
    system: SystemSpec,
    default: Optional[OperatorSystem] = None,
) -> OperatorSystem:
    """
    Приведение любого способа задать backend к экземпляру.

    Args:
        system: None, имя, OperatorSystemKind или экземпляр OperatorSystem
        default: Backend для None и неизвестных имён

    Returns:
        Экземпляр OperatorSystem

    Raises:
        TypeError: Если system имеет неподдерживаемый тип
    """
    if system is None:
        return default if default is not None else DEFAULT_OPERATOR_SYSTEM
    if isinstance(system, OperatorSystem):
        return system
    if isinstance(system, (str, OperatorSystemKind)):
        return get_operator_system(system, default=default)
    raise TypeError(f"Cannot resolve operator system from {type(system).__name__}")
