"""
Angles — конверсия градусы/радианы

Конверторы принимают необязательный оператор backend'а, чтобы результат
был в представлении того же backend'а, что и вектор.
"""

import math
import operator
from typing import Any, Callable, Final, Optional

DEGREES_PER_RADIAN: Final[float] = 180.0 / math.pi

BinaryOperation = Callable[[Any, Any], Any]


def radian_to_degree(radian: Any, multiply: Optional[BinaryOperation] = None) -> Any:
    """
    Радианы → градусы: radian * (180 / pi).

    Args:
        radian: Угол в радианах
        multiply: Умножение backend'а (default: встроенное умножение)

    Examples:
        >>> radian_to_degree(math.pi)
        180.0
    """
    multiply = multiply or operator.mul
    return multiply(radian, DEGREES_PER_RADIAN)


def degree_to_radian(degree: Any, divide: Optional[BinaryOperation] = None) -> Any:
    """
    Градусы → радианы: degree / (180 / pi).

    Args:
        degree: Угол в градусах
        divide: Деление backend'а (default: встроенное деление)

    Examples:
        >>> degree_to_radian(180.0)
        3.141592653589793
    """
    divide = divide or operator.truediv
    return divide(degree, DEGREES_PER_RADIAN)
