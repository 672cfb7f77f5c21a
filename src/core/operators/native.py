"""
Native Operator System — арифметика на float

Все операции делегируются встроенной арифметике float (IEEE-754).

ВАЖНО: в отличие от precise backend, ошибки домена не выбрасываются:
- x / 0 → ±inf, 0 / 0 → nan
- sqrt(x < 0) → nan
- nan/inf распространяются через последующие операции
"""

import math
from decimal import Decimal
from typing import Final

from src.core.operators.types import InvalidOperandError, Operand, OperatorSystem

# Целые значения по модулю ниже порога печатаются без ".0",
# большие остаются в экспоненциальной записи repr
INTEGRAL_TEXT_LIMIT: Final[float] = 1e16


class NativeOperatorSystem(OperatorSystem[float]):
    """Backend на встроенных float."""

    name = "native"

    def create(self, x: Operand) -> float:
        if isinstance(x, float):
            return x
        if isinstance(x, (int, Decimal)):
            try:
                return float(x)
            except OverflowError as e:
                raise InvalidOperandError(f"Operand {x!r} does not fit into float") from e
        if isinstance(x, str):
            try:
                return float(x)
            except ValueError as e:
                raise InvalidOperandError(f"Cannot parse numeral {x!r}") from e
        raise InvalidOperandError(f"Unsupported operand type: {type(x).__name__}")

    def plus(self, x: Operand, y: Operand) -> float:
        return self.create(x) + self.create(y)

    def minus(self, x: Operand, y: Operand) -> float:
        return self.create(x) - self.create(y)

    def multiply(self, x: Operand, y: Operand) -> float:
        return self.create(x) * self.create(y)

    def divide(self, x: Operand, y: Operand) -> float:
        """
        Деление по правилам IEEE-754.

        Python поднимает ZeroDivisionError для float, поэтому деление на ноль
        вычисляется явно.

        Examples:
            >>> NativeOperatorSystem().divide(1, 0)
            inf
            >>> NativeOperatorSystem().divide(-1, 0)
            -inf
            >>> NativeOperatorSystem().divide(0, 0)
            nan
        """
        numerator = self.create(x)
        denominator = self.create(y)

        if denominator == 0.0:
            if numerator == 0.0 or math.isnan(numerator):
                return math.nan
            # Знак зависит и от знака нуля: 1 / -0.0 → -inf
            return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)

        return numerator / denominator

    def sqrt(self, x: Operand) -> float:
        value = self.create(x)
        # nan >= 0 ложно, поэтому nan тоже уходит в ветку nan
        if value >= 0.0:
            return math.sqrt(value)
        return math.nan

    def abs(self, x: Operand) -> float:
        return abs(self.create(x))

    def equal(self, x: Operand, y: Operand) -> bool:
        return self.create(x) == self.create(y)

    def to_text(self, x: Operand) -> str:
        """
        Examples:
            >>> NativeOperatorSystem().to_text(120.0)
            '120'
            >>> NativeOperatorSystem().to_text(0.1)
            '0.1'
        """
        value = self.create(x)
        if math.isfinite(value) and value.is_integer() and abs(value) < INTEGRAL_TEXT_LIMIT:
            return str(int(value))
        return repr(value)
