"""
Precise Operator System — арифметика произвольной точности на Decimal

Backend по умолчанию. Значения хранятся как decimal.Decimal, операции
выполняются в приватной копии decimal-контекста с заданной точностью.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление на ноль → OperatorDomainError (не inf, не nan)
2. sqrt отрицательного → OperatorDomainError
3. NaN/Infinity не принимаются как операнды (InvalidOperandError)
4. float конвертируется через кратчайший текст (0.1 → Decimal("0.1")),
   а не через точное двоичное разложение
5. Глобальный decimal-контекст потока не изменяется
"""

from decimal import (
    ROUND_05UP,
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    localcontext,
)
from typing import Final, Optional

from pydantic import BaseModel, Field, field_validator

from src.core.operators.types import (
    InvalidOperandError,
    Operand,
    OperatorDomainError,
    OperatorSystem,
)

# =============================================================================
# ПАРАМЕТРЫ ТОЧНОСТИ
# =============================================================================

# Количество значащих цифр (совпадает с decimal.DefaultContext)
DEFAULT_PRECISION: Final[int] = 28

DEFAULT_ROUNDING: Final[str] = ROUND_HALF_EVEN

ROUNDING_MODES: Final[frozenset[str]] = frozenset(
    {
        ROUND_05UP,
        ROUND_CEILING,
        ROUND_DOWN,
        ROUND_FLOOR,
        ROUND_HALF_DOWN,
        ROUND_HALF_EVEN,
        ROUND_HALF_UP,
        ROUND_UP,
    }
)


# =============================================================================
# SETTINGS
# =============================================================================


class PreciseSettings(BaseModel):
    """
    Настройки decimal-контекста precise backend'а.

    Immutable модель (frozen=True): backend строит контекст один раз.
    """

    precision: int = Field(DEFAULT_PRECISION, gt=0, description="Количество значащих цифр")
    rounding: str = Field(DEFAULT_ROUNDING, description="Режим округления модуля decimal")

    model_config = {"frozen": True}

    @field_validator("rounding")
    @classmethod
    def validate_rounding(cls, v: str) -> str:
        if v not in ROUNDING_MODES:
            raise ValueError(f"Unknown rounding mode {v!r}, expected one of {sorted(ROUNDING_MODES)}")
        return v

    def build_context(self) -> Context:
        """Контекст с ловушками на деление на ноль и невалидные операции."""
        return Context(
            prec=self.precision,
            rounding=self.rounding,
            traps=[InvalidOperation, DivisionByZero, Overflow],
        )


# =============================================================================
# PRECISE OPERATOR SYSTEM
# =============================================================================


class PreciseOperatorSystem(OperatorSystem[Decimal]):
    """
    Backend произвольной точности.

    Каждая операция выполняется в localcontext(), то есть в копии контекста
    экземпляра, поэтому флаги decimal не накапливаются между вызовами
    и экземпляр безопасно разделять.
    """

    name = "precise"

    def __init__(self, settings: Optional[PreciseSettings] = None):
        self._settings = settings or PreciseSettings()
        self._context = self._settings.build_context()

    @property
    def settings(self) -> PreciseSettings:
        return self._settings

    def create(self, x: Operand) -> Decimal:
        """
        Нормализация операнда в Decimal.

        Args:
            x: int, float, numeral text или Decimal

        Returns:
            Конечное Decimal значение (без округления до precision)

        Raises:
            InvalidOperandError: Если текст не число, тип не поддерживается
                или значение не конечное (NaN/Infinity)

        Examples:
            >>> PreciseOperatorSystem().create(0.1)
            Decimal('0.1')
            >>> PreciseOperatorSystem().create(" 42 ")
            Decimal('42')
        """
        if isinstance(x, Decimal):
            value = x
        elif isinstance(x, int):
            value = Decimal(x)
        elif isinstance(x, float):
            # repr даёт кратчайший текст, который однозначно восстанавливает float
            value = Decimal(repr(x))
        elif isinstance(x, str):
            try:
                value = Decimal(x.strip())
            except InvalidOperation as e:
                raise InvalidOperandError(f"Cannot parse numeral {x!r}") from e
        else:
            raise InvalidOperandError(f"Unsupported operand type: {type(x).__name__}")

        if not value.is_finite():
            raise InvalidOperandError(f"Operand must be finite, got {x!r}")

        return value

    def plus(self, x: Operand, y: Operand) -> Decimal:
        a, b = self.create(x), self.create(y)
        with localcontext(self._context) as ctx:
            return ctx.add(a, b)

    def minus(self, x: Operand, y: Operand) -> Decimal:
        a, b = self.create(x), self.create(y)
        with localcontext(self._context) as ctx:
            return ctx.subtract(a, b)

    def multiply(self, x: Operand, y: Operand) -> Decimal:
        a, b = self.create(x), self.create(y)
        with localcontext(self._context) as ctx:
            return ctx.multiply(a, b)

    def divide(self, x: Operand, y: Operand) -> Decimal:
        """
        Деление с точностью контекста.

        Raises:
            OperatorDomainError: Если делитель равен нулю (включая 0 / 0)
        """
        numerator, denominator = self.create(x), self.create(y)
        with localcontext(self._context) as ctx:
            try:
                return ctx.divide(numerator, denominator)
            except (DivisionByZero, InvalidOperation) as e:
                raise OperatorDomainError(
                    f"Division by zero: {numerator} / {denominator}"
                ) from e

    def sqrt(self, x: Operand) -> Decimal:
        """
        Raises:
            OperatorDomainError: Если x < 0
        """
        value = self.create(x)
        with localcontext(self._context) as ctx:
            try:
                return ctx.sqrt(value)
            except InvalidOperation as e:
                raise OperatorDomainError(f"Square root of negative value: {value}") from e

    def abs(self, x: Operand) -> Decimal:
        value = self.create(x)
        with localcontext(self._context) as ctx:
            return ctx.abs(value)

    def equal(self, x: Operand, y: Operand) -> bool:
        return self.create(x) == self.create(y)

    def to_text(self, x: Operand) -> str:
        """
        Запись без экспоненты и без хвостовых нулей дробной части.

        Examples:
            >>> PreciseOperatorSystem().to_text(Decimal("1.2E+2"))
            '120'
            >>> PreciseOperatorSystem().to_text(Decimal("12.500"))
            '12.5'
            >>> PreciseOperatorSystem().to_text(Decimal("-0"))
            '0'
        """
        value = self.create(x)
        if value.is_zero():
            return "0"

        text = format(value, "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text
