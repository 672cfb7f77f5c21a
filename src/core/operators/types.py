"""
Operator System — контракт арифметического backend'а

Модуль определяет общий тип операнда и фиксированный набор примитивов,
через которые Vector выполняет всю арифметику:
- create: нормализация операнда во внутреннее представление backend'а
- plus / minus / multiply / divide: бинарные операции
- sqrt / abs: унарные операции
- equal: сравнение на равенство
- to_text: текстовое представление значения

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Каждая операция принимает любой Operand (число, текст, значение backend'а)
2. Операции чистые: экземпляр backend'а не хранит изменяемого состояния
3. Контракт одинаков для всех backend'ов; различия в точности и
   обработке ошибок (domain error vs NaN/Inf) специфичны для backend'а
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Generic, TypeVar, Union

T = TypeVar("T")

# Операнд: native number, numeral text или значение backend'а
Operand = Union[int, float, str, Decimal]


# =============================================================================
# EXCEPTIONS
# =============================================================================


class OperatorDomainError(ArithmeticError):
    """
    Операция вне области определения backend'а.

    Возникает только в precise backend: деление на ноль, sqrt отрицательного.
    Native backend в тех же случаях возвращает inf/nan без исключения.
    """

    pass


class InvalidOperandError(ValueError):
    """Операнд не может быть интерпретирован как число данным backend'ом."""

    pass


# =============================================================================
# OPERATOR SYSTEM CONTRACT
# =============================================================================


class OperatorSystem(ABC, Generic[T]):
    """
    Фиксированный набор арифметических примитивов над представлением T.

    Реализации не хранят состояния между вызовами, поэтому один экземпляр
    может разделяться любым количеством векторов.
    """

    name: str = "abstract"

    @abstractmethod
    def create(self, x: Operand) -> T:
        """
        Нормализация операнда во внутреннее представление.

        Raises:
            InvalidOperandError: Если операнд не является числом
        """

    @abstractmethod
    def plus(self, x: Operand, y: Operand) -> T:
        """x + y"""

    @abstractmethod
    def minus(self, x: Operand, y: Operand) -> T:
        """x - y"""

    @abstractmethod
    def multiply(self, x: Operand, y: Operand) -> T:
        """x * y"""

    @abstractmethod
    def divide(self, x: Operand, y: Operand) -> T:
        """x / y (поведение при y == 0 определяется backend'ом)"""

    @abstractmethod
    def sqrt(self, x: Operand) -> T:
        """Квадратный корень (поведение при x < 0 определяется backend'ом)"""

    @abstractmethod
    def abs(self, x: Operand) -> T:
        """|x|"""

    @abstractmethod
    def equal(self, x: Operand, y: Operand) -> bool:
        """Точное равенство после create (без epsilon-толерантности)"""

    @abstractmethod
    def to_text(self, x: Operand) -> str:
        """Текстовое представление, пригодное для обратного create"""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
