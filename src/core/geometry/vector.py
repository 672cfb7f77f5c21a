"""
Vector — 2D вектор поверх подключаемого арифметического backend'а

Вся арифметика делегируется OperatorSystem экземпляра; сам Vector только
компонует вызовы примитивов и различает аргумент-вектор и аргумент-скаляр.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Методы-манипуляции возвращают новый Vector с тем же backend'ом;
   ни получатель, ни аргумент не изменяются
2. Двухосевая операция = X-операция, затем Y-операция (add = add_x → add_y)
3. Тригонометрия (atan2, cos, sin, acos) всегда на float, независимо от backend'а
4. Поведение при делении на ноль наследуется от backend'а:
   native → inf/nan без исключения, precise → OperatorDomainError

ФОРМУЛЫ:
    length_sq = x*x + y*y
    rotate(θ): nx = x*cos θ - y*sin θ,  ny = x*sin θ + y*cos θ
    dot(v)    = x*v.x + y*v.y
    cross(v)  = x*v.y - y*v.x   (< 0: v по часовой стрелке, > 0: против, 0: коллинеарны)
    project_onto(v) = (dot(v) / v.length_sq) * v
    cos_angle_between(v) = ((self / |self|) / |v|) · v
"""

import logging
import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel

from src.core.contracts import validate_vector_object
from src.core.math.angles import degree_to_radian, radian_to_degree
from src.core.operators import (
    DEFAULT_OPERATOR_SYSTEM,
    Operand,
    OperatorSystem,
    OperatorSystemKind,
    resolve_operator_system,
)
from src.core.operators.registry import SystemSpec

logger = logging.getLogger(__name__)

# Аддитивная единица исходного операнда (до нормализации backend'ом)
ZERO: Operand = 0

VectorOperand = Union["Vector", Operand]


# =============================================================================
# CONFIG
# =============================================================================


class VectorConfig(BaseModel):
    """
    Параметры configure() экземпляра Vector.

    system: имя backend'а, OperatorSystemKind или экземпляр OperatorSystem.
    None означает backend по умолчанию (Vector.SYSTEM).
    """

    system: Optional[Union[OperatorSystemKind, str, OperatorSystem]] = None

    model_config = {"frozen": True, "arbitrary_types_allowed": True}


# =============================================================================
# VECTOR
# =============================================================================


class Vector:
    """
    Immutable 2D вектор, параметризованный OperatorSystem.

    Examples:
        >>> str(Vector(100, 50).add(Vector(20, 30)))
        'x:120, y:80'
        >>> str(Vector(1, 2, system="native").multiply(0.5))
        'x:0.5, y:1'
    """

    # Backend по умолчанию для векторов, создаваемых без явного system
    SYSTEM: OperatorSystem = DEFAULT_OPERATOR_SYSTEM

    __slots__ = ("_x", "_y", "_system")

    def __init__(
        self,
        x: Optional[Operand] = None,
        y: Optional[Operand] = None,
        *,
        system: SystemSpec = None,
    ):
        """
        Args:
            x: Значение по оси X (default: 0)
            y: Значение по оси Y (default: 0)
            system: Backend: имя, OperatorSystemKind или экземпляр
                (default: Vector.SYSTEM)

        Raises:
            InvalidOperandError: Если координата не является числом для backend'а
        """
        self._system: OperatorSystem = resolve_operator_system(system, default=type(self).SYSTEM)
        self._x = self._system.create(ZERO if x is None else x)
        self._y = self._system.create(ZERO if y is None else y)

    # -------------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------------

    @staticmethod
    def is_vector(value: Any) -> bool:
        return isinstance(value, Vector)

    @classmethod
    def from_array(cls, arr: Sequence[Optional[Operand]], *, system: SystemSpec = None) -> "Vector":
        """
        Создание вектора из последовательности [x, y].

        Недостающие элементы считаются нулём.

        Examples:
            >>> str(Vector.from_array([42, 21]))
            'x:42, y:21'
            >>> str(Vector.from_array([42]))
            'x:42, y:0'
        """
        x = arr[0] if len(arr) > 0 else None
        y = arr[1] if len(arr) > 1 else None
        return cls(x, y, system=system)

    @classmethod
    def from_object(cls, obj: Any, *, system: SystemSpec = None) -> "Vector":
        """
        Создание вектора из объекта с полями x и y.

        Mapping проверяется по контракту vector.json и читается по ключам,
        прочие объекты читаются через атрибуты. Недостающие поля считаются нулём.

        Raises:
            jsonschema.ValidationError: Если mapping не соответствует контракту

        Examples:
            >>> str(Vector.from_object({"x": 42, "y": 21}))
            'x:42, y:21'
        """
        if isinstance(obj, Mapping):
            data = dict(obj)
            validate_vector_object(data)
            return cls(data.get("x"), data.get("y"), system=system)

        return cls(getattr(obj, "x", None), getattr(obj, "y", None), system=system)

    def configure(self, system: SystemSpec = None) -> "Vector":
        """
        Смена backend'а экземпляра.

        Неизвестное имя backend'а не является ошибкой: подставляется
        Vector.SYSTEM. Координаты заново нормализуются новым backend'ом.

        Args:
            system: Имя, OperatorSystemKind или экземпляр OperatorSystem

        Returns:
            self (для цепочек вызовов)

        Raises:
            pydantic.ValidationError: Если system имеет неподдерживаемый тип
            InvalidOperandError: Если координата непредставима в новом backend'е
                (экземпляр при этом не изменяется)
        """
        config = VectorConfig(system=system)
        target = resolve_operator_system(config.system, default=type(self).SYSTEM)
        # Экземпляр меняется только после успешной нормализации обеих координат
        x, y = target.create(self._x), target.create(self._y)

        self._system, self._x, self._y = target, x, y
        logger.debug("Vector configured with %r", self._system)
        return self

    @property
    def operator_system(self) -> OperatorSystem:
        return self._system

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def x(self) -> str:
        return self._system.to_text(self._x)

    @x.setter
    def x(self, value: Operand) -> None:
        self._x = self._system.create(value)

    @property
    def y(self) -> str:
        return self._system.to_text(self._y)

    @y.setter
    def y(self, value: Operand) -> None:
        self._y = self._system.create(value)

    @property
    def x_value(self) -> Any:
        """Значение X во внутреннем представлении backend'а."""
        return self._x

    @property
    def y_value(self) -> Any:
        """Значение Y во внутреннем представлении backend'а."""
        return self._y

    @property
    def length_sq(self) -> Any:
        """Квадрат длины. Для сравнений длин дешевле, чем length."""
        plus, multiply = self._system.plus, self._system.multiply
        return plus(multiply(self._x, self._x), multiply(self._y, self._y))

    @property
    def length(self) -> Any:
        return self._system.sqrt(self.length_sq)

    @property
    def angle(self) -> float:
        """Угол от оси +X в радианах (против часовой стрелки), atan2(y, x)."""
        return math.atan2(float(self._y), float(self._x))

    @property
    def angle_degree(self) -> Any:
        return radian_to_degree(self.angle, self._system.multiply)

    @property
    def vertical_angle(self) -> float:
        """Угол от оси +Y в радианах, atan2(x, y)."""
        return math.atan2(float(self._x), float(self._y))

    @property
    def vertical_angle_degree(self) -> Any:
        return radian_to_degree(self.vertical_angle, self._system.multiply)

    # -------------------------------------------------------------------------
    # Manipulation
    # -------------------------------------------------------------------------

    def _spawn(self, x: Operand, y: Operand) -> "Vector":
        return type(self)(x, y, system=self._system)

    @staticmethod
    def _axis_x(vec: VectorOperand) -> Operand:
        return vec._x if isinstance(vec, Vector) else vec

    @staticmethod
    def _axis_y(vec: VectorOperand) -> Operand:
        return vec._y if isinstance(vec, Vector) else vec

    def add_x(self, vec: VectorOperand) -> "Vector":
        """
        Прибавление X другого вектора или скаляра к оси X.

        Examples:
            >>> str(Vector(10, 10).add_x(Vector(20, 30)))
            'x:30, y:10'
            >>> str(Vector(10, 10).add_x(40))
            'x:50, y:10'
        """
        return self._spawn(self._system.plus(self._x, self._axis_x(vec)), self._y)

    def add_y(self, vec: VectorOperand) -> "Vector":
        return self._spawn(self._x, self._system.plus(self._y, self._axis_y(vec)))

    def add(self, vec: VectorOperand) -> "Vector":
        """
        Сложение с вектором (покоординатно) или скаляром (на обе оси).

        Args:
            vec: Vector или скалярный Operand

        Returns:
            Новый Vector; self и vec не изменяются
        """
        return self.add_x(vec).add_y(vec)

    def subtract_x(self, vec: VectorOperand) -> "Vector":
        return self._spawn(self._system.minus(self._x, self._axis_x(vec)), self._y)

    def subtract_y(self, vec: VectorOperand) -> "Vector":
        return self._spawn(self._x, self._system.minus(self._y, self._axis_y(vec)))

    def subtract(self, vec: VectorOperand) -> "Vector":
        """
        Examples:
            >>> str(Vector(100, 50).subtract(Vector(20, 30)))
            'x:80, y:20'
            >>> str(Vector(100, 50).subtract(40))
            'x:60, y:10'
        """
        return self.subtract_x(vec).subtract_y(vec)

    def divide_x(self, vec: VectorOperand) -> "Vector":
        return self._spawn(self._system.divide(self._x, self._axis_x(vec)), self._y)

    def divide_y(self, vec: VectorOperand) -> "Vector":
        return self._spawn(self._x, self._system.divide(self._y, self._axis_y(vec)))

    def divide(self, vec: VectorOperand) -> "Vector":
        """
        Деление на вектор (покоординатно) или скаляр.

        Raises:
            OperatorDomainError: precise backend, делитель равен нулю
                (native backend возвращает inf/nan без исключения)

        Examples:
            >>> str(Vector(100, 50).divide(4))
            'x:25, y:12.5'
        """
        return self.divide_x(vec).divide_y(vec)

    def multiply_x(self, vec: VectorOperand) -> "Vector":
        return self._spawn(self._system.multiply(self._x, self._axis_x(vec)), self._y)

    def multiply_y(self, vec: VectorOperand) -> "Vector":
        return self._spawn(self._x, self._system.multiply(self._y, self._axis_y(vec)))

    def multiply(self, vec: VectorOperand) -> "Vector":
        """
        Examples:
            >>> str(Vector(100, 50).multiply(Vector(2, 2)))
            'x:200, y:100'
        """
        return self.multiply_x(vec).multiply_y(vec)

    def invert_x(self) -> "Vector":
        return self.multiply_x(-1)

    def invert_y(self) -> "Vector":
        return self.multiply_y(-1)

    def invert(self) -> "Vector":
        return self.multiply(-1)

    def normalize(self) -> "Vector":
        """
        Единичный вектор того же направления.

        Для нулевого вектора: native → nan-координаты, precise → OperatorDomainError.
        """
        return self.divide(self.length)

    def norm(self) -> "Vector":
        """Alias normalize()"""
        return self.normalize()

    def rotate(self, angle: Any) -> "Vector":
        """
        Поворот на угол в радианах против часовой стрелки от оси +X.

        cos/sin вычисляются на float независимо от backend'а.

        Examples:
            >>> [round(float(c), 9) for c in Vector(100, 0).rotate(math.pi).to_array()]
            [-100.0, 0.0]
        """
        theta = float(angle)
        cos, sin = math.cos(theta), math.sin(theta)
        multiply, plus, minus = self._system.multiply, self._system.plus, self._system.minus

        nx = minus(multiply(self._x, cos), multiply(self._y, sin))
        ny = plus(multiply(self._x, sin), multiply(self._y, cos))
        return self._spawn(nx, ny)

    def rotate_degree(self, degree: Operand) -> "Vector":
        """Поворот на угол в градусах (конверсия делением backend'а)."""
        angle = degree_to_radian(degree, self._system.divide)
        return self.rotate(angle)

    # -------------------------------------------------------------------------
    # Products & projection
    # -------------------------------------------------------------------------

    def dot(self, vec: "Vector") -> Any:
        """
        Скалярное произведение.

        Examples:
            >>> Vector(100, 50).dot(Vector(200, 60))
            Decimal('23000')
        """
        plus, multiply = self._system.plus, self._system.multiply
        return plus(multiply(self._x, vec._x), multiply(self._y, vec._y))

    def cross(self, vec: "Vector") -> Any:
        """
        Псевдоскалярное (2D cross) произведение.

        Знак задаёт взаимное расположение:
        - < 0: vec по часовой стрелке от self
        - > 0: vec против часовой стрелки
        - = 0: векторы коллинеарны

        Модуль равен площади параллелограмма на self и vec; cross(a, b) == -cross(b, a).

        Examples:
            >>> Vector(100, 50).cross(Vector(200, 60))
            Decimal('-4000')
        """
        minus, multiply = self._system.minus, self._system.multiply
        return minus(multiply(self._x, vec._y), multiply(self._y, vec._x))

    def project_onto(self, vec: "Vector") -> "Vector":
        """
        Проекция self на vec.

        Examples:
            >>> str(Vector(100, 0).project_onto(Vector(100, 100)))
            'x:50, y:50'
        """
        multiply, divide = self._system.multiply, self._system.divide
        coeff = divide(self.dot(vec), vec.length_sq)
        return self._spawn(multiply(coeff, vec._x), multiply(coeff, vec._y))

    def cos_angle_between(self, vec: "Vector") -> Any:
        """
        Косинус угла между векторами.

        Деление выполняется последовательно: сначала на собственную длину,
        затем на длину vec, и только потом скалярное произведение с vec.
        """
        return self.divide(self.length).divide(vec.length).dot(vec)

    def angle_between(self, vec: "Vector") -> float:
        """
        Угол между векторами в радианах (acos на float).

        Косинус вне [-1, 1] (погрешность округления или nan) даёт nan.

        Examples:
            >>> round(Vector(1, 0).angle_between(Vector(0, 1)), 12) == round(math.pi / 2, 12)
            True
        """
        cos = float(self.cos_angle_between(vec))
        if -1.0 <= cos <= 1.0:
            return math.acos(cos)
        return math.nan

    # -------------------------------------------------------------------------
    # Distances
    # -------------------------------------------------------------------------

    def distance_x(self, vec: "Vector") -> Any:
        """Знаковая разница по оси X: self.x - vec.x"""
        return self._system.minus(self._x, vec._x)

    def abs_distance_x(self, vec: "Vector") -> Any:
        return self._system.abs(self.distance_x(vec))

    def distance_y(self, vec: "Vector") -> Any:
        """Знаковая разница по оси Y: self.y - vec.y"""
        return self._system.minus(self._y, vec._y)

    def abs_distance_y(self, vec: "Vector") -> Any:
        return self._system.abs(self.distance_y(vec))

    def distance_sq(self, vec: "Vector") -> Any:
        """
        Квадрат евклидова расстояния.

        Examples:
            >>> Vector(100, 50).distance_sq(Vector(200, 60))
            Decimal('10100')
        """
        plus, multiply = self._system.plus, self._system.multiply
        dx = self.distance_x(vec)
        dy = self.distance_y(vec)
        return plus(multiply(dx, dx), multiply(dy, dy))

    def distance(self, vec: "Vector") -> Any:
        return self._system.sqrt(self.distance_sq(vec))

    # -------------------------------------------------------------------------
    # Equality
    # -------------------------------------------------------------------------

    def is_zero(self) -> bool:
        equal = self._system.equal
        return equal(self._x, ZERO) and equal(self._y, ZERO)

    def is_equal_to(self, vec: "Vector") -> bool:
        """Покоординатное равенство по семантике equal backend'а (без epsilon)."""
        equal = self._system.equal
        return equal(self._x, vec._x) and equal(self._y, vec._y)

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def to_string(self) -> str:
        return f"x:{self.x}, y:{self.y}"

    def to_array(self) -> List[str]:
        return [self.x, self.y]

    def to_object(self) -> Dict[str, str]:
        return {"x": self.x, "y": self.y}

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Vector(x={self.x!r}, y={self.y!r}, system={self._system.name!r})"

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    @staticmethod
    def _is_operator_operand(value: Any) -> bool:
        return isinstance(value, (Vector, int, float, Decimal)) and not isinstance(value, bool)

    def __add__(self, other: Any) -> "Vector":
        if not self._is_operator_operand(other):
            return NotImplemented
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other: Any) -> "Vector":
        if not self._is_operator_operand(other):
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other: Any) -> "Vector":
        if not self._is_operator_operand(other):
            return NotImplemented
        return self.invert().add(other)

    def __mul__(self, other: Any) -> "Vector":
        if not self._is_operator_operand(other):
            return NotImplemented
        return self.multiply(other)

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> "Vector":
        if not self._is_operator_operand(other):
            return NotImplemented
        return self.divide(other)

    def __neg__(self) -> "Vector":
        return self.invert()
