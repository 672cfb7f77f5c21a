"""
Тесты для Vector: создание, конфигурация, доступ, манипуляции, представления

Проверяет:
1. Конструктор и фабрики (from_array, from_object) с нулями по умолчанию
2. Выбор backend'а: Vector.SYSTEM, system=, configure() с fallback
3. Accessors x/y (текст) и setters (нормализация через create)
4. Манипуляции X/Y/обе оси с вектором и скаляром, неизменяемость
5. Поведение при делении на ноль для обоих backend'ов
6. Python-операторы и текстовые представления
"""

import math
from decimal import Decimal
from fractions import Fraction
from types import SimpleNamespace

import pytest
from jsonschema import ValidationError as SchemaValidationError
from pydantic import ValidationError

from src.core.geometry import Vector
from src.core.operators import (
    NATIVE_OPERATOR_SYSTEM,
    PRECISE_OPERATOR_SYSTEM,
    InvalidOperandError,
    NativeOperatorSystem,
    OperatorDomainError,
    OperatorSystemKind,
)


# =============================================================================
# CONSTRUCTION
# =============================================================================


class TestVectorConstruction:
    """Тесты для конструктора"""

    def test_defaults_to_zero(self) -> None:
        vec = Vector()
        assert vec.is_zero()
        assert vec.x == "0"
        assert vec.y == "0"

    def test_missing_y_is_zero(self) -> None:
        assert str(Vector(5)) == "x:5, y:0"

    def test_default_backend_is_precise(self) -> None:
        vec = Vector(100, 50)
        assert vec.operator_system is PRECISE_OPERATOR_SYSTEM
        assert vec.x_value == Decimal(100)

    def test_numeral_text_and_float(self) -> None:
        assert Vector("1.5", 2.25).to_array() == ["1.5", "2.25"]

    def test_explicit_system_by_name(self) -> None:
        vec = Vector(1, 2, system="native")
        assert vec.operator_system is NATIVE_OPERATOR_SYSTEM
        assert isinstance(vec.x_value, float)

    def test_explicit_system_by_kind_and_instance(self) -> None:
        custom = NativeOperatorSystem()
        assert Vector(system=OperatorSystemKind.NATIVE).operator_system is NATIVE_OPERATOR_SYSTEM
        assert Vector(system=custom).operator_system is custom

    def test_unknown_system_name_falls_back(self) -> None:
        assert Vector(1, 2, system="bignum").operator_system is PRECISE_OPERATOR_SYSTEM

    def test_invalid_coordinate_raises(self) -> None:
        with pytest.raises(InvalidOperandError):
            Vector("abc", 1)

    def test_process_wide_default(self, monkeypatch) -> None:
        """Vector.SYSTEM влияет только на векторы, созданные после изменения"""
        before = Vector(1, 2)
        monkeypatch.setattr(Vector, "SYSTEM", NATIVE_OPERATOR_SYSTEM)
        after = Vector(1, 2)

        assert before.operator_system is PRECISE_OPERATOR_SYSTEM
        assert after.operator_system is NATIVE_OPERATOR_SYSTEM

    def test_is_vector(self) -> None:
        assert Vector.is_vector(Vector())
        assert not Vector.is_vector(5)
        assert not Vector.is_vector({"x": 1, "y": 2})


class TestVectorFactories:
    """Тесты для from_array и from_object"""

    def test_from_array(self) -> None:
        assert str(Vector.from_array([42, 21])) == "x:42, y:21"

    def test_from_array_missing_components(self) -> None:
        assert str(Vector.from_array([42])) == "x:42, y:0"
        assert Vector.from_array([]).is_zero()
        assert str(Vector.from_array([None, 3])) == "x:0, y:3"

    def test_from_array_with_system(self) -> None:
        vec = Vector.from_array((1.5, 2), system="native")
        assert vec.operator_system is NATIVE_OPERATOR_SYSTEM

    def test_from_object_mapping(self) -> None:
        assert str(Vector.from_object({"x": 42, "y": 21})) == "x:42, y:21"

    def test_from_object_missing_components(self) -> None:
        assert Vector.from_object({}).is_zero()
        assert str(Vector.from_object({"x": "1.5"})) == "x:1.5, y:0"
        assert str(Vector.from_object({"x": None, "y": 7})) == "x:0, y:7"

    def test_from_object_attributes(self) -> None:
        """Не-mapping объекты читаются через атрибуты"""
        assert str(Vector.from_object(SimpleNamespace(x=3, y=4))) == "x:3, y:4"
        assert str(Vector.from_object(SimpleNamespace(y=4))) == "x:0, y:4"

    def test_from_object_vector(self) -> None:
        source = Vector(3, 4)
        copy = Vector.from_object(source)
        assert copy.is_equal_to(source)
        assert copy is not source

    def test_from_object_rejects_invalid_mapping(self) -> None:
        with pytest.raises(SchemaValidationError):
            Vector.from_object({"x": [1], "y": 2})

        with pytest.raises(SchemaValidationError):
            Vector.from_object({"x": "abc"})

    def test_from_object_accepts_same_numerals_as_from_array(self) -> None:
        for text in ("INF", "-infinity", "1_000"):
            expected = Vector.from_array([text, "NaN"], system="native")
            restored = Vector.from_object({"x": text, "y": "NaN"}, system="native")
            assert restored.x == expected.x

        assert str(Vector.from_object({"x": "1_000", "y": "2.5_0"})) == "x:1000, y:2.5"

    def test_from_object_with_system(self) -> None:
        vec = Vector.from_object({"x": 1, "y": 2}, system="native")
        assert vec.operator_system is NATIVE_OPERATOR_SYSTEM


# =============================================================================
# CONFIGURATION
# =============================================================================


class TestVectorConfigure:
    """Тесты для configure"""

    def test_configure_by_name(self) -> None:
        vec = Vector("1.5", 2)
        result = vec.configure(system="native")

        assert result is vec
        assert vec.operator_system is NATIVE_OPERATOR_SYSTEM
        assert vec.x_value == 1.5
        assert isinstance(vec.y_value, float)

    def test_configure_by_instance_and_kind(self) -> None:
        vec = Vector(1, 2)
        vec.configure(system=NATIVE_OPERATOR_SYSTEM)
        assert vec.operator_system is NATIVE_OPERATOR_SYSTEM

        vec.configure(system=OperatorSystemKind.PRECISE)
        assert vec.operator_system is PRECISE_OPERATOR_SYSTEM
        assert vec.x_value == Decimal(1)

    def test_configure_unknown_name_falls_back(self) -> None:
        vec = Vector(1, 2, system="native")
        vec.configure(system="precize")
        assert vec.operator_system is PRECISE_OPERATOR_SYSTEM

    def test_configure_without_system_uses_default(self, monkeypatch) -> None:
        vec = Vector(1, 2, system="precise")
        monkeypatch.setattr(Vector, "SYSTEM", NATIVE_OPERATOR_SYSTEM)

        vec.configure()
        assert vec.operator_system is NATIVE_OPERATOR_SYSTEM

    def test_configure_rejects_unsupported_type(self) -> None:
        with pytest.raises(ValidationError):
            Vector(1, 2).configure(system=42)

    def test_configure_keeps_coordinates(self) -> None:
        vec = Vector(100, 50).configure(system="native")
        assert str(vec) == "x:100, y:50"

    def test_failed_configure_leaves_vector_unchanged(self) -> None:
        """inf непредставим в precise: backend и координаты остаются прежними"""
        vec = Vector(1, 1, system="native").divide_y(0)

        with pytest.raises(InvalidOperandError, match="finite"):
            vec.configure(system="precise")

        assert vec.operator_system is NATIVE_OPERATOR_SYSTEM
        assert isinstance(vec.x_value, float)
        assert math.isinf(vec.y_value)
        assert str(vec) == "x:1, y:inf"
        assert str(vec.add(1)) == "x:2, y:inf"

    def test_failed_configure_non_finite_both_axes(self) -> None:
        vec = Vector(1, 0, system="native").divide(0)

        with pytest.raises(InvalidOperandError):
            vec.configure(system="precise")

        assert vec.operator_system is NATIVE_OPERATOR_SYSTEM
        assert repr(vec) == "Vector(x='inf', y='nan', system='native')"


# =============================================================================
# ACCESSORS
# =============================================================================


class TestVectorAccessors:
    """Тесты для x/y и производных свойств"""

    def test_setters_normalize(self) -> None:
        vec = Vector(1, 2)
        vec.x = "3.50"
        vec.y = 0.25

        assert vec.x == "3.5"
        assert vec.x_value == Decimal("3.50")
        assert vec.y_value == Decimal("0.25")

    def test_setter_rejects_invalid(self) -> None:
        vec = Vector(1, 2)
        with pytest.raises(InvalidOperandError):
            vec.y = "bad"

    def test_native_text(self) -> None:
        vec = Vector(0.1, 2.0, system="native")
        assert vec.x == "0.1"
        assert vec.y == "2"

    def test_length(self) -> None:
        vec = Vector(3, 4)
        assert vec.length_sq == 25
        assert vec.length == 5

    def test_length_native(self) -> None:
        vec = Vector(3, 4, system="native")
        assert vec.length_sq == 25.0
        assert vec.length == 5.0

    def test_angle(self) -> None:
        assert Vector(0, 1).angle == pytest.approx(math.pi / 2)
        assert Vector(-1, 0).angle == pytest.approx(math.pi)
        assert float(Vector(1, 1).angle_degree) == pytest.approx(45.0)

    def test_angle_degree_uses_backend(self) -> None:
        assert isinstance(Vector(1, 1).angle_degree, Decimal)
        assert isinstance(Vector(1, 1, system="native").angle_degree, float)

    def test_vertical_angle(self) -> None:
        assert Vector(0, 1).vertical_angle == 0.0
        assert Vector(1, 0).vertical_angle == pytest.approx(math.pi / 2)
        assert float(Vector(1, 0).vertical_angle_degree) == pytest.approx(90.0)


# =============================================================================
# MANIPULATION
# =============================================================================


class TestVectorAddSubtract:
    """Тесты для add/subtract"""

    def test_add_x(self) -> None:
        assert str(Vector(100, 50).add_x(Vector(20, 30))) == "x:120, y:50"

    def test_add_y(self) -> None:
        assert str(Vector(100, 50).add_y(Vector(20, 30))) == "x:100, y:80"

    def test_add_vector_and_scalar(self) -> None:
        assert str(Vector(100, 50).add(Vector(20, 30))) == "x:120, y:80"
        assert str(Vector(100, 50).add(10)) == "x:110, y:60"

    def test_subtract(self) -> None:
        assert str(Vector(100, 50).subtract(Vector(20, 30))) == "x:80, y:20"
        assert str(Vector(100, 50).subtract(40)) == "x:60, y:10"

    def test_subtract_single_axis(self) -> None:
        assert str(Vector(100, 50).subtract_x(40)) == "x:60, y:50"
        assert str(Vector(100, 50).subtract_y(Vector(20, 30))) == "x:100, y:20"

    def test_receiver_and_argument_unchanged(self) -> None:
        a = Vector(100, 50)
        b = Vector(20, 30)
        a.add(b)
        a.subtract(b)

        assert str(a) == "x:100, y:50"
        assert str(b) == "x:20, y:30"


class TestVectorMultiplyDivide:
    """Тесты для multiply/divide"""

    def test_multiply(self) -> None:
        assert str(Vector(100, 50).multiply(Vector(2, 2))) == "x:200, y:100"
        assert str(Vector(100, 50).multiply(4)) == "x:400, y:200"

    def test_multiply_single_axis(self) -> None:
        assert str(Vector(100, 50).multiply_x(4)) == "x:400, y:50"
        assert str(Vector(100, 50).multiply_y(4)) == "x:100, y:200"

    def test_divide(self) -> None:
        assert str(Vector(100, 50).divide(Vector(2, 2))) == "x:50, y:25"
        assert str(Vector(100, 50).divide(4)) == "x:25, y:12.5"

    def test_divide_single_axis(self) -> None:
        assert str(Vector(100, 50).divide_x(Vector(2, 2))) == "x:50, y:50"
        assert str(Vector(100, 50).divide_y(4)) == "x:100, y:12.5"

    def test_divide_by_zero_vector_native(self) -> None:
        """native: деление на нулевой вектор даёт inf без исключения"""
        result = Vector(1, 1, system="native").divide(Vector(0, 0))
        assert math.isinf(result.x_value)
        assert result.x == "inf"

    def test_divide_by_zero_vector_precise(self) -> None:
        """precise: то же деление выбрасывает domain error"""
        with pytest.raises(OperatorDomainError):
            Vector(1, 1).divide(Vector(0, 0))

    def test_divide_by_zero_single_axis_precise(self) -> None:
        with pytest.raises(OperatorDomainError):
            Vector(1, 1).divide_y(0)


class TestVectorInvertNormalize:
    """Тесты для invert/normalize"""

    def test_invert(self) -> None:
        vec = Vector(100, 50)
        assert str(vec.invert_x()) == "x:-100, y:50"
        assert str(vec.invert_y()) == "x:100, y:-50"
        assert str(vec.invert()) == "x:-100, y:-50"

    def test_invert_zero(self) -> None:
        assert str(Vector().invert()) == "x:0, y:0"

    def test_normalize(self) -> None:
        unit = Vector(3, 4).normalize()
        assert str(unit) == "x:0.6, y:0.8"
        assert unit.length == 1

    def test_norm_alias(self) -> None:
        assert Vector(3, 4).norm().is_equal_to(Vector(3, 4).normalize())

    def test_normalize_zero_native(self) -> None:
        unit = Vector(system="native").normalize()
        assert math.isnan(unit.x_value)
        assert math.isnan(unit.y_value)

    def test_normalize_zero_precise(self) -> None:
        with pytest.raises(OperatorDomainError):
            Vector().normalize()


class TestVectorSharesSystem:
    """Результаты используют backend получателя"""

    def test_results_keep_receiver_system(self) -> None:
        vec = Vector(1, 2, system="native")
        for result in (vec.add(1), vec.subtract(1), vec.multiply(2), vec.divide(2), vec.invert(), vec.rotate(1.0)):
            assert result.operator_system is NATIVE_OPERATOR_SYSTEM

    def test_mixed_backends_follow_receiver(self) -> None:
        native = Vector(1, 2, system="native")
        precise = Vector("0.5", "0.25")

        assert native.add(precise).operator_system is NATIVE_OPERATOR_SYSTEM
        assert str(native.add(precise)) == "x:1.5, y:2.25"
        assert precise.add(native).operator_system is PRECISE_OPERATOR_SYSTEM


# =============================================================================
# OPERATORS
# =============================================================================


class TestVectorOperators:
    """Тесты для Python-операторов"""

    def test_add_sub(self) -> None:
        assert str(Vector(1, 2) + Vector(3, 4)) == "x:4, y:6"
        assert str(Vector(1, 2) + 1) == "x:2, y:3"
        assert str(1 + Vector(1, 2)) == "x:2, y:3"
        assert str(Vector(1, 2) - 1) == "x:0, y:1"
        assert str(10 - Vector(1, 2)) == "x:9, y:8"

    def test_mul_div_neg(self) -> None:
        assert str(Vector(1, 2) * 2) == "x:2, y:4"
        assert str(2 * Vector(1, 2)) == "x:2, y:4"
        assert str(Vector(1, 2) / 2) == "x:0.5, y:1"
        assert str(-Vector(1, 2)) == "x:-1, y:-2"

    def test_decimal_scalar(self) -> None:
        assert str(Vector(1, 2) * Decimal("1.5")) == "x:1.5, y:3"

    def test_unsupported_operand_types(self) -> None:
        with pytest.raises(TypeError):
            Vector(1, 2) + "1"

        with pytest.raises(TypeError):
            Vector(1, 2) * True

        with pytest.raises(TypeError):
            Vector(1, 2) / [2]

    @pytest.mark.parametrize("scalar", [Fraction(1, 2), complex(1, 0)])
    def test_other_number_types_not_supported(self, scalar) -> None:
        """Fraction и complex не являются операндами backend'ов"""
        with pytest.raises(TypeError):
            Vector(1, 2) * scalar

        with pytest.raises(TypeError):
            scalar - Vector(1, 2)

        with pytest.raises(TypeError):
            Vector(1, 2) + scalar


# =============================================================================
# VIEWS
# =============================================================================


class TestVectorViews:
    """Тесты для текстовых представлений"""

    def test_to_string(self) -> None:
        vec = Vector(10, 20)
        assert vec.to_string() == "x:10, y:20"
        assert str(vec) == "x:10, y:20"

    def test_to_array(self) -> None:
        assert Vector(10, 20).to_array() == ["10", "20"]

    def test_to_object(self) -> None:
        assert Vector(10, 20).to_object() == {"x": "10", "y": "20"}

    def test_repr_names_backend(self) -> None:
        assert repr(Vector(10, 20)) == "Vector(x='10', y='20', system='precise')"
        assert "native" in repr(Vector(system="native"))

    def test_views_do_not_mutate(self) -> None:
        vec = Vector("1.50", 2)
        vec.to_array()
        vec.to_object()
        str(vec)
        assert vec.x_value == Decimal("1.50")
