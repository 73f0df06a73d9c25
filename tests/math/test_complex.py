"""Tests for the Complex value type."""

import math

import pytest

from analytic.core.errors import DivisionByZeroError, DomainViolationError
from analytic.math import Complex
from analytic.math.value import MathValue


class TestComplexBasicInstantiation:
    """Test basic instantiation and field access."""

    def test_instantiate_from_real_and_imaginary(self):
        """Test creating Complex from real and imaginary parts."""
        c = Complex(2, 3)
        assert c.real == 2.0
        assert c.imaginary == 3.0

    def test_instantiate_from_real_only(self):
        """Test creating Complex from real part only."""
        c = Complex(5)
        assert c.real == 5.0
        assert c.imaginary == 0.0

    def test_default_is_zero(self):
        """Test that Complex() is 0."""
        assert Complex() == Complex(0, 0)

    def test_instantiate_from_list(self):
        """Test creating Complex from list [real, imaginary]."""
        assert Complex([3, 4]) == Complex(3, 4)
        assert Complex((2,)) == Complex(2, 0)
        assert Complex([]) == Complex(0)

    def test_too_many_components(self):
        """Test that three components are rejected."""
        with pytest.raises(DomainViolationError):
            Complex([1, 2, 3])

    def test_instantiate_from_python_complex(self):
        """Test creating Complex from a builtin complex."""
        assert Complex(1 + 2j) == Complex(1, 2)

    def test_instantiate_from_complex(self):
        """Test copying another Complex."""
        source = Complex(1, -1)
        assert Complex(source) == source

    def test_is_math_value(self):
        """Test that Complex implements MathValue."""
        assert isinstance(Complex(1), MathValue)

    def test_frozen(self, assert_validation_error):
        """Test that fields cannot be assigned."""
        c = Complex(1, 2)
        assert_validation_error(lambda: setattr(c, "real", 5.0), "frozen")

    def test_with_real_and_with_imaginary(self):
        """Test copies with one component replaced."""
        c = Complex(3, 4)
        changed = c.with_real(0)
        assert changed == Complex(0, 4)
        assert changed.modulus == 4.0
        assert changed.argument == pytest.approx(math.pi / 2)
        assert c.with_imaginary(0).argument == 0.0
        assert c == Complex(3, 4)

    def test_model_dump(self, assert_model_dump):
        """Test the serialized fields."""
        assert_model_dump(Complex(1.5, -2), {"real": 1.5, "imaginary": -2.0})


class TestComplexParsing:
    """Test the canonical string form parser."""

    @pytest.mark.parametrize("text, real, imaginary", [
        ("-1+3i", -1.0, 3.0),
        ("2.4-7.88i", 2.4, -7.88),
        ("85+i", 85.0, 1.0),
        ("i", 0.0, 1.0),
        ("-i", 0.0, -1.0),
        ("-8i", 0.0, -8.0),
        ("5", 5.0, 0.0),
        ("2 + 3i", 2.0, 3.0),
        ("1e3-2i", 1000.0, -2.0),
        ("", 0.0, 0.0),
    ])
    def test_parse(self, text, real, imaginary):
        """Test accepted string forms."""
        c = Complex.parse(text)
        assert (c.real, c.imaginary) == (real, imaginary)

    def test_constructor_parses_strings(self):
        """Test that the constructor accepts strings."""
        assert Complex("2-4i") == Complex(2, -4)
        assert Complex(None) == Complex(0)

    @pytest.mark.parametrize("text", ["abc", "2+3j", "i2", "1+2", "--1", "2i+3"])
    def test_parse_rejects(self, text):
        """Test that malformed strings raise DomainViolationError."""
        with pytest.raises(DomainViolationError):
            Complex.parse(text)

    def test_parse_rejection_is_value_error(self):
        """Test that parse errors are catchable as ValueError."""
        with pytest.raises(ValueError):
            Complex("not a number")


class TestComplexPolarForm:
    """Test modulus and argument."""

    def test_three_four(self):
        """Test the 3-4-5 triangle."""
        c = Complex(3, 4)
        assert c.modulus == 5.0
        assert c.argument == pytest.approx(0.9273, abs=1e-4)

    def test_zero(self):
        """Test that zero has modulus and argument 0."""
        assert Complex(0).modulus == 0.0
        assert Complex(0).argument == 0.0

    def test_negative_real_argument_is_pi(self):
        """Test that negative reals get argument pi."""
        assert Complex(-2).argument == math.pi
        assert Complex(-2, -0.0).argument == math.pi

    def test_negative_imaginary_argument(self):
        """Test lower half-plane arguments are negative."""
        assert Complex(0, -1).argument == pytest.approx(-math.pi / 2)

    def test_from_polar(self, assert_complex_close):
        """Test building from modulus and argument."""
        assert_complex_close(Complex.from_polar(2, math.pi / 2), 0, 2)

    def test_abs_is_modulus(self):
        """Test abs() returns the modulus as a float."""
        assert abs(Complex(-3, 4)) == 5.0

    def test_model_copy_recomputes_polar_form(self):
        """Test that copying with new components refreshes modulus and argument."""
        c = Complex(3, 4).model_copy(update={"real": 0.0})
        assert c == Complex(0, 4)
        assert c.modulus == 4.0
        assert c.argument == pytest.approx(math.pi / 2)
        assert Complex(3, 4).model_copy(update={"imaginary": -4}).argument == pytest.approx(-0.9273, abs=1e-4)

    def test_plain_model_copy(self):
        """Test that a copy without updates keeps the polar form."""
        c = Complex(-1, 0).model_copy()
        assert c == Complex(-1)
        assert c.argument == math.pi


class TestComplexArithmetic:
    """Test arithmetic methods and operators."""

    def test_add_subtract(self):
        """Test addition and subtraction."""
        a, b = Complex(1, 2), Complex(3, -1)
        assert a.add(b) == Complex(4, 1)
        assert a.subtract(b) == Complex(-2, 3)
        assert a + b == Complex(4, 1)
        assert a - b == Complex(-2, 3)

    def test_multiply(self):
        """Test multiplication."""
        assert Complex(1, 2) * Complex(3, 4) == Complex(-5, 10)
        assert Complex.I * Complex.I == Complex(-1)

    def test_divide(self):
        """Test division."""
        assert Complex(-5, 10) / Complex(3, 4) == Complex(1, 2)

    def test_divide_by_zero(self):
        """Test that dividing by 0 raises DivisionByZeroError."""
        with pytest.raises(DivisionByZeroError):
            Complex(1, 1) / Complex(0)
        with pytest.raises(ZeroDivisionError):
            Complex(1).divide(0)

    def test_real_operands_promoted(self):
        """Test mixing with int and float on both sides."""
        c = Complex(1, 1)
        assert c + 1 == Complex(2, 1)
        assert 1 + c == Complex(2, 1)
        assert 2 - c == Complex(1, -1)
        assert c * 2.0 == Complex(2, 2)
        assert 2 / Complex(0, 1) == Complex(0, -2)

    def test_builtin_complex_operand(self):
        """Test mixing with builtin complex."""
        assert Complex(1) + 1j == Complex(1, 1)

    def test_unsupported_operand(self):
        """Test that unsupported operands raise TypeError."""
        with pytest.raises(TypeError):
            Complex(1) + "x"
        with pytest.raises(TypeError):
            Complex(1).add("x")

    def test_unary(self):
        """Test negation and unary plus."""
        c = Complex(1, -2)
        assert -c == Complex(-1, 2)
        assert +c is c

    def test_conjugate(self):
        """Test conjugate."""
        assert Complex(1, 2).conjugate() == Complex(1, -2)

    def test_operands_unchanged(self):
        """Test that arithmetic never mutates operands."""
        a, b = Complex(1, 2), Complex(3, 4)
        a * b
        a.pow(b)
        assert a == Complex(1, 2)
        assert b == Complex(3, 4)


class TestComplexPowersAndRoots:
    """Test pow, sqrt, cbrt, ln and log."""

    def test_pow_integer(self, assert_complex_close):
        """Test (1 + i)^2 = 2i."""
        assert_complex_close(Complex(1, 1).pow(2), 0, 2)

    def test_pow_operator(self, assert_complex_close):
        """Test the ** operator."""
        assert_complex_close(Complex(1, 1) ** 2, 0, 2)
        assert_complex_close(2 ** Complex(0, 1), math.cos(math.log(2)), math.sin(math.log(2)))

    def test_i_to_the_i(self, assert_complex_close):
        """Test i^i = e^(-pi/2)."""
        assert_complex_close(Complex.I.pow(Complex.I), math.exp(-math.pi / 2), 0)

    def test_zero_to_any_power_is_zero(self):
        """Test that zero modulus short-circuits."""
        assert Complex(0).pow(Complex(2, 3)) == Complex(0)
        assert Complex(0).pow(-1) == Complex(0)

    @pytest.mark.parametrize("z", [Complex(3, 4), Complex(-2, 0.5), Complex(0, -7), Complex(-9)])
    def test_sqrt_squared(self, z):
        """Test that sqrt(z)^2 recovers z."""
        assert z.sqrt().pow(Complex(2)).compare(z, tolerance=1e-9, mode="absolute")

    @pytest.mark.parametrize("n", [0, 1, 2, 5])
    def test_repeated_multiplication(self, n):
        """Test z^n matches repeated multiplication."""
        z = Complex(1.2, -0.7)
        product = Complex(1)
        for _ in range(n):
            product = product * z
        assert z.pow(Complex(n)).compare(product, tolerance=1e-9, mode="absolute")

    def test_sqrt_negative_real(self, assert_complex_close):
        """Test sqrt(-4) = 2i."""
        assert_complex_close(Complex(-4).sqrt(), 0, 2)

    def test_cbrt_negative_real_is_real(self):
        """Test that negative reals take the real cube root."""
        root = Complex(-8).cbrt()
        assert root.imaginary == 0.0
        assert root.real == pytest.approx(-2.0)

    def test_cbrt_principal_branch(self, assert_complex_close):
        """Test the principal cube root of a non-real value."""
        root = Complex(0, 8).cbrt()
        assert_complex_close(root, math.sqrt(3), 1)

    def test_cbrt_positive_real(self, assert_complex_close):
        """Test the cube root of a positive real."""
        assert_complex_close(Complex(27).cbrt(), 3, 0)

    def test_ln(self, assert_complex_close):
        """Test the principal logarithm."""
        assert_complex_close(Complex(-1).ln(), 0, math.pi)
        assert_complex_close(Complex(math.e).ln(), 1, 0)

    def test_ln_zero_raises(self):
        """Test that ln(0) raises DomainViolationError."""
        with pytest.raises(DomainViolationError):
            Complex(0).ln()

    def test_log_and_log10(self, assert_complex_close):
        """Test logarithms in other bases."""
        assert_complex_close(Complex(8).log(Complex(2)), 3, 0)
        assert_complex_close(Complex(1000).log10(), 3, 0)


class TestComplexComparison:
    """Test exact equality and fuzzy compare()."""

    def test_equality_is_exact(self):
        """Test that == does not use a tolerance."""
        assert Complex(1, 2) == Complex(1, 2)
        assert Complex(1, 2) != Complex(1, 2.0000001)

    def test_equal_to_numbers(self):
        """Test equality with builtin numbers."""
        assert Complex(2) == 2
        assert Complex(1, 1) == 1 + 1j
        assert Complex(1, 1) != 1

    def test_not_equal_to_other_types(self):
        """Test equality with unrelated objects."""
        assert Complex(1) != "1"

    def test_hash_agrees_with_eq(self):
        """Test that equal values hash equally."""
        assert hash(Complex(2)) == hash(2)
        assert len({Complex(1, 2), Complex(1, 2), Complex(2, 1)}) == 2

    def test_compare_with_tolerance(self):
        """Test fuzzy comparison."""
        assert Complex(1, 2).compare(Complex(1.0001, 2.0001))
        assert not Complex(1, 2).compare(Complex(1.1, 2))
        assert Complex(1, 0).compare(1.0)

    def test_compare_unrelated_type(self):
        """Test compare() against a non-number."""
        assert not Complex(1).compare("1")


class TestComplexRendering:
    """Test string, TeX and Python conversions."""

    @pytest.mark.parametrize("value, expected", [
        (Complex(0), "0"),
        (Complex(3), "3"),
        (Complex(0, 1), "i"),
        (Complex(0, -1), "-i"),
        (Complex(0, -8), "-8i"),
        (Complex(-1, 3), "-1+3i"),
        (Complex(2.4, -7.88), "2.4-7.88i"),
        (Complex(85, 1), "85+i"),
        (Complex(1.5, -1), "1.5-i"),
    ])
    def test_to_string(self, value, expected):
        """Test canonical string form."""
        assert value.to_string() == expected
        assert str(value) == expected

    def test_string_round_trip(self):
        """Test that parse() reads to_string() output."""
        for value in (Complex(-1, 3), Complex(0, -1), Complex(2.5)):
            assert Complex.parse(value.to_string()) == value

    def test_repr(self):
        """Test debug representation."""
        assert repr(Complex(1, -2)) == "Complex(1-2i)"

    def test_to_tex(self):
        """Test TeX output."""
        assert Complex(1, 2).to_tex() == "1+2i"

    def test_to_python(self):
        """Test conversion to builtin complex."""
        assert Complex(1, 2).to_python() == 1 + 2j
        assert complex(Complex(3, -1)) == 3 - 1j

    def test_is_real(self):
        """Test is_real()."""
        assert Complex(5).is_real()
        assert not Complex(5, 1).is_real()
