import random

import pytest

from qapzk.errors import DegenerateSet, NotInvertible, ShapeMismatch
from qapzk.field import FR, ZERO, ONE, CURVE_ORDER, inverse
from qapzk.polynomial import (
    check_distinct,
    basis_polynomial,
    lagrange_basis_at,
    interpolate_at,
    vanishing_polynomial_at,
    trim_poly,
    multiply_polys,
    add_polys,
    subtract_polys,
    div_polys,
    eval_poly,
    vanishing_polynomial,
    lagrange_interp,
)

POINTS = [FR(3), FR(7)]


class TestCheckDistinct:
    def test_distinct(self):
        assert check_distinct([1, 2, 3]) == (FR(1), FR(2), FR(3))

    def test_duplicate(self):
        with pytest.raises(DegenerateSet):
            check_distinct([FR(3), FR(5), FR(3)])

    def test_duplicate_after_reduction(self):
        with pytest.raises(DegenerateSet):
            check_distinct([1, CURVE_ORDER + 1])


class TestBasisPolynomial:
    def test_kronecker_delta(self):
        points = [FR(2), FR(5), FR(11), FR(13)]
        for j in range(len(points)):
            l_j = basis_polynomial(points, j)
            for k, r_k in enumerate(points):
                assert l_j(r_k) == (ONE if j == k else ZERO)

    def test_two_point_values(self):
        # ℓ_0(x) = (x-7)/(3-7), ℓ_1(x) = (x-3)/(7-3)
        assert basis_polynomial(POINTS, 0)(27) == FR(-5)
        assert basis_polynomial(POINTS, 1)(27) == FR(6)

    def test_degenerate(self):
        with pytest.raises(DegenerateSet):
            basis_polynomial([FR(3), FR(3)], 0)

    def test_index_out_of_range(self):
        with pytest.raises(IndexError):
            basis_polynomial(POINTS, 2)

    def test_caller_mutation_does_not_leak(self):
        points = [FR(3), FR(7)]
        l_0 = basis_polynomial(points, 0)
        points[1] = FR(100)
        assert l_0(FR(7)) == ZERO

    def test_partition_of_unity(self):
        points = [FR(1), FR(4), FR(9)]
        total = sum(lagrange_basis_at(FR(12345), points), ZERO)
        assert total == ONE


class TestInterpolateAt:
    def test_round_trip(self):
        rng = random.Random(7)
        points = [FR(rng.randrange(CURVE_ORDER)) for _ in range(6)]
        coeffs = [FR(rng.randrange(CURVE_ORDER)) for _ in range(6)]
        for j, r_j in enumerate(points):
            assert interpolate_at(r_j, coeffs, points) == coeffs[j]

    def test_matches_coefficient_form(self):
        points = [FR(2), FR(5), FR(8)]
        values = [FR(10), FR(-3), FR(7)]
        poly = lagrange_interp(values, points)
        x = FR(1000)
        assert interpolate_at(x, values, points) == eval_poly(poly, x)

    def test_length_mismatch(self):
        with pytest.raises(ShapeMismatch):
            interpolate_at(FR(1), [FR(1)], POINTS)

    def test_length_mismatch_is_value_error(self):
        with pytest.raises(ValueError):
            lagrange_interp([FR(1), FR(2), FR(3)], POINTS)

    def test_lagrange_interp_length_mismatch(self):
        with pytest.raises(ShapeMismatch):
            lagrange_interp([FR(1)], POINTS)

    def test_degenerate(self):
        with pytest.raises(DegenerateSet):
            interpolate_at(FR(1), [FR(1), FR(2)], [FR(4), FR(4)])


class TestVanishingPolynomialAt:
    def test_value(self):
        # (4-3)(4-7) = -3
        assert vanishing_polynomial_at(FR(4), POINTS) == FR(-3)

    def test_roots(self):
        for r in POINTS:
            assert vanishing_polynomial_at(r, POINTS) == ZERO

    def test_matches_coefficients(self):
        t = vanishing_polynomial(POINTS)
        assert t == [FR(21), FR(-10), FR(1)]
        assert eval_poly(t, FR(27)) == vanishing_polynomial_at(FR(27), POINTS)

    def test_monic_degree(self):
        points = [FR(i) for i in range(1, 6)]
        t = vanishing_polynomial(points)
        assert len(t) - 1 == len(points)
        assert t[-1] == ONE


class TestCoefficientForm:
    def test_multiply_polys(self):
        # (1 + x)^2 = 1 + 2x + x^2
        assert multiply_polys([FR(1), FR(1)], [FR(1), FR(1)]) == [FR(1), FR(2), FR(1)]

    def test_add_polys(self):
        assert add_polys([FR(1), FR(2)], [FR(3), FR(4), FR(5)]) == [FR(4), FR(6), FR(5)]

    def test_subtract_polys(self):
        assert subtract_polys([FR(5), FR(3)], [FR(1), FR(1)]) == [FR(4), FR(2)]

    def test_trim(self):
        assert trim_poly([FR(1), FR(0), FR(0)]) == [FR(1)]
        assert trim_poly([FR(0)]) == []

    def test_div_polys_exact(self):
        # (x^2 - 1) / (x - 1) = x + 1
        q, r = div_polys([FR(-1), FR(0), FR(1)], [FR(-1), FR(1)])
        assert q == [FR(1), FR(1)]
        assert r == []

    def test_div_polys_remainder(self):
        # (x^2 + 1) / (x - 1) = (x + 1) ... 2
        q, r = div_polys([FR(1), FR(0), FR(1)], [FR(-1), FR(1)])
        assert q == [FR(1), FR(1)]
        assert r == [FR(2)]

    def test_div_polys_non_monic(self):
        # (2x^2 + 4x) / (2x) = x + 2
        q, r = div_polys([FR(0), FR(4), FR(2)], [FR(0), FR(2)])
        assert q == [FR(2), FR(1)]
        assert r == []

    def test_div_by_zero_poly(self):
        with pytest.raises(NotInvertible):
            div_polys([FR(1), FR(1)], [FR(0)])

    def test_eval_poly(self):
        # 3 + 2x at x=4 => 11
        assert eval_poly([FR(3), FR(2)], FR(4)) == FR(11)

    def test_lagrange_interp_values(self):
        points = [FR(3), FR(7)]
        poly = lagrange_interp([FR(12), FR(1)], points)
        # V(x) = (81 - 11x) / 4
        inv4 = inverse(FR(4))
        assert poly == [FR(81) * inv4, FR(-11) * inv4]
