"""
QAP 엔진: Lagrange 기저 및 다항식 연산
=====================================

**점 평가 (point evaluation)**:
  QAP 검증에 필요한 것은 비밀 평가점 s에서의 값 v_i(s), w_i(s), y_i(s), T(s)뿐이다.
  따라서 다항식의 계수를 만들지 않고 Lagrange 기저를 s에서 바로 평가한다.

    ℓ_j(x) = Π_{k≠j} (x − r_k) / (r_j − r_k)
    p(x)   = Σ_j c_j · ℓ_j(x)          (p(r_j) = c_j)
    T(x)   = Π_k (x − r_k)             (소거 다항식)

**계수 표현 (coefficient form)**:
  [c₀, c₁, c₂, ...] → c₀ + c₁x + c₂x² + ...  (낮은 차수부터)
  몫 다항식 H(x)를 기호적으로 구하거나 QAP 다항식을 직접 보여줄 때 사용한다.

모든 평가점 집합은 서로 다른 점이어야 한다 (DegenerateSet).

사용 예시:
    >>> points = [FR(3), FR(7)]
    >>> interpolate_at(FR(3), [FR(5), FR(9)], points)   # FR(5)
    >>> vanishing_polynomial_at(FR(4), points)          # (4-3)(4-7) = FR(-3)
"""

from qapzk.errors import DegenerateSet, NotInvertible, ShapeMismatch
from qapzk.field import FR, ZERO, ONE, to_fr, inverse


# ─────────────────────────────────────────────────────────────────────
# 평가점 집합
# ─────────────────────────────────────────────────────────────────────

def check_distinct(points):
    """평가점을 FR 튜플로 환원하고 중복이 없는지 확인한다.

    Raises:
        DegenerateSet: 같은 점이 두 번 이상 나타날 때 (p로 환원한 뒤 비교)
    """
    points = tuple(to_fr(p) for p in points)
    seen = set()
    for p in points:
        if p.n in seen:
            raise DegenerateSet(f"평가점 {p.n}이(가) 중복되었습니다")
        seen.add(p.n)
    return points


# ─────────────────────────────────────────────────────────────────────
# Lagrange 기저 (점 평가)
# ─────────────────────────────────────────────────────────────────────

def basis_polynomial(points, j):
    """j번째 Lagrange 기저 함수 ℓ_j(x)를 반환한다.

    분모 Π_{k≠j} (r_j − r_k)의 역원은 한 번만 계산해 클로저에 담는다.
    점 집합은 튜플로 복사되므로 호출자가 원본 리스트를 바꿔도 영향이 없다.

    Args:
        points: 서로 다른 평가점 {r_1, ..., r_m}
        j: 기저 인덱스 (0 ≤ j < m)

    Returns:
        callable: x ↦ ℓ_j(x)

    Raises:
        DegenerateSet: points에 중복이 있을 때
        IndexError: j가 범위를 벗어날 때
    """
    points = check_distinct(points)
    if not 0 <= j < len(points):
        raise IndexError(f"기저 인덱스 {j}가 범위 [0, {len(points)})를 벗어났습니다")

    r_j = points[j]
    others = points[:j] + points[j + 1:]

    denominator = ONE
    for r_k in others:
        denominator = denominator * (r_j - r_k)
    denominator_inv = inverse(denominator)

    def basis(x):
        x = to_fr(x)
        numerator = ONE
        for r_k in others:
            numerator = numerator * (x - r_k)
        return numerator * denominator_inv

    return basis


def lagrange_basis_at(x, points):
    """모든 기저 값 [ℓ_0(x), ..., ℓ_{m-1}(x)]을 한 번에 계산한다."""
    points = check_distinct(points)
    return [basis_polynomial(points, j)(x) for j in range(len(points))]


def interpolate_at(x, coeffs, points):
    """Σ_j coeffs_j · ℓ_j(x) 를 평가한다.

    coeffs_j는 보간 다항식이 r_j에서 가져야 할 값이다.
    R1CS 행렬의 한 열(column)을 넘기면 해당 배선의 QAP 다항식 값이 된다.

    Raises:
        ShapeMismatch: coeffs와 points의 길이가 다를 때
        DegenerateSet: points에 중복이 있을 때
    """
    if len(coeffs) != len(points):
        raise ShapeMismatch(
            f"계수 개수 {len(coeffs)}와 평가점 개수 {len(points)}가 다릅니다"
        )
    result = ZERO
    for c, l_j in zip(coeffs, lagrange_basis_at(x, points)):
        result = result + to_fr(c) * l_j
    return result


def vanishing_polynomial_at(x, points):
    """T(x) = Π_k (x − r_k) 를 보간 없이 직접 평가한다."""
    x = to_fr(x)
    result = ONE
    for r_k in check_distinct(points):
        result = result * (x - r_k)
    return result


# ─────────────────────────────────────────────────────────────────────
# 계수 표현 다항식 연산
# ─────────────────────────────────────────────────────────────────────

def trim_poly(poly):
    """최고차 0 계수를 제거한다. 영 다항식은 []가 된다."""
    o = [to_fr(c) for c in poly]
    while o and o[-1] == ZERO:
        o.pop()
    return o


def multiply_polys(a, b):
    if not a or not b:
        return []
    o = [ZERO] * (len(a) + len(b) - 1)
    for i in range(len(a)):
        for j in range(len(b)):
            o[i + j] += to_fr(a[i]) * to_fr(b[j])
    return o


def add_polys(a, b, subtract=False):
    o = [ZERO] * max(len(a), len(b))
    for i in range(len(a)):
        o[i] += to_fr(a[i])
    for i in range(len(b)):
        o[i] += to_fr(b[i]) * (FR(-1) if subtract else ONE)
    return o


def subtract_polys(a, b):
    return add_polys(a, b, subtract=True)


def div_polys(a, b):
    """a / b 의 몫과 나머지를 반환한다 (둘 다 trim된 계수 리스트).

    Raises:
        NotInvertible: b가 영 다항식일 때
    """
    a = trim_poly(a)
    b = trim_poly(b)
    if not b:
        raise NotInvertible("영 다항식으로 나눌 수 없습니다")

    lead_inv = inverse(b[-1])
    o = [ZERO] * max(len(a) - len(b) + 1, 0)
    remainder = a
    while len(remainder) >= len(b):
        leading_fac = remainder[-1] * lead_inv
        pos = len(remainder) - len(b)
        o[pos] = leading_fac
        remainder = subtract_polys(remainder, multiply_polys(b, [ZERO] * pos + [leading_fac]))[:-1]
        remainder = trim_poly(remainder)
    return trim_poly(o), remainder


def eval_poly(poly, x):
    """Horner 방법으로 p(x)를 평가한다."""
    x = to_fr(x)
    result = ZERO
    for coeff in reversed(poly):
        result = result * x + to_fr(coeff)
    return result


def vanishing_polynomial(points):
    """T(x) = Π (x − r_k) 의 계수. 최고차 계수는 1 (monic), 차수는 len(points)."""
    o = [ONE]
    for r_k in check_distinct(points):
        o = multiply_polys(o, [ZERO - r_k, ONE])
    return o


def lagrange_interp(values, points):
    """p(r_j) = values_j 를 만족하는 차수 < m 의 다항식 계수를 구한다.

    p(x) = Σ_j values_j · T(x) / ((x − r_j) · T'(r_j))
    """
    points = check_distinct(points)
    if len(values) != len(points):
        raise ShapeMismatch(
            f"값 개수 {len(values)}와 평가점 개수 {len(points)}가 다릅니다"
        )
    t = vanishing_polynomial(points)
    o = []
    for j, r_j in enumerate(points):
        value = to_fr(values[j])
        if value == ZERO:
            continue
        numerator, _ = div_polys(t, [ZERO - r_j, ONE])
        denominator = eval_poly(numerator, r_j)
        o = add_polys(o, multiply_polys([value * inverse(denominator)], numerator))
    return trim_poly(o)
