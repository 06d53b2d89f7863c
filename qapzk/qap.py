"""
QAP 빌더: R1CS → QAP (Quadratic Arithmetic Program)
===================================================

각 배선 i에 대해 세 다항식 v_i, w_i, y_i를 정의한다.

    v_i(r_k) = A[k][i],   w_i(r_k) = B[k][i],   y_i(r_k) = C[k][i]

witness s로 가중합을 취하면

    V(x) = Σ_i s_i·v_i(x),  W(x) = Σ_i s_i·w_i(x),  Y(x) = Σ_i s_i·y_i(x)

이고, 모든 제약 점 r_k에서 V(r_k)·W(r_k) − Y(r_k) = 0 이므로
P(x) = V(x)·W(x) − Y(x) 는 소거 다항식 T(x) = Π (x − r_k) 로 나누어 떨어진다.

    P(x) = H(x) · T(x)

**점 평가로 H(s) 구하기**:
  P가 T의 배수이므로 T(s) ≠ 0 인 점 s에서는
  H(s) = (V(s)·W(s) − Y(s)) · T(s)⁻¹ 이 성립한다.
  기호적 나눗셈 없이 스칼라 연산만으로 H(s)를 얻는다.

계수 표현(wire_polynomials, quotient_polynomial)도 함께 제공한다.
"""

import logging

from qapzk.errors import ShapeMismatch, SingularEvaluationPoint, WitnessInconsistent
from qapzk.field import ZERO, to_fr, inverse
from qapzk.polynomial import (
    check_distinct,
    lagrange_basis_at,
    interpolate_at,
    vanishing_polynomial_at,
    vanishing_polynomial,
    lagrange_interp,
    add_polys,
    subtract_polys,
    multiply_polys,
    div_polys,
    trim_poly,
)
from qapzk.r1cs import check_witness_shape, unsatisfied_constraints

logger = logging.getLogger(__name__)


class QAP:
    """R1CS 인스턴스와 평가점 집합에서 유도된 QAP 다항식 집합.

    다항식은 계수로 저장하지 않고 "평가점 위 Lagrange 기저 + 행렬 열"로 표현한다.
    인스턴스나 평가점이 바뀌면 build_qap()으로 새로 만든다.

    속성:
        instance: R1CS
        points: 제약마다 하나씩인 서로 다른 평가점 (FR 튜플)
        v_columns, w_columns, y_columns: 배선 i의 열 A[*, i], B[*, i], C[*, i]
    """

    def __init__(self, instance, points):
        self.instance = instance
        self.points = points
        self.v_columns = tuple(instance.column("A", i) for i in range(instance.num_wires))
        self.w_columns = tuple(instance.column("B", i) for i in range(instance.num_wires))
        self.y_columns = tuple(instance.column("C", i) for i in range(instance.num_wires))

    @property
    def num_wires(self):
        return self.instance.num_wires

    @property
    def num_constraints(self):
        return self.instance.num_constraints

    def v_at(self, i, x):
        return interpolate_at(x, self.v_columns[i], self.points)

    def w_at(self, i, x):
        return interpolate_at(x, self.w_columns[i], self.points)

    def y_at(self, i, x):
        return interpolate_at(x, self.y_columns[i], self.points)

    def t_at(self, x):
        return vanishing_polynomial_at(x, self.points)


def build_qap(instance, points):
    """R1CS 인스턴스를 QAP로 변환한다.

    Raises:
        ShapeMismatch: 평가점 개수가 제약 개수와 다를 때
        DegenerateSet: 평가점에 중복이 있을 때
    """
    points = check_distinct(points)
    if len(points) != instance.num_constraints:
        raise ShapeMismatch(
            f"평가점 개수 {len(points)}가 제약 개수 {instance.num_constraints}와 다릅니다"
        )
    logger.debug("QAP 생성: 제약 %d개, 배선 %d개", instance.num_constraints, instance.num_wires)
    return QAP(instance, points)


def _weighted_sum(columns, witness, basis_values):
    # Σ_i s_i · Σ_k M[k][i] · ℓ_k(s)
    total = ZERO
    for s_i, column in zip(witness, columns):
        if s_i == ZERO:
            continue
        wire_value = ZERO
        for m_ki, l_k in zip(column, basis_values):
            wire_value = wire_value + m_ki * l_k
        total = total + s_i * wire_value
    return total


def evaluate_at(qap, witness, s):
    """(V(s), W(s), Y(s)) 를 계산한다.

    Lagrange 기저 값 ℓ_k(s)는 한 번만 계산해 세 행렬 모두에 재사용한다.
    """
    witness = check_witness_shape(qap.instance, witness)
    basis_values = lagrange_basis_at(s, qap.points)
    v_at_s = _weighted_sum(qap.v_columns, witness, basis_values)
    w_at_s = _weighted_sum(qap.w_columns, witness, basis_values)
    y_at_s = _weighted_sum(qap.y_columns, witness, basis_values)
    return v_at_s, w_at_s, y_at_s


def compute_quotient_at(v_at_s, w_at_s, y_at_s, s, points, instance=None, witness=None):
    """H(s) = (V(s)·W(s) − Y(s)) · T(s)⁻¹.

    instance와 witness가 함께 주어지면 평문 R1CS 검사를 먼저 수행한다.
    이 검사는 평문 witness가 필요하므로 운영 환경에서는 config.WITNESS_CHECK로 끈다.

    Raises:
        SingularEvaluationPoint: s가 평가점 중 하나여서 T(s) = 0 일 때
        WitnessInconsistent: 평문 검사에서 만족하지 않는 제약이 발견될 때
    """
    if instance is not None and witness is not None:
        failed = unsatisfied_constraints(instance, witness)
        if failed:
            raise WitnessInconsistent(f"witness가 제약 {failed}을(를) 만족하지 않습니다")

    t_at_s = vanishing_polynomial_at(s, points)
    if t_at_s == ZERO:
        raise SingularEvaluationPoint(
            f"비밀 평가점 s={to_fr(s).n}이(가) 제약 평가점과 겹칩니다"
        )
    numerator = to_fr(v_at_s) * to_fr(w_at_s) - to_fr(y_at_s)
    return numerator * inverse(t_at_s)


# ─────────────────────────────────────────────────────────────────────
# 계수 표현
# ─────────────────────────────────────────────────────────────────────

def wire_polynomials(qap):
    """배선별 QAP 다항식의 계수 (v, w, y). 각각 num_wires개의 계수 리스트."""
    v = [lagrange_interp(col, qap.points) for col in qap.v_columns]
    w = [lagrange_interp(col, qap.points) for col in qap.w_columns]
    y = [lagrange_interp(col, qap.points) for col in qap.y_columns]
    return v, w, y


def solution_polynomials(qap, witness):
    """witness 가중합 V(x), W(x), Y(x)의 계수."""
    witness = check_witness_shape(qap.instance, witness)
    v, w, y = wire_polynomials(qap)

    def combine(polys):
        o = []
        for s_i, poly in zip(witness, polys):
            o = add_polys(o, multiply_polys([s_i], poly))
        return trim_poly(o)

    return combine(v), combine(w), combine(y)


def solution_polynomial(qap, witness):
    """P(x) = V(x)·W(x) − Y(x)."""
    v, w, y = solution_polynomials(qap, witness)
    return trim_poly(subtract_polys(multiply_polys(v, w), y))


def quotient_polynomial(qap, witness):
    """H(x) = P(x) / T(x).

    나머지를 버리지 않는다.

    Raises:
        WitnessInconsistent: 나머지가 0이 아닐 때
    """
    quotient, remainder = div_polys(solution_polynomial(qap, witness), vanishing_polynomial(qap.points))
    if remainder:
        raise WitnessInconsistent("P(x)가 T(x)로 나누어 떨어지지 않습니다 (나머지 ≠ 0)")
    return quotient
