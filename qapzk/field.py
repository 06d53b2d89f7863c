"""
QAP 엔진 기반 모듈: 유한체(Finite Field) FR
===========================================

bn128 곡선의 스칼라 필드 위에서의 모듈러 산술을 제공한다.
G1, G2, GT 세 그룹이 모두 같은 소수 위수 p를 가지므로
다항식 평가값을 그대로 스칼라로 사용해 커밋할 수 있다.

**불변식**:
  모든 결과는 [0, p) 범위로 환원된다. 음수 정수는 p를 더해 환원된다.
  예: to_fr(-7) == FR(p - 7)

**주의**:
  py_ecc의 FQ 나눗셈은 0의 역원을 조용히 0으로 돌려준다.
  엔진 내부에서는 "/" 대신 항상 inverse()를 사용해 NotInvertible을 받는다.

사용 예시:
    >>> from qapzk.field import FR, inverse
    >>> FR(3) * inverse(FR(3))   # FR(1)
"""

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128

from qapzk.errors import NotInvertible


class FR(FQ):
    """bn128 스칼라 필드 원소. py_ecc FQ의 +, -, *, ** 연산을 그대로 쓴다."""
    field_modulus = bn128.curve_order


CURVE_ORDER = bn128.curve_order

ZERO = FR(0)
ONE = FR(1)


def to_fr(value):
    """int 또는 필드 원소를 FR로 환원한다."""
    if isinstance(value, FR):
        return value
    if isinstance(value, FQ):
        return FR(value.n)
    return FR(value)


def add(a, b):
    return to_fr(a) + to_fr(b)


def sub(a, b):
    return to_fr(a) - to_fr(b)


def mul(a, b):
    return to_fr(a) * to_fr(b)


def neg(a):
    return ZERO - to_fr(a)


def inverse(a):
    """모듈러 역원 a⁻¹ (페르마 소정리: a^(p-2)).

    Raises:
        NotInvertible: a ≡ 0 (mod p)
    """
    a = to_fr(a)
    if a == ZERO:
        raise NotInvertible("0은 역원이 없습니다")
    return a ** (CURVE_ORDER - 2)


def dot(row, vector):
    """내적 Σ row_i · vector_i."""
    result = ZERO
    for r, v in zip(row, vector):
        result = result + to_fr(r) * to_fr(v)
    return result
