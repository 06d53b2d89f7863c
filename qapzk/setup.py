"""
설정(setup) 협력자: 생성자와 비밀 평가점
========================================

실제 시스템에서는 신뢰 설정(trusted setup)이 g1, g2, s를 뽑고 s를 폐기한다.
여기서는 그 계약만 흉내 낸다.

  - g1 = k1·G1, g2 = k2·G2  (k1, k2는 0이 아닌 무작위 스칼라)
  - s ∉ {r_1, ..., r_m}       (T(s) ≠ 0 이 되도록 다시 뽑는다)

난수원은 인자로 주입한다. 테스트는 random.Random(seed)를 넘겨 결정론적으로 만들고,
기본값은 secrets.SystemRandom()이다.

사용 예시:
    >>> setup = sample_setup([FR(3), FR(7)], rng=random.Random(42))
    >>> setup.s not in (3, 7)   # True
"""

import secrets
from collections import namedtuple

from py_ecc import bn128

from qapzk.errors import SingularEvaluationPoint
from qapzk.field import CURVE_ORDER, FR, to_fr
from qapzk.polynomial import check_distinct

Setup = namedtuple("Setup", ["g1", "g2", "s"])


def sample_scalar(rng):
    """[1, p) 범위의 0이 아닌 스칼라."""
    return FR(rng.randrange(1, CURVE_ORDER))


def sample_secret_point(points, rng):
    """평가점과 겹치지 않는 s를 뽑는다."""
    excluded = {p.n for p in check_distinct(points)}
    while True:
        s = FR(rng.randrange(0, CURVE_ORDER))
        if s.n not in excluded:
            return s


def setup_from_scalars(k1, k2, s, points):
    """고정된 스칼라로 Setup을 만든다.

    Raises:
        SingularEvaluationPoint: s가 평가점 중 하나일 때
        ValueError: k1 또는 k2가 0일 때 (생성자가 무한원점이 됨)
    """
    k1, k2, s = to_fr(k1), to_fr(k2), to_fr(s)
    if k1 == 0 or k2 == 0:
        raise ValueError("생성자 스칼라는 0이 아니어야 합니다")
    if s.n in {p.n for p in check_distinct(points)}:
        raise SingularEvaluationPoint(f"s={s.n}이(가) 제약 평가점과 겹칩니다")
    return Setup(
        g1=bn128.multiply(bn128.G1, k1.n),
        g2=bn128.multiply(bn128.G2, k2.n),
        s=s,
    )


def sample_setup(points, rng=None):
    if rng is None:
        rng = secrets.SystemRandom()
    k1 = sample_scalar(rng)
    k2 = sample_scalar(rng)
    s = sample_secret_point(points, rng)
    return setup_from_scalars(k1, k2, s, points)
