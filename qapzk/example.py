"""
예제 회로: f(x1, x2, x3, x4) = 4·x1·x2 − 7·x2 + 3·x4
====================================================

두 개의 곱셈 제약으로 평탄화한다.

    x3  = (4·x1) · x2
    out = 1 · (x3 − 7·x2 + 3·x4)

witness = [1, x1, x2, x3, x4, out] = [1, 3, 2, 24, 1, 13]
평가점   = {r1 = 3, r2 = 7}
"""

from qapzk.field import FR, to_fr
from qapzk.r1cs import R1CS

TOY_A = [
    [0, 4, 0, 0, 0, 0],
    [1, 0, 0, 0, 0, 0],
]

TOY_B = [
    [0, 0, 1, 0, 0, 0],
    [0, 0, -7, 1, 3, 0],
]

TOY_C = [
    [0, 0, 0, 1, 0, 0],
    [0, 0, 0, 0, 0, 1],
]

TOY_WITNESS = [1, 3, 2, 24, 1, 13]

TOY_POINTS = [3, 7]


def toy_circuit():
    """(instance, witness, points)."""
    instance = R1CS(TOY_A, TOY_B, TOY_C)
    witness = [FR(v) for v in TOY_WITNESS]
    points = [FR(r) for r in TOY_POINTS]
    return instance, witness, points


def compute_witness(x1, x2, x4):
    """입력에서 중간값 x3와 출력을 계산해 witness 벡터를 만든다."""
    x1, x2, x4 = to_fr(x1), to_fr(x2), to_fr(x4)
    x3 = FR(4) * x1 * x2
    out = x3 - FR(7) * x2 + FR(3) * x4
    return [FR(1), x1, x2, x3, x4, out]
