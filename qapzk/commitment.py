"""
커밋먼트 계층: 스칼라 → 그룹 원소
================================

필드 원소 x를 생성자 g에 대한 스칼라 곱 E(x) = x·g 로 커밋한다.
이 인코딩은 덧셈에 대해 준동형이다.

    E(a·x + b·y) = a·E(x) + b·E(y)

**그룹 배정** (검증 페어링이 타입에 맞도록):

  | 항   | 그룹 | 값          |
  |------|------|-------------|
  | E(V) | G1   | V(s)·g1     |
  | E(W) | G2   | W(s)·g2     |
  | E(Y) | G2   | Y(s)·g2     |
  | E(T) | G1   | T(s)·g1     |
  | E(H) | G2   | H(s)·g2     |

py_ecc의 scalar multiplication(double-and-add)은 상수 시간이 아니다.
witness에서 유도된 스칼라가 부채널로 새지 않아야 하는 운영 환경에서는
상수 시간 구현으로 교체해야 한다.

영지식 은닉(hiding)을 위한 무작위화는 하지 않는다. 같은 입력이면 같은 커밋먼트가 나온다.
"""

from collections import namedtuple

from py_ecc import bn128

from qapzk.field import to_fr


# 생성 후 변경 불가. 검증 한 번 동안만 쓰인다.
ProofBundle = namedtuple("ProofBundle", ["e_v", "e_w", "e_y", "e_t", "e_h"])


def commit(generator, scalar):
    """E(scalar) = scalar · generator. 0이면 무한원점(None).

    경고: py_ecc의 double-and-add를 그대로 쓰므로 scalar에 대해 상수 시간이 아니다.
    witness에서 유도된 scalar의 실행 시간이 관측될 수 있는 환경에서는 쓰지 않는다.
    (config.CONSTANT_TIME_COMMIT == False)
    """
    return bn128.multiply(generator, to_fr(scalar).n)


def commit_linear_combination(generator, scalars, weights):
    """Σ weights_i · E(scalars_i) 를 그룹 연산만으로 계산한다.

    준동형성에 의해 commit(generator, Σ weights_i · scalars_i)와 같은 점이다.
    """
    result = None
    for scalar, weight in zip(scalars, weights):
        term = commit(generator, to_fr(scalar) * to_fr(weight))
        result = bn128.add(result, term)
    return result


def commit_qap(v_at_s, w_at_s, y_at_s, t_at_s, h_at_s, g1, g2):
    """평가값 다섯 개를 위 표의 그룹 배정대로 커밋한다."""
    return ProofBundle(
        e_v=commit(g1, v_at_s),
        e_w=commit(g2, w_at_s),
        e_y=commit(g2, y_at_s),
        e_t=commit(g1, t_at_s),
        e_h=commit(g2, h_at_s),
    )
