"""
페어링 검증기
============

QAP 항등식 V(s)·W(s) − Y(s) = H(s)·T(s) 를 커밋먼트만 보고 확인한다.

    e(E(V), E(W)) == e(g1, E(Y)) · e(E(T), E(H))

쌍선형성 e(aP, bQ) = e(P, Q)^(ab) 에 의해 양변은

    e(g1, g2)^(V·W)  ==  e(g1, g2)^(Y + T·H)

가 된다. GT의 곱은 지수(이산로그) 표현에서의 덧셈에 해당한다.

비교는 GT 원소의 정규 바이트 직렬화(serialize_gt)로 한다.
검증은 결정론적이며 재시도하지 않는다. False는 정상적인 "거절" 결과이다.
"""

import logging

from py_ecc import bn128

from qapzk.errors import ProofRejected

logger = logging.getLogger(__name__)

GT_ELEMENT_BYTES = 32


def pair(p1, q2):
    """e(P, Q), P ∈ G1, Q ∈ G2. 어느 한쪽이 무한원점이면 GT 항등원."""
    if p1 is None or q2 is None:
        return bn128.FQ12.one()
    # py_ecc.bn128.pairing의 인자 순서는 (G2, G1)이다.
    return bn128.pairing(q2, p1)


def serialize_gt(element):
    """FQ12 원소의 12개 계수를 32바이트 big-endian으로 이어 붙인 384바이트."""
    return b"".join(int(c).to_bytes(GT_ELEMENT_BYTES, "big") for c in element.coeffs)


def lhs(bundle):
    return pair(bundle.e_v, bundle.e_w)


def rhs(bundle, g1):
    return pair(g1, bundle.e_y) * pair(bundle.e_t, bundle.e_h)


def on_curve(bundle):
    """E(V), E(T)는 G1 곡선 위에, E(W), E(Y), E(H)는 G2 트위스트 곡선 위에 있어야 한다."""
    g1_points = (bundle.e_v, bundle.e_t)
    g2_points = (bundle.e_w, bundle.e_y, bundle.e_h)
    return (all(bn128.is_on_curve(p, bn128.b) for p in g1_points)
            and all(bn128.is_on_curve(p, bn128.b2) for p in g2_points))


def verify_result(bundle, g1):
    """양변과 비교 결과를 함께 반환한다: {"lhs": GT, "rhs": GT, "result": bool}

    곡선 위에 있지 않은 점이 섞인 번들은 페어링 없이 거절한다 (lhs, rhs는 None).
    """
    if not on_curve(bundle):
        logger.info("페어링 검증 결과: 거절 (곡선 밖의 점)")
        return {"lhs": None, "rhs": None, "result": False}
    left = lhs(bundle)
    right = rhs(bundle, g1)
    result = serialize_gt(left) == serialize_gt(right)
    logger.info("페어링 검증 결과: %s", "통과" if result else "거절")
    return {"lhs": left, "rhs": right, "result": result}


def verify(bundle, g1):
    """e(E(V), E(W)) 와 e(g1, E(Y))·e(E(T), E(H)) 의 직렬화가 같으면 True."""
    return verify_result(bundle, g1)["result"]


def require_valid(bundle, g1):
    """verify()가 False이면 ProofRejected를 발생시킨다."""
    if not verify(bundle, g1):
        raise ProofRejected("페어링 항등식이 성립하지 않습니다")
    return True
