"""
증명 파이프라인
==============

  Instance + Witness → QAP → s에서 평가 → 커밋먼트 → (검증)

각 단계는 완전히 성공하거나 예외로 끝난다. 중간 상태나 재시도는 없다.

  ┌──────────────────────────────────────────────────────┐
  │  1. build_qap(instance, points)                      │
  │  2. evaluate_at(qap, witness, s)   → V(s), W(s), Y(s) │
  │  3. T(s), H(s) = (V·W − Y)·T⁻¹                       │
  │  4. commit_qap(...)                → ProofBundle      │
  │  5. verify(bundle, g1)             → bool             │
  └──────────────────────────────────────────────────────┘
"""

import logging

from qapzk import config
from qapzk.commitment import commit_qap
from qapzk.qap import build_qap, evaluate_at, compute_quotient_at
from qapzk.verifier import verify

logger = logging.getLogger(__name__)


def evaluate_all(instance, witness, points, s, check_witness=None):
    """(V(s), W(s), Y(s), T(s), H(s)) 를 계산한다.

    check_witness가 None이면 config.WITNESS_CHECK를 따른다.
    """
    if check_witness is None:
        check_witness = config.WITNESS_CHECK

    qap = build_qap(instance, points)
    v_at_s, w_at_s, y_at_s = evaluate_at(qap, witness, s)
    t_at_s = qap.t_at(s)
    if check_witness:
        h_at_s = compute_quotient_at(v_at_s, w_at_s, y_at_s, s, qap.points,
                                     instance=instance, witness=witness)
    else:
        h_at_s = compute_quotient_at(v_at_s, w_at_s, y_at_s, s, qap.points)
    logger.debug("QAP 평가 완료 (witness 검사: %s)", check_witness)
    return v_at_s, w_at_s, y_at_s, t_at_s, h_at_s


def prove(instance, witness, points, setup, check_witness=None):
    """ProofBundle (E(V), E(W), E(Y), E(T), E(H)) 을 만든다."""
    values = evaluate_all(instance, witness, points, setup.s, check_witness=check_witness)
    bundle = commit_qap(*values, setup.g1, setup.g2)
    logger.debug("커밋먼트 생성 완료")
    return bundle


def prove_and_verify(instance, witness, points, setup, check_witness=None):
    """(검증 결과, ProofBundle)."""
    bundle = prove(instance, witness, points, setup, check_witness=check_witness)
    return verify(bundle, setup.g1), bundle
