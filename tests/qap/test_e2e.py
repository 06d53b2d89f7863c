"""
QAP 파이프라인 E2E 테스트
=========================

R1CS + witness → QAP → s에서 평가 → 커밋먼트 → 페어링 검증

테스트 범위:
  - 완전성(completeness): 올바른 witness는 임의의 (g1, g2, s)에서 통과
  - 음성 시나리오: 출력값 13 → 14 는 증명 생성 단계에서 차단
  - 건전성 탐침(soundness probe): 나머지를 버린 몫 다항식으로 만든 증명은 거절
"""

import random

import pytest

from qapzk.errors import WitnessInconsistent
from qapzk.field import FR, CURVE_ORDER
from qapzk.polynomial import eval_poly, div_polys, vanishing_polynomial, vanishing_polynomial_at
from qapzk.qap import build_qap, evaluate_at, solution_polynomial
from qapzk.commitment import commit_qap
from qapzk.setup import sample_setup
from qapzk.prover import prove, prove_and_verify
from qapzk.r1cs import satisfies_in_the_clear
from qapzk.verifier import verify


def _forged_bundle(qap, witness, setup):
    """witness 검사를 건너뛰고, 나머지를 버린 몫 H(x)로 만든 증명.

    H(x)는 s와 무관하게 정해지므로 P(s) ≠ H(s)·T(s) 가 된다.
    """
    quotient, remainder = div_polys(solution_polynomial(qap, witness), vanishing_polynomial(qap.points))
    assert remainder, "witness must be inconsistent"
    v, w, y = evaluate_at(qap, witness, setup.s)
    t = vanishing_polynomial_at(setup.s, qap.points)
    h = eval_poly(quotient, setup.s)
    return commit_qap(v, w, y, t, h, setup.g1, setup.g2)


class TestConcreteScenario:
    def test_satisfied_in_the_clear(self, toy_data):
        assert satisfies_in_the_clear(toy_data["instance"], toy_data["witness"]) is True

    def test_verify_with_sampled_setup(self, toy_data):
        d = toy_data
        setup = sample_setup(d["points"], rng=random.Random(35))
        assert int(setup.s) not in (3, 7)
        ok, _ = prove_and_verify(d["instance"], d["witness"], d["points"], setup,
                                      check_witness=True)
        assert ok is True

    def test_prove_is_deterministic(self, toy_data, toy_setup, pipeline_data):
        d = toy_data
        bundle = prove(d["instance"], d["witness"], d["points"], toy_setup, check_witness=True)
        assert bundle == pipeline_data["bundle"]


class TestNegativeScenario:
    def test_not_satisfied_in_the_clear(self, toy_data, bad_witness):
        assert satisfies_in_the_clear(toy_data["instance"], bad_witness) is False

    def test_construction_fails(self, toy_data, toy_setup, bad_witness):
        d = toy_data
        with pytest.raises(WitnessInconsistent):
            prove(d["instance"], bad_witness, d["points"], toy_setup, check_witness=True)


class TestSoundnessProbe:
    def test_field_identity_fails_for_random_s(self, toy_data, bad_witness):
        """나머지 R(x) ≠ 0 이므로 R(s) = 0 인 s는 거의 없다."""
        qap = build_qap(toy_data["instance"], toy_data["points"])
        p = solution_polynomial(qap, bad_witness)
        t = vanishing_polynomial(qap.points)
        quotient, _ = div_polys(p, t)

        rng = random.Random(99)
        trials = 200
        rejected = 0
        for _ in range(trials):
            s = FR(rng.randrange(8, CURVE_ORDER))
            if eval_poly(p, s) != eval_poly(quotient, s) * eval_poly(t, s):
                rejected += 1
        assert rejected == trials

    @pytest.mark.parametrize("seed", [1, 2])
    def test_pairing_rejects_forged_bundle(self, toy_data, bad_witness, seed):
        qap = build_qap(toy_data["instance"], toy_data["points"])
        setup = sample_setup(toy_data["points"], rng=random.Random(seed))
        bundle = _forged_bundle(qap, bad_witness, setup)
        assert verify(bundle, setup.g1) is False
