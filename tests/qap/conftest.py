import sys
import os
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from qapzk.field import FR
from qapzk.example import toy_circuit
from qapzk.setup import setup_from_scalars
from qapzk.qap import build_qap, evaluate_at
from qapzk.prover import evaluate_all, prove
from qapzk.verifier import verify_result


# ── 테스트 상수 ──
GENERATOR_K1 = 3926
GENERATOR_K2 = 3604
SECRET_S = 27

# s = 27, 평가점 {3, 7} 에서 손으로 계산한 값
# ℓ_0(27) = (27-7)/(3-7) = -5,  ℓ_1(27) = (27-3)/(7-3) = 6
EXPECTED_V = -54     # 12·ℓ_0 + 1·ℓ_1
EXPECTED_W = 68      # 2·ℓ_0 + 13·ℓ_1
EXPECTED_Y = -42     # 24·ℓ_0 + 13·ℓ_1
EXPECTED_T = 480     # (27-3)(27-7)


@pytest.fixture(scope="session")
def toy_data():
    """예제 회로 (instance, witness, points)."""
    instance, witness, points = toy_circuit()
    return {"instance": instance, "witness": witness, "points": points}


@pytest.fixture(scope="session")
def bad_witness(toy_data):
    """출력값을 13 → 14로 바꾼 witness."""
    witness = list(toy_data["witness"])
    witness[5] = FR(14)
    return witness


@pytest.fixture(scope="session")
def toy_setup(toy_data):
    return setup_from_scalars(GENERATOR_K1, GENERATOR_K2, SECRET_S, toy_data["points"])


@pytest.fixture(scope="session")
def toy_qap(toy_data):
    return build_qap(toy_data["instance"], toy_data["points"])


@pytest.fixture(scope="session")
def pipeline_data(toy_data, toy_setup, toy_qap):
    """s에서의 평가값, ProofBundle, 검증 결과 (페어링은 세션당 한 번)."""
    d = toy_data
    v, w, y = evaluate_at(toy_qap, d["witness"], toy_setup.s)
    values = evaluate_all(d["instance"], d["witness"], d["points"], toy_setup.s,
                          check_witness=True)
    bundle = prove(d["instance"], d["witness"], d["points"], toy_setup, check_witness=True)
    result = verify_result(bundle, toy_setup.g1)
    return {
        "v": v, "w": w, "y": y,
        "values": values,
        "bundle": bundle,
        "verify": result,
    }
