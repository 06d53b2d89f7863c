"""
QAP Flask Blueprint — R1CS → QAP → 커밋먼트 → 페어링 검증
=========================================================

모든 엔드포인트는 JSON을 반환한다. 단계별 결과는 TinyDB에 저장한다.

  POST /qap/r1cs                R1CS 행렬과 평가점 저장
  POST /qap/r1cs/load-example   예제 회로 로드
  POST /qap/witness             witness 저장
  POST /qap/r1cs/check          평문 R1CS 만족 검사
  POST /qap/setup               g1, g2, s 샘플링 (seed 선택)
  POST /qap/evaluate            V(s), W(s), Y(s), T(s), H(s)
  POST /qap/proof               ProofBundle 생성
  POST /qap/verify              페어링 검증
  GET  /qap/state               저장된 상태
  POST /qap/reset               상태 초기화
"""

import logging
import random

from flask import Blueprint, jsonify, request
from tinydb import Query

from qapzk.errors import QAPError, ShapeMismatch
from qapzk.example import toy_circuit
from qapzk.r1cs import satisfies_in_the_clear, unsatisfied_constraints
from qapzk.setup import sample_setup
from qapzk.qap import build_qap
from qapzk.prover import evaluate_all
from qapzk.commitment import commit_qap
from qapzk.verifier import verify_result

from qap_serializers import (
    serialize_fr,
    serialize_fr_list, deserialize_fr_list,
    serialize_gt,
    serialize_r1cs, deserialize_r1cs,
    serialize_setup, deserialize_setup,
    serialize_bundle, deserialize_bundle,
    fr_short, g1_short,
)

logger = logging.getLogger(__name__)

qap_bp = Blueprint('qap', __name__, url_prefix='/qap')

DATA = Query()

# DB는 app.py에서 주입
DB = None


def init_qap_bp(db):
    """app.py에서 DB를 주입받는다."""
    global DB
    DB = db


# ─── DB 헬퍼 ───

def db_get(key):
    """DB에서 키로 데이터를 조회한다."""
    result = DB.search(DATA.type == key)
    if not result:
        return None
    return result[0].get("data")


def db_set(key, data):
    """DB에 키로 데이터를 저장한다."""
    DB.upsert({"type": key, "data": data}, DATA.type == key)


def db_remove_prefix(prefix):
    """prefix로 시작하는 모든 키를 삭제한다."""
    DB.remove(DATA.type.test(lambda t: t.startswith(prefix)))


class MissingState(Exception):
    """이전 단계의 결과가 DB에 없다."""


def require(key):
    data = db_get(key)
    if data is None:
        raise MissingState(key)
    return data


@qap_bp.errorhandler(QAPError)
def handle_qap_error(err):
    return jsonify({"error": err.kind, "message": str(err)}), 400


@qap_bp.errorhandler(MissingState)
def handle_missing_state(err):
    return jsonify({"error": "MissingState", "message": f"{err.args[0]} 단계가 먼저 필요합니다"}), 409


def gt_short(element):
    # 곡선 밖의 점으로 거절된 경우 None
    if element is None:
        return None
    return [fr_short(c) for c in serialize_gt(element)]


def load_r1cs():
    r1cs = require("qap.r1cs")
    return deserialize_r1cs(r1cs), deserialize_fr_list(require("qap.points"))


# ──────────────────────────────────────────────────────────────
# R1CS
# ──────────────────────────────────────────────────────────────

@qap_bp.route("/r1cs", methods=["POST"])
def save_r1cs():
    """R1CS 행렬 A, B, C와 평가점을 저장한다. 이후 단계 결과는 지운다."""
    body = request.get_json(force=True)
    try:
        instance = deserialize_r1cs(body)
        points = deserialize_fr_list(body["points"])
    except QAPError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise ShapeMismatch(f"R1CS 입력 형식이 잘못되었습니다: {e}")
    # 평가점 개수와 중복 검사 (ShapeMismatch, DegenerateSet)
    build_qap(instance, points)

    db_remove_prefix("qap.")
    db_set("qap.r1cs", serialize_r1cs(instance))
    db_set("qap.points", serialize_fr_list(points))
    return jsonify({
        "num_constraints": instance.num_constraints,
        "num_wires": instance.num_wires,
    })


@qap_bp.route("/r1cs/load-example", methods=["POST"])
def load_example():
    """4·x1·x2 − 7·x2 + 3·x4 예제 회로와 witness를 로드한다."""
    instance, witness, points = toy_circuit()
    db_remove_prefix("qap.")
    db_set("qap.r1cs", serialize_r1cs(instance))
    db_set("qap.points", serialize_fr_list(points))
    db_set("qap.witness", serialize_fr_list(witness))
    return jsonify({
        "r1cs": serialize_r1cs(instance),
        "points": serialize_fr_list(points),
        "witness": serialize_fr_list(witness),
    })


@qap_bp.route("/witness", methods=["POST"])
def save_witness():
    body = request.get_json(force=True)
    instance, _ = load_r1cs()
    try:
        witness = deserialize_fr_list(body["witness"])
    except (KeyError, TypeError, ValueError) as e:
        raise ShapeMismatch(f"witness 입력 형식이 잘못되었습니다: {e}")
    if len(witness) != instance.num_wires:
        raise ShapeMismatch(
            f"witness 길이 {len(witness)}가 배선 수 {instance.num_wires}와 다릅니다"
        )
    db_remove_prefix("qap.proof")
    db_set("qap.witness", serialize_fr_list(witness))
    return jsonify({"witness": serialize_fr_list(witness)})


@qap_bp.route("/r1cs/check", methods=["POST"])
def check_r1cs():
    """평문 검사. witness를 그대로 사용하므로 디버깅 용도이다."""
    instance, _ = load_r1cs()
    witness = deserialize_fr_list(require("qap.witness"))
    ok = satisfies_in_the_clear(instance, witness)
    failed = [] if ok else unsatisfied_constraints(instance, witness)
    return jsonify({"satisfied": ok, "failed_constraints": failed})


# ──────────────────────────────────────────────────────────────
# Setup
# ──────────────────────────────────────────────────────────────

@qap_bp.route("/setup", methods=["POST"])
def run_setup():
    body = request.get_json(silent=True) or {}
    _, points = load_r1cs()
    seed = body.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, (int, str))):
        raise ShapeMismatch(f"seed는 정수나 문자열이어야 합니다: {seed!r}")
    rng = random.Random(seed) if seed is not None else None
    setup = sample_setup(points, rng=rng)
    logger.info("setup 샘플링 완료 (seed 지정: %s)", seed is not None)
    db_remove_prefix("qap.proof")
    db_set("qap.setup", serialize_setup(setup))
    # s는 setup 협력자가 보관한다. 응답에는 생성자만 노출한다.
    return jsonify({"g1": g1_short(setup.g1), "seeded": seed is not None})


# ──────────────────────────────────────────────────────────────
# Proving
# ──────────────────────────────────────────────────────────────

def _evaluate():
    instance, points = load_r1cs()
    witness = deserialize_fr_list(require("qap.witness"))
    setup = deserialize_setup(require("qap.setup"))
    values = evaluate_all(instance, witness, points, setup.s)
    return setup, values


@qap_bp.route("/evaluate", methods=["POST"])
def evaluate():
    _, values = _evaluate()
    names = ["v", "w", "y", "t", "h"]
    return jsonify({name: serialize_fr(val) for name, val in zip(names, values)})


@qap_bp.route("/proof", methods=["POST"])
def generate_proof():
    setup, values = _evaluate()
    bundle = commit_qap(*values, setup.g1, setup.g2)
    data = serialize_bundle(bundle)
    db_set("qap.proof.bundle", data)
    return jsonify(data)


# ──────────────────────────────────────────────────────────────
# Verifying
# ──────────────────────────────────────────────────────────────

@qap_bp.route("/verify", methods=["POST"])
def verify_proof():
    body = request.get_json(silent=True) or {}
    setup = deserialize_setup(require("qap.setup"))
    if "bundle" in body:
        bundle = deserialize_bundle(body["bundle"])
    else:
        bundle = deserialize_bundle(require("qap.proof.bundle"))

    verify_data = verify_result(bundle, setup.g1)
    db_set("qap.proof.result", verify_data["result"])
    return jsonify({
        "verified": verify_data["result"],
        "lhs": gt_short(verify_data["lhs"]),
        "rhs": gt_short(verify_data["rhs"]),
    })


# ──────────────────────────────────────────────────────────────
# State
# ──────────────────────────────────────────────────────────────

@qap_bp.route("/state")
def state():
    return jsonify({
        "r1cs": db_get("qap.r1cs"),
        "points": db_get("qap.points"),
        "has_witness": db_get("qap.witness") is not None,
        "has_setup": db_get("qap.setup") is not None,
        "bundle": db_get("qap.proof.bundle"),
        "verified": db_get("qap.proof.result"),
    })


@qap_bp.route("/reset", methods=["POST"])
def reset():
    db_remove_prefix("qap.")
    return jsonify({"reset": True})
