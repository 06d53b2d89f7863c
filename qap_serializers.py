"""
QAP 데이터 직렬화/역직렬화 헬퍼
==============================

TinyDB와 JSON 응답에 저장 가능한 형태로 QAP 객체를 변환한다.
FR, G1, G2, GT, R1CS 행렬, Setup, ProofBundle.
"""

from py_ecc import bn128
from py_ecc.fields import bn128_FQ as FQ

from qapzk.errors import ShapeMismatch
from qapzk.field import FR
from qapzk.r1cs import R1CS
from qapzk.setup import Setup
from qapzk.commitment import ProofBundle


# ─── FR ───

def serialize_fr(val):
    """FR → str(int)"""
    return str(int(val))


def parse_int(value):
    """JSON 정수 또는 10진수 문자열 → int. float, bool 등은 ShapeMismatch."""
    if isinstance(value, bool):
        raise ShapeMismatch(f"정수가 아닌 값입니다: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError:
            raise ShapeMismatch(f"10진수 정수 문자열이 아닙니다: {value!r}")
    raise ShapeMismatch(f"정수가 아닌 값입니다: {value!r}")


def deserialize_fr(s):
    """str(int) 또는 int → FR (음수는 환원됨)"""
    return FR(parse_int(s))


def serialize_fr_list(vals):
    return [serialize_fr(v) for v in vals]


def deserialize_fr_list(data):
    if not isinstance(data, list):
        raise ShapeMismatch(f"리스트가 아닙니다: {data!r}")
    return [deserialize_fr(s) for s in data]


# ─── G1 point ───

def serialize_g1(point):
    """G1 point → [str, str] or None"""
    if point is None:
        return None
    return [str(int(point[0])), str(int(point[1]))]


def deserialize_g1(data):
    """[str, str] or None → G1 point"""
    if data is None:
        return None
    x, y = data
    return (FQ(parse_int(x)), FQ(parse_int(y)))


# ─── G2 point ───

def serialize_g2(point):
    """G2 point → [[str,str],[str,str]] or None"""
    if point is None:
        return None
    return [
        [str(int(point[0].coeffs[0])), str(int(point[0].coeffs[1]))],
        [str(int(point[1].coeffs[0])), str(int(point[1].coeffs[1]))]
    ]


def deserialize_g2(data):
    """[[str,str],[str,str]] or None → G2 point"""
    if data is None:
        return None
    (x0, x1), (y0, y1) = data
    return (
        bn128.FQ2([parse_int(x0), parse_int(x1)]),
        bn128.FQ2([parse_int(y0), parse_int(y1)])
    )


# ─── GT element ───

def serialize_gt(element):
    """FQ12 → list of 12 str (계수)"""
    return [str(int(c)) for c in element.coeffs]


# ─── R1CS ───

def serialize_matrix(matrix):
    return [serialize_fr_list(row) for row in matrix]


def serialize_r1cs(instance):
    return {
        "A": serialize_matrix(instance.A),
        "B": serialize_matrix(instance.B),
        "C": serialize_matrix(instance.C),
    }


def deserialize_r1cs(data):
    """{"A": [[...]], "B": ..., "C": ...} → R1CS (ShapeMismatch 가능)"""
    return R1CS(
        [[parse_int(v) for v in row] for row in data["A"]],
        [[parse_int(v) for v in row] for row in data["B"]],
        [[parse_int(v) for v in row] for row in data["C"]],
    )


# ─── Setup ───

def serialize_setup(setup):
    return {
        "g1": serialize_g1(setup.g1),
        "g2": serialize_g2(setup.g2),
        "s": serialize_fr(setup.s),
    }


def deserialize_setup(data):
    return Setup(
        g1=deserialize_g1(data["g1"]),
        g2=deserialize_g2(data["g2"]),
        s=deserialize_fr(data["s"]),
    )


# ─── ProofBundle ───

def serialize_bundle(bundle):
    return {
        "e_v": serialize_g1(bundle.e_v),
        "e_w": serialize_g2(bundle.e_w),
        "e_y": serialize_g2(bundle.e_y),
        "e_t": serialize_g1(bundle.e_t),
        "e_h": serialize_g2(bundle.e_h),
    }


def deserialize_bundle(data):
    """JSON → ProofBundle. 키 누락이나 좌표 형식 오류는 ShapeMismatch."""
    try:
        return ProofBundle(
            e_v=deserialize_g1(data["e_v"]),
            e_w=deserialize_g2(data["e_w"]),
            e_y=deserialize_g2(data["e_y"]),
            e_t=deserialize_g1(data["e_t"]),
            e_h=deserialize_g2(data["e_h"]),
        )
    except ShapeMismatch:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise ShapeMismatch(f"ProofBundle 형식이 잘못되었습니다: {e!r}")


# ─── 축약 표시 ───

def fr_short(val, length=10):
    s = str(int(val))
    if len(s) <= length:
        return s
    return s[:length] + "..."


def g1_short(point):
    if point is None:
        return "O (무한원점)"
    return f"({fr_short(point[0])}, {fr_short(point[1])})"
