"""
R1CS (Rank-1 Constraint System) 모델
====================================

회로를 세 행렬 A, B, C로 표현한다. 행(row)은 제약(constraint), 열(column)은 배선(wire)이다.

  각 제약 k에 대해:  (A_k · s) · (B_k · s) = (C_k · s)

s는 witness 벡터이고 s[0]은 상수 배선 1로 고정된다.

**예제** f(x1, x2, x3, x4) = 4·x1·x2 − 7·x2 + 3·x4,
witness s = [1, x1, x2, x3, x4, out] = [1, 3, 2, 24, 1, 13]:

  | 제약 | A·s      | B·s                 | C·s      |
  |------|----------|---------------------|----------|
  | 0    | 4·x1 = 12| x2 = 2              | x3 = 24  |
  | 1    | 1        | x3 − 7·x2 + 3·x4 =13| out = 13 |

satisfies_in_the_clear()는 witness를 그대로 들여다보는 디버깅용 검사이다.
영지식 검증 경로에서 사용하면 안 된다.
"""

from qapzk.errors import ShapeMismatch, WitnessInconsistent
from qapzk.field import ONE, to_fr, dot


class R1CS:
    """A, B, C 세 행렬 (num_constraints × num_wires). 생성 후 변경하지 않는다."""

    def __init__(self, A, B, C):
        self.A = self._to_matrix(A, "A")
        self.B = self._to_matrix(B, "B")
        self.C = self._to_matrix(C, "C")

        shapes = {name: self._shape(m) for name, m in (("A", self.A), ("B", self.B), ("C", self.C))}
        if len(set(shapes.values())) != 1:
            raise ShapeMismatch(f"R1CS 행렬 크기가 서로 다릅니다: {shapes}")

    @staticmethod
    def _to_matrix(rows, name):
        matrix = tuple(tuple(to_fr(v) for v in row) for row in rows)
        if not matrix or not matrix[0]:
            raise ShapeMismatch(f"행렬 {name}이(가) 비어 있습니다")
        width = len(matrix[0])
        for k, row in enumerate(matrix):
            if len(row) != width:
                raise ShapeMismatch(
                    f"행렬 {name}의 {k}번째 행 길이 {len(row)}가 {width}와 다릅니다"
                )
        return matrix

    @staticmethod
    def _shape(matrix):
        return (len(matrix), len(matrix[0]))

    @property
    def num_constraints(self):
        return len(self.A)

    @property
    def num_wires(self):
        return len(self.A[0])

    def column(self, matrix_name, i):
        """배선 i의 열 [M[0][i], ..., M[m-1][i]] (M = A, B, C 중 하나)."""
        matrix = {"A": self.A, "B": self.B, "C": self.C}[matrix_name]
        return tuple(row[i] for row in matrix)

    def __repr__(self):
        return f"R1CS(num_constraints={self.num_constraints}, num_wires={self.num_wires})"


def check_witness_shape(instance, witness):
    """witness를 FR 튜플로 환원하고 형태를 검사한다.

    Raises:
        ShapeMismatch: 길이가 num_wires와 다를 때
        WitnessInconsistent: 상수 배선 witness[0]이 1이 아닐 때
    """
    witness = tuple(to_fr(v) for v in witness)
    if len(witness) != instance.num_wires:
        raise ShapeMismatch(
            f"witness 길이 {len(witness)}가 배선 수 {instance.num_wires}와 다릅니다"
        )
    if witness[0] != ONE:
        raise WitnessInconsistent("witness[0] (상수 배선)은 1이어야 합니다")
    return witness


def unsatisfied_constraints(instance, witness):
    """(A_k·s)(B_k·s) − (C_k·s) ≠ 0 인 제약 인덱스 목록."""
    witness = check_witness_shape(instance, witness)
    failed = []
    for k in range(instance.num_constraints):
        a = dot(instance.A[k], witness)
        b = dot(instance.B[k], witness)
        c = dot(instance.C[k], witness)
        if a * b - c != 0:
            failed.append(k)
    return failed


def satisfies_in_the_clear(instance, witness):
    """모든 제약에서 (A_k·s)(B_k·s) = (C_k·s) 이면 True.

    상수 배선이 1이 아닌 witness도 만족하지 않는 것으로 본다.
    길이가 맞지 않으면 ShapeMismatch가 그대로 전파된다.
    """
    try:
        return not unsatisfied_constraints(instance, witness)
    except WitnessInconsistent:
        return False
