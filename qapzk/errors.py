"""QAP 파이프라인 예외 계층."""


class QAPError(Exception):
    """모든 QAP 엔진 예외의 기반 클래스."""

    kind = "QAPError"


class NotInvertible(QAPError, ZeroDivisionError):
    """영(0) 원소의 역원을 요청했다."""

    kind = "NotInvertible"


class SingularEvaluationPoint(QAPError, ZeroDivisionError):
    """비밀 평가점 s가 제약 평가점과 겹쳐 T(s) = 0 이다. s를 다시 뽑아야 한다."""

    kind = "SingularEvaluationPoint"


class DegenerateSet(QAPError, ValueError):
    """평가점 집합에 중복된 점이 있다."""

    kind = "DegenerateSet"


class ShapeMismatch(QAPError, ValueError):
    """R1CS 행렬, witness, 평가점 개수의 차원이 서로 맞지 않는다."""

    kind = "ShapeMismatch"


class WitnessInconsistent(QAPError, ValueError):
    """witness가 R1CS를 만족하지 않는다 (증명 생성 단계에서 차단)."""

    kind = "WitnessInconsistent"


class ProofRejected(QAPError):
    """페어링 항등식이 성립하지 않는다.

    생성 단계의 오류가 아니라 정상적인 "거절" 결과이며,
    require_valid() 처럼 예외를 원하는 호출자에게만 발생한다.
    """

    kind = "ProofRejected"
