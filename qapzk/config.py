"""
QAP 엔진 설정 상수
==================

환경 변수에서 한 번만 읽어 모듈 상수로 고정한다.

  - QAPZK_WITNESS_CHECK: "0"이면 증명 생성 전 평문(cleartext) witness 검사를 끈다.
  - QAPZK_DB_PATH: TinyDB 파일 경로. 비어 있으면 메모리 DB를 사용한다.
  - QAPZK_LOG_LEVEL: 웹 앱 로깅 레벨 (기본값 WARNING).
"""

import os

WITNESS_CHECK = os.environ.get("QAPZK_WITNESS_CHECK", "1") != "0"

DB_PATH = os.environ.get("QAPZK_DB_PATH", "")

LOG_LEVEL = os.environ.get("QAPZK_LOG_LEVEL", "WARNING").upper()

# py_ecc의 스칼라 곱(commitment.commit)은 상수 시간이 아니다.
CONSTANT_TIME_COMMIT = False
