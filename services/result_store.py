"""
services/result_store.py

- 학생 성적 기록 저장소 (생성 / 전체 조회 / 삭제 / 전체 초기화)
- ID는 저장소가 result_sequence 카운터로 부여 → 단조 증가, 삭제 후에도 재사용 안 함
- 모든 작업은 락 + 단일 트랜잭션 안에서 처리 (한 번에 하나씩, 부분 상태 노출 없음)
"""

import logging
import threading
from typing import List

from sqlalchemy.orm import Session, sessionmaker

from models.results import INTEGER_MAX, ResultSequence, StudentResult as StudentResultModel
from schemas.results import StudentResult, StudentResultCreate

logger = logging.getLogger(__name__)

_SEQUENCE_ROW_ID = 1


class ResultNotFoundError(LookupError):
    """삭제 대상 기록이 존재하지 않음"""

    def __init__(self, result_id: int):
        self.result_id = result_id
        super().__init__(f"Result {result_id} does not exist")


class ResultStore:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self._lock = threading.Lock()

    def init_schema(self) -> None:
        """바인딩된 엔진에 테이블 생성 (이미 있으면 무시)"""
        bind = self._session_factory.kw["bind"]
        StudentResultModel.metadata.create_all(bind=bind)

    # ==========================================================
    # [공통] 카운터 행 조회 (없으면 0으로 생성)
    # ==========================================================
    def _sequence(self, db: Session) -> ResultSequence:
        seq = db.get(ResultSequence, _SEQUENCE_ROW_ID)
        if seq is None:
            seq = ResultSequence(id=_SEQUENCE_ROW_ID, next_id=0)
            db.add(seq)
            db.flush()
        return seq

    # ✅ [CREATE] 기록 추가 → 새 ID 반환
    def create(self, record: StudentResultCreate) -> int:
        with self._lock, self._session_factory() as db:
            seq = self._sequence(db)
            result_id = seq.next_id
            db.add(StudentResultModel(id=result_id, **record.model_dump()))
            seq.next_id = result_id + 1
            db.commit()

        logger.info("Result %s created (roll_number=%s, grade=%s)", result_id, record.roll_number, record.grade)
        return result_id

    # ✅ [READ] 전체 기록 조회 (ID 오름차순 스냅샷)
    def list(self) -> List[StudentResult]:
        with self._lock, self._session_factory() as db:
            rows = db.query(StudentResultModel).order_by(StudentResultModel.id).all()
            return [StudentResult.model_validate(r) for r in rows]

    def count(self) -> int:
        with self._lock, self._session_factory() as db:
            return db.query(StudentResultModel).count()

    # ✅ [DELETE] 기록 삭제 - 없으면 ResultNotFoundError
    def delete(self, result_id: int) -> None:
        with self._lock, self._session_factory() as db:
            # ID 컬럼 범위를 넘는 값은 저장된 적이 없음
            row = db.get(StudentResultModel, result_id) if 0 <= result_id <= INTEGER_MAX else None
            if row is None:
                logger.warning("Delete requested for missing result %s", result_id)
                raise ResultNotFoundError(result_id)
            db.delete(row)
            db.commit()

        logger.info("Result %s deleted", result_id)

    # ✅ [DELETE] 전체 초기화 - ID 카운터도 0으로
    def clear_all(self) -> int:
        with self._lock, self._session_factory() as db:
            removed = db.query(StudentResultModel).delete()
            self._sequence(db).next_id = 0
            db.commit()

        logger.info("Cleared %s results, id counter reset", removed)
        return removed
