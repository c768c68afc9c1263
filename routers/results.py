import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Request, status

from config.settings import settings
from dependencies.security import get_caller
from schemas.common import SuccessEnvelope
from schemas.results import (
    CalculatedResult,
    ClearedCount,
    ResultForm,
    ResultId,
    StudentResult,
    StudentResultCreate,
)
from services import grade_calculator
from services.result_store import ResultStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/results", tags=["results"])


# ==========================================================
# [공통] 저장소 핸들 (main.py 에서 app.state 에 등록)
# ==========================================================
def get_store(request: Request) -> ResultStore:
    return request.app.state.result_store


# ==========================================================
# [1단계] 계산 라우터 (저장 없음)
# ==========================================================

# ✅ [CALCULATE] 폼 입력 검증 + 총점/평균/등급 계산
@router.post("/calculate", response_model=SuccessEnvelope[CalculatedResult])
def calculate_result(form: ResultForm, caller: dict = Depends(get_caller)):
    _, _, marks = grade_calculator.parse_form(form.model_dump())
    calculated = grade_calculator.calculate(marks)
    return SuccessEnvelope(data=calculated, message="Results calculated successfully!")


# ==========================================================
# [2단계] CRUD 라우터
# ==========================================================

# ✅ [CREATE] 기록 추가 (addResult) - ID는 저장소가 부여
@router.post("", status_code=status.HTTP_201_CREATED, response_model=SuccessEnvelope[ResultId])
def add_result(
    record: StudentResultCreate,
    store: ResultStore = Depends(get_store),
    caller: dict = Depends(get_caller),
):
    if settings.STRICT_DERIVED_FIELDS:
        grade_calculator.verify_derived(record)

    result_id = store.create(record)
    logger.debug("addResult by %s -> %s", caller["caller"], result_id)
    return SuccessEnvelope(data=ResultId(id=result_id), message=f"Record added for {record.student_name}!")


# ✅ [READ] 전체 기록 조회 (getResults) - ID 오름차순
@router.get("", response_model=SuccessEnvelope[List[StudentResult]])
def get_results(store: ResultStore = Depends(get_store), caller: dict = Depends(get_caller)):
    records = store.list()
    return SuccessEnvelope(data=records, message=f"{len(records)} records")


# ✅ [DELETE] 전체 초기화 (clearAll)
@router.delete("", response_model=SuccessEnvelope[ClearedCount])
def clear_all(store: ResultStore = Depends(get_store), caller: dict = Depends(get_caller)):
    removed = store.clear_all()
    logger.debug("clearAll by %s", caller["caller"])
    return SuccessEnvelope(data=ClearedCount(cleared=removed), message="All records cleared")


# ✅ [DELETE] 기록 삭제 (deleteResult) - 없으면 404
@router.delete("/{result_id}", response_model=SuccessEnvelope[ResultId])
def delete_result(
    result_id: int = Path(..., ge=0),
    store: ResultStore = Depends(get_store),
    caller: dict = Depends(get_caller),
):
    store.delete(result_id)
    logger.debug("deleteResult by %s -> %s", caller["caller"], result_id)
    return SuccessEnvelope(data=ResultId(id=result_id), message="Record deleted")
