from typing import Any, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from models.results import BIGINT_MAX, INTEGER_MAX

GradeLetter = Literal["A", "B", "C", "Fail"]


# ✅ 공통 설정: 파이썬 속성은 snake_case, 요청/응답 JSON은 camelCase
class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ✅ 다섯 과목 점수
class SubjectMarks(CamelModel):
    maths: int = Field(..., ge=0, le=INTEGER_MAX)             # 수학
    science: int = Field(..., ge=0, le=INTEGER_MAX)           # 과학
    english: int = Field(..., ge=0, le=INTEGER_MAX)           # 영어
    tamil: int = Field(..., ge=0, le=INTEGER_MAX)             # 타밀어
    computer_science: int = Field(..., ge=0, le=INTEGER_MAX)  # 컴퓨터 과학


# ✅ 입력용 (addResult) - id는 저장소가 부여
class StudentResultCreate(SubjectMarks):
    roll_number: str                                          # 학번 (검증/중복 확인 없음)
    student_name: str                                         # 학생 이름
    total: int = Field(..., ge=0, le=INTEGER_MAX)             # 총점
    average: float = Field(..., ge=0, allow_inf_nan=False)    # 평균
    grade: GradeLetter                                        # 등급
    timestamp: int = Field(..., ge=0, le=BIGINT_MAX)          # 생성 시각 (epoch ms)


# ✅ 전체 출력용 (getResults)
class StudentResult(StudentResultCreate):
    id: int = Field(..., ge=0, le=INTEGER_MAX)


# ✅ 계산 결과 (GradeCalculator 출력)
class CalculatedResult(CamelModel):
    total: int
    average: float
    grade: GradeLetter
    marks: SubjectMarks


# ✅ 폼 원본 입력 - 값 검증은 services/grade_calculator.validate_form 에서 필드별로 수행
class ResultForm(CamelModel):
    student_name: Optional[str] = ""
    roll_number: Optional[str] = ""
    maths: Optional[Any] = None
    science: Optional[Any] = None
    english: Optional[Any] = None
    tamil: Optional[Any] = None
    computer_science: Optional[Any] = None


class ResultId(BaseModel):
    id: int


class ClearedCount(BaseModel):
    cleared: int
