"""
services/grade_calculator.py

- 다섯 과목 점수 → 총점 / 평균 / 등급 계산 (상태 없음, I/O 없음)
- 폼 원본 입력의 필드별 검증 규칙
- (strict 모드) 호출자가 보낸 total/average/grade 재검증
"""

import math
from typing import Any, Dict, Mapping, Tuple

from schemas.results import CalculatedResult, StudentResultCreate, SubjectMarks

# (필드명, 표시 이름) - 순서 고정
SUBJECTS = (
    ("maths", "Mathematics"),
    ("science", "Science"),
    ("english", "English"),
    ("tamil", "Tamil"),
    ("computer_science", "Computer Science"),
)

PASS_MARK = 35       # 한 과목이라도 미만이면 Fail
PASS_AVERAGE = 40    # 평균 미만이면 Fail
GRADE_A_AVERAGE = 80
GRADE_B_AVERAGE = 60
MIN_MARK, MAX_MARK = 0, 100


class FormValidationError(ValueError):
    """폼 입력 검증 실패 - errors: {필드명: 메시지}"""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("Please fix the errors before calculating")


class DerivedFieldsMismatchError(ValueError):
    """total/average/grade 가 점수와 맞지 않음 - mismatches: {필드명: 기대값}"""

    def __init__(self, mismatches: Dict[str, Any]):
        self.mismatches = dict(mismatches)
        fields = ", ".join(sorted(self.mismatches))
        super().__init__(f"Derived fields do not match the marks: {fields}")


# ==========================================================
# [1단계] 등급 계산
# ==========================================================

def compute_grade(average: float, marks: Mapping[str, int]) -> str:
    # 과목 과락 검사가 평균 기준보다 우선
    if any(m < PASS_MARK for m in marks.values()) or average < PASS_AVERAGE:
        return "Fail"
    if average >= GRADE_A_AVERAGE:
        return "A"
    if average >= GRADE_B_AVERAGE:
        return "B"
    return "C"


def calculate(marks) -> CalculatedResult:
    """
    다섯 과목 점수로 총점/평균/등급 계산
    - marks: SubjectMarks 또는 {과목 필드명: 점수} 매핑
    - 평균은 반올림하지 않음
    """
    if isinstance(marks, SubjectMarks):
        values = {key: getattr(marks, key) for key, _ in SUBJECTS}
    else:
        values = {key: marks[key] for key, _ in SUBJECTS}

    total = sum(values.values())
    average = total / len(SUBJECTS)
    return CalculatedResult(
        total=total,
        average=average,
        grade=compute_grade(average, values),
        marks=SubjectMarks(**values),
    )


# ==========================================================
# [2단계] 폼 입력 검증
# ==========================================================

def _parse_mark(raw: Any) -> Tuple[Any, str]:
    """원본 값 → (정수 점수, 에러 코드). 에러 코드: "", "required", "whole", "range" """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None, "required"
    if isinstance(raw, bool):
        return None, "whole"

    value = raw
    if isinstance(value, str):
        text = value.strip()
        try:
            value = int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                return None, "whole"

    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return None, "whole"
        value = int(value)
    if not isinstance(value, int):
        return None, "whole"

    if value < MIN_MARK or value > MAX_MARK:
        return None, "range"
    return value, ""


def validate_form(values: Mapping[str, Any]) -> Dict[str, str]:
    """필드별 에러 메시지 반환 (빈 dict → 통과)"""
    errors: Dict[str, str] = {}

    if not str(values.get("student_name") or "").strip():
        errors["student_name"] = "Student name is required"
    if not str(values.get("roll_number") or "").strip():
        errors["roll_number"] = "Roll number is required"

    for key, label in SUBJECTS:
        _, problem = _parse_mark(values.get(key))
        if problem == "required":
            errors[key] = f"{label} marks required"
        elif problem == "whole":
            errors[key] = "Enter a whole number"
        elif problem == "range":
            errors[key] = f"Marks must be {MIN_MARK}–{MAX_MARK}"

    return errors


def parse_form(values: Mapping[str, Any]) -> Tuple[str, str, SubjectMarks]:
    """검증 통과 시 (이름, 학번, 점수) 반환, 실패 시 FormValidationError"""
    errors = validate_form(values)
    if errors:
        raise FormValidationError(errors)

    marks = SubjectMarks(**{key: _parse_mark(values.get(key))[0] for key, _ in SUBJECTS})
    return str(values["student_name"]).strip(), str(values["roll_number"]).strip(), marks


# ==========================================================
# [3단계] 파생 필드 재검증 (strict 모드)
# ==========================================================

def verify_derived(record: StudentResultCreate) -> None:
    expected = calculate(record)
    mismatches = {}
    if record.total != expected.total:
        mismatches["total"] = expected.total
    if record.average != expected.average:
        mismatches["average"] = expected.average
    if record.grade != expected.grade:
        mismatches["grade"] = expected.grade
    if mismatches:
        raise DerivedFieldsMismatchError(mismatches)


# ==========================================================
# [4단계] 폼 → 저장용 기록 (검증 + 계산)
# ==========================================================

def make_record(values: Mapping[str, Any], timestamp: int) -> StudentResultCreate:
    student_name, roll_number, marks = parse_form(values)
    calculated = calculate(marks)
    return StudentResultCreate(
        roll_number=roll_number,
        student_name=student_name,
        **marks.model_dump(),
        total=calculated.total,
        average=calculated.average,
        grade=calculated.grade,
        timestamp=timestamp,
    )
