import csv
import logging
import sys
from typing import Callable, List, Tuple

from schemas.results import StudentResultCreate
from services import grade_calculator
from services.result_client import ResultStoreClient, now_ms

logger = logging.getLogger(__name__)

CSV_PATH = "data/results.csv"  # ✅ 기본 파일 경로
# CSV 컬럼: roll_number, student_name, maths, science, english, tamil, computer_science


def import_results(
    add: Callable[[StudentResultCreate], int], csv_path: str = CSV_PATH
) -> Tuple[List[int], List[Tuple[int, dict]]]:
    """
    CSV → 검증 → 계산 → add(record)
    - add: 실행 중인 서버로 보내는 ResultStoreClient.add_result (또는 같은 프로세스의 ResultStore.create)
    - 검증 실패 행은 건너뛰고 (행 번호, 필드별 에러) 로 반환
    """
    imported: List[int] = []
    rejected: List[Tuple[int, dict]] = []

    with open(csv_path, newline="", encoding="utf-8-sig") as csvfile:
        reader = csv.DictReader(csvfile)
        for line_no, row in enumerate(reader, start=2):  # 1행은 헤더
            try:
                record = grade_calculator.make_record(row, now_ms())
            except grade_calculator.FormValidationError as e:
                logger.warning("Row %s skipped: %s", line_no, e.errors)
                rejected.append((line_no, e.errors))
                continue
            imported.append(add(record))

    logger.info("✅ 성적 CSV → 저장소 가져오기 완료: %s건 추가, %s건 제외", len(imported), len(rejected))
    return imported, rejected


if __name__ == "__main__":
    # 저장소는 서버 프로세스가 단독 소유 → Results API(RESULTS_API_BASE_URL)로 전송
    logging.basicConfig(level=logging.INFO)
    client = ResultStoreClient(caller="import_results")
    try:
        import_results(client.add_result, sys.argv[1] if len(sys.argv) > 1 else CSV_PATH)
    finally:
        client.close()
