import logging
import time
from typing import Any, List, Mapping, Optional

import httpx
from pydantic.alias_generators import to_snake

from config.settings import settings
from schemas.results import CalculatedResult, StudentResult, StudentResultCreate
from services import grade_calculator
from services.grade_calculator import FormValidationError
from services.result_store import ResultNotFoundError

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


class ResultStoreClient:
    """
    Results API 호출 클라이언트 (UI 쪽 협력자 역할)
    - 요청 1건 = 응답 1건, 스트리밍/다중화 없음
    - addResult 는 재시도하지 않음 (재시도 시 새 ID로 중복 기록 생성)
    """

    def __init__(self, http: Optional[httpx.Client] = None, prefix: Optional[str] = None, caller: Optional[str] = None):
        self.http = http or httpx.Client(
            base_url=settings.RESULTS_API_BASE_URL.rstrip("/"),
            timeout=settings.RESULTS_API_TIMEOUT,
        )
        self.prefix = (settings.API_PREFIX if prefix is None else prefix).rstrip("/")
        self.headers = {"X-Caller-Id": caller} if caller else {}

    def close(self):
        self.http.close()

    def _request(self, method: str, path: str, json: Any = None) -> httpx.Response:
        url = f"{self.prefix}/results{path}"
        return self.http.request(method, url, json=json, headers=self.headers)

    @staticmethod
    def _body(r: httpx.Response) -> dict:
        try:
            body = r.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    @staticmethod
    def _field_errors(body: dict) -> dict:
        """에러 본문 → {snake_case 필드명: 메시지}"""
        fields = (body.get("error") or {}).get("fields")
        if fields:
            return {to_snake(k): v for k, v in fields.items()}

        # FastAPI 기본 스키마 검증 에러: {"detail": [{"loc": [...], "msg": ...}]}
        errors = {}
        detail = body.get("detail")
        if isinstance(detail, list):
            for item in detail:
                loc = [str(part) for part in item.get("loc", []) if part != "body"]
                errors[to_snake(loc[-1]) if loc else "body"] = item.get("msg", "Invalid value")
        return errors

    # 필요 엔드포인트에 맞춰 메서드 노출
    def add_result(self, record: StudentResultCreate) -> int:
        r = self._request("POST", "", json=record.model_dump(mode="json", by_alias=True))
        r.raise_for_status()
        return r.json()["data"]["id"]

    def get_results(self) -> List[StudentResult]:
        r = self._request("GET", "")
        r.raise_for_status()
        return [StudentResult.model_validate(item) for item in r.json()["data"]]

    def delete_result(self, result_id: int) -> None:
        r = self._request("DELETE", f"/{result_id}")
        if r.status_code == 404 and (self._body(r).get("error") or {}).get("code") == "RESULT_NOT_FOUND":
            raise ResultNotFoundError(result_id)
        r.raise_for_status()

    def clear_all(self) -> None:
        r = self._request("DELETE", "")
        r.raise_for_status()

    def calculate(self, form: Mapping[str, Any]) -> CalculatedResult:
        r = self._request("POST", "/calculate", json=dict(form))
        if r.status_code == 422:
            raise FormValidationError(self._field_errors(self._body(r)))
        r.raise_for_status()
        return CalculatedResult.model_validate(r.json()["data"])

    def submit(self, form: Mapping[str, Any], timestamp: Optional[int] = None) -> int:
        """폼 검증 → 로컬 계산 → addResult (검증 실패 시 요청을 보내지 않음)"""
        record = grade_calculator.make_record(form, now_ms() if timestamp is None else timestamp)
        result_id = self.add_result(record)
        logger.info("Record added for %s (id=%s)", record.student_name, result_id)
        return result_id
