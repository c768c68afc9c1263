import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel

from schemas.common import ErrorDetail, ErrorResponse
from services.grade_calculator import DerivedFieldsMismatchError, FormValidationError
from services.result_store import ResultNotFoundError

logger = logging.getLogger(__name__)


def _error(status_code: int, code: str, message: str, fields=None) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message, fields=fields), latency_ms=0)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json", exclude_none=True))


def add_error_handlers(app: FastAPI):
    @app.exception_handler(ResultNotFoundError)
    async def result_not_found_handler(request: Request, exc: ResultNotFoundError):
        return _error(404, "RESULT_NOT_FOUND", str(exc))

    @app.exception_handler(FormValidationError)
    async def form_validation_handler(request: Request, exc: FormValidationError):
        # 필드명은 요청 JSON과 같은 camelCase 로 돌려줌
        fields = {to_camel(k): v for k, v in exc.errors.items()}
        return _error(422, "VALIDATION_ERROR", str(exc), fields)

    @app.exception_handler(DerivedFieldsMismatchError)
    async def derived_mismatch_handler(request: Request, exc: DerivedFieldsMismatchError):
        fields = {k: f"expected {v}" for k, v in exc.mismatches.items()}
        return _error(422, "DERIVED_FIELDS_MISMATCH", str(exc), fields)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, "INTERNAL_ERROR", str(exc))
