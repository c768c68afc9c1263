from typing import Optional, Annotated
from fastapi import Header
import hashlib

AuthHeader = Annotated[Optional[str], Header(alias="Authorization")]
CallerHeader = Annotated[Optional[str], Header(alias="X-Caller-Id")]

ANONYMOUS = "anonymous"


def _mask_token(token: str) -> str:
    # 토큰 원문은 로그에 남기지 않음 → 같은 토큰이면 같은 값인 짧은 해시
    return "bearer:" + hashlib.sha256(token.encode("utf-8")).hexdigest()[:12]


def get_caller(authorization: AuthHeader = None, x_caller_id: CallerHeader = None):
    """
    호출자 식별값만 읽어서 반환 (인증/권한 검사 없음)
    - X-Caller-Id 우선, 없으면 "Bearer <token>" 의 마스킹 값, 둘 다 없으면 anonymous
    """
    if x_caller_id and x_caller_id.strip():
        return {"caller": x_caller_id.strip()}

    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() == "bearer" and token.strip():
            return {"caller": _mask_token(token.strip())}

    return {"caller": ANONYMOUS}
