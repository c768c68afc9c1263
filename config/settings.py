"""
config/settings.py

- .env 또는 환경변수를 읽어 애플리케이션 전역 설정으로 제공합니다.
- pydantic v2 / pydantic-settings v2 사용.
- DATABASE_URL 기본값은 인메모리 SQLite(sqlite://) → 프로세스 재시작 시 기록이 사라짐.
  파일/서버 DB URL을 지정하면 기록과 ID 카운터가 함께 보존됩니다.
"""

from typing import List, Literal
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # =========================
    # 앱/런타임
    # =========================
    ENV: Literal["dev", "stage", "prod"] = "dev"
    APP_TITLE: str = "Student Result Records API"
    APP_DESCRIPTION: str = "학생 과목 점수 기록 / 총점·평균·등급 계산 백엔드 API"
    APP_VERSION: str = "1.0.0"
    API_PREFIX: str = "/v1"

    # =========================
    # CORS
    # =========================
    # 콤마(,)로 구분된 문자열 → List[str] 로 파싱
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _split_origins(cls, v):
        if isinstance(v, str):
            # "a,b , c" → ["a","b","c"]
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    # =========================
    # Database (결과 저장소)
    # =========================
    DATABASE_URL: str = "sqlite://"
    DB_ECHO: bool = False

    # addResult 요청의 total/average/grade를 서버에서 재계산해 검증할지 여부
    STRICT_DERIVED_FIELDS: bool = False

    # =========================
    # Results API 클라이언트
    # =========================
    RESULTS_API_BASE_URL: str = "http://localhost:8000"
    RESULTS_API_TIMEOUT: int = 10

    # =========================
    # Logging
    # =========================
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    REQUEST_LOG: bool = True

    # =========================
    # BaseSettings Config
    # =========================
    model_config = SettingsConfigDict(
        env_file=".env",               # .env에서 값 로드
        env_file_encoding="utf-8",
        case_sensitive=False,          # 환경변수 대소문자 비구분
        extra="ignore",                # 정의되지 않은 키는 무시
    )


# ✅ settings 객체를 통해 어디서든 접근 가능
settings = Settings()
