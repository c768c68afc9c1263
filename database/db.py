from sqlalchemy import create_engine               # SQLAlchemy 엔진 생성 도구
from sqlalchemy.orm import declarative_base        # 모델의 Base 클래스
from sqlalchemy.orm import sessionmaker            # 세션 팩토리 함수
from sqlalchemy.pool import StaticPool

from config.settings import settings               # ✅ 환경변수 설정 파일 불러오기


def build_engine(url: str, echo: bool = False):
    """
    DB URL로 엔진 생성
    - 인메모리 SQLite(sqlite://)는 연결마다 DB가 새로 생기므로 단일 연결(StaticPool)을 공유
    - SQLite는 FastAPI 워커 스레드에서 접근하므로 check_same_thread 비활성화
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=echo, **kwargs)
    return create_engine(url, echo=echo, pool_pre_ping=True)


# ✅ 환경변수에서 DB 연결 URL을 불러와 엔진 생성
engine = build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)

# ✅ 세션 팩토리: DB 연결에 사용할 세션 생성기 정의
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ✅ 모델 정의 시 상속할 Base 클래스 (Declarative 방식 사용)
Base = declarative_base()
