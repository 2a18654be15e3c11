from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, declarative_base
from src.services.config import settings


def engine_connect_args(database_url: str) -> dict:
    """MySQL 会话时区固定为 UTC，TIMESTAMP 读出的 naive 时间即为 UTC"""
    if make_url(database_url).get_backend_name() == "mysql":
        return {"init_command": "SET time_zone = '+00:00'"}
    return {}


engine = create_engine(
    settings.DATABASE_URL,
    connect_args=engine_connect_args(settings.DATABASE_URL),
    pool_pre_ping=True,
    echo=settings.DEBUG,
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()


# FastAPI 依赖
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
