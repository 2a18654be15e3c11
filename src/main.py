import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy import text
from sqlalchemy.orm import Session

from dotenv import load_dotenv
load_dotenv()  # 自动读取当前目录或父目录的 .env

from src.services.config import settings
from src.services.mysql_service import engine, Base, get_db
from src.routers import trips

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 创建数据库表
    Base.metadata.create_all(bind=engine)
    logger.info("Trip Thread API started")
    yield
    engine.dispose()


# ============ FastAPI 应用 ============
app = FastAPI(title="Trip Thread API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============ 统一错误响应 ============
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


# 注册路由
app.include_router(trips.router)


# ============ 健康检查 ============
@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    database = "ok"
    try:
        db.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Database health check failed")
        database = "unavailable"

    return {
        "status": "healthy",
        "database": database,
    }


@app.get("/")
async def root():
    """API 根路径"""
    return {
        "name": "Trip Thread API",
        "version": "1.0.0",
        "endpoints": {
            "trip_detail": "GET /api/trips/{trip_id}",
            "health": "GET /health"
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
