import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from database import init_db
from routers import auth, comment, idea, message, notification, user, vote
from utils.errors import (
    AppError, ConflictError, PersistenceError, UnknownError, ValidationError,
    SETUP_INSTRUCTIONS, missing_table, unique_violation,
)

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# =========================
# DB 초기화 (모델 기반 테이블 생성)
# =========================
init_db()

# =========================
# FastAPI 앱 생성
# =========================
app = FastAPI(
    title="Ideas.net API",
    description="Post startup ideas, vote, comment and message other founders",
    version="0.1.0",
)

# =========================
# CORS 설정
# =========================
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "http://localhost:3000").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =========================
# 에러 핸들러
# =========================
def error_response(exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.payload(), headers=exc.headers)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.payload())
    return error_response(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    fields = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        if loc and loc[0] not in fields:
            fields.append(loc[0])
    messages = "; ".join(err.get("msg", "") for err in exc.errors())
    return error_response(ValidationError(message=messages or "Invalid data provided", fields=fields))


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning("%s %s integrity error: %s", request.method, request.url.path, exc.orig)
    if unique_violation(exc):
        return error_response(ConflictError("Duplicate entry", "This value is already in use"))
    return error_response(PersistenceError(message="The data could not be saved. Please check related records and try again."))


@app.exception_handler(SQLAlchemyError)
async def persistence_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("%s %s database error", request.method, request.url.path)
    if missing_table(exc):
        return error_response(PersistenceError(
            "Database tables not found",
            "The database tables have not been created yet.",
            setupInstructions=SETUP_INSTRUCTIONS,
        ))
    return error_response(PersistenceError(message="Unable to reach the database. Please try again later."))


@app.exception_handler(Exception)
async def unknown_error_handler(request: Request, exc: Exception):
    logger.exception("%s %s unhandled error", request.method, request.url.path)
    return error_response(UnknownError(message="An unexpected error occurred. Please try again."))


# =========================
# 라우터 등록
# =========================
for router in (auth.router, idea.router, comment.router, vote.router, message.router, notification.router, user.router):
    app.include_router(router, prefix="/api")


# =========================
# 루트 엔드포인트
# =========================
@app.get("/")
def root():
    return {"message": "Welcome to Ideas.net"}


@app.get("/api/health")
def health():
    return {"status": "ok"}
