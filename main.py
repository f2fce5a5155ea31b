import logging
import time
from datetime import datetime, timezone
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import settings
from database.errors import NotFoundError, ProviderValidationError
from domain.auth import auth_router
from domain.parent import parent_router
from domain.appointment import appointment_router
from domain.note import note_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)
access_logger = logging.getLogger("access")

app = FastAPI(
    title="ParentOS API",
    description="부모님 관계 관리 서비스 백엔드 API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.CLIENT_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

SECURITY_HEADERS = {
    "Content-Security-Policy": (
        "default-src 'self'; style-src 'self' 'unsafe-inline'; "
        "script-src 'self'; img-src 'self' data: https:"
    ),
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
}


@app.middleware("http")
async def limit_body_size(request: Request, call_next):
    limit = settings.MAX_BODY_SIZE_MB * 1024 * 1024
    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit():
        if int(content_length) > limit:
            return JSONResponse(status_code=413, content={"error": "Payload too large"})
    elif request.method in ("POST", "PUT", "PATCH"):
        # chunked 전송은 길이 헤더가 없으므로 본문을 읽어서 확인
        body = await request.body()
        if len(body) > limit:
            return JSONResponse(status_code=413, content={"error": "Payload too large"})
    return await call_next(request)


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed = (time.perf_counter() - started) * 1000
    access_logger.info(f"{request.method} {request.url.path} {response.status_code} {elapsed:.1f}ms")
    return response


# 오류 응답은 모두 {"error": ...} 형태
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _validation_details(errors) -> list:
    details = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        field = ".".join(loc[1:]) if len(loc) > 1 else ".".join(loc)
        message = error.get("msg", "Invalid value")
        if error.get("type") == "value_error" and "error" in error.get("ctx", {}):
            message = str(error["ctx"]["error"])
        details.append({"field": field, "message": message})
    return details


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "Validation failed", "details": _validation_details(exc.errors())},
    )


@app.exception_handler(ProviderValidationError)
async def provider_validation_handler(request: Request, exc: ProviderValidationError):
    logger.warning(f"Constraint violation ({exc.code}): {exc.message}")
    return JSONResponse(
        status_code=400,
        content={"error": "Validation failed", "details": [{"field": None, "message": exc.message}]},
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"error": "Not found"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    # 가장 바깥(ServerErrorMiddleware)에서 실행되어 위 미들웨어를 거치지 않음
    access_logger.info(f"{request.method} {request.url.path} 500")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Something went wrong!",
            "message": str(exc) if settings.is_development else "Internal server error",
        },
        headers=SECURITY_HEADERS,
    )


app.include_router(auth_router.router, prefix="/api")
app.include_router(parent_router.router, prefix="/api")
app.include_router(appointment_router.router, prefix="/api")
app.include_router(note_router.router, prefix="/api")


@app.get("/api/health", tags=["health"])
async def health_check():
    return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}


# 정의되지 않은 API 경로 (SPA 처리보다 먼저 등록)
@app.api_route(
    "/api/{path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"],
    include_in_schema=False,
)
async def api_not_found(path: str):
    return JSONResponse(status_code=404, content={"error": "API endpoint not found"})


@app.get("/{full_path:path}", include_in_schema=False)
async def serve_client(full_path: str):
    """빌드된 프론트엔드 정적 파일 제공, 없는 경로는 index.html"""
    static_dir = Path(settings.STATIC_DIR).resolve()
    if full_path:
        candidate = (static_dir / full_path).resolve()
        if candidate.is_file() and static_dir in candidate.parents:
            return FileResponse(candidate)

    index = static_dir / "index.html"
    if not index.is_file():
        return JSONResponse(status_code=404, content={"error": "Client build not found"})
    return FileResponse(index)


@app.on_event("startup")
async def startup_event():
    logger.info(f"ParentOS server running on port {settings.PORT}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Client URL: {settings.CLIENT_URL}")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT)
