from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from tryout.core.config import settings
from tryout.core.logging import configure_logging
from tryout.api.routes.health import router as health_router
from tryout.api.routes.quiz import router as quiz_router
from tryout.api.routes.answers import router as answers_router
from tryout.api.routes.packages import router as packages_router
from tryout.api.routes.users import router as users_router
from tryout.api.routes.files import router as files_router
from tryout.db.base import Base
from tryout.db.session import SessionLocal, engine
from tryout.services.user_service import ensure_user_exists


logger = logging.getLogger(__name__)


def envelope(request_id: str, data: Any = None, error: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {"request_id": request_id, "data": data, "error": error}


app = FastAPI(
    title=settings.APP_NAME,
    version="0.3.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = req_id
    response = await call_next(request)
    response.headers["X-Request-ID"] = req_id
    return response


def _error_response(request: Request, status_code: int, error: Dict[str, Any]) -> JSONResponse:
    req_id = getattr(request.state, "request_id", None) or str(uuid.uuid4())
    return JSONResponse(status_code=status_code, content=envelope(req_id, data=None, error=error))


def jsonable_errors(exc: RequestValidationError):
    # pydantic puts the raised exception object in ctx; keep only its text
    out = []
    for err in exc.errors():
        err = dict(err)
        ctx = err.get("ctx")
        if isinstance(ctx, dict):
            err["ctx"] = {k: str(v) for k, v in ctx.items()}
        out.append(err)
    return out


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    if isinstance(detail, dict):
        error = {
            "code": str(detail.get("code") or "HTTP_ERROR"),
            "message": detail.get("message") or str(detail),
            "details": detail,
        }
    else:
        error = {"code": "HTTP_ERROR", "message": str(detail)}
    return _error_response(request, exc.status_code, error)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    error = {
        "code": "VALIDATION_ERROR",
        "message": "Invalid request",
        "details": {"errors": jsonable_errors(exc)},
    }
    return _error_response(request, 422, error)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(request, 500, {"code": "INTERNAL_ERROR", "message": str(exc)})


@app.on_event("startup")
def bootstrap():
    """Configure logging, optionally create tables, seed demo users.

    Demo UX expects teacher user_id=1 and students user_id=2..10.
    """
    configure_logging()

    if settings.DB_AUTO_CREATE:
        Base.metadata.create_all(bind=engine)

    if not settings.DEMO_SEED_ENABLED:
        return

    db = SessionLocal()
    try:
        ensure_user_exists(db, 1, role="teacher", sync_role=False)
        for sid in range(2, 11):
            ensure_user_exists(db, sid, role="student", sync_role=False)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("Demo user seed skipped: %s", exc)
    finally:
        db.close()


app.include_router(health_router, prefix="/api")
app.include_router(quiz_router, prefix="/api")
app.include_router(answers_router, prefix="/api")
app.include_router(packages_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(files_router, prefix="/api")
