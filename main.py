from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import asyncio
import logging
import os

from app.api.v1.endpoints import resumes
from app.core.config import settings
from app.core.exceptions import ResumeNotFoundError, ResumeValidationError
from app.db.session import init_db
from app.services.email_service import EmailService
from app.services.resume_pdf import ResumePdfRenderer

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

os.makedirs(settings.GENERATED_DIR, exist_ok=True)


def _log_email_check(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("SMTP check failed: %s", exc, exc_info=exc)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    app.state.renderer = ResumePdfRenderer(settings.GENERATED_DIR, engine=settings.PDF_ENGINE)
    app.state.notifier = EmailService(settings)
    # SMTP check runs in the background; it only logs
    email_check = asyncio.create_task(asyncio.to_thread(app.state.notifier.verify))
    email_check.add_done_callback(_log_email_check)
    app.state.email_check = email_check
    yield
    if not email_check.done():
        email_check.cancel()
    await asyncio.gather(email_check, return_exceptions=True)


app = FastAPI(title="LexAI Resume API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(resumes.router, prefix="/api/resumes", tags=["resumes"])
app.mount("/generated", StaticFiles(directory=settings.GENERATED_DIR), name="generated")


@app.exception_handler(ResumeValidationError)
async def resume_validation_handler(request: Request, exc: ResumeValidationError):
    logger.info("Validation failed: %s %s", exc.message, exc.missing_fields)
    return JSONResponse(status_code=400, content={"error": exc.message, "details": exc.missing_fields})


@app.exception_handler(ResumeNotFoundError)
async def resume_not_found_handler(request: Request, exc: ResumeNotFoundError):
    return JSONResponse(status_code=404, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()]
    return JSONResponse(status_code=400, content={"error": "Invalid request body", "details": details})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error", "details": str(exc)})


@app.get("/", response_class=PlainTextResponse, tags=["health"])
async def root():
    return "LexAI API is running"


@app.get("/health", tags=["health"])
async def health():
    """Health check endpoint returning service status."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT)
