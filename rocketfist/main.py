import logging

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from rocketfist.config import config
from rocketfist.dependencies import get_db
from rocketfist.endpoints import classes, gyms, members, registrations, schedule, stats
from rocketfist.errors.base_errors import InternalError, RocketFistError

logging.basicConfig(
    level=config.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong"


app = FastAPI(
    title="Rocket Fist API",
    description="Gym management API: class schedule, attendance and revenue",
    version="1.0.0",
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(gyms.router)
app.include_router(classes.router)
app.include_router(schedule.router)
app.include_router(registrations.router)
app.include_router(members.router)
app.include_router(stats.router)


@app.get("/")
def read_root():
    return {"message": "Rocket Fist API"}


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected"}
    except SQLAlchemyError as e:
        logger.error(f"Health check failed: {str(e)}")
        return {"status": "unhealthy", "database": "disconnected"}


@app.exception_handler(RocketFistError)
async def rocketfist_error_handler(request: Request, exc: RocketFistError):
    if isinstance(exc, InternalError):
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=500, content={"error": GENERIC_ERROR})
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": GENERIC_ERROR})


# Anything not translated above: log it, never leak it
@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": GENERIC_ERROR})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


# Validation errors become 400 with a flat message
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        if "ctx" in error and isinstance(error["ctx"].get("error"), ValueError):
            message = str(error["ctx"]["error"])
        messages.append(f"{location}: {message}" if location else message)

    return JSONResponse(
        status_code=400,
        content={"error": "; ".join(messages) or "Invalid request"},
    )
