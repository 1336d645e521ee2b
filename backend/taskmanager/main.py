# taskmanager/main.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskmanager.config import settings
from taskmanager.core.db import init_db, close_db
from taskmanager.core.errors import AppError, UnexpectedError, ValidationError
from taskmanager.schemas.common import format_validation_error

from taskmanager.api.v1.routers import tasks, users

logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.APP_NAME)
# Single configuration object for the process; handlers reach it via deps.get_settings
app.state.settings = settings

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Malformed bodies/query params are client errors like any other validation failure
    err = ValidationError(format_validation_error(exc))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=err.to_dict())

@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("[error] unhandled %s %s", request.method, request.url.path)
    err = UnexpectedError()
    return JSONResponse(status_code=err.status_code, content=err.to_dict())

@app.on_event("startup")
async def on_startup():
    await init_db(generate_schemas=app.state.settings.db_generate_schemas)
    logger.info("[startup] %s ready (env=%s)", app.state.settings.APP_NAME, app.state.settings.env)

@app.on_event("shutdown")
async def on_shutdown():
    await close_db()

# REST
app.include_router(users.router, prefix="/api/v1")
app.include_router(tasks.router, prefix="/api/v1")

@app.get("/healthz")
def healthz():
    return {"ok": True}
