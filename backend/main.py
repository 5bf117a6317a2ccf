# backend/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend import config
from backend.auth.identity import default_directory
from backend.database import engine, init_db
from backend.errors import AppError

# ---------------- LOGGING ----------------
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("backend")


# ---------------- LIFESPAN ----------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("database_init")
    init_db()
    yield
    logger.info("database_pool_shutdown")
    engine.dispose()


app = FastAPI(title="Employee Task Tracker API", version="1.0.0", lifespan=lifespan)

# key -> identity lookup used by /auth/login
app.state.identity_provider = default_directory()

# ---------------- CORS ----------------
origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

if config.FRONTEND_ORIGIN:
    origins.append(config.FRONTEND_ORIGIN)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------- ERRORS ----------------
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("request_failed", extra={"path": request.url.path, "status_code": exc.status_code})
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = [str(err.get("msg")) for err in exc.errors()]
    return JSONResponse(status_code=400, content={"error": "Validation failed", "details": details})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    error = "Route not found" if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"error": error}, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled_error", extra={"path": request.url.path})
    return JSONResponse(status_code=500, content={"error": "Something went wrong!"})


# ---------------- ROUTERS ----------------
from backend.auth.auth_router import router as auth_router  # noqa: E402
from backend.employee.employee_router import router as employee_router  # noqa: E402
from backend.task.task_router import router as task_router  # noqa: E402

app.include_router(auth_router, prefix=config.API_PREFIX)
app.include_router(employee_router, prefix=config.API_PREFIX)
app.include_router(task_router, prefix=config.API_PREFIX)


# ---------------- ROOT ----------------
@app.get("/")
def read_root():
    return {
        "message": "Employee Task Tracker API",
        "version": app.version,
        "endpoints": {
            "auth": f"{config.API_PREFIX}/auth",
            "employees": f"{config.API_PREFIX}/employees",
            "tasks": f"{config.API_PREFIX}/tasks",
            "dashboard": f"{config.API_PREFIX}/tasks/stats",
        },
    }
