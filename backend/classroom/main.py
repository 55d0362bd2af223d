from fastapi import FastAPI, Depends, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session
import os
import logging
from contextlib import asynccontextmanager

from .database import get_db, get_db_session, check_database_connection, create_tables
from .errors import ClassroomError, InternalError
from .auth import auth_router
from .groups.router import router as groups_router
from .lessons.router import router as lessons_router, student_router
from .seed import seed_demo_data
from .tasks.router import router as tasks_router

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Check the database, create tables and optionally seed demo data."""
    logger.info("Starting up Classroom Live API...")
    # Strict DB connectivity check in production; only skip during pytest
    if os.getenv("PYTEST_CURRENT_TEST") is not None:
        logger.info("Skipping DB setup during tests")
    else:
        if not check_database_connection():
            logger.error("Database connection failed")
            raise Exception("Cannot connect to database")
        create_tables()
        if os.getenv("SEED_DEMO_DATA", "false").lower() == "true":
            with get_db_session() as db:
                seed_demo_data(db)
    yield
    logger.info("Shutting down Classroom Live API...")


app = FastAPI(
    title="Classroom Live API",
    description="Lessons, attendance and quiz scoring for teachers and students",
    version=API_VERSION,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "http://localhost:5173").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ClassroomError)
async def classroom_error_handler(request: Request, exc: ClassroomError):
    if isinstance(exc, InternalError):
        logger.error(f"{request.method} {request.url.path} failed: {exc.__cause__ or exc}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are reported as invalid input."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request", "errors": jsonable_encoder(exc.errors())},
    )


# Routers
app.include_router(auth_router)
app.include_router(tasks_router)
app.include_router(lessons_router)
app.include_router(groups_router)
app.include_router(student_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Classroom Live API", "version": API_VERSION}


@app.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """Health check endpoint with database connectivity test."""
    try:
        db.execute(text("SELECT 1"))
        return {
            "status": "healthy",
            "database": "connected",
            "version": API_VERSION
        }
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return {
            "status": "unhealthy",
            "database": "disconnected",
            "version": API_VERSION
        }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
