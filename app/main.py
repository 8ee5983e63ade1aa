import logging

from fastapi import FastAPI

from app.core.config import LOG_LEVEL
from app.core.errors import register_exception_handlers
from app.core.logging_middleware import LoggingMiddleware
from app.db.init_db import init_db

from app.routers.assignments import router as assignments_router
from app.routers.auth import router as auth_router
from app.routers.grades import router as grades_router
from app.routers.late_policies import router as late_policies_router

logging.basicConfig(level=LOG_LEVEL)

app = FastAPI(title="Peer Grading")

# Middleware
app.add_middleware(LoggingMiddleware)

# NotFoundError -> 404, PersistenceError -> 500
register_exception_handlers(app)


# Health check
@app.get("/health")
def health():
    return {"status": "ok"}


# Startup event
@app.on_event("startup")
def on_startup():
    init_db()


# Include routers
app.include_router(auth_router, prefix="/auth", tags=["auth"])
app.include_router(late_policies_router, prefix="/late_policies", tags=["late policies"])
app.include_router(assignments_router, prefix="/assignments", tags=["assignments"])

# Grades (no prefix: routes span /grades and /assignments/{id}/penalties)
app.include_router(grades_router, tags=["grades"])
