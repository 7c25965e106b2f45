import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import get_settings
from app.core.error_handlers import add_error_handlers
from app.core.logging_middleware import LoggingMiddleware
from app.db.init_db import init_db
from app.routers.actions import router as actions_router
from app.routers.entries import router as entries_router

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)

app = FastAPI(title=settings.APP_TITLE)

# Middleware
app.add_middleware(LoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

add_error_handlers(app)


# Health check
@app.get("/health")
def health():
    return {"status": "ok"}


# Startup event
@app.on_event("startup")
def on_startup():
    init_db()


# Include routers
app.include_router(entries_router, prefix="/entries", tags=["entries"])
app.include_router(actions_router, prefix="/exec", tags=["actions"])
