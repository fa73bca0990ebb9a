from contextlib import asynccontextmanager

from fastapi import FastAPI

from classbook.api import auth, classes, sessions, attendance, scheduler, sync
from classbook.core.config import settings
from classbook.core.logging import setup_logging
from classbook.db.migrate import run_migrations


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Миграции один раз на процесс, а не на каждый запрос
    if settings.RUN_MIGRATIONS_ON_STARTUP:
        run_migrations()
    yield


setup_logging()

app = FastAPI(title="Classbook API", lifespan=lifespan)


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(classes.router, prefix="/api/classes", tags=["classes"])
app.include_router(sessions.router, prefix="/api/sessions", tags=["sessions"])
app.include_router(attendance.router, prefix="/api/attendance", tags=["attendance"])
app.include_router(scheduler.router, prefix="/api/scheduler", tags=["scheduler"])
app.include_router(sync.router, prefix="/api/sync", tags=["sync"])
