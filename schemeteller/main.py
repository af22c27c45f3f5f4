# schemeteller/main.py
from fastapi import FastAPI
from contextlib import asynccontextmanager

from .db import Base, engine, SessionLocal
from . import models  # noqa: F401  registers tables
from .engine.catalog import seed_catalog
from .errors import install_error_handlers
from .logging_config import log_event
from .routes import admin, eligibility, events, ops, schemes, users
from .settings import get_settings

settings = get_settings()


def _ensure_db_ready() -> None:
    Base.metadata.create_all(bind=engine)


# Run schema init at import time so pytest cannot bypass it
_ensure_db_ready()


@asynccontextmanager
async def lifespan(app: FastAPI):
    _ensure_db_ready()

    if settings.SEED_CATALOG:
        db = SessionLocal()
        try:
            created = seed_catalog(db)
            if created:
                log_event("SEED_CATALOG", "seeded schemes", {"created": created})
        finally:
            db.close()

    yield


app = FastAPI(title="Scheme Teller API", version=settings.APP_VERSION, lifespan=lifespan)
install_error_handlers(app)

app.include_router(users.router)
app.include_router(eligibility.router)
app.include_router(schemes.router)
app.include_router(admin.router)
app.include_router(events.router)
app.include_router(ops.router)


@app.get("/")
def health():
    return {"status": "ok", "service": "schemeteller"}
