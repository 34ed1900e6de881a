from pathlib import Path

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from apps.api.middleware import json_logger_middleware
from apps.api.routers import health, auth, chat, quotes, gallery, admin
from apps.api.routers.auth import require_admin
from core.config import settings
from core.db import engine
from core.db_wait import wait_for_db
from core.log_setup import configure_logging

configure_logging()
wait_for_db(engine)

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(json_logger_middleware())

app.include_router(health.router, tags=["health"])
app.include_router(auth.router)
app.include_router(chat.router, prefix="/chat", tags=["chat"])
app.include_router(quotes.router, prefix="/quotes", tags=["quotes"])
app.include_router(gallery.router, prefix="/gallery", tags=["gallery"])
app.include_router(admin.router, prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])

if settings.storage_backend == "local":
    Path(settings.media_dir).mkdir(parents=True, exist_ok=True)
    app.mount(settings.media_url_prefix, StaticFiles(directory=settings.media_dir), name="media")
