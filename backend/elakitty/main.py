import logging
from pathlib import Path

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from elakitty.api.routers import auth, geocode, profiles, sanctuaries, sightings, uploads
from elakitty.config import settings
from elakitty.db import get_db, init_db
from elakitty.errors import ElaKittyError
from elakitty.logging_config import configure_logging

configure_logging(settings.log_level)
logger = logging.getLogger("elakitty")

app = FastAPI(title="Ela Kitty API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ElaKittyError)
def handle_app_error(request: Request, exc: ElaKittyError):
    logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(status_code=exc.http_status_code, content={"error": exc.to_dict()})


@app.get("/health")
def health(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Health check failed: %s", e)
        return JSONResponse(status_code=503, content={"ok": False, "database": "disconnected"})
    return {"ok": True, "database": "connected"}


# create the schema on first start
@app.on_event("startup")
def on_startup():
    init_db()


app.include_router(auth.router,        prefix="/auth",        tags=["auth"])
app.include_router(sanctuaries.router, prefix="/sanctuaries", tags=["sanctuaries"])
app.include_router(sightings.router,   prefix="/sightings",   tags=["sightings"])
app.include_router(profiles.router,    prefix="/profiles",    tags=["profiles"])
app.include_router(uploads.router,     prefix="/uploads",     tags=["uploads"])
app.include_router(geocode.router,     prefix="/geocode",     tags=["geocode"])

# uploaded photos and logos are served from the media directory
if settings.media_base_url.startswith("/"):
    media_dir = Path(settings.media_dir)
    media_dir.mkdir(parents=True, exist_ok=True)
    app.mount(settings.media_base_url, StaticFiles(directory=str(media_dir)), name="media")
