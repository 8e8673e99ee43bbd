from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app.core.config import APP_NAME, get_settings
from app.core.database import engine, Base
from app.core.errors import register_exception_handlers
from app.core.logger import configure_logging, log_requests
from app.models import task, user  # noqa: F401  enregistre les tables
from app.routers import health, auth, todos, upload
from app.services.upload_service import PUBLIC_PREFIX, ensure_uploads_directory

settings = get_settings()
configure_logging(settings)

# Init DB
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=APP_NAME,
    version="1.0.0"
)

app.middleware("http")(log_requests)
register_exception_handlers(app)

# Routes
app.include_router(health.router, prefix=settings.API_PREFIX)
app.include_router(auth.router, prefix=settings.API_PREFIX)
app.include_router(todos.router, prefix=settings.API_PREFIX)
app.include_router(upload.router, prefix=settings.API_PREFIX)

# Fichiers uploadés
app.mount(PUBLIC_PREFIX, StaticFiles(directory=ensure_uploads_directory(settings.UPLOADS_DIR)), name="uploads")
