import logging
import time

from fastapi import Request

from app.core.config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger("app.requests")


def configure_logging(settings: Settings):
    # Config unique au démarrage
    logging.basicConfig(level=settings.LOG_LEVEL, format=LOG_FORMAT)
    logging.getLogger("app").setLevel(settings.LOG_LEVEL)


async def log_requests(request: Request, call_next):
    """Middleware qui log méthode, chemin, status et durée de chaque requête."""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed = time.perf_counter() - start
    logger.info(f"{request.method} {request.url.path} - {response.status_code} - {elapsed:.4f}s")
    return response
