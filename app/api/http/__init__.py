from app.api.http.health import router as health_router
from app.api.http.texts import router as texts_router

__all__ = [
    "health_router",
    "texts_router"
]
