"""
Rate Limiting Middleware
Protección contra ataques de fuerza bruta y abuso de API
"""
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from fastapi import Request
from fastapi.responses import JSONResponse
import os

from config import RATE_LIMIT_DEFAULT, RATE_LIMIT_ENABLED

# Configurar limiter
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[RATE_LIMIT_DEFAULT],
    storage_uri=os.getenv("REDIS_URL", "memory://"),  # Usar Redis en producción
    strategy="fixed-window",
    enabled=RATE_LIMIT_ENABLED,
)


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content={"error": f"Demasiadas solicitudes. Límite: {exc.detail}"},
    )


def setup_rate_limiting(app):
    """Configurar rate limiting en la aplicación FastAPI"""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    return limiter
