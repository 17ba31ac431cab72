import asyncio
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

import config
from database.conexion import Base, engine
import models  # 👈 asegura que todos los modelos estén registrados
from services.auditoria import ciclo_limpieza_logs, registrar_log
from services.datos_iniciales import insertar_datos_ejemplo
from utils.errores import ErrorDominio
from utils.logging_utils import log_event
from utils.rate_limiter import setup_rate_limiting

try:
    Base.metadata.create_all(bind=engine)
    log_event("sistema", "sistema", "Tablas creadas (o ya existian)")
except Exception as e:
    log_event("sistema", "sistema", "Error creando tablas", f"error={e}", nivel="error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    config.UPLOADS_DIR.mkdir(parents=True, exist_ok=True)
    if config.SEED_DATA:
        insertar_datos_ejemplo()
    limpieza = asyncio.create_task(ciclo_limpieza_logs())
    log_event("sistema", "sistema", f"Servidor {config.NOMBRE_SITIO} iniciado")
    yield
    limpieza.cancel()
    with suppress(asyncio.CancelledError):
        await limpieza


app = FastAPI(title=f"{config.NOMBRE_SITIO} API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],         # GET, POST, PUT, DELETE...
    allow_headers=["*"],
)
setup_rate_limiting(app)


# ========== MANEJO DE ERRORES ==========

def _mensaje_validacion(errores) -> str:
    if not errores:
        return "Datos inválidos"
    error = errores[0]
    campo = ".".join(str(p) for p in error.get("loc", ()) if p not in ("body", "query", "path"))
    if error.get("type") == "missing":
        return f"El campo '{campo}' es requerido" if campo else "Todos los campos son requeridos"
    mensaje = str(error.get("msg", "Datos inválidos")).replace("Value error, ", "")
    return f"{campo}: {mensaje}" if campo else mensaje


@app.exception_handler(ErrorDominio)
async def manejar_error_dominio(request: Request, exc: ErrorDominio):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.mensaje})


@app.exception_handler(StarletteHTTPException)
async def manejar_http_exception(request: Request, exc: StarletteHTTPException):
    mensaje = exc.detail
    if exc.status_code == 404 and exc.detail == "Not Found":
        mensaje = "Ruta no encontrada"
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": mensaje},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def manejar_validacion(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": _mensaje_validacion(exc.errors())})


@app.exception_handler(Exception)
def manejar_error_global(request: Request, exc: Exception):
    registrar_log(
        "error", "Error global del servidor", None, "server_error",
        {"error": str(exc), "path": request.url.path, "method": request.method},
    )
    return JSONResponse(status_code=500, content={"error": "Error interno del servidor"})


# ========== ROUTERS ==========

from endpoints import auth, hoteles, reservas, favoritos, admin, destinos, experiencias, compras
app.include_router(auth.router)
app.include_router(hoteles.router)
app.include_router(reservas.router)
app.include_router(reservas.router_pdf)
app.include_router(favoritos.router)
app.include_router(admin.router)
app.include_router(destinos.router)
app.include_router(experiencias.router)
app.include_router(compras.router)


@app.get("/")
def read_root():
    return {"message": f"¡Bienvenido a la API de {config.NOMBRE_SITIO}!"}
