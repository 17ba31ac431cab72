"""
Logs de auditoría en base de datos

registrar_log nunca lanza: si la escritura falla, el error queda solo en
el logger del proceso (utils.logging_utils).
"""
import asyncio
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from config import DIAS_RETENCION_LOGS, INTERVALO_LIMPIEZA_LOGS_SEGUNDOS
from database import conexion
from models.sistema import LogSistema
from utils.errores import ErrorInterno
from utils.logging_utils import log_event

NIVELES = ("info", "warning", "error")


def registrar_log(
    nivel: str,
    mensaje: str,
    usuario_id: Optional[int] = None,
    accion: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> None:
    """Inserta un evento de auditoría en su propia sesión"""
    log_event(accion or "sistema", str(usuario_id or "-"), mensaje, _detalle(metadata), nivel=nivel)

    db = conexion.SessionLocal()
    try:
        db.add(LogSistema(
            level=nivel if nivel in NIVELES else "info",
            message=mensaje,
            user_id=usuario_id,
            action=accion,
            metadatos=metadata or {},
        ))
        db.commit()
    except Exception as e:
        db.rollback()
        log_event("auditoria", str(usuario_id or "-"), "Error creando log", f"accion={accion} error={e}", nivel="error")
    finally:
        db.close()


def _detalle(metadata: Optional[Dict[str, Any]]) -> str:
    if not metadata:
        return ""
    return " ".join(f"{k}={v}" for k, v in metadata.items())


def error_de_base_de_datos(
    db: Session,
    error: Exception,
    mensaje: str,
    usuario_id: Optional[int],
    accion: str,
) -> ErrorInterno:
    """Rollback + log de error; devuelve el ErrorInterno para que el endpoint lo lance"""
    db.rollback()
    registrar_log("error", mensaje, usuario_id, accion, {"error": str(error)})
    return ErrorInterno(mensaje)


def limpiar_logs_antiguos(db: Optional[Session] = None, ahora: Optional[datetime] = None) -> int:
    """
    Borra logs con más de DIAS_RETENCION_LOGS días, salvo los de nivel error

    Returns:
        int: cantidad de registros eliminados
    """
    propia = db is None
    if propia:
        db = conexion.SessionLocal()
    limite = (ahora or datetime.utcnow()) - timedelta(days=DIAS_RETENCION_LOGS)
    try:
        eliminados = (
            db.query(LogSistema)
            .filter(LogSistema.created_at < limite, LogSistema.level != "error")
            .delete(synchronize_session=False)
        )
        db.commit()
        log_event("auditoria", "sistema", "Logs antiguos limpiados", f"eliminados={eliminados}")
        return eliminados
    finally:
        if propia:
            db.close()


async def ciclo_limpieza_logs(intervalo: float = INTERVALO_LIMPIEZA_LOGS_SEGUNDOS) -> None:
    """Ejecuta la limpieza cada `intervalo` segundos mientras viva la aplicación"""
    while True:
        await asyncio.sleep(intervalo)
        try:
            await asyncio.to_thread(limpiar_logs_antiguos)
        except Exception as e:
            log_event("auditoria", "sistema", "Error limpiando logs antiguos", f"error={e}", nivel="error")
