"""
Endpoints de administración: estadísticas, configuración y logs
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from database import conexion
from models.hotel import Hotel
from models.reserva import Reserva, ESTADOS_INGRESO
from models.sistema import LogSistema
from models.usuario import Usuario
from schemas.admin import ConfigUpdate, ConfigActualizada, EstadisticasRead, LogRead
from schemas.base import Paginado
from services.auditoria import registrar_log, error_de_base_de_datos
from services.configuracion import ServicioConfiguracion
from utils.dependencies import get_configuracion, require_admin

router = APIRouter(prefix="/api", tags=["Administración"])

RESERVAS_RECIENTES = 10


@router.get("/admin/stats", response_model=EstadisticasRead)
def obtener_estadisticas(
    admin: Usuario = Depends(require_admin),
    db: Session = Depends(conexion.get_db),
):
    """
    Totales del sistema e ingresos de reservaciones confirmadas o completadas
    """
    ingresos = (
        db.query(func.coalesce(func.sum(Reserva.total), 0))
        .filter(Reserva.status.in_(ESTADOS_INGRESO))
        .scalar()
    )
    recientes = (
        db.query(Reserva)
        .options(joinedload(Reserva.usuario), joinedload(Reserva.hotel))
        .order_by(Reserva.created_at.desc(), Reserva.id.desc())
        .limit(RESERVAS_RECIENTES)
        .all()
    )
    return {
        "total_users": db.query(Usuario).count(),
        "total_hotels": db.query(Hotel).count(),
        "total_reservations": db.query(Reserva).count(),
        "total_revenue": float(ingresos or 0),
        "recent_reservations": recientes,
    }


# ========== CONFIGURACIÓN ==========

@router.get("/config", response_model=Dict[str, Any])
def obtener_configuracion(configuracion: ServicioConfiguracion = Depends(get_configuracion)):
    """Configuración pública del sitio como objeto plano"""
    return configuracion.todas()


@router.put("/config/{key}", response_model=ConfigActualizada)
def actualizar_configuracion(
    datos: ConfigUpdate,
    key: str = Path(..., min_length=1, max_length=100),
    admin: Usuario = Depends(require_admin),
    configuracion: ServicioConfiguracion = Depends(get_configuracion),
    db: Session = Depends(conexion.get_db),
):
    try:
        config = configuracion.actualizar(key, datos.value, datos.description)
    except SQLAlchemyError as e:
        raise error_de_base_de_datos(db, e, "Error al actualizar la configuración", admin.id, "update_config")

    registrar_log("info", "Configuración actualizada", admin.id, "update_config", {"key": key, "value": datos.value})
    return {"message": "Configuración actualizada exitosamente", "config": config}


# ========== LOGS ==========

@router.get("/logs", response_model=Paginado[LogRead])
def listar_logs(
    level: Optional[str] = Query(None, pattern="^(info|warning|error)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    admin: Usuario = Depends(require_admin),
    db: Session = Depends(conexion.get_db),
):
    consulta = (
        db.query(LogSistema, Usuario.name, Usuario.email)
        .outerjoin(Usuario, Usuario.id == LogSistema.user_id)
    )
    if level:
        consulta = consulta.filter(LogSistema.level == level)

    total = consulta.order_by(None).count()
    filas = (
        consulta.order_by(LogSistema.created_at.desc(), LogSistema.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    logs = [
        LogRead.model_validate(log).model_copy(update={"user_name": nombre, "user_email": email})
        for log, nombre, email in filas
    ]
    return Paginado[LogRead].crear(logs, total, page, limit)
