"""
Compras de visitas a destinos
"""
from fastapi import APIRouter, BackgroundTasks, Depends, Path, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import conexion
from models.catalogo import CompraDestino
from models.usuario import Usuario
from schemas.base import Paginado
from schemas.catalogo import CompraCreate, CompraCreada, CompraRead
from services.auditoria import registrar_log, error_de_base_de_datos
from services.compras import CompraService
from services.configuracion import ServicioConfiguracion
from services.notificaciones import notificar_compra
from utils.dependencies import get_configuracion, get_usuario_actual
from utils.errores import ErrorNoEncontrado
from utils.paginacion import ParametrosPaginacion, paginar

router = APIRouter(prefix="/api/destination-purchases", tags=["Compras de destinos"])


@router.post("", response_model=CompraCreada, status_code=status.HTTP_201_CREATED)
def crear_compra(
    datos: CompraCreate,
    background_tasks: BackgroundTasks,
    usuario: Usuario = Depends(get_usuario_actual),
    configuracion: ServicioConfiguracion = Depends(get_configuracion),
    db: Session = Depends(conexion.get_db),
):
    try:
        compra = CompraService.crear_compra(
            db,
            usuario,
            datos.destination.model_dump(mode="json"),
            datos.purchase_details.model_dump(),
        )
    except SQLAlchemyError as e:
        raise error_de_base_de_datos(db, e, "Error al registrar la compra", usuario.id, "create_purchase")

    registrar_log(
        "info", "Compra de destino registrada", usuario.id, "create_purchase",
        {"purchase_id": compra.id, "transaction_id": compra.transaction_id, "total": compra.total},
    )

    if configuracion.notificaciones_email_activas():
        background_tasks.add_task(notificar_compra, compra.id)

    return {"message": "Compra realizada exitosamente", "purchase": compra}


@router.get("", response_model=Paginado[CompraRead])
def listar_compras(
    paginacion: ParametrosPaginacion = Depends(),
    usuario: Usuario = Depends(get_usuario_actual),
    db: Session = Depends(conexion.get_db),
):
    consulta = db.query(CompraDestino).filter(CompraDestino.user_id == usuario.id)
    compras, total = paginar(consulta, paginacion, CompraDestino.purchase_date.desc(), CompraDestino.id.desc())
    return Paginado[CompraRead].crear(compras, total, paginacion.page, paginacion.limit)


@router.get("/{compra_id}", response_model=CompraRead)
def obtener_compra(
    compra_id: int = Path(..., gt=0),
    usuario: Usuario = Depends(get_usuario_actual),
    db: Session = Depends(conexion.get_db),
):
    compra = db.query(CompraDestino).filter(
        CompraDestino.id == compra_id,
        CompraDestino.user_id == usuario.id,
    ).first()
    if not compra:
        raise ErrorNoEncontrado("Compra no encontrada")
    return compra
