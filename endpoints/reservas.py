"""
Endpoints de reservaciones del huésped
"""
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Path, Query, status
from fastapi.responses import FileResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from database import conexion
from models.reserva import Reserva
from schemas.auth import TokenData
from schemas.base import Paginado
from schemas.reservas import ReservaCreate, ReservaRead, ReservaCreada, ReservaCancelada
from services.auditoria import registrar_log, error_de_base_de_datos
from services.configuracion import ServicioConfiguracion
from services.documentos import ruta_de_url
from services.notificaciones import notificar_reserva
from services.reservas import ReservaService
from utils.dependencies import get_current_user, get_configuracion
from utils.errores import ErrorNoEncontrado
from utils.paginacion import ParametrosPaginacion, paginar

router = APIRouter(prefix="/api/reservations", tags=["Reservaciones"])
router_pdf = APIRouter(tags=["Reservaciones"])


@router.post("", response_model=ReservaCreada, status_code=status.HTTP_201_CREATED)
def crear_reservacion(
    datos: ReservaCreate,
    background_tasks: BackgroundTasks,
    identidad: TokenData = Depends(get_current_user),
    configuracion: ServicioConfiguracion = Depends(get_configuracion),
    db: Session = Depends(conexion.get_db),
):
    """
    Crea la reservación, su PDF y programa el correo de confirmación
    """
    try:
        reserva = ReservaService.crear_reserva(
            db,
            usuario_id=identidad.user_id,
            hotel_id=datos.hotel_id,
            checkin=datos.checkin,
            checkout=datos.checkout,
            adults=datos.adults,
            children=datos.children,
            room_type=datos.room_type,
        )
    except SQLAlchemyError as e:
        raise error_de_base_de_datos(db, e, "Error al crear la reservación", identidad.user_id, "create_reservation")

    registrar_log(
        "info", "Reservación creada exitosamente", identidad.user_id, "create_reservation",
        {"reservation_id": reserva.id, "reservation_number": reserva.reservation_number, "total": reserva.total},
    )

    if configuracion.notificaciones_email_activas():
        background_tasks.add_task(notificar_reserva, reserva.id)

    return {
        "message": "Reservación creada exitosamente",
        "reservation": reserva,
        "pdf_url": reserva.pdf_url,
    }


@router.get("", response_model=Paginado[ReservaRead])
def listar_reservaciones(
    status_filtro: Optional[str] = Query(None, alias="status"),
    paginacion: ParametrosPaginacion = Depends(),
    identidad: TokenData = Depends(get_current_user),
    db: Session = Depends(conexion.get_db),
):
    consulta = (
        db.query(Reserva)
        .options(joinedload(Reserva.hotel))
        .filter(Reserva.user_id == identidad.user_id)
    )
    if status_filtro:
        consulta = consulta.filter(Reserva.status == status_filtro)

    reservas, total = paginar(consulta, paginacion, Reserva.created_at.desc(), Reserva.id.desc())
    return Paginado[ReservaRead].crear(reservas, total, paginacion.page, paginacion.limit)


@router.get("/{reserva_id}", response_model=ReservaRead)
def obtener_reservacion(
    reserva_id: int = Path(..., gt=0),
    identidad: TokenData = Depends(get_current_user),
    db: Session = Depends(conexion.get_db),
):
    return ReservaService.obtener_reserva_usuario(db, reserva_id, identidad.user_id)


@router.put("/{reserva_id}/cancel", response_model=ReservaCancelada)
def cancelar_reservacion(
    background_tasks: BackgroundTasks,
    reserva_id: int = Path(..., gt=0),
    identidad: TokenData = Depends(get_current_user),
    configuracion: ServicioConfiguracion = Depends(get_configuracion),
    db: Session = Depends(conexion.get_db),
):
    """
    Cancela la reservación si aún está dentro de la ventana permitida
    """
    try:
        reserva = ReservaService.cancelar_reserva(
            db, reserva_id, identidad.user_id, configuracion.horas_cancelacion()
        )
    except SQLAlchemyError as e:
        raise error_de_base_de_datos(db, e, "Error al cancelar la reservación", identidad.user_id, "cancel_reservation")

    registrar_log(
        "info", "Reservación cancelada", identidad.user_id, "cancel_reservation",
        {"reservation_id": reserva.id, "reservation_number": reserva.reservation_number},
    )

    if configuracion.notificaciones_email_activas():
        background_tasks.add_task(notificar_reserva, reserva.id, True)

    return {"message": "Reservación cancelada exitosamente", "reservation": reserva}


@router_pdf.get("/reservation-pdf/{reserva_id}", response_class=FileResponse)
def descargar_pdf_reservacion(
    reserva_id: int = Path(..., gt=0),
    identidad: TokenData = Depends(get_current_user),
    db: Session = Depends(conexion.get_db),
):
    reserva = db.query(Reserva).filter(
        Reserva.id == reserva_id,
        Reserva.user_id == identidad.user_id,
    ).first()
    if not reserva or not reserva.pdf_url:
        raise ErrorNoEncontrado("PDF no encontrado")

    ruta = ruta_de_url(reserva.pdf_url)
    if not ruta.exists():
        raise ErrorNoEncontrado("Archivo PDF no encontrado")

    return FileResponse(
        ruta,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="reservacion_{reserva.reservation_number}.pdf"'},
    )
