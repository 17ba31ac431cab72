"""
Motor de reservaciones

Creación, cancelación y consulta de disponibilidad. La capacidad de cada
hotel es fija (CAPACIDAD_HOTEL) y la ocupación se calcula con un traslape
semiabierto [checkin, checkout).
"""
import random
import string
import time
from datetime import datetime
from typing import Dict, Optional

from sqlalchemy.orm import Session

from config import CAPACIDAD_HOTEL, PREFIJO_RESERVACION
from models.hotel import Hotel
from models.reserva import Reserva, EstadoReservaEnum, ESTADOS_ACTIVOS, calcular_noches
from models.usuario import Usuario
from services.auditoria import registrar_log
from services.documentos import generar_pdf_reserva
from utils.errores import ErrorConflicto, ErrorNoEncontrado, ErrorPolitica, ErrorValidacion
from utils.timezone import inicio_de_hoy_utc, utc_now

_ALFABETO_BASE36 = string.digits + string.ascii_uppercase


def generar_sufijo(longitud: int = 6) -> str:
    return "".join(random.choices(_ALFABETO_BASE36, k=longitud))


def generar_numero_reservacion(ahora_ms: Optional[int] = None) -> str:
    """VBD-<últimos 6 dígitos del timestamp en ms>-<6 caracteres base36>"""
    if ahora_ms is None:
        ahora_ms = int(time.time() * 1000)
    return f"{PREFIJO_RESERVACION}-{str(ahora_ms)[-6:]}-{generar_sufijo()}"


def validar_fechas_estancia(checkin: datetime, checkout: datetime, hoy: Optional[datetime] = None) -> None:
    hoy = hoy or inicio_de_hoy_utc()
    if checkin < hoy:
        raise ErrorValidacion("La fecha de check-in no puede ser anterior a hoy")
    if checkout <= checkin:
        raise ErrorValidacion("La fecha de check-out debe ser posterior al check-in")


def calcular_total(precio: float, noches: int) -> float:
    return precio * noches


def horas_hasta_checkin(checkin: datetime, ahora: Optional[datetime] = None) -> float:
    return (checkin - (ahora or utc_now())).total_seconds() / 3600


def validar_ventana_cancelacion(checkin: datetime, horas_ventana: float, ahora: Optional[datetime] = None) -> None:
    """Falla solo si faltan menos de `horas_ventana` horas para el check-in"""
    if horas_hasta_checkin(checkin, ahora) < horas_ventana:
        raise ErrorPolitica(
            f"No se puede cancelar con menos de {horas_ventana:g} horas de anticipación"
        )


class ReservaService:

    @staticmethod
    def _numero_unico(db: Session) -> str:
        while True:
            numero = generar_numero_reservacion()
            existe = db.query(Reserva.id).filter(Reserva.reservation_number == numero).first()
            if not existe:
                return numero

    @staticmethod
    def crear_reserva(
        db: Session,
        usuario_id: int,
        hotel_id: int,
        checkin: datetime,
        checkout: datetime,
        adults: int,
        children: int,
        room_type: str,
    ) -> Reserva:
        """
        Crea una reservación confirmada y luego su comprobante PDF

        El PDF se escribe en una segunda transacción: si falla, la
        reservación queda creada sin pdf_url y el error se registra.

        Raises:
            ErrorValidacion: campos faltantes o fechas inválidas
            ErrorNoEncontrado: el hotel no existe
        """
        if not all([hotel_id, checkin, checkout, adults, room_type]):
            raise ErrorValidacion("Todos los campos son requeridos")
        validar_fechas_estancia(checkin, checkout)

        hotel = db.query(Hotel).filter(Hotel.id == hotel_id).first()
        if not hotel:
            raise ErrorNoEncontrado("Hotel no encontrado")

        noches = calcular_noches(checkin, checkout)
        reserva = Reserva(
            user_id=usuario_id,
            hotel_id=hotel.id,
            checkin=checkin,
            checkout=checkout,
            adults=adults,
            children=children or 0,
            room_type=room_type,
            total=calcular_total(hotel.price, noches),
            status=EstadoReservaEnum.CONFIRMADA.value,
            reservation_number=ReservaService._numero_unico(db),
        )
        db.add(reserva)
        db.commit()
        db.refresh(reserva)

        usuario = db.query(Usuario).filter(Usuario.id == usuario_id).first()
        try:
            reserva.pdf_url = generar_pdf_reserva(reserva, hotel, usuario)
            db.commit()
        except Exception as e:
            db.rollback()
            registrar_log(
                "error", "Error generando PDF de reservación", usuario_id, "generate_pdf",
                {"reservation_id": reserva.id, "error": str(e)},
            )
        db.refresh(reserva)
        return reserva

    @staticmethod
    def obtener_reserva_usuario(db: Session, reserva_id: int, usuario_id: int) -> Reserva:
        reserva = (
            db.query(Reserva)
            .filter(Reserva.id == reserva_id, Reserva.user_id == usuario_id)
            .first()
        )
        if not reserva:
            raise ErrorNoEncontrado("Reservación no encontrada")
        return reserva

    @staticmethod
    def cancelar_reserva(
        db: Session,
        reserva_id: int,
        usuario_id: int,
        horas_ventana: float,
        ahora: Optional[datetime] = None,
    ) -> Reserva:
        """
        Raises:
            ErrorNoEncontrado: la reservación no existe o no es del usuario
            ErrorConflicto: ya está cancelada o completada
            ErrorPolitica: fuera de la ventana de cancelación
        """
        reserva = ReservaService.obtener_reserva_usuario(db, reserva_id, usuario_id)

        if reserva.status == EstadoReservaEnum.CANCELADA.value:
            raise ErrorConflicto("La reservación ya está cancelada")
        if reserva.status == EstadoReservaEnum.COMPLETADA.value:
            raise ErrorConflicto("No se puede cancelar una reservación completada")

        validar_ventana_cancelacion(reserva.checkin, horas_ventana, ahora)

        reserva.status = EstadoReservaEnum.CANCELADA.value
        db.commit()
        db.refresh(reserva)
        return reserva

    @staticmethod
    def contar_reservas_traslapadas(db: Session, hotel_id: int, checkin: datetime, checkout: datetime) -> int:
        return (
            db.query(Reserva)
            .filter(
                Reserva.hotel_id == hotel_id,
                Reserva.status.in_(ESTADOS_ACTIVOS),
                Reserva.checkin < checkout,
                Reserva.checkout > checkin,
            )
            .count()
        )

    @staticmethod
    def verificar_disponibilidad(
        db: Session,
        hotel_id: int,
        checkin: Optional[datetime],
        checkout: Optional[datetime],
    ) -> Dict[str, object]:
        if not checkin or not checkout:
            raise ErrorValidacion("Fechas de check-in y check-out son requeridas")
        if checkout <= checkin:
            raise ErrorValidacion("La fecha de check-out debe ser posterior al check-in")

        ocupadas = ReservaService.contar_reservas_traslapadas(db, hotel_id, checkin, checkout)
        disponibles = CAPACIDAD_HOTEL - ocupadas
        return {
            "available": disponibles > 0,
            "available_rooms": disponibles,
            "total_rooms": CAPACIDAD_HOTEL,
            "booked_rooms": ocupadas,
        }
