"""
Modelo de Reservación de hotel
"""
import math

from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Float, Index
from sqlalchemy.orm import relationship
from database.conexion import Base
from datetime import datetime
from enum import Enum


class EstadoReservaEnum(str, Enum):
    """Estados de una reservación"""
    PENDIENTE = "pendiente"
    CONFIRMADA = "confirmada"
    CANCELADA = "cancelada"
    COMPLETADA = "completada"


# Estados que ocupan capacidad del hotel
ESTADOS_ACTIVOS = (EstadoReservaEnum.CONFIRMADA.value, EstadoReservaEnum.PENDIENTE.value)
# Estados que cuentan como ingreso
ESTADOS_INGRESO = (EstadoReservaEnum.CONFIRMADA.value, EstadoReservaEnum.COMPLETADA.value)


def calcular_noches(checkin: datetime, checkout: datetime) -> int:
    """Noches cobrables: días completos o fracción entre checkin y checkout"""
    segundos = (checkout - checkin).total_seconds()
    return math.ceil(segundos / 86400)


class Reserva(Base):
    __tablename__ = "reservas"
    __table_args__ = (
        Index('idx_reserva_usuario', 'user_id'),
        Index('idx_reserva_hotel_estado', 'hotel_id', 'status'),
        Index('idx_reserva_fechas', 'checkin', 'checkout'),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False)
    hotel_id = Column(Integer, ForeignKey("hoteles.id"), nullable=False)

    # Fechas (UTC)
    checkin = Column(DateTime, nullable=False)
    checkout = Column(DateTime, nullable=False)

    adults = Column(Integer, nullable=False, default=1)
    children = Column(Integer, nullable=False, default=0)
    room_type = Column(String(50), nullable=False)
    total = Column(Float, nullable=False)

    status = Column(String(20), nullable=False, default=EstadoReservaEnum.CONFIRMADA.value)
    pdf_url = Column(String(255), nullable=True)
    reservation_number = Column(String(30), unique=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    usuario = relationship("Usuario", back_populates="reservas")
    hotel = relationship("Hotel")

    @property
    def nights(self) -> int:
        return calcular_noches(self.checkin, self.checkout)

    def __repr__(self):
        return f"<Reserva(id={self.id}, numero='{self.reservation_number}', status='{self.status}')>"
