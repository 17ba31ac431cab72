"""
Reseñas de hoteles, destinos y experiencias

Cada objetivo tiene su propia tabla de reseñas; el rating promedio se
materializa en el objetivo y se recalcula en la misma transacción.
"""
from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship, declared_attr

from database.conexion import Base


class ResenaMixin:
    id = Column(Integer, primary_key=True, index=True)
    user_name = Column(String(100), nullable=True)  # nombre al momento de escribir la reseña
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    date = Column(DateTime, default=datetime.utcnow, nullable=False)

    @declared_attr
    def user_id(cls):
        return Column(Integer, ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False)


class HotelResena(ResenaMixin, Base):
    __tablename__ = "hotel_resenas"
    __table_args__ = (
        UniqueConstraint("hotel_id", "user_id", name="uq_hotel_resena_usuario"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_hotel_resena_rating"),
    )

    hotel_id = Column(Integer, ForeignKey("hoteles.id", ondelete="CASCADE"), nullable=False, index=True)
    hotel = relationship("Hotel", back_populates="resenas")


class DestinoResena(ResenaMixin, Base):
    __tablename__ = "destino_resenas"
    __table_args__ = (
        UniqueConstraint("destino_id", "user_id", name="uq_destino_resena_usuario"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_destino_resena_rating"),
    )

    destino_id = Column(Integer, ForeignKey("destinos.id", ondelete="CASCADE"), nullable=False, index=True)
    destino = relationship("Destino", back_populates="resenas")


class ExperienciaResena(ResenaMixin, Base):
    __tablename__ = "experiencia_resenas"
    __table_args__ = (
        UniqueConstraint("experiencia_id", "user_id", name="uq_experiencia_resena_usuario"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_experiencia_resena_rating"),
    )

    experiencia_id = Column(Integer, ForeignKey("experiencias.id", ondelete="CASCADE"), nullable=False, index=True)
    experiencia = relationship("Experiencia", back_populates="resenas")
