"""
Catálogo turístico: destinos, experiencias y compras de destinos
"""
from datetime import datetime

from sqlalchemy import (
    Column, Integer, String, Float, Boolean, DateTime, Text, JSON, ForeignKey, Index
)
from sqlalchemy.orm import relationship

from database.conexion import Base


class Destino(Base):
    __tablename__ = "destinos"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(150), nullable=False)
    description = Column(Text, nullable=True)
    country = Column(String(60), nullable=False, default="México")
    state = Column(String(100), nullable=True)
    city = Column(String(100), nullable=True)
    images = Column(JSON, nullable=False, default=list)
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)
    attractions = Column(JSON, nullable=False, default=list)
    best_time_to_visit = Column(String(100), nullable=True)
    average_temperature = Column(String(50), nullable=True)
    currency = Column(String(10), nullable=False, default="MXN")
    language = Column(String(50), nullable=False, default="Español")
    timezone = Column(String(60), nullable=True)
    popular_with = Column(JSON, nullable=False, default=list)  # families, couples, business, solo
    tags = Column(JSON, nullable=False, default=list)
    rating = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    resenas = relationship(
        "DestinoResena",
        back_populates="destino",
        cascade="all, delete-orphan",
        order_by="DestinoResena.date",
    )

    @property
    def coordinates(self):
        return {"lat": self.lat, "lng": self.lng}


class Experiencia(Base):
    __tablename__ = "experiencias"
    __table_args__ = (
        Index("idx_experiencia_categoria", "category"),
        Index("idx_experiencia_activa", "is_active"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(150), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(30), nullable=False)  # adventure, cultural, gastronomic, wellness, business
    location = Column(String(200), nullable=True)
    duration = Column(String(50), nullable=True)
    price = Column(Float, nullable=True)
    images = Column(JSON, nullable=False, default=list)
    includes = Column(JSON, nullable=False, default=list)
    requirements = Column(JSON, nullable=False, default=list)
    difficulty = Column(String(20), nullable=False, default="easy")
    max_participants = Column(Integer, nullable=True)
    min_age = Column(Integer, nullable=True)
    rating = Column(Float, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    resenas = relationship(
        "ExperienciaResena",
        back_populates="experiencia",
        cascade="all, delete-orphan",
        order_by="ExperienciaResena.date",
    )


class CompraDestino(Base):
    """Compra de una visita a un destino (snapshot del destino al momento de comprar)"""
    __tablename__ = "compras_destino"
    __table_args__ = (
        Index("idx_compra_usuario", "user_id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False)
    user_email = Column(String(150), nullable=False)

    destination = Column(JSON, nullable=False)

    quantity = Column(Integer, nullable=False)
    visit_date = Column(DateTime, nullable=False)
    visit_time = Column(String(20), nullable=True)
    visitor_name = Column(String(100), nullable=False)
    visitor_email = Column(String(150), nullable=False)
    visitor_phone = Column(String(30), nullable=False)
    total = Column(Float, nullable=False)

    status = Column(String(20), nullable=False, default="confirmada")
    purchase_date = Column(DateTime, default=datetime.utcnow, nullable=False)
    transaction_id = Column(String(40), unique=True, nullable=False)
    pdf_url = Column(String(255), nullable=True)

    usuario = relationship("Usuario")

    @property
    def purchase_details(self):
        return {
            "quantity": self.quantity,
            "visit_date": self.visit_date,
            "visit_time": self.visit_time,
            "visitor_name": self.visitor_name,
            "visitor_email": self.visitor_email,
            "visitor_phone": self.visitor_phone,
            "total": self.total,
        }
