from datetime import datetime

from sqlalchemy import Column, Integer, String, Float, DateTime, Text, JSON, Index
from sqlalchemy.orm import relationship

from database.conexion import Base


class Hotel(Base):
    """Hotel del catálogo"""
    __tablename__ = "hoteles"
    __table_args__ = (
        Index("idx_hotel_precio", "price"),
        Index("idx_hotel_coordenadas", "lat", "lng"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(150), nullable=False)
    location = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False)
    amenities = Column(JSON, nullable=False, default=list)
    images = Column(JSON, nullable=False, default=list)
    videos = Column(JSON, nullable=False, default=list)
    rating = Column(Float, nullable=False, default=0)
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)
    city = Column(String(100), nullable=False, default="Reynosa")
    address = Column(String(200), nullable=True)
    phone = Column(String(30), nullable=True)
    email = Column(String(150), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    resenas = relationship(
        "HotelResena",
        back_populates="hotel",
        cascade="all, delete-orphan",
        order_by="HotelResena.date",
    )

    @property
    def coordinates(self):
        return {"lat": self.lat, "lng": self.lng}

    def __repr__(self):
        return f"<Hotel(id={self.id}, name='{self.name}')>"
