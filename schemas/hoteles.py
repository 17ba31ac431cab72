from typing import List, Optional
from datetime import datetime
from pydantic import Field, AliasChoices, field_validator

from schemas.base import SchemaBase, Coordenadas
from utils.timezone import to_utc_naive


class ResenaCreate(SchemaBase):
    rating: Optional[int] = None
    comment: Optional[str] = Field(None, max_length=2000)


class ResenaRead(SchemaBase):
    id: int
    user_id: int
    user_name: Optional[str] = None
    rating: int
    comment: Optional[str] = None
    date: datetime


class HotelRead(SchemaBase):
    id: int
    name: str
    location: str
    description: Optional[str] = None
    price: float
    amenities: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    videos: List[str] = Field(default_factory=list)
    rating: float = 0
    coordinates: Optional[Coordenadas] = None
    city: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    created_at: datetime


class HotelDetalle(HotelRead):
    reviews: List[ResenaRead] = Field(
        default_factory=list,
        validation_alias=AliasChoices("resenas", "reviews"),
    )


class HotelResumen(SchemaBase):
    """Datos del hotel embebidos en una reservación"""
    id: int
    name: str
    location: str
    images: List[str] = Field(default_factory=list)
    price: float
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


class ResenaAgregada(SchemaBase):
    message: str
    hotel: HotelDetalle


class DisponibilidadRequest(SchemaBase):
    checkin: Optional[datetime] = None
    checkout: Optional[datetime] = None

    @field_validator("checkin", "checkout")
    @classmethod
    def normalizar_fecha(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_utc_naive(v) if v else v


class DisponibilidadRead(SchemaBase):
    available: bool
    available_rooms: int
    total_rooms: int
    booked_rooms: int


class FavoritosActualizados(SchemaBase):
    message: str
    favorites: List[int]
