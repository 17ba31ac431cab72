"""
Schemas de destinos, experiencias y compras de destinos
"""
from typing import List, Optional
from datetime import datetime
from pydantic import AliasChoices, EmailStr, Field, field_validator, model_validator

from schemas.base import SchemaBase, Coordenadas
from schemas.hoteles import ResenaRead
from utils.timezone import to_utc_naive


# ========== DESTINOS ==========

class DestinoBase(SchemaBase):
    description: Optional[str] = None
    country: Optional[str] = Field(None, max_length=60)
    state: Optional[str] = Field(None, max_length=100)
    city: Optional[str] = Field(None, max_length=100)
    images: Optional[List[str]] = None
    coordinates: Optional[Coordenadas] = None
    attractions: Optional[List[str]] = None
    best_time_to_visit: Optional[str] = Field(None, max_length=100)
    average_temperature: Optional[str] = Field(None, max_length=50)
    currency: Optional[str] = Field(None, max_length=10)
    language: Optional[str] = Field(None, max_length=50)
    timezone: Optional[str] = Field(None, max_length=60)
    popular_with: Optional[List[str]] = None
    tags: Optional[List[str]] = None


class DestinoCreate(DestinoBase):
    name: str = Field(..., min_length=1, max_length=150)


class DestinoUpdate(DestinoBase):
    name: Optional[str] = Field(None, min_length=1, max_length=150)

    @model_validator(mode="before")
    def validar_datos(cls, data):
        if isinstance(data, dict) and data:
            return data
        raise ValueError("Se requiere al menos un campo para actualizar")


class DestinoRead(SchemaBase):
    id: int
    name: str
    description: Optional[str] = None
    country: str
    state: Optional[str] = None
    city: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    coordinates: Optional[Coordenadas] = None
    attractions: List[str] = Field(default_factory=list)
    best_time_to_visit: Optional[str] = None
    average_temperature: Optional[str] = None
    currency: str
    language: str
    timezone: Optional[str] = None
    popular_with: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    rating: float = 0
    created_at: datetime


class DestinoDetalle(DestinoRead):
    reviews: List[ResenaRead] = Field(
        default_factory=list,
        validation_alias=AliasChoices("resenas", "reviews"),
    )


class DestinoGuardado(SchemaBase):
    message: str
    destination: DestinoDetalle


# ========== EXPERIENCIAS ==========

_DIFICULTAD = "^(easy|moderate|challenging)$"


class ExperienciaBase(SchemaBase):
    description: Optional[str] = None
    location: Optional[str] = Field(None, max_length=200)
    duration: Optional[str] = Field(None, max_length=50)
    price: Optional[float] = Field(None, ge=0)
    images: Optional[List[str]] = None
    includes: Optional[List[str]] = None
    requirements: Optional[List[str]] = None
    max_participants: Optional[int] = Field(None, ge=1)
    min_age: Optional[int] = Field(None, ge=0)


class ExperienciaCreate(ExperienciaBase):
    title: str = Field(..., min_length=1, max_length=150)
    category: str = Field(..., min_length=1, max_length=30)
    difficulty: str = Field("easy", pattern=_DIFICULTAD)


class ExperienciaUpdate(ExperienciaBase):
    title: Optional[str] = Field(None, min_length=1, max_length=150)
    category: Optional[str] = Field(None, min_length=1, max_length=30)
    difficulty: Optional[str] = Field(None, pattern=_DIFICULTAD)
    is_active: Optional[bool] = None

    @model_validator(mode="before")
    def validar_datos(cls, data):
        if isinstance(data, dict) and data:
            return data
        raise ValueError("Se requiere al menos un campo para actualizar")


class ExperienciaRead(SchemaBase):
    id: int
    title: str
    description: Optional[str] = None
    category: str
    location: Optional[str] = None
    duration: Optional[str] = None
    price: Optional[float] = None
    images: List[str] = Field(default_factory=list)
    includes: List[str] = Field(default_factory=list)
    requirements: List[str] = Field(default_factory=list)
    difficulty: str
    max_participants: Optional[int] = None
    min_age: Optional[int] = None
    rating: float = 0
    is_active: bool
    created_at: datetime


class ExperienciaDetalle(ExperienciaRead):
    reviews: List[ResenaRead] = Field(
        default_factory=list,
        validation_alias=AliasChoices("resenas", "reviews"),
    )


class ExperienciaGuardada(SchemaBase):
    message: str
    experience: ExperienciaDetalle


# ========== COMPRAS DE DESTINOS ==========

class DestinoSnapshot(SchemaBase):
    id: Optional[int] = None
    name: str = Field(..., min_length=1, max_length=150)
    category: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    coordinates: Optional[List[float]] = None
    price: float = Field(..., ge=0)
    rating: Optional[float] = None
    schedule: Optional[str] = None


class DetalleCompraCreate(SchemaBase):
    quantity: int = Field(..., ge=1)
    visit_date: datetime
    visit_time: Optional[str] = Field(None, max_length=20)
    visitor_name: str = Field(..., min_length=1, max_length=100)
    visitor_email: EmailStr
    visitor_phone: str = Field(..., min_length=3, max_length=30)

    @field_validator("visit_date")
    @classmethod
    def normalizar_fecha(cls, v: datetime) -> datetime:
        return to_utc_naive(v)


class CompraCreate(SchemaBase):
    destination: DestinoSnapshot
    purchase_details: DetalleCompraCreate


class DetalleCompraRead(SchemaBase):
    quantity: int
    visit_date: datetime
    visit_time: Optional[str] = None
    visitor_name: str
    visitor_email: str
    visitor_phone: str
    total: float


class CompraRead(SchemaBase):
    id: int
    user_id: int
    user_email: str
    destination: DestinoSnapshot
    purchase_details: DetalleCompraRead
    status: str
    purchase_date: datetime
    transaction_id: str
    pdf_url: Optional[str] = None


class CompraCreada(SchemaBase):
    message: str
    purchase: CompraRead
