from typing import Optional
from datetime import datetime
from pydantic import Field, field_validator

from schemas.base import SchemaBase
from schemas.hoteles import HotelResumen
from utils.timezone import to_utc_naive


class ReservaCreate(SchemaBase):
    hotel_id: int
    checkin: datetime
    checkout: datetime
    adults: int = Field(..., ge=1)
    children: int = Field(0, ge=0)
    room_type: str = Field(..., min_length=1, max_length=50)

    @field_validator("checkin", "checkout")
    @classmethod
    def normalizar_fecha(cls, v: datetime) -> datetime:
        return to_utc_naive(v)

    @field_validator("children", mode="before")
    @classmethod
    def menores_por_defecto(cls, v):
        return 0 if v is None else v


class ReservaRead(SchemaBase):
    id: int
    user_id: int
    hotel_id: int
    checkin: datetime
    checkout: datetime
    adults: int
    children: int
    room_type: str
    total: float
    nights: int
    status: str
    pdf_url: Optional[str] = None
    reservation_number: str
    created_at: datetime
    hotel: Optional[HotelResumen] = None


class ReservaCreada(SchemaBase):
    message: str
    reservation: ReservaRead
    pdf_url: Optional[str] = None


class ReservaCancelada(SchemaBase):
    message: str
    reservation: ReservaRead
