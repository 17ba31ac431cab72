from typing import Any, Dict, List, Optional
from datetime import datetime

from pydantic import AliasChoices, Field

from schemas.base import SchemaBase
from schemas.reservas import ReservaRead


class ConfigUpdate(SchemaBase):
    value: Any = None
    description: Optional[str] = None


class ConfigRead(SchemaBase):
    key: str
    value: Any = None
    description: Optional[str] = None
    updated_at: datetime


class ConfigActualizada(SchemaBase):
    message: str
    config: ConfigRead


class LogRead(SchemaBase):
    id: int
    level: str
    message: Optional[str] = None
    user_id: Optional[int] = None
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    action: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = Field(
        None,
        validation_alias=AliasChoices("metadatos", "metadata"),
    )
    created_at: datetime


class UsuarioReserva(SchemaBase):
    id: int
    name: str
    email: str


class ReservaReciente(ReservaRead):
    usuario: Optional[UsuarioReserva] = None


class EstadisticasRead(SchemaBase):
    total_users: int
    total_hotels: int
    total_reservations: int
    total_revenue: float
    recent_reservations: List[ReservaReciente]
