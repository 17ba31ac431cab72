"""
Schema base de la API: claves camelCase en JSON, snake_case en Python
"""
import math
from typing import Generic, List, TypeVar, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class SchemaBase(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Coordenadas(SchemaBase):
    lat: Optional[float] = None
    lng: Optional[float] = None


class Paginado(SchemaBase, Generic[T]):
    items: List[T]
    total_pages: int
    current_page: int
    total: int

    @classmethod
    def crear(cls, items: List, total: int, page: int, limit: int) -> "Paginado":
        return cls(
            items=items,
            total_pages=math.ceil(total / limit) if limit else 0,
            current_page=page,
            total=total,
        )


class Mensaje(SchemaBase):
    message: str
