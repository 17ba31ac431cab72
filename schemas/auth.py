"""
Schemas Pydantic para registro, login y perfil
"""
from typing import List, Optional
from datetime import datetime
from pydantic import AliasChoices, EmailStr, Field, field_validator

from schemas.base import SchemaBase


class RegistroRequest(SchemaBase):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)
    phone: Optional[str] = Field(None, max_length=30)
    country: Optional[str] = Field(None, max_length=60)

    @field_validator("name")
    @classmethod
    def validar_nombre(cls, v):
        if not v.strip():
            raise ValueError("El nombre es requerido")
        return v.strip()


class LoginRequest(SchemaBase):
    email: str = Field(..., min_length=1, max_length=150)
    password: str = Field(..., min_length=1, max_length=128)


class UsuarioPublico(SchemaBase):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    country: Optional[str] = None


class AuthResponse(SchemaBase):
    message: str
    token: str
    user: UsuarioPublico


class PerfilRead(UsuarioPublico):
    avatar: Optional[str] = None
    rol: str
    favorites: List[int] = Field(
        default_factory=list,
        validation_alias=AliasChoices("favorite_ids", "favorites"),
    )
    created_at: datetime


class PerfilUpdate(SchemaBase):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)
    country: Optional[str] = Field(None, max_length=60)


class PerfilActualizado(SchemaBase):
    message: str
    user: PerfilRead


class AvatarResponse(SchemaBase):
    message: str
    avatar_url: str


class TokenData(SchemaBase):
    """Identidad extraída del JWT"""
    user_id: int
    email: str
