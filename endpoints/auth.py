"""
Endpoints de cuentas: registro, login, perfil y avatar
"""
import time
from pathlib import Path as RutaArchivo
from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

import config
from database import conexion
from models.usuario import Usuario
from schemas.auth import (
    RegistroRequest, LoginRequest, AuthResponse, PerfilRead,
    PerfilUpdate, PerfilActualizado, AvatarResponse
)
from services.auditoria import registrar_log, error_de_base_de_datos
from utils.auth import verify_password, get_password_hash, create_access_token
from utils.dependencies import get_usuario_actual
from utils.errores import ErrorConflicto, ErrorValidacion
from utils.rate_limiter import limiter


router = APIRouter(prefix="/api", tags=["Autenticación"])


# ========== REGISTRO Y LOGIN ==========

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(config.RATE_LIMIT_AUTH)
def registrar_usuario(
    request: Request,
    datos: RegistroRequest,
    db: Session = Depends(conexion.get_db),
):
    """
    Registra un huésped y devuelve su token de acceso
    """
    email = datos.email.lower()
    try:
        if db.query(Usuario).filter(Usuario.email == email).first():
            registrar_log("warning", "Intento de registro con email existente", None, "register", {"email": email})
            raise ErrorConflicto("El usuario ya existe")

        usuario = Usuario(
            name=datos.name,
            email=email,
            hashed_password=get_password_hash(datos.password),
            phone=datos.phone,
            country=datos.country or "México",
        )
        db.add(usuario)
        db.commit()
        db.refresh(usuario)
    except IntegrityError:
        # Registro concurrente con el mismo email
        db.rollback()
        raise ErrorConflicto("El usuario ya existe")
    except SQLAlchemyError as e:
        raise error_de_base_de_datos(db, e, "Error al registrar el usuario", None, "register")

    registrar_log("info", "Usuario registrado exitosamente", usuario.id, "register", {"email": usuario.email})

    return {
        "message": "Usuario registrado exitosamente",
        "token": create_access_token(usuario.id, usuario.email),
        "user": usuario,
    }


@router.post("/login", response_model=AuthResponse)
@limiter.limit(config.RATE_LIMIT_AUTH)
def login(
    request: Request,
    datos: LoginRequest,
    db: Session = Depends(conexion.get_db),
):
    """
    Inicia sesión con email y contraseña
    """
    email = datos.email.strip().lower()
    usuario = db.query(Usuario).filter(Usuario.email == email).first()

    if not usuario:
        registrar_log("warning", "Intento de login con email inexistente", None, "login_failed", {"email": email})
        raise ErrorValidacion("Credenciales inválidas")

    if not verify_password(datos.password, usuario.hashed_password):
        registrar_log("warning", "Intento de login con contraseña incorrecta", usuario.id, "login_failed", {"email": email})
        raise ErrorValidacion("Credenciales inválidas")

    registrar_log("info", "Usuario inició sesión", usuario.id, "login")

    return {
        "message": "Login exitoso",
        "token": create_access_token(usuario.id, usuario.email),
        "user": usuario,
    }


# ========== PERFIL ==========

@router.get("/profile", response_model=PerfilRead)
def obtener_perfil(usuario: Usuario = Depends(get_usuario_actual)):
    return usuario


@router.put("/profile", response_model=PerfilActualizado)
def actualizar_perfil(
    datos: PerfilUpdate,
    usuario: Usuario = Depends(get_usuario_actual),
    db: Session = Depends(conexion.get_db),
):
    """
    Actualiza nombre, teléfono y país. Campos ausentes no se modifican.
    """
    cambios = datos.model_dump(exclude_unset=True, exclude_none=True)
    try:
        for campo, valor in cambios.items():
            setattr(usuario, campo, valor)
        db.commit()
        db.refresh(usuario)
    except SQLAlchemyError as e:
        raise error_de_base_de_datos(db, e, "Error al actualizar el perfil", usuario.id, "update_profile")

    registrar_log("info", "Perfil actualizado", usuario.id, "update_profile", {"campos": sorted(cambios)})
    return {"message": "Perfil actualizado exitosamente", "user": usuario}


@router.post("/profile/avatar", response_model=AvatarResponse)
def subir_avatar(
    avatar: Optional[UploadFile] = File(None),
    usuario: Usuario = Depends(get_usuario_actual),
    db: Session = Depends(conexion.get_db),
):
    """
    Sube la imagen de perfil (campo multipart `avatar`, máximo 5MB)
    """
    if avatar is None or not avatar.filename:
        raise ErrorValidacion("No se seleccionó ningún archivo")

    contenido = avatar.file.read(config.MAX_AVATAR_BYTES + 1)
    if len(contenido) > config.MAX_AVATAR_BYTES:
        raise ErrorValidacion("El archivo excede el tamaño máximo de 5MB")

    nombre = f"{int(time.time() * 1000)}-{RutaArchivo(avatar.filename).name}"
    directorio = RutaArchivo(config.UPLOADS_DIR)
    directorio.mkdir(parents=True, exist_ok=True)
    (directorio / nombre).write_bytes(contenido)

    avatar_url = f"{config.UPLOADS_URL_PREFIX}/{nombre}"
    try:
        usuario.avatar = avatar_url
        db.commit()
    except SQLAlchemyError as e:
        raise error_de_base_de_datos(db, e, "Error al subir el avatar", usuario.id, "upload_avatar")

    registrar_log("info", "Avatar actualizado", usuario.id, "upload_avatar", {"archivo": nombre})
    return {"message": "Avatar subido exitosamente", "avatar_url": avatar_url}
