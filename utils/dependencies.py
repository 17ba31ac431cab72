"""
Dependencias de autenticación, autorización y configuración
"""
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from database import conexion
from models.usuario import Usuario
from schemas.auth import TokenData
from services.configuracion import ServicioConfiguracion
from utils.auth import verify_token
from utils.errores import ErrorAutenticacion, ErrorNoEncontrado, ErrorPermisos
from utils.logging_utils import log_event


# Esquema OAuth2 para obtener el token del header. Sin auto_error para
# responder 401 con el mensaje propio cuando falta el token.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login", auto_error=False)


# ========== DEPENDENCIAS DE AUTENTICACIÓN ==========

async def get_current_user(token: Optional[str] = Depends(oauth2_scheme)) -> TokenData:
    """
    Identidad del usuario a partir del Bearer token

    Raises:
        ErrorAutenticacion: no se envió token (401)
        ErrorTokenInvalido: firma inválida o token expirado (403)
    """
    if not token:
        raise ErrorAutenticacion()

    payload = verify_token(token)
    return TokenData(user_id=payload["userId"], email=payload["email"])


def get_usuario_actual(
    identidad: TokenData = Depends(get_current_user),
    db: Session = Depends(conexion.get_db),
) -> Usuario:
    """Usuario completo desde la base de datos"""
    usuario = db.query(Usuario).filter(Usuario.id == identidad.user_id).first()
    if not usuario:
        raise ErrorNoEncontrado("Usuario no encontrado")
    return usuario


def require_admin(usuario: Usuario = Depends(get_usuario_actual)) -> Usuario:
    """
    Requiere rol admin en el usuario guardado (no en el token), así una
    promoción o degradación aplica sin volver a iniciar sesión.
    """
    if usuario.rol != "admin":
        log_event("auth", usuario.email, "Acceso de administrador denegado", nivel="warning")
        raise ErrorPermisos()
    return usuario


# ========== CONFIGURACIÓN ==========

def get_configuracion(db: Session = Depends(conexion.get_db)) -> ServicioConfiguracion:
    return ServicioConfiguracion(db)
