"""
Utilidades para autenticación JWT y manejo de contraseñas
"""
from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext

from config import JWT_SECRET, JWT_ALGORITHM, JWT_EXPIRE_HOURS
from utils.errores import ErrorTokenInvalido


# Contexto de encriptación para passwords
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# ========== FUNCIONES DE PASSWORD ==========

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verifica si una contraseña plana coincide con el hash
    """
    return pwd_context.verify(_truncar_bcrypt(plain_password), hashed_password)


def get_password_hash(password: str) -> str:
    """
    Genera el hash de una contraseña
    """
    return pwd_context.hash(_truncar_bcrypt(password))


def _truncar_bcrypt(password: str) -> str:
    # Bcrypt tiene un límite de 72 bytes
    if len(password.encode('utf-8')) > 72:
        password = password.encode('utf-8')[:72].decode('utf-8', errors='ignore')
    return password


# ========== FUNCIONES DE JWT ==========

def create_access_token(user_id: int, email: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Crea el token de acceso con la identidad del usuario (userId, email)
    """
    expire = datetime.utcnow() + (expires_delta or timedelta(hours=JWT_EXPIRE_HOURS))
    to_encode = {
        "userId": user_id,
        "email": email,
        "exp": expire,
        "iat": datetime.utcnow(),
    }
    return jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALGORITHM)


def verify_token(token: str) -> dict:
    """
    Verifica firma y expiración de un token JWT

    Raises:
        ErrorTokenInvalido: si la firma no coincide, expiró o le faltan claims
    """
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except JWTError:
        raise ErrorTokenInvalido()

    if payload.get("userId") is None or payload.get("email") is None:
        raise ErrorTokenInvalido()
    return payload
