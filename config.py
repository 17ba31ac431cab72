"""
Configuración de la aplicación VBDHOTEL
Todos los valores se leen del entorno (.env) con valores por defecto para desarrollo
"""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_bool(nombre: str, default: str = "true") -> bool:
    return os.getenv(nombre, default).strip().lower() in ("1", "true", "yes", "si")


# JWT
JWT_SECRET = os.getenv("JWT_SECRET", "vbdhotel-secret-key-2023")  # ⚠️ CAMBIAR EN PRODUCCIÓN
JWT_ALGORITHM = "HS256"
JWT_EXPIRE_HOURS = int(os.getenv("JWT_EXPIRE_HOURS", "24"))

# Archivos subidos y PDFs generados
UPLOADS_DIR = Path(os.getenv("UPLOADS_DIR", "uploads"))
UPLOADS_URL_PREFIX = "/uploads"
MAX_AVATAR_BYTES = 5 * 1024 * 1024  # 5MB

# Email (SMTP). Sin SMTP_HOST no se envían correos.
SMTP_HOST = os.getenv("SMTP_HOST", "")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USER = os.getenv("SMTP_USER", "")
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD", "")
SMTP_USE_TLS = _env_bool("SMTP_USE_TLS")
MAIL_FROM = os.getenv("MAIL_FROM", "VBDHOTEL <no-reply@vbdhotel.com>")

# Arranque
SEED_DATA = _env_bool("SEED_DATA")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Logs de aplicación
LOG_FILE = Path(os.getenv("LOG_FILE", "vbdhotel_logs.txt"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Rate limiting
RATE_LIMIT_ENABLED = _env_bool("RATE_LIMIT_ENABLED")
RATE_LIMIT_DEFAULT = os.getenv("RATE_LIMIT_DEFAULT", "100/minute")
RATE_LIMIT_AUTH = os.getenv("RATE_LIMIT_AUTH", "10/minute")

# Zona horaria de operación del hotel
HOTEL_TIMEZONE = os.getenv("HOTEL_TIMEZONE", "America/Matamoros")

# Reglas de negocio
PREFIJO_RESERVACION = "VBD"
PREFIJO_TRANSACCION = "TXN"
CAPACIDAD_HOTEL = 20  # habitaciones asumidas por hotel
HORAS_CANCELACION_DEFAULT = 24
DIAS_RETENCION_LOGS = 30
INTERVALO_LIMPIEZA_LOGS_SEGUNDOS = 24 * 60 * 60
NOMBRE_SITIO = "VBDHOTEL"
