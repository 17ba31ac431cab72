import logging
from logging.handlers import RotatingFileHandler

from config import LOG_FILE, LOG_LEVEL

_LOGGER_NAME = "vbdhotel"

_NIVELES = {
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _configurar_logger() -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    logger.propagate = False

    try:
        handler = RotatingFileHandler(LOG_FILE, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    except OSError:
        # Sin permisos de escritura: a consola
        handler = logging.StreamHandler()

    handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"))
    logger.addHandler(handler)
    return logger


_logger = _configurar_logger()


def log_event(area: str, usuario: str, accion: str, detalle: str = "", nivel: str = "info") -> None:
    """
    Escribe una línea "AREA | Usuario | Accion | Detalle" en el log de aplicación.
    Es independiente de la bitácora en base de datos (services.auditoria).
    """
    message = f"{area.upper()} | Usuario: {usuario} | Accion: {accion}"
    if detalle:
        message += f" | Detalle: {detalle}"
    _logger.log(_NIVELES.get(nivel, logging.INFO), message)
