"""
Configuración del sitio guardada en base de datos

Se inyecta por request (utils.dependencies.get_configuracion) y se consulta
en cada operación que depende de ella.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from config import HORAS_CANCELACION_DEFAULT
from models.sistema import Configuracion

CLAVE_HORAS_CANCELACION = "cancellation_hours"
CLAVE_NOTIFICACIONES_EMAIL = "email_notifications"


class ServicioConfiguracion:
    """Acceso clave → valor sobre la tabla de configuraciones"""

    def __init__(self, db: Session):
        self.db = db

    def _buscar(self, key: str) -> Optional[Configuracion]:
        return self.db.query(Configuracion).filter(Configuracion.key == key).first()

    def obtener(self, key: str, default: Any = None) -> Any:
        config = self._buscar(key)
        if config is None or config.value is None:
            return default
        return config.value

    def todas(self) -> Dict[str, Any]:
        return {c.key: c.value for c in self.db.query(Configuracion).all()}

    def actualizar(self, key: str, value: Any, description: Optional[str] = None) -> Configuracion:
        """Upsert de una clave"""
        config = self._buscar(key)
        if config is None:
            config = Configuracion(key=key)
            self.db.add(config)
        config.value = value
        if description is not None:
            config.description = description
        config.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(config)
        return config

    def horas_cancelacion(self) -> float:
        valor = self.obtener(CLAVE_HORAS_CANCELACION, HORAS_CANCELACION_DEFAULT)
        try:
            return float(valor)
        except (TypeError, ValueError):
            return float(HORAS_CANCELACION_DEFAULT)

    def notificaciones_email_activas(self) -> bool:
        return bool(self.obtener(CLAVE_NOTIFICACIONES_EMAIL, False))
