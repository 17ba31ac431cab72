"""
Configuración del sitio y logs de auditoría
"""
from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, JSON, Index

from database.conexion import Base


class Configuracion(Base):
    """Valor de configuración del sitio, uno por clave"""
    __tablename__ = "configuraciones"

    id = Column(Integer, primary_key=True)
    key = Column(String(100), unique=True, nullable=False, index=True)
    value = Column(JSON, nullable=True)
    description = Column(String(255), nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class LogSistema(Base):
    """Evento de auditoría. Solo se inserta; la limpieza periódica borra los viejos."""
    __tablename__ = "logs_sistema"
    __table_args__ = (
        Index("idx_log_nivel_fecha", "level", "created_at"),
    )

    id = Column(Integer, primary_key=True)
    level = Column(String(10), nullable=False)  # info, warning, error
    message = Column(String(500), nullable=True)
    # Sin FK: el log debe poder escribirse aunque el usuario no exista
    user_id = Column(Integer, nullable=True, index=True)
    action = Column(String(60), nullable=True)
    # "metadata" está reservado por SQLAlchemy en la clase declarativa
    metadatos = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
