"""
Servicios de negocio: reservaciones, reseñas, compras, configuración y auditoría
"""

from .reservas import ReservaService
from .compras import CompraService
from .configuracion import ServicioConfiguracion

__all__ = [
    "ReservaService",
    "CompraService",
    "ServicioConfiguracion",
]
