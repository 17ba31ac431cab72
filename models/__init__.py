"""
Archivo de inicialización del paquete models.
Expone todas las clases de los diferentes archivos para que
SQLAlchemy (Base.metadata) las detecte al importar 'models'.
"""

# 1. Usuarios y favoritos
from .usuario import Usuario, usuario_favoritos

# 2. Hoteles y reservaciones
from .hotel import Hotel
from .reserva import Reserva, EstadoReservaEnum

# 3. Catálogo turístico
from .catalogo import Destino, Experiencia, CompraDestino

# 4. Reseñas (una tabla por objetivo)
from .resena import HotelResena, DestinoResena, ExperienciaResena

# 5. Sistema: configuración y auditoría
from .sistema import Configuracion, LogSistema

__all__ = [
    "Usuario", "usuario_favoritos",
    "Hotel", "Reserva", "EstadoReservaEnum",
    "Destino", "Experiencia", "CompraDestino",
    "HotelResena", "DestinoResena", "ExperienciaResena",
    "Configuracion", "LogSistema",
]
