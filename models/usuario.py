"""
Modelo de Usuario (huéspedes y administradores)
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Table, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from database.conexion import Base


usuario_favoritos = Table(
    "usuario_favoritos",
    Base.metadata,
    Column("usuario_id", Integer, ForeignKey("usuarios.id", ondelete="CASCADE"), primary_key=True),
    Column("hotel_id", Integer, ForeignKey("hoteles.id", ondelete="CASCADE"), primary_key=True),
)


class Usuario(Base):
    """Tabla de usuarios del sistema"""
    __tablename__ = "usuarios"
    __table_args__ = (
        Index('idx_usuario_email', 'email'),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(150), unique=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    phone = Column(String(30), nullable=True)
    country = Column(String(60), nullable=False, default="México")
    avatar = Column(String(255), nullable=True)

    # usuario | admin
    rol = Column(String(20), nullable=False, default="usuario")

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    favoritos = relationship("Hotel", secondary=usuario_favoritos)
    reservas = relationship("Reserva", back_populates="usuario")

    @property
    def favorite_ids(self):
        return [hotel.id for hotel in self.favoritos]

    def __repr__(self):
        return f"<Usuario(id={self.id}, email='{self.email}', rol='{self.rol}')>"
