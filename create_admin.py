"""
Script para crear (o promover) un usuario administrador
Ejecutar: python create_admin.py
"""
import sys
from sqlalchemy.orm import Session
from database.conexion import SessionLocal, engine, Base
import models  # Importar para registrar los modelos
from models.usuario import Usuario
from utils.auth import get_password_hash


def crear_admin(db: Session, email: str, password: str, name: str = "Administrador") -> Usuario:
    """
    Crea el usuario con rol admin o promueve al existente con ese email.
    La contraseña solo se cambia si el usuario es nuevo.
    """
    email = email.strip().lower()
    usuario = db.query(Usuario).filter(Usuario.email == email).first()

    if usuario is None:
        usuario = Usuario(
            name=name,
            email=email,
            hashed_password=get_password_hash(password),
            rol="admin",
        )
        db.add(usuario)
    else:
        usuario.rol = "admin"

    db.commit()
    db.refresh(usuario)
    return usuario


def main():
    print("\n🔧 Creación de Usuario Administrador")
    print("=" * 50)

    email = input("Email (default: admin@vbdhotel.com): ").strip() or "admin@vbdhotel.com"
    while True:
        password = input("Password (mínimo 8 caracteres): ").strip()
        if len(password) >= 8:
            break
        print("❌ La contraseña debe tener al menos 8 caracteres")
    nombre = input("Nombre (opcional): ").strip() or "Administrador"

    db = SessionLocal()
    try:
        admin = crear_admin(db, email, password, nombre)
        print("\n✅ Usuario administrador listo!")
        print(f"   ID: {admin.id}")
        print(f"   Email: {admin.email}")
        print(f"   Rol: {admin.rol}")
        print("\n🔐 Puede iniciar sesión con estas credenciales en /api/login")
    except Exception as e:
        db.rollback()
        print(f"\n❌ Error al crear usuario administrador: {str(e)}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    print("🏨 VBDHOTEL - Inicialización de administrador")
    print("=" * 50)

    print("\n📊 Verificando tablas de base de datos...")
    Base.metadata.create_all(bind=engine)
    print("✅ Tablas verificadas/creadas")

    main()
