"""
Fixtures compartidas: base SQLite en memoria, cliente HTTP y usuarios de prueba
"""
import os
import sys
import tempfile
from datetime import datetime, timedelta

# El entorno se fija antes de importar la app: config.py lo lee al importarse
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SEED_DATA"] = "false"
os.environ["SMTP_HOST"] = ""
os.environ["UPLOADS_DIR"] = tempfile.mkdtemp(prefix="vbdhotel-uploads-")
os.environ["LOG_FILE"] = os.path.join(tempfile.gettempdir(), "vbdhotel-tests.log")

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest
from fastapi.testclient import TestClient

from main import app
from create_admin import crear_admin
from database.conexion import Base, SessionLocal, engine
from models.hotel import Hotel
from models.sistema import Configuracion


@pytest.fixture(autouse=True)
def base_de_datos():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def registrar(client, email="ana@example.com", password="secreto123", name="Ana López"):
    response = client.post("/api/register", json={
        "name": name,
        "email": email,
        "password": password,
        "phone": "+52 899 000 0000",
    })
    assert response.status_code == 201, response.text
    data = response.json()
    return {
        "id": data["user"]["id"],
        "token": data["token"],
        "headers": {"Authorization": f"Bearer {data['token']}"},
    }


@pytest.fixture
def usuario(client):
    return registrar(client)


@pytest.fixture
def otro_usuario(client):
    return registrar(client, email="beto@example.com", name="Beto Ruiz")


@pytest.fixture
def admin(client, db):
    datos = registrar(client, email="admin@vbdhotel.com", name="Administrador")
    crear_admin(db, "admin@vbdhotel.com", "no-se-usa")
    return datos


def crear_hotel(db, **kwargs) -> Hotel:
    valores = {
        "name": "City Express Reynosa",
        "location": "Blvd. Morelos, Reynosa, Tamaulipas",
        "description": "Hotel de negocios",
        "price": 850,
        "amenities": ["wifi", "alberca"],
        "lat": 26.08,
        "lng": -98.30,
        "city": "Reynosa",
    }
    valores.update(kwargs)
    hotel = Hotel(**valores)
    db.add(hotel)
    db.commit()
    db.refresh(hotel)
    return hotel


@pytest.fixture
def hotel(db):
    return crear_hotel(db)


def configurar(db, key, value):
    db.add(Configuracion(key=key, value=value))
    db.commit()


def fecha_iso(dias: float) -> str:
    return (datetime.utcnow() + timedelta(days=dias)).replace(microsecond=0).isoformat()
