"""
Tests de cuentas: registro, login, guard de autenticación, perfil y avatar
"""
from datetime import timedelta

from jose import jwt

from config import JWT_ALGORITHM, JWT_SECRET, MAX_AVATAR_BYTES
from models.usuario import Usuario
from models.sistema import LogSistema
from utils.auth import create_access_token

from conftest import registrar


class TestRegistro:

    def test_registro_exitoso_devuelve_token_y_usuario(self, client):
        response = client.post("/api/register", json={
            "name": "Ana López",
            "email": "Ana@Example.com",
            "password": "secreto123",
        })
        assert response.status_code == 201
        data = response.json()
        assert data["token"]
        assert data["user"]["email"] == "ana@example.com"
        assert data["user"]["country"] == "México"
        assert "hashedPassword" not in data["user"]
        assert "password" not in data["user"]

    def test_token_trae_user_id_y_email(self, client):
        datos = registrar(client)
        payload = jwt.decode(datos["token"], JWT_SECRET, algorithms=[JWT_ALGORITHM])
        assert payload["userId"] == datos["id"]
        assert payload["email"] == "ana@example.com"

    def test_email_duplicado_no_crea_segundo_usuario(self, client, db):
        registrar(client)
        response = client.post("/api/register", json={
            "name": "Otra Ana",
            "email": "ana@example.com",
            "password": "otraclave",
        })
        assert response.status_code == 400
        assert response.json() == {"error": "El usuario ya existe"}
        assert db.query(Usuario).filter(Usuario.email == "ana@example.com").count() == 1
        assert db.query(LogSistema).filter(LogSistema.level == "warning", LogSistema.action == "register").count() == 1

    def test_campos_faltantes(self, client):
        response = client.post("/api/register", json={"email": "x@example.com"})
        assert response.status_code == 400
        assert "error" in response.json()

    def test_email_invalido(self, client):
        response = client.post("/api/register", json={"name": "X", "email": "no-es-email", "password": "123"})
        assert response.status_code == 400


class TestLogin:

    def test_login_exitoso(self, client, usuario):
        response = client.post("/api/login", json={"email": "ana@example.com", "password": "secreto123"})
        assert response.status_code == 200
        assert response.json()["user"]["id"] == usuario["id"]

    def test_password_incorrecto(self, client, usuario):
        response = client.post("/api/login", json={"email": "ana@example.com", "password": "incorrecta"})
        assert response.status_code == 400
        assert response.json() == {"error": "Credenciales inválidas"}

    def test_email_inexistente(self, client):
        response = client.post("/api/login", json={"email": "nadie@example.com", "password": "x"})
        assert response.status_code == 400
        assert response.json() == {"error": "Credenciales inválidas"}


class TestGuard:

    def test_sin_token_401(self, client):
        response = client.get("/api/profile")
        assert response.status_code == 401
        assert response.json() == {"error": "Token de acceso requerido"}

    def test_token_invalido_403(self, client):
        response = client.get("/api/profile", headers={"Authorization": "Bearer basura"})
        assert response.status_code == 403
        assert response.json() == {"error": "Token inválido"}

    def test_token_expirado_403(self, client, usuario):
        token = create_access_token(usuario["id"], "ana@example.com", expires_delta=timedelta(seconds=-10))
        response = client.get("/api/profile", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 403

    def test_token_con_otra_firma_403(self, client, usuario):
        token = jwt.encode({"userId": usuario["id"], "email": "ana@example.com"}, "otra-clave", algorithm="HS256")
        response = client.get("/api/profile", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 403


class TestPerfil:

    def test_obtener_perfil(self, client, usuario):
        response = client.get("/api/profile", headers=usuario["headers"])
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Ana López"
        assert data["rol"] == "usuario"
        assert data["favorites"] == []

    def test_actualizar_perfil_parcial(self, client, usuario):
        response = client.put("/api/profile", json={"phone": "+52 899 111 2222"}, headers=usuario["headers"])
        assert response.status_code == 200
        user = response.json()["user"]
        assert user["phone"] == "+52 899 111 2222"
        assert user["name"] == "Ana López"

    def test_subir_avatar(self, client, usuario):
        response = client.post(
            "/api/profile/avatar",
            files={"avatar": ("foto.png", b"\x89PNG fake", "image/png")},
            headers=usuario["headers"],
        )
        assert response.status_code == 200
        avatar_url = response.json()["avatarUrl"]
        assert avatar_url.startswith("/uploads/")
        assert avatar_url.endswith("-foto.png")

        perfil = client.get("/api/profile", headers=usuario["headers"]).json()
        assert perfil["avatar"] == avatar_url

    def test_avatar_sin_archivo(self, client, usuario):
        response = client.post("/api/profile/avatar", headers=usuario["headers"])
        assert response.status_code == 400
        assert response.json() == {"error": "No se seleccionó ningún archivo"}

    def test_avatar_demasiado_grande(self, client, usuario):
        contenido = b"0" * (MAX_AVATAR_BYTES + 1)
        response = client.post(
            "/api/profile/avatar",
            files={"avatar": ("grande.png", contenido, "image/png")},
            headers=usuario["headers"],
        )
        assert response.status_code == 400
