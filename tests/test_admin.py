"""
Tests de administración: permisos, estadísticas, configuración y logs
"""
import asyncio
import logging
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

import main
from main import app
from models.reserva import Reserva
from models.sistema import LogSistema
from models.usuario import Usuario
from services.auditoria import limpiar_logs_antiguos, registrar_log
from services.datos_iniciales import insertar_datos_ejemplo
from create_admin import crear_admin


def _reserva(db, usuario_id, hotel, total, status, numero):
    db.add(Reserva(
        user_id=usuario_id, hotel_id=hotel.id,
        checkin=datetime(2030, 1, 1), checkout=datetime(2030, 1, 2),
        adults=1, children=0, room_type="doble",
        total=total, status=status, reservation_number=numero,
    ))
    db.commit()


class TestPermisos:

    def test_usuario_comun_no_ve_estadisticas(self, client, usuario):
        response = client.get("/api/admin/stats", headers=usuario["headers"])
        assert response.status_code == 403
        assert response.json() == {"error": "Se requieren privilegios de administrador"}

    def test_promocion_aplica_sin_nuevo_login(self, client, db, usuario):
        crear_admin(db, "ana@example.com", "ignorada")
        response = client.get("/api/admin/stats", headers=usuario["headers"])
        assert response.status_code == 200

    def test_crear_admin_nuevo(self, db):
        admin = crear_admin(db, "Nuevo@VBDHotel.com", "clave-segura")
        assert admin.rol == "admin"
        assert admin.email == "nuevo@vbdhotel.com"


class TestEstadisticas:

    def test_ingresos_solo_confirmadas_y_completadas(self, client, db, admin, hotel):
        _reserva(db, admin["id"], hotel, 1000, "confirmada", "VBD-000001-AAAAAA")
        _reserva(db, admin["id"], hotel, 500, "completada", "VBD-000002-AAAAAA")
        _reserva(db, admin["id"], hotel, 300, "cancelada", "VBD-000003-AAAAAA")
        _reserva(db, admin["id"], hotel, 200, "pendiente", "VBD-000004-AAAAAA")

        data = client.get("/api/admin/stats", headers=admin["headers"]).json()
        assert data["totalUsers"] == 1
        assert data["totalHotels"] == 1
        assert data["totalReservations"] == 4
        assert data["totalRevenue"] == 1500
        assert len(data["recentReservations"]) == 4
        assert data["recentReservations"][0]["usuario"]["email"] == "admin@vbdhotel.com"

    def test_solo_diez_recientes(self, client, db, admin, hotel):
        for i in range(12):
            _reserva(db, admin["id"], hotel, 100, "confirmada", f"VBD-{i:06d}-BBBBBB")

        data = client.get("/api/admin/stats", headers=admin["headers"]).json()
        assert len(data["recentReservations"]) == 10


class TestConfiguracion:

    def test_configuracion_publica_y_actualizacion(self, client, admin):
        assert client.get("/api/config").json() == {}

        response = client.put(
            "/api/config/cancellation_hours",
            json={"value": 48, "description": "Horas mínimas para cancelar"},
            headers=admin["headers"],
        )
        assert response.status_code == 200
        assert response.json()["config"]["value"] == 48

        client.put("/api/config/cancellation_hours", json={"value": 12}, headers=admin["headers"])
        assert client.get("/api/config").json() == {"cancellation_hours": 12}

    def test_actualizar_requiere_admin(self, client, usuario):
        response = client.put("/api/config/site_name", json={"value": "Otro"}, headers=usuario["headers"])
        assert response.status_code == 403

    def test_datos_iniciales(self, client, db):
        insertar_datos_ejemplo(db)
        insertar_datos_ejemplo(db)

        config = client.get("/api/config").json()
        assert config["site_name"] == "VBDHOTEL"
        assert config["cancellation_hours"] == 24
        assert config["email_notifications"] is True
        assert client.get("/api/hotels").json()["total"] == 5
        assert client.get("/api/destinations").json()["total"] == 3
        assert client.get("/api/experiences").json()["total"] == 5


class TestLogs:

    def test_listar_logs_mas_recientes_primero(self, client, admin):
        registrar_log("error", "Algo falló", admin["id"], "prueba", {"detalle": 1})

        data = client.get("/api/logs", headers=admin["headers"]).json()
        assert data["total"] >= 2
        primero = data["items"][0]
        assert primero["message"] == "Algo falló"
        assert primero["metadata"] == {"detalle": 1}
        assert primero["userEmail"] == "admin@vbdhotel.com"

    def test_filtrar_por_nivel(self, client, admin):
        registrar_log("error", "Error de prueba", None, "prueba")

        data = client.get("/api/logs", params={"level": "error"}, headers=admin["headers"]).json()
        assert [log["message"] for log in data["items"]] == ["Error de prueba"]

    def test_logs_requieren_admin(self, client, usuario):
        assert client.get("/api/logs", headers=usuario["headers"]).status_code == 403

    def test_limpieza_conserva_errores(self, db):
        viejo = datetime.utcnow() - timedelta(days=31)
        db.add_all([
            LogSistema(level="info", message="viejo", created_at=viejo),
            LogSistema(level="warning", message="viejo", created_at=viejo),
            LogSistema(level="error", message="viejo", created_at=viejo),
            LogSistema(level="info", message="reciente"),
        ])
        db.commit()

        assert limpiar_logs_antiguos(db) == 2
        restantes = sorted((log.level, log.message) for log in db.query(LogSistema).all())
        assert restantes == [("error", "viejo"), ("info", "reciente")]

    def test_falla_de_auditoria_no_se_propaga(self, monkeypatch):
        class SesionRota:
            def add(self, _):
                raise RuntimeError("sin base de datos")

            def rollback(self):
                pass

            def close(self):
                pass

        monkeypatch.setattr("database.conexion.SessionLocal", lambda: SesionRota())
        registrar_log("info", "no debe lanzar")


class TestErrorGlobal:

    def test_excepcion_no_controlada_500(self, db, hotel, monkeypatch):
        def explota(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr("endpoints.hoteles.ReservaService.verificar_disponibilidad", explota)
        client = TestClient(app, raise_server_exceptions=False)

        response = client.post(
            f"/api/hotels/{hotel.id}/check-availability",
            json={"checkin": "2030-03-01T00:00:00", "checkout": "2030-03-02T00:00:00"},
        )
        assert response.status_code == 500
        assert response.json() == {"error": "Error interno del servidor"}
        assert db.query(LogSistema).filter(LogSistema.action == "server_error").count() == 1

    def test_handler_global_corre_fuera_del_event_loop(self):
        assert not asyncio.iscoroutinefunction(main.manejar_error_global)


class TestCicloDeVida:

    def test_apagado_espera_fin_de_la_limpieza(self, monkeypatch):
        estado = []

        async def ciclo_falso():
            estado.append("iniciado")
            try:
                await asyncio.sleep(3600)
            finally:
                estado.append("detenido")

        monkeypatch.setattr(main, "ciclo_limpieza_logs", ciclo_falso)
        with TestClient(app) as client:
            assert client.get("/").status_code == 200
            assert estado == ["iniciado"]
        assert estado == ["iniciado", "detenido"]

    def test_logger_de_aplicacion(self):
        logger = logging.getLogger("vbdhotel")
        assert logger.handlers
        assert logger.propagate is False
