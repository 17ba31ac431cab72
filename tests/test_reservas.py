"""
Tests del flujo de reservaciones vía API
"""
import re
from datetime import datetime, timedelta

import pytest
from reportlab import rl_config

from models.reserva import Reserva
from models.sistema import LogSistema
from services import notificaciones
from services.documentos import ruta_de_url

from conftest import configurar, crear_hotel, fecha_iso


def _reservar(client, usuario, hotel, checkin_dias=10, noches=3, **extra):
    datos = {
        "hotelId": hotel.id,
        "checkin": fecha_iso(checkin_dias),
        "checkout": fecha_iso(checkin_dias + noches),
        "adults": 2,
        "children": 1,
        "roomType": "doble",
    }
    datos.update(extra)
    return client.post("/api/reservations", json=datos, headers=usuario["headers"])


@pytest.fixture
def correos(monkeypatch):
    enviados = []

    def falso_enviar(destinatario, asunto, html, adjuntos=None):
        enviados.append({"to": destinatario, "subject": asunto, "adjuntos": adjuntos or []})
        return True

    monkeypatch.setattr(notificaciones, "enviar_email", falso_enviar)
    return enviados


class TestCrearReservacion:

    def test_reservacion_exitosa(self, client, usuario, hotel):
        response = _reservar(client, usuario, hotel, noches=3)
        assert response.status_code == 201
        data = response.json()
        reserva = data["reservation"]

        assert reserva["status"] == "confirmada"
        assert reserva["nights"] == 3
        assert reserva["total"] == 850 * 3
        assert reserva["roomType"] == "doble"
        assert re.match(r"^VBD-\d{6}-[0-9A-Z]{6}$", reserva["reservationNumber"])
        assert data["pdfUrl"] == f"/uploads/reservation_{reserva['id']}.pdf"

    def test_noches_parciales_se_redondean_hacia_arriba(self, client, usuario, hotel):
        checkin = datetime.utcnow() + timedelta(days=5)
        response = client.post("/api/reservations", json={
            "hotelId": hotel.id,
            "checkin": checkin.isoformat(),
            "checkout": (checkin + timedelta(hours=36)).isoformat(),
            "adults": 1,
            "roomType": "sencilla",
        }, headers=usuario["headers"])
        assert response.status_code == 201
        reserva = response.json()["reservation"]
        assert reserva["nights"] == 2
        assert reserva["total"] == 1700
        assert reserva["children"] == 0

    def test_numeros_de_reservacion_unicos(self, client, usuario, hotel):
        numeros = {
            _reservar(client, usuario, hotel, checkin_dias=10 + i).json()["reservation"]["reservationNumber"]
            for i in range(5)
        }
        assert len(numeros) == 5

    def test_checkin_en_el_pasado(self, client, usuario, hotel):
        response = _reservar(client, usuario, hotel, checkin_dias=-2)
        assert response.status_code == 400
        assert response.json() == {"error": "La fecha de check-in no puede ser anterior a hoy"}

    def test_checkout_antes_de_checkin(self, client, usuario, hotel):
        response = _reservar(client, usuario, hotel, checkout=fecha_iso(9))
        assert response.status_code == 400
        assert response.json() == {"error": "La fecha de check-out debe ser posterior al check-in"}

    def test_hotel_inexistente(self, client, usuario, hotel):
        response = _reservar(client, usuario, hotel, hotelId=9999)
        assert response.status_code == 404
        assert response.json() == {"error": "Hotel no encontrado"}

    def test_campos_requeridos(self, client, usuario, hotel):
        response = client.post("/api/reservations", json={"hotelId": hotel.id}, headers=usuario["headers"])
        assert response.status_code == 400

    def test_requiere_autenticacion(self, client, hotel):
        response = client.post("/api/reservations", json={"hotelId": hotel.id})
        assert response.status_code == 401

    def test_falla_del_pdf_no_impide_la_reservacion(self, client, db, usuario, hotel, monkeypatch):
        def pdf_roto(*args, **kwargs):
            raise OSError("disco lleno")

        monkeypatch.setattr("services.reservas.generar_pdf_reserva", pdf_roto)

        response = _reservar(client, usuario, hotel)
        assert response.status_code == 201
        data = response.json()
        assert data["pdfUrl"] is None
        assert data["reservation"]["pdfUrl"] is None
        assert db.query(Reserva).count() == 1
        errores = db.query(LogSistema).filter(
            LogSistema.level == "error", LogSistema.action == "generate_pdf"
        ).all()
        assert len(errores) == 1
        assert errores[0].metadatos["error"] == "disco lleno"

    def test_pdf_conserva_caracteres_especiales(self, client, db, usuario, monkeypatch):
        # Sin compresión el texto de las celdas queda legible en el archivo
        monkeypatch.setattr(rl_config, "pageCompression", 0)
        hotel = crear_hotel(db, name="Hotel & Spa <Centro>")

        data = _reservar(client, usuario, hotel).json()
        contenido = ruta_de_url(data["pdfUrl"]).read_bytes()
        assert b"Hotel & Spa <Centro>" in contenido
        assert b"&amp;" not in contenido
        assert b"&lt;" not in contenido


class TestConsultaReservaciones:

    def test_listar_solo_las_propias(self, client, usuario, otro_usuario, hotel):
        _reservar(client, usuario, hotel)
        _reservar(client, otro_usuario, hotel)

        data = client.get("/api/reservations", headers=usuario["headers"]).json()
        assert data["total"] == 1
        assert data["items"][0]["userId"] == usuario["id"]
        assert data["items"][0]["hotel"]["name"] == hotel.name

    def test_filtrar_por_estado(self, client, usuario, hotel):
        primera = _reservar(client, usuario, hotel, checkin_dias=10).json()["reservation"]
        _reservar(client, usuario, hotel, checkin_dias=20)
        client.put(f"/api/reservations/{primera['id']}/cancel", headers=usuario["headers"])

        data = client.get("/api/reservations", params={"status": "cancelada"}, headers=usuario["headers"]).json()
        assert [r["id"] for r in data["items"]] == [primera["id"]]

    def test_reservacion_ajena_404(self, client, usuario, otro_usuario, hotel):
        reserva = _reservar(client, usuario, hotel).json()["reservation"]
        response = client.get(f"/api/reservations/{reserva['id']}", headers=otro_usuario["headers"])
        assert response.status_code == 404
        assert response.json() == {"error": "Reservación no encontrada"}

    def test_descargar_pdf(self, client, usuario, hotel):
        reserva = _reservar(client, usuario, hotel).json()["reservation"]
        response = client.get(f"/reservation-pdf/{reserva['id']}", headers=usuario["headers"])
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert f"reservacion_{reserva['reservationNumber']}.pdf" in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")

    def test_pdf_ajeno_404(self, client, usuario, otro_usuario, hotel):
        reserva = _reservar(client, usuario, hotel).json()["reservation"]
        response = client.get(f"/reservation-pdf/{reserva['id']}", headers=otro_usuario["headers"])
        assert response.status_code == 404


class TestCancelacion:

    def test_cancelacion_exitosa(self, client, usuario, hotel):
        reserva = _reservar(client, usuario, hotel, checkin_dias=5).json()["reservation"]
        response = client.put(f"/api/reservations/{reserva['id']}/cancel", headers=usuario["headers"])
        assert response.status_code == 200
        assert response.json()["reservation"]["status"] == "cancelada"

    def test_cancelar_dos_veces(self, client, usuario, hotel):
        reserva = _reservar(client, usuario, hotel).json()["reservation"]
        client.put(f"/api/reservations/{reserva['id']}/cancel", headers=usuario["headers"])
        response = client.put(f"/api/reservations/{reserva['id']}/cancel", headers=usuario["headers"])
        assert response.status_code == 400
        assert response.json() == {"error": "La reservación ya está cancelada"}

    def test_no_cancela_completada(self, client, db, usuario, hotel):
        reserva = _reservar(client, usuario, hotel).json()["reservation"]
        db.query(Reserva).filter(Reserva.id == reserva["id"]).update({"status": "completada"})
        db.commit()

        response = client.put(f"/api/reservations/{reserva['id']}/cancel", headers=usuario["headers"])
        assert response.status_code == 400
        assert response.json() == {"error": "No se puede cancelar una reservación completada"}

    def test_fuera_de_ventana_de_cancelacion(self, client, db, usuario, hotel):
        reserva = _reservar(client, usuario, hotel).json()["reservation"]
        cercano = datetime.utcnow() + timedelta(hours=10)
        db.query(Reserva).filter(Reserva.id == reserva["id"]).update({"checkin": cercano})
        db.commit()

        response = client.put(f"/api/reservations/{reserva['id']}/cancel", headers=usuario["headers"])
        assert response.status_code == 400
        assert "24" in response.json()["error"]

    def test_ventana_configurable(self, client, db, usuario, hotel):
        configurar(db, "cancellation_hours", 6)
        reserva = _reservar(client, usuario, hotel).json()["reservation"]
        db.query(Reserva).filter(Reserva.id == reserva["id"]).update(
            {"checkin": datetime.utcnow() + timedelta(hours=10)}
        )
        db.commit()

        response = client.put(f"/api/reservations/{reserva['id']}/cancel", headers=usuario["headers"])
        assert response.status_code == 200


class TestNotificaciones:

    def test_sin_bandera_no_envia_correo(self, client, usuario, hotel, correos):
        assert _reservar(client, usuario, hotel).status_code == 201
        assert correos == []

    def test_confirmacion_con_pdf_adjunto(self, client, db, usuario, hotel, correos):
        configurar(db, "email_notifications", True)
        reserva = _reservar(client, usuario, hotel).json()["reservation"]

        assert len(correos) == 1
        assert correos[0]["to"] == "ana@example.com"
        assert reserva["reservationNumber"] in correos[0]["subject"]
        assert correos[0]["adjuntos"][0].name == f"reservation_{reserva['id']}.pdf"

    def test_correo_de_cancelacion(self, client, db, usuario, hotel, correos):
        configurar(db, "email_notifications", True)
        reserva = _reservar(client, usuario, hotel).json()["reservation"]
        client.put(f"/api/reservations/{reserva['id']}/cancel", headers=usuario["headers"])

        assert correos[-1]["subject"].startswith("Cancelación de Reservación")

    def test_falla_de_correo_no_afecta_reservacion(self, client, db, usuario, hotel, monkeypatch):
        def roto(*args, **kwargs):
            raise ConnectionError("SMTP caído")

        monkeypatch.setattr(notificaciones, "enviar_email", roto)
        configurar(db, "email_notifications", True)

        response = _reservar(client, usuario, hotel)
        assert response.status_code == 201
        assert db.query(LogSistema).filter(
            LogSistema.level == "error",
            LogSistema.action == "confirmation_email",
        ).count() == 1
