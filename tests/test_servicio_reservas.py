"""
Tests unitarios de las reglas del motor de reservaciones
"""
import re
from datetime import datetime, timedelta

import pytest

from models.reserva import calcular_noches
from services.reservas import (
    calcular_total,
    generar_numero_reservacion,
    validar_fechas_estancia,
    validar_ventana_cancelacion,
)
from utils.errores import ErrorPolitica, ErrorValidacion
from utils.timezone import inicio_de_hoy_utc


class TestNoches:

    def test_noches_completas(self):
        assert calcular_noches(datetime(2030, 3, 1), datetime(2030, 3, 4)) == 3

    def test_fraccion_cuenta_como_noche(self):
        assert calcular_noches(datetime(2030, 3, 1, 15), datetime(2030, 3, 2, 12)) == 1
        assert calcular_noches(datetime(2030, 3, 1), datetime(2030, 3, 2, 1)) == 2

    def test_total(self):
        assert calcular_total(850, 3) == 2550


class TestNumeroReservacion:

    def test_formato(self):
        numero = generar_numero_reservacion(ahora_ms=1700000123456)
        assert numero.startswith("VBD-123456-")
        assert re.match(r"^VBD-\d{6}-[0-9A-Z]{6}$", numero)

    def test_sufijo_aleatorio(self):
        numeros = {generar_numero_reservacion(ahora_ms=1700000123456) for _ in range(20)}
        assert len(numeros) > 1


class TestFechasEstancia:
    HOY = datetime(2030, 3, 10)

    def test_checkin_hoy_es_valido(self):
        validar_fechas_estancia(datetime(2030, 3, 10, 15), datetime(2030, 3, 11), hoy=self.HOY)

    def test_checkin_ayer(self):
        with pytest.raises(ErrorValidacion):
            validar_fechas_estancia(datetime(2030, 3, 9, 23), datetime(2030, 3, 11), hoy=self.HOY)

    def test_checkout_igual_a_checkin(self):
        with pytest.raises(ErrorValidacion):
            validar_fechas_estancia(datetime(2030, 3, 12), datetime(2030, 3, 12), hoy=self.HOY)


class TestVentanaCancelacion:
    CHECKIN = datetime(2030, 3, 10, 15)

    def test_exactamente_en_la_ventana_permite(self):
        validar_ventana_cancelacion(self.CHECKIN, 24, ahora=self.CHECKIN - timedelta(hours=24))

    def test_un_segundo_tarde_rechaza(self):
        with pytest.raises(ErrorPolitica):
            validar_ventana_cancelacion(self.CHECKIN, 24, ahora=self.CHECKIN - timedelta(hours=24) + timedelta(seconds=1))

    def test_ventana_personalizada(self):
        validar_ventana_cancelacion(self.CHECKIN, 6, ahora=self.CHECKIN - timedelta(hours=7))
        with pytest.raises(ErrorPolitica):
            validar_ventana_cancelacion(self.CHECKIN, 48, ahora=self.CHECKIN - timedelta(hours=47))


class TestHoy:

    def test_hoy_es_medianoche_utc(self):
        hoy = inicio_de_hoy_utc()
        ahora = datetime.utcnow()
        assert (hoy.hour, hoy.minute, hoy.second, hoy.microsecond) == (0, 0, 0, 0)
        assert hoy.tzinfo is None
        assert timedelta(0) <= ahora - hoy < timedelta(days=1)
