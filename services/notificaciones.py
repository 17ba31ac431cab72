"""
Correos de confirmación y cancelación (SMTP)

Se ejecutan como BackgroundTasks después de responder: abren su propia
sesión y cualquier falla termina en el log de auditoría, nunca en el
cliente. Si SMTP_HOST no está configurado el envío se omite.
"""
import smtplib
from email.message import EmailMessage
from html import escape
from pathlib import Path
from typing import List, Optional

import config
from database import conexion
from models.catalogo import CompraDestino
from models.reserva import Reserva
from services.auditoria import registrar_log
from services.documentos import ruta_de_url
from utils.logging_utils import log_event
from utils.timezone import formatear_fecha

_PIE = f"<p>Atentamente,<br><strong>El equipo de {config.NOMBRE_SITIO}</strong></p>"


def enviar_email(destinatario: str, asunto: str, html: str, adjuntos: Optional[List[Path]] = None) -> bool:
    """
    Envía un correo HTML con adjuntos PDF opcionales

    Returns:
        bool: False si SMTP no está configurado
    """
    if not config.SMTP_HOST:
        log_event("email", destinatario, "SMTP no configurado, correo omitido", asunto, nivel="warning")
        return False

    mensaje = EmailMessage()
    mensaje["Subject"] = asunto
    mensaje["From"] = config.MAIL_FROM
    mensaje["To"] = destinatario
    mensaje.set_content("Este correo requiere un cliente compatible con HTML.")
    mensaje.add_alternative(html, subtype="html")

    for ruta in adjuntos or []:
        if ruta.exists():
            mensaje.add_attachment(
                ruta.read_bytes(), maintype="application", subtype="pdf", filename=ruta.name
            )

    with smtplib.SMTP(config.SMTP_HOST, config.SMTP_PORT, timeout=30) as smtp:
        if config.SMTP_USE_TLS:
            smtp.starttls()
        if config.SMTP_USER:
            smtp.login(config.SMTP_USER, config.SMTP_PASSWORD)
        smtp.send_message(mensaje)
    return True


def _detalle_reserva(reserva: Reserva) -> str:
    huespedes = f"{reserva.adults} adultos"
    if reserva.children:
        huespedes += f", {reserva.children} niños"
    return (
        "<div style=\"background: #f8f9fa; padding: 20px; border-radius: 5px; margin: 20px 0;\">"
        f"<p><strong>Número de Reservación:</strong> {escape(reserva.reservation_number)}</p>"
        f"<p><strong>Fecha de llegada:</strong> {formatear_fecha(reserva.checkin)}</p>"
        f"<p><strong>Fecha de salida:</strong> {formatear_fecha(reserva.checkout)}</p>"
        f"<p><strong>Noches:</strong> {reserva.nights}</p>"
        f"<p><strong>Huéspedes:</strong> {huespedes}</p>"
        f"<p><strong>Tipo de habitación:</strong> {escape(reserva.room_type)}</p>"
        f"<p><strong>Total:</strong> ${reserva.total:,.2f} MXN</p>"
        "</div>"
    )


def plantilla_confirmacion(reserva: Reserva) -> str:
    hotel = reserva.hotel
    return (
        "<div style=\"font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;\">"
        "<h1 style=\"color: #2c5aa0;\">Confirmación de Reservación</h1>"
        f"<p>Hola {escape(reserva.usuario.name)},</p>"
        f"<p>Tu reservación en <strong>{escape(hotel.name)}</strong> ha sido confirmada.</p>"
        f"{_detalle_reserva(reserva)}"
        "<p><strong>Información de contacto del hotel:</strong></p>"
        f"<p>Teléfono: {escape(hotel.phone or '')}<br>"
        f"Email: {escape(hotel.email or '')}<br>"
        f"Dirección: {escape(hotel.address or '')}</p>"
        "<p>¡Esperamos que disfrutes tu estancia!</p>"
        f"{_PIE}</div>"
    )


def plantilla_cancelacion(reserva: Reserva) -> str:
    return (
        "<div style=\"font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;\">"
        "<h1 style=\"color: #dc3545;\">Cancelación de Reservación</h1>"
        f"<p>Hola {escape(reserva.usuario.name)},</p>"
        f"<p>Tu reservación en <strong>{escape(reserva.hotel.name)}</strong> ha sido cancelada exitosamente.</p>"
        f"{_detalle_reserva(reserva)}"
        "<p>El reembolso será procesado en los próximos 5-7 días hábiles.</p>"
        "<p>Esperamos verte pronto en otra ocasión.</p>"
        f"{_PIE}</div>"
    )


def plantilla_compra(compra: CompraDestino) -> str:
    destino = compra.destination or {}
    return (
        "<div style=\"font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;\">"
        "<h1 style=\"color: #2c5aa0;\">Confirmación de Compra</h1>"
        f"<p>Hola {escape(compra.visitor_name)},</p>"
        f"<p>Tu compra para <strong>{escape(destino.get('name', ''))}</strong> ha sido confirmada.</p>"
        "<div style=\"background: #f8f9fa; padding: 20px; border-radius: 5px; margin: 20px 0;\">"
        f"<p><strong>Transacción:</strong> {escape(compra.transaction_id)}</p>"
        f"<p><strong>Fecha de visita:</strong> {formatear_fecha(compra.visit_date)}</p>"
        f"<p><strong>Hora:</strong> {escape(compra.visit_time or 'Por confirmar')}</p>"
        f"<p><strong>Boletos:</strong> {compra.quantity}</p>"
        f"<p><strong>Total:</strong> ${compra.total:,.2f} MXN</p>"
        "</div>"
        f"{_PIE}</div>"
    )


def notificar_reserva(reserva_id: int, cancelacion: bool = False) -> None:
    """BackgroundTask: correo de confirmación (con PDF) o de cancelación"""
    accion = "cancellation_email" if cancelacion else "confirmation_email"
    db = conexion.SessionLocal()
    try:
        reserva = db.query(Reserva).filter(Reserva.id == reserva_id).first()
        if not reserva:
            return
        numero = reserva.reservation_number
        if cancelacion:
            asunto = f"Cancelación de Reservación {numero} - {config.NOMBRE_SITIO}"
            html = plantilla_cancelacion(reserva)
            adjuntos = []
        else:
            asunto = f"Confirmación de Reservación {numero} - {config.NOMBRE_SITIO}"
            html = plantilla_confirmacion(reserva)
            adjuntos = [ruta_de_url(reserva.pdf_url)] if reserva.pdf_url else []

        if enviar_email(reserva.usuario.email, asunto, html, adjuntos):
            registrar_log("info", "Email enviado", reserva.user_id, accion, {"reservation_id": reserva_id})
    except Exception as e:
        registrar_log("error", "Error enviando email", None, accion, {"reservation_id": reserva_id, "error": str(e)})
    finally:
        db.close()


def notificar_compra(compra_id: int) -> None:
    """BackgroundTask: comprobante de compra de destino"""
    db = conexion.SessionLocal()
    try:
        compra = db.query(CompraDestino).filter(CompraDestino.id == compra_id).first()
        if not compra:
            return
        asunto = f"Confirmación de Compra {compra.transaction_id} - {config.NOMBRE_SITIO}"
        adjuntos = [ruta_de_url(compra.pdf_url)] if compra.pdf_url else []
        if enviar_email(compra.user_email, asunto, plantilla_compra(compra), adjuntos):
            registrar_log("info", "Email enviado", compra.user_id, "purchase_email", {"purchase_id": compra_id})
    except Exception as e:
        registrar_log("error", "Error enviando email", None, "purchase_email", {"purchase_id": compra_id, "error": str(e)})
    finally:
        db.close()
