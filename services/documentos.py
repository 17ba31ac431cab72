"""
Comprobantes PDF de reservaciones y compras de destinos (reportlab)

Los archivos se escriben en config.UPLOADS_DIR y se devuelve la URL
pública bajo /uploads.
"""
from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

import config
from utils.timezone import formatear_fecha


def ruta_de_url(url: str) -> Path:
    """Ruta en disco de un archivo publicado como /uploads/<nombre>"""
    return Path(config.UPLOADS_DIR) / Path(url).name


def _formatear_monto(total: float) -> str:
    return f"${total:,.2f} MXN"


def _tabla(filas):
    # Las celdas de texto plano se dibujan literalmente, sin interpretar marcado
    tabla = Table([[str(a), str(b)] for a, b in filas], colWidths=[170, 300])
    tabla.setStyle(
        TableStyle(
            [
                ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                ("ALIGN", (0, 0), (-1, -1), "LEFT"),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                ("BACKGROUND", (0, 0), (0, -1), colors.whitesmoke),
            ]
        )
    )
    return tabla


def _escribir_pdf(nombre_archivo: str, story) -> str:
    directorio = Path(config.UPLOADS_DIR)
    directorio.mkdir(parents=True, exist_ok=True)
    ruta = directorio / nombre_archivo
    SimpleDocTemplate(str(ruta), pagesize=A4).build(story)
    return f"{config.UPLOADS_URL_PREFIX}/{nombre_archivo}"


def _estilos():
    styles = getSampleStyleSheet()
    centrado = ParagraphStyle("Centrado", parent=styles["Normal"], alignment=TA_CENTER, fontSize=12)
    total = ParagraphStyle("Total", parent=styles["Heading2"], alignment=TA_RIGHT)
    return styles, centrado, total


def generar_pdf_reserva(reserva, hotel, usuario) -> str:
    styles, centrado, estilo_total = _estilos()
    huespedes = f"{reserva.adults} adultos"
    if reserva.children:
        huespedes += f", {reserva.children} niños"

    story = [
        Paragraph(f"<b>Confirmación de Reservación - {config.NOMBRE_SITIO}</b>", styles["Title"]),
        Paragraph(f"Número de Reservación: {escape(reserva.reservation_number)}", centrado),
        Spacer(1, 20),
        _tabla([
            ("Hotel", hotel.name),
            ("Ubicación", hotel.location),
            ("Dirección", hotel.address or ""),
        ]),
        Spacer(1, 14),
        _tabla([
            ("Huésped", usuario.name if usuario else ""),
            ("Email", usuario.email if usuario else ""),
            ("Teléfono", (usuario.phone if usuario else None) or "No proporcionado"),
        ]),
        Spacer(1, 14),
        _tabla([
            ("Fecha de llegada", formatear_fecha(reserva.checkin)),
            ("Fecha de salida", formatear_fecha(reserva.checkout)),
            ("Noches", reserva.nights),
            ("Huéspedes", huespedes),
            ("Tipo de habitación", reserva.room_type),
        ]),
        Spacer(1, 20),
        Paragraph(f"Total: {_formatear_monto(reserva.total)}", estilo_total),
        Paragraph(f"Estado: {escape(reserva.status)}", styles["Normal"]),
        Spacer(1, 30),
        Paragraph(f"¡Gracias por elegir {config.NOMBRE_SITIO}!", centrado),
        Paragraph("Esperamos que disfrutes tu estancia", centrado),
    ]
    return _escribir_pdf(f"reservation_{reserva.id}.pdf", story)


def generar_pdf_compra(compra) -> str:
    styles, centrado, estilo_total = _estilos()
    destino = compra.destination or {}

    story = [
        Paragraph(f"<b>Comprobante de Compra - {config.NOMBRE_SITIO}</b>", styles["Title"]),
        Paragraph(f"Transacción: {escape(compra.transaction_id)}", centrado),
        Spacer(1, 20),
        _tabla([
            ("Destino", destino.get("name", "")),
            ("Ubicación", destino.get("location") or ""),
            ("Horario", destino.get("schedule") or ""),
        ]),
        Spacer(1, 14),
        _tabla([
            ("Visitante", compra.visitor_name),
            ("Email", compra.visitor_email),
            ("Teléfono", compra.visitor_phone),
            ("Fecha de visita", formatear_fecha(compra.visit_date)),
            ("Hora", compra.visit_time or "Por confirmar"),
            ("Boletos", compra.quantity),
        ]),
        Spacer(1, 20),
        Paragraph(f"Total: {_formatear_monto(compra.total)}", estilo_total),
        Spacer(1, 30),
        Paragraph("Presenta este comprobante el día de tu visita", centrado),
    ]
    return _escribir_pdf(f"purchase_{compra.id}.pdf", story)
