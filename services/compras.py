"""
Compras de visitas a destinos
"""
import time

from sqlalchemy.orm import Session

from config import PREFIJO_TRANSACCION
from models.catalogo import CompraDestino
from models.usuario import Usuario
from services.auditoria import registrar_log
from services.documentos import generar_pdf_compra
from services.reservas import generar_sufijo


def generar_transaccion_id() -> str:
    return f"{PREFIJO_TRANSACCION}-{int(time.time() * 1000)}-{generar_sufijo(8)}"


class CompraService:

    @staticmethod
    def _transaccion_unica(db: Session) -> str:
        while True:
            transaccion = generar_transaccion_id()
            existe = db.query(CompraDestino.id).filter(CompraDestino.transaction_id == transaccion).first()
            if not existe:
                return transaccion

    @staticmethod
    def crear_compra(db: Session, usuario: Usuario, destino: dict, detalle: dict) -> CompraDestino:
        """
        Registra la compra con el total calculado en el servidor
        (precio del destino x cantidad) y genera su comprobante PDF.
        """
        compra = CompraDestino(
            user_id=usuario.id,
            user_email=usuario.email,
            destination=destino,
            quantity=detalle["quantity"],
            visit_date=detalle["visit_date"],
            visit_time=detalle.get("visit_time"),
            visitor_name=detalle["visitor_name"],
            visitor_email=detalle["visitor_email"],
            visitor_phone=detalle["visitor_phone"],
            total=destino["price"] * detalle["quantity"],
            status="confirmada",
            transaction_id=CompraService._transaccion_unica(db),
        )
        db.add(compra)
        db.commit()
        db.refresh(compra)

        try:
            compra.pdf_url = generar_pdf_compra(compra)
            db.commit()
        except Exception as e:
            db.rollback()
            registrar_log(
                "error", "Error generando PDF de compra", usuario.id, "generate_pdf",
                {"purchase_id": compra.id, "error": str(e)},
            )
        db.refresh(compra)
        return compra
