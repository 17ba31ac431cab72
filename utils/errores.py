"""
Errores de dominio y su traducción a respuestas HTTP

Los servicios lanzan estas excepciones; main.py registra un handler que
las convierte en {"error": mensaje} con el status correspondiente.
"""
from fastapi import status


class ErrorDominio(Exception):
    """Base de todos los errores de negocio"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    mensaje_default = "Error interno del servidor"

    def __init__(self, mensaje: str = None):
        self.mensaje = mensaje or self.mensaje_default
        super().__init__(self.mensaje)


class ErrorValidacion(ErrorDominio):
    """Datos faltantes o inválidos"""
    status_code = status.HTTP_400_BAD_REQUEST
    mensaje_default = "Datos inválidos"


class ErrorAutenticacion(ErrorDominio):
    """No se envió credencial"""
    status_code = status.HTTP_401_UNAUTHORIZED
    mensaje_default = "Token de acceso requerido"


class ErrorTokenInvalido(ErrorDominio):
    """Credencial con firma inválida o expirada"""
    status_code = status.HTTP_403_FORBIDDEN
    mensaje_default = "Token inválido"


class ErrorPermisos(ErrorDominio):
    status_code = status.HTTP_403_FORBIDDEN
    mensaje_default = "Se requieren privilegios de administrador"


class ErrorNoEncontrado(ErrorDominio):
    status_code = status.HTTP_404_NOT_FOUND
    mensaje_default = "Recurso no encontrado"


class ErrorConflicto(ErrorDominio):
    """Duplicados y transiciones de estado no permitidas (reseña, favorito, ya cancelada)"""
    status_code = status.HTTP_400_BAD_REQUEST
    mensaje_default = "La operación entra en conflicto con el estado actual"


class ErrorPolitica(ErrorDominio):
    """Violación de la política de cancelación"""
    status_code = status.HTTP_400_BAD_REQUEST
    mensaje_default = "La operación no está permitida por la política vigente"


class ErrorInterno(ErrorDominio):
    pass
