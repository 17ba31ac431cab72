"""
Reseñas y rating agregado para hoteles, destinos y experiencias
"""
import math
from typing import Iterable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.usuario import Usuario
from utils.errores import ErrorConflicto, ErrorValidacion


def recalcular_rating(calificaciones: Iterable[int]) -> float:
    """Promedio redondeado a un decimal, mitades hacia arriba (4.25 -> 4.3)"""
    valores = list(calificaciones)
    if not valores:
        return 0
    promedio = sum(valores) / len(valores)
    return math.floor(promedio * 10 + 0.5) / 10


def agregar_resena(
    db: Session,
    objetivo,
    modelo_resena,
    usuario: Usuario,
    rating: int,
    comment: str = None,
    mensaje_duplicado: str = "Ya has hecho una reseña",
):
    """
    Agrega la reseña del usuario al objetivo y actualiza su rating

    `objetivo` es cualquier modelo con relación `resenas` y columna
    `rating`; la reseña y el nuevo promedio se guardan en un solo commit.

    Raises:
        ErrorValidacion: rating fuera de 1..5
        ErrorConflicto: el usuario ya reseñó este objetivo
    """
    if rating is None or not 1 <= rating <= 5:
        raise ErrorValidacion("El rating debe estar entre 1 y 5")

    if any(r.user_id == usuario.id for r in objetivo.resenas):
        raise ErrorConflicto(mensaje_duplicado)

    objetivo.resenas.append(modelo_resena(
        user_id=usuario.id,
        user_name=usuario.name,
        rating=rating,
        comment=comment,
    ))
    objetivo.rating = recalcular_rating(r.rating for r in objetivo.resenas)

    try:
        db.commit()
    except IntegrityError:
        # Reseña concurrente del mismo usuario
        db.rollback()
        raise ErrorConflicto(mensaje_duplicado)

    db.refresh(objetivo)
    return objetivo
