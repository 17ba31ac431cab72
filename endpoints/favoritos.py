"""
Hoteles favoritos del huésped
"""
from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import conexion
from models.hotel import Hotel
from models.usuario import Usuario
from schemas.hoteles import HotelRead, FavoritosActualizados
from services.auditoria import registrar_log, error_de_base_de_datos
from utils.dependencies import get_usuario_actual
from utils.errores import ErrorConflicto, ErrorNoEncontrado

router = APIRouter(prefix="/api/favorites", tags=["Favoritos"])


@router.get("", response_model=List[HotelRead])
def listar_favoritos(usuario: Usuario = Depends(get_usuario_actual)):
    return usuario.favoritos


@router.post("/{hotel_id}", response_model=FavoritosActualizados)
def agregar_favorito(
    hotel_id: int = Path(..., gt=0),
    usuario: Usuario = Depends(get_usuario_actual),
    db: Session = Depends(conexion.get_db),
):
    hotel = db.query(Hotel).filter(Hotel.id == hotel_id).first()
    if not hotel:
        raise ErrorNoEncontrado("Hotel no encontrado")
    if hotel in usuario.favoritos:
        raise ErrorConflicto("El hotel ya está en favoritos")

    try:
        usuario.favoritos.append(hotel)
        db.commit()
    except SQLAlchemyError as e:
        raise error_de_base_de_datos(db, e, "Error agregando a favoritos", usuario.id, "add_favorite")

    registrar_log("info", "Hotel agregado a favoritos", usuario.id, "add_favorite", {"hotel_id": hotel_id})
    return {"message": "Hotel agregado a favoritos", "favorites": usuario.favorite_ids}


@router.delete("/{hotel_id}", response_model=FavoritosActualizados)
def remover_favorito(
    hotel_id: int = Path(..., gt=0),
    usuario: Usuario = Depends(get_usuario_actual),
    db: Session = Depends(conexion.get_db),
):
    hotel = next((h for h in usuario.favoritos if h.id == hotel_id), None)
    if hotel is None:
        raise ErrorConflicto("El hotel no está en favoritos")

    try:
        usuario.favoritos.remove(hotel)
        db.commit()
    except SQLAlchemyError as e:
        raise error_de_base_de_datos(db, e, "Error removiendo de favoritos", usuario.id, "remove_favorite")

    registrar_log("info", "Hotel removido de favoritos", usuario.id, "remove_favorite", {"hotel_id": hotel_id})
    return {"message": "Hotel removido de favoritos", "favorites": usuario.favorite_ids}
