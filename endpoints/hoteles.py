"""
Catálogo de hoteles: búsqueda, cercanía, detalle, reseñas y disponibilidad
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy import String, cast, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import conexion
from models.hotel import Hotel
from models.resena import HotelResena
from models.usuario import Usuario
from schemas.base import Paginado
from schemas.hoteles import (
    HotelRead, HotelDetalle, ResenaCreate, ResenaAgregada,
    DisponibilidadRequest, DisponibilidadRead
)
from services.auditoria import registrar_log, error_de_base_de_datos
from services.resenas import agregar_resena
from services.reservas import ReservaService
from utils.dependencies import get_usuario_actual
from utils.errores import ErrorNoEncontrado, ErrorValidacion
from utils.paginacion import ParametrosPaginacion, paginar, patrones_elemento_json

router = APIRouter(prefix="/api/hotels", tags=["Hoteles"])

KM_POR_GRADO = 111
MAX_HOTELES_CERCANOS = 50


def _buscar_hotel(db: Session, hotel_id: int) -> Hotel:
    hotel = db.query(Hotel).filter(Hotel.id == hotel_id).first()
    if not hotel:
        raise ErrorNoEncontrado("Hotel no encontrado")
    return hotel


@router.get("", response_model=Paginado[HotelRead])
def listar_hoteles(
    search: Optional[str] = Query(None, description="Texto en nombre, ubicación o descripción"),
    min_price: Optional[float] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0),
    amenities: Optional[str] = Query(None, description="Lista separada por comas; deben cumplirse todas"),
    city: Optional[str] = Query(None),
    paginacion: ParametrosPaginacion = Depends(),
    db: Session = Depends(conexion.get_db),
):
    consulta = db.query(Hotel)

    if search:
        patron = f"%{search}%"
        consulta = consulta.filter(or_(
            Hotel.name.ilike(patron),
            Hotel.location.ilike(patron),
            Hotel.description.ilike(patron),
        ))
    if min_price is not None:
        consulta = consulta.filter(Hotel.price >= min_price)
    if max_price is not None:
        consulta = consulta.filter(Hotel.price <= max_price)
    if amenities:
        for amenity in [a.strip() for a in amenities.split(",") if a.strip()]:
            consulta = consulta.filter(or_(*[
                cast(Hotel.amenities, String).like(patron)
                for patron in patrones_elemento_json(amenity)
            ]))
    if city:
        consulta = consulta.filter(Hotel.city.ilike(f"%{city}%"))

    hoteles, total = paginar(consulta, paginacion, Hotel.rating.desc(), Hotel.created_at.desc())
    return Paginado[HotelRead].crear(hoteles, total, paginacion.page, paginacion.limit)


@router.get("/nearby", response_model=List[HotelRead])
def hoteles_cercanos(
    lat: Optional[float] = Query(None),
    lng: Optional[float] = Query(None),
    radius: float = Query(50, gt=0, description="Radio en kilómetros"),
    db: Session = Depends(conexion.get_db),
):
    """
    Hoteles dentro de una caja de ±radius/111 grados alrededor del punto
    """
    if lat is None or lng is None:
        raise ErrorValidacion("Latitud y longitud son requeridas")

    delta = radius / KM_POR_GRADO
    return (
        db.query(Hotel)
        .filter(
            Hotel.lat.between(lat - delta, lat + delta),
            Hotel.lng.between(lng - delta, lng + delta),
        )
        .limit(MAX_HOTELES_CERCANOS)
        .all()
    )


@router.get("/{hotel_id}", response_model=HotelDetalle)
def obtener_hotel(hotel_id: int = Path(..., gt=0), db: Session = Depends(conexion.get_db)):
    return _buscar_hotel(db, hotel_id)


@router.post("/{hotel_id}/reviews", response_model=ResenaAgregada)
def agregar_resena_hotel(
    datos: ResenaCreate,
    hotel_id: int = Path(..., gt=0),
    usuario: Usuario = Depends(get_usuario_actual),
    db: Session = Depends(conexion.get_db),
):
    hotel = _buscar_hotel(db, hotel_id)
    try:
        hotel = agregar_resena(
            db, hotel, HotelResena, usuario, datos.rating, datos.comment,
            mensaje_duplicado="Ya has hecho una reseña para este hotel",
        )
    except SQLAlchemyError as e:
        raise error_de_base_de_datos(db, e, "Error al agregar la reseña", usuario.id, "add_review")

    registrar_log("info", "Reseña agregada", usuario.id, "add_review", {"hotel_id": hotel.id, "rating": datos.rating})
    return {"message": "Reseña agregada exitosamente", "hotel": hotel}


@router.post("/{hotel_id}/check-availability", response_model=DisponibilidadRead)
def verificar_disponibilidad(
    datos: DisponibilidadRequest,
    hotel_id: int = Path(..., gt=0),
    db: Session = Depends(conexion.get_db),
):
    return ReservaService.verificar_disponibilidad(db, hotel_id, datos.checkin, datos.checkout)
