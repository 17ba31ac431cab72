"""
Destinos turísticos
"""
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy import String, cast, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import conexion
from models.catalogo import Destino
from models.resena import DestinoResena
from models.usuario import Usuario
from schemas.base import Mensaje, Paginado
from schemas.catalogo import DestinoCreate, DestinoUpdate, DestinoRead, DestinoDetalle, DestinoGuardado
from schemas.hoteles import ResenaCreate
from services.auditoria import registrar_log, error_de_base_de_datos
from services.resenas import agregar_resena
from utils.dependencies import get_usuario_actual, require_admin
from utils.errores import ErrorNoEncontrado
from utils.paginacion import ParametrosPaginacion, paginar, patrones_busqueda

router = APIRouter(prefix="/api/destinations", tags=["Destinos"])


def _buscar_destino(db: Session, destino_id: int) -> Destino:
    destino = db.query(Destino).filter(Destino.id == destino_id).first()
    if not destino:
        raise ErrorNoEncontrado("Destino no encontrado")
    return destino


def _aplicar_datos(destino: Destino, datos: dict) -> None:
    coordenadas = datos.pop("coordinates", None)
    if coordenadas:
        destino.lat = coordenadas.get("lat")
        destino.lng = coordenadas.get("lng")
    for campo, valor in datos.items():
        setattr(destino, campo, valor)


@router.get("", response_model=Paginado[DestinoRead])
def listar_destinos(
    search: Optional[str] = Query(None, description="Texto en nombre, descripción o atracciones"),
    country: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    paginacion: ParametrosPaginacion = Depends(),
    db: Session = Depends(conexion.get_db),
):
    consulta = db.query(Destino)
    if search:
        consulta = consulta.filter(or_(
            Destino.name.ilike(f"%{search}%"),
            Destino.description.ilike(f"%{search}%"),
            *[cast(Destino.attractions, String).ilike(p) for p in patrones_busqueda(search)],
        ))
    if country:
        consulta = consulta.filter(Destino.country.ilike(f"%{country}%"))
    if state:
        consulta = consulta.filter(Destino.state.ilike(f"%{state}%"))

    destinos, total = paginar(consulta, paginacion, Destino.created_at.desc(), Destino.id.desc())
    return Paginado[DestinoRead].crear(destinos, total, paginacion.page, paginacion.limit)


@router.get("/{destino_id}", response_model=DestinoDetalle)
def obtener_destino(destino_id: int = Path(..., gt=0), db: Session = Depends(conexion.get_db)):
    return _buscar_destino(db, destino_id)


@router.post("", response_model=DestinoGuardado, status_code=status.HTTP_201_CREATED)
def crear_destino(
    datos: DestinoCreate,
    admin: Usuario = Depends(require_admin),
    db: Session = Depends(conexion.get_db),
):
    destino = Destino()
    _aplicar_datos(destino, datos.model_dump(exclude_none=True))
    try:
        db.add(destino)
        db.commit()
        db.refresh(destino)
    except SQLAlchemyError as e:
        raise error_de_base_de_datos(db, e, "Error al crear el destino", admin.id, "create_destination")

    registrar_log("info", "Destino creado", admin.id, "create_destination", {"destination_id": destino.id})
    return {"message": "Destino creado exitosamente", "destination": destino}


@router.put("/{destino_id}", response_model=DestinoGuardado)
def actualizar_destino(
    datos: DestinoUpdate,
    destino_id: int = Path(..., gt=0),
    admin: Usuario = Depends(require_admin),
    db: Session = Depends(conexion.get_db),
):
    destino = _buscar_destino(db, destino_id)
    _aplicar_datos(destino, datos.model_dump(exclude_unset=True, exclude_none=True))
    try:
        db.commit()
        db.refresh(destino)
    except SQLAlchemyError as e:
        raise error_de_base_de_datos(db, e, "Error al actualizar el destino", admin.id, "update_destination")

    registrar_log("info", "Destino actualizado", admin.id, "update_destination", {"destination_id": destino.id})
    return {"message": "Destino actualizado exitosamente", "destination": destino}


@router.delete("/{destino_id}", response_model=Mensaje)
def eliminar_destino(
    destino_id: int = Path(..., gt=0),
    admin: Usuario = Depends(require_admin),
    db: Session = Depends(conexion.get_db),
):
    destino = _buscar_destino(db, destino_id)
    try:
        db.delete(destino)
        db.commit()
    except SQLAlchemyError as e:
        raise error_de_base_de_datos(db, e, "Error al eliminar el destino", admin.id, "delete_destination")

    registrar_log("info", "Destino eliminado", admin.id, "delete_destination", {"destination_id": destino_id})
    return {"message": "Destino eliminado exitosamente"}


@router.post("/{destino_id}/reviews", response_model=DestinoGuardado)
def agregar_resena_destino(
    datos: ResenaCreate,
    destino_id: int = Path(..., gt=0),
    usuario: Usuario = Depends(get_usuario_actual),
    db: Session = Depends(conexion.get_db),
):
    destino = _buscar_destino(db, destino_id)
    try:
        destino = agregar_resena(
            db, destino, DestinoResena, usuario, datos.rating, datos.comment,
            mensaje_duplicado="Ya has hecho una reseña para este destino",
        )
    except SQLAlchemyError as e:
        raise error_de_base_de_datos(db, e, "Error al agregar la reseña", usuario.id, "add_destination_review")

    registrar_log(
        "info", "Reseña de destino agregada", usuario.id, "add_destination_review",
        {"destination_id": destino.id, "rating": datos.rating},
    )
    return {"message": "Reseña agregada exitosamente", "destination": destino}
