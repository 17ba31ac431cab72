"""
Experiencias turísticas
"""
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import conexion
from models.catalogo import Experiencia
from models.resena import ExperienciaResena
from models.usuario import Usuario
from schemas.base import Mensaje, Paginado
from schemas.catalogo import (
    ExperienciaCreate, ExperienciaUpdate, ExperienciaRead, ExperienciaDetalle, ExperienciaGuardada
)
from schemas.hoteles import ResenaCreate
from services.auditoria import registrar_log, error_de_base_de_datos
from services.resenas import agregar_resena
from utils.dependencies import get_usuario_actual, require_admin
from utils.errores import ErrorNoEncontrado
from utils.paginacion import ParametrosPaginacion, paginar

router = APIRouter(prefix="/api/experiences", tags=["Experiencias"])


def _buscar_experiencia(db: Session, experiencia_id: int, solo_activas: bool = False) -> Experiencia:
    consulta = db.query(Experiencia).filter(Experiencia.id == experiencia_id)
    if solo_activas:
        consulta = consulta.filter(Experiencia.is_active.is_(True))
    experiencia = consulta.first()
    if not experiencia:
        raise ErrorNoEncontrado("Experiencia no encontrada")
    return experiencia


@router.get("", response_model=Paginado[ExperienciaRead])
def listar_experiencias(
    search: Optional[str] = Query(None, description="Texto en título, descripción o ubicación"),
    category: Optional[str] = Query(None),
    location: Optional[str] = Query(None),
    min_price: Optional[float] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0),
    paginacion: ParametrosPaginacion = Depends(),
    db: Session = Depends(conexion.get_db),
):
    consulta = db.query(Experiencia).filter(Experiencia.is_active.is_(True))

    if search:
        patron = f"%{search}%"
        consulta = consulta.filter(or_(
            Experiencia.title.ilike(patron),
            Experiencia.description.ilike(patron),
            Experiencia.location.ilike(patron),
        ))
    if category:
        consulta = consulta.filter(Experiencia.category == category)
    if location:
        consulta = consulta.filter(Experiencia.location.ilike(f"%{location}%"))
    if min_price is not None:
        consulta = consulta.filter(Experiencia.price >= min_price)
    if max_price is not None:
        consulta = consulta.filter(Experiencia.price <= max_price)

    experiencias, total = paginar(consulta, paginacion, Experiencia.rating.desc(), Experiencia.id.desc())
    return Paginado[ExperienciaRead].crear(experiencias, total, paginacion.page, paginacion.limit)


@router.get("/{experiencia_id}", response_model=ExperienciaDetalle)
def obtener_experiencia(experiencia_id: int = Path(..., gt=0), db: Session = Depends(conexion.get_db)):
    return _buscar_experiencia(db, experiencia_id)


@router.post("", response_model=ExperienciaGuardada, status_code=status.HTTP_201_CREATED)
def crear_experiencia(
    datos: ExperienciaCreate,
    admin: Usuario = Depends(require_admin),
    db: Session = Depends(conexion.get_db),
):
    experiencia = Experiencia(**datos.model_dump(exclude_none=True))
    try:
        db.add(experiencia)
        db.commit()
        db.refresh(experiencia)
    except SQLAlchemyError as e:
        raise error_de_base_de_datos(db, e, "Error al crear la experiencia", admin.id, "create_experience")

    registrar_log("info", "Experiencia creada", admin.id, "create_experience", {"experience_id": experiencia.id})
    return {"message": "Experiencia creada exitosamente", "experience": experiencia}


@router.put("/{experiencia_id}", response_model=ExperienciaGuardada)
def actualizar_experiencia(
    datos: ExperienciaUpdate,
    experiencia_id: int = Path(..., gt=0),
    admin: Usuario = Depends(require_admin),
    db: Session = Depends(conexion.get_db),
):
    experiencia = _buscar_experiencia(db, experiencia_id)
    try:
        for campo, valor in datos.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(experiencia, campo, valor)
        db.commit()
        db.refresh(experiencia)
    except SQLAlchemyError as e:
        raise error_de_base_de_datos(db, e, "Error al actualizar la experiencia", admin.id, "update_experience")

    registrar_log("info", "Experiencia actualizada", admin.id, "update_experience", {"experience_id": experiencia.id})
    return {"message": "Experiencia actualizada exitosamente", "experience": experiencia}


@router.delete("/{experiencia_id}", response_model=Mensaje)
def desactivar_experiencia(
    experiencia_id: int = Path(..., gt=0),
    admin: Usuario = Depends(require_admin),
    db: Session = Depends(conexion.get_db),
):
    """
    Baja lógica: la experiencia deja de listarse pero conserva sus reseñas
    """
    experiencia = _buscar_experiencia(db, experiencia_id)
    try:
        experiencia.is_active = False
        db.commit()
    except SQLAlchemyError as e:
        raise error_de_base_de_datos(db, e, "Error al eliminar la experiencia", admin.id, "delete_experience")

    registrar_log("info", "Experiencia desactivada", admin.id, "delete_experience", {"experience_id": experiencia_id})
    return {"message": "Experiencia eliminada exitosamente"}


@router.post("/{experiencia_id}/reviews", response_model=ExperienciaGuardada)
def agregar_resena_experiencia(
    datos: ResenaCreate,
    experiencia_id: int = Path(..., gt=0),
    usuario: Usuario = Depends(get_usuario_actual),
    db: Session = Depends(conexion.get_db),
):
    experiencia = _buscar_experiencia(db, experiencia_id, solo_activas=True)
    try:
        experiencia = agregar_resena(
            db, experiencia, ExperienciaResena, usuario, datos.rating, datos.comment,
            mensaje_duplicado="Ya has hecho una reseña para esta experiencia",
        )
    except SQLAlchemyError as e:
        raise error_de_base_de_datos(db, e, "Error al agregar la reseña", usuario.id, "add_experience_review")

    registrar_log(
        "info", "Reseña de experiencia agregada", usuario.id, "add_experience_review",
        {"experience_id": experiencia.id, "rating": datos.rating},
    )
    return {"message": "Reseña agregada exitosamente", "experience": experiencia}
