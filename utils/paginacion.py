import json
from typing import List, Tuple

from fastapi import Query
from sqlalchemy.orm import Query as ConsultaSQL


class ParametrosPaginacion:
    """Dependencia con page/limit de los listados"""

    def __init__(
        self,
        page: int = Query(1, ge=1, description="Página (desde 1)"),
        limit: int = Query(10, ge=1, le=100, description="Elementos por página"),
    ):
        self.page = page
        self.limit = limit

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def paginar(consulta: ConsultaSQL, paginacion: ParametrosPaginacion, *orden) -> Tuple[List, int]:
    total = consulta.order_by(None).count()
    items = consulta.order_by(*orden).offset(paginacion.offset).limit(paginacion.limit).all()
    return items, total


def patrones_busqueda(texto: str) -> List[str]:
    """
    Patrones LIKE para buscar dentro de columnas JSON serializadas

    SQLite guarda JSON con escapes \\uXXXX; PostgreSQL conserva el texto.
    """
    escapado = json.dumps(texto)[1:-1]
    patrones = [f"%{texto}%"]
    if escapado != texto:
        patrones.append(f"%{escapado}%")
    return patrones


def patrones_elemento_json(valor: str) -> List[str]:
    """Patrones LIKE que encuentran `valor` como elemento completo de un arreglo JSON"""
    return list({f"%{json.dumps(valor)}%", f"%{json.dumps(valor, ensure_ascii=False)}%"})
