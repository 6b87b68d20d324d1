"""
Módulo de respuestas unificadas

Define el formato estándar de las respuestas de la API
"""
from typing import Any, Dict, Generic, List, Optional, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class ResponseModel(BaseModel, Generic[T]):
    """
    Modelo de respuesta unificado

    Ejemplo:
        {
            "success": true,
            "code": 200,
            "message": "Operación exitosa",
            "data": {...}
        }
    """
    success: bool = True
    code: int = 200
    message: str = "Operación exitosa"
    data: Optional[T] = None


class PagedData(BaseModel, Generic[T]):
    """Datos paginados"""
    items: List[T]
    total: int
    page: int
    page_size: int
    pages: int  # total de páginas


class PagedResponseModel(ResponseModel[PagedData[T]], Generic[T]):
    """Respuesta paginada"""
    pass


class MessageResponse(ResponseModel[None]):
    """Respuesta sin datos"""
    pass


class DictResponse(ResponseModel[Dict[str, Any]]):
    """Respuesta con datos libres"""
    pass


def success_response(
    data: Any = None,
    message: str = "Operación exitosa",
    code: int = 200
) -> dict:
    """Respuesta exitosa"""
    return {
        "success": True,
        "code": code,
        "message": message,
        "data": data
    }


def error_response(
    message: str = "Operación fallida",
    code: int = 400,
    data: Any = None
) -> dict:
    """Respuesta de error"""
    return {
        "success": False,
        "code": code,
        "message": message,
        "data": data
    }


def paged_response(
    items: list,
    total: int,
    page: int,
    page_size: int,
    message: str = "Consulta exitosa"
) -> dict:
    """Respuesta paginada"""
    pages = (total + page_size - 1) // page_size if page_size > 0 else 0
    return success_response(
        data={
            "items": items,
            "total": total,
            "page": page,
            "page_size": page_size,
            "pages": pages
        },
        message=message
    )
