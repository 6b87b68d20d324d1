"""
Módulo de excepciones

Define las excepciones de negocio y los manejadores globales
"""
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from loguru import logger

from .response import error_response


class AppException(Exception):
    """Excepción base de la aplicación"""

    def __init__(
        self,
        message: str = "Error interno del servidor",
        code: int = 500,
        data: dict = None
    ):
        self.message = message
        self.code = code
        self.data = data
        super().__init__(self.message)


class NotFoundException(AppException):
    """El recurso no existe"""

    def __init__(self, message: str = "Recurso no encontrado", data: dict = None):
        super().__init__(message=message, code=404, data=data)


class BadRequestException(AppException):
    """Parámetros de la solicitud inválidos"""

    def __init__(self, message: str = "Solicitud inválida"):
        super().__init__(message=message, code=400)


class ConflictException(AppException):
    """Conflicto con un recurso existente"""

    def __init__(self, message: str = "El recurso ya existe"):
        super().__init__(message=message, code=409)


# ========== Exportación de documentos ==========

class ArchiveEncodingError(AppException):
    """Fallo interno al codificar un archivo ZIP"""

    def __init__(self, message: str = "Error al generar el archivo de descarga"):
        super().__init__(message=message, code=500)


class NoDocumentsFoundError(NotFoundException):
    """Ninguna de las postulaciones solicitadas tiene documentos"""

    def __init__(
        self,
        message: str = "No se encontraron documentos para ningún postulante en las postulaciones solicitadas",
        data: dict = None
    ):
        super().__init__(message=message, data=data)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Manejador de excepciones de la aplicación"""
    logger.warning(f"AppException: {exc.message} | Path: {request.url.path}")
    return JSONResponse(
        status_code=exc.code,
        content=error_response(message=exc.message, code=exc.code, data=exc.data)
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Manejador de excepciones HTTP"""
    logger.warning(f"HTTPException: {exc.detail} | Path: {request.url.path}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(message=str(exc.detail), code=exc.status_code)
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Manejador de errores de validación"""
    errors = exc.errors()
    error_messages = []
    for error in errors:
        loc = " -> ".join(str(l) for l in error["loc"])
        error_messages.append(f"{loc}: {error['msg']}")

    message = "; ".join(error_messages)
    logger.warning(f"ValidationError: {message} | Path: {request.url.path}")

    return JSONResponse(
        status_code=422,
        content=error_response(
            message="Error de validación de la solicitud",
            code=422,
            data={"errors": error_messages}
        )
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Manejador genérico"""
    logger.exception(f"Unhandled Exception: {exc} | Path: {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=error_response(message="Error interno del servidor", code=500)
    )
