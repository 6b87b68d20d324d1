"""
Punto de entrada de la aplicación FastAPI

Backend de postulaciones: formularios, postulantes y sus documentos
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException
from fastapi.routing import APIRoute
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from loguru import logger

from app.core.config import settings
from app.core.database import init_db, close_db
from app.core.response import success_response, DictResponse
from app.core.exceptions import (
    AppException,
    app_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    general_exception_handler,
)
from app.api import api_router

APP_VERSION = "1.0.0"


def custom_generate_unique_id(route: APIRoute) -> str:
    """
    operationId de OpenAPI a partir del nombre de la función de la ruta
    """
    return route.name


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Ciclo de vida de la aplicación

    Inicializa la base de datos al arrancar y libera conexiones al cerrar
    """
    logger.info(f"Iniciando aplicación: {settings.app_name}")
    logger.info(f"Entorno: {settings.app_env}")
    logger.info(f"Modo debug: {settings.debug}")

    await init_db()
    logger.info("Base de datos inicializada")

    yield

    await close_db()
    logger.info("Aplicación detenida")


def create_app() -> FastAPI:
    """
    Crea la instancia de FastAPI
    """
    app = FastAPI(
        title=settings.app_name,
        description="API de gestión de postulaciones y documentos",
        version=APP_VERSION,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
        generate_unique_id_function=custom_generate_unique_id,
    )

    # Manejadores de excepciones
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Rutas
    app.include_router(api_router, prefix="/api/v1")

    @app.get("/health", tags=["Sistema"], response_model=DictResponse)
    async def health_check():
        """Chequeo de salud"""
        return success_response(data={"status": "healthy"})

    @app.get("/", tags=["Sistema"], response_model=DictResponse)
    async def root():
        """Raíz de la API"""
        return success_response(data={
            "name": settings.app_name,
            "version": APP_VERSION,
            "docs": "/docs" if settings.debug else None,
        })

    # CORS (se agrega al final para que se ejecute primero)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
    )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="127.0.0.1",
        port=8000,
        reload=settings.debug,
    )
