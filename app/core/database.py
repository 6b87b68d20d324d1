"""
Módulo de base de datos

SQLAlchemy 2.0 en modo asíncrono con modelos SQLModel
"""
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlmodel import SQLModel

from .config import settings


# Motor asíncrono
engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,  # imprime SQL en desarrollo
    future=True,
)

# Fábrica de sesiones asíncronas
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependencia de sesión de base de datos

    Uso:
        @router.get("/postings")
        async def get_postings(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db():
    """Inicializa la base de datos (crea todas las tablas)"""
    # registra las tablas en SQLModel.metadata
    import app.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def close_db():
    """Cierra las conexiones de la base de datos"""
    await engine.dispose()
