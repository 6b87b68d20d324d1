#!/usr/bin/env python
"""
Script de arranque del backend de postulaciones

Uso:
    python run.py                    # arranque por defecto (127.0.0.1:8000)
    python run.py -p 8080            # puerto
    python run.py --host 0.0.0.0     # acceso externo
    python run.py --reload           # recarga en caliente
"""
import argparse
import shutil
import sys
from pathlib import Path

# Raíz del proyecto en el path de Python
ROOT_DIR = Path(__file__).parent
sys.path.insert(0, str(ROOT_DIR))


def parse_args():
    """Argumentos de línea de comandos"""
    parser = argparse.ArgumentParser(
        description="Arranque del backend de postulaciones",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-p", "--port",
        type=int,
        default=8000,
        help="Puerto (por defecto: 8000)"
    )
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Dirección (por defecto: 127.0.0.1)"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Recarga en caliente (desarrollo)"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Procesos de trabajo (por defecto: 1)"
    )
    return parser.parse_args()


def check_env():
    """Revisa el entorno"""
    env_file = ROOT_DIR / ".env"
    env_example = ROOT_DIR / ".env.example"

    if not env_file.exists():
        if env_example.exists():
            print("No existe .env, se crea a partir de .env.example...")
            shutil.copy(env_example, env_file)
            print(".env creado, ajústelo según sea necesario")
        else:
            print("No existe .env, se usará la configuración por defecto")

    # Directorio de datos
    data_dir = ROOT_DIR / "data"
    if not data_dir.exists():
        data_dir.mkdir(parents=True)
        print(f"Directorio de datos creado: {data_dir}")


def show_settings():
    """Configuración efectiva, leída después de preparar .env"""
    from app.core.config import settings

    print(f"   Entorno: {settings.app_env}")
    print(f"   Base de datos: {settings.database_url}")
    print(
        f"   Exportación: {settings.export_filename_prefix}AAAAMMDD.zip "
        f"(compresión {settings.export_compression_level})"
    )


def main():
    """Función principal"""
    args = parse_args()

    print("=" * 50)
    print("  Backend de postulaciones")
    print("=" * 50)

    check_env()

    print("\nIniciando servicio...")
    show_settings()
    print(f"   Dirección: http://{args.host}:{args.port}")
    print(f"   Documentación: http://{args.host}:{args.port}/docs")
    print(f"   Recarga en caliente: {'sí' if args.reload else 'no'}")
    print(f"   Procesos: {args.workers}")
    print("\n" + "-" * 50 + "\n")

    try:
        import uvicorn
        uvicorn.run(
            "app.main:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
            workers=args.workers if not args.reload else 1,
            log_level="info",
        )
    except KeyboardInterrupt:
        print("\nServicio detenido")


if __name__ == "__main__":
    main()
