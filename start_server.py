#!/usr/bin/env python
"""
Script para iniciar el servidor Gunicorn con la configuración adecuada.
Facilita el arranque del servidor en diferentes entornos.
"""
import os
import sys
import subprocess
import logging
from dotenv import load_dotenv

# Configurar logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("start_server")

def main():
    """Función principal para iniciar el servidor Gunicorn."""
    # Cargar variables de entorno
    load_dotenv()

    # Verificar que el archivo de configuración existe
    if not os.path.exists("gunicorn_config.py"):
        logger.error("El archivo de configuración de Gunicorn no existe. Asegúrate de que estás en el directorio correcto.")
        sys.exit(1)

    # Verificar que la aplicación existe
    try:
        from barberbook.main import app
        logger.info(f"Aplicación cargada correctamente: {app.title}")
    except ImportError as e:
        logger.error(f"No se pudo cargar la aplicación ({str(e)}). Instala el proyecto con 'pip install -e .'")
        sys.exit(1)

    from barberbook.infrastructure.config.settings import get_settings
    settings = get_settings()
    host = settings["server"]["host"]
    port = settings["server"]["port"]
    environment = os.getenv("ENVIRONMENT", "development")
    root_path = os.getenv("ROOT_PATH", "")

    logger.info(f"Iniciando servidor en {host}:{port}")
    logger.info(f"Entorno: {environment}")
    logger.info(f"Zona horaria por defecto: {settings['timezone']['default']}")
    if not settings["supabase"]["url"]:
        logger.warning("SUPABASE_URL no está configurada; la API responderá 503 en las consultas")
    logger.info(f"La API estará disponible en: http://{host}:{port}{root_path}/docs")

    cmd = [
        "gunicorn",
        "--config", "gunicorn_config.py",
        "barberbook.main:app"
    ]

    try:
        logger.info("Iniciando Gunicorn...")
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logger.info("Servidor detenido manualmente")
    except (OSError, subprocess.CalledProcessError) as e:
        logger.error(f"Error al iniciar el servidor: {str(e)}")
        sys.exit(1)

if __name__ == "__main__":
    main()
