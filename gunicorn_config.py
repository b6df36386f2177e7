"""
Configuración de Gunicorn para la API de agendamientos.
Este archivo define los parámetros para ejecutar la aplicación en producción.
"""
import os
import multiprocessing

# Número de workers (procesos)
workers = int(os.getenv("GUNICORN_WORKERS", multiprocessing.cpu_count() * 2 + 1))

# Timeout en segundos
timeout = int(os.getenv("GUNICORN_TIMEOUT", "120"))

# Dirección y puerto en que Gunicorn escuchará (Render inyecta PORT)
bind = os.getenv(
    "GUNICORN_BIND",
    f"{os.getenv('API_HOST', '0.0.0.0')}:{os.getenv('API_PORT', os.getenv('PORT', '5000'))}"
)

# UvicornWorker es específico para FastAPI/ASGI
worker_class = "uvicorn.workers.UvicornWorker"

# Configuración de logging
loglevel = os.getenv("GUNICORN_LOG_LEVEL", "info")
accesslog = os.getenv("GUNICORN_ACCESS_LOG", "-")  # "-" significa stdout
errorlog = os.getenv("GUNICORN_ERROR_LOG", "-")    # "-" significa stderr

# Recarga automática solo en desarrollo
reload = os.getenv("ENVIRONMENT", "production").lower() == "development"

keepalive = 65
max_requests = 1000
max_requests_jitter = 50
graceful_timeout = 30

# Configuración para FastAPI con prefijo
if os.getenv("ROOT_PATH"):
    raw_env = [f"ROOT_PATH={os.getenv('ROOT_PATH')}"]
