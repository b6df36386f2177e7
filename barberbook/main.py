"""
Punto de entrada principal de la aplicación.
Configura y ejecuta el servidor web con FastAPI.
"""
import os
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from barberbook.domain.entities.models import ErrorResponse
from barberbook.domain.exceptions import BookingError
from barberbook.infrastructure.config.settings import ALLOWED_ORIGINS, PUBLIC_DIR
from barberbook.presentation.api.routes import router as api_router
from barberbook.presentation.api.maintenance_routes import router as maintenance_router

# Configuración de logging con nivel configurable
log_level = os.getenv("LOG_LEVEL", "INFO")
numeric_level = getattr(logging, log_level.upper(), logging.INFO)
log_file = os.getenv("LOG_FILE", "app.log")
handlers = [logging.StreamHandler()]
if log_file:
    handlers.append(logging.FileHandler(log_file))
logging.basicConfig(
    level=numeric_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=handlers
)

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Endpoint não encontrado. Verifique se o prefixo /api/ está correto."
MAX_LOGGED_BODY = 1000

# Crear la aplicación FastAPI con metadatos
app = FastAPI(
    title="Barbearia Agendamentos API",
    description="API de agendamento de barbearias com sincronização no Google Calendar",
    version="1.0.0",
    root_path=os.getenv("ROOT_PATH", ""),
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "barbearias", "description": "Cadastro, consulta e disponibilidade de barbearias"},
        {"name": "agendamentos", "description": "Criação de agendamentos"},
        {"name": "google", "description": "Conexão com o Google Calendar"},
        {"name": "health", "description": "Verificações de estado do sistema"}
    ]
)

# Configurar CORS con los orígenes del frontend
logger.info(f"[CORS] Origens permitidas: {', '.join(ALLOWED_ORIGINS) or 'Nenhuma'}")
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "HEAD", "OPTIONS"],
    allow_headers=["*"],
)

@app.middleware("http")
async def log_api_requests(request: Request, call_next):
    """Registra las solicitudes a /api y, en los POST, el cuerpo recortado."""
    if request.url.path.startswith("/api"):
        try:
            logger.info(f"[API] {request.method} {request.url.path}")
            if request.method == "POST":
                body = await request.body()
                if body:
                    logger.info(f"[API] body: {body.decode('utf-8', errors='replace')[:MAX_LOGGED_BODY]}")
        except Exception as e:
            logger.debug(f"[API] no se pudo registrar la solicitud: {str(e)}")
    return await call_next(request)

def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump()
    )

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found":
        logger.info(f"[404] Rota não encontrada: {request.method} {request.url.path}")
        return error_response(404, NOT_FOUND_MESSAGE)
    return error_response(exc.status_code, str(exc.detail))

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    details = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ())[1:])}: {error.get('msg')}"
        for error in errors
    )
    return error_response(422, f"Dados inválidos - {details}")

@app.exception_handler(BookingError)
async def booking_exception_handler(request: Request, exc: BookingError):
    if exc.status_code >= 500:
        logger.error(f"{request.url.path} erro: {exc.message}")
    return error_response(exc.status_code, exc.message)

# Manejador global de excepciones
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Manejador global de excepciones."""
    logger.error(f"Error no manejado: {str(exc)}")
    return error_response(500, "Erro interno do servidor")

# Registrar los routers
app.include_router(api_router)
app.include_router(maintenance_router)

# Build del frontend, si existe
if os.path.isdir(PUBLIC_DIR):
    app.mount("/", StaticFiles(directory=PUBLIC_DIR, html=True), name="public")

# Esta variable 'app' será utilizada por Gunicorn
