from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import calculations, clients, health
from app.core.config import get_settings
from app.core.exceptions import ClientNotFoundError, InvalidInputError
from app.core.logging import configure_logging, get_logger
from app.db.session import lifespan


configure_logging()
logger = get_logger(__name__)


async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    logger.info("request.invalid_input", path=request.url.path, field=exc.field, reason=exc.reason)
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"detail": exc.to_dict()})


async def client_not_found_handler(request: Request, exc: ClientNotFoundError) -> JSONResponse:
    logger.info("request.client_not_found", path=request.url.path, client_id=exc.client_id)
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": "Client not found"})


def create_application() -> FastAPI:
    settings = get_settings()
    application = FastAPI(title=settings.app_name, lifespan=lifespan)
    application.include_router(health.router)
    application.include_router(calculations.router)
    application.include_router(clients.router)

    application.add_exception_handler(InvalidInputError, invalid_input_handler)
    application.add_exception_handler(ClientNotFoundError, client_not_found_handler)

    if settings.allowed_origins:
        application.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.allowed_origins],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    return application


app = create_application()
