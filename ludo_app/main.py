import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ludo_app.api import router
from ludo_app.config import get_settings
from ludo_app.errors import ErrorCode, GameError
from ludo_app.manager import game_manager
from ludo_app.utils.util import setup_logging


settings = get_settings()
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    game_manager.include_board = settings.include_board
    logger.info("Ludo server ready")

    yield

    logger.info(f"Shutting down, dropping {len(game_manager.games)} rooms")
    game_manager.games.clear()
    game_manager.locks.clear()


app = FastAPI(title="Ludo", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(GameError)
async def game_error_handler(request: Request, exc: GameError):
    logger.info(f"Rejected {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=ErrorCode.INVALID_REQUEST.status_code,
        content=GameError(ErrorCode.INVALID_REQUEST).to_dict(),
    )


@app.get("/health")
async def health_check():
    """
    Health check endpoint to verify if the service is running.
    """
    return {"status": "ok"}


app.include_router(router)


def run():
    uvicorn.run("ludo_app.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
