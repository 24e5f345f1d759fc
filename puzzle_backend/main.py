# puzzle_backend/main.py

import logging
from contextlib import asynccontextmanager
from typing import Optional
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from puzzle_backend.api import auth, generate
from puzzle_backend.config import Settings, load_settings
from puzzle_backend.core.errors import ApiError
from puzzle_backend.core.security import PasswordHasher, TokenService
from puzzle_backend.database import create_db_engine, create_session_factory, init_db
from puzzle_backend.logging_config import get_logging_config


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(app.state.engine)
    logger.info("Backend server is running on port %s", app.state.settings.port)
    yield
    app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()

    if not settings.jwt_secret:
        logger.warning("JWT_SECRET is not set; tokens are signed with an empty key.")

    app = FastAPI(lifespan=lifespan)

    engine = create_db_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.password_hasher = PasswordHasher()
    app.state.token_service = TokenService(settings.jwt_secret)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.get("/", response_class=PlainTextResponse)
    def health_check():
        return "Question Puzzle Backend is running."

    app.include_router(auth.router)
    app.include_router(generate.router)

    return app


def run():
    settings = load_settings()
    uvicorn.run(
        "puzzle_backend.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_config=get_logging_config(settings.log_level),
    )


if __name__ == "__main__":
    run()
