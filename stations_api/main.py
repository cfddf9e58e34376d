import sys
from contextlib import asynccontextmanager
from typing import Optional
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from stations_api.auth import Authorizer, HeaderPresenceAuthorizer
from stations_api.config import Config
from stations_api.crud.station import StationRepository
from stations_api.database.connection import (
    check_connection,
    create_engine_from_config,
    create_session_factory,
    init_db,
)
from stations_api.errors import StationServiceError, StorageError
from stations_api.logger import CustomLogger, configure_logging
from stations_api.routes import health, station

console = CustomLogger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    config: Config = app.state.config
    engine = app.state.engine

    if config.database["create_tables"]:
        await init_db(engine)
    elif not await check_connection(engine):
        raise StorageError("Database connection failed.")

    console.log("Stations service started.")
    try:
        yield
    finally:
        await engine.dispose()
        console.log("Connection pool closed.")


async def service_error_handler(request: Request, exc: StationServiceError):
    if isinstance(exc, StorageError):
        console.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"detail": "Internal server error"})
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    console.debug(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def create_app(config: Optional[Config] = None, authorizer: Optional[Authorizer] = None) -> FastAPI:
    config = config or Config()
    configure_logging(config.logging["level"], config.logging["dir"])

    app = FastAPI(
        title="Stations Service",
        description="APIs for managing stations",
        version="0.1.0",
        docs_url="/api/docs",
        lifespan=lifespan,
    )

    engine = create_engine_from_config(config)
    app.state.config = config
    app.state.engine = engine
    app.state.repository = StationRepository(create_session_factory(engine))
    app.state.authorizer = authorizer or HeaderPresenceAuthorizer(config.auth["header"])

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StationServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(health.router)
    app.include_router(station.router)
    return app


def run():
    try:
        config = Config()
    except RuntimeError as e:
        console.critical(f"Refusing to start: {e}")
        sys.exit(1)

    app = create_app(config)
    uvicorn.run(app, host=config.server["host"], port=config.server["port"])


if __name__ == "__main__":
    run()
