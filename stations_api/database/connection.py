from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from stations_api.config import Config
from stations_api.errors import StorageError
from stations_api.logger import CustomLogger

console = CustomLogger()

Base = declarative_base()

# Drivers raise socket errors unwrapped when the server is unreachable
STORAGE_ERRORS = (SQLAlchemyError, OSError)


def create_engine_from_config(config: Config) -> AsyncEngine:
    db = config.database
    engine = create_async_engine(
        db["url"],
        echo=db.get("echo", False),
        pool_size=db["pool_size"],
        max_overflow=0,
        pool_timeout=db.get("pool_timeout"),
    )

    @event.listens_for(engine.sync_engine, "checkout")
    def on_checkout(dbapi_connection, connection_record, connection_proxy):
        console.debug("Connection checked out from pool.")

    @event.listens_for(engine.sync_engine, "checkin")
    def on_checkin(dbapi_connection, connection_record):
        console.debug("Connection returned to pool.")

    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: AsyncEngine):
    # Registers StationModel on Base.metadata
    from stations_api.models import station  # noqa: F401

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except STORAGE_ERRORS as e:
        console.error(f"Failed to create tables: {e}")
        raise StorageError("Database connection failed.") from e


async def check_connection(engine: AsyncEngine) -> bool:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except STORAGE_ERRORS as e:
        console.error(f"Error connecting to the database: {e}")
        return False

    console.log("Connected to the database.")
    return True
