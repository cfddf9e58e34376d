from sqlalchemy import update
from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import async_sessionmaker
from typing import List
from stations_api.database.connection import STORAGE_ERRORS
from stations_api.errors import NotFound, StorageError, ValidationError
from stations_api.models.station import StationModel, StationType
from stations_api.schema.station import StationResponse
from stations_api.logger import CustomLogger

console = CustomLogger()

# Range of the Integer primary key; anything outside it cannot name a row
MIN_ID = 1
MAX_ID = 2**31 - 1


def _require_storable_id(station_id: int):
    if not MIN_ID <= station_id <= MAX_ID:
        raise NotFound()


def _coerce_type(value) -> StationType:
    try:
        return StationType(value)
    except ValueError as e:
        allowed = ", ".join(t.value for t in StationType)
        raise ValidationError(f"Invalid station type '{value}'. Expected one of: {allowed}") from e


class StationRepository:
    """Reads and writes station rows.

    Each operation runs one statement in its own session; leaving the
    ``async with`` block returns the connection to the pool whether the
    statement succeeded or not. Inactive stations are only reachable through
    ``update``.
    """

    def __init__(self, session_factory: async_sessionmaker):
        self.sessions = session_factory

    async def create(self, name: str, location: str, type) -> int:
        station_type = _coerce_type(type)
        try:
            async with self.sessions() as session:
                station = StationModel(name=name, location=location, type=station_type, is_active=True)
                session.add(station)
                await session.commit()
                console.log(f"Created station {station.id} ({station_type.value}).")
                return station.id
        except STORAGE_ERRORS as e:
            console.error(f"Failed to create station '{name}': {e}")
            raise StorageError(f"Failed to create station: {e}") from e

    async def list_active(self) -> List[StationResponse]:
        try:
            async with self.sessions() as session:
                result = await session.execute(
                    select(StationModel).where(StationModel.is_active.is_(True)).order_by(StationModel.id)
                )
                stations = result.scalars().all()
        except STORAGE_ERRORS as e:
            console.error(f"Failed to list stations: {e}")
            raise StorageError(f"Failed to list stations: {e}") from e

        return [StationResponse.model_validate(s) for s in stations]

    async def get_active_by_id(self, station_id: int) -> StationResponse:
        _require_storable_id(station_id)
        try:
            async with self.sessions() as session:
                result = await session.execute(
                    select(StationModel).where(
                        StationModel.id == station_id,
                        StationModel.is_active.is_(True),
                    )
                )
                station = result.scalar_one_or_none()
        except STORAGE_ERRORS as e:
            console.error(f"Failed to read station {station_id}: {e}")
            raise StorageError(f"Failed to read station {station_id}: {e}") from e

        if station is None:
            raise NotFound()
        return StationResponse.model_validate(station)

    async def update(self, station_id: int, name: str, location: str, type, is_active: bool) -> None:
        _require_storable_id(station_id)
        station_type = _coerce_type(type)
        try:
            async with self.sessions() as session:
                result = await session.execute(
                    update(StationModel)
                    .where(StationModel.id == station_id)
                    .values(name=name, location=location, type=station_type, is_active=is_active)
                    .execution_options(synchronize_session=False)
                )
                await session.commit()
        except STORAGE_ERRORS as e:
            console.error(f"Failed to update station {station_id}: {e}")
            raise StorageError(f"Failed to update station {station_id}: {e}") from e

        if result.rowcount == 0:
            raise NotFound()
        console.log(f"Updated station {station_id}.")

    async def soft_delete(self, station_id: int) -> None:
        _require_storable_id(station_id)
        try:
            async with self.sessions() as session:
                result = await session.execute(
                    update(StationModel)
                    .where(StationModel.id == station_id, StationModel.is_active.is_(True))
                    .values(is_active=False)
                    .execution_options(synchronize_session=False)
                )
                await session.commit()
        except STORAGE_ERRORS as e:
            console.error(f"Failed to delete station {station_id}: {e}")
            raise StorageError(f"Failed to delete station {station_id}: {e}") from e

        if result.rowcount == 0:
            raise NotFound()
        console.log(f"Deactivated station {station_id}.")
