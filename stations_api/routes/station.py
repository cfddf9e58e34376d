from fastapi import APIRouter, Depends, Request, status
from typing import List
from stations_api.auth import require_authorization
from stations_api.crud.station import StationRepository
from stations_api.schema.station import (
    ErrorResponse,
    MessageResponse,
    StationCreate,
    StationCreated,
    StationResponse,
    StationUpdate,
)

router = APIRouter(prefix="/api/stations", tags=["Stations"])

ERRORS = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_repository(request: Request) -> StationRepository:
    return request.app.state.repository


@router.post(
    "",
    response_model=StationCreated,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_authorization)],
    responses=ERRORS,
)
async def create_station(data: StationCreate, repository: StationRepository = Depends(get_repository)):
    station_id = await repository.create(data.name, data.location, data.type)
    return StationCreated(station_id=station_id, name=data.name, location=data.location)


@router.get(
    "",
    response_model=List[StationResponse],
    dependencies=[Depends(require_authorization)],
    responses=ERRORS,
)
async def read_stations(repository: StationRepository = Depends(get_repository)):
    return await repository.list_active()


@router.get("/{station_id}", response_model=StationResponse, responses=ERRORS)
async def read_station(station_id: int, repository: StationRepository = Depends(get_repository)):
    return await repository.get_active_by_id(station_id)


@router.put(
    "/{station_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_authorization)],
    responses=ERRORS,
)
async def update_station(
    station_id: int,
    data: StationUpdate,
    repository: StationRepository = Depends(get_repository),
):
    await repository.update(station_id, data.name, data.location, data.type, data.is_active)
    return MessageResponse(message="Station updated successfully")


@router.delete(
    "/{station_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_authorization)],
    responses=ERRORS,
)
async def delete_station(station_id: int, repository: StationRepository = Depends(get_repository)):
    await repository.soft_delete(station_id)
    return MessageResponse(message="Station deleted successfully")
