from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator
from typing import List
from stations_api.models.station import StationType


class Station(BaseModel):
    name: str = Field(..., max_length=255)
    location: str = Field(..., max_length=255)
    type: StationType

    @field_validator("name", "location")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value


class StationCreate(Station):
    pass


class StationUpdate(Station):
    is_active: StrictBool


class StationCreated(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    station_id: int = Field(..., alias="stationId")
    name: str
    location: str


class StationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    location: str
    type: StationType
    is_active: bool


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    detail: str | List[dict]
