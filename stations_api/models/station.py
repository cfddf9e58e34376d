import enum
from sqlalchemy import Boolean, Column, Enum, Integer, String, true
from stations_api.database.connection import Base


class StationType(str, enum.Enum):
    ORIGIN = "origin"
    DESTINATION = "destination"
    INTERMEDIATE = "intermediate"


class StationModel(Base):
    __tablename__ = "stations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    # Stored as the code string; the CHECK constraint keeps unknown codes out of the table
    type = Column(
        Enum(
            StationType,
            name="station_type",
            native_enum=False,
            create_constraint=True,
            length=32,
            values_callable=lambda members: [m.value for m in members],
            validate_strings=True,
        ),
        nullable=False,
    )
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
