# 📄 File: plantlens/modules/plant_records/application/commands/identify_plant.py
# 🧭 Purpose (Layman Explanation):
# Holds everything the app needs to identify and save a plant: the photo, the optional
# smell rating and where the photo was taken.
#
# 🧪 Purpose (Technical Summary):
# Command object for the identify-and-create write operation.
#
# 🔗 Dependencies:
# - pydantic for command validation
#
# 🔄 Connected Modules / Calls From:
# - plantlens.modules.plant_records.application.handlers.command_handlers (IdentifyPlantCommandHandler)
# - plantlens.modules.plant_records.presentation.api.schemas.plant_schemas (request conversion)

from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from plantlens.modules.plant_records.domain.models.plant import coordinate_to_text


class IdentifyPlantCommand(BaseModel):
    """
    Command for identifying a photographed plant and recording it.

    Coordinates are optional but must come as a pair. A missing location
    name is looked up from the coordinates when reverse geocoding is enabled.
    """

    image_data: str = Field(..., min_length=1, description="Photo as a data URI")
    aroma_level: Optional[int] = Field(None, ge=0, le=10, description="Leaf aroma rating 0-10")
    latitude: Optional[str] = None
    longitude: Optional[str] = None
    location_name: Optional[str] = None

    @field_validator('latitude', 'longitude', mode='before')
    @classmethod
    def normalize_coordinate(cls, v):
        return coordinate_to_text(v)

    @field_validator('location_name')
    @classmethod
    def blank_location_is_absent(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    @model_validator(mode='after')
    def validate_coordinates(self):
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError('latitude and longitude must be provided together')
        return self

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None
