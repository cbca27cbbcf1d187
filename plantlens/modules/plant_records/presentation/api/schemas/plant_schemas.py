# 📄 File: plantlens/modules/plant_records/presentation/api/schemas/plant_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes what the phone app sends when asking to identify a plant, and the simple
# confirmation messages we send back after deleting plants.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for the plant record endpoints. Request bodies use
# camelCase keys; coordinates are accepted as numbers or strings.
#
# 🔗 Dependencies:
# - pydantic for validation
# - IdentifyPlantCommand (request to command conversion)
#
# 🔄 Connected Modules / Calls From:
# - plantlens.modules.plant_records.presentation.api.v1.plants

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from plantlens.modules.plant_records.application.commands.identify_plant import IdentifyPlantCommand
from plantlens.modules.plant_records.domain.models.plant import coordinate_to_text
from plantlens.shared.core.exceptions import ValidationError


class IdentifyPlantRequest(BaseModel):
    """
    Identify-and-create request body.

    ``imageData`` is optional at the schema level so that its absence is
    reported with the dedicated "Image data required" message.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    image_data: Optional[str] = Field(None, description="Photo as a base64 data URI")
    aroma_level: Optional[int] = Field(None, ge=0, le=10, description="Leaf aroma rating 0-10")
    latitude: Optional[Union[float, str]] = Field(None, description="Decimal-degree latitude")
    longitude: Optional[Union[float, str]] = Field(None, description="Decimal-degree longitude")
    location_name: Optional[str] = Field(None, description="Known place name, skips reverse geocoding")

    @field_validator('latitude', 'longitude', mode='before')
    @classmethod
    def normalize_coordinate(cls, v):
        return coordinate_to_text(v)

    @model_validator(mode='after')
    def validate_coordinates(self):
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError('latitude and longitude must be provided together')
        return self

    def to_command(self) -> IdentifyPlantCommand:
        """
        Convert the request body to a command.

        Raises:
            ValidationError: If no image data was sent
        """
        if not self.image_data or not self.image_data.strip():
            raise MissingImageDataError()

        return IdentifyPlantCommand(
            image_data=self.image_data,
            aroma_level=self.aroma_level,
            latitude=None if self.latitude is None else str(self.latitude),
            longitude=None if self.longitude is None else str(self.longitude),
            location_name=self.location_name,
        )


class MissingImageDataError(ValidationError):
    """Raised when the identify request carries no image."""

    def __init__(self):
        super().__init__(message="Image data required", field="imageData")


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str
