# 📄 File: plantlens/modules/plant_records/domain/models/plant.py
# 🧭 Purpose (Layman Explanation):
# Describes what we remember about each identified plant: its names, family, where it comes from,
# how to care for it, how sure the AI was, the photo, where it was found and how often it was seen.
# 🧪 Purpose (Technical Summary):
# Pydantic domain models for the Plant entity, its creation payload and the normalized
# identification result. Attributes are snake_case; JSON uses camelCase aliases.
# 🔗 Dependencies:
# pydantic, datetime, typing
# 🔄 Connected Modules / Calls From:
# plant_store.py, storage backends, plant identifiers, command handlers, API routes

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

DEFAULT_AROMA_LEVEL = 5
INITIAL_IDENTIFICATION_COUNT = 1


class CamelModel(BaseModel):
    """Base model serialising to camelCase JSON and accepting either spelling on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to its camelCase JSON-compatible dictionary."""
        return self.model_dump(mode="json", by_alias=True)


def coordinate_to_text(value):
    """Coordinates are kept as decimal-degree strings; numbers are accepted on input."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("Coordinate must be a decimal-degree value")
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        value = value.strip()
        return value or None
    raise ValueError("Coordinate must be a decimal-degree value")


class PlantCreate(CamelModel):
    """
    Creation payload handed to the record store.

    The store decides the identifier, the timestamp and the final image
    representation; absent optional values are defaulted by the store.
    """

    scientific_name: str
    common_name: str
    family: str
    origin: str
    light_requirements: str = ""
    watering: str = ""
    special_features: str = ""
    confidence: int = Field(..., ge=1, le=100)
    image_url: str
    care_level: Optional[str] = None

    aroma_level: Optional[int] = Field(None, ge=0, le=10)
    identification_count: Optional[int] = Field(None, ge=1)

    # Location
    latitude: Optional[str] = None
    longitude: Optional[str] = None
    location_name: Optional[str] = None

    @field_validator('scientific_name', 'common_name', 'family', 'origin')
    @classmethod
    def validate_required_text(cls, v: str) -> str:
        """Names, family and origin cannot be blank"""
        if not v or not v.strip():
            raise ValueError('Field cannot be empty')
        return v

    @field_validator('latitude', 'longitude', mode='before')
    @classmethod
    def validate_coordinate(cls, v):
        return coordinate_to_text(v)

    @model_validator(mode='after')
    def validate_coordinate_pair(self):
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError('latitude and longitude must be provided together')
        return self

    @property
    def name_key(self) -> tuple:
        """Key used for duplicate detection."""
        return (self.scientific_name, self.common_name)

    def to_plant(self, plant_id: int, image_url: Optional[str] = None) -> "Plant":
        """
        Build the persisted record for a newly assigned identifier.

        Args:
            plant_id: Identifier assigned by the store
            image_url: Resolved image reference, defaults to the payload value

        Returns:
            Plant: Record with defaults applied and creation time stamped
        """
        return Plant(
            id=plant_id,
            scientific_name=self.scientific_name,
            common_name=self.common_name,
            family=self.family,
            origin=self.origin,
            light_requirements=self.light_requirements,
            watering=self.watering,
            special_features=self.special_features,
            confidence=self.confidence,
            image_url=image_url if image_url is not None else self.image_url,
            care_level=self.care_level,
            aroma_level=self.aroma_level if self.aroma_level is not None else DEFAULT_AROMA_LEVEL,
            identification_count=(
                self.identification_count
                if self.identification_count is not None
                else INITIAL_IDENTIFICATION_COUNT
            ),
            latitude=self.latitude,
            longitude=self.longitude,
            location_name=self.location_name,
            created_at=datetime.now(timezone.utc),
        )


class Plant(CamelModel):
    """
    Plant record as persisted by the store.

    Only ``identification_count`` changes after creation, through the
    count-increment operation.
    """

    id: int = Field(..., ge=1)
    scientific_name: str
    common_name: str
    family: str
    origin: str
    light_requirements: str = ""
    watering: str = ""
    special_features: str = ""
    confidence: int
    image_url: str
    care_level: Optional[str] = None
    aroma_level: int = DEFAULT_AROMA_LEVEL
    identification_count: int = INITIAL_IDENTIFICATION_COUNT
    latitude: Optional[str] = None
    longitude: Optional[str] = None
    location_name: Optional[str] = None
    created_at: datetime

    @field_validator('latitude', 'longitude', mode='before')
    @classmethod
    def validate_coordinate(cls, v):
        return coordinate_to_text(v)

    @field_validator('created_at')
    @classmethod
    def ensure_timezone(cls, v: datetime) -> datetime:
        """Naive timestamps from older records are read as UTC"""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @property
    def name_key(self) -> tuple:
        return (self.scientific_name, self.common_name)

    def with_incremented_count(self) -> "Plant":
        """Return a copy whose identification count is one higher."""
        return self.model_copy(update={'identification_count': self.identification_count + 1})


class IdentificationResult(CamelModel):
    """Normalized answer of the identification gateway; every field is always present."""

    scientific_name: str
    common_name: str
    family: str
    origin: str
    light_requirements: str
    watering: str
    special_features: str
    confidence: int = Field(..., ge=1, le=100)
    care_level: Optional[str] = None
