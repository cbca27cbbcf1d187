# 📄 File: plantlens/modules/plant_records/domain/services/plant_identifier.py
# 🧭 Purpose (Layman Explanation):
# Describes the "name this plant from a photo" service and cleans up whatever answer comes back,
# filling in sensible wording when the AI leaves something out.
# 🧪 Purpose (Technical Summary):
# Identification gateway interface plus response normalization: field defaults and
# confidence clamping to [1, 100].
# 🔗 Dependencies:
# IdentificationResult model, abc
# 🔄 Connected Modules / Calls From:
# OpenAIPlantIdentifier, MockPlantIdentifier, IdentifyPlantCommandHandler

import math
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ..models.plant import IdentificationResult

MIN_CONFIDENCE = 1
MAX_CONFIDENCE = 100
DEFAULT_CONFIDENCE = 50

FIELD_DEFAULTS = {
    "scientific_name": "Unknown species",
    "common_name": "Unknown plant",
    "family": "Unknown family",
    "origin": "Unknown origin",
    "light_requirements": "Bright, indirect light",
    "watering": "Water when soil is dry",
    "special_features": "No special features noted",
}

# Keys in the model's JSON answer
RESPONSE_KEYS = {
    "scientific_name": "scientificName",
    "common_name": "commonName",
    "family": "family",
    "origin": "origin",
    "light_requirements": "lightRequirements",
    "watering": "watering",
    "special_features": "specialFeatures",
}


class PlantIdentifier(ABC):
    """Turns a photo into plant attributes."""

    provider_name = "unknown"

    async def initialize(self) -> None:
        return None

    async def close(self) -> None:
        return None

    @abstractmethod
    async def identify(self, image_data: str, aroma_level: Optional[int] = None) -> IdentificationResult:
        """
        Identify the plant in an image.

        Args:
            image_data: Data URI (or URL) of the photo
            aroma_level: Optional 0-10 leaf aroma rating given by the user

        Returns:
            IdentificationResult with every field present

        Raises:
            PlantIdentificationError: On any transport or response failure
        """
        pass


def clamp_confidence(value: Any) -> int:
    """Missing, zero or non-numeric confidence becomes 50; the result is clamped to [1, 100]."""
    if isinstance(value, bool):
        value = None
    try:
        number = float(value)
    except (TypeError, ValueError):
        number = 0.0
    if math.isnan(number) or number == 0:
        number = DEFAULT_CONFIDENCE
    return int(round(max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, number))))


def _text_or_default(value: Any, default: Optional[str]) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def normalize_identification(raw: Dict[str, Any]) -> IdentificationResult:
    """
    Build an IdentificationResult from a loosely structured answer.

    Args:
        raw: Decoded JSON object returned by the model

    Returns:
        IdentificationResult with defaults applied
    """
    if not isinstance(raw, dict):
        raw = {}

    fields = {
        name: _text_or_default(raw.get(key), FIELD_DEFAULTS[name])
        for name, key in RESPONSE_KEYS.items()
    }
    fields["confidence"] = clamp_confidence(raw.get("confidence"))
    fields["care_level"] = _text_or_default(raw.get("careLevel"), None)

    return IdentificationResult(**fields)
