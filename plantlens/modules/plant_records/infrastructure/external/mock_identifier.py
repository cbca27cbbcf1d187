# 📄 File: plantlens/modules/plant_records/infrastructure/external/mock_identifier.py
# 🧭 Purpose (Layman Explanation):
# A pretend plant expert used when no AI key is set up. It always "recognises" one of five
# well-known house plants so the rest of the app can be tried out.
# 🧪 Purpose (Technical Summary):
# Offline PlantIdentifier returning a canned catalogue entry chosen at random.
# 🔗 Dependencies:
# random, IdentificationResult
# 🔄 Connected Modules / Calls From:
# presentation/dependencies.py (IDENTIFIER_BACKEND=mock or missing OPENAI_API_KEY), tests

import random
from typing import List, Optional

from plantlens.shared.utils.logging import get_logger

from ...domain.models.plant import IdentificationResult
from ...domain.services.plant_identifier import PlantIdentifier

logger = get_logger(__name__)

MOCK_CATALOGUE: List[IdentificationResult] = [
    IdentificationResult(
        scientific_name="Monstera deliciosa",
        common_name="Swiss Cheese Plant",
        family="Araceae",
        origin="Central America, Southern Mexico",
        care_level="Easy to Moderate",
        light_requirements="Bright, indirect light",
        watering="Water when top inch of soil is dry. Approximately once per week.",
        special_features=(
            "Known for its distinctive split leaves (fenestration) that develop as the plant "
            "matures. Can grow very large indoors with proper support."
        ),
        confidence=92,
    ),
    IdentificationResult(
        scientific_name="Sansevieria trifasciata",
        common_name="Snake Plant",
        family="Asparagaceae",
        origin="West Africa",
        care_level="Very Easy",
        light_requirements="Low to bright, indirect light",
        watering="Water every 2-3 weeks. Allow soil to dry completely between waterings.",
        special_features="Extremely drought tolerant and air purifying. Can survive in low light conditions.",
        confidence=89,
    ),
    IdentificationResult(
        scientific_name="Ficus lyrata",
        common_name="Fiddle Leaf Fig",
        family="Moraceae",
        origin="Western Africa",
        care_level="Moderate to Difficult",
        light_requirements="Bright, indirect light",
        watering="Water when top 1-2 inches of soil are dry.",
        special_features="Large, violin-shaped leaves. Requires consistent care and doesn't like to be moved.",
        confidence=85,
    ),
    IdentificationResult(
        scientific_name="Epipremnum aureum",
        common_name="Golden Pothos",
        family="Araceae",
        origin="Solomon Islands",
        care_level="Very Easy",
        light_requirements="Low to bright, indirect light",
        watering="Water when soil feels dry. Approximately every 1-2 weeks.",
        special_features=(
            "Trailing vine that can be grown as a hanging plant or trained up a support. "
            "Very forgiving and fast-growing."
        ),
        confidence=91,
    ),
    IdentificationResult(
        scientific_name="Ficus elastica",
        common_name="Rubber Plant",
        family="Moraceae",
        origin="India and Southeast Asia",
        care_level="Easy",
        light_requirements="Bright, indirect light",
        watering="Water when top inch of soil is dry.",
        special_features=(
            "Glossy, thick leaves that start burgundy and mature to deep green. "
            "Can grow into a large tree indoors."
        ),
        confidence=88,
    ),
]


class MockPlantIdentifier(PlantIdentifier):
    """Picks a random catalogue plant; pass ``rng`` for deterministic choices."""

    provider_name = "mock"

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    async def identify(self, image_data: str, aroma_level: Optional[int] = None) -> IdentificationResult:
        result = self.rng.choice(MOCK_CATALOGUE)
        logger.info(f"Mock identification returned {result.scientific_name}", extra={'provider': self.provider_name})
        return result.model_copy()
