# 📄 File: plantlens/modules/plant_records/infrastructure/external/__init__.py
# 🧭 Purpose (Layman Explanation):
# Outside services used when recording a plant: the AI that names it and the map lookup.
# 🧪 Purpose (Technical Summary):
# External integration exports for the plant_records module.
# 🔗 Dependencies:
# openai_identifier.py, mock_identifier.py, reverse_geocoder.py
# 🔄 Connected Modules / Calls From:
# presentation/dependencies.py, tests

from .mock_identifier import MOCK_CATALOGUE, MockPlantIdentifier
from .openai_identifier import OpenAIPlantIdentifier
from .reverse_geocoder import ReverseGeocoder

__all__ = [
    "MOCK_CATALOGUE",
    "MockPlantIdentifier",
    "OpenAIPlantIdentifier",
    "ReverseGeocoder",
]
