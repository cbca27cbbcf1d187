# 📄 File: plantlens/modules/plant_records/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Hands each web request the shared plant store, the plant identifier and the place-name lookup
# that were set up when the app started.
# 🧪 Purpose (Technical Summary):
# FastAPI dependency providers reading application-scoped services from app.state,
# plus the identifier factory used at start-up.
# 🔗 Dependencies:
# FastAPI, settings, PlantStore, identifier implementations, ReverseGeocoder
# 🔄 Connected Modules / Calls From:
# plantlens.modules.plant_records.presentation.api.v1.plants, plantlens.main (lifespan), tests (overrides)

from typing import Optional

from fastapi import Depends, Request

from plantlens.shared.config.settings import Settings, get_settings
from plantlens.shared.core.exceptions import ConfigurationError
from plantlens.shared.utils.logging import get_logger

from ..application.handlers.command_handlers import IdentifyPlantCommandHandler
from ..domain.repositories.plant_store import PlantStore
from ..domain.services.plant_identifier import PlantIdentifier
from ..infrastructure.external.mock_identifier import MockPlantIdentifier
from ..infrastructure.external.openai_identifier import OpenAIPlantIdentifier
from ..infrastructure.external.reverse_geocoder import ReverseGeocoder

logger = get_logger(__name__)


def create_plant_identifier(settings: Optional[Settings] = None) -> PlantIdentifier:
    """OpenAI identifier when a key is configured, otherwise the canned mock."""
    settings = settings or get_settings()
    if settings.use_mock_identifier:
        if settings.IDENTIFIER_BACKEND == "openai":
            logger.warning("OPENAI_API_KEY is not set; using mock plant identifier")
        return MockPlantIdentifier()
    return OpenAIPlantIdentifier(settings)


def get_plant_store(request: Request) -> PlantStore:
    store = getattr(request.app.state, "plant_store", None)
    if store is None:
        raise ConfigurationError("Plant store is not initialized", setting="STORAGE_BACKEND")
    return store


def get_plant_identifier(request: Request) -> PlantIdentifier:
    identifier = getattr(request.app.state, "plant_identifier", None)
    if identifier is None:
        raise ConfigurationError("Plant identifier is not initialized", setting="IDENTIFIER_BACKEND")
    return identifier


def get_reverse_geocoder(request: Request) -> Optional[ReverseGeocoder]:
    return getattr(request.app.state, "reverse_geocoder", None)


def get_identify_plant_handler(
    plant_store: PlantStore = Depends(get_plant_store),
    identifier: PlantIdentifier = Depends(get_plant_identifier),
    geocoder: Optional[ReverseGeocoder] = Depends(get_reverse_geocoder),
) -> IdentifyPlantCommandHandler:
    return IdentifyPlantCommandHandler(plant_store, identifier, geocoder)
