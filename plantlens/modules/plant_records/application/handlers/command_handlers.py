# 📄 File: plantlens/modules/plant_records/application/handlers/command_handlers.py
# 🧭 Purpose (Layman Explanation):
# The step-by-step recipe for "identify this photo and save it": ask the AI what the plant is,
# find a place name for the location, then store the result (or bump the count of a known plant).
#
# 🧪 Purpose (Technical Summary):
# Command handler orchestrating the identification gateway, best-effort reverse geocoding
# and the record store for the identify-and-create write operation.
#
# 🔗 Dependencies:
# - PlantIdentifier, ReverseGeocoder, PlantStore
#
# 🔄 Connected Modules / Calls From:
# - plantlens.modules.plant_records.presentation.api.v1.plants (identify endpoint)

__all__ = [
    "IdentifyPlantCommandHandler",
]

from typing import Optional

from plantlens.shared.utils.logging import get_logger

# --- Application commands ---
from plantlens.modules.plant_records.application.commands.identify_plant import IdentifyPlantCommand

# --- Domain ---
from plantlens.modules.plant_records.domain.models.plant import Plant, PlantCreate
from plantlens.modules.plant_records.domain.repositories.plant_store import PlantStore
from plantlens.modules.plant_records.domain.services.plant_identifier import PlantIdentifier

# --- Infrastructure / External services ---
from plantlens.modules.plant_records.infrastructure.external.reverse_geocoder import ReverseGeocoder

logger = get_logger(__name__)


class IdentifyPlantCommandHandler:
    """
    Handles the identify-and-create command.
    """

    def __init__(
        self,
        plant_store: PlantStore,
        identifier: PlantIdentifier,
        geocoder: Optional[ReverseGeocoder] = None,
    ):
        self._plant_store = plant_store
        self._identifier = identifier
        self._geocoder = geocoder

    async def handle(self, command: IdentifyPlantCommand) -> Plant:
        """
        Identify the photographed plant and persist it.

        Raises:
            PlantIdentificationError: If the identification gateway fails
        """
        result = await self._identifier.identify(command.image_data, command.aroma_level)

        location_name = command.location_name
        if location_name is None and command.has_coordinates and self._geocoder:
            location_name = await self._geocoder.lookup(command.latitude, command.longitude)

        plant_create = PlantCreate(
            **result.model_dump(),
            image_url=command.image_data,
            aroma_level=command.aroma_level,
            latitude=command.latitude,
            longitude=command.longitude,
            location_name=location_name,
        )

        plant = await self._plant_store.create_plant(plant_create)
        logger.info(
            f"Identification recorded as plant {plant.id}",
            extra={
                'plant_id': plant.id,
                'scientific_name': plant.scientific_name,
                'identification_count': plant.identification_count,
            }
        )
        return plant
