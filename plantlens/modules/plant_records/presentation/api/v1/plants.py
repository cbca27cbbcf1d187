# 📄 File: plantlens/modules/plant_records/presentation/api/v1/plants.py
# 🧭 Purpose (Layman Explanation):
# The web addresses the phone app calls to list saved plants, open one, identify a new photo,
# count a repeat sighting and delete plants.
#
# 🧪 Purpose (Technical Summary):
# FastAPI plant record endpoints. Store results are returned verbatim as camelCase JSON;
# store "not found" signals become PlantNotFoundError (404) and gateway failures surface as
# PlantIdentificationError (500) through the global exception handlers.
#
# 🔗 Dependencies:
# - FastAPI router, status codes
# - IdentifyPlantCommandHandler, PlantStore
# - plant_schemas (request/response schemas)
#
# 🔄 Connected Modules / Calls From:
# - plantlens.api.v1.router (router inclusion under API_PREFIX)

"""
Plant Records API Endpoints

Endpoints:
- GET /plants: List plants, newest first
- GET /plants/{plant_id}: Get one plant
- POST /plants/identify: Identify a photo and record it (merging duplicates)
- PATCH /plants/{plant_id}/count: Increment a plant's identification count
- DELETE /plants/{plant_id}: Delete one plant
- DELETE /plants: Delete every plant and reset numbering
"""

from typing import List

from fastapi import APIRouter, Depends, status

from plantlens.shared.core.exceptions import PlantNotFoundError
from plantlens.shared.utils.logging import get_logger

from plantlens.modules.plant_records.application.handlers.command_handlers import IdentifyPlantCommandHandler
from plantlens.modules.plant_records.domain.models.plant import Plant
from plantlens.modules.plant_records.domain.repositories.plant_store import PlantStore
from plantlens.modules.plant_records.presentation.api.schemas.plant_schemas import (
    IdentifyPlantRequest,
    MessageResponse,
)
from plantlens.modules.plant_records.presentation.dependencies import (
    get_identify_plant_handler,
    get_plant_store,
)

logger = get_logger(__name__)

plants_router = APIRouter(prefix="/plants", tags=["Plants"])

NOT_FOUND_RESPONSE = {404: {"model": MessageResponse, "description": "Plant not found"}}


@plants_router.get(
    "",
    response_model=List[Plant],
    summary="List plants",
    description="All recorded plants ordered by identifier, newest first",
)
async def list_plants(plant_store: PlantStore = Depends(get_plant_store)) -> List[Plant]:
    return await plant_store.get_all_plants()


@plants_router.get(
    "/{plant_id}",
    response_model=Plant,
    summary="Get plant",
    responses=NOT_FOUND_RESPONSE,
)
async def get_plant(plant_id: int, plant_store: PlantStore = Depends(get_plant_store)) -> Plant:
    plant = await plant_store.get_plant(plant_id)
    if not plant:
        raise PlantNotFoundError(plant_id)
    return plant


@plants_router.post(
    "/identify",
    response_model=Plant,
    summary="Identify and record a plant",
    description=(
        "Identify the plant in a photo and record it. A plant whose scientific and common "
        "names are already recorded has its identification count incremented instead."
    ),
    responses={
        400: {"model": MessageResponse, "description": "Image data required"},
        500: {"model": MessageResponse, "description": "Identification failed"},
    },
)
async def identify_plant(
    request: IdentifyPlantRequest,
    handler: IdentifyPlantCommandHandler = Depends(get_identify_plant_handler),
) -> Plant:
    """
    Identify a photographed plant and persist it.

    Args:
        request: Photo data URI with optional aroma rating and location
        handler: Injected identify-and-create handler

    Returns:
        Plant: The created record, or the existing record with its count incremented
    """
    command = request.to_command()
    return await handler.handle(command)


@plants_router.patch(
    "/{plant_id}/count",
    response_model=Plant,
    summary="Increment identification count",
    responses=NOT_FOUND_RESPONSE,
)
async def update_plant_count(plant_id: int, plant_store: PlantStore = Depends(get_plant_store)) -> Plant:
    plant = await plant_store.update_plant_count(plant_id)
    if not plant:
        raise PlantNotFoundError(plant_id)
    return plant


@plants_router.delete(
    "/{plant_id}",
    response_model=MessageResponse,
    summary="Delete plant",
    responses=NOT_FOUND_RESPONSE,
)
async def delete_plant(plant_id: int, plant_store: PlantStore = Depends(get_plant_store)) -> MessageResponse:
    deleted = await plant_store.delete_plant(plant_id)
    if not deleted:
        raise PlantNotFoundError(plant_id)
    return MessageResponse(message="Plant deleted successfully")


@plants_router.delete(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete all plants",
    description="Delete every plant and image; identifiers restart at 1",
)
async def delete_all_plants(plant_store: PlantStore = Depends(get_plant_store)) -> MessageResponse:
    await plant_store.delete_all_plants()
    logger.info("All plants deleted via API")
    return MessageResponse(message="All plants deleted successfully")
