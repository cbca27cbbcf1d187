# 📄 File: plantlens/modules/plant_records/infrastructure/external/reverse_geocoder.py
# 🧭 Purpose (Layman Explanation):
# Turns the GPS position where a photo was taken into a readable place name, like a town and county.
# If the map service does not answer, the plant is simply saved without a place name.
# 🧪 Purpose (Technical Summary):
# Best-effort reverse geocoding against OpenStreetMap Nominatim; every failure yields None.
# 🔗 Dependencies:
# APIClient (aiohttp), settings
# 🔄 Connected Modules / Calls From:
# IdentifyPlantCommandHandler, presentation/dependencies.py

from typing import Optional

from plantlens.shared.config.settings import Settings, get_settings
from plantlens.shared.core.exceptions import PlantLensException
from plantlens.shared.infrastructure.external_apis.api_client import APIClient
from plantlens.shared.utils.logging import get_logger

logger = get_logger(__name__)


class ReverseGeocoder:
    """Looks up a display name for a coordinate pair."""

    def __init__(self, settings: Optional[Settings] = None, client: Optional[APIClient] = None):
        settings = settings or get_settings()
        self.enabled = settings.REVERSE_GEOCODING_ENABLED
        self.client = client or APIClient(
            base_url=settings.NOMINATIM_API_URL,
            api_name="nominatim",
            timeout=settings.GEOCODING_TIMEOUT,
            user_agent=f"{settings.APP_NAME}/{settings.APP_VERSION}",
        )

    async def lookup(self, latitude: str, longitude: str) -> Optional[str]:
        """
        Reverse geocode a coordinate pair.

        Args:
            latitude: Decimal-degree latitude
            longitude: Decimal-degree longitude

        Returns:
            Human readable place name, or None when disabled or on any failure
        """
        if not self.enabled:
            return None

        try:
            response = await self.client.get(
                "reverse",
                params={
                    "format": "json",
                    "lat": latitude,
                    "lon": longitude,
                    "zoom": 10,
                    "addressdetails": 1,
                }
            )
        except PlantLensException as e:
            logger.warning(f"Reverse geocoding failed: {e}", extra={'latitude': latitude, 'longitude': longitude})
            return None

        display_name = response.get("display_name") if isinstance(response, dict) else None
        if not isinstance(display_name, str) or not display_name.strip():
            return None
        return display_name

    async def close(self) -> None:
        await self.client.close()
