# 📄 File: plantlens/modules/plant_records/infrastructure/external/openai_identifier.py
# 🧭 Purpose (Layman Explanation):
# Sends the leaf photo to OpenAI's vision model, asks it to act like a botanist,
# and turns its answer into the plant details we save.
# 🧪 Purpose (Technical Summary):
# PlantIdentifier implementation calling the OpenAI chat-completions API with an image part
# and JSON response format. Responses are normalized; every failure becomes PlantIdentificationError.
# 🔗 Dependencies:
# APIClient (aiohttp), settings, plant identifier normalization
# 🔄 Connected Modules / Calls From:
# presentation/dependencies.py (identifier selection), IdentifyPlantCommandHandler

import json
from typing import Any, Dict, List, Optional

from plantlens.shared.config.settings import Settings, get_settings
from plantlens.shared.core.exceptions import PlantLensException, PlantIdentificationError
from plantlens.shared.infrastructure.external_apis.api_client import APIClient
from plantlens.shared.utils.logging import get_logger

from ...domain.models.plant import IdentificationResult
from ...domain.services.plant_identifier import PlantIdentifier, normalize_identification

logger = get_logger(__name__)

SYSTEM_PROMPT = """You are a professional botanist, tree and plant identification expert. Analyze the leaf in the image and provide detailed information in JSON format of what plant, shrub or tree it belongs to. The image was taken in the UK. If you cannot identify it with reasonable confidence, still provide your best guess but lower the confidence score accordingly.

Response format:
{
  "scientificName": "Scientific name of the tree or plant",
  "commonName": "Common name of the tree or plant",
  "family": "tree or Plant family",
  "origin": "Geographic origin",
  "careLevel": "How easy it is to care for (e.g. Very Easy, Moderate, Difficult)",
  "lightRequirements": "Light requirements description",
  "watering": "Watering instructions",
  "specialFeatures": "Notable characteristics or care tips",
  "confidence": number between 1-100
}"""

USER_PROMPT = "Please identify this tree, shrub or plant and provide details about it."

AROMA_PROMPT = (
    " The user rated the leaf's aroma intensity as {aroma_level}/10 "
    "(where 0 is no smell and 10 is very strong). Consider this aroma information "
    "in your identification and include relevant scent-related details in the "
    "specialFeatures if applicable."
)


def build_user_prompt(aroma_level: Optional[int] = None) -> str:
    """User text part; the aroma sentence is added only when a rating was given."""
    if aroma_level is None:
        return USER_PROMPT
    return USER_PROMPT + AROMA_PROMPT.format(aroma_level=aroma_level)


class OpenAIPlantIdentifier(PlantIdentifier):
    """
    Vision identification through OpenAI chat completions.

    A single request is made per identification; timeouts are enforced by the
    HTTP client session.
    """

    provider_name = "openai"

    def __init__(self, settings: Optional[Settings] = None, client: Optional[APIClient] = None):
        settings = settings or get_settings()
        config = settings.get_ai_api_config()

        self.model = config["model"]
        self.max_tokens = config["max_tokens"]
        self.client = client or APIClient(
            base_url=config["api_url"],
            api_name="openai",
            api_key=config["api_key"],
            timeout=config["timeout"],
        )

    async def close(self) -> None:
        await self.client.close()

    def build_request(self, image_data: str, aroma_level: Optional[int] = None) -> Dict[str, Any]:
        """Chat-completions request body."""
        messages: List[Dict[str, Any]] = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": build_user_prompt(aroma_level)},
                    {"type": "image_url", "image_url": {"url": image_data}},
                ],
            },
        ]
        return {
            "model": self.model,
            "messages": messages,
            "response_format": {"type": "json_object"},
            "max_tokens": self.max_tokens,
        }

    async def identify(self, image_data: str, aroma_level: Optional[int] = None) -> IdentificationResult:
        try:
            response = await self.client.post("chat/completions", data=self.build_request(image_data, aroma_level))
            content = response["choices"][0]["message"]["content"] or "{}"
            answer = json.loads(content)
        except (PlantLensException, KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(
                f"OpenAI plant identification error: {e}",
                extra={'provider': self.provider_name, 'error_type': type(e).__name__}
            )
            raise PlantIdentificationError(provider=self.provider_name)

        result = normalize_identification(answer)
        logger.info(
            f"Plant identified as {result.scientific_name}",
            extra={'provider': self.provider_name, 'confidence': result.confidence}
        )
        return result
