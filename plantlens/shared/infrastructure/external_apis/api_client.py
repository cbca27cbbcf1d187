# 📄 File: plantlens/shared/infrastructure/external_apis/api_client.py

# 🧭 Purpose (Layman Explanation):
# This file creates an HTTP client that knows how to talk to outside services (the AI that names
# plants, the map service that turns coordinates into a place name) and reports clearly when they fail.

# 🧪 Purpose (Technical Summary):
# Generic async HTTP client over aiohttp with per-API default headers, single-attempt
# requests, status-code to exception mapping and external-call performance logging.

# 🔗 Dependencies:
# - aiohttp: Async HTTP client
# - plantlens.shared.core.exceptions: ExternalAPIError hierarchy

# 🔄 Connected Modules / Calls From:
# Used by: OpenAIPlantIdentifier (vision chat completion), ReverseGeocoder (Nominatim lookups)

import asyncio
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union
from urllib.parse import urljoin

import aiohttp
from aiohttp import ClientSession, ClientTimeout

from plantlens.shared.core.exceptions import (
    APIAuthenticationError,
    APITimeoutError,
    ExternalAPIError,
)
from plantlens.shared.utils.logging import get_logger

logger = get_logger(__name__)


class APIClient:
    """
    Generic async HTTP client for external API integrations.

    Features:
    - Lazy session creation with a shared timeout
    - Bearer authentication when an API key is set
    - Error mapping to the application exception hierarchy
    - Request logging with response times

    Requests are attempted once. Callers decide whether a failure is fatal.
    """

    def __init__(
        self,
        base_url: str,
        api_name: str,
        api_key: Optional[str] = None,
        timeout: int = 30,
        user_agent: Optional[str] = None
    ):
        """Initialize API client with configuration."""
        self.base_url = base_url.rstrip('/') + '/'
        self.api_key = api_key
        self.api_name = api_name
        self.timeout = timeout
        self.user_agent = user_agent or f'PlantLens/1.0 ({api_name}-client)'

        self.session: Optional[ClientSession] = None

        self.stats = {
            'total_requests': 0,
            'successful_requests': 0,
            'failed_requests': 0,
            'last_request_time': None,
        }

    async def initialize(self):
        """Initialize the client session."""
        try:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.timeout),
                connector=aiohttp.TCPConnector(limit=10, limit_per_host=5),
                headers=self._get_default_headers()
            )
            logger.info(f"API client initialized for {self.api_name}")

        except Exception as e:
            logger.error(f"Failed to initialize API client {self.api_name}: {e}")
            raise ExternalAPIError(f"Client initialization failed: {e}", api_name=self.api_name)

    def _get_default_headers(self) -> Dict[str, str]:
        """Get default headers for requests."""
        headers = {
            'User-Agent': self.user_agent,
            'Accept': 'application/json',
        }

        if self.api_key:
            headers['Authorization'] = f'Bearer {self.api_key}'

        return headers

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict] = None,
        data: Optional[Union[Dict, str, bytes]] = None,
        timeout: Optional[int] = None
    ) -> Dict[str, Any]:
        """Make a single HTTP request and return the decoded JSON body."""
        if not self.session:
            await self.initialize()

        url = urljoin(self.base_url, endpoint.lstrip('/'))

        request_kwargs: Dict[str, Any] = {'method': method, 'url': url}
        if params:
            request_kwargs['params'] = params
        if data is not None:
            if isinstance(data, dict):
                request_kwargs['json'] = data
            else:
                request_kwargs['data'] = data
        if timeout:
            request_kwargs['timeout'] = ClientTimeout(total=timeout)

        start_time = time.time()
        status_code = 0
        self.stats['total_requests'] += 1
        self.stats['last_request_time'] = datetime.now(timezone.utc).isoformat()

        try:
            async with self.session.request(**request_kwargs) as response:
                status_code = response.status
                await self._handle_response_status(response)

                try:
                    response_data = await response.json(content_type=None)
                except Exception:
                    response_text = await response.text()
                    raise ExternalAPIError(
                        f"Invalid JSON from {self.api_name}",
                        api_name=self.api_name,
                        api_status_code=status_code,
                        api_response=response_text[:500]
                    )

            self.stats['successful_requests'] += 1
            logger.performance.log_external_api_call(
                api_name=self.api_name,
                endpoint=endpoint,
                method=method,
                status_code=status_code,
                duration_ms=(time.time() - start_time) * 1000,
                success=True
            )
            return response_data

        except Exception as e:
            self.stats['failed_requests'] += 1
            logger.performance.log_external_api_call(
                api_name=self.api_name,
                endpoint=endpoint,
                method=method,
                status_code=status_code,
                duration_ms=(time.time() - start_time) * 1000,
                success=False,
                extra={'error_type': type(e).__name__, 'error_message': str(e)}
            )
            raise self._transform_exception(e, timeout or self.timeout)

    async def _handle_response_status(self, response: aiohttp.ClientResponse):
        """Handle HTTP response status codes."""
        if 200 <= response.status < 300:
            return
        if response.status in (401, 403):
            raise APIAuthenticationError(self.api_name)

        response_text = await response.text()
        kind = "Client error" if 400 <= response.status < 500 else "Server error"
        raise ExternalAPIError(
            f"{kind} for {self.api_name} ({response.status})",
            api_name=self.api_name,
            api_status_code=response.status,
            api_response=response_text[:500]
        )

    def _transform_exception(self, exception: Exception, timeout: int) -> Exception:
        """Transform exceptions to appropriate API exceptions."""
        if isinstance(exception, ExternalAPIError):
            return exception
        if isinstance(exception, asyncio.TimeoutError):
            return APITimeoutError(self.api_name, timeout)
        if isinstance(exception, aiohttp.ClientError):
            return ExternalAPIError(f"Client error for {self.api_name}: {exception}", api_name=self.api_name)
        return exception

    async def get(
        self,
        endpoint: str,
        params: Optional[Dict] = None,
        timeout: Optional[int] = None
    ) -> Dict[str, Any]:
        """Make GET request."""
        return await self._make_request('GET', endpoint, params=params, timeout=timeout)

    async def post(
        self,
        endpoint: str,
        data: Optional[Union[Dict, str, bytes]] = None,
        params: Optional[Dict] = None,
        timeout: Optional[int] = None
    ) -> Dict[str, Any]:
        """Make POST request."""
        return await self._make_request('POST', endpoint, params=params, data=data, timeout=timeout)

    def get_stats(self) -> Dict[str, Any]:
        """Get client performance statistics."""
        return {
            **self.stats,
            'api_name': self.api_name,
            'error_rate': (
                self.stats['failed_requests'] / max(self.stats['total_requests'], 1)
            ) * 100,
        }

    async def close(self):
        """Close the client session and cleanup resources."""
        if self.session:
            await self.session.close()
            self.session = None

        logger.info(f"API client closed for {self.api_name}")
