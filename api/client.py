"""
API client for the Rookie Draft Board

aiohttp-based HTTP client shared by the board API caller and the Sleeper
importer. Provides connection pooling, status-code error mapping and session
management.
"""
import aiohttp
import logging
from typing import Optional, List, Dict, Any, Union
from urllib.parse import urlencode, urljoin
from contextlib import asynccontextmanager

from config import get_config
from exceptions import APIException

logger = logging.getLogger(f'{__name__}.APIClient')

JSONData = Union[Dict[str, Any], List[Any]]


def _truncate(data: Any, limit: int = 1200) -> str:
    text = str(data)
    return text[:limit] + "..." if len(text) > limit else text


class APIClient:
    """
    Async HTTP client for JSON APIs.

    Features:
    - Connection pooling with proper session management
    - Optional bearer token authentication
    - Optional version prefix (v1/, v3/ ...) on every path
    - 404 returned as None/False, other errors raised as APIException
    - Debug logging with response truncation
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_token: Optional[str] = None,
        api_version: Optional[int] = None,
        timeout: Optional[int] = None
    ):
        """
        Initialize API client.

        Args:
            base_url: Override the board API URL from config
            api_token: Override the board API token from config ("" sends no Authorization header)
            api_version: Version prefix for paths (None for unversioned APIs)
            timeout: Default total timeout in seconds

        Raises:
            ValueError: If no base URL is configured
        """
        config = get_config()
        self.base_url = base_url or config.board_api_url
        self.api_token = config.board_api_token if api_token is None else api_token
        self.api_version = api_version
        self.timeout = timeout or config.default_timeout
        self._session: Optional[aiohttp.ClientSession] = None

        if not self.base_url:
            raise ValueError("BOARD_API_URL must be configured")

        logger.debug(f"APIClient initialized with base_url: {self.base_url}")

    @property
    def headers(self) -> Dict[str, str]:
        """Get headers with optional authentication and content type."""
        headers = {
            'Content-Type': 'application/json',
            'User-Agent': 'Rookie-Draft-Board/1.0'
        }
        if self.api_token:
            headers['Authorization'] = f'Bearer {self.api_token}'
        return headers

    def _build_url(self, endpoint: str, object_id: Optional[Union[int, str]] = None) -> str:
        """
        Build complete API URL from components.

        Args:
            endpoint: API endpoint path
            object_id: Optional object ID to append

        Returns:
            Complete URL for API request
        """
        if endpoint.startswith(('http://', 'https://')):
            return endpoint

        path = endpoint.strip('/')
        if self.api_version is not None:
            path = f"v{self.api_version}/{path}"
        if object_id is not None:
            path += f"/{object_id}"

        return urljoin(self.base_url.rstrip('/') + '/', path)

    def _add_params(self, url: str, params: Optional[List[tuple]] = None) -> str:
        """Append (key, value) query parameters to a URL."""
        if not params:
            return url

        separator = "&" if "?" in url else "?"
        return f"{url}{separator}{urlencode(params)}"

    async def _ensure_session(self) -> None:
        """Ensure aiohttp session exists and is not closed."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=100,
                limit_per_host=30,
                ttl_dns_cache=300,
                use_dns_cache=True
            )

            timeout = aiohttp.ClientTimeout(total=self.timeout)

            self._session = aiohttp.ClientSession(
                headers=self.headers,
                connector=connector,
                timeout=timeout
            )

            logger.debug("Created new aiohttp session with connection pooling")

    async def _raise_for_status(self, method: str, url: str, response: aiohttp.ClientResponse) -> None:
        """Raise APIException for auth failures and any other 4xx/5xx (404 handled by callers)."""
        if response.status == 401:
            logger.error(f"Authentication failed for {method}: {url}")
            raise APIException("Authentication failed - check API token")
        if response.status == 403:
            logger.error(f"Access forbidden for {method}: {url}")
            raise APIException("Access forbidden - insufficient permissions")
        if response.status >= 400:
            error_text = await response.text()
            logger.error(f"{method} error {response.status}: {url} - {error_text}")
            raise APIException(f"{method} request failed with status {response.status}: {error_text}")

    async def _send(
        self,
        method: str,
        url: str,
        json_body: Optional[JSONData] = None,
        timeout: Optional[int] = None,
        expect_body: bool = True
    ) -> Union[JSONData, str, bool, None]:
        await self._ensure_session()

        try:
            logger.debug(f"{method}: {url} data: {json_body}")

            kwargs: Dict[str, Any] = {}
            if timeout:
                kwargs['timeout'] = aiohttp.ClientTimeout(total=timeout)
            if json_body is not None:
                kwargs['json'] = json_body

            async with self._session.request(method, url, **kwargs) as response:
                if response.status == 404:
                    logger.warning(f"Resource not found for {method}: {url}")
                    return None if expect_body else False
                await self._raise_for_status(method, url, response)

                if not expect_body:
                    logger.debug(f"{method} successful: {url}")
                    return True

                if response.content_type == 'application/json':
                    result = await response.json()
                else:
                    result = await response.text()
                logger.debug(f"{method} Response: {_truncate(result)}")
                return result

        except APIException:
            raise
        except aiohttp.ClientError as e:
            logger.error(f"HTTP client error for {method} {url}: {e}")
            raise APIException(f"Network error: {e}")
        except Exception as e:
            logger.error(f"Unexpected error in {method} {url}: {e}")
            raise APIException(f"{method} failed: {e}")

    async def get(
        self,
        endpoint: str,
        object_id: Optional[Union[int, str]] = None,
        params: Optional[List[tuple]] = None,
        timeout: Optional[int] = None
    ) -> Optional[Union[JSONData, str]]:
        """
        Make GET request to API.

        Args:
            endpoint: API endpoint
            object_id: Optional object ID
            params: Query parameters as (key, value) tuples
            timeout: Request timeout override

        Returns:
            JSON response data (text for non-JSON bodies) or None for 404

        Raises:
            APIException: For HTTP errors or network issues
        """
        url = self._add_params(self._build_url(endpoint, object_id), params)
        return await self._send('GET', url, timeout=timeout)

    async def post(
        self,
        endpoint: str,
        data: JSONData,
        timeout: Optional[int] = None
    ) -> Optional[JSONData]:
        """
        Make POST request to API.

        Returns:
            JSON response data or None for 404

        Raises:
            APIException: For HTTP errors or network issues
        """
        return await self._send('POST', self._build_url(endpoint), json_body=data, timeout=timeout)

    async def put(
        self,
        endpoint: str,
        data: JSONData,
        object_id: Optional[Union[int, str]] = None,
        timeout: Optional[int] = None
    ) -> Optional[JSONData]:
        """Make PUT request to API (None for 404)."""
        return await self._send('PUT', self._build_url(endpoint, object_id), json_body=data, timeout=timeout)

    async def patch(
        self,
        endpoint: str,
        data: Optional[JSONData] = None,
        object_id: Optional[Union[int, str]] = None,
        timeout: Optional[int] = None
    ) -> Optional[JSONData]:
        """Make PATCH request to API (None for 404)."""
        return await self._send('PATCH', self._build_url(endpoint, object_id), json_body=data, timeout=timeout)

    async def delete(
        self,
        endpoint: str,
        object_id: Optional[Union[int, str]] = None,
        timeout: Optional[int] = None
    ) -> bool:
        """
        Make DELETE request to API.

        Returns:
            True if deletion successful, False if resource not found

        Raises:
            APIException: For HTTP errors or network issues
        """
        url = self._build_url(endpoint, object_id)
        return await self._send('DELETE', url, timeout=timeout, expect_body=False)

    async def close(self) -> None:
        """Close the HTTP session and clean up resources."""
        if self._session and not self._session.closed:
            await self._session.close()
            logger.debug("Closed aiohttp session")

    async def __aenter__(self):
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


@asynccontextmanager
async def get_api_client(**kwargs) -> APIClient:
    """
    Get API client as async context manager.

    Usage:
        async with get_api_client() as client:
            data = await client.get('players')
    """
    client = APIClient(**kwargs)
    try:
        yield client
    finally:
        await client.close()


# Global API client instance for reuse
_global_client: Optional[APIClient] = None


async def get_global_client() -> APIClient:
    """
    Get global board API client instance with automatic session management.

    Returns:
        Shared APIClient instance
    """
    global _global_client
    if _global_client is None:
        _global_client = APIClient()

    await _global_client._ensure_session()
    return _global_client


async def cleanup_global_client() -> None:
    """Clean up global API client. Call during shutdown."""
    global _global_client
    if _global_client:
        await _global_client.close()
        _global_client = None
