"""
Base service for board API resources

Generic CRUD over APIClient for one endpoint and one model class. Responses
that cannot be turned into models are reported as APIException so callers
only ever handle one error type from the HTTP side.
"""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from api.client import APIClient, get_global_client
from exceptions import APIException
from models.base import DraftBoardBaseModel

logger = logging.getLogger(f'{__name__}.BaseService')

T = TypeVar('T', bound=DraftBoardBaseModel)

COLLECTION_KEYS = ('items', 'data', 'results')


class BaseService(Generic[T]):
    """
    CRUD operations for one board API resource.

    Features:
    - Results converted to the service's model class
    - Collection responses in {'count': N, '<endpoint>': [...]} form
    - Shared global client unless one is injected
    """

    def __init__(self, model_class: Type[T], endpoint: str, client: Optional[APIClient] = None):
        """
        Initialize base service.

        Args:
            model_class: Model built from response bodies
            endpoint: Resource path, e.g. 'players'
            client: Client override (the global client is used otherwise)
        """
        self.model_class = model_class
        self.endpoint = endpoint
        self._client = client
        self._cached_client: Optional[APIClient] = None

    @property
    def resource_name(self) -> str:
        return self.model_class.__name__

    async def get_client(self) -> APIClient:
        if self._client:
            return self._client
        if self._cached_client is None:
            self._cached_client = await get_global_client()
        return self._cached_client

    @contextmanager
    def _wrap_errors(self, action: str):
        try:
            yield
        except APIException:
            logger.error(f"API error while trying to {action} {self.resource_name}")
            raise
        except (ValueError, TypeError, KeyError) as e:
            logger.error(f"Bad {self.resource_name} response while trying to {action}: {e}")
            raise APIException(f"Failed to {action} {self.resource_name}: {e}")

    def _to_model(self, data: Dict[str, Any]) -> T:
        return self.model_class.from_api_data(data)

    async def get_by_id(self, object_id: int) -> Optional[T]:
        """
        Returns:
            Model instance, or None when the server answers 404

        Raises:
            APIException: For HTTP errors or an unparseable body
        """
        with self._wrap_errors("retrieve"):
            client = await self.get_client()
            data = await client.get(self.endpoint, object_id=object_id)
            if not data:
                logger.debug(f"{self.resource_name} {object_id} not found")
                return None
            return self._to_model(data)

    async def get_all(self, params: Optional[List[tuple]] = None) -> Tuple[List[T], int]:
        """
        Fetch a collection.

        Args:
            params: Query parameters as (key, value) tuples

        Returns:
            (models, count reported by the server)
        """
        with self._wrap_errors("list"):
            client = await self.get_client()
            data = await client.get(self.endpoint, params=params)
            if not data:
                return [], 0

            items, count = self._extract_items_and_count_from_response(data)
            models = [self._to_model(item) for item in items]
            logger.debug(f"Retrieved {len(models)} of {count} {self.resource_name} objects")
            return models, count

    async def get_all_items(self, params: Optional[List[tuple]] = None) -> List[T]:
        items, _ = await self.get_all(params=params)
        return items

    async def create(self, model_data: Dict[str, Any]) -> Optional[T]:
        with self._wrap_errors("create"):
            client = await self.get_client()
            response = await client.post(self.endpoint, model_data)
            if not response:
                logger.warning(f"Empty response creating {self.resource_name}")
                return None
            return self._to_model(response)

    async def patch(self, object_id: int, model_data: Dict[str, Any]) -> Optional[T]:
        """Partial update; None when the object does not exist."""
        with self._wrap_errors("update"):
            client = await self.get_client()
            response = await client.patch(self.endpoint, model_data, object_id)
            if not response:
                logger.debug(f"{self.resource_name} {object_id} not found for update")
                return None
            return self._to_model(response)

    async def delete(self, object_id: int) -> bool:
        """True if deleted, False if the server did not have it."""
        with self._wrap_errors("delete"):
            client = await self.get_client()
            return await client.delete(self.endpoint, object_id=object_id)

    def _extract_items_and_count_from_response(self, data: Any) -> Tuple[List[Dict[str, Any]], int]:
        """
        Split a response into (items, count).

        Accepts the board's {'count': N, '<endpoint>': [...]} form, a bare
        list, a few common wrapper keys, or a single object.
        """
        if isinstance(data, list):
            return data, len(data)
        if not isinstance(data, dict):
            logger.warning(f"Unexpected response format for {self.resource_name}: {type(data).__name__}")
            return [], 0

        count = data.get('count', 0)
        for key in (self.endpoint, *COLLECTION_KEYS):
            items = data.get(key)
            if isinstance(items, list):
                return items, count or len(items)

        if 'id' in data:
            return [data], 1
        return [], count

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(model={self.resource_name}, endpoint='{self.endpoint}')"
