# === mockapi/services/registry.py ===
from typing import List
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlalchemy.future import select
from mockapi.models.endpoint import Endpoint
from mockapi.models.api_key import AccessKey


class EndpointRegistry:
    """Read-only access to stored endpoints and their access keys.

    Built around an explicit session factory so callers (and tests) decide
    which database it talks to. Each lookup runs in its own session.
    """

    def __init__(self, session_factory: async_sessionmaker):
        self._session_factory = session_factory

    async def find_endpoints(self, project_id: str, method: str, path: str) -> List[Endpoint]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(Endpoint).where(
                    Endpoint.project_id == project_id,
                    Endpoint.method == method,
                    Endpoint.path == path,
                )
            )
            return list(result.scalars().all())

    async def find_access_key(self, endpoint_id: str, key_value: str) -> List[AccessKey]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(AccessKey).where(
                    AccessKey.endpoint_id == endpoint_id,
                    AccessKey.key_value == key_value,
                )
            )
            return list(result.scalars().all())
