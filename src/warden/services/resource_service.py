"""Resource service — CRUD for user-owned resources.

Learn: Every by-id operation starts with require_owned(), which loads the
row and checks owner_id against the caller before anything is returned,
changed or deleted. Lists are filtered by owner_id in the query itself.
"""

from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from warden.auth.dependencies import CurrentIdentity
from warden.auth.ownership import require_owned
from warden.db.models import Resource
from warden.schemas.resource import ResourceCreate, ResourceUpdate

logger = structlog.get_logger()

# Columns that may not be set to NULL through an update.
_REQUIRED_FIELDS = ("title", "link")


class ResourceService:
    """Business logic for owned resources."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _lookup(self, resource_id: int) -> Optional[Resource]:
        return await self.db.get(Resource, resource_id)

    async def create_resource(
        self, identity: CurrentIdentity, data: ResourceCreate
    ) -> Resource:
        resource = Resource(owner_id=identity.user_id, **data.model_dump())
        self.db.add(resource)
        await self.db.commit()
        await self.db.refresh(resource)
        logger.info("resource.created", resource_id=resource.id, owner_id=identity.user_id)
        return resource

    async def list_resources(self, identity: CurrentIdentity) -> list[Resource]:
        result = await self.db.execute(
            select(Resource)
            .where(Resource.owner_id == identity.user_id)
            .order_by(Resource.id)
        )
        return list(result.scalars().all())

    async def get_resource(self, identity: CurrentIdentity, resource_id: int) -> Resource:
        return await require_owned(identity, resource_id, self._lookup)

    async def update_resource(
        self,
        identity: CurrentIdentity,
        resource_id: int,
        changes: ResourceUpdate,
    ) -> Resource:
        resource = await require_owned(identity, resource_id, self._lookup)

        fields = changes.model_dump(exclude_unset=True)
        for key in _REQUIRED_FIELDS:
            if key in fields and fields[key] is None:
                del fields[key]
        for key, value in fields.items():
            setattr(resource, key, value)

        await self.db.commit()
        await self.db.refresh(resource)
        return resource

    async def delete_resource(self, identity: CurrentIdentity, resource_id: int) -> None:
        resource = await require_owned(identity, resource_id, self._lookup)
        await self.db.delete(resource)
        await self.db.commit()
        logger.info("resource.deleted", resource_id=resource_id, owner_id=identity.user_id)
