"""Resource API routes.

Learn: Every route is resource-scoped to the caller. Reads, edits and
deletes by id answer 404 both for ids that don't exist and for ids that
belong to someone else.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from warden.auth.dependencies import CurrentIdentity, get_current_user
from warden.db.engine import get_db
from warden.schemas.resource import ResourceCreate, ResourceRead, ResourceUpdate
from warden.services.resource_service import ResourceService

router = APIRouter(prefix="/resources")


def _svc(db: AsyncSession = Depends(get_db)) -> ResourceService:
    return ResourceService(db)


@router.post("", response_model=ResourceRead, status_code=201)
async def create_resource(
    body: ResourceCreate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ResourceService = Depends(_svc),
):
    return await svc.create_resource(identity, body)


@router.get("", response_model=list[ResourceRead])
async def list_resources(
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ResourceService = Depends(_svc),
):
    return await svc.list_resources(identity)


@router.get("/{resource_id}", response_model=ResourceRead)
async def get_resource(
    resource_id: int,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ResourceService = Depends(_svc),
):
    return await svc.get_resource(identity, resource_id)


@router.patch("/{resource_id}", response_model=ResourceRead)
async def edit_resource(
    resource_id: int,
    body: ResourceUpdate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ResourceService = Depends(_svc),
):
    return await svc.update_resource(identity, resource_id, body)


@router.delete("/{resource_id}", status_code=204)
async def delete_resource(
    resource_id: int,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ResourceService = Depends(_svc),
):
    await svc.delete_resource(identity, resource_id)
    return Response(status_code=204)
