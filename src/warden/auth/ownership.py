"""Ownership checks for resource-scoped operations.

Learn: Ownership is the only authorization rule. Every read-by-id, update
and delete goes through require_owned *before* touching the row. Missing
and not-yours raise the same ResourceNotFoundError, so a caller can't probe
for other users' ids by watching for a 403.
"""

from typing import Awaitable, Callable, Optional, Protocol, TypeVar

from warden.auth.dependencies import CurrentIdentity
from warden.errors import ResourceNotFoundError


class Owned(Protocol):
    owner_id: int


T = TypeVar("T", bound=Owned)


async def require_owned(
    identity: CurrentIdentity,
    resource_id: int,
    lookup: Callable[[int], Awaitable[Optional[T]]],
) -> T:
    """Return the resource if it exists and belongs to identity, else raise."""
    resource = await lookup(resource_id)
    if resource is None or resource.owner_id != identity.user_id:
        raise ResourceNotFoundError(resource_id)
    return resource
