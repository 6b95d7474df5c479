"""User service — the authenticated user's own profile."""

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from warden.auth.dependencies import CurrentIdentity
from warden.db.models import User
from warden.errors import EmailAlreadyExistsError, UserNotFoundError
from warden.schemas.user import UserRead, UserUpdate

logger = structlog.get_logger()


class UserService:
    """Profile reads and edits, always scoped to the caller."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _load(self, identity: CurrentIdentity) -> User:
        # A valid token may outlive its user; there is no revocation list.
        user = await self.db.get(User, identity.user_id)
        if user is None:
            raise UserNotFoundError()
        return user

    async def get_user(self, identity: CurrentIdentity) -> UserRead:
        return UserRead.model_validate(await self._load(identity))

    async def update_user(
        self, identity: CurrentIdentity, changes: UserUpdate
    ) -> UserRead:
        """Apply profile edits. The password hash is not editable here."""
        user = await self._load(identity)

        fields = changes.model_dump(exclude_unset=True)
        if fields.get("email") is None:
            fields.pop("email", None)
        for key, value in fields.items():
            setattr(user, key, value)

        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise EmailAlreadyExistsError()

        await self.db.refresh(user)
        logger.info("user.updated", user_id=user.id, fields=sorted(fields))
        return UserRead.model_validate(user)
