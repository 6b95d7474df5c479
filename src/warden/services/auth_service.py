"""Auth service — signup and login orchestration.

Learn: Service layer separates business logic from HTTP routing.
Routes call services, services call the database and raise domain errors
from warden.errors; main.py maps those to status codes.

bcrypt runs in the threadpool so a hash never stalls the event loop.

Two entry transactions:
1. signup → hash password → INSERT user → UserRead (no hash)
2. login → lookup by email → verify password → signed token
"""

from functools import lru_cache

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from warden.auth.jwt import IssuedToken, TokenIssuer
from warden.auth.password import hash_password, verify_password
from warden.db.models import User
from warden.errors import EmailAlreadyExistsError, InvalidCredentialsError
from warden.schemas.user import UserRead

logger = structlog.get_logger()


# Checked against when the email is unknown, so both login failure paths
# cost one bcrypt verification.
@lru_cache
def _timing_dummy_hash() -> str:
    return hash_password("warden-timing-placeholder")


class AuthService:
    """Business logic for registration and authentication."""

    def __init__(self, db: AsyncSession, issuer: TokenIssuer):
        self.db = db
        self.issuer = issuer

    async def signup(self, email: str, password: str) -> UserRead:
        """Create a user account.

        Learn: No "SELECT ... WHERE email = ?" pre-check. Two concurrent
        signups would both pass it. The UNIQUE constraint on users.email
        is atomic, so we just INSERT and translate the violation.
        """
        password_hash = await run_in_threadpool(hash_password, password)
        user = User(email=email, password_hash=password_hash)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.info("auth.signup_conflict", email=email)
            raise EmailAlreadyExistsError()

        await self.db.refresh(user)
        logger.info("auth.signup", user_id=user.id)
        return UserRead.model_validate(user)

    async def login(self, email: str, password: str) -> IssuedToken:
        """Check credentials and issue an access token.

        Unknown email and wrong password raise the same error.
        """
        result = await self.db.execute(select(User).where(User.email == email))
        user = result.scalars().first()

        if user is None:
            dummy = await run_in_threadpool(_timing_dummy_hash)
            await run_in_threadpool(verify_password, password, dummy)
            logger.info("auth.login_failed", email=email)
            raise InvalidCredentialsError()

        if not await run_in_threadpool(verify_password, password, user.password_hash):
            logger.info("auth.login_failed", email=email)
            raise InvalidCredentialsError()

        logger.info("auth.login", user_id=user.id)
        return self.issuer.issue(user.id, user.email)
