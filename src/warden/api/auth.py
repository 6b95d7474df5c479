"""Auth API — registration and login.

Learn: Routes for establishing identity. Both are open (no bearer token):
- POST /auth/signup → create a user account (201, no password hash)
- POST /auth/login → email/password → JWT access token

Duplicate email → 409, bad credentials → 403 (see warden.errors).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from warden.auth.jwt import TokenIssuer, get_token_issuer
from warden.db.engine import get_db
from warden.schemas.auth import LoginRequest, SignupRequest, TokenResponse
from warden.schemas.user import UserRead
from warden.services.auth_service import AuthService

router = APIRouter(prefix="/auth")


def _svc(
    db: AsyncSession = Depends(get_db),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(db, issuer)


@router.post("/signup", response_model=UserRead, status_code=201)
async def signup(body: SignupRequest, svc: AuthService = Depends(_svc)):
    """Create a new user account."""
    return await svc.signup(email=body.email, password=body.password)


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, svc: AuthService = Depends(_svc)):
    """Login with email and password → access token."""
    return await svc.login(email=body.email, password=body.password)
