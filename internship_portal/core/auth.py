"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification
- FastAPI dependencies for protected routes (resolve an Actor)
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pymongo.database import Database

from internship_portal.core.config import Settings
from internship_portal.core.errors import NotFoundError
from internship_portal.core.policy import Actor, enforce, require_role
from internship_portal.db.mongodb import get_db
from internship_portal.schemas.schemas import Role
from internship_portal.services.mongo_service import UserStore

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token extractor
bearer_scheme = HTTPBearer()


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings) -> Optional[dict]:
    """Decode and verify JWT token."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def get_app_settings(request: Request) -> Settings:
    """Dependency - settings the app was created with."""
    return request.app.state.settings


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
) -> Actor:
    """
    FastAPI dependency - Get current authenticated actor.

    Usage:
        @router.get("/protected")
        async def route(actor: Actor = Depends(get_current_user)):
            return actor
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_token(credentials.credentials, settings)
    if not payload:
        raise credentials_exception

    user_id = payload.get("sub")
    if not user_id:
        raise credentials_exception

    # Verify user exists; role comes from the stored account, not the token
    try:
        user = UserStore(db).get_by_id(user_id)
    except NotFoundError:
        user = None
    if not user:
        raise credentials_exception

    return Actor(user_id=user["_id"], role=Role(user["role"]))


async def require_candidate(actor: Actor = Depends(get_current_user)) -> Actor:
    """Dependency - Require Candidate role."""
    enforce(require_role(actor, Role.candidate), actor)
    return actor


async def require_employer(actor: Actor = Depends(get_current_user)) -> Actor:
    """Dependency - Require Employer role."""
    enforce(require_role(actor, Role.employer), actor)
    return actor
