"""
Authentication Routes

POST /auth/register - Register new user (Candidate or Employer)
POST /auth/login - Login and get JWT token
GET /auth/me - Get current user info
"""

from fastapi import APIRouter, HTTPException, Depends
from pymongo.database import Database

from internship_portal.core.auth import (
    create_access_token, get_app_settings, get_current_user, hash_password, verify_password
)
from internship_portal.core.config import Settings
from internship_portal.core.errors import ConflictError
from internship_portal.core.policy import Actor
from internship_portal.db.mongodb import get_db
from internship_portal.services.mongo_service import UserStore
from internship_portal.schemas.schemas import (
    RegisterRequest, LoginRequest, TokenResponse, UserResponse
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=UserResponse, status_code=201)
async def register(request: RegisterRequest, db: Database = Depends(get_db)):
    """
    Register a new user account.

    After registration, login to get access token, then fill in the profile.
    """
    users = UserStore(db)
    if users.get_by_email(request.email):
        raise ConflictError("Email already registered")

    return users.insert(
        name=request.name,
        email=request.email,
        password_hash=hash_password(request.password),
        role=request.role.value
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    user = UserStore(db).get_by_email(request.email)
    if not user or not verify_password(request.password, user["password"]):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    token = create_access_token(data={"sub": user["_id"], "role": user["role"]}, settings=settings)
    user.pop("password")

    return TokenResponse(access_token=token, user=user)


@router.get("/me", response_model=UserResponse)
async def get_me(actor: Actor = Depends(get_current_user), db: Database = Depends(get_db)):
    """Get current authenticated user's info."""
    return UserStore(db).get_by_id(actor.user_id)
