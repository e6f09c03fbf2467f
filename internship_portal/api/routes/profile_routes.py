"""
Profile Routes

GET /profiles - Get own profile (candidate or employer, by role)
POST /profiles - Create or update own profile
POST /profiles/upload-resume - Upload resume (candidate only)
POST /profiles/upload-profile-image - Upload profile image
"""

from fastapi import APIRouter, Depends, File, UploadFile
from pymongo.database import Database
from typing import Optional

from internship_portal.core.auth import get_current_user, require_candidate
from internship_portal.core.policy import Actor
from internship_portal.db.mongodb import get_db
from internship_portal.services.profile_service import ProfileService
from internship_portal.utils.file_upload import BlobStorage, get_storage
from internship_portal.schemas.schemas import (
    ProfileUpdate, ProfileResponse, ResumeUploadResponse, ProfileImageUploadResponse
)

router = APIRouter(prefix="/profiles", tags=["Profiles"])


@router.get("", response_model=ProfileResponse)
async def get_profile(actor: Actor = Depends(get_current_user), db: Database = Depends(get_db)):
    """Get the current user's profile."""
    return ProfileService(db).get_profile(actor)


@router.post("", response_model=ProfileResponse)
async def upsert_profile(
    data: ProfileUpdate,
    actor: Actor = Depends(get_current_user),
    db: Database = Depends(get_db)
):
    """
    Create or update profile. Only provided fields are updated.

    Candidates: skills, education, experience.
    Employers: company, industry, website, description.
    """
    return ProfileService(db).upsert_profile(actor, data)


@router.post("/upload-resume", response_model=ResumeUploadResponse)
async def upload_resume(
    resume: Optional[UploadFile] = File(None, description="Resume (PDF, DOC, DOCX; max 5MB)"),
    candidate: Actor = Depends(require_candidate),
    db: Database = Depends(get_db),
    storage: BlobStorage = Depends(get_storage)
):
    """Upload resume; creates the candidate profile if needed."""
    resume_url = await ProfileService(db, storage).upload_resume(candidate, resume)
    return ResumeUploadResponse(message="Resume uploaded", resume_url=resume_url)


@router.post("/upload-profile-image", response_model=ProfileImageUploadResponse)
async def upload_profile_image(
    profileImage: Optional[UploadFile] = File(None, description="Image (JPEG, JPG, PNG, GIF)"),
    actor: Actor = Depends(get_current_user),
    db: Database = Depends(get_db),
    storage: BlobStorage = Depends(get_storage)
):
    """Upload profile image for the current user."""
    path = await ProfileService(db, storage).upload_profile_image(actor, profileImage)
    return ProfileImageUploadResponse(message="Profile image uploaded", profileImage=path)
