"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Stored documents expose their ObjectId as "_id" (24-hex string); references
(company_id, candidate_id, ...) are either an id string or, when expanded,
the referenced document.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional, List, Union
from datetime import datetime
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class Role(str, Enum):
    candidate = "Candidate"
    employer = "Employer"


class ApplicationStatus(str, Enum):
    pending = "Pending"
    approved = "Approved"
    rejected = "Rejected"


TERMINAL_STATUSES = {ApplicationStatus.approved, ApplicationStatus.rejected}


def _dedupe(values: Optional[List[str]]) -> Optional[List[str]]:
    """Drop repeated entries, keeping first occurrence order."""
    if values is None:
        return None
    return list(dict.fromkeys(values))


class DocumentResponse(BaseModel):
    """Base for anything read back from MongoDB."""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, alias="_id")
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8)
    role: Role

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class UserResponse(DocumentResponse):
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[Role] = None
    profileImage: Optional[str] = None

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


# ============================================================
# INTERNSHIP SCHEMAS
# ============================================================

class InternshipCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    required_skills: List[str] = []
    location: Optional[str] = None
    stipend: Optional[str] = None
    duration: Optional[str] = None
    applicationDeadline: Optional[datetime] = None

class InternshipUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    required_skills: Optional[List[str]] = None
    location: Optional[str] = None
    stipend: Optional[str] = None
    duration: Optional[str] = None
    applicationDeadline: Optional[datetime] = None

class InternshipResponse(DocumentResponse):
    title: Optional[str] = None
    company_id: Optional[Union[UserResponse, str]] = None
    description: Optional[str] = None
    required_skills: List[str] = []
    location: Optional[str] = None
    stipend: Optional[str] = None
    duration: Optional[str] = None
    applicationDeadline: Optional[datetime] = None
    posted_date: Optional[datetime] = None

class RecommendedInternshipResponse(InternshipResponse):
    matchScore: int = Field(..., ge=0, le=100)

class SaveInternshipRequest(BaseModel):
    internship_id: str

class SavedInternshipResponse(DocumentResponse):
    user_id: str
    internship_id: str


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationCreate(BaseModel):
    internship_id: str = Field(..., min_length=1)
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = None
    additional_info: Optional[str] = None

class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus

class ApplicationResponse(DocumentResponse):
    candidate_id: Optional[Union[UserResponse, str]] = None
    internship_id: Optional[Union[InternshipResponse, str]] = None
    status: Optional[ApplicationStatus] = None
    cover_letter: Optional[str] = None
    resume_url: Optional[str] = None
    additional_info: Optional[str] = None


# ============================================================
# PROFILE SCHEMAS
# ============================================================

class ProfileUpdate(BaseModel):
    """
    Upsert body for POST /profiles.
    Candidates send skills/education/experience, employers send
    company/industry/website/description. Omitted fields keep their value.
    """
    # Candidate fields
    skills: Optional[List[str]] = None
    education: Optional[str] = None
    experience: Optional[str] = None
    # Employer fields
    company: Optional[str] = None
    industry: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None

    @field_validator("skills")
    @classmethod
    def dedupe_skills(cls, v):
        return _dedupe(v)

class CandidateProfileResponse(DocumentResponse):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    user_id: Optional[str] = None
    skills: List[str] = []
    education: Optional[str] = None
    experience: Optional[str] = None
    resume_url: Optional[str] = None

class EmployerProfileResponse(DocumentResponse):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    user_id: Optional[str] = None
    company: Optional[str] = None
    industry: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None

ProfileResponse = Union[CandidateProfileResponse, EmployerProfileResponse]

class ResumeUploadResponse(BaseModel):
    message: str
    resume_url: str

class ProfileImageUploadResponse(BaseModel):
    message: str
    profileImage: str


# ============================================================
# MESSAGING SCHEMAS
# ============================================================

class MessageCreate(BaseModel):
    application_id: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)

class ConversationMessageResponse(DocumentResponse):
    sender_id: Optional[Union[UserResponse, str]] = None
    receiver_id: Optional[Union[UserResponse, str]] = None
    application_id: Optional[Union[ApplicationResponse, str]] = None
    message: str
    is_read: bool = False

class ApplicantProfileResponse(BaseModel):
    user: Optional[UserResponse] = None
    profile: CandidateProfileResponse


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True

class ErrorResponse(BaseModel):
    detail: str
