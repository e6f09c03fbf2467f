"""
Application Routes

GET /applications/candidate - My applications (candidate only)
GET /applications/employer - Applications to my internships (employer only)
POST /applications - Apply to an internship, JSON or form with optional resume file (candidate only)
PUT /applications/{application_id} - Set status (employer owning the internship)
"""

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from pymongo.database import Database
from starlette.datastructures import UploadFile as StarletteUploadFile
from typing import List

from internship_portal.core.auth import require_candidate, require_employer
from internship_portal.core.errors import ValidationError
from internship_portal.core.policy import Actor
from internship_portal.db.mongodb import get_db
from internship_portal.services.application_service import ApplicationService
from internship_portal.utils.file_upload import BlobStorage, get_storage
from internship_portal.schemas.schemas import (
    ApplicationCreate, ApplicationResponse, ApplicationStatusUpdate
)

router = APIRouter(prefix="/applications", tags=["Applications"])

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


@router.get("/candidate", response_model=List[ApplicationResponse])
async def candidate_applications(
    candidate: Actor = Depends(require_candidate),
    db: Database = Depends(get_db)
):
    """Get all applications of the current candidate."""
    return ApplicationService(db).list_for_candidate(candidate)


@router.get("/employer", response_model=List[ApplicationResponse])
async def employer_applications(
    employer: Actor = Depends(require_employer),
    db: Database = Depends(get_db)
):
    """Get all applications received for the current employer's internships."""
    return ApplicationService(db).list_for_employer(employer)


@router.post("", response_model=ApplicationResponse, status_code=201)
async def apply(
    request: Request,
    candidate: Actor = Depends(require_candidate),
    db: Database = Depends(get_db),
    storage: BlobStorage = Depends(get_storage)
):
    """
    Apply to an internship. Candidates only. Cannot apply twice to the same internship.

    Accepts a JSON body, or a form with an optional "resume" file
    (PDF, DOC, DOCX; max 5MB) that takes precedence over resume_url.
    """
    resume = None
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        payload = {k: v for k, v in form.items() if isinstance(v, str)}
        upload = form.get("resume")
        if isinstance(upload, StarletteUploadFile):
            resume = upload
    else:
        try:
            payload = await request.json()
        except ValueError:
            raise ValidationError("Request body must be JSON or form data")

    try:
        data = ApplicationCreate.model_validate(payload)
    except PydanticValidationError as e:
        raise RequestValidationError(e.errors())
    return await ApplicationService(db, storage).apply(candidate, data, resume)


@router.put("/{application_id}", response_model=ApplicationResponse)
async def update_application_status(
    application_id: str,
    update: ApplicationStatusUpdate,
    employer: Actor = Depends(require_employer),
    db: Database = Depends(get_db)
):
    """Approve or reject an application to one of your internships."""
    return ApplicationService(db).update_status(employer, application_id, update.status)
