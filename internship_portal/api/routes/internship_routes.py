"""
Internship Routes

GET /internships - List internships (filters: location, skills)
GET /internships/recommended - Internships ranked by skill match (candidate only)
GET /internships/employer - Internships posted by me (employer only)
GET /internships/saved - My saved internships (candidate only)
GET /internships/{internship_id} - Get internship details
POST /internships - Create internship (employer only)
PUT /internships/{internship_id} - Update internship (owner only)
DELETE /internships/{internship_id} - Delete internship (owner only)
POST /internships/save - Save internship (candidate only)
DELETE /internships/saved/{internship_id} - Unsave internship (candidate only)
"""

from fastapi import APIRouter, Depends, Query
from pymongo.database import Database
from typing import List, Optional

from internship_portal.core.auth import require_candidate, require_employer
from internship_portal.core.policy import Actor
from internship_portal.db.mongodb import get_db
from internship_portal.services.internship_service import InternshipService
from internship_portal.services.matching_service import RecommendationService
from internship_portal.schemas.schemas import (
    InternshipCreate, InternshipUpdate, InternshipResponse, RecommendedInternshipResponse,
    SaveInternshipRequest, SavedInternshipResponse, MessageResponse
)

router = APIRouter(prefix="/internships", tags=["Internships"])


@router.get("", response_model=List[InternshipResponse])
async def list_internships(
    location: Optional[str] = Query(None, description="Exact location"),
    skills: Optional[str] = Query(None, description="Comma separated; any may match"),
    db: Database = Depends(get_db)
):
    """List all internships with optional filters."""
    return InternshipService(db).list_internships(location=location, skills=skills)


@router.get("/recommended", response_model=List[RecommendedInternshipResponse])
async def recommended_internships(
    candidate: Actor = Depends(require_candidate),
    db: Database = Depends(get_db)
):
    """
    All internships with a matchScore (0-100), best match first.

    Score = share of the internship's required skills found in the
    candidate's profile. No profile means every score is 0.
    """
    return RecommendationService(db).recommend(candidate)


@router.get("/employer", response_model=List[InternshipResponse])
async def employer_internships(
    employer: Actor = Depends(require_employer),
    db: Database = Depends(get_db)
):
    """Internships posted by the current employer."""
    return InternshipService(db).list_for_employer(employer)


@router.get("/saved", response_model=List[InternshipResponse])
async def saved_internships(
    candidate: Actor = Depends(require_candidate),
    db: Database = Depends(get_db)
):
    """Saved internships. Bookmarks of deleted internships are skipped."""
    return InternshipService(db).list_saved(candidate)


@router.get("/{internship_id}", response_model=InternshipResponse)
async def get_internship(internship_id: str, db: Database = Depends(get_db)):
    """Get details of a specific internship."""
    return InternshipService(db).get_internship(internship_id)


@router.post("", response_model=InternshipResponse, status_code=201)
async def create_internship(
    internship: InternshipCreate,
    employer: Actor = Depends(require_employer),
    db: Database = Depends(get_db)
):
    """Create a new internship. Only employers can post."""
    return InternshipService(db).create_internship(employer, internship)


@router.put("/{internship_id}", response_model=InternshipResponse)
async def update_internship(
    internship_id: str,
    update: InternshipUpdate,
    employer: Actor = Depends(require_employer),
    db: Database = Depends(get_db)
):
    """Update an internship. Only the posting employer can update; only sent fields change."""
    return InternshipService(db).update_internship(employer, internship_id, update)


@router.delete("/{internship_id}", response_model=MessageResponse)
async def delete_internship(
    internship_id: str,
    employer: Actor = Depends(require_employer),
    db: Database = Depends(get_db)
):
    """Delete an internship. Only the posting employer can delete."""
    InternshipService(db).delete_internship(employer, internship_id)
    return MessageResponse(message="Internship deleted")


@router.post("/save", response_model=SavedInternshipResponse, status_code=201)
async def save_internship(
    request: SaveInternshipRequest,
    candidate: Actor = Depends(require_candidate),
    db: Database = Depends(get_db)
):
    """Bookmark an internship. Saving twice keeps a single bookmark."""
    return InternshipService(db).save_internship(candidate, request.internship_id)


@router.delete("/saved/{internship_id}", response_model=MessageResponse)
async def unsave_internship(
    internship_id: str,
    candidate: Actor = Depends(require_candidate),
    db: Database = Depends(get_db)
):
    """Remove a bookmark."""
    InternshipService(db).unsave_internship(candidate, internship_id)
    return MessageResponse(message="Unsaved successfully")
